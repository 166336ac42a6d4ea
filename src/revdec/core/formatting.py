"""Human-readable rendering of decoded errors."""

from typing import Any, Optional

from revdec.core.constants import PANIC_CODES
from revdec.core.interface import BUILTIN_SOURCE
from revdec.core.models import DecodedResult


def format_value(value: Any) -> str:
    """Render a decoded value. Arrays and tuples are shown as ``(a, b)``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, tuple):
        return "(" + ", ".join(format_value(v) for v in value) + ")"
    return str(value)


def format_args(result: DecodedResult) -> str:
    """Render the argument list, ``name=value`` where the parameter is named."""
    parts = []
    for name, value in zip(result.arg_names, result.args):
        rendered = format_value(value)
        parts.append(f"{name}={rendered}" if name else rendered)
    return ", ".join(parts)


def panic_reason(result: DecodedResult) -> Optional[str]:
    """Reason for a built-in Panic(uint256), None for any other error."""
    if result.source != BUILTIN_SOURCE or result.error_name != "Panic":
        return None
    code = result.args[0]
    return PANIC_CODES.get(code, f"Unknown panic code {code}")


def format_result(result: DecodedResult) -> str:
    """Render as ``Name(arg=value, ...)``, with the reason for panics."""
    text = f"{result.error_name}({format_args(result)})"
    reason = panic_reason(result)
    if reason:
        text += f": {reason}"
    return text
