"""Decode failures"""

from typing import Any, Dict, Optional

from revdec.core.models import DecodeFailure


class DecodeError(Exception):
    """Base class for every failure of a single decode call."""

    kind: str = "DecodeError"

    def __init__(self, message: str, detail: Optional[Dict[str, Any]] = None):
        """Initialize DecodeError."""
        super().__init__(message)
        self.message = message
        self.detail = detail or {}

    def __str__(self) -> str:
        """Prefix the message with the failure kind."""
        return f"{self.kind}: {self.message}"

    def to_failure(self) -> DecodeFailure:
        """Convert to the DecodeFailure model."""
        return DecodeFailure(kind=self.kind, message=self.message, detail=self.detail)


class InvalidPayloadEncoding(DecodeError):
    """Payload is not a byte-aligned hex string or is shorter than a selector."""

    kind = "InvalidPayloadEncoding"


class UnknownSelector(DecodeError):
    """No error definition matches the payload selector."""

    kind = "UnknownSelector"

    def __init__(self, selector: str):
        """Initialize UnknownSelector."""
        super().__init__(
            f"No error definition matches selector {selector}",
            {"selector": selector},
        )
        self.selector = selector


class AmbiguousSelector(DecodeError):
    """Several error definitions share the payload selector."""

    kind = "AmbiguousSelector"

    def __init__(self, selector: str, signatures: list):
        """Initialize AmbiguousSelector."""
        super().__init__(
            f"Selector {selector} matches {len(signatures)} definitions: {', '.join(signatures)}",
            {"selector": selector, "signatures": list(signatures)},
        )
        self.selector = selector
        self.signatures = list(signatures)


class MalformedPayload(DecodeError):
    """Argument bytes do not satisfy the matched definition's layout."""

    kind = "MalformedPayload"

    def __init__(self, reason: str, offset: int, param_index: Optional[int] = None):
        """Initialize MalformedPayload."""
        where = f"at byte offset {offset}"
        if param_index is not None:
            where = f"in parameter {param_index} {where}"
        super().__init__(
            f"{reason} ({where})",
            {"param_index": param_index, "offset": offset, "reason": reason},
        )
        self.reason = reason
        self.offset = offset
        self.param_index = param_index

    def at_param(self, param_index: int) -> "MalformedPayload":
        """Return a copy of this error attributed to a top-level parameter."""
        return MalformedPayload(self.reason, self.offset, param_index)
