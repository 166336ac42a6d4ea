"""Core constants"""

from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.parent.parent

ENV_PATH = PROJECT_ROOT / ".env"

SELECTOR_SIZE = 4

PANIC_CODES = {
    0x00: "Generic compiler inserted panic",
    0x01: "An assert condition failed",
    0x11: "Arithmetic operation resulted in underflow or overflow",
    0x12: "Division or modulo by zero",
    0x21: "Attempted to convert to an invalid enum value",
    0x22: "Attempted to access a storage byte array that is incorrectly encoded",
    0x31: "Performed .pop() on an empty array",
    0x32: "Array index is out of bounds",
    0x41: "Allocated too much memory or created an array which is too large",
    0x51: "Attempted to call a zero-initialized variable of internal function type",
}
