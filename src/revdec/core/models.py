"""Core models"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CollisionPolicy(str, Enum):
    """What to do when several definitions share the payload selector."""

    FIRST = "first"
    FAIL = "fail"


class DecodedResult(BaseModel):
    """An error payload matched to a definition and decoded."""

    model_config = ConfigDict(frozen=True)

    error_name: str
    args: Tuple[Any, ...] = ()
    arg_names: Tuple[str, ...] = ()
    signature: str
    selector: str
    source: Optional[str] = None

    def named_args(self) -> Dict[str, Any]:
        """Map argument names to values. Unnamed arguments are keyed by position."""
        return {
            (name or f"arg{i}"): value
            for i, (name, value) in enumerate(zip(self.arg_names, self.args))
        }


class DecodeFailure(BaseModel):
    """Why a decode call failed."""

    model_config = ConfigDict(frozen=True)

    kind: str
    message: str
    detail: Dict[str, Any] = Field(default_factory=dict)


class DecodeOutcome(BaseModel):
    """Either a DecodedResult or a DecodeFailure, never both."""

    model_config = ConfigDict(frozen=True)

    result: Optional[DecodedResult] = None
    failure: Optional[DecodeFailure] = None

    @model_validator(mode="after")
    def check_exclusive(self) -> "DecodeOutcome":
        """Ensure exactly one of result and failure is set."""
        if (self.result is None) == (self.failure is None):
            raise ValueError("DecodeOutcome needs exactly one of result or failure")
        return self

    @property
    def ok(self) -> bool:
        """Whether the decode succeeded."""
        return self.result is not None
