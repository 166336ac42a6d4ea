"""Interface descriptions: declared errors and their selectors."""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from loguru import logger
from pydantic import BaseModel, ConfigDict
from web3 import Web3

from revdec.core.abi.types import IntType, ParameterType, StringType, parse_type
from revdec.core.constants import SELECTOR_SIZE


class Parameter(BaseModel):
    """A declared error parameter"""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    type: ParameterType


class ErrorDefinition(BaseModel):
    """A declared error: name plus ordered parameters."""

    model_config = ConfigDict(frozen=True)

    name: str
    parameters: Tuple[Parameter, ...] = ()
    source: Optional[str] = None

    @property
    def types(self) -> List:
        """Parameter types in declaration order."""
        return [p.type for p in self.parameters]

    @property
    def arg_names(self) -> List[str]:
        """Parameter names in declaration order."""
        return [p.name for p in self.parameters]

    @property
    def signature(self) -> str:
        """Canonical signature, e.g. ``InsufficientBalance(uint256,uint256)``."""
        return f"{self.name}({','.join(t.canonical for t in self.types)})"

    @property
    def selector(self) -> bytes:
        """First 4 bytes of the keccak256 hash of the signature."""
        return bytes(Web3.keccak(text=self.signature)[:SELECTOR_SIZE])

    @classmethod
    def from_abi_entry(cls, entry: Dict[str, Any], source: Optional[str] = None):
        """Build from an ABI JSON entry of type ``error``."""
        inputs = entry.get("inputs", [])
        return cls(
            name=entry["name"],
            parameters=tuple(
                Parameter(
                    name=i.get("name", ""),
                    type=parse_type(i["type"], i.get("components")),
                )
                for i in inputs
            ),
            source=source,
        )


BUILTIN_SOURCE = "Built-in"

BUILTIN_ERRORS = (
    ErrorDefinition(
        name="Error",
        parameters=(Parameter(name="message", type=StringType()),),
        source=BUILTIN_SOURCE,
    ),
    ErrorDefinition(
        name="Panic",
        parameters=(Parameter(name="code", type=IntType(bits=256)),),
        source=BUILTIN_SOURCE,
    ),
)


class InterfaceDescription:
    """Immutable, ordered collection of error definitions.

    The selector table is built once on construction; it maps each selector to
    every definition that derives it, in declaration order.
    """

    def __init__(self, errors, source: Optional[str] = None):
        """Initialize InterfaceDescription."""
        self._errors: Tuple[ErrorDefinition, ...] = tuple(errors)
        self._source = source
        table: Dict[bytes, List[ErrorDefinition]] = {}
        for error in self._errors:
            table.setdefault(error.selector, []).append(error)
        self._selectors: Dict[bytes, Tuple[ErrorDefinition, ...]] = {
            selector: tuple(entries) for selector, entries in table.items()
        }
        logger.debug(
            f"Interface {source or '<unnamed>'}: {len(self._errors)} errors, "
            f"{len(self._selectors)} selectors"
        )

    @property
    def errors(self) -> Tuple[ErrorDefinition, ...]:
        """Declared errors in declaration order."""
        return self._errors

    @property
    def source(self) -> Optional[str]:
        """Label of the artifact this interface was loaded from."""
        return self._source

    def __iter__(self) -> Iterator[ErrorDefinition]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __repr__(self) -> str:
        return f"InterfaceDescription(source={self._source!r}, errors={len(self._errors)})"

    def lookup(self, selector: bytes) -> Tuple[ErrorDefinition, ...]:
        """Return every definition deriving ``selector``, in declaration order."""
        return self._selectors.get(bytes(selector), ())

    def collisions(self) -> Dict[bytes, Tuple[ErrorDefinition, ...]]:
        """Selectors shared by more than one definition."""
        return {s: entries for s, entries in self._selectors.items() if len(entries) > 1}

    def with_builtins(self) -> "InterfaceDescription":
        """Return a copy with Error(string) and Panic(uint256) appended.

        A built-in is left out when the interface already declares its selector.
        """
        missing = tuple(b for b in BUILTIN_ERRORS if b.selector not in self._selectors)
        return InterfaceDescription(self._errors + missing, source=self._source)

    @classmethod
    def from_abi(cls, abi: List[Dict[str, Any]], source: Optional[str] = None):
        """Build from a parsed ABI list, keeping only ``error`` entries.

        Errors using a type that cannot be parsed are skipped with a warning
        so the rest of the interface stays usable.
        """
        errors = []
        for entry in abi:
            if entry.get("type") != "error":
                continue
            try:
                errors.append(ErrorDefinition.from_abi_entry(entry, source))
            except (KeyError, ValueError) as e:
                logger.warning(f"Skipping error {entry.get('name', '?')} from {source}: {e}")
        return cls(errors, source=source)


def load_interface(path) -> InterfaceDescription:
    """Load an interface description from a JSON build artifact.

    The file may hold a bare ABI list or an object with an ``abi`` key, as
    written by Foundry and Hardhat.

    Raises:
        ValueError: if the file cannot be read or holds no ABI list.

    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as abi_file:
            content = json.load(abi_file)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Could not read ABI from {path}: {e}") from e

    if isinstance(content, dict) and "abi" in content:
        content = content.get("abi")

    if not isinstance(content, list):
        raise ValueError(f"No ABI list found in {path}")

    return InterfaceDescription.from_abi(content, source=path.name)
