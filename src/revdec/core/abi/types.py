"""ABI parameter types.

Every ABI type is one of a closed set of variants, tagged by ``kind``:

    int       uint<M> / int<M>
    bool      bool
    address   address
    fixed     bytes<M>
    bytes     bytes
    string    string
    array     T[] / T[N]
    tuple     (T1,T2,...)

Each variant knows its canonical name (used to build signatures), whether it
is dynamic, and how many bytes it takes in the head of an enclosing tuple.
"""

import re
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

WORD_SIZE = 32

ARRAY_SUFFIX_REGEX = re.compile(r"^(?P<item>.+)\[(?P<length>\d*)\]$")
INT_REGEX = re.compile(r"^(?P<prefix>u?int)(?P<bits>\d*)$")
FIXED_BYTES_REGEX = re.compile(r"^bytes(?P<size>\d+)$")


class _AbiType(BaseModel):
    """Common behaviour of all ABI types."""

    model_config = ConfigDict(frozen=True)

    @property
    def canonical(self) -> str:
        raise NotImplementedError

    @property
    def is_dynamic(self) -> bool:
        return False

    @property
    def head_size(self) -> int:
        """Bytes taken in the head of the enclosing tuple."""
        return WORD_SIZE

    def __str__(self) -> str:
        return self.canonical


class IntType(_AbiType):
    """Fixed-width integer"""

    kind: Literal["int"] = "int"
    bits: int = 256
    signed: bool = False

    @property
    def canonical(self) -> str:
        return f"{'int' if self.signed else 'uint'}{self.bits}"


class BoolType(_AbiType):
    """Boolean"""

    kind: Literal["bool"] = "bool"

    @property
    def canonical(self) -> str:
        return "bool"


class AddressType(_AbiType):
    """20-byte account address"""

    kind: Literal["address"] = "address"

    @property
    def canonical(self) -> str:
        return "address"


class FixedBytesType(_AbiType):
    """Fixed-size byte array (bytes1 .. bytes32)"""

    kind: Literal["fixed"] = "fixed"
    size: int

    @property
    def canonical(self) -> str:
        return f"bytes{self.size}"


class BytesType(_AbiType):
    """Dynamic byte array"""

    kind: Literal["bytes"] = "bytes"

    @property
    def canonical(self) -> str:
        return "bytes"

    @property
    def is_dynamic(self) -> bool:
        return True


class StringType(_AbiType):
    """UTF-8 string"""

    kind: Literal["string"] = "string"

    @property
    def canonical(self) -> str:
        return "string"

    @property
    def is_dynamic(self) -> bool:
        return True


class ArrayType(_AbiType):
    """Fixed-size (``length`` set) or dynamic (``length`` is None) array."""

    kind: Literal["array"] = "array"
    item: "ParameterType"
    length: Optional[int] = None

    @property
    def canonical(self) -> str:
        size = "" if self.length is None else str(self.length)
        return f"{self.item.canonical}[{size}]"

    @property
    def is_dynamic(self) -> bool:
        return self.length is None or self.item.is_dynamic

    @property
    def head_size(self) -> int:
        if self.is_dynamic:
            return WORD_SIZE
        return self.length * self.item.head_size


class TupleType(_AbiType):
    """Tuple / struct"""

    kind: Literal["tuple"] = "tuple"
    components: Tuple["ParameterType", ...] = ()

    @property
    def canonical(self) -> str:
        return "(" + ",".join(c.canonical for c in self.components) + ")"

    @property
    def is_dynamic(self) -> bool:
        return any(c.is_dynamic for c in self.components)

    @property
    def head_size(self) -> int:
        if self.is_dynamic:
            return WORD_SIZE
        return sum(c.head_size for c in self.components)


ParameterType = Annotated[
    Union[
        IntType,
        BoolType,
        AddressType,
        FixedBytesType,
        BytesType,
        StringType,
        ArrayType,
        TupleType,
    ],
    Field(discriminator="kind"),
]

ArrayType.model_rebuild()
TupleType.model_rebuild()


def _split_top_level(inner: str) -> List[str]:
    """Split a tuple body on commas that are not nested in parentheses."""
    parts = []
    depth = 0
    current = ""
    for char in inner:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Unbalanced parentheses in tuple type: ({inner})")
        if char == "," and depth == 0:
            parts.append(current)
            current = ""
        else:
            current += char
    if depth != 0:
        raise ValueError(f"Unbalanced parentheses in tuple type: ({inner})")
    parts.append(current)
    return parts


def parse_type(type_str: str, components: Optional[List[Dict[str, Any]]] = None):
    """Parse an ABI type string into a ParameterType.

    Args:
        type_str: type as written in an ABI entry (``uint256``, ``tuple[]``,
            ``(address,uint8)[2]`` ...). ``uint``/``int`` are aliases for
            ``uint256``/``int256``.
        components: ABI ``components`` list, required when the base type is
            ``tuple``.

    Raises:
        ValueError: if the type is malformed or not supported.

    """
    type_str = type_str.strip()

    match = ARRAY_SUFFIX_REGEX.match(type_str)
    if match:
        length = match.group("length")
        if length and int(length) == 0:
            raise ValueError(f"Zero-length static array: {type_str}")
        return ArrayType(
            item=parse_type(match.group("item"), components),
            length=int(length) if length else None,
        )

    if type_str == "tuple":
        if components is None:
            raise ValueError("Tuple type without components")
        if not components:
            raise ValueError(f"Empty tuple: {type_str}")
        return TupleType(
            components=tuple(parse_type(c["type"], c.get("components")) for c in components)
        )

    if type_str.startswith("(") and type_str.endswith(")"):
        inner = type_str[1:-1]
        if not inner:
            raise ValueError(f"Empty tuple: {type_str}")
        return TupleType(components=tuple(parse_type(p) for p in _split_top_level(inner)))

    if type_str == "bool":
        return BoolType()
    if type_str == "address":
        return AddressType()
    if type_str == "string":
        return StringType()
    if type_str == "bytes":
        return BytesType()

    match = FIXED_BYTES_REGEX.match(type_str)
    if match:
        size = int(match.group("size"))
        if not 1 <= size <= WORD_SIZE:
            raise ValueError(f"Invalid fixed bytes size: {type_str}")
        return FixedBytesType(size=size)

    match = INT_REGEX.match(type_str)
    if match:
        bits = int(match.group("bits") or 256)
        if bits % 8 or not 8 <= bits <= 256:
            raise ValueError(f"Invalid integer width: {type_str}")
        return IntType(bits=bits, signed=match.group("prefix") == "int")

    raise ValueError(f"Unsupported ABI type: {type_str}")
