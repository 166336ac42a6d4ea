"""ABI types and value decoding."""

from revdec.core.abi.decoding import decode_params
from revdec.core.abi.types import (
    AddressType,
    ArrayType,
    BoolType,
    BytesType,
    FixedBytesType,
    IntType,
    ParameterType,
    StringType,
    TupleType,
    parse_type,
)

__all__ = [
    "AddressType",
    "ArrayType",
    "BoolType",
    "BytesType",
    "FixedBytesType",
    "IntType",
    "ParameterType",
    "StringType",
    "TupleType",
    "decode_params",
    "parse_type",
]
