"""revdec: decode smart-contract revert data against an ABI.

Usage::

    from revdec import ErrorDecoder, load_interface

    decoder = ErrorDecoder(load_interface("out/Errors.sol/Errors.json"))
    result = decoder.decode("0xcf479181...")
    print(result.error_name, result.args)

"""

from revdec.core.decoder import ErrorDecoder, decode_error
from revdec.core.errors import (
    AmbiguousSelector,
    DecodeError,
    InvalidPayloadEncoding,
    MalformedPayload,
    UnknownSelector,
)
from revdec.core.interface import ErrorDefinition, InterfaceDescription, load_interface
from revdec.core.models import CollisionPolicy, DecodedResult, DecodeFailure, DecodeOutcome

__all__ = [
    "AmbiguousSelector",
    "CollisionPolicy",
    "DecodeError",
    "DecodeFailure",
    "DecodeOutcome",
    "DecodedResult",
    "ErrorDecoder",
    "ErrorDefinition",
    "InterfaceDescription",
    "InvalidPayloadEncoding",
    "MalformedPayload",
    "UnknownSelector",
    "decode_error",
    "load_interface",
]
