"""Selector-matching error decoder."""

import re
from typing import Union

from loguru import logger

from revdec.core.abi.decoding import decode_params
from revdec.core.constants import SELECTOR_SIZE
from revdec.core.errors import (
    AmbiguousSelector,
    DecodeError,
    InvalidPayloadEncoding,
    UnknownSelector,
)
from revdec.core.interface import ErrorDefinition, InterfaceDescription
from revdec.core.models import CollisionPolicy, DecodedResult, DecodeOutcome

HEX_REGEX = re.compile(r"^(0[xX])?(?P<digits>[0-9a-fA-F]*)$")

Payload = Union[str, bytes, bytearray, memoryview]


def to_payload_bytes(payload: Payload) -> bytes:
    """Convert a hex string (``0x`` prefix optional) or bytes into payload bytes.

    Raises:
        InvalidPayloadEncoding: if the payload is not byte-aligned hex or is
            shorter than a selector.

    """
    if isinstance(payload, (bytes, bytearray, memoryview)):
        data = bytes(payload)
    elif isinstance(payload, str):
        match = HEX_REGEX.match(payload.strip())
        if not match:
            raise InvalidPayloadEncoding(f"Payload is not a hex string: {payload!r}")
        digits = match.group("digits")
        if len(digits) % 2:
            raise InvalidPayloadEncoding(
                f"Payload has an odd number of hex digits ({len(digits)})"
            )
        data = bytes.fromhex(digits)
    else:
        raise InvalidPayloadEncoding(
            f"Payload must be a hex string or bytes, got {type(payload).__name__}"
        )

    if not data:
        raise InvalidPayloadEncoding("Payload is empty: the call reverted without data")
    if len(data) < SELECTOR_SIZE:
        raise InvalidPayloadEncoding(
            f"Payload is {len(data)} bytes, shorter than a {SELECTOR_SIZE}-byte selector"
        )
    return data


class ErrorDecoder:
    """Decode error payloads against one interface description.

    Args:
        interface: declared errors to match against. Must not be empty.
        policy: collision policy. ``first`` picks the first definition in
            declaration order, ``fail`` raises AmbiguousSelector.
        include_builtins: also match Solidity's ``Error(string)`` and
            ``Panic(uint256)``, after the declared errors.

    """

    def __init__(
        self,
        interface: InterfaceDescription,
        policy: Union[CollisionPolicy, str] = CollisionPolicy.FIRST,
        include_builtins: bool = True,
    ):
        """Initialize ErrorDecoder."""
        if not len(interface):
            raise ValueError("Interface description declares no errors")
        self.interface = interface
        self.policy = CollisionPolicy(policy)
        self.include_builtins = include_builtins
        self._candidates = interface.with_builtins() if include_builtins else interface

    def match(self, selector: bytes) -> ErrorDefinition:
        """Find the definition for ``selector`` according to the collision policy."""
        entries = self._candidates.lookup(selector)
        selector_hex = "0x" + bytes(selector).hex()

        if not entries:
            raise UnknownSelector(selector_hex)

        if len(entries) > 1:
            signatures = [self._describe(e) for e in entries]
            if self.policy == CollisionPolicy.FAIL:
                raise AmbiguousSelector(selector_hex, signatures)
            logger.warning(
                f"Selector {selector_hex} matches {len(entries)} definitions, "
                f"using the first one: {signatures[0]}"
            )

        return entries[0]

    def decode(self, payload: Payload) -> DecodedResult:
        """Decode an error payload.

        Raises:
            InvalidPayloadEncoding, UnknownSelector, AmbiguousSelector,
            MalformedPayload

        """
        data = to_payload_bytes(payload)
        selector, encoded_args = data[:SELECTOR_SIZE], data[SELECTOR_SIZE:]

        definition = self.match(selector)
        logger.debug(f"Matched {definition.signature} from {definition.source}")

        args = decode_params(definition.types, encoded_args)

        return DecodedResult(
            error_name=definition.name,
            args=args,
            arg_names=tuple(definition.arg_names),
            signature=definition.signature,
            selector="0x" + selector.hex(),
            source=definition.source,
        )

    def try_decode(self, payload: Payload) -> DecodeOutcome:
        """Decode an error payload, returning failures as values."""
        try:
            return DecodeOutcome(result=self.decode(payload))
        except DecodeError as e:
            logger.debug(f"Decode failed: {e}")
            return DecodeOutcome(failure=e.to_failure())

    @staticmethod
    def _describe(definition: ErrorDefinition) -> str:
        if definition.source:
            return f"{definition.signature} [{definition.source}]"
        return definition.signature


def decode_error(
    interface: InterfaceDescription,
    payload: Payload,
    policy: Union[CollisionPolicy, str] = CollisionPolicy.FIRST,
    include_builtins: bool = True,
) -> DecodedResult:
    """Decode ``payload`` against ``interface``. See ErrorDecoder."""
    return ErrorDecoder(interface, policy, include_builtins).decode(payload)
