"""ABI value decoding on top of eth_abi.

Each top-level parameter is decoded by the eth_abi decoder registered for its
canonical type, all of them reading from one shared frame stream, the same
walk eth_abi's TupleDecoder does over its heads. Walking the parameters here
keeps track of which one failed and where, so a corrupt or truncated payload
fails with MalformedPayload instead of producing a wrong value.
"""

from typing import Sequence, Tuple

from eth_abi.decoding import ContextFramesBytesIO, TupleDecoder
from eth_abi.exceptions import DecodingError
from eth_abi.registry import registry

from revdec.core.abi.types import WORD_SIZE
from revdec.core.errors import MalformedPayload

# A canonical encoding reads each byte about once (tuple heads twice, once to
# validate their offsets). Offsets aliasing the same tail data read it again
# for every pointer, which grows with the cube of the payload for 3 levels.
READ_BUDGET_FACTOR = 8


class BoundedFramesBytesIO(ContextFramesBytesIO):
    """Frame stream that stops reading past a multiple of its own size."""

    def __init__(self, data: bytes):
        """Initialize BoundedFramesBytesIO."""
        super().__init__(data)
        self.budget = max(len(data), WORD_SIZE) * READ_BUDGET_FACTOR

    def read(self, size=-1):
        """Read from the current position, charging the read to the budget."""
        chunk = super().read(size)
        self.budget -= len(chunk)
        if self.budget < 0:
            raise MalformedPayload(
                "Offsets point at the same data too many times, decoding would read "
                f"more than {READ_BUDGET_FACTOR}x the payload",
                self.tell(),
            )
        return chunk


def decode_params(types: Sequence, data: bytes) -> Tuple:
    """Decode ABI-encoded values for the given parameter types.

    Args:
        types: the declared ParameterType of each value, in order.
        data: the encoded argument bytes (selector already stripped).

    Returns:
        A tuple of Python values in declaration order. Bytes values are
        ``bytes``, addresses are checksummed ``str``, arrays and tuples are
        tuples.

    Raises:
        MalformedPayload: if the data does not form a valid encoding of the
            types; ``param_index`` names the top-level parameter being decoded.

    """
    decoders = TupleDecoder(
        decoders=tuple(registry.get_decoder(t.canonical, strict=True) for t in types)
    ).decoders
    stream = BoundedFramesBytesIO(bytes(data))

    values = []
    for index, decoder in enumerate(decoders):
        try:
            values.append(decoder(stream))
        except MalformedPayload as e:
            raise e.at_param(index) from None
        except (DecodingError, UnicodeDecodeError) as e:
            raise MalformedPayload(str(e), stream.tell(), index) from e
    return tuple(values)
