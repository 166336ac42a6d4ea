"""Tests for the recursive ABI value decoder."""

import pytest
from eth_abi import encode

from revdec.core.abi import decode_params, parse_type
from revdec.core.errors import MalformedPayload

ADDR_A = "0x1111111111111111111111111111111111111111"
ADDR_B = "0x2222222222222222222222222222222222222222"


def _types(*type_strs):
    return [parse_type(t) for t in type_strs]


def _word(value: int) -> bytes:
    return value.to_bytes(32, "big")


# =============================================================================
# Round trips through eth_abi.encode
# =============================================================================


class TestRoundTrip:
    """Values encoded by eth_abi decode back unchanged."""

    def test_static_only(self):
        type_strs = ["uint256", "int8", "bool", "address", "bytes4", "uint8"]
        values = (2**256 - 1, -5, True, ADDR_A, b"\xde\xad\xbe\xef", 255)
        assert decode_params(_types(*type_strs), encode(type_strs, values)) == values

    def test_dynamic_values(self):
        type_strs = ["string", "bytes", "uint256", "string"]
        values = ("Insufficient funds", b"\x01\x02\x03", 7, "")
        assert decode_params(_types(*type_strs), encode(type_strs, values)) == values

    def test_multibyte_utf8_string(self):
        values = ("café ☃",)
        assert decode_params(_types("string"), encode(["string"], values)) == values

    def test_long_bytes_spanning_several_words(self):
        values = (bytes(range(100)),)
        assert decode_params(_types("bytes"), encode(["bytes"], values)) == values

    def test_dynamic_and_static_arrays(self):
        type_strs = ["uint256[]", "address[2]", "string[]", "uint8[2][]"]
        values = (
            (1, 2, 3),
            (ADDR_A, ADDR_B),
            ("a", "bc", ""),
            ((1, 2), (3, 4)),
        )
        assert decode_params(_types(*type_strs), encode(type_strs, values)) == values

    def test_empty_dynamic_array(self):
        values = ((),)
        assert decode_params(_types("uint256[]"), encode(["uint256[]"], values)) == values

    def test_static_tuple(self):
        type_strs = ["(uint256,address,bool)", "uint256"]
        values = ((10, ADDR_A, False), 11)
        assert decode_params(_types(*type_strs), encode(type_strs, values)) == values

    def test_nested_dynamic_tuples(self):
        type_strs = ["(address,uint256[],string)", "bytes", "(uint256,string)[]"]
        values = (
            (ADDR_B, (5, 6), "memo"),
            b"\xff" * 33,
            ((1, "a"), (2, "bc")),
        )
        assert decode_params(_types(*type_strs), encode(type_strs, values)) == values

    def test_checksummed_address(self):
        checksummed = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
        decoded = decode_params(_types("address"), encode(["address"], [checksummed]))
        assert decoded == (checksummed,)

    def test_no_parameters(self):
        assert decode_params([], b"") == ()

    def test_trailing_bytes_are_ignored(self):
        data = encode(["uint256"], [1]) + b"\x00" * 32
        assert decode_params(_types("uint256"), data) == (1,)


# =============================================================================
# Malformed payloads
# =============================================================================


class TestMalformed:
    """Every layout violation raises MalformedPayload with its location."""

    def test_missing_static_slot(self):
        data = encode(["uint256"], [100])
        with pytest.raises(MalformedPayload) as exc:
            decode_params(_types("uint256", "uint256"), data)
        assert exc.value.param_index == 1
        assert exc.value.offset == 32

    def test_empty_data_for_static_params(self):
        with pytest.raises(MalformedPayload) as exc:
            decode_params(_types("uint256", "uint256"), b"")
        assert exc.value.param_index == 0
        assert exc.value.offset == 0

    def test_truncated_dynamic_payload(self):
        data = encode(["uint256", "string"], [1, "hello"])
        with pytest.raises(MalformedPayload) as exc:
            decode_params(_types("uint256", "string"), data[:-1])
        assert exc.value.param_index == 1

    def test_offset_out_of_bounds(self):
        data = _word(0x1000) + _word(0)
        with pytest.raises(MalformedPayload) as exc:
            decode_params(_types("bytes"), data)
        assert exc.value.param_index == 0

    def test_length_exceeds_payload(self):
        data = _word(32) + _word(1000) + b"\x00" * 32
        with pytest.raises(MalformedPayload) as exc:
            decode_params(_types("string"), data)
        assert exc.value.param_index == 0
        assert exc.value.offset <= len(data)

    def test_huge_array_length(self):
        data = _word(32) + _word(2**255)
        with pytest.raises(MalformedPayload):
            decode_params(_types("uint256[]"), data)

    def test_invalid_bool(self):
        with pytest.raises(MalformedPayload):
            decode_params(_types("bool"), _word(2))

    def test_dirty_address_padding(self):
        data = b"\x01" + b"\x00" * 11 + bytes.fromhex(ADDR_A[2:])
        with pytest.raises(MalformedPayload):
            decode_params(_types("address"), data)

    def test_dirty_fixed_bytes_padding(self):
        data = b"\xaa" * 4 + b"\x01" + b"\x00" * 27
        with pytest.raises(MalformedPayload):
            decode_params(_types("bytes4"), data)

    def test_dirty_dynamic_bytes_padding(self):
        data = _word(32) + _word(1) + b"\xaa\x01" + b"\x00" * 30
        with pytest.raises(MalformedPayload):
            decode_params(_types("bytes"), data)

    def test_uint_out_of_range(self):
        with pytest.raises(MalformedPayload):
            decode_params(_types("uint8"), _word(256))

    def test_int_bad_sign_extension(self):
        with pytest.raises(MalformedPayload):
            decode_params(_types("int8"), _word(0xFF))

    def test_invalid_utf8_string(self):
        data = _word(32) + _word(2) + b"\xff\xfe" + b"\x00" * 30
        with pytest.raises(MalformedPayload):
            decode_params(_types("string"), data)

    def test_error_reports_index_of_nested_failure(self):
        """A failure deep inside a composite is attributed to its top-level parameter."""
        type_strs = ["uint256", "(address,uint256[],string)"]
        data = encode(type_strs, [1, (ADDR_A, (5, 6), "memo")])
        with pytest.raises(MalformedPayload) as exc:
            decode_params(_types(*type_strs), data[:-32])
        assert exc.value.param_index == 1
        assert "parameter 1" in str(exc.value)


# =============================================================================
# Offsets sharing tail data
# =============================================================================


def _aliased_nested_arrays(count: int) -> bytes:
    """``uint256[][][]`` where every pointer at each level targets one shared child."""
    offsets = _word(count * 32) * count
    inner = _word(count) + b"".join(_word(i) for i in range(count))
    return _word(32) + _word(count) + offsets + _word(count) + offsets + inner


class TestSharedOffsets:
    """Decoding work stays proportional to the payload size."""

    def test_small_aliased_payload_decodes(self):
        inner = (0, 1)
        decoded = decode_params(_types("uint256[][][]"), _aliased_nested_arrays(2))
        assert decoded == (((inner, inner), (inner, inner)),)

    def test_aliased_payload_is_rejected(self):
        with pytest.raises(MalformedPayload, match="same data too many times") as exc:
            decode_params(_types("uint256[][][]"), _aliased_nested_arrays(64))
        assert exc.value.param_index == 0

    def test_large_canonical_payload_decodes(self):
        values = (tuple(tuple(range(i, i + 40)) for i in range(40)), "x" * 500)
        type_strs = ["uint256[][]", "string"]
        assert decode_params(_types(*type_strs), encode(type_strs, values)) == values
