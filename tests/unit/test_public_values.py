"""
Public Values Unit Tests
Tests for core/schemas/public_values.py

Tests:
- 160-byte static layout in declared field order
- bytes32 slot mapping (pad/truncate) while the model keeps full values
- decode validation and lenient decoding
- immutability
"""
import pytest
from pydantic import ValidationError

from core.abi import UINT32_MAX
from core.schemas.errors import AbiDecodeError
from core.schemas.public_values import (
    PUBLIC_VALUES_FIELDS,
    PUBLIC_VALUES_SIZE,
    PublicValuesStruct,
    commit_public_values,
)


def _record(**overrides) -> PublicValuesStruct:
    data = {
        "pubkey": b"\x30\x81\x9f",
        "signature": bytes(8),
        "verified": False,
        "email_header": b"test-header",
        "max_headers_length": 88,
    }
    data.update(overrides)
    return PublicValuesStruct(**data)


class TestLayout:
    """Tests for the ABI word layout."""

    def test_field_order(self):
        assert PUBLIC_VALUES_FIELDS == (
            "pubkey", "signature", "verified", "email_header", "max_headers_length",
        )
        assert tuple(PublicValuesStruct.model_fields) == PUBLIC_VALUES_FIELDS

    def test_size_is_five_words(self):
        encoded = _record().abi_encode()

        assert PUBLIC_VALUES_SIZE == 160
        assert len(encoded) == 160

    def test_word_contents(self):
        encoded = _record(verified=True).abi_encode()

        assert encoded[0:32] == b"\x30\x81\x9f" + bytes(29)
        assert encoded[32:64] == bytes(32)
        assert encoded[64:96] == bytes(31) + b"\x01"
        assert encoded[96:128] == b"test-header" + bytes(21)
        assert encoded[128:160] == bytes(31) + b"\x58"

    def test_empty_fields(self):
        encoded = _record(pubkey=b"", signature=b"", email_header=b"", max_headers_length=0).abi_encode()
        assert encoded == bytes(160)

    def test_long_pubkey_truncated_in_slot(self):
        pubkey = bytes(range(162))
        record = _record(pubkey=pubkey)

        assert record.pubkey == pubkey
        assert record.abi_encode()[:32] == pubkey[:32]

    def test_u32_max(self):
        encoded = _record(max_headers_length=UINT32_MAX).abi_encode()
        assert encoded[128:] == bytes(28) + b"\xff" * 4


class TestDecode:
    """Tests for PublicValuesStruct.abi_decode()."""

    @pytest.mark.parametrize("max_len", [0, 1, 88, UINT32_MAX])
    def test_round_trip_short_fields(self, max_len):
        record = _record(
            pubkey=b"k" * 32,
            signature=b"s" * 32,
            email_header=b"h" * 32,
            verified=True,
            max_headers_length=max_len,
        )
        assert PublicValuesStruct.abi_decode(record.abi_encode()) == record

    def test_decoded_bytes_are_slot_form(self):
        decoded = PublicValuesStruct.abi_decode(_record().abi_encode())

        assert decoded.pubkey == b"\x30\x81\x9f" + bytes(29)
        assert decoded.email_header == b"test-header" + bytes(21)
        assert decoded.max_headers_length == 88
        assert decoded.verified is False

    def test_slot_form(self):
        record = _record(pubkey=bytes(range(100)))
        slot = record.slot_form()

        assert slot.pubkey == bytes(range(32))
        assert slot.signature == bytes(32)
        assert slot.max_headers_length == record.max_headers_length

    @pytest.mark.parametrize("length", [0, 128, 159, 161, 192])
    def test_wrong_length(self, length):
        with pytest.raises(AbiDecodeError):
            PublicValuesStruct.abi_decode(bytes(length))

    def test_non_canonical_bool(self):
        data = bytearray(_record().abi_encode())
        data[95] = 2
        with pytest.raises(AbiDecodeError) as exc_info:
            PublicValuesStruct.abi_decode(bytes(data))

        assert exc_info.value.details["offset"] == 64

    def test_u32_high_bits(self):
        data = bytearray(_record().abi_encode())
        data[128] = 1
        with pytest.raises(AbiDecodeError):
            PublicValuesStruct.abi_decode(bytes(data))

    def test_lenient_decode(self):
        data = bytearray(_record().abi_encode())
        data[95] = 2
        data[128] = 1

        decoded = PublicValuesStruct.abi_decode(bytes(data), validate=False)

        assert decoded.verified is True
        assert decoded.max_headers_length == 88


class TestModel:
    """Tests for model validation."""

    def test_frozen(self):
        record = _record()
        with pytest.raises(ValidationError):
            record.verified = True

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            _record(extra_field=1)

    @pytest.mark.parametrize("value", [-1, UINT32_MAX + 1])
    def test_max_headers_length_range(self, value):
        with pytest.raises(ValidationError):
            _record(max_headers_length=value)


class TestCommitPublicValues:
    """Tests for commit_public_values()."""

    @pytest.mark.parametrize("verified", [True, False])
    def test_carries_verified(self, verified):
        encoded = commit_public_values(
            pubkey=b"\x30",
            signature=bytes(8),
            email_header=b"h",
            max_headers_length=8,
            verified=verified,
        )
        assert PublicValuesStruct.abi_decode(encoded).verified is verified

    def test_matches_struct_encoding(self):
        record = _record()
        encoded = commit_public_values(
            record.pubkey,
            record.signature,
            record.email_header,
            record.max_headers_length,
            record.verified,
        )
        assert encoded == record.abi_encode()

    def test_deterministic(self):
        args = (b"\x30\x01", bytes(8), b"hdr", 24, True)
        assert commit_public_values(*args) == commit_public_values(*args)
