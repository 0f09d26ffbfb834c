"""
Tests for bech32 / hex address conversion.
"""

import os

import pytest
from cosmpy.crypto.address import Address

from orchestrator_sdk.address import (
    bech32_to_hex,
    decode_bech32,
    encode_bech32,
    from_hex,
    get_address_prefix,
    hex_to_bech32,
    is_valid_bech32,
    is_valid_hex,
    shorten_address,
    to_hex,
)
from orchestrator_sdk.errors import AddressFormatError
from tests.mocks.wallet import GOV_ADDRESS, GOV_HEX


class TestRoundTrip:
    @pytest.mark.parametrize("prefix", ["cosmos", "evmos", "osmo"])
    def test_bech32_round_trip(self, prefix):
        """decode(encode(p, b)) == b for random 20-byte values"""
        for _ in range(20):
            data = os.urandom(20)
            assert decode_bech32(encode_bech32(prefix, data)) == data

    def test_hex_round_trip(self):
        for _ in range(20):
            data = os.urandom(20)
            assert from_hex(to_hex(data)) == data

    def test_matches_cosmpy_encoding(self):
        """Encoding agrees with cosmpy's Address for the same bytes"""
        data = os.urandom(20)
        assert encode_bech32("cosmos", data) == str(Address(data, prefix="cosmos"))

    def test_same_bytes_under_two_prefixes(self):
        data = os.urandom(20)
        a = encode_bech32("cosmos", data)
        b = encode_bech32("evmos", data)
        assert a != b
        assert decode_bech32(a) == decode_bech32(b) == data


class TestConversions:
    def test_gov_module_address_to_hex(self):
        """The gov module account is sha256("gov")[:20]"""
        assert bech32_to_hex(GOV_ADDRESS) == GOV_HEX

    def test_hex_to_bech32(self):
        assert hex_to_bech32(GOV_HEX, "cosmos") == GOV_ADDRESS

    def test_hex_to_bech32_accepts_uppercase_hex(self):
        assert hex_to_bech32(GOV_HEX.upper().replace("0X", "0x")) == GOV_ADDRESS

    def test_to_hex_is_lowercase(self):
        assert to_hex(bytes.fromhex("ABCDEF" + "00" * 17)) == "0xabcdef" + "00" * 17


class TestFailClosed:
    def test_bad_checksum(self):
        broken = GOV_ADDRESS[:-1] + ("q" if GOV_ADDRESS[-1] != "q" else "p")
        with pytest.raises(AddressFormatError):
            decode_bech32(broken)

    def test_prefix_mismatch(self):
        with pytest.raises(AddressFormatError, match="expected prefix"):
            decode_bech32(GOV_ADDRESS, expected_prefix="evmos")

    def test_empty_address(self):
        with pytest.raises(AddressFormatError):
            decode_bech32("")

    @pytest.mark.parametrize("value", [
        "0x" + "a" * 39,
        "0x" + "a" * 41,
        "a" * 40,
        "0x" + "g" * 40,
        "",
    ])
    def test_from_hex_rejects(self, value):
        with pytest.raises(AddressFormatError):
            from_hex(value)

    def test_bech32_to_hex_fails_closed(self):
        with pytest.raises(AddressFormatError):
            bech32_to_hex("cosmos1notanaddress")

    def test_bech32_to_hex_rejects_long_payload(self):
        long_address = encode_bech32("cosmos", bytes(range(32)))
        with pytest.raises(AddressFormatError, match="expected 20 bytes"):
            bech32_to_hex(long_address)

    def test_hex_to_bech32_fails_closed(self):
        with pytest.raises(AddressFormatError):
            hex_to_bech32("0x1234")

    def test_encode_requires_prefix(self):
        with pytest.raises(AddressFormatError):
            encode_bech32("", os.urandom(20))


class TestValidators:
    def test_valid(self):
        assert is_valid_bech32(GOV_ADDRESS)
        assert is_valid_bech32(GOV_ADDRESS, "cosmos")
        assert is_valid_hex(GOV_HEX)

    def test_39_char_hex_rejected(self):
        assert not is_valid_hex("0x" + "1" * 39)

    def test_wrong_prefix_rejected(self):
        assert not is_valid_bech32(GOV_ADDRESS, "evmos")

    def test_empty_string_rejected_without_raising(self):
        assert is_valid_bech32("") is False
        assert is_valid_hex("") is False

    def test_non_string_rejected_without_raising(self):
        assert is_valid_bech32(None) is False
        assert is_valid_hex(None) is False


class TestDisplayHelpers:
    def test_shorten(self):
        assert shorten_address(GOV_ADDRESS, 10, 6) == f"{GOV_ADDRESS[:10]}...{GOV_ADDRESS[-6:]}"

    def test_shorten_short_address_unchanged(self):
        assert shorten_address("cosmos1abc", 10, 6) == "cosmos1abc"
        assert shorten_address("a" * 16, 10, 6) == "a" * 16

    def test_get_address_prefix(self):
        assert get_address_prefix(GOV_ADDRESS) == "cosmos"

    def test_get_address_prefix_invalid(self):
        with pytest.raises(AddressFormatError):
            get_address_prefix("not-an-address")
