"""
Tests for amount formatting helpers.
"""

from decimal import Decimal

import pytest

from orchestrator_sdk.tx.types import Coin
from orchestrator_sdk.utils.format import format_amount, format_coin, format_gas, format_percent, parse_amount


class TestAmounts:
    @pytest.mark.parametrize("amount, decimals, expected", [
        ("1000000", 6, "1.000000"),
        ("1500000", 6, "1.500000"),
        ("1", 6, "0.000001"),
        (0, 6, "0.000000"),
        ("1000000000000000000", 18, "1.000000000000000000"),
        ("123", 0, "123"),
    ])
    def test_format_amount(self, amount, decimals, expected):
        assert format_amount(amount, decimals) == expected

    @pytest.mark.parametrize("text, decimals, expected", [
        ("1.5", 6, "1500000"),
        ("0.000001", 6, "1"),
        ("1", 18, "1000000000000000000"),
        (".5", 6, "500000"),
        ("1.1234567", 6, "1123456"),
    ])
    def test_parse_amount(self, text, decimals, expected):
        assert parse_amount(text, decimals) == expected

    @pytest.mark.parametrize("amount", ["-1", -1500000])
    def test_format_amount_rejects_negative(self, amount):
        with pytest.raises(ValueError, match="non-negative"):
            format_amount(amount)

    @pytest.mark.parametrize("text", ["-1.5", "1.-5", "+2", "abc"])
    def test_parse_amount_rejects_signed_or_garbage(self, text):
        with pytest.raises(ValueError):
            parse_amount(text)

    def test_round_trip_is_exact(self):
        assert parse_amount(format_amount("123456789012345678901", 18), 18) == "123456789012345678901"


class TestDisplay:
    def test_format_coin(self):
        assert format_coin(Coin(amount="1000000", denom="uatom")) == "1.000000 ATOM"
        assert format_coin({"amount": "2500000000000000000", "denom": "aatom"}, 18) == "2.500000000000000000 ATOM"

    def test_format_percent(self):
        assert format_percent("0.025", 3) == "2.500%"
        assert format_percent(0.5) == "50.00%"
        assert format_percent(Decimal("1")) == "100.00%"

    def test_format_gas(self):
        assert format_gas(200000) == "200,000"
        assert format_gas("1234567") == "1,234,567"
