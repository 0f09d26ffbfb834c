"""
Tests for the error taxonomy and backend error classification.
"""

import pytest

from orchestrator_sdk.errors import (
    BroadcastFailure,
    InsufficientFunds,
    InvalidFeeStructure,
    JsonParseError,
    OrchestratorError,
    OutOfGas,
    UserRejectedSigning,
    ValidationError,
    WalletError,
    classify_wallet_error,
    parse_json_input,
)


class TestClassifyWalletError:
    @pytest.mark.parametrize("text, expected", [
        ("spendable balance 0uatom is smaller than 5000uatom: insufficient funds", InsufficientFunds),
        ("Insufficient Funds", InsufficientFunds),
        ("out of gas in location: WriteFlat; gasWanted: 100, gasUsed: 120", OutOfGas),
        ("Request rejected", UserRejectedSigning),
    ])
    def test_substring_matches(self, text, expected):
        classified = classify_wallet_error(RuntimeError(text))
        assert isinstance(classified, expected)
        assert isinstance(classified, WalletError)

    def test_broadcast_failure_is_classified_by_raw_log(self):
        failure = BroadcastFailure(code=5, raw_log="insufficient funds", tx_hash="ABC")
        assert isinstance(classify_wallet_error(failure), InsufficientFunds)

    def test_unrelated_error_passes_through(self):
        error = ConnectionError("connection reset by peer")
        assert classify_wallet_error(error) is error

    def test_sdk_errors_pass_through(self):
        error = InvalidFeeStructure("Fee amount cannot be empty")
        assert classify_wallet_error(error) is error

    def test_already_classified_is_kept(self):
        error = OutOfGas("boom", gas_wanted=10, gas_used=12)
        assert classify_wallet_error(error) is error


class TestErrorTypes:
    def test_validation_errors_are_value_errors(self):
        assert issubclass(ValidationError, ValueError)
        assert issubclass(ValidationError, OrchestratorError)

    def test_broadcast_failure_str(self):
        failure = BroadcastFailure(code=11, raw_log="out of gas", tx_hash="DEADBEEF", codespace="sdk")
        assert str(failure) == "Transaction failed: codespace=sdk code=11 tx_hash=DEADBEEF out of gas"
        assert "no tx hash" in str(BroadcastFailure(code=1, raw_log=""))


class TestParseJsonInput:
    def test_valid(self):
        assert parse_json_input('{"a": [1, 2]}', "Upgrade info") == {"a": [1, 2]}

    def test_invalid_reports_position(self):
        with pytest.raises(JsonParseError) as exc_info:
            parse_json_input('{"a": }', "Upgrade info")
        assert exc_info.value.field == "Upgrade info"
        assert exc_info.value.line == 1
        assert exc_info.value.column == 7
        assert str(exc_info.value).startswith("Upgrade info is not valid JSON")
