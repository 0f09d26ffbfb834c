"""
Error taxonomy for the Orchestrator SDK.

Structural errors (addresses, fees, message shapes) derive from ValidationError
and are always raised before any network call. Backend errors derive from
WalletError; free-form failures coming back from a signing backend are mapped
onto the classified types by classify_wallet_error().
"""

import json
from typing import Any, Optional


class OrchestratorError(Exception):
    """Base exception for all SDK errors."""
    pass


class ValidationError(OrchestratorError, ValueError):
    """Raised when caller-supplied input is structurally invalid."""
    pass


class AddressFormatError(ValidationError):
    """Raised on a malformed bech32 or hex address."""
    def __init__(self, address: Any, reason: str):
        self.address = address
        self.reason = reason
        super().__init__(f"Invalid address {address!r}: {reason}")


class InvalidGasPrice(ValidationError):
    def __init__(self, gas_price: Any, reason: Optional[str] = None):
        self.gas_price = gas_price
        detail = reason or 'Expected format: "0.025uatom"'
        super().__init__(f"Invalid gas price {gas_price!r}. {detail}")


class InvalidFeeStructure(ValidationError):
    pass


class InvalidMessageStructure(ValidationError):
    pass


class JsonParseError(ValidationError):
    """Raised by input parsing when caller-supplied JSON does not parse."""
    def __init__(self, field: str, error: json.JSONDecodeError):
        self.field = field
        self.line = error.lineno
        self.column = error.colno
        super().__init__(f"{field} is not valid JSON: {error.msg} (line {error.lineno}, column {error.colno})")


class UnknownModuleError(OrchestratorError, LookupError):
    """Raised when a module name has no known message type."""
    def __init__(self, module: str, supported: list[str]):
        self.module = module
        self.supported = supported
        super().__init__(f"Unknown module: '{module}'. Supported modules: {sorted(supported)}")


class SubscriptionActiveError(OrchestratorError, RuntimeError):
    """Raised when subscribing to account changes while a subscription is still open."""
    pass


class WalletError(OrchestratorError):
    """Base exception for signing backend failures."""
    pass


class WalletUnavailable(WalletError):
    pass


class WalletConnectionFailed(WalletError):
    pass


class WalletNotSupported(WalletError):
    """Raised by backends that do not implement an operation yet."""
    pass


class UserRejectedSigning(WalletError):
    pass


class InsufficientFunds(WalletError):
    pass


class OutOfGas(WalletError):
    def __init__(self, message: str, gas_wanted: Optional[int] = None, gas_used: Optional[int] = None):
        super().__init__(message)
        self.gas_wanted = gas_wanted
        self.gas_used = gas_used


class BroadcastFailure(WalletError):
    """Raised when the chain answers a broadcast with a non-zero code."""
    def __init__(self, code: int, raw_log: str, tx_hash: Optional[str] = None, codespace: str = ""):
        self.code = code
        self.raw_log = raw_log
        self.tx_hash = tx_hash
        self.codespace = codespace
        super().__init__(raw_log)

    def __str__(self):
        tx_info = f"tx_hash={self.tx_hash}" if self.tx_hash else "no tx hash"
        return f"Transaction failed: codespace={self.codespace} code={self.code} {tx_info} {self.raw_log or 'Unknown error'}"


class TxTimeoutError(WalletError):
    pass


_CLASSIFIED = (InsufficientFunds, OutOfGas, UserRejectedSigning)


def classify_wallet_error(error: BaseException) -> BaseException:
    """
    Map a backend failure onto the SDK's error taxonomy.

    Matching is done on substrings of the error text. Errors that match nothing
    are returned as-is so callers can re-raise them without losing information.

    Args:
        error: Exception raised by a signing client or backend

    Returns:
        A new classified exception, or `error` itself when nothing matched
    """
    if isinstance(error, _CLASSIFIED):
        return error
    if isinstance(error, OrchestratorError) and not isinstance(error, BroadcastFailure):
        return error

    message = str(error).lower()

    if "insufficient funds" in message:
        return InsufficientFunds("Insufficient funds to complete transaction")
    elif "out of gas" in message:
        return OutOfGas("Transaction ran out of gas. Try increasing gas limit.")
    elif "rejected" in message:
        return UserRejectedSigning("Transaction rejected by user")
    return error


def parse_json_input(text: str, field: str) -> Any:
    """Parse caller-supplied JSON, raising JsonParseError with the field name on failure."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise JsonParseError(field, e) from e
