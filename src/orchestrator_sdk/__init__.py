from .errors import (
    OrchestratorError,
    ValidationError,
    AddressFormatError,
    InvalidGasPrice,
    InvalidFeeStructure,
    InvalidMessageStructure,
    JsonParseError,
    UnknownModuleError,
    WalletError,
    WalletUnavailable,
    WalletConnectionFailed,
    WalletNotSupported,
    UserRejectedSigning,
    InsufficientFunds,
    OutOfGas,
    BroadcastFailure,
    TxTimeoutError,
    classify_wallet_error,
)
from .config import ChainConfig
from .logging_config import setup_sdk_logging
from .address import (
    decode_bech32,
    encode_bech32,
    to_hex,
    from_hex,
    bech32_to_hex,
    hex_to_bech32,
    is_valid_bech32,
    is_valid_hex,
    shorten_address,
    get_address_prefix,
)
from .tx import Coin, Fee, EncodeObject, BroadcastResult, WalletAccount, build_fee, estimate_gas, validate_fee
from .governance import ParameterSelection, BuiltProposal, build_proposal, VoteOption
from .wallet import WalletType, WalletEnvironment, WalletAdapter, get_wallet, create_wallet, get_available_wallets
from .tx.dispatcher import TransactionDispatcher, DispatchState, DispatchResult, ProposalSubmission

__all__ = [
    # Errors
    "OrchestratorError",
    "ValidationError",
    "AddressFormatError",
    "InvalidGasPrice",
    "InvalidFeeStructure",
    "InvalidMessageStructure",
    "JsonParseError",
    "UnknownModuleError",
    "WalletError",
    "WalletUnavailable",
    "WalletConnectionFailed",
    "WalletNotSupported",
    "UserRejectedSigning",
    "InsufficientFunds",
    "OutOfGas",
    "BroadcastFailure",
    "TxTimeoutError",
    "classify_wallet_error",
    "ChainConfig",
    "setup_sdk_logging",
    # Addresses
    "decode_bech32",
    "encode_bech32",
    "to_hex",
    "from_hex",
    "bech32_to_hex",
    "hex_to_bech32",
    "is_valid_bech32",
    "is_valid_hex",
    "shorten_address",
    "get_address_prefix",
    # Transactions
    "Coin",
    "Fee",
    "EncodeObject",
    "BroadcastResult",
    "WalletAccount",
    "build_fee",
    "estimate_gas",
    "validate_fee",
    "TransactionDispatcher",
    "DispatchState",
    "DispatchResult",
    "ProposalSubmission",
    # Governance
    "ParameterSelection",
    "BuiltProposal",
    "build_proposal",
    "VoteOption",
    # Wallets
    "WalletType",
    "WalletEnvironment",
    "WalletAdapter",
    "get_wallet",
    "create_wallet",
    "get_available_wallets",
]
