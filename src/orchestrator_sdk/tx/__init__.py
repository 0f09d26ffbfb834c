from .types import Coin, Fee, EncodeObject, BroadcastResult, WalletAccount
from .fee import (
    parse_gas_price,
    build_fee,
    calculate_fee_amount,
    estimate_gas,
    validate_fee,
    is_valid_message,
    validate_messages,
)
from .memo import (
    MAX_MEMO_LENGTH,
    format_memo,
    create_app_memo,
    create_proposal_memo,
    create_vote_memo,
    validate_memo_length,
    extract_metadata,
)
from .bank import SendOutput, build_send_messages
from .client import OfflineSigner, SigningClient, RestSigningClient, RestError, register_message_type

__all__ = [
    "Coin",
    "Fee",
    "EncodeObject",
    "BroadcastResult",
    "WalletAccount",
    # Fees
    "parse_gas_price",
    "build_fee",
    "calculate_fee_amount",
    "estimate_gas",
    "validate_fee",
    "is_valid_message",
    "validate_messages",
    # Memos
    "MAX_MEMO_LENGTH",
    "format_memo",
    "create_app_memo",
    "create_proposal_memo",
    "create_vote_memo",
    "validate_memo_length",
    "extract_metadata",
    # Transfers
    "SendOutput",
    "build_send_messages",
    # Signing client
    "OfflineSigner",
    "SigningClient",
    "RestSigningClient",
    "RestError",
    "register_message_type",
]
