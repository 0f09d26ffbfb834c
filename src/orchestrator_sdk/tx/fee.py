"""
Fee construction, heuristic gas estimation, and pre-broadcast validation.

Everything here is pure: identical inputs always give identical outputs and
nothing touches the network.
"""

import json
import logging
import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation, ROUND_CEILING
from typing import Any, Optional, Sequence, Union

from orchestrator_sdk.errors import InvalidFeeStructure, InvalidGasPrice, InvalidMessageStructure
from orchestrator_sdk.tx.types import Coin, EncodeObject, Fee

logger = logging.getLogger(__name__)

# "<digits>[.<digits>]<denom>", denom may not start with a digit or dot
GAS_PRICE_RE = re.compile(r"^(\d+(?:\.\d+)?)([^\d.\s]\S*)$")

DEFAULT_BASE_GAS = 100_000
DEFAULT_GAS_PER_MESSAGE = 50_000
DEFAULT_GAS_BUFFER = 1.2
UNSERIALIZABLE_MESSAGE_GAS = 10_000

_NON_NEGATIVE_INT_RE = re.compile(r"^\d+$")


def parse_gas_price(gas_price: str) -> tuple[Decimal, str]:
    """
    Split a gas price descriptor into its coefficient and denom.

    Example:
        parse_gas_price("0.025uatom") => (Decimal("0.025"), "uatom")
    """
    if not isinstance(gas_price, str):
        raise InvalidGasPrice(gas_price)

    match = GAS_PRICE_RE.match(gas_price)
    if match is None:
        raise InvalidGasPrice(gas_price)

    price, denom = match.groups()
    try:
        coefficient = Decimal(price)
    except InvalidOperation:
        raise InvalidGasPrice(gas_price, f"Invalid gas price value: {price}")

    if coefficient.is_nan() or coefficient < 0:
        raise InvalidGasPrice(gas_price, f"Invalid gas price value: {price}")

    return coefficient, denom


def _require_gas_limit(gas_limit: Any) -> int:
    if isinstance(gas_limit, bool) or not isinstance(gas_limit, int) or gas_limit <= 0:
        raise InvalidFeeStructure(f"Gas limit must be a positive integer, got {gas_limit!r}")
    return gas_limit


def build_fee(
    gas_limit: int,
    gas_price: str,
    payer: Optional[str] = None,
    granter: Optional[str] = None,
) -> Fee:
    """
    Build a transaction fee from a gas limit and a gas price descriptor.

    The fee amount is ceil(gas_limit * price) in the descriptor's denom.

    Args:
        gas_limit: Gas limit for the transaction
        gas_price: Gas price such as "0.025uatom" or "25000000000aatom"
        payer: Optional fee payer address
        granter: Optional fee granter address

    Returns:
        Fee with a single coin

    Raises:
        InvalidGasPrice: If the descriptor cannot be parsed
        InvalidFeeStructure: If the gas limit is not a positive integer

    Example:
        build_fee(200000, "0.025uatom")
        # Fee(amount=(Coin(amount="5000", denom="uatom"),), gas="200000")
    """
    gas_limit = _require_gas_limit(gas_limit)
    coefficient, denom = parse_gas_price(gas_price)

    amount = (Decimal(gas_limit) * coefficient).to_integral_value(rounding=ROUND_CEILING)

    return Fee(
        amount=(Coin(amount=str(int(amount)), denom=denom),),
        gas=str(gas_limit),
        payer=payer or None,
        granter=granter or None,
    )


def calculate_fee_amount(gas_limit: int, gas_price: str) -> Coin:
    """Fee coin for display, e.g. calculate_fee_amount(200000, "0.025uatom") => Coin("5000", "uatom")."""
    return build_fee(gas_limit, gas_price).amount[0]


def _message_value(message: Any) -> Any:
    if isinstance(message, EncodeObject):
        return message.value
    if isinstance(message, Mapping):
        return message.get("value")
    return getattr(message, "value", None)


def estimate_gas(
    messages: Sequence[Any],
    base_gas: int = DEFAULT_BASE_GAS,
    gas_per_message: int = DEFAULT_GAS_PER_MESSAGE,
    buffer: Union[float, Decimal] = DEFAULT_GAS_BUFFER,
) -> int:
    """
    Heuristic gas limit for a set of messages.

    gas = base_gas + gas_per_message * len(messages)
          + sum(ceil(len(json(value)) / 100) * 1000)
    and the total is multiplied by `buffer` and rounded up. A message whose
    value cannot be serialized adds a flat 10,000 instead.

    This is not a simulation; it only aims to over-estimate.
    """
    gas = base_gas + gas_per_message * len(messages)

    for message in messages:
        try:
            size = len(json.dumps(_message_value(message), separators=(",", ":")))
        except (TypeError, ValueError):
            logger.debug("Message value is not JSON serializable, using fixed gas overhead")
            gas += UNSERIALIZABLE_MESSAGE_GAS
            continue
        gas += -(-size // 100) * 1000

    total = (Decimal(gas) * Decimal(str(buffer))).to_integral_value(rounding=ROUND_CEILING)
    return int(total)


def _coin_field(coin: Any, name: str) -> Any:
    if isinstance(coin, Mapping):
        return coin.get(name)
    return getattr(coin, name, None)


def validate_fee(fee: Union[Fee, Mapping[str, Any]]) -> bool:
    """
    Check a fee before it is handed to a signing backend.

    Returns:
        True if valid

    Raises:
        InvalidFeeStructure: With a message describing the first problem found
    """
    if isinstance(fee, Fee):
        amount, gas = fee.amount, fee.gas
    elif isinstance(fee, Mapping):
        amount, gas = fee.get("amount"), fee.get("gas")
    else:
        raise InvalidFeeStructure("Fee must be an object")

    if not isinstance(amount, (list, tuple)):
        raise InvalidFeeStructure("Fee amount must be an array")

    if len(amount) == 0:
        raise InvalidFeeStructure("Fee amount cannot be empty")

    for idx, coin in enumerate(amount):
        coin_amount = _coin_field(coin, "amount")
        denom = _coin_field(coin, "denom")
        if coin_amount is None or coin_amount == "" or not denom:
            raise InvalidFeeStructure(f"Fee amount[{idx}] must have amount and denom")
        if not _NON_NEGATIVE_INT_RE.match(str(coin_amount)):
            raise InvalidFeeStructure(f"Fee amount[{idx}] must be a non-negative integer, got {coin_amount!r}")

    if not gas:
        raise InvalidFeeStructure("Fee must have gas limit")

    try:
        gas_value = int(str(gas), 10)
    except ValueError:
        raise InvalidFeeStructure(f"Fee gas must be a positive number, got {gas!r}")
    if gas_value <= 0:
        raise InvalidFeeStructure("Fee gas must be a positive number")

    return True


def coerce_message(message: Any) -> EncodeObject:
    """Accept an EncodeObject or a {"typeUrl"/"type_url", "value"} mapping."""
    if isinstance(message, EncodeObject):
        return message
    if isinstance(message, Mapping):
        type_url = message.get("type_url", message.get("typeUrl"))
        if "value" in message:
            return EncodeObject(type_url=type_url, value=message["value"])
    raise InvalidMessageStructure(f"Not a message object: {message!r}")


def is_valid_message(message: Any) -> bool:
    try:
        msg = coerce_message(message)
    except InvalidMessageStructure:
        return False

    if not isinstance(msg.type_url, str) or not msg.type_url.startswith("/"):
        return False

    value = msg.value
    return isinstance(value, Mapping) or hasattr(value, "SerializeToString")


def validate_messages(messages: Sequence[Any]) -> list[EncodeObject]:
    """
    Check that every message has a "/"-prefixed type URL and an object value.

    Returns:
        The messages as EncodeObjects

    Raises:
        InvalidMessageStructure: If the list is empty or any entry is malformed
    """
    if not isinstance(messages, (list, tuple)):
        raise InvalidMessageStructure("Messages must be an array")

    if len(messages) == 0:
        raise InvalidMessageStructure("Messages array cannot be empty")

    for idx, msg in enumerate(messages):
        if not is_valid_message(msg):
            raise InvalidMessageStructure(
                f"Message[{idx}] is invalid. Must have type_url (string starting with /) and value (object)"
            )

    return [coerce_message(m) for m in messages]
