"""
Formatting utilities for token amounts.
"""

from decimal import Decimal
from typing import Any, Mapping, Union

from orchestrator_sdk.tx.types import Coin


def format_amount(amount: Union[str, int], decimals: int = 6) -> str:
    """
    Convert an amount in the minimal denomination to a decimal string with
    full precision.

    Args:
        amount: Amount in the minimal denomination as string or int
        decimals: Number of decimal places of the display denomination

    Returns:
        Decimal string with exactly `decimals` fractional digits

    Examples:
        >>> format_amount("1000000")
        '1.000000'
        >>> format_amount("1500000", 6)
        '1.500000'
        >>> format_amount("1000000000000000000", 18)
        '1.000000000000000000'
    """
    value = int(amount)
    if value < 0:
        raise ValueError(f"Amount must be non-negative, got {amount!r}")
    divisor = 10 ** decimals
    whole, fraction = divmod(value, divisor)

    if decimals == 0:
        return str(whole)
    return f"{whole}.{str(fraction).rjust(decimals, '0')}"


def parse_amount(amount: str, decimals: int = 6) -> str:
    """
    Convert a display amount back to the minimal denomination.

    Extra fractional digits beyond `decimals` are dropped. Signs are rejected.

    Examples:
        >>> parse_amount("1.5", 6)
        '1500000'
        >>> parse_amount("0.000001", 6)
        '1'
        >>> parse_amount("1", 18)
        '1000000000000000000'
    """
    whole, _, fraction = amount.strip().partition(".")
    if not all(part.isdigit() for part in (whole, fraction) if part):
        raise ValueError(f"Amount must be an unsigned decimal, got {amount!r}")
    whole = whole or "0"
    fraction = (fraction or "0").ljust(decimals, "0")[:decimals]

    return str(int(whole) * 10 ** decimals + int(fraction or "0"))


def _display_denom(denom: str) -> str:
    # uatom -> ATOM, aatom -> ATOM
    if denom.startswith("u") or denom.startswith("a"):
        return denom[1:].upper()
    return denom.upper()


def format_coin(coin: Union[Coin, Mapping[str, Any]], decimals: int = 6) -> str:
    """
    Examples:
        >>> format_coin(Coin(amount="1000000", denom="uatom"))
        '1.000000 ATOM'
    """
    if isinstance(coin, Coin):
        amount, denom = coin.amount, coin.denom
    else:
        amount, denom = coin["amount"], coin["denom"]

    return f"{format_amount(amount, decimals)} {_display_denom(denom)}"


def format_percent(value: Union[str, float, Decimal], decimals: int = 2) -> str:
    """
    Format a 0-1 ratio as a percentage, e.g. format_percent("0.025", 3) => '2.500%'.
    """
    if isinstance(value, float):
        value = Decimal(str(value))
    percent = Decimal(value) * 100
    return f"{percent:.{decimals}f}%"


def format_gas(gas: Union[str, int]) -> str:
    """Gas amount with thousand separators, e.g. '200,000'."""
    return f"{int(gas):,}"
