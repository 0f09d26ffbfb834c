"""
Address conversion between the chain's two encodings.

An account is a single 20-byte value. It is rendered either as a bech32 string
tagged with a human-readable prefix (e.g. "cosmos1...") or as an EVM-style
"0x" + 40 hex characters string. The same bytes may be encoded under several
prefixes; every conversion fails closed with AddressFormatError.

Usage:
    hex_addr = bech32_to_hex("cosmos10d07y265gmmuvt4z0w9aw880jnsr700j6zn9kn")
    bech = hex_to_bech32(hex_addr, "cosmos")
"""

import re
from typing import Optional

from bech32 import bech32_decode, bech32_encode, convertbits

from orchestrator_sdk.errors import AddressFormatError

HEX_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")

ADDRESS_LENGTH = 20


def decode_bech32(address: str, expected_prefix: Optional[str] = None) -> bytes:
    """
    Decode a bech32 address to its raw bytes.

    Args:
        address: Bech32 address string
        expected_prefix: If given, the address prefix must match it exactly

    Returns:
        The decoded payload bytes

    Raises:
        AddressFormatError: On a bad checksum, bad characters, an empty payload
            or a prefix mismatch
    """
    if not isinstance(address, str) or not address:
        raise AddressFormatError(address, "address is empty")

    prefix, words = bech32_decode(address)
    if prefix is None or words is None:
        raise AddressFormatError(address, "invalid bech32 encoding or checksum")

    if expected_prefix is not None and prefix != expected_prefix:
        raise AddressFormatError(address, f"expected prefix '{expected_prefix}', got '{prefix}'")

    data = convertbits(words, 5, 8, False)
    if not data:
        raise AddressFormatError(address, "empty or malformed payload")

    return bytes(data)


def encode_bech32(prefix: str, data: bytes) -> str:
    """Encode raw bytes as a bech32 address under `prefix`."""
    if not prefix:
        raise AddressFormatError(data.hex(), "prefix is empty")

    words = convertbits(data, 8, 5)
    encoded = bech32_encode(prefix, words) if words is not None else None
    if encoded is None:
        raise AddressFormatError(data.hex(), f"cannot encode with prefix '{prefix}'")
    return encoded


def to_hex(data: bytes) -> str:
    return "0x" + bytes(data).hex()


def from_hex(hex_address: str) -> bytes:
    """Parse a "0x" + 40 hex character address into its 20 bytes."""
    if not isinstance(hex_address, str) or not HEX_ADDRESS_RE.match(hex_address):
        raise AddressFormatError(hex_address, "expected 0x followed by 40 hex characters")
    return bytes.fromhex(hex_address[2:])


def bech32_to_hex(address: str) -> str:
    """
    Convert a bech32 address to its EVM hex form.

    Example:
        bech32_to_hex('cosmos1abc...') => '0x1234...'

    Raises:
        AddressFormatError: If the address does not decode to exactly 20 bytes
    """
    data = decode_bech32(address)
    if len(data) != ADDRESS_LENGTH:
        raise AddressFormatError(address, f"expected {ADDRESS_LENGTH} bytes, got {len(data)}")
    return to_hex(data)


def hex_to_bech32(hex_address: str, prefix: str = "cosmos") -> str:
    """
    Convert an EVM hex address to bech32 under the given prefix.

    Example:
        hex_to_bech32('0x1234...', 'cosmos') => 'cosmos1abc...'
    """
    return encode_bech32(prefix, from_hex(hex_address))


def is_valid_bech32(address: str, prefix: Optional[str] = None) -> bool:
    try:
        decode_bech32(address, prefix)
    except AddressFormatError:
        return False
    return True


def is_valid_hex(address: str) -> bool:
    return isinstance(address, str) and HEX_ADDRESS_RE.match(address) is not None


def shorten_address(address: str, start_chars: int = 10, end_chars: int = 6) -> str:
    """
    Shorten an address for display.

    Example:
        shorten_address('cosmos1abc...xyz', 8, 6) => 'cosmos1a...nsr700'
    """
    if len(address) <= start_chars + end_chars:
        return address
    return f"{address[:start_chars]}...{address[len(address) - end_chars:]}"


def get_address_prefix(address: str) -> str:
    prefix, words = bech32_decode(address) if isinstance(address, str) else (None, None)
    if prefix is None or words is None:
        raise AddressFormatError(address, "invalid bech32 address")
    return prefix
