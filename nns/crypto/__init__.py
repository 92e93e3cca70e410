"""
Cryptographic primitives for NNS.

This module provides:
- Keccak-256 hashing (the registry contract's keccak256)
- Hex and address conversion helpers
- Contract ABI encoding (nns.crypto.abi)
- Bid secret generation (nns.crypto.secret)

Design Notes:
-------------
Keccak-256 here is the original Keccak padding used by the EVM, not the
standardized SHA3-256. The two produce different digests for the same
input, and only Keccak matches the contract.
"""

import re

from Crypto.Hash import keccak


# =============================================================================
# Constants
# =============================================================================

ADDRESS_SIZE = 20
HASH_SIZE = 32

_ADDRESS_RE = re.compile(r"^(0x)?[0-9a-fA-F]{40}$")


# =============================================================================
# Hashing
# =============================================================================


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash (Ethereum-style).
    
    Used for: bid commitments, text secret derivation.
    """
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


# =============================================================================
# Utility Functions
# =============================================================================


def bytes_to_hex(data: bytes) -> str:
    """Convert bytes to hex string with 0x prefix."""
    return "0x" + data.hex()


def hex_to_bytes(hex_str: str) -> bytes:
    """Convert hex string (with or without 0x prefix) to bytes."""
    if hex_str.startswith("0x") or hex_str.startswith("0X"):
        hex_str = hex_str[2:]
    return bytes.fromhex(hex_str)


def is_valid_address(address: str) -> bool:
    """Check if string is 40 hex chars, optionally 0x-prefixed."""
    return isinstance(address, str) and _ADDRESS_RE.match(address) is not None


def address_to_bytes(address) -> bytes:
    """
    Normalize an address to its 20 raw bytes.
    
    Args:
        address: 20 raw bytes, or a hex string with or without 0x prefix
        
    Returns:
        20-byte address
        
    Raises:
        ValueError: If the value is not a well-formed address
    """
    if isinstance(address, (bytes, bytearray)):
        if len(address) != ADDRESS_SIZE:
            raise ValueError(f"Address must be {ADDRESS_SIZE} bytes, got {len(address)}")
        return bytes(address)
    if not is_valid_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    return hex_to_bytes(address)


from nns.crypto.secret import (
    random_secret,
    random_memorable_text,
    derive_secret_bytes,
    new_secret_pair,
    SECRET_WORDS,
)
