"""
Contract ABI encoding for commitment inputs.

Implements the subset of Solidity's abi.encode needed to hash
(string, uint256, bytes32, address) exactly as the registry contract does:

    head:  one 32-byte slot per argument
           - dynamic types (string) hold the byte offset of their tail
           - static types hold their value
    tail:  for each dynamic argument, uint256 length followed by the
           data right-padded with zeros to a multiple of 32 bytes

Each field type has its own encoder. The field order and widths are
frozen under ENCODING_VERSION; changing either breaks every stored bid
and requires a version bump.
"""

from typing import List, Sequence, Tuple

from nns.crypto import ADDRESS_SIZE, HASH_SIZE, address_to_bytes


ENCODING_VERSION = 1

WORD_SIZE = 32
MAX_UINT256 = 2**256 - 1

# Field layout of the commitment preimage under ENCODING_VERSION
COMMITMENT_LAYOUT = ("string", "uint256", "bytes32", "address")


# =============================================================================
# Per-field encoders
# =============================================================================


def encode_uint256(value: int) -> bytes:
    """Encode an unsigned 256-bit integer as one big-endian word."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"uint256 must be int, got {type(value).__name__}")
    if value < 0 or value > MAX_UINT256:
        raise ValueError(f"uint256 out of range: {value}")
    return value.to_bytes(WORD_SIZE, "big")


def encode_bytes32(value: bytes) -> bytes:
    """Encode a fixed 32-byte value as-is."""
    if not isinstance(value, (bytes, bytearray)) or len(value) != HASH_SIZE:
        raise ValueError(f"bytes32 must be exactly {HASH_SIZE} bytes")
    return bytes(value)


def encode_address(value) -> bytes:
    """Encode a 20-byte address right-aligned in one word."""
    raw = address_to_bytes(value)
    return b"\x00" * (WORD_SIZE - ADDRESS_SIZE) + raw


def encode_string_tail(value: str) -> bytes:
    """Encode the tail of a dynamic string: length word plus padded UTF-8 data."""
    if not isinstance(value, str):
        raise ValueError(f"string must be str, got {type(value).__name__}")
    data = value.encode("utf-8")
    padding = (-len(data)) % WORD_SIZE
    return encode_uint256(len(data)) + data + b"\x00" * padding


# =============================================================================
# Tuple encoding
# =============================================================================

_STATIC_ENCODERS = {
    "uint256": encode_uint256,
    "bytes32": encode_bytes32,
    "address": encode_address,
}

_DYNAMIC_ENCODERS = {
    "string": encode_string_tail,
}


def encode(types: Sequence[str], values: Sequence) -> bytes:
    """
    ABI-encode a tuple of values.
    
    Args:
        types: Solidity type names, one per value
        values: Values to encode
        
    Returns:
        Concatenated head and tail bytes
    """
    if len(types) != len(values):
        raise ValueError(f"Expected {len(types)} values, got {len(values)}")

    head_size = WORD_SIZE * len(types)
    heads: List[bytes] = []
    tails: List[bytes] = []
    tail_offset = head_size

    for abi_type, value in zip(types, values):
        if abi_type in _STATIC_ENCODERS:
            heads.append(_STATIC_ENCODERS[abi_type](value))
        elif abi_type in _DYNAMIC_ENCODERS:
            tail = _DYNAMIC_ENCODERS[abi_type](value)
            heads.append(encode_uint256(tail_offset))
            tails.append(tail)
            tail_offset += len(tail)
        else:
            raise ValueError(f"Unsupported ABI type: {abi_type}")

    return b"".join(heads) + b"".join(tails)


def encode_commitment_preimage(
    name: str,
    bid_amount: int,
    secret: bytes,
    bidder,
) -> bytes:
    """Encode the commitment inputs in COMMITMENT_LAYOUT order."""
    return encode(COMMITMENT_LAYOUT, (name, bid_amount, secret, bidder))


def split_words(data: bytes) -> List[Tuple[int, bytes]]:
    """Split encoded data into (offset, word) pairs, for inspection."""
    return [(i, data[i:i + WORD_SIZE]) for i in range(0, len(data), WORD_SIZE)]
