"""
Bid secret generation.

A bid secret is always 32 bytes by the time it enters a commitment.
It either comes straight from the OS CSPRNG, or is derived from a
memorable text by Keccak-256 so the bidder can re-type it at reveal time.
"""

import secrets
from typing import Tuple

from nns.crypto import keccak256, HASH_SIZE


SECRET_WORDS = (
    "alpha", "beta", "gamma", "delta",
    "epsilon", "zeta", "theta", "lambda",
)

# Exclusive upper bound of the numeric suffix
SUFFIX_LIMIT = 10000


def random_secret() -> bytes:
    """Generate 32 cryptographically secure random bytes."""
    return secrets.token_bytes(HASH_SIZE)


def random_memorable_text() -> str:
    """
    Generate a human-memorable secret text, e.g. "alpha-beta-4821".

    Only as strong as its small keyspace; the hashing step in
    derive_secret_bytes is what turns it into a commitment input.
    """
    first = secrets.choice(SECRET_WORDS)
    second = secrets.choice(SECRET_WORDS)
    number = secrets.randbelow(SUFFIX_LIMIT)
    return f"{first}-{second}-{number}"


def derive_secret_bytes(text: str) -> bytes:
    """Hash the UTF-8 encoding of text to a 32-byte secret."""
    return keccak256(text.encode("utf-8"))


def new_secret_pair() -> Tuple[str, bytes]:
    """Return a fresh (secret_text, secret_bytes) pair."""
    text = random_memorable_text()
    return text, derive_secret_bytes(text)
