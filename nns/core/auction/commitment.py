"""
Commitment Engine - sealed-bid hashes for name auctions.

A commitment binds a bidder to (name, bid_amount, secret) without revealing
them until the reveal phase:

    C = keccak256(abi.encode(name, bid_amount, secret, bidder))

The registry contract recomputes C from the revealed fields and compares it
with the value submitted during the commit phase. Any divergence in field
order, padding or hash function makes the bid unrevealable, so the encoding
lives in nns.crypto.abi under a fixed ENCODING_VERSION.
"""

from dataclasses import dataclass

from nns.crypto import keccak256, bytes_to_hex, address_to_bytes
from nns.crypto.abi import encode_commitment_preimage, ENCODING_VERSION
from nns.utils.logger import get_logger

logger = get_logger("commitment")


class CommitmentMismatchError(ValueError):
    """
    A commitment does not match its recomputation from the bid fields.
    
    Fatal to the affected bid: revealing it would fail on-chain.
    """

    def __init__(self, expected: bytes, actual: bytes, name: str = ""):
        self.expected = expected
        self.actual = actual
        self.name = name
        super().__init__(
            f"Commitment mismatch for {name or 'bid'}: "
            f"expected {bytes_to_hex(expected)}, got {bytes_to_hex(actual)} "
            f"(encoding v{ENCODING_VERSION})"
        )


def make_commitment(
    name: str,
    bid_amount: int,
    secret: bytes,
    bidder,
) -> bytes:
    """
    Compute a bid commitment.
    
    Args:
        name: Name being bid on (e.g. "alice.ntu")
        bid_amount: Bid in wei (0 <= bid_amount < 2**256)
        secret: 32-byte secret
        bidder: 20-byte address, raw or hex
        
    Returns:
        32-byte commitment
    """
    return keccak256(encode_commitment_preimage(name, bid_amount, secret, bidder))


def verify_commitment(
    commitment: bytes,
    name: str,
    bid_amount: int,
    secret: bytes,
    bidder,
) -> bool:
    """Check that commitment recomputes from the given fields."""
    return make_commitment(name, bid_amount, secret, bidder) == commitment


def ensure_commitment(
    commitment: bytes,
    name: str,
    bid_amount: int,
    secret: bytes,
    bidder,
) -> None:
    """
    Raise CommitmentMismatchError unless commitment recomputes.
    
    Call before locking funds or submitting a reveal.
    """
    expected = make_commitment(name, bid_amount, secret, bidder)
    if expected != commitment:
        logger.error(f"Commitment mismatch for {name}: "
                     f"expected {bytes_to_hex(expected)[:18]}..., "
                     f"got {bytes_to_hex(commitment)[:18]}...")
        raise CommitmentMismatchError(expected, commitment, name)


# =============================================================================
# Reveal
# =============================================================================


@dataclass(frozen=True)
class RevealArgs:
    """Arguments of the contract's revealBid(name, bidAmount, secret) call."""
    name: str
    bid_amount: int
    secret: bytes

    def as_tuple(self):
        return (self.name, self.bid_amount, self.secret)


def reveal_args(record, bidder=None) -> RevealArgs:
    """
    Build reveal arguments from a stored bid record.
    
    Args:
        record: BidRecord from the bid ledger
        bidder: When given, the record's commitment is checked against it
            first and CommitmentMismatchError is raised on divergence
    """
    if bidder is not None:
        ensure_commitment(
            record.commitment,
            record.auction_id,
            record.bid_amount,
            record.secret_bytes,
            address_to_bytes(bidder),
        )
    return RevealArgs(
        name=record.auction_id,
        bid_amount=record.bid_amount,
        secret=record.secret_bytes,
    )
