"""
NNS Auction Module.

This module provides the bidder side of the blind name auction:
- Commitment computation matching the registry contract
- Reveal argument reconstruction
- Phase resolution from contract timestamps
"""

from nns.core.auction.commitment import (
    make_commitment,
    verify_commitment,
    ensure_commitment,
    reveal_args,
    RevealArgs,
    CommitmentMismatchError,
)

from nns.core.auction.phase import (
    AuctionPhase,
    AuctionSnapshot,
    PhaseStatus,
    resolve_phase,
    format_duration,
)

__all__ = [
    # Commitments
    "make_commitment",
    "verify_commitment",
    "ensure_commitment",
    "reveal_args",
    "RevealArgs",
    "CommitmentMismatchError",
    # Phases
    "AuctionPhase",
    "AuctionSnapshot",
    "PhaseStatus",
    "resolve_phase",
    "format_duration",
]
