"""
Auction Phase Resolver.

Derives the phase of a name auction from a snapshot of the registry
contract's timing fields and the current time. The phase is never stored:
it is recomputed from a fresh snapshot on every call so the client and the
contract cannot drift apart.

    NOT_STARTED -> COMMIT -> REVEAL -> PENDING_FINALIZATION -> FINALIZED
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence
import time


class AuctionPhase(IntEnum):
    """Phase of a name auction, in lifecycle order."""
    NOT_STARTED = 0           # No auction for the name
    COMMIT = 1                # Accepting sealed commitments
    REVEAL = 2                # Accepting reveals
    PENDING_FINALIZATION = 3  # Reveal window closed, awaiting finalize()
    FINALIZED = 4             # Winner assigned


@dataclass(frozen=True)
class AuctionSnapshot:
    """Read-only view of an auction as reported by the contract."""
    exists: bool
    finalized: bool
    commit_end: int   # Unix seconds
    reveal_end: int   # Unix seconds

    @classmethod
    def from_contract(cls, values: Sequence) -> "AuctionSnapshot":
        """Build from the contract's (exists, finalized, commitEnd, revealEnd) tuple."""
        exists, finalized, commit_end, reveal_end = values
        return cls(
            exists=bool(exists),
            finalized=bool(finalized),
            commit_end=int(commit_end),
            reveal_end=int(reveal_end),
        )

    @classmethod
    def missing(cls) -> "AuctionSnapshot":
        return cls(exists=False, finalized=False, commit_end=0, reveal_end=0)


@dataclass(frozen=True)
class PhaseStatus:
    phase: AuctionPhase
    time_remaining: int

    @property
    def can_commit(self) -> bool:
        return self.phase == AuctionPhase.COMMIT

    @property
    def can_reveal(self) -> bool:
        return self.phase == AuctionPhase.REVEAL

    @property
    def can_finalize(self) -> bool:
        return self.phase == AuctionPhase.PENDING_FINALIZATION


def resolve_phase(snapshot: AuctionSnapshot, now: Optional[int] = None) -> PhaseStatus:
    """
    Resolve the phase and time remaining of an auction.
    
    Args:
        snapshot: Contract snapshot of the auction
        now: Current Unix time in seconds (defaults to the wall clock)
        
    Returns:
        PhaseStatus with the phase and seconds left in it
    """
    if now is None:
        now = int(time.time())

    if not snapshot.exists:
        return PhaseStatus(AuctionPhase.NOT_STARTED, 0)

    if snapshot.finalized:
        return PhaseStatus(AuctionPhase.FINALIZED, 0)

    if now < snapshot.commit_end:
        return PhaseStatus(AuctionPhase.COMMIT, max(snapshot.commit_end - now, 0))

    if now < snapshot.reveal_end:
        return PhaseStatus(AuctionPhase.REVEAL, max(snapshot.reveal_end - now, 0))

    return PhaseStatus(AuctionPhase.PENDING_FINALIZATION, 0)


def format_duration(seconds: int) -> str:
    """Render a countdown, e.g. 3723 -> "1h 02m 03s"."""
    seconds = max(int(seconds), 0)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes:02d}m {secs:02d}s"
    if minutes:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"
