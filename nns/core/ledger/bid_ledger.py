"""
Bid Ledger - durable local record of sealed bids.

Every commitment the bidder submits is stored together with the plaintext
needed to reveal it later (name, amount, secret). The ledger is a
convenience cache: the registry contract remains the source of truth for
what was committed, so unreadable persisted data is treated as an empty
ledger instead of an error.

Records are kept as one JSON array under a single key of the injected
store. Every store() appends; nothing is deduplicated, since committing
twice to the same auction is a legitimate way to lock more value.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Annotated, Dict, Iterable, List, Optional
import sqlite3
import time

from pydantic import (
    BaseModel,
    ConfigDict,
    PlainSerializer,
    PlainValidator,
    TypeAdapter,
)

from nns.core.auction.commitment import make_commitment
from nns.core.storage import KeyValueStore
from nns.crypto import bytes_to_hex, hex_to_bytes, HASH_SIZE
from nns.crypto.abi import MAX_UINT256
from nns.crypto.secret import derive_secret_bytes, new_secret_pair
from nns.utils.logger import get_logger

logger = get_logger("ledger")


DEFAULT_LEDGER_KEY = "nns_bids"


# =============================================================================
# Field types
# =============================================================================


def _parse_bytes32(value) -> bytes:
    if isinstance(value, str):
        value = hex_to_bytes(value)
    if not isinstance(value, (bytes, bytearray)):
        raise ValueError(f"expected 32 bytes, got {type(value).__name__}")
    if len(value) != HASH_SIZE:
        raise ValueError(f"expected {HASH_SIZE} bytes, got {len(value)}")
    return bytes(value)


def _parse_uint256(value) -> int:
    if isinstance(value, bool):
        raise ValueError("bid amount must be an integer")
    if isinstance(value, str):
        if not value.isdigit():
            raise ValueError(f"bid amount must be a decimal string, got {value!r}")
        value = int(value)
    if not isinstance(value, int):
        raise ValueError(f"bid amount must be an integer, got {type(value).__name__}")
    if value < 0 or value > MAX_UINT256:
        raise ValueError(f"bid amount out of uint256 range: {value}")
    return value


Bytes32 = Annotated[
    bytes,
    PlainValidator(_parse_bytes32),
    PlainSerializer(bytes_to_hex, return_type=str, when_used="json"),
]

# Persisted as a decimal string: 256-bit values exceed double precision
Uint256 = Annotated[
    int,
    PlainValidator(_parse_uint256),
    PlainSerializer(str, return_type=str, when_used="json"),
]


class BidRecord(BaseModel):
    """
    One sealed bid, with everything needed to reveal it.
    
    Attributes:
        auction_id: Name being bid on (e.g. "alice.ntu")
        bid_amount: Bid in wei
        secret_text: Human-readable secret, empty if raw bytes were used
        secret_bytes: 32-byte secret that entered the commitment
        commitment: 32-byte commitment submitted to the contract
        created_at: Creation time in milliseconds
    """
    model_config = ConfigDict(frozen=True)

    auction_id: str
    bid_amount: Uint256
    secret_text: str = ""
    secret_bytes: Bytes32
    commitment: Bytes32
    created_at: int


_RECORDS = TypeAdapter(List[BidRecord])


# =============================================================================
# Load result
# =============================================================================


class LoadStatus(IntEnum):
    """Outcome of reading the persisted ledger."""
    EMPTY = 0     # Nothing stored yet
    OK = 1        # Parsed successfully
    CORRUPT = 2   # Stored data could not be parsed


@dataclass
class LoadResult:
    status: LoadStatus
    records: List[BidRecord] = field(default_factory=list)
    error: str = ""

    @property
    def is_corrupt(self) -> bool:
        return self.status == LoadStatus.CORRUPT


def decode_records(raw: Optional[bytes]) -> LoadResult:
    """Parse persisted ledger bytes without raising."""
    if raw is None:
        return LoadResult(LoadStatus.EMPTY)
    try:
        records = _RECORDS.validate_json(raw)
    except ValueError as e:
        return LoadResult(LoadStatus.CORRUPT, error=str(e))
    return LoadResult(LoadStatus.OK, records)


def encode_records(records: Iterable[BidRecord]) -> bytes:
    return _RECORDS.dump_json(list(records))


# =============================================================================
# Bid Ledger
# =============================================================================


class BidLedger:
    """
    Append-only ledger of bid records over a scoped key-value store.
    
    Assumes a single writer per store scope: operations are
    read-modify-write against the store without locking.
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_LEDGER_KEY):
        self.backend = store
        self.key = key

    # =========================================================================
    # Persistence
    # =========================================================================

    def load(self) -> LoadResult:
        """Read the persisted ledger, distinguishing empty from corrupt."""
        try:
            raw = self.backend.get(self.key)
        except (sqlite3.DatabaseError, OSError) as e:
            return LoadResult(LoadStatus.CORRUPT, error=f"store unreadable: {e}")
        return decode_records(raw)

    def _read(self) -> List[BidRecord]:
        result = self.load()
        if result.is_corrupt:
            logger.warning(f"Bid ledger '{self.key}' is unreadable, treating as empty: "
                           f"{result.error.splitlines()[0] if result.error else 'unknown error'}")
        return result.records

    def _write(self, records: List[BidRecord]) -> None:
        self.backend.put(self.key, encode_records(records))

    # =========================================================================
    # Operations
    # =========================================================================

    def store(self, record: BidRecord) -> None:
        """Append a record. Never overwrites an existing one."""
        records = self._read()
        records.append(record)
        self._write(records)
        logger.debug(f"Stored bid for {record.auction_id}: "
                     f"commitment {bytes_to_hex(record.commitment)[:18]}...")

    def list_for(self, auction_id: str) -> List[BidRecord]:
        """All records for an auction, in insertion order."""
        return [r for r in self._read() if r.auction_id == auction_id]

    def highest_for(self, auction_id: str) -> Optional[BidRecord]:
        """
        Highest bid for an auction.
        
        Ties keep the earliest-inserted record.
        """
        highest = None
        for record in self.list_for(auction_id):
            if highest is None or record.bid_amount > highest.bid_amount:
                highest = record
        return highest

    def remove(self, commitment: bytes) -> None:
        """Delete every record with this commitment, across all auctions."""
        records = self._read()
        kept = [r for r in records if r.commitment != commitment]
        if len(kept) == len(records):
            return
        self._write(kept)
        logger.debug(f"Removed {len(records) - len(kept)} bid(s) with commitment "
                     f"{bytes_to_hex(commitment)[:18]}...")

    def clear(self) -> None:
        """Delete all records."""
        self.backend.delete(self.key)
        logger.info(f"Cleared bid ledger '{self.key}'")

    # =========================================================================
    # Queries
    # =========================================================================

    def all(self) -> List[BidRecord]:
        """Every record, in insertion order."""
        return self._read()

    def find(self, commitment: bytes) -> Optional[BidRecord]:
        """First record with this commitment."""
        for record in self._read():
            if record.commitment == commitment:
                return record
        return None

    def match_commitments(self, commitments: Iterable[bytes]) -> Dict[bytes, Optional[BidRecord]]:
        """
        Match commitments reported by the contract to local records.
        
        Commitments without a local record map to None: their secret is
        not known to this installation and they cannot be revealed here.
        """
        by_commitment: Dict[bytes, BidRecord] = {}
        for record in self._read():
            by_commitment.setdefault(record.commitment, record)
        return {c: by_commitment.get(c) for c in commitments}

    def __len__(self) -> int:
        return len(self._read())

    # =========================================================================
    # Bidding
    # =========================================================================

    def record_bid(
        self,
        auction_id: str,
        bid_amount: int,
        bidder,
        secret_text: Optional[str] = None,
        secret_bytes: Optional[bytes] = None,
    ) -> BidRecord:
        """
        Create, store and return a new bid record.
        
        Args:
            auction_id: Name being bid on
            bid_amount: Bid in wei
            bidder: Bidder address (raw or hex)
            secret_text: Memorable secret; generated when neither secret is given
            secret_bytes: Raw 32-byte secret, used as-is
            
        Returns:
            The stored record; its commitment is what to submit on-chain
        """
        if secret_text is None and secret_bytes is None:
            secret_text, secret_bytes = new_secret_pair()
        elif secret_bytes is None:
            secret_bytes = derive_secret_bytes(secret_text)
        elif secret_text is None:
            secret_text = ""
        elif derive_secret_bytes(secret_text) != secret_bytes:
            raise ValueError("secret_text does not hash to secret_bytes")

        commitment = make_commitment(auction_id, bid_amount, secret_bytes, bidder)

        records = self._read()
        now_ms = int(time.time() * 1000)
        last = max((r.created_at for r in records), default=-1)

        record = BidRecord(
            auction_id=auction_id,
            bid_amount=bid_amount,
            secret_text=secret_text,
            secret_bytes=secret_bytes,
            commitment=commitment,
            created_at=max(now_ms, last + 1),
        )
        records.append(record)
        self._write(records)

        logger.info(f"Recorded bid on {auction_id}: {bid_amount} wei, "
                    f"commitment {bytes_to_hex(commitment)[:18]}...")
        return record
