"""
Bid Ledger Module.

Durable client-side record of sealed bids, used to rebuild
reveal arguments after a restart.
"""

from nns.core.ledger.bid_ledger import (
    BidLedger,
    BidRecord,
    LoadResult,
    LoadStatus,
    decode_records,
    encode_records,
    DEFAULT_LEDGER_KEY,
)

__all__ = [
    "BidLedger",
    "BidRecord",
    "LoadResult",
    "LoadStatus",
    "decode_records",
    "encode_records",
    "DEFAULT_LEDGER_KEY",
]
