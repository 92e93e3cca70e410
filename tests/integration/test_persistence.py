import pytest

from nns.core.auction import (
    AuctionSnapshot,
    AuctionPhase,
    resolve_phase,
    reveal_args,
    verify_commitment,
)
from nns.core.ledger import BidLedger, LoadStatus
from nns.core.recipient import classify
from nns.core.storage import open_store
from nns.crypto import new_secret_pair
from nns.utils.units import parse_ether


BIDDER = "0x5b38da6a701c568545dcfcb03fcb875f56beddc4"


@pytest.fixture
def temp_data_dir(tmp_path):
    """Create a temporary directory for client data."""
    data_dir = tmp_path / "client_data"
    data_dir.mkdir()
    return data_dir


def test_ledger_survives_restart(temp_data_dir):
    """Bids recorded by one process are visible to the next."""
    # 1. First session records bids
    store_a = open_store(temp_data_dir)
    ledger_a = BidLedger(store_a)
    
    first = ledger_a.record_bid("alice.ntu", parse_ether("0.5"), BIDDER)
    best = ledger_a.record_bid("alice.ntu", parse_ether("1.5"), BIDDER)
    ledger_a.record_bid("bob.ntu", parse_ether("3"), BIDDER)
    
    store_a.close()
    del ledger_a
    del store_a
    
    # 2. Second session reads them back
    ledger_b = BidLedger(open_store(temp_data_dir))
    
    assert ledger_b.list_for("alice.ntu") == [first, best]
    assert ledger_b.highest_for("alice.ntu") == best
    assert len(ledger_b) == 3
    
    # 3. Reveal from the recovered record
    args = reveal_args(ledger_b.highest_for("alice.ntu"), bidder=BIDDER)
    assert verify_commitment(best.commitment, args.name, args.bid_amount, args.secret, BIDDER)


def test_full_bid_cycle(temp_data_dir):
    """Commit during the commit phase, reveal the best bid afterwards."""
    snapshot = AuctionSnapshot.from_contract((True, False, 1000, 2000))
    ledger = BidLedger(open_store(temp_data_dir))
    
    assert resolve_phase(snapshot, 100).can_commit
    
    text, secret = new_secret_pair()
    low = ledger.record_bid("carol.ntu", 10, BIDDER, secret_text=text, secret_bytes=secret)
    high = ledger.record_bid("carol.ntu", 20, BIDDER)
    
    # Contract reports both commitments plus one made elsewhere
    foreign = b"\x07" * 32
    matched = ledger.match_commitments([low.commitment, high.commitment, foreign])
    assert matched[low.commitment] == low
    assert matched[foreign] is None
    
    status = resolve_phase(snapshot, 1500)
    assert status.phase == AuctionPhase.REVEAL
    assert reveal_args(ledger.highest_for("carol.ntu")).bid_amount == 20
    
    # Cancelled commitment is dropped locally
    ledger.remove(low.commitment)
    assert ledger.list_for("carol.ntu") == [high]
    
    assert resolve_phase(snapshot, 2000).can_finalize
    assert classify("carol.ntu").is_name


def test_corrupt_store_recovers_across_restart(temp_data_dir):
    """Corrupt persisted data reads as empty and is replaced by the next bid."""
    store = open_store(temp_data_dir)
    store.put("nns_bids", b'[{"auction_id": "alice.ntu", "bid_amount": ')
    store.close()
    
    ledger = BidLedger(open_store(temp_data_dir))
    assert ledger.load().status == LoadStatus.CORRUPT
    assert ledger.highest_for("alice.ntu") is None
    
    record = ledger.record_bid("alice.ntu", 1, BIDDER)
    
    reopened = BidLedger(open_store(temp_data_dir))
    assert reopened.load().status == LoadStatus.OK
    assert reopened.all() == [record]


def test_garbage_database_file_reads_as_empty(temp_data_dir):
    """A database file that is not SQLite at all is moved aside, not fatal."""
    db_path = temp_data_dir / "nns.db"
    db_path.write_bytes(b"this is not a sqlite database at all" * 50)
    
    ledger = BidLedger(open_store(temp_data_dir))
    assert ledger.all() == []
    assert (temp_data_dir / "nns.db.corrupt").exists()
    
    record = ledger.record_bid("alice.ntu", 1, BIDDER)
    assert BidLedger(open_store(temp_data_dir)).all() == [record]
