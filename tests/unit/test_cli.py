"""
Tests for the nns command line.
"""

import pytest
from click.testing import CliRunner

from nns.cli.main import cli
from nns.core.ledger import BidLedger
from nns.core.storage import open_store
from nns.crypto import derive_secret_bytes, bytes_to_hex


BIDDER = "0x" + "11" * 20


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    for var in ("NNS_DATA_DIR", "NNS_LEDGER_KEY", "NNS_DB_NAME", "NNS_NAME_SUFFIX"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path / "nns"


def invoke(runner, data_dir, *args, **kwargs):
    return runner.invoke(cli, ["--data-dir", str(data_dir), *args], **kwargs)


class TestSecretCommands:
    
    def test_secret_new(self, runner, data_dir):
        result = invoke(runner, data_dir, "secret", "new")
        assert result.exit_code == 0
        assert "Secret text:" in result.output
    
    def test_secret_new_raw(self, runner, data_dir):
        result = invoke(runner, data_dir, "secret", "new", "--raw")
        assert result.exit_code == 0
        assert result.output.strip().startswith("0x")
        assert len(result.output.strip()) == 66
    
    def test_secret_hash(self, runner, data_dir):
        result = invoke(runner, data_dir, "secret", "hash", "alpha-beta-1")
        assert result.exit_code == 0
        assert bytes_to_hex(derive_secret_bytes("alpha-beta-1")) in result.output


class TestCommitCommand:
    
    def test_commit_records_bid(self, runner, data_dir):
        result = invoke(runner, data_dir, "commit", "alice", "0.5",
                        "--bidder", BIDDER, "--secret-text", "alpha-beta-1")
        assert result.exit_code == 0, result.output
        assert "Name: alice.ntu" in result.output
        
        ledger = BidLedger(open_store(data_dir))
        records = ledger.list_for("alice.ntu")
        assert len(records) == 1
        assert records[0].bid_amount == 5 * 10**17
        assert bytes_to_hex(records[0].commitment) in result.output
    
    def test_dry_run_does_not_record(self, runner, data_dir):
        result = invoke(runner, data_dir, "commit", "alice.ntu", "1",
                        "--bidder", BIDDER, "--dry-run", "--show-encoding")
        assert result.exit_code == 0, result.output
        assert "dry run" in result.output
        assert "0x0000" in result.output
        assert BidLedger(open_store(data_dir)).all() == []
    
    def test_invalid_bidder(self, runner, data_dir):
        result = invoke(runner, data_dir, "commit", "alice.ntu", "1", "--bidder", "0x12")
        assert result.exit_code == 1
    
    def test_invalid_amount(self, runner, data_dir):
        result = invoke(runner, data_dir, "commit", "alice.ntu", "-1", "--bidder", BIDDER)
        assert result.exit_code != 0
    
    def test_both_secrets_rejected(self, runner, data_dir):
        result = invoke(runner, data_dir, "commit", "alice.ntu", "1", "--bidder", BIDDER,
                        "--secret-text", "x", "--secret", "00" * 32)
        assert result.exit_code != 0


class TestBidsCommands:
    
    @pytest.fixture
    def recorded(self, runner, data_dir):
        for amount in ("1", "2", "2"):
            invoke(runner, data_dir, "commit", "alice.ntu", amount, "--bidder", BIDDER)
        return BidLedger(open_store(data_dir)).all()
    
    def test_list(self, runner, data_dir, recorded):
        result = invoke(runner, data_dir, "bids", "list", "alice.ntu")
        assert result.exit_code == 0
        assert result.output.count("alice.ntu") == 3
    
    def test_list_empty(self, runner, data_dir):
        result = invoke(runner, data_dir, "bids", "list")
        assert "No bids recorded." in result.output
    
    def test_highest(self, runner, data_dir, recorded):
        result = invoke(runner, data_dir, "bids", "highest", "alice.ntu", "--bidder", BIDDER)
        assert result.exit_code == 0, result.output
        assert bytes_to_hex(recorded[1].secret_bytes) in result.output
        assert str(2 * 10**18) in result.output
    
    def test_highest_wrong_bidder(self, runner, data_dir, recorded):
        result = invoke(runner, data_dir, "bids", "highest", "alice.ntu", "--bidder", "0x" + "22" * 20)
        assert result.exit_code == 1
    
    def test_remove(self, runner, data_dir, recorded):
        result = invoke(runner, data_dir, "bids", "remove", bytes_to_hex(recorded[0].commitment))
        assert "Removed 1 bid(s)." in result.output
        assert len(BidLedger(open_store(data_dir)).all()) == 2
    
    def test_clear(self, runner, data_dir, recorded):
        result = invoke(runner, data_dir, "bids", "clear", "--yes")
        assert result.exit_code == 0
        assert BidLedger(open_store(data_dir)).all() == []
    
    def test_check_corrupt(self, runner, data_dir):
        open_store(data_dir).put("nns_bids", b"{broken")
        result = invoke(runner, data_dir, "bids", "check")
        assert result.exit_code == 1
        assert "corrupt" in result.output


class TestPhaseAndClassify:
    
    def test_phase(self, runner, data_dir):
        result = invoke(runner, data_dir, "phase", "--commit-end", "1000",
                        "--reveal-end", "2000", "--now", "1500")
        assert "Phase: REVEAL" in result.output
        assert "8m 20s" in result.output
    
    def test_phase_missing(self, runner, data_dir):
        result = invoke(runner, data_dir, "phase", "--missing")
        assert "Phase: NOT_STARTED" in result.output
    
    def test_classify(self, runner, data_dir):
        result = invoke(runner, data_dir, "classify", "alice.ntu")
        assert "name: alice.ntu" in result.output
    
    def test_name_check(self, runner, data_dir):
        assert invoke(runner, data_dir, "name", "check", "alice.ntu").exit_code == 0
        assert invoke(runner, data_dir, "name", "check", "abc").exit_code == 1
