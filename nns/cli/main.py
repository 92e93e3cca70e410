"""
NNS CLI - Command Line Interface for the NNS bidder core

Main entry point for all CLI commands.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click

from nns.core.config import load_config, apply_config
from nns.utils.logger import setup_logging, get_logger

logger = get_logger("cli")


def _open_ledger(ctx):
    from nns.core.ledger import BidLedger
    from nns.core.storage import open_store

    cfg = ctx.obj["config"]
    store = open_store(cfg.data_dir, cfg.db_name)
    return BidLedger(store, key=cfg.ledger_key)


def _parse_hex32(value: str, label: str) -> bytes:
    from nns.crypto import hex_to_bytes

    try:
        raw = hex_to_bytes(value)
    except ValueError:
        raise click.BadParameter(f"{label} must be hex") from None
    if len(raw) != 32:
        raise click.BadParameter(f"{label} must be 32 bytes, got {len(raw)}")
    return raw


def _echo_record(record, index: Optional[int] = None):
    from nns.crypto import bytes_to_hex
    from nns.utils.units import format_ether

    created = datetime.fromtimestamp(record.created_at / 1000).strftime("%Y-%m-%d %H:%M:%S")
    prefix = f"  {index}. " if index is not None else "  "
    click.echo(f"{prefix}{record.auction_id}  {format_ether(record.bid_amount)} ETH  ({created})")
    click.echo(f"     Commitment: {bytes_to_hex(record.commitment)}")
    if record.secret_text:
        click.echo(f"     Secret text: {record.secret_text}")
    click.echo(f"     Secret: {bytes_to_hex(record.secret_bytes)}")


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--data-dir", default=None, help="Data directory (default: NNS_DATA_DIR or ~/.nns)")
@click.option("--env-file", default=None, help="Path to a .env file")
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx, debug, data_dir, env_file):
    """NTU Name Service - blind auction bidder tools"""
    import logging

    level = logging.DEBUG if debug else logging.INFO
    setup_logging(level=level)

    cfg = load_config(env_file)
    if data_dir:
        cfg.data_dir = Path(data_dir).expanduser()
    cfg.data_dir.mkdir(parents=True, exist_ok=True)
    apply_config(cfg)

    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


# =============================================================================
# Secret Commands
# =============================================================================

@cli.group()
def secret():
    """Bid secret generation"""
    pass


@secret.command("new")
@click.option("--raw", is_flag=True, help="Random 32 bytes instead of a memorable text")
def secret_new(raw):
    """Generate a new bid secret"""
    from nns.crypto import bytes_to_hex, random_secret, new_secret_pair

    if raw:
        click.echo(bytes_to_hex(random_secret()))
        return

    text, secret_bytes = new_secret_pair()
    click.echo(f"Secret text: {text}")
    click.echo(f"Secret: {bytes_to_hex(secret_bytes)}")


@secret.command("hash")
@click.argument("text")
def secret_hash(text):
    """Derive the 32-byte secret for a secret text"""
    from nns.crypto import bytes_to_hex, derive_secret_bytes

    click.echo(bytes_to_hex(derive_secret_bytes(text)))


# =============================================================================
# Commit Command
# =============================================================================


@cli.command("commit")
@click.argument("name")
@click.argument("amount")
@click.option("--bidder", required=True, help="Bidder address (0x...)")
@click.option("--secret-text", default=None, help="Memorable secret text")
@click.option("--secret", "secret_hex", default=None, help="Raw 32-byte secret (hex)")
@click.option("--dry-run", is_flag=True, help="Compute the commitment without recording it")
@click.option("--show-encoding", is_flag=True, help="Print the encoded preimage words")
@click.pass_context
def commit(ctx, name, amount, bidder, secret_text, secret_hex, dry_run, show_encoding):
    """Compute a commitment for NAME at AMOUNT ether and record the bid"""
    from nns.core.auction import make_commitment
    from nns.crypto import bytes_to_hex, derive_secret_bytes, new_secret_pair
    from nns.crypto.abi import encode_commitment_preimage, split_words
    from nns.utils.units import parse_ether
    from nns.utils.validation import format_domain_name, validate_bid_inputs

    if secret_text is not None and secret_hex is not None:
        raise click.UsageError("Use either --secret-text or --secret, not both")

    name = format_domain_name(name)

    try:
        bid_amount = parse_ether(amount)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="AMOUNT") from None

    if secret_hex is not None:
        secret_bytes = _parse_hex32(secret_hex, "--secret")
    elif secret_text is not None:
        secret_bytes = derive_secret_bytes(secret_text)
    else:
        secret_text, secret_bytes = new_secret_pair()

    valid, err = validate_bid_inputs(name, bid_amount, secret_bytes, bidder)
    if not valid:
        click.echo(f"❌ {err}", err=True)
        sys.exit(1)

    if dry_run:
        commitment = make_commitment(name, bid_amount, secret_bytes, bidder)
    else:
        ledger = _open_ledger(ctx)
        record = ledger.record_bid(
            name,
            bid_amount,
            bidder,
            secret_text=secret_text,
            secret_bytes=secret_bytes,
        )
        commitment = record.commitment

    click.echo(f"Name: {name}")
    click.echo(f"Bid: {bid_amount} wei")
    if secret_text:
        click.echo(f"Secret text: {secret_text}")
    click.echo(f"Secret: {bytes_to_hex(secret_bytes)}")
    click.echo(f"Commitment: {bytes_to_hex(commitment)}")

    if show_encoding:
        click.echo("Encoding:")
        for offset, word in split_words(encode_commitment_preimage(name, bid_amount, secret_bytes, bidder)):
            click.echo(f"  0x{offset:04x}  {word.hex()}")

    if dry_run:
        click.echo("(dry run, not recorded)")
    else:
        click.echo("✓ Bid recorded. Keep the secret until the reveal phase.")


# =============================================================================
# Ledger Commands
# =============================================================================


@cli.group()
def bids():
    """Local bid ledger commands"""
    pass


@bids.command("list")
@click.argument("name", required=False)
@click.pass_context
def bids_list(ctx, name):
    """List recorded bids, optionally for one NAME"""
    from nns.utils.validation import format_domain_name

    ledger = _open_ledger(ctx)
    records = ledger.list_for(format_domain_name(name)) if name else ledger.all()

    if not records:
        click.echo("No bids recorded.")
        return

    for i, record in enumerate(records, start=1):
        _echo_record(record, i)


@bids.command("highest")
@click.argument("name")
@click.option("--bidder", default=None, help="Verify the commitment against this address")
@click.pass_context
def bids_highest(ctx, name, bidder):
    """Show reveal arguments for the highest bid on NAME"""
    from nns.core.auction import reveal_args, CommitmentMismatchError
    from nns.crypto import bytes_to_hex
    from nns.utils.validation import format_domain_name

    ledger = _open_ledger(ctx)
    record = ledger.highest_for(format_domain_name(name))
    if record is None:
        click.echo(f"No bids recorded for {format_domain_name(name)}.")
        return

    try:
        args = reveal_args(record, bidder=bidder)
    except CommitmentMismatchError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    _echo_record(record)
    click.echo("Reveal with:")
    click.echo(f"  name:      {args.name}")
    click.echo(f"  bidAmount: {args.bid_amount}")
    click.echo(f"  secret:    {bytes_to_hex(args.secret)}")


@bids.command("remove")
@click.argument("commitment")
@click.pass_context
def bids_remove(ctx, commitment):
    """Remove every bid with COMMITMENT"""
    ledger = _open_ledger(ctx)
    raw = _parse_hex32(commitment, "COMMITMENT")
    before = len(ledger)
    ledger.remove(raw)
    click.echo(f"Removed {before - len(ledger)} bid(s).")


@bids.command("clear")
@click.confirmation_option(prompt="Delete all recorded bids and their secrets?")
@click.pass_context
def bids_clear(ctx):
    """Delete all recorded bids"""
    _open_ledger(ctx).clear()
    click.echo("Bid ledger cleared.")


@bids.command("check")
@click.pass_context
def bids_check(ctx):
    """Check that the persisted ledger is readable"""
    from nns.core.ledger import LoadStatus

    result = _open_ledger(ctx).load()
    if result.status == LoadStatus.CORRUPT:
        click.echo(f"❌ Ledger is corrupt: {result.error.splitlines()[0]}")
        sys.exit(1)
    click.echo(f"✓ Ledger {result.status.name.lower()}: {len(result.records)} bid(s)")


# =============================================================================
# Phase & Classification Commands
# =============================================================================


@cli.command("phase")
@click.option("--commit-end", type=int, default=0, help="Commit phase end (unix seconds)")
@click.option("--reveal-end", type=int, default=0, help="Reveal phase end (unix seconds)")
@click.option("--finalized", is_flag=True, help="Auction already finalized")
@click.option("--missing", is_flag=True, help="No auction exists for the name")
@click.option("--now", type=int, default=None, help="Current time (unix seconds)")
def phase(commit_end, reveal_end, finalized, missing, now):
    """Resolve the phase of an auction from its contract timestamps"""
    from nns.core.auction import AuctionSnapshot, resolve_phase, format_duration

    if missing:
        snapshot = AuctionSnapshot.missing()
    else:
        snapshot = AuctionSnapshot(
            exists=True,
            finalized=finalized,
            commit_end=commit_end,
            reveal_end=reveal_end,
        )

    status = resolve_phase(snapshot, now)
    click.echo(f"Phase: {status.phase.name}")
    if status.time_remaining:
        click.echo(f"Time remaining: {format_duration(status.time_remaining)}")


@cli.command("classify")
@click.argument("recipient")
def classify_cmd(recipient):
    """Classify RECIPIENT as an address, a name, or unknown"""
    from nns.core.recipient import classify

    ref = classify(recipient)
    click.echo(f"{ref.kind.value}: {ref.value}")


@cli.group()
def name():
    """Name rule commands"""
    pass


@name.command("check")
@click.argument("domain")
def name_check(domain):
    """Check DOMAIN against the registry's name rules"""
    from nns.utils.validation import validate_domain_name

    valid, err = validate_domain_name(domain)
    if valid:
        click.echo(f"✓ {domain.strip()} is a valid name")
    else:
        click.echo(f"❌ {err}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
