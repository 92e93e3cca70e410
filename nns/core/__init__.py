"""Core bidder components."""
