"""
Unit tests for cryptographic primitives.

Tests cover:
1. Keccak-256 hashing
2. Hex and address helpers
3. Bid secret generation
"""

import hashlib

import pytest

from nns.crypto import (
    keccak256,
    bytes_to_hex,
    hex_to_bytes,
    is_valid_address,
    address_to_bytes,
    random_secret,
    random_memorable_text,
    derive_secret_bytes,
    new_secret_pair,
    SECRET_WORDS,
)


class TestKeccak:
    """Tests for Keccak-256."""
    
    def test_empty_input_vector(self):
        """Known digest of the empty string."""
        assert keccak256(b"").hex() == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )
    
    def test_abc_vector(self):
        """Known digest of b'abc'."""
        assert keccak256(b"abc").hex() == (
            "4e03657aea45a94fc7d47ba826c8d667c0d1e6e33a64a036ec44f58fa12d6c45"
        )
    
    def test_differs_from_sha3(self):
        """Keccak padding differs from standardized SHA3-256."""
        assert keccak256(b"abc") != hashlib.sha3_256(b"abc").digest()
    
    def test_output_length(self):
        assert len(keccak256(b"alice.ntu")) == 32


class TestHexHelpers:
    """Tests for hex and address conversion."""
    
    def test_bytes_to_hex_prefix(self):
        assert bytes_to_hex(b"\x01\xff") == "0x01ff"
    
    def test_hex_to_bytes_with_and_without_prefix(self):
        assert hex_to_bytes("0x01ff") == b"\x01\xff"
        assert hex_to_bytes("01ff") == b"\x01\xff"
        assert hex_to_bytes("0X01FF") == b"\x01\xff"
    
    def test_is_valid_address(self):
        assert is_valid_address("0x" + "ab" * 20)
        assert is_valid_address("ab" * 20)
        assert not is_valid_address("0x" + "ab" * 19)
        assert not is_valid_address("0x" + "zz" * 20)
        assert not is_valid_address(None)
        assert not is_valid_address("0X" + "ab" * 20)
    
    def test_address_to_bytes(self):
        raw = bytes(range(20))
        assert address_to_bytes(raw) == raw
        assert address_to_bytes(bytes_to_hex(raw)) == raw
        assert address_to_bytes(raw.hex()) == raw
    
    def test_address_to_bytes_rejects_bad_input(self):
        with pytest.raises(ValueError):
            address_to_bytes(b"\x00" * 19)
        with pytest.raises(ValueError):
            address_to_bytes("not-an-address")
        with pytest.raises(ValueError):
            address_to_bytes("0X" + "ab" * 20)


class TestSecretGenerator:
    """Tests for bid secret generation."""
    
    def test_random_secret_length(self):
        assert len(random_secret()) == 32
    
    def test_random_secrets_differ(self):
        assert random_secret() != random_secret()
    
    def test_memorable_text_format(self):
        text = random_memorable_text()
        first, second, number = text.split("-")
        assert first in SECRET_WORDS
        assert second in SECRET_WORDS
        assert number.isdigit()
        assert 0 <= int(number) < 10000
    
    def test_derive_is_deterministic(self):
        assert derive_secret_bytes("alpha-beta-4821") == derive_secret_bytes("alpha-beta-4821")
    
    def test_derive_differs_for_different_text(self):
        assert derive_secret_bytes("alpha-beta-4821") != derive_secret_bytes("alpha-beta-4822")
    
    def test_derive_is_keccak_of_utf8(self):
        text = "ünïcode-secret"
        assert derive_secret_bytes(text) == keccak256(text.encode("utf-8"))
        assert len(derive_secret_bytes(text)) == 32
    
    def test_new_secret_pair_consistent(self):
        text, secret = new_secret_pair()
        assert derive_secret_bytes(text) == secret
