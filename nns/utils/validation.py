"""
Input Validation - checks for bid inputs and name rules.

Validators return (is_valid, error_message) so callers can surface the
message directly. Name rules mirror the registry contract's checks, so a
name rejected here would also be rejected on-chain.
"""

from typing import Tuple, Any, Optional

from nns.core.config import config
from nns.crypto import ADDRESS_SIZE, HASH_SIZE, is_valid_address
from nns.crypto.abi import MAX_UINT256

# =============================================================================
# Constants
# =============================================================================

MIN_AMOUNT = 0
MAX_AMOUNT = MAX_UINT256


# =============================================================================
# Validation Functions
# =============================================================================


def validate_bytes(
    data: Any,
    name: str,
    expected_length: Optional[int] = None,
) -> Tuple[bool, str]:
    """
    Validate bytes input.
    
    Args:
        data: Data to validate
        name: Field name for error messages
        expected_length: Exact expected length
        
    Returns:
        (is_valid, error_message)
    """
    if not isinstance(data, (bytes, bytearray)):
        return False, f"{name} must be bytes, got {type(data).__name__}"
    
    if expected_length is not None and len(data) != expected_length:
        return False, f"{name} must be {expected_length} bytes, got {len(data)}"
    
    return True, ""


def validate_hash(hash_value: Any, name: str = "hash") -> Tuple[bool, str]:
    """Validate a 32-byte value (secret or commitment)."""
    return validate_bytes(hash_value, name, expected_length=HASH_SIZE)


def validate_address(address: Any) -> Tuple[bool, str]:
    """Validate an address given as 20 raw bytes or a hex string."""
    if isinstance(address, str):
        if is_valid_address(address):
            return True, ""
        return False, "address must be 40 hex characters, optionally 0x-prefixed"
    return validate_bytes(address, "address", expected_length=ADDRESS_SIZE)


def validate_amount(amount: Any) -> Tuple[bool, str]:
    """Validate a bid amount in wei."""
    if not isinstance(amount, int) or isinstance(amount, bool):
        return False, f"amount must be int, got {type(amount).__name__}"
    
    if amount < MIN_AMOUNT:
        return False, f"amount must be >= {MIN_AMOUNT}, got {amount}"
    
    if amount > MAX_AMOUNT:
        return False, "amount exceeds uint256 range"
    
    return True, ""


# =============================================================================
# Name Rules
# =============================================================================


def validate_domain_name(domain: Any) -> Tuple[bool, str]:
    """
    Validate a name against the registry's rules.
    
    - Must be at least min_name_length characters
    - Must be at most max_name_length characters
    - Must end with the name suffix, with a label before it
    """
    if not isinstance(domain, str):
        return False, f"Domain name must be str, got {type(domain).__name__}"

    trimmed = domain.strip()
    suffix = config.name_suffix

    if not trimmed:
        return False, "Domain name cannot be empty"

    if len(trimmed) < config.min_name_length:
        return False, f"Domain name is too short (minimum {config.min_name_length} characters)"

    if len(trimmed) > config.max_name_length:
        return False, f"Domain name is too long (maximum {config.max_name_length} characters)"

    if not trimmed.endswith(suffix):
        return False, f"Domain must end with {suffix}"

    if not trimmed[:-len(suffix)]:
        return False, f"Domain name cannot be just {suffix}"

    return True, ""


def format_domain_name(value: str) -> str:
    """Lower-case and trim input, appending the name suffix if missing."""
    trimmed = value.lower().strip()
    if not trimmed:
        return ""
    if trimmed.endswith(config.name_suffix):
        return trimmed
    return f"{trimmed}{config.name_suffix}"


def get_domain_base_name(domain: str) -> str:
    """Strip the name suffix, if present."""
    if domain.endswith(config.name_suffix):
        return domain[:-len(config.name_suffix)]
    return domain


# =============================================================================
# Composite Validators
# =============================================================================


def validate_bid_inputs(
    name: Any,
    bid_amount: Any,
    secret: Any,
    bidder: Any,
) -> Tuple[bool, str]:
    """Validate all commitment inputs before hashing."""
    for valid, err in (
        validate_domain_name(name),
        validate_amount(bid_amount),
        validate_hash(secret, "secret"),
        validate_address(bidder),
    ):
        if not valid:
            return False, err
    return True, ""


# =============================================================================
# Module Exports
# =============================================================================

__all__ = [
    "validate_bytes",
    "validate_hash",
    "validate_address",
    "validate_amount",
    "validate_domain_name",
    "format_domain_name",
    "get_domain_base_name",
    "validate_bid_inputs",
]
