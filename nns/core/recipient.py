"""
Recipient Classifier.

Sorts a free-form destination string into an address, a name that still
needs resolution through the registry, or unrecognized input. Total:
every input yields a RecipientReference, never an exception.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import re

from nns.core.config import config
from nns.crypto import hex_to_bytes

ADDRESS_PREFIX = "0x"

_ADDRESS_RE = re.compile(r"^(?:0x)?([0-9a-fA-F]{40})$")


class RecipientKind(Enum):
    ADDRESS = "address"
    NAME = "name"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RecipientReference:
    """A classified recipient. ADDRESS values always carry the 0x prefix."""
    kind: RecipientKind
    value: str

    @property
    def is_address(self) -> bool:
        return self.kind == RecipientKind.ADDRESS

    @property
    def is_name(self) -> bool:
        return self.kind == RecipientKind.NAME

    @property
    def address_bytes(self) -> bytes:
        if not self.is_address:
            raise ValueError(f"{self.kind.value} reference has no address")
        return hex_to_bytes(self.value)


def classify(text, name_suffix: Optional[str] = None) -> RecipientReference:
    """
    Classify a recipient string.
    
    Rules, in order:
    1. Names ending in name_suffix (case-insensitive, defaults to
       config.name_suffix) -> NAME
    2. 40 hex digits, optionally 0x-prefixed -> ADDRESS (prefix added)
    3. Anything else -> UNKNOWN
    """
    if not isinstance(text, str):
        return RecipientReference(RecipientKind.UNKNOWN, "" if text is None else str(text))

    if name_suffix is None:
        name_suffix = config.name_suffix

    trimmed = text.strip()

    if trimmed.lower().endswith(name_suffix.lower()):
        return RecipientReference(RecipientKind.NAME, trimmed)

    match = _ADDRESS_RE.match(trimmed)
    if match:
        return RecipientReference(RecipientKind.ADDRESS, ADDRESS_PREFIX + match.group(1))

    return RecipientReference(RecipientKind.UNKNOWN, trimmed)
