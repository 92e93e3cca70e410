"""
Persistent Storage Module.

Scoped key-value stores for the bid ledger:
- SQLiteAdapter: durable, survives restarts
- InMemoryStore: process lifetime, for tests and dry runs
"""

from pathlib import Path
from typing import List, Optional, Protocol

from nns.core.storage.sqlite_adapter import SQLiteAdapter
from nns.core.storage.memory import InMemoryStore


class KeyValueStore(Protocol):
    """Store handle consumed by the bid ledger."""

    def put(self, key: str, value: bytes) -> None: ...

    def get(self, key: str) -> Optional[bytes]: ...

    def delete(self, key: str) -> None: ...

    def keys(self) -> List[str]: ...


def open_store(data_dir: Path, db_name: str = "nns.db") -> SQLiteAdapter:
    """Open the durable store under data_dir."""
    return SQLiteAdapter(Path(data_dir) / db_name)


__all__ = ["KeyValueStore", "SQLiteAdapter", "InMemoryStore", "open_store"]
