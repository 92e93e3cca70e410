from typing import Dict, List, Optional


class InMemoryStore:
    """Process-lifetime key-value store with the SQLiteAdapter interface."""

    def __init__(self):
        self._data: Dict[str, bytes] = {}

    def put(self, key: str, value: bytes):
        self._data[key] = bytes(value)

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def delete(self, key: str):
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return sorted(self._data)

    def close(self):
        pass
