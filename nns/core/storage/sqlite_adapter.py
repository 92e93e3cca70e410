import sqlite3
import threading
from pathlib import Path
from typing import Optional, List

from nns.utils.logger import get_logger

logger = get_logger("storage.sqlite")


class SQLiteAdapter:
    """
    SQLite backend for the client's durable key-value store.
    
    Values are opaque bytes grouped into buckets. Each write runs in its
    own transaction, so a put or delete is atomic on its own.
    """

    def __init__(self, db_path: Path, bucket: str = "default"):
        self.db_path = Path(db_path)
        self.bucket = bucket
        self._conn_local = threading.local()
        
        if not self.db_path.parent.exists():
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            
        try:
            self._init_schema()
        except sqlite3.DatabaseError as e:
            logger.warning(f"Database {self.db_path} is unreadable ({e}), "
                           f"moving it aside and starting fresh")
            self._quarantine()
            self._init_schema()

    def _get_conn(self) -> sqlite3.Connection:
        """Get or create connection for current thread."""
        if not hasattr(self._conn_local, "conn"):
            self._conn_local.conn = sqlite3.connect(
                self.db_path, 
                timeout=30.0,
                check_same_thread=False
            )
            self._conn_local.conn.row_factory = sqlite3.Row
            self._conn_local.conn.execute("PRAGMA journal_mode=WAL;")
            self._conn_local.conn.execute("PRAGMA synchronous=NORMAL;")
        return self._conn_local.conn

    def _quarantine(self):
        """Rename a corrupt database (and its WAL sidecars) to *.corrupt."""
        self.close()
        for suffix in ("", "-wal", "-shm"):
            path = self.db_path.with_name(self.db_path.name + suffix)
            if path.exists():
                path.replace(path.with_name(path.name + ".corrupt"))

    def _init_schema(self):
        """Initialize database schema."""
        conn = self._get_conn()
        with conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT NOT NULL,
                    bucket TEXT NOT NULL DEFAULT 'default',
                    value BLOB NOT NULL,
                    PRIMARY KEY (bucket, key)
                )
            """)

    # =========================================================================
    # Key-Value Operations
    # =========================================================================

    def put(self, key: str, value: bytes):
        """Save a key-value pair."""
        conn = self._get_conn()
        with conn:
            conn.execute(
                "INSERT OR REPLACE INTO kv_store (key, bucket, value) VALUES (?, ?, ?)",
                (key, self.bucket, value)
            )

    def get(self, key: str) -> Optional[bytes]:
        """Get value by key."""
        conn = self._get_conn()
        cursor = conn.execute(
            "SELECT value FROM kv_store WHERE key = ? AND bucket = ?",
            (key, self.bucket)
        )
        row = cursor.fetchone()
        return bytes(row['value']) if row else None

    def delete(self, key: str):
        """Remove a key. No-op if absent."""
        conn = self._get_conn()
        with conn:
            conn.execute(
                "DELETE FROM kv_store WHERE key = ? AND bucket = ?",
                (key, self.bucket)
            )

    def keys(self) -> List[str]:
        """List keys in this adapter's bucket."""
        conn = self._get_conn()
        cursor = conn.execute(
            "SELECT key FROM kv_store WHERE bucket = ? ORDER BY key", (self.bucket,)
        )
        return [row['key'] for row in cursor]

    def close(self):
        """Close the current thread's connection."""
        conn = getattr(self._conn_local, "conn", None)
        if conn is not None:
            conn.close()
            del self._conn_local.conn
