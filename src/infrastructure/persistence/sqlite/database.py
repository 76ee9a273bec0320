"""
Preferences SQLite database

File-based SQLite store for application preferences. One table of
JSON-encoded key/value rows; survives restarts.
"""
import sqlite3
import json
from pathlib import Path
from typing import Optional, Any

from src.utils.message import Log


class Database:
    """
    File-backed SQLite database holding the preferences table.

    Pass ":memory:" for a throwaway in-process database.
    """

    CURRENT_SCHEMA_VERSION = 1

    def __init__(self, db_path: Optional[str] = None):
        if db_path is None:
            raise ValueError("Database path is required")

        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self.db_path = db_path

        self._connection = sqlite3.connect(str(db_path), check_same_thread=False)
        self._init_schema()

    def _init_schema(self):
        conn = self._connection
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS preferences (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

        cursor.execute("SELECT version FROM schema_version LIMIT 1")
        if cursor.fetchone() is None:
            cursor.execute("INSERT INTO schema_version (version) VALUES (?)",
                           (self.CURRENT_SCHEMA_VERSION,))
        conn.commit()

    def get_connection(self) -> sqlite3.Connection:
        conn = self._connection
        conn.row_factory = sqlite3.Row
        return conn

    def transaction(self):
        return TransactionContext(self.get_connection())

    def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            Log.info(f"Database connection closed: {self.db_path}")

    @staticmethod
    def json_encode(value: Any) -> str:
        return json.dumps(value)

    @staticmethod
    def json_decode(value: Optional[str]) -> Any:
        """Decode a stored value; undecodable text is returned as-is."""
        if value is None:
            return None
        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            return value


class TransactionContext:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def __enter__(self) -> sqlite3.Connection:
        return self.conn

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.conn.commit()
        else:
            self.conn.rollback()
            Log.error(f"Transaction rolled back: {exc_val}")
        return False
