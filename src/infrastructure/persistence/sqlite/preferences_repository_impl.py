"""
Preferences repository

Key-value persistence for user preferences on top of the SQLite Database.
Values are JSON-encoded.
"""
from datetime import datetime
from typing import Any

from src.infrastructure.persistence.sqlite.database import Database
from src.utils.message import Log


class PreferencesRepository:
    """
    Repository for user preferences persistence.

    Preferences are application-wide and persist across sessions.
    """

    def __init__(self, database: Database):
        self.db = database

    def set(self, key: str, value: Any) -> None:
        """
        Set a preference value.

        Args:
            key: Preference key
            value: JSON-serializable value
        """
        value_json = Database.json_encode(value)
        now = datetime.now().isoformat()

        with self.db.transaction() as conn:
            conn.execute("""
                INSERT INTO preferences (key, value, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
            """, (key, value_json, now, now))

        Log.debug(f"Saved preference: {key}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a preference value.

        Returns:
            Decoded value, the raw text if it is not valid JSON, or default
        """
        cursor = self.db.get_connection().cursor()
        cursor.execute("SELECT value FROM preferences WHERE key = ?", (key,))

        row = cursor.fetchone()
        if row is None:
            return default
        return Database.json_decode(row[0])

