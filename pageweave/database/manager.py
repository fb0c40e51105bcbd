"""
Database manager for Pageweave.

This module stores serialized workspace snapshots in DuckDB. Each snapshot
occupies one named slot; writing a slot replaces its previous contents.
"""

import duckdb
import logging
from typing import List, Optional
from datetime import datetime, timezone


class DatabaseManager:
    """
    Manages the DuckDB database holding workspace snapshot slots.
    """

    def __init__(self, db_path: str = "pageweave.db"):
        """
        Initialize the database manager.

        Args:
            db_path: Path to the DuckDB database file (":memory:" for a
                throwaway in-memory database)
        """
        self.db_path = db_path
        self.connection = None

    def connect(self):
        """Establish connection to the database."""
        self.connection = duckdb.connect(self.db_path)

    def disconnect(self):
        """Close the database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()

    def _require_connection(self):
        if not self.connection:
            raise RuntimeError("Database connection not established")
        return self.connection

    def initialize_database(self):
        """
        Create the snapshot table if it doesn't exist.
        """
        connection = self._require_connection()

        connection.execute("""
            CREATE TABLE IF NOT EXISTS storage_slots (
                slot_key VARCHAR PRIMARY KEY,
                payload TEXT NOT NULL,
                saved_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

    def read_slot(self, slot_key: str) -> Optional[str]:
        """
        Read the raw payload stored under a slot key.

        Args:
            slot_key: The slot to read

        Returns:
            The stored text, or None if the slot is empty
        """
        connection = self._require_connection()

        result = connection.execute("""
            SELECT payload FROM storage_slots WHERE slot_key = ?
        """, [slot_key]).fetchone()

        return result[0] if result else None

    def write_slot(self, slot_key: str, payload: str) -> None:
        """
        Store a payload under a slot key, replacing what was there.

        Args:
            slot_key: The slot to write
            payload: The text to store
        """
        connection = self._require_connection()

        connection.execute("""
            INSERT OR REPLACE INTO storage_slots (slot_key, payload, saved_at)
            VALUES (?, ?, ?)
        """, [slot_key, payload, datetime.now(timezone.utc).replace(tzinfo=None)])
        logging.debug(f"Wrote {len(payload)} characters to slot {slot_key}")

    def delete_slot(self, slot_key: str) -> bool:
        """
        Remove a slot.

        Args:
            slot_key: The slot to remove

        Returns:
            True if the slot existed, False otherwise
        """
        connection = self._require_connection()

        existed = self.read_slot(slot_key) is not None
        if existed:
            connection.execute("DELETE FROM storage_slots WHERE slot_key = ?", [slot_key])
        return existed

    def list_slots(self) -> List[str]:
        """
        List the keys of all stored slots.

        Returns:
            Slot keys in alphabetical order
        """
        connection = self._require_connection()

        results = connection.execute("""
            SELECT slot_key FROM storage_slots ORDER BY slot_key
        """).fetchall()

        return [row[0] for row in results]
