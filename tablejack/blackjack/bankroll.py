"""
Bankroll persistence.

The bankroll is the only value that survives from one session to the next.
It is stored under a single fixed key in a small key-value store. The table
never writes it; the host reads it once when it starts and saves it after
every change.
"""

import json
import logging
import math
import sqlite3
from abc import ABC, abstractmethod
from typing import Dict, Optional

from tablejack.blackjack.constants import BANKROLL_KEY, DEFAULT_STARTING_BALANCE

logger = logging.getLogger(__name__)


class BankrollStore(ABC):
    """
    Key-value storage for the bankroll.

    Subclasses only implement raw ``get``/``put`` of JSON-encoded strings;
    loading with a default and saving are shared.
    """

    key: str = BANKROLL_KEY

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the raw stored value for ``key`` or None."""

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """Store the raw value for ``key``."""

    def close(self) -> None:
        """Release any resources held by the store."""

    def load(self, default: float = DEFAULT_STARTING_BALANCE) -> float:
        """
        Read the stored bankroll.

        Args:
            default: Value returned when nothing usable is stored

        Returns:
            The stored bankroll, or ``default``
        """
        raw = self.get(self.key)
        if raw is None:
            return default
        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unreadable bankroll value %r", raw)
            return default
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.warning("Ignoring non-numeric bankroll value %r", raw)
            return default
        if not math.isfinite(value):
            logger.warning("Ignoring non-finite bankroll value %r", raw)
            return default
        return float(value)

    def save(self, balance: float) -> None:
        """Persist the bankroll."""
        self.put(self.key, json.dumps(balance))
        logger.debug("Saved bankroll %s", balance)


class MemoryBankrollStore(BankrollStore):
    """Store kept in a dict, for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def put(self, key: str, value: str) -> None:
        self.data[key] = value


class SQLiteBankrollStore(BankrollStore):
    """
    Store the bankroll in SQLite.

    A single ``kv`` table holds the value, keyed by name.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize the SQLite store.

        Args:
            db_path: Optional path to the database file. If None, uses an in-memory database.
        """
        self.db_path = db_path
        self.conn = sqlite3.connect(db_path if db_path else ":memory:")
        self.conn.row_factory = sqlite3.Row
        self.initialize_database()

    def initialize_database(self) -> None:
        """Create the key-value table if it does not exist."""
        self.conn.execute(
            "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
        )
        self.conn.commit()

    def get(self, key: str) -> Optional[str]:
        row = self.conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def put(self, key: str, value: str) -> None:
        self.conn.execute(
            "INSERT INTO kv (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value),
        )
        self.conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None
