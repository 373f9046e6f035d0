"""SQLite-backed snapshot storage for the inventory state.

The whole ``InventoryState`` is stored as one versioned JSON document in a
small key-value table under ``STORE_KEY``. It is rewritten after every
mutation and read back once at start-up.
"""
from __future__ import annotations

import json
import logging
import os
import sqlite3
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from inventory_core import config
from inventory_core.constants import SCHEMA_VERSION, STORE_KEY
from inventory_core.exceptions import PersistenceError
from inventory_core.models import InventoryState, seed_state
from inventory_core.store import InventoryStore

logger = logging.getLogger(__name__)


def encode_state(state: InventoryState) -> str:
    return json.dumps(
        {"version": SCHEMA_VERSION, "state": state.to_dict()},
        ensure_ascii=False,
    )


def decode_state(raw: str) -> InventoryState:
    """Parse a stored document; raises PersistenceError on any malformed input."""
    try:
        doc = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        raise PersistenceError(f"Stored state is not valid JSON: {e}") from e
    if not isinstance(doc, dict):
        raise PersistenceError("Stored state is not an object")
    version = doc.get("version")
    if version != SCHEMA_VERSION:
        raise PersistenceError(f"Unsupported state version: {version!r}")
    return InventoryState.from_dict(doc.get("state"))


def init_db(conn: sqlite3.Connection) -> None:
    """Create the key-value table (safe to run on an existing DB)."""
    cur = conn.cursor()
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS kv_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT
        )
        """
    )
    conn.commit()


def connect_sqlite(path: str) -> sqlite3.Connection:
    """Open the SQLite file, creating its directory when needed."""
    if path != ":memory:":
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    conn = sqlite3.connect(path, check_same_thread=False)
    try:
        init_db(conn)
    except sqlite3.Error:
        conn.close()
        raise
    return conn


class SQLiteStateRepository:
    """Reads and writes the state snapshot kept under a fixed key."""

    def __init__(
        self,
        path: Optional[str] = None,
        *,
        key: str = STORE_KEY,
        seed: Callable[[], InventoryState] = seed_state,
    ):
        self.path = path or config.DB_PATH
        self.key = key
        self._seed = seed
        try:
            self.conn = connect_sqlite(self.path)
        except sqlite3.DatabaseError:
            logger.exception("Cannot open %s as a database", self.path)
            self.conn = self._reopen_fresh()

    def _reopen_fresh(self) -> sqlite3.Connection:
        """Move an unreadable database file aside and start a new one in its place."""
        if self.path != ":memory:":
            stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
            backup = f"{self.path}.corrupt_{stamp}"
            try:
                os.replace(self.path, backup)
                logger.warning("Moved unreadable database %s to %s", self.path, backup)
                return connect_sqlite(self.path)
            except (OSError, sqlite3.Error):
                logger.exception("Could not replace %s; changes will not be saved to disk", self.path)
        return connect_sqlite(":memory:")

    def close(self) -> None:
        self.conn.close()

    def read_raw(self) -> Optional[str]:
        cur = self.conn.cursor()
        cur.execute("SELECT value FROM kv_store WHERE key = ?", (self.key,))
        row = cur.fetchone()
        return row[0] if row else None

    def load(self) -> InventoryState:
        """Return the stored state, or the seed dataset when none can be read."""
        try:
            raw = self.read_raw()
        except sqlite3.Error:
            logger.exception("Failed to read stored state from %s; using seed data", self.path)
            return self._seed()
        if raw is None:
            logger.info("No stored state in %s; starting from seed data", self.path)
            return self._seed()
        try:
            state = decode_state(raw)
        except PersistenceError as e:
            logger.warning("Discarding unreadable stored state (%s); using seed data", e)
            return self._seed()
        logger.info(
            "Loaded %d item(s), %d department(s), %d transaction(s) from %s",
            len(state.items),
            len(state.departments),
            len(state.transactions),
            self.path,
        )
        return state

    def save(self, state: InventoryState) -> bool:
        """Write the snapshot. Failures are logged and reported as False, never raised."""
        try:
            cur = self.conn.cursor()
            cur.execute(
                """
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                               updated_at = excluded.updated_at
                """,
                (self.key, encode_state(state), datetime.now(timezone.utc).isoformat()),
            )
            self.conn.commit()
        except (sqlite3.Error, TypeError, ValueError):
            logger.exception("Failed to persist inventory state to %s", self.path)
            try:
                self.conn.rollback()
            except sqlite3.Error:
                logger.exception("Rollback failed for %s", self.path)
            return False
        return True

    def attach(self, store: InventoryStore) -> Callable[[], None]:
        """Persist every state ``store`` publishes from now on."""
        return store.subscribe(self.save)


def open_store(
    path: Optional[str] = None, **store_kwargs
) -> Tuple[InventoryStore, SQLiteStateRepository]:
    """Load the saved state into a new store that keeps saving itself."""
    repository = SQLiteStateRepository(path)
    store = InventoryStore(repository.load(), **store_kwargs)
    repository.attach(store)
    return store, repository
