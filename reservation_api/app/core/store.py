"""
Key-value persistence for the account and booking collections.

Each collection is stored as one named JSON blob: ``accounts`` and
``bookings``.  A write always replaces the whole blob.  Two backends
implement the same small interface:

* ``MemoryStore`` keeps blobs in a dict and is used by the tests;
* ``SQLiteStore`` keeps them as JSON text in a ``blobs`` table of an
  SQLite file and is used by the running service.

``write_many`` persists several blobs as one logical operation (one
transaction for SQLite), which is what the cascading account delete
relies on to never leave bookings behind for a deleted owner.

Schema changes of the SQLite file are applied by ``init_store`` from a
versioned migration list recorded in the ``migrations`` table.
"""

import json
import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from .config import settings

ACCOUNTS_KEY = "accounts"
BOOKINGS_KEY = "bookings"

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Interface shared by the store backends."""

    def read(self, key: str) -> Optional[Any]:
        """Return the blob stored under ``key`` or ``None`` if absent."""
        raise NotImplementedError

    def write(self, key: str, blob: Any) -> None:
        """Replace the blob stored under ``key``."""
        raise NotImplementedError

    def write_many(self, blobs: Dict[str, Any]) -> None:
        """Replace several blobs as a single logical operation."""
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """In-process store.  Blobs are kept as JSON text so callers never
    share mutable state with the store, exactly as with the file backend."""

    def __init__(self) -> None:
        self._blobs: Dict[str, str] = {}

    def read(self, key: str) -> Optional[Any]:
        raw = self._blobs.get(key)
        return json.loads(raw) if raw is not None else None

    def write(self, key: str, blob: Any) -> None:
        self._blobs[key] = json.dumps(blob)

    def write_many(self, blobs: Dict[str, Any]) -> None:
        encoded = {key: json.dumps(blob) for key, blob in blobs.items()}
        self._blobs.update(encoded)


class SQLiteStore(KeyValueStore):
    """Durable store backed by an SQLite file."""

    def __init__(self, path: str) -> None:
        self.path = path

    def get_connection(self) -> sqlite3.Connection:
        """Open a new connection with rows addressable by column name."""
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def get_cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success, roll back on error, always close."""
        conn = self.get_connection()
        try:
            yield conn.cursor()
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def read(self, key: str) -> Optional[Any]:
        with self.get_cursor() as cursor:
            row = cursor.execute("SELECT value FROM blobs WHERE key = ?", (key,)).fetchone()
        return json.loads(row["value"]) if row else None

    def write(self, key: str, blob: Any) -> None:
        self.write_many({key: blob})

    def write_many(self, blobs: Dict[str, Any]) -> None:
        with self.get_cursor() as cursor:
            for key, blob in blobs.items():
                cursor.execute(
                    "INSERT INTO blobs (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, json.dumps(blob)),
                )

    def migrate(self) -> int:
        """Apply pending migrations and return the resulting schema version."""
        migrations: list[tuple[int, str]] = [
            # Migration 1: one row per named blob
            (
                1,
                """
                CREATE TABLE IF NOT EXISTS blobs (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
                """,
            ),
        ]
        with self.get_cursor() as cursor:
            cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
            row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0
            for version, sql in migrations:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                    current_version = version
                    logger.info("Applied store migration %s", version)
        return current_version


def default_accounts() -> list[dict]:
    """Accounts written into an empty store: the primary administrator
    (always id 1) and one operator."""
    return [
        {
            "id": 1,
            "name": settings.primary_admin_name,
            "email": settings.primary_admin_email,
            "credential": settings.primary_admin_credential,
            "role": "administrator",
        },
        {
            "id": 2,
            "name": "Operador Sistema",
            "email": settings.default_operator_email,
            "credential": settings.default_operator_credential,
            "role": "operator",
        },
    ]


def init_store(store: KeyValueStore, seed: Optional[bool] = None) -> None:
    """Prepare a store for use.

    Runs SQLite migrations when applicable, then makes sure both
    collections exist.  An absent ``accounts`` blob is seeded with
    ``default_accounts()`` when ``seed`` (default:
    ``settings.seed_defaults``) is true, otherwise with an empty list.
    Existing blobs are never touched.
    """
    if isinstance(store, SQLiteStore):
        store.migrate()
    if seed is None:
        seed = settings.seed_defaults
    missing: Dict[str, Any] = {}
    if store.read(ACCOUNTS_KEY) is None:
        missing[ACCOUNTS_KEY] = default_accounts() if seed else []
    if store.read(BOOKINGS_KEY) is None:
        missing[BOOKINGS_KEY] = []
    if missing:
        store.write_many(missing)
        logger.info("Initialised store collections: %s", ", ".join(sorted(missing)))


def get_store_path() -> str:
    """Resolve ``settings.store_path``; relative paths are taken from the
    project root (the directory that contains ``reservation_api``)."""
    store_path = settings.store_path
    if os.path.isabs(store_path):
        return store_path
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / store_path).resolve())


_store: Optional[KeyValueStore] = None


def get_store() -> KeyValueStore:
    """FastAPI dependency returning the process-wide store.

    Tests replace it through ``app.dependency_overrides[get_store]``.
    """
    global _store
    if _store is None:
        _store = SQLiteStore(get_store_path())
    return _store
