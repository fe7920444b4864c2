"""
Durable key/value map backed by the SQLite database.

``StableMap`` is the storage primitive the services build on.  It
behaves like an ordered dictionary whose contents outlive the process:
every ``insert`` and ``remove`` is committed to the database file
before the call returns, so a map re-opened on the same file and
``memory_id`` after a restart sees exactly the same entries.

Several maps can share one database file; the ``memory_id`` passed to
the constructor selects an independent keyspace.

Values are pydantic models of a single class.  They are stored as
JSON text (by alias, so the stored document matches the wire format)
and re-validated into the model class on the way out.

Absence is never an error: lookups that find nothing return ``None``.
Failures of the database itself are raised as
``StorageUnavailableError``.
"""

from __future__ import annotations

import sqlite3
from typing import Generic, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from .db import get_cursor

V = TypeVar("V", bound=BaseModel)


class StorageUnavailableError(RuntimeError):
    """The database backing a ``StableMap`` could not be used."""


class StableMap(Generic[V]):
    """Persistent map from string keys to pydantic models."""

    def __init__(self, db_path: str, value_type: Type[V], memory_id: int = 0) -> None:
        self.db_path = db_path
        self.value_type = value_type
        self.memory_id = memory_id

    def insert(self, key: str, value: V) -> Optional[V]:
        """Store ``value`` under ``key``, replacing any existing entry.

        Returns the value previously stored under ``key`` or ``None``.
        """
        document = value.model_dump_json(by_alias=True)
        try:
            with get_cursor(self.db_path, immediate=True) as cursor:
                previous = self._fetch(cursor, key)
                cursor.execute(
                    "INSERT OR REPLACE INTO stable_maps (memory_id, key, value) VALUES (?, ?, ?)",
                    (self.memory_id, key, document),
                )
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"insert of key {key!r} failed: {exc}") from exc
        return previous

    def get(self, key: str) -> Optional[V]:
        """Return the value stored under ``key`` or ``None``."""
        try:
            with get_cursor(self.db_path) as cursor:
                return self._fetch(cursor, key)
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"lookup of key {key!r} failed: {exc}") from exc

    def remove(self, key: str) -> Optional[V]:
        """Delete ``key`` and return the value it held, or ``None`` if absent."""
        try:
            with get_cursor(self.db_path, immediate=True) as cursor:
                previous = self._fetch(cursor, key)
                if previous is not None:
                    cursor.execute(
                        "DELETE FROM stable_maps WHERE memory_id = ? AND key = ?",
                        (self.memory_id, key),
                    )
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"removal of key {key!r} failed: {exc}") from exc
        return previous

    def contains_key(self, key: str) -> bool:
        try:
            with get_cursor(self.db_path) as cursor:
                row = cursor.execute(
                    "SELECT 1 FROM stable_maps WHERE memory_id = ? AND key = ?",
                    (self.memory_id, key),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"lookup of key {key!r} failed: {exc}") from exc
        return row is not None

    def len(self) -> int:
        """Number of entries in the map."""
        try:
            with get_cursor(self.db_path) as cursor:
                row = cursor.execute(
                    "SELECT COUNT(*) AS n FROM stable_maps WHERE memory_id = ?",
                    (self.memory_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"count failed: {exc}") from exc
        return row["n"]

    def __len__(self) -> int:
        return self.len()

    def is_empty(self) -> bool:
        return self.len() == 0

    def keys(self) -> List[str]:
        return [key for key, _ in self._rows()]

    def values(self) -> List[V]:
        """Every stored value, in key order."""
        return [self._load(document) for _, document in self._rows()]

    def items(self) -> List[Tuple[str, V]]:
        return [(key, self._load(document)) for key, document in self._rows()]

    def _rows(self) -> List[Tuple[str, str]]:
        try:
            with get_cursor(self.db_path) as cursor:
                rows = cursor.execute(
                    "SELECT key, value FROM stable_maps WHERE memory_id = ? ORDER BY key",
                    (self.memory_id,),
                ).fetchall()
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"scan failed: {exc}") from exc
        return [(row["key"], row["value"]) for row in rows]

    def _fetch(self, cursor: sqlite3.Cursor, key: str) -> Optional[V]:
        row = cursor.execute(
            "SELECT value FROM stable_maps WHERE memory_id = ? AND key = ?",
            (self.memory_id, key),
        ).fetchone()
        if row is None:
            return None
        return self._load(row["value"])

    def _load(self, document: str) -> V:
        return self.value_type.model_validate_json(document)
