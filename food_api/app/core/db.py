"""
SQLite database integration and simple migration system.

This module provides functions for resolving the database file
(``get_database_path``), obtaining a connection (``get_connection``),
running one transaction (``get_cursor``) and applying migrations on
application start (``init_db``).  SQLite is used as a lightweight
embedded database: every committed write lands in the database file,
so stored records survive process restarts.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings

logger = logging.getLogger(__name__)

# Ordered list of (version, script).  Append new migrations with an
# incremented version number; never edit one that has shipped.
MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: key/value storage for stable maps
    (
        1,
        """
        -- One row per entry.  ``memory_id`` separates independent maps
        -- sharing the same database file; ``value`` holds the JSON
        -- document.  WITHOUT ROWID keeps rows clustered in the primary
        -- key B-tree, which also gives the iteration order.
        CREATE TABLE IF NOT EXISTS stable_maps (
            memory_id INTEGER NOT NULL,
            key TEXT NOT NULL,
            value TEXT NOT NULL,
            PRIMARY KEY (memory_id, key)
        ) WITHOUT ROWID;
        """,
    ),
]


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    ``database_url`` defaults to ``settings.database_url``.  Absolute
    paths are used directly; relative ones are resolved against the
    project root (the directory containing the ``food_api`` package).
    """
    db_url = database_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  The connection waits up to five seconds for a lock held by
    another connection before failing.
    """
    conn = sqlite3.connect(db_path, timeout=5.0)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: str, immediate: bool = False) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor running inside a single transaction.

    The transaction is committed when the block exits normally and
    discarded when it raises; the connection is always closed.  With
    ``immediate=True`` the write lock is taken up front
    (``BEGIN IMMEDIATE``), so reads performed inside the block cannot
    be invalidated by another writer before the block commits.
    """
    conn = get_connection(db_path)
    try:
        if immediate:
            conn.execute("BEGIN IMMEDIATE")
        yield conn.cursor()
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: str) -> None:
    """Create the database file if needed and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies every entry of ``MIGRATIONS``
    with a higher version.
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    with get_cursor(db_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
                logger.info("Applied migration %s to %s", version, db_path)
