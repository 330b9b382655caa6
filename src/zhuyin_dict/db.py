"""Database connection, DDL, and the lexicon store handle for zhuyin-dict."""

from __future__ import annotations

import logging
import shutil
import sqlite3
from pathlib import Path
from typing import Any

from zhuyin_dict.exceptions import SchemaMismatchError, StoreUnavailableError
from zhuyin_dict.models import SchemaLayout
from zhuyin_dict.schema import SchemaInfo, detect_schema, projection_sql

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# DDL statements
# ---------------------------------------------------------------------------

# Tables owned by the engine. ``entries`` belongs to the lexicon file and is
# never created or written here.
_DDL = """
CREATE TABLE IF NOT EXISTS history (
    rowid INTEGER PRIMARY KEY,
    headword TEXT NOT NULL,
    viewed_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now')),
    UNIQUE (headword)
);
CREATE INDEX IF NOT EXISTS history_viewed_at_index ON history (viewed_at);

CREATE TABLE IF NOT EXISTS favorites (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    headword TEXT NOT NULL,
    added_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now')),
    UNIQUE (headword)
);
"""


def connect(db_path: str | Path = ":memory:") -> sqlite3.Connection:
    """Open a database connection with store PRAGMA settings."""
    db_path_str = str(db_path)
    conn = sqlite3.connect(db_path_str)
    if db_path_str != ":memory:":
        try:
            conn.execute("PRAGMA journal_mode = WAL")
        except sqlite3.Error:
            conn.close()
            raise
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Create the history and favorites tables if they don't exist."""
    conn.executescript(_DDL)
    conn.commit()


def seed_database(seed_path: str | Path, db_path: str | Path) -> bool:
    """Copy a bundled lexicon to a writable location on first run.

    Returns True if a copy was made, False if *db_path* already existed.
    """
    target = Path(db_path)
    if target.exists():
        logger.debug("store already present at %s", target)
        return False
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(seed_path, target)
    logger.info("copied bundled lexicon %s -> %s", seed_path, target)
    return True


# ---------------------------------------------------------------------------
# Store handle
# ---------------------------------------------------------------------------

class LexiconStore:
    """An open lexicon database plus the projection chosen for it.

    The schema is inspected once, when the store is opened; every reader
    selects from :attr:`projection` instead of the physical table.
    """

    def __init__(self, conn: sqlite3.Connection, schema: SchemaInfo) -> None:
        self._conn = conn
        self._schema = schema
        self._projection = projection_sql(schema)

    @classmethod
    def open(
        cls,
        db_path: str | Path = ":memory:",
        *,
        seed: str | Path | None = None,
    ) -> LexiconStore:
        """Open (and on first run, seed) a lexicon database.

        Raises:
            StoreUnavailableError: If the file cannot be opened or its
                ``entries`` table lacks a core column.
        """
        db_path_str = str(db_path)
        try:
            if seed is not None and db_path_str != ":memory:":
                seed_database(seed, db_path_str)
        except OSError as e:
            raise StoreUnavailableError(
                f"Cannot copy bundled lexicon {seed} to {db_path_str}: {e}"
            ) from e
        if db_path_str != ":memory:" and not Path(db_path_str).exists():
            raise StoreUnavailableError(f"Lexicon not found: {db_path_str}")

        try:
            conn = connect(db_path_str)
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Cannot open lexicon {db_path_str}: {e}") from e
        try:
            return cls.from_connection(conn)
        except StoreUnavailableError:
            conn.close()
            raise

    @classmethod
    def from_connection(cls, conn: sqlite3.Connection) -> LexiconStore:
        """Wrap an already open connection (e.g. an in-memory test store)."""
        try:
            schema = detect_schema(conn)
        except SchemaMismatchError as e:
            raise StoreUnavailableError(str(e)) from e
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Cannot read lexicon schema: {e}") from e
        try:
            init_db(conn)
        except sqlite3.Error as e:
            logger.warning("history and favorites unavailable: %s", e)
        return cls(conn, schema)

    @property
    def conn(self) -> sqlite3.Connection:
        return self._conn

    @property
    def schema(self) -> SchemaInfo:
        return self._schema

    @property
    def layout(self) -> SchemaLayout:
        return self._schema.layout

    @property
    def projection(self) -> str:
        return self._projection

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    def __enter__(self) -> LexiconStore:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
