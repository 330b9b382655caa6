"""Recently viewed and favorite headwords for zhuyin-dict.

Both collections are capped. History keeps the most recently viewed
headwords; favorites evict the earliest inserted one when full. Functions
here run inside the caller's transaction and never commit.
"""

from __future__ import annotations

import sqlite3

from zhuyin_dict.models import EntryModel, FavoriteRecord, HistoryRecord
from zhuyin_dict.schema import row_to_entry

DEFAULT_HISTORY_LIMIT = 50
DEFAULT_FAVORITES_LIMIT = 30


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------

def record_view(
    conn: sqlite3.Connection,
    headword: str,
    *,
    limit: int = DEFAULT_HISTORY_LIMIT,
    viewed_at: str | None = None,
) -> None:
    """Upsert a view of *headword* and drop all but the *limit* most recent."""
    # REPLACE deletes the old row, so the new rowid is always the largest
    if viewed_at is None:
        conn.execute(
            "INSERT OR REPLACE INTO history (headword, viewed_at) "
            "VALUES (?, strftime('%Y-%m-%dT%H:%M:%f', 'now'))",
            (headword,),
        )
    else:
        conn.execute(
            "INSERT OR REPLACE INTO history (headword, viewed_at) VALUES (?, ?)",
            (headword, viewed_at),
        )
    conn.execute(
        "DELETE FROM history WHERE rowid NOT IN ("
        "SELECT rowid FROM history ORDER BY viewed_at DESC, rowid DESC LIMIT ?)",
        (limit,),
    )


def clear_history(conn: sqlite3.Connection) -> None:
    """Delete every history record."""
    conn.execute("DELETE FROM history")


def history_records(conn: sqlite3.Connection) -> list[HistoryRecord]:
    """History records, most recent first."""
    rows = conn.execute(
        "SELECT headword, viewed_at FROM history ORDER BY viewed_at DESC, rowid DESC"
    ).fetchall()
    return [HistoryRecord(headword=row[0], viewed_at=row[1]) for row in rows]


def list_history(conn: sqlite3.Connection, projection: str) -> list[EntryModel]:
    """Viewed entries, most recent first; unknown headwords are skipped."""
    rows = conn.execute(
        f"SELECT e.* FROM history h JOIN ({projection}) AS e "
        "ON e.headword = h.headword "
        "ORDER BY h.viewed_at DESC, h.rowid DESC"
    ).fetchall()
    return [row_to_entry(row) for row in rows]


# ---------------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------------

def is_favorite(conn: sqlite3.Connection, headword: str) -> bool:
    """Check whether *headword* is a favorite."""
    row = conn.execute(
        "SELECT 1 FROM favorites WHERE headword = ?",
        (headword,),
    ).fetchone()
    return row is not None


def toggle_favorite(
    conn: sqlite3.Connection,
    headword: str,
    *,
    limit: int = DEFAULT_FAVORITES_LIMIT,
) -> bool:
    """Flip the favorite state of *headword*; return the new state.

    Adding to a full collection first evicts the earliest inserted
    favorites until there is room for one more.
    """
    if is_favorite(conn, headword):
        conn.execute("DELETE FROM favorites WHERE headword = ?", (headword,))
        return False

    count = conn.execute("SELECT COUNT(*) FROM favorites").fetchone()[0]
    if count >= limit:
        conn.execute(
            "DELETE FROM favorites WHERE seq IN ("
            "SELECT seq FROM favorites ORDER BY seq ASC LIMIT ?)",
            (count - limit + 1,),
        )
    conn.execute("INSERT INTO favorites (headword) VALUES (?)", (headword,))
    return True


def favorite_records(conn: sqlite3.Connection) -> list[FavoriteRecord]:
    """Favorite records, newest insertion first."""
    rows = conn.execute(
        "SELECT headword, seq FROM favorites ORDER BY seq DESC"
    ).fetchall()
    return [FavoriteRecord(headword=row[0], seq=row[1]) for row in rows]


def list_favorites(conn: sqlite3.Connection, projection: str) -> list[EntryModel]:
    """Favorite entries, newest insertion first; unknown headwords are skipped."""
    rows = conn.execute(
        f"SELECT e.* FROM favorites f JOIN ({projection}) AS e "
        "ON e.headword = f.headword "
        "ORDER BY f.seq DESC"
    ).fetchall()
    return [row_to_entry(row) for row in rows]
