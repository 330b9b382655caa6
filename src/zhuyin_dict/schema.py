"""Canonical entry projection over the physical ``entries`` table.

Store revisions differ in which columns ``entries`` carries:

* the character revision has ``word, phonetic, definition, radical,
  stroke_count``;
* the idiom revision has the 21 columns in :data:`IDIOM_COLUMNS`, some of
  which are missing from older files.

Some imported idiom batches also carry a numeric row id in ``word`` and
every following field shifted one column to the right. Such rows are
repaired at read time by a per-row ``CASE`` guard, which is only generated
when the store actually contains shifted rows.
"""

from __future__ import annotations

import logging
import re
import sqlite3
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from zhuyin_dict.exceptions import SchemaMismatchError
from zhuyin_dict.models import EntryModel, SchemaLayout

logger = logging.getLogger(__name__)

ENTRIES_TABLE = "entries"

CORE_COLUMNS: tuple[str, ...] = ("word", "phonetic", "definition")

CHARACTER_COLUMNS: tuple[str, ...] = CORE_COLUMNS + ("radical", "stroke_count")

IDIOM_COLUMNS: tuple[str, ...] = (
    "word",
    "phonetic",
    "pinyin",
    "definition",
    "source",
    "source_text",
    "story",
    "usage_semantic",
    "usage_category",
    "usage_example",
    "example",
    "synonyms",
    "antonyms",
    "discrimination_words",
    "discrimination_semantic",
    "discrimination_usage",
    "discrimination_example",
    "reference_words",
    "notes",
    "variant_readings",
    "category",
)

# Every logical field the projection exposes, in output order
CANONICAL_COLUMNS: tuple[str, ...] = IDIOM_COLUMNS + ("radical", "stroke_count")

# Columns mapped onto named EntryModel attributes; the rest go to ``extended``
_ENTRY_ATTRIBUTES: dict[str, str] = {
    "word": "headword",
    "phonetic": "phonetic",
    "definition": "definition",
    "radical": "radical",
    "stroke_count": "stroke_count",
    "source": "source",
    "example": "example",
    "synonyms": "synonyms",
    "antonyms": "antonyms",
}

_IDIOM_ONLY = frozenset(IDIOM_COLUMNS) - frozenset(CORE_COLUMNS)

_NUMERIC_ID = re.compile(r"^[0-9]")

# SQL twin of _NUMERIC_ID
_SHIFTED_ROW_GUARD = "\"word\" GLOB '[0-9]*'"


@dataclass(frozen=True)
class SchemaInfo:
    """What the store's ``entries`` table looks like, read once at open."""

    columns: tuple[str, ...]
    layout: SchemaLayout
    legacy_shift: bool

    def has(self, column: str) -> bool:
        return column in self.columns

    @property
    def missing_extended(self) -> tuple[str, ...]:
        """Canonical columns that resolve to empty strings on every row."""
        return tuple(c for c in CANONICAL_COLUMNS if not self.has(c))

    @property
    def has_stroke_count(self) -> bool:
        return self.has("stroke_count")


def detect_schema(conn: sqlite3.Connection) -> SchemaInfo:
    """Inspect the ``entries`` table and pick the projection strategy.

    Raises:
        SchemaMismatchError: If the table or one of its core columns is absent.
    """
    columns = tuple(
        row[1] for row in conn.execute(f"PRAGMA table_info({ENTRIES_TABLE})")
    )
    if not columns:
        raise SchemaMismatchError(f"Table {ENTRIES_TABLE!r} not found")
    missing = [c for c in CORE_COLUMNS if c not in columns]
    if missing:
        raise SchemaMismatchError(
            f"Table {ENTRIES_TABLE!r} lacks core column(s): {', '.join(missing)}"
        )

    if _IDIOM_ONLY & set(columns):
        layout = SchemaLayout.IDIOM
    elif "radical" in columns or "stroke_count" in columns:
        layout = SchemaLayout.CHARACTER
    else:
        layout = SchemaLayout.IDIOM

    legacy_shift = (
        conn.execute(
            f"SELECT 1 FROM {ENTRIES_TABLE} WHERE {_SHIFTED_ROW_GUARD} LIMIT 1"
        ).fetchone()
        is not None
    )
    info = SchemaInfo(columns=columns, layout=layout, legacy_shift=legacy_shift)

    logger.info(
        "entries layout=%s columns=%d legacy_shift=%s",
        layout.value, len(columns), legacy_shift,
    )
    if info.missing_extended:
        logger.debug("extended columns absent: %s", ", ".join(info.missing_extended))
    return info


def _quote(column: str) -> str:
    return '"' + column.replace('"', '""') + '"'


def _empty_value(column: str) -> str:
    return "0" if column == "stroke_count" else "''"


def _column_expr(info: SchemaInfo, column: str) -> str:
    if not info.has(column):
        return _empty_value(column)
    plain = _quote(column)
    if not info.legacy_shift:
        return plain
    index = info.columns.index(column)
    if index + 1 < len(info.columns):
        shifted = _quote(info.columns[index + 1])
    else:
        shifted = _empty_value(column)
    return f"CASE WHEN {_SHIFTED_ROW_GUARD} THEN {shifted} ELSE {plain} END"


def projection_sql(info: SchemaInfo) -> str:
    """``SELECT`` producing one canonical row per entry.

    Output columns are ``seq`` (the physical rowid), ``headword`` and the
    remaining :data:`CANONICAL_COLUMNS`.
    """
    parts = ["rowid AS seq"]
    for column in CANONICAL_COLUMNS:
        alias = "headword" if column == "word" else column
        parts.append(f"{_column_expr(info, column)} AS {_quote(alias)}")
    return f"SELECT {', '.join(parts)} FROM {ENTRIES_TABLE}"


def canonical_headword(values: Sequence[Any]) -> str:
    """Headword of a raw row given as column values in physical order."""
    return _as_text(canonical_fields(("word",), values)["word"])


def canonical_fields(columns: Sequence[str], values: Sequence[Any]) -> dict[str, Any]:
    """Logical field values of one raw row, repairing a shifted layout.

    A row whose first value starts with a digit reads every field from the
    next physical column; fields past the end resolve to ``""``.
    """
    first = values[0] if values else None
    shift = 1 if first is not None and _NUMERIC_ID.match(str(first)) else 0
    fields: dict[str, Any] = {}
    for index, column in enumerate(columns):
        source = index + shift
        fields[column] = values[source] if source < len(values) else ""
    return fields


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def row_to_entry(row: Mapping[str, Any] | sqlite3.Row) -> EntryModel:
    """Build an EntryModel from one projected row."""
    values: dict[str, Any] = {}
    extended: dict[str, str] = {}
    for column in CANONICAL_COLUMNS:
        key = "headword" if column == "word" else column
        value = row[key]
        attr = _ENTRY_ATTRIBUTES.get(column)
        if attr == "stroke_count":
            values[attr] = _as_int(value)
        elif attr is not None:
            values[attr] = _as_text(value)
        else:
            extended[column] = _as_text(value)
    return EntryModel(extended=extended, **values)
