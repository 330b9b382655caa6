"""Prefix/contains search over the lexicon with deterministic ranking."""

from __future__ import annotations

import re

from zhuyin_dict.db import LexiconStore
from zhuyin_dict.models import EntryModel
from zhuyin_dict.schema import row_to_entry

# CJK Unified Ideographs, Extension A, compatibility block, Extensions B-G
_CJK_CHAR = "[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff\U00020000-\U0003134f]"
_CJK_PREFIX = re.compile(rf"^{_CJK_CHAR}{{1,4}}$")
CJK_CHAR = re.compile(_CJK_CHAR)

LIKE_ESCAPE = "\\"


def is_cjk_prefix_query(keyword: str) -> bool:
    """True for keywords of 1-4 CJK ideographs and nothing else."""
    return _CJK_PREFIX.match(keyword) is not None


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so *value* matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def build_search_query(
    store: LexiconStore,
    keyword: str,
    limit: int,
) -> tuple[str, list[str | int]]:
    """SQL and parameters for a keyword search.

    Short all-ideograph keywords are pure headword prefix queries; anything
    else also matches phonetic prefixes and definition/synonym substrings.
    """
    escaped = escape_like(keyword)
    prefix = escaped + "%"
    contains = "%" + escaped + "%"

    params: list[str | int] = []
    if is_cjk_prefix_query(keyword):
        where = "e.headword LIKE ? ESCAPE '\\'"
        params.append(prefix)
    else:
        where = (
            "e.headword LIKE ? ESCAPE '\\' "
            "OR e.phonetic LIKE ? ESCAPE '\\' "
            "OR e.definition LIKE ? ESCAPE '\\' "
            "OR e.synonyms LIKE ? ESCAPE '\\'"
        )
        params.extend([prefix, prefix, contains, contains])

    order = [
        "CASE WHEN e.headword = ? THEN 0 ELSE 1 END",
        "length(e.headword)",
    ]
    params.append(keyword)
    if store.schema.has_stroke_count:
        order.append("CASE WHEN length(e.headword) = 1 THEN e.stroke_count END")
    order.append("e.seq")

    sql = (
        f"SELECT * FROM ({store.projection}) AS e "
        f"WHERE {where} "
        f"ORDER BY {', '.join(order)} "
        "LIMIT ?"
    )
    params.append(limit)
    return sql, params


def search(store: LexiconStore, keyword: str, limit: int) -> list[EntryModel]:
    """Entries matching *keyword*, exact headword first, then shortest."""
    keyword = keyword.strip()
    if not keyword:
        return []
    sql, params = build_search_query(store, keyword, limit)
    rows = store.conn.execute(sql, params).fetchall()
    return [row_to_entry(row) for row in rows]
