"""Next-character candidates for a bopomofo keyboard buffer.

The buffer holds already committed characters followed by a trailing run
of bopomofo symbols still being composed. Candidates are the characters
that can follow the committed ones in some lexicon entry and whose
syllable at that position matches the run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from zhuyin_dict.bopomofo import split, strip_trailing_run, trailing_run
from zhuyin_dict.db import LexiconStore
from zhuyin_dict.models import LookupState, MatchTier, Syllable
from zhuyin_dict.search import CJK_CHAR, escape_like
from zhuyin_dict.tones import match_tier, parse_syllable

logger = logging.getLogger(__name__)


class _TieredPool:
    """Strict and fallback candidates, each deduplicated in first-seen order."""

    def __init__(self, limit: int) -> None:
        self._limit = limit
        self._pools: dict[MatchTier, dict[str, None]] = {
            MatchTier.STRICT: {},
            MatchTier.FALLBACK: {},
        }

    def add(self, tier: MatchTier, char: str) -> None:
        pool = self._pools[tier]
        if len(pool) < self._limit:
            pool.setdefault(char, None)

    @property
    def strict_full(self) -> bool:
        return len(self._pools[MatchTier.STRICT]) >= self._limit

    def result(self) -> list[str]:
        strict = self._pools[MatchTier.STRICT]
        if strict:
            return list(strict)
        return list(self._pools[MatchTier.FALLBACK])


def committed_context(buffer: str) -> str:
    """Trailing run of ideographs before the phonetic run."""
    committed = strip_trailing_run(buffer)
    start = len(committed)
    while start > 0 and CJK_CHAR.match(committed[start - 1]):
        start -= 1
    return committed[start:]


def _rows(
    store: LexiconStore,
    query: Syllable,
    context: str,
) -> Iterable[tuple[str, str]]:
    clauses = ["length(e.headword) > ?", "e.phonetic LIKE ? ESCAPE '\\'"]
    params: list[str | int] = [len(context), "%" + escape_like(query.base) + "%"]
    if context:
        clauses.append("e.headword LIKE ? ESCAPE '\\'")
        params.append(escape_like(context) + "%")
    order = ["length(e.headword)"]
    if store.schema.has_stroke_count:
        order.append("e.stroke_count")
    order.append("e.seq")
    sql = (
        f"SELECT e.headword, e.phonetic FROM ({store.projection}) AS e "
        f"WHERE {' AND '.join(clauses)} "
        f"ORDER BY {', '.join(order)}"
    )
    for row in store.conn.execute(sql, params):
        yield row[0], row[1]


def lookup_at_position(
    store: LexiconStore,
    run: str,
    context: str,
    limit: int,
) -> list[str]:
    """Characters following *context* whose syllable matches *run*.

    Tone-correct matches win; tone-ignoring matches are only returned
    when there are no tone-correct ones.
    """
    query = parse_syllable(run)
    if not query.base:
        return []
    position = len(context)
    pool = _TieredPool(limit)
    for headword, phonetic in _rows(store, query, context):
        syllable = split(phonetic, len(headword))[position]
        if not syllable:
            continue
        tier = match_tier(query, syllable)
        if tier is not None:
            pool.add(tier, headword[position])
        if pool.strict_full:
            break
    return pool.result()


def lookup_any_position(store: LexiconStore, run: str, limit: int) -> list[str]:
    """Characters at any syllable position whose syllable matches *run*."""
    query = parse_syllable(run)
    if not query.base:
        return []
    pool = _TieredPool(limit)
    for headword, phonetic in _rows(store, query, ""):
        for char, syllable in zip(headword, split(phonetic, len(headword))):
            tier = match_tier(query, syllable) if syllable else None
            if tier is not None:
                pool.add(tier, char)
        if pool.strict_full:
            break
    return pool.result()


def find_candidates(store: LexiconStore, buffer: str, limit: int) -> list[str]:
    """Candidates for the phonetic run at the end of *buffer*.

    When the committed characters start no entry that continues with the
    run, lookup restarts at the first position of a new word.
    """
    run = trailing_run(buffer)
    if not run:
        return []
    context = committed_context(buffer)
    found = lookup_at_position(store, run, context, limit)
    if not found and context:
        logger.debug("no continuation of %r for %r; starting a new word", context, run)
        found = lookup_at_position(store, run, "", limit)
    return found


def find_candidates_any_position(store: LexiconStore, buffer: str, limit: int) -> list[str]:
    """Looser lookup matching the run against every syllable position."""
    run = trailing_run(buffer)
    if not run:
        return []
    return lookup_any_position(store, run, limit)


class CandidateLookup:
    """Keyboard composition state over a candidate lookup function."""

    def __init__(
        self,
        lookup: Callable[[str], list[str]],
        any_position: Callable[[str], list[str]] | None = None,
    ) -> None:
        self._lookup = lookup
        self._any_position = any_position
        self.buffer = ""
        self.state = LookupState.IDLE
        self.candidates: list[str] = []

    def candidates_for(self, buffer: str) -> list[str]:
        """Candidates for *buffer* without touching the composition state."""
        if not trailing_run(buffer):
            return []
        return self._lookup(buffer)

    def candidates_any_position(self, buffer: str) -> list[str]:
        """Looser lookup for *buffer*; empty without an any-position lookup."""
        if self._any_position is None or not trailing_run(buffer):
            return []
        return self._any_position(buffer)

    def update(self, buffer: str) -> list[str]:
        """Set the buffer and refresh the candidate list."""
        self.buffer = buffer
        if trailing_run(buffer):
            self.state = LookupState.COMPOSING
            self.candidates = self.candidates_for(buffer)
        else:
            self.state = LookupState.IDLE
            self.candidates = []
        return self.candidates

    def press(self, symbol: str) -> list[str]:
        """Append a keyboard symbol to the buffer."""
        return self.update(self.buffer + symbol)

    def backspace(self) -> list[str]:
        """Remove the last character of the buffer."""
        return self.update(self.buffer[:-1])

    def select(self, char: str) -> str:
        """Commit *char* in place of the phonetic run and return the buffer."""
        self.buffer = strip_trailing_run(self.buffer) + char
        self.state = LookupState.RESOLVED
        self.candidates = []
        return self.buffer
