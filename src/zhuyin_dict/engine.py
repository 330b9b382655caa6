"""LexiconEngine, the main entry point for the zhuyin-dict library."""

from __future__ import annotations

import functools
import logging
import sqlite3
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from zhuyin_dict import candidates as _cand
from zhuyin_dict import history as _hist
from zhuyin_dict import search as _search
from zhuyin_dict.config import DEFAULT_CONFIG, EngineConfig
from zhuyin_dict.db import LexiconStore
from zhuyin_dict.exceptions import StoreUnavailableError
from zhuyin_dict.models import EntryModel

logger = logging.getLogger(__name__)

_F = TypeVar("_F", bound=Callable[..., Any])


def _uses_store(default: Callable[[], Any], *, writes: bool = False) -> Callable[[_F], _F]:
    """Decorator: degrade to ``default()`` when the store is missing or fails.

    The open store is passed to the method right after ``self``. Writing
    methods run in a single transaction.
    """

    def decorate(method: _F) -> _F:
        @functools.wraps(method)
        def wrapper(self: LexiconEngine, *args: Any, **kwargs: Any) -> Any:
            store = self._store
            if store is None:
                return default()
            try:
                if writes:
                    with store.conn:
                        return method(self, store, *args, **kwargs)
                return method(self, store, *args, **kwargs)
            except sqlite3.Error:
                logger.exception("%s failed", method.__name__)
                return default()

        return wrapper  # type: ignore[return-value]

    return decorate


class LexiconEngine:
    """Search, keyboard candidates, history and favorites over one store."""

    def __init__(
        self,
        store: LexiconStore | None,
        config: EngineConfig | None = None,
    ) -> None:
        self._store = store
        self._config = config or DEFAULT_CONFIG

    @classmethod
    def open(
        cls,
        db_path: str | Path,
        *,
        seed: str | Path | None = None,
        config: EngineConfig | None = None,
    ) -> LexiconEngine:
        """Open an engine on a lexicon file.

        An unavailable store is logged and yields an engine whose queries
        all come back empty.
        """
        try:
            store = LexiconStore.open(db_path, seed=seed)
        except StoreUnavailableError as e:
            logger.warning("lexicon store unavailable: %s", e)
            store = None
        return cls(store, config)

    @property
    def available(self) -> bool:
        return self._store is not None

    @property
    def config(self) -> EngineConfig:
        return self._config

    def close(self) -> None:
        """Close the underlying store."""
        if self._store is not None:
            self._store.close()
            self._store = None

    def __enter__(self) -> LexiconEngine:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    @_uses_store(list)
    def search(self, store: LexiconStore, keyword: str) -> list[EntryModel]:
        limit = self._config.search_limit(store.layout)
        return _search.search(store, keyword, limit)

    # ------------------------------------------------------------------
    # Keyboard candidates
    # ------------------------------------------------------------------

    @_uses_store(list)
    def get_candidates(self, store: LexiconStore, partial_input: str) -> list[str]:
        return _cand.find_candidates(store, partial_input, self._config.candidate_limit)

    @_uses_store(list)
    def get_candidates_any_position(
        self, store: LexiconStore, partial_input: str
    ) -> list[str]:
        return _cand.find_candidates_any_position(
            store, partial_input, self._config.candidate_limit
        )

    def keyboard(self) -> _cand.CandidateLookup:
        """A fresh composition buffer backed by :meth:`get_candidates`."""
        return _cand.CandidateLookup(
            self.get_candidates, self.get_candidates_any_position
        )

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    @_uses_store(lambda: None, writes=True)
    def record_view(self, store: LexiconStore, headword: str) -> None:
        _hist.record_view(store.conn, headword, limit=self._config.history_limit)

    @_uses_store(list)
    def get_history(self, store: LexiconStore) -> list[EntryModel]:
        return _hist.list_history(store.conn, store.projection)

    @_uses_store(lambda: None, writes=True)
    def clear_history(self, store: LexiconStore) -> None:
        _hist.clear_history(store.conn)

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    @_uses_store(bool, writes=True)
    def toggle_favorite(self, store: LexiconStore, headword: str) -> bool:
        return _hist.toggle_favorite(
            store.conn, headword, limit=self._config.favorites_limit
        )

    @_uses_store(bool)
    def is_favorite(self, store: LexiconStore, headword: str) -> bool:
        return _hist.is_favorite(store.conn, headword)

    @_uses_store(list)
    def get_favorites(self, store: LexiconStore) -> list[EntryModel]:
        return _hist.list_favorites(store.conn, store.projection)
