"""Syllable parsing and tone-sandhi-aware syllable matching."""

from __future__ import annotations

from zhuyin_dict.models import MatchTier, Syllable, Tone

# Pitch marks written after the syllable; the neutral mark is written before
# it in source data but typed after it on the keyboard.
_TRAILING_MARKS: dict[str, Tone] = {
    Tone.FIRST.value: Tone.FIRST,
    Tone.SECOND.value: Tone.SECOND,
    Tone.THIRD.value: Tone.THIRD,
    Tone.FOURTH.value: Tone.FOURTH,
    Tone.NEUTRAL.value: Tone.NEUTRAL,
}

_UNMARKED_OR_FIRST: frozenset[Tone | None] = frozenset({None, Tone.FIRST})

# (query base, query tone) -> extra candidate tones accepted besides the
# queried tone itself. A base of None applies to every base.
SANDHI_RULES: dict[tuple[str | None, Tone], frozenset[Tone | None]] = {
    # 不 before a fourth tone is read with a second tone
    ("ㄅㄨ", Tone.SECOND): frozenset({Tone.SECOND, Tone.FOURTH}),
    # 一 is cited unmarked even where it is read ˊ or ˋ
    ("ㄧ", Tone.SECOND): _UNMARKED_OR_FIRST,
    ("ㄧ", Tone.FOURTH): _UNMARKED_OR_FIRST,
    # first tone is conventionally left unmarked
    (None, Tone.FIRST): _UNMARKED_OR_FIRST,
}


def parse_syllable(raw: str) -> Syllable:
    """Parse a raw syllable into its base and tone.

    A leading neutral mark wins; otherwise a trailing tone mark is taken.
    No mark means the tone is unknown (an implicit first tone in data).
    """
    text = raw.strip()
    if text.startswith(Tone.NEUTRAL.value):
        return Syllable(text[1:], Tone.NEUTRAL)
    if text and text[-1] in _TRAILING_MARKS:
        return Syllable(text[:-1], _TRAILING_MARKS[text[-1]])
    return Syllable(text, None)


def accepted_tones(query: Syllable) -> frozenset[Tone | None] | None:
    """Candidate tones a query accepts, or None when any tone is fine."""
    if query.tone is None:
        return None
    extra = SANDHI_RULES.get((query.base, query.tone))
    if extra is None:
        extra = SANDHI_RULES.get((None, query.tone), frozenset())
    return extra | {query.tone}


def syllable_matches(query: Syllable | str, candidate: Syllable | str) -> bool:
    """Strict match: equal bases and a tone the query accepts."""
    query = _as_syllable(query)
    candidate = _as_syllable(candidate)
    if not query.base or candidate.base != query.base:
        return False
    tones = accepted_tones(query)
    return tones is None or candidate.tone in tones


def base_matches(query: Syllable | str, candidate: Syllable | str) -> bool:
    """Fallback match: equal bases, tone ignored."""
    query = _as_syllable(query)
    candidate = _as_syllable(candidate)
    return bool(query.base) and candidate.base == query.base


def match_tier(query: Syllable | str, candidate: Syllable | str) -> MatchTier | None:
    """Best tier at which *candidate* satisfies *query*.

    The fallback tier only exists for queries that carry an explicit tone;
    a toneless query already ignores tone in the strict tier.
    """
    query = _as_syllable(query)
    if syllable_matches(query, candidate):
        return MatchTier.STRICT
    if query.tone is not None and base_matches(query, candidate):
        return MatchTier.FALLBACK
    return None


def _as_syllable(value: Syllable | str) -> Syllable:
    if isinstance(value, Syllable):
        return value
    return parse_syllable(value)
