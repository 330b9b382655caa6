"""Domain model dataclasses and enums for zhuyin-dict."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Tone(str, Enum):
    """Mandarin tones keyed by their bopomofo tone mark."""

    FIRST = "ˉ"
    SECOND = "ˊ"
    THIRD = "ˇ"
    FOURTH = "ˋ"
    NEUTRAL = "˙"


class SchemaLayout(str, Enum):
    """Physical revision of the ``entries`` table."""

    CHARACTER = "character"
    IDIOM = "idiom"


class LookupState(str, Enum):
    """Composition state of the candidate lookup buffer."""

    IDLE = "idle"
    COMPOSING = "composing"
    RESOLVED = "resolved"


class MatchTier(str, Enum):
    """How a candidate syllable satisfied a query syllable."""

    STRICT = "strict"
    FALLBACK = "fallback"


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Syllable:
    """A parsed phonetic unit: base reading plus optional tone."""

    base: str
    tone: Tone | None

    def __str__(self) -> str:
        if self.tone is None:
            return self.base
        if self.tone is Tone.NEUTRAL:
            return self.tone.value + self.base
        return self.base + self.tone.value


@dataclass(frozen=True, slots=True)
class EntryModel:
    """One lexicon row in canonical shape."""

    headword: str
    phonetic: str
    definition: str
    radical: str = ""
    stroke_count: int = 0
    source: str = ""
    example: str = ""
    synonyms: str = ""
    antonyms: str = ""
    extended: dict[str, str] = field(default_factory=dict, compare=False)

    def senses(self) -> list[DefinitionItem]:
        """Split the definition into numbered items."""
        from zhuyin_dict.definitions import parse_definition

        return parse_definition(self.definition)


@dataclass(frozen=True, slots=True)
class HistoryRecord:
    """A recently viewed headword."""

    headword: str
    viewed_at: str


@dataclass(frozen=True, slots=True)
class FavoriteRecord:
    """A favorited headword and its insertion sequence."""

    headword: str
    seq: int


@dataclass(frozen=True, slots=True)
class DefinitionItem:
    """One numbered sense of a definition, with its example split off."""

    number: str | None
    text: str
    example: str | None
