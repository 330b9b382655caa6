"""Lexicon search and bopomofo candidate lookup for a character/idiom dictionary."""

__version__ = "0.1.0"

from .bopomofo import (
    is_phonetic_symbol as is_phonetic_symbol,
    normalize_phonetic as normalize_phonetic,
    pair_syllables as pair_syllables,
    split as split,
)
from .candidates import CandidateLookup as CandidateLookup
from .config import (
    DEFAULT_CONFIG as DEFAULT_CONFIG,
    EngineConfig as EngineConfig,
    load_config as load_config,
)
from .db import LexiconStore as LexiconStore
from .definitions import parse_definition as parse_definition
from .engine import LexiconEngine as LexiconEngine
from .exceptions import (
    ConfigError as ConfigError,
    SchemaMismatchError as SchemaMismatchError,
    StoreUnavailableError as StoreUnavailableError,
    ZhuyinDictError as ZhuyinDictError,
)
from .models import (
    DefinitionItem as DefinitionItem,
    EntryModel as EntryModel,
    FavoriteRecord as FavoriteRecord,
    HistoryRecord as HistoryRecord,
    LookupState as LookupState,
    MatchTier as MatchTier,
    SchemaLayout as SchemaLayout,
    Syllable as Syllable,
    Tone as Tone,
)
from .tones import (
    match_tier as match_tier,
    parse_syllable as parse_syllable,
    syllable_matches as syllable_matches,
)

__all__ = [
    # Engine
    "LexiconEngine",
    "LexiconStore",
    "CandidateLookup",
    # Configuration
    "EngineConfig",
    "DEFAULT_CONFIG",
    "load_config",
    # Models
    "DefinitionItem",
    "EntryModel",
    "FavoriteRecord",
    "HistoryRecord",
    "LookupState",
    "MatchTier",
    "SchemaLayout",
    "Syllable",
    "Tone",
    # Phonetics
    "is_phonetic_symbol",
    "normalize_phonetic",
    "pair_syllables",
    "split",
    "parse_syllable",
    "syllable_matches",
    "match_tier",
    "parse_definition",
    # Exceptions
    "ZhuyinDictError",
    "StoreUnavailableError",
    "SchemaMismatchError",
    "ConfigError",
]
