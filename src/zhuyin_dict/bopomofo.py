"""Bopomofo alphabet and per-character syllable splitting."""

from __future__ import annotations

import re

INITIALS: tuple[str, ...] = (
    "ㄅ", "ㄆ", "ㄇ", "ㄈ", "ㄉ", "ㄊ", "ㄋ", "ㄌ", "ㄍ", "ㄎ", "ㄏ",
    "ㄐ", "ㄑ", "ㄒ", "ㄓ", "ㄔ", "ㄕ", "ㄖ", "ㄗ", "ㄘ", "ㄙ",
)
MEDIALS: tuple[str, ...] = ("ㄧ", "ㄨ", "ㄩ")
FINALS: tuple[str, ...] = (
    "ㄚ", "ㄛ", "ㄜ", "ㄝ", "ㄞ", "ㄟ", "ㄠ", "ㄡ", "ㄢ", "ㄣ", "ㄤ", "ㄥ", "ㄦ",
)
TONE_MARKS: tuple[str, ...] = ("ˉ", "ˊ", "ˇ", "ˋ", "˙")

PHONETIC_SYMBOLS: frozenset[str] = frozenset(INITIALS + MEDIALS + FINALS + TONE_MARKS)

# Keyboard order: initials, then medials, then finals
KEYBOARD_LAYOUT: tuple[str, ...] = INITIALS + MEDIALS + FINALS

_OPEN_PARENS = ("（", "(")
_VARIANT_PREFIX = re.compile(r"^[（(][^）)]*[）)]\s*")
_VARIANT_MARKER = re.compile(r"[（(]")


def is_phonetic_symbol(ch: str) -> bool:
    """True iff *ch* is a single bopomofo letter or tone mark."""
    return ch in PHONETIC_SYMBOLS


def normalize_phonetic(phonetic: str) -> str:
    """Reduce a transcription to its primary reading.

    Full-width spaces become regular spaces, leading variant annotations
    such as ``（一）`` or ``（變）`` are dropped, and anything from the next
    parenthesis onward (an alternate reading) is cut off.
    """
    text = phonetic.replace("　", " ").strip()
    while text.startswith(_OPEN_PARENS):
        stripped = _VARIANT_PREFIX.sub("", text, count=1)
        if stripped == text:
            # unbalanced parenthesis; nothing more to strip
            break
        text = stripped.strip()
    marker = _VARIANT_MARKER.search(text)
    if marker:
        text = text[: marker.start()].strip()
    return text


def split(phonetic: str, count: int) -> list[str]:
    """Split a transcription into exactly *count* syllables.

    Extra syllables are discarded; missing ones are padded with ``""``.
    An empty syllable means "no phonetic data", not a mismatch.
    """
    if count <= 0:
        return []
    parts = normalize_phonetic(phonetic).split()
    if len(parts) >= count:
        return parts[:count]
    return parts + [""] * (count - len(parts))


def pair_syllables(headword: str, phonetic: str) -> list[tuple[str, str]]:
    """Pair each character of *headword* with its syllable."""
    chars = list(headword)
    return list(zip(chars, split(phonetic, len(chars))))


def trailing_run(buffer: str) -> str:
    """Maximal run of phonetic symbols at the end of *buffer*."""
    end = len(buffer)
    start = end
    while start > 0 and is_phonetic_symbol(buffer[start - 1]):
        start -= 1
    return buffer[start:end]


def strip_trailing_run(buffer: str) -> str:
    """*buffer* without its trailing run of phonetic symbols."""
    return buffer[: len(buffer) - len(trailing_run(buffer))]
