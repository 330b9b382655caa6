"""Tests for syllable parsing and tone-sandhi-aware matching."""

import pytest

from zhuyin_dict.models import MatchTier, Syllable, Tone
from zhuyin_dict.tones import (
    SANDHI_RULES,
    accepted_tones,
    base_matches,
    match_tier,
    parse_syllable,
    syllable_matches,
)


class TestParseSyllable:

    @pytest.mark.parametrize(
        "raw, base, tone",
        [
            ("ㄅㄚ", "ㄅㄚ", None),
            ("ㄅㄚˉ", "ㄅㄚ", Tone.FIRST),
            ("ㄅㄚˊ", "ㄅㄚ", Tone.SECOND),
            ("ㄅㄚˇ", "ㄅㄚ", Tone.THIRD),
            ("ㄅㄚˋ", "ㄅㄚ", Tone.FOURTH),
            ("˙ㄇㄚ", "ㄇㄚ", Tone.NEUTRAL),
            ("ㄇㄚ˙", "ㄇㄚ", Tone.NEUTRAL),
            ("", "", None),
        ],
    )
    def test_parse(self, raw, base, tone):
        assert parse_syllable(raw) == Syllable(base, tone)

    def test_str_round_trip(self):
        assert str(parse_syllable("˙ㄇㄚ")) == "˙ㄇㄚ"
        assert str(parse_syllable("ㄅㄚˋ")) == "ㄅㄚˋ"
        assert str(parse_syllable("ㄅㄚ")) == "ㄅㄚ"


class TestStrictMatch:

    def test_negation_sandhi(self):
        assert syllable_matches("ㄅㄨˊ", "ㄅㄨˊ")
        assert syllable_matches("ㄅㄨˊ", "ㄅㄨˋ")
        assert not syllable_matches("ㄅㄨˊ", "ㄅㄨˇ")

    def test_toneless_query_accepts_any_tone(self):
        for candidate in ("ㄧ", "ㄧˉ", "ㄧˊ", "ㄧˇ", "ㄧˋ", "˙ㄧ"):
            assert syllable_matches("ㄧ", candidate)

    def test_yi_sandhi(self):
        assert syllable_matches("ㄧˊ", "ㄧ")
        assert syllable_matches("ㄧˊ", "ㄧˉ")
        assert syllable_matches("ㄧˋ", "ㄧ")
        assert not syllable_matches("ㄧˊ", "ㄧˇ")

    def test_yi_sandhi_keeps_exact_tone(self):
        assert syllable_matches("ㄧˊ", "ㄧˊ")

    def test_first_tone_matches_unmarked(self):
        assert syllable_matches("ㄅㄚˉ", "ㄅㄚ")
        assert syllable_matches("ㄅㄚˉ", "ㄅㄚˉ")
        assert not syllable_matches("ㄅㄚˉ", "ㄅㄚˋ")

    def test_other_tones_need_equality(self):
        assert syllable_matches("ㄅㄚˇ", "ㄅㄚˇ")
        assert not syllable_matches("ㄅㄚˇ", "ㄅㄚˊ")
        assert not syllable_matches("ㄅㄚˇ", "ㄅㄚ")

    def test_base_must_be_equal(self):
        assert not syllable_matches("ㄅ", "ㄅㄚ")
        assert not syllable_matches("ㄅㄚ", "ㄆㄚ")

    def test_empty_query_matches_nothing(self):
        assert not syllable_matches("", "")
        assert not syllable_matches("ˋ", "ㄅㄚˋ")

    def test_accepts_parsed_syllables(self):
        assert syllable_matches(Syllable("ㄅㄚ", Tone.FOURTH), Syllable("ㄅㄚ", Tone.FOURTH))


class TestRuleTable:

    def test_rules_are_data(self):
        assert SANDHI_RULES[("ㄅㄨ", Tone.SECOND)] == {Tone.SECOND, Tone.FOURTH}
        assert SANDHI_RULES[(None, Tone.FIRST)] == {None, Tone.FIRST}

    def test_accepted_tones(self):
        assert accepted_tones(Syllable("ㄅㄚ", None)) is None
        assert accepted_tones(Syllable("ㄅㄚ", Tone.THIRD)) == {Tone.THIRD}
        assert accepted_tones(Syllable("ㄧ", Tone.FOURTH)) == {None, Tone.FIRST, Tone.FOURTH}

    def test_new_rule_changes_matching(self, monkeypatch):
        monkeypatch.setitem(
            SANDHI_RULES, ("ㄑㄧ", Tone.SECOND), frozenset({Tone.FIRST, None})
        )
        assert syllable_matches("ㄑㄧˊ", "ㄑㄧ")


class TestMatchTier:

    def test_strict(self):
        assert match_tier("ㄅㄚˋ", "ㄅㄚˋ") is MatchTier.STRICT

    def test_fallback_ignores_tone(self):
        assert match_tier("ㄇㄚˇ", "ㄇㄚ") is MatchTier.FALLBACK
        assert base_matches("ㄇㄚˇ", "˙ㄇㄚ")

    def test_toneless_query_is_always_strict(self):
        assert match_tier("ㄇㄚ", "ㄇㄚˇ") is MatchTier.STRICT
        assert match_tier("ㄇㄚ", "ㄆㄚ") is None

    def test_no_match(self):
        assert match_tier("ㄇㄚˇ", "ㄅㄚˇ") is None
