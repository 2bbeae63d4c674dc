"""Tests for restless_economy.suffixes module."""

from __future__ import annotations

import pytest

from restless_economy.suffixes import (
    SUFFIX_TABLE,
    all_suffix_codes,
    all_suffix_words,
    best_suffix_for_power,
    levenshtein,
    lookup_by_power,
    lookup_by_suffix,
    lookup_by_word,
    suggest_suffixes,
)


class TestTable:
    def test_spans_thousand_to_centillion(self):
        assert SUFFIX_TABLE[0].code == "k"
        assert SUFFIX_TABLE[0].power == 3
        assert SUFFIX_TABLE[-1].code == "ce"
        assert SUFFIX_TABLE[-1].power == 303
        assert len(SUFFIX_TABLE) == 101

    def test_strictly_increasing_by_three(self):
        powers = [u.power for u in SUFFIX_TABLE]
        assert powers == list(range(3, 304, 3))

    def test_codes_and_words_unique(self):
        codes = all_suffix_codes()
        words = all_suffix_words()
        assert len(set(codes)) == len(codes)
        assert len(set(words)) == len(words)

    @pytest.mark.parametrize("code,power,word", [
        ("m", 6, "million"),
        ("qa", 15, "quadrillion"),
        ("qi", 18, "quintillion"),
        ("de", 33, "decillion"),
        ("ud", 36, "undecillion"),
        ("nvd", 60, "novemdecillion"),
        ("vg", 63, "vigintillion"),
        ("uvg", 66, "unvigintillion"),
        ("tg", 93, "trigintillion"),
        ("nvnvg", 300, "novemnonagintillion"),
    ])
    def test_known_entries(self, code: str, power: int, word: str):
        unit = lookup_by_suffix(code)
        assert unit is not None
        assert unit.power == power
        assert unit.word == word


class TestLookups:
    def test_suffix_case_insensitive(self):
        assert lookup_by_suffix("K").power == 3
        assert lookup_by_suffix(" Qa ").power == 15

    def test_aliases(self):
        assert lookup_by_suffix("dc") is lookup_by_suffix("de")
        assert lookup_by_suffix("ct") is lookup_by_suffix("ce")

    def test_unknown(self):
        assert lookup_by_suffix("zz") is None
        assert lookup_by_word("bajillion") is None

    def test_word_case_whitespace_plural(self):
        assert lookup_by_word("Million").power == 6
        assert lookup_by_word("QUINTILLION").power == 18
        assert lookup_by_word("millions").power == 6
        assert lookup_by_word("un decillion").power == 36

    def test_by_power(self):
        assert lookup_by_power(9).code == "b"
        assert lookup_by_power(10) is None

    @pytest.mark.parametrize("power,code", [(3, "k"), (4, "k"), (5, "k"), (6, "m"), (17, "qa"), (303, "ce"), (400, "ce")])
    def test_best_suffix_for_power(self, power: int, code: str):
        assert best_suffix_for_power(power).code == code

    def test_best_suffix_below_thousand(self):
        assert best_suffix_for_power(2) is None


class TestSuggestions:
    def test_levenshtein(self):
        assert levenshtein("", "abc") == 3
        assert levenshtein("kitten", "sitting") == 3
        assert levenshtein("qa", "qa") == 0

    def test_close_codes_first(self):
        suggestions = suggest_suffixes("qz")
        assert suggestions
        assert len(suggestions) <= 8
        assert suggestions[0] in {"qa", "qi"}

    def test_misspelled_word(self):
        assert "million" in suggest_suffixes("milion")

    def test_deterministic(self):
        assert suggest_suffixes("bilion") == suggest_suffixes("bilion")

    def test_nothing_close(self):
        assert suggest_suffixes("xxxxxxxxxxxxxxxxxxxxxxxxxx") == []

    def test_long_token_is_cheap(self):
        assert suggest_suffixes("x" * 50_000) == []
        assert "million" in suggest_suffixes("millionxx")
