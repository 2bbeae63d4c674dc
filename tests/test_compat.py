"""Tests for restless_economy.compat module."""

from __future__ import annotations

import json

import pytest

from restless_economy.compat import (
    LegacyParse,
    db_to_int,
    fmt_coins,
    fmt_coins_exact,
    int_to_db,
    parse_human_amount,
    to_huge,
    to_int_strict,
)
from restless_economy.errors import (
    InexactConversionError,
    IntegerOverflowError,
    MagnitudeTooLargeError,
    NegativeInputError,
    SymbolicArithmeticError,
    UnparsableNumberError,
)
from restless_economy.huge import INT64_MAX, HugeDecimal
from restless_economy.symbolic import HugeSymbolic


def hd(text: str) -> HugeDecimal:
    return HugeDecimal.from_string(text)


class TestParseHumanAmount:
    def test_suffixed(self):
        result = parse_human_amount("2.5m")
        assert result == LegacyParse(value=2_500_000, normalized="2500000", raw="2.5m", huge=hd("2.5e6"))

    def test_errors_are_typed(self):
        with pytest.raises(NegativeInputError):
            parse_human_amount("-5")
        with pytest.raises(UnparsableNumberError):
            parse_human_amount("nope")
        with pytest.raises(MagnitudeTooLargeError):
            parse_human_amount("1t", max_power=9)

    def test_fraction_truncates_toward_zero(self):
        result = parse_human_amount("1.5")
        assert result.value == 1
        assert result.huge == hd("1.5")
        assert result.normalized == "1.5"
        assert parse_human_amount("0.999").value == 0
        assert parse_human_amount("2.5k").value == 2500

    def test_symbolic_rejected(self):
        with pytest.raises(SymbolicArithmeticError):
            parse_human_amount("1e400")


class TestConversions:
    def test_to_huge(self):
        assert to_huge(5) == hd("5")
        assert to_huge(5.9) == hd("5")
        assert to_huge("-1.5k") == hd("-1500")
        value = hd("7")
        assert to_huge(value) is value

    def test_to_huge_rejects_other_types(self):
        with pytest.raises(TypeError):
            to_huge(None)
        with pytest.raises(TypeError):
            to_huge(False)

    def test_to_int_strict(self):
        assert to_int_strict(hd("1e18")) == 10**18
        assert to_int_strict(INT64_MAX) == INT64_MAX

    def test_to_int_strict_never_wraps(self):
        with pytest.raises(IntegerOverflowError):
            to_int_strict(hd("1e19"))
        with pytest.raises(IntegerOverflowError):
            to_int_strict(INT64_MAX + 1)

    def test_to_int_strict_symbolic(self):
        with pytest.raises(SymbolicArithmeticError):
            to_int_strict(HugeSymbolic.from_tower(10, 3))


class TestStorage:
    def test_int_to_db(self):
        assert int_to_db(10**25) == "1" + "0" * 25
        assert int_to_db(-42) == "-42"

    def test_db_to_int(self):
        assert db_to_int("123") == 123
        assert db_to_int(" 123 ") == 123
        assert db_to_int(456) == 456
        assert db_to_int(None) == 0
        assert db_to_int(json.dumps({"t": "hd", "s": 1, "m": "5", "sc": 0, "e": 30})) == 5 * 10**30

    def test_db_to_int_fraction(self):
        with pytest.raises(InexactConversionError):
            db_to_int("1.5")

    def test_db_to_int_bad_type(self):
        with pytest.raises(UnparsableNumberError):
            db_to_int(1.5)


class TestFormatting:
    def test_fmt_coins(self):
        assert fmt_coins(1500) == "1.50k"
        assert fmt_coins(hd("2e9")) == "2.00b"

    def test_fmt_coins_exact(self):
        assert fmt_coins_exact(10**12) == "1000000000000"
