"""Tests for restless_economy.amount module."""

from __future__ import annotations

import pytest

from restless_economy.amount import (
    add_amounts,
    compare_amounts,
    is_symbolic,
    max_amount,
    min_amount,
    mul_amounts,
    promote,
    require_exact,
    sub_amounts,
)
from restless_economy.errors import SymbolicArithmeticError
from restless_economy.huge import HugeDecimal
from restless_economy.symbolic import HugeSymbolic, ScaledMagnitude


def hd(text: str) -> HugeDecimal:
    return HugeDecimal.from_string(text)


class TestCompare:
    def test_exact_vs_exact(self):
        assert compare_amounts(hd("1"), hd("2")) == -1
        assert compare_amounts(hd("2"), hd("2.0")) == 0

    def test_exact_always_below_symbolic(self):
        tower = HugeSymbolic.from_tower(10, 3)
        assert compare_amounts(hd("9.9e303"), tower) == -1
        assert compare_amounts(tower, hd("-5")) == 1

    def test_symbolic_vs_symbolic(self):
        a = HugeSymbolic.from_scientific(hd("1"), 500)
        b = HugeSymbolic.from_scientific(hd("1"), 600)
        assert compare_amounts(a, b) == -1
        assert compare_amounts(b, b) == 0

    def test_not_an_amount(self):
        with pytest.raises(TypeError):
            compare_amounts(1, hd("1"))

    def test_sorting_mixed(self):
        values = [HugeSymbolic.from_tower(10, 4), hd("5"), HugeSymbolic.from_exact(hd("1e400")), hd("-1")]
        ordered = sorted(values, key=lambda v: (is_symbolic(v), v))
        assert ordered[0] == hd("-1")
        assert ordered[-1] == HugeSymbolic.from_tower(10, 4)

    def test_min_max(self):
        s = HugeSymbolic.from_tower(10, 3)
        assert max_amount(hd("1e300"), s) is s
        assert min_amount(hd("1e300"), s) == hd("1e300")


class TestPromotion:
    def test_within_range_stays_exact(self):
        v = hd("9e303")
        assert promote(v) is v

    def test_past_ceiling_promotes(self):
        assert isinstance(promote(hd("1e304")), HugeSymbolic)

    def test_negative_never_promotes(self):
        v = hd("-1e304")
        assert promote(v) is v

    def test_add_overflowing_ceiling(self):
        total = add_amounts(hd("9e303"), hd("9e303"))
        assert isinstance(total, HugeSymbolic)
        assert total.describe() == "1.8e304"


class TestArithmetic:
    def test_exact_add_sub(self):
        assert add_amounts(hd("1.5"), hd("2.5")) == hd("4")
        assert sub_amounts(hd("1"), hd("3")) == hd("-2")

    def test_symbolic_refuses_exact_arithmetic(self):
        s = HugeSymbolic.from_tower(10, 3)
        with pytest.raises(SymbolicArithmeticError):
            add_amounts(s, hd("1"))
        with pytest.raises(SymbolicArithmeticError):
            sub_amounts(hd("1"), s)
        with pytest.raises(SymbolicArithmeticError):
            require_exact(s)

    def test_mul_symbolic_by_exact(self):
        s = HugeSymbolic.from_tower(10, 3)
        scaled = mul_amounts(hd("3"), s)
        assert isinstance(scaled.expr, ScaledMagnitude)
        assert mul_amounts(s, hd("3")) == scaled

    def test_mul_two_symbolics(self):
        s = HugeSymbolic.from_tower(10, 3)
        with pytest.raises(SymbolicArithmeticError):
            mul_amounts(s, s)

    def test_mul_exact_promotes(self):
        assert isinstance(mul_amounts(hd("1e200"), hd("1e200")), HugeSymbolic)
