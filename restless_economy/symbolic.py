"""Symbolic magnitudes past the exact ceiling.

A ``HugeSymbolic`` records *how* a value too large to hold as digits was
produced (a power tower, a scientific literal, a well-known name, or one of
those times a finite factor) so two of them can be ordered and displayed
without ever materializing their digits. They only take part in comparison
and formatting; exact arithmetic on them raises ``SymbolicArithmeticError``.

Ordering is approximate: height first, then base, then scaling factor.
Scientific values count as height 1 and order by exponent, then coefficient.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .errors import IllFormedTowerError, SymbolicArithmeticError
from .huge import CEILING_POWER, ONE, HugeDecimal, digit_count

# Integers and coefficients longer than this are shown in e-notation.
_MAX_PLAIN_DIGITS = 12


# ═══════════════════════════════════════════════════════════════
#  Expression variants
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class PowerTower:
    """``base↑↑height``: base raised to itself ``height`` times."""

    base: int
    height: int


@dataclass(frozen=True)
class ScientificMagnitude:
    """``coefficient × 10**exponent`` with ``1 <= coefficient < 10``."""

    coefficient: HugeDecimal
    exponent: int


@dataclass(frozen=True)
class NamedMagnitude:
    name: str
    expr: Union[PowerTower, ScientificMagnitude]


@dataclass(frozen=True)
class ScaledMagnitude:
    inner: Union[PowerTower, ScientificMagnitude, NamedMagnitude]
    factor: HugeDecimal


SymbolicExpr = Union[PowerTower, ScientificMagnitude, NamedMagnitude, ScaledMagnitude]


NAMED_MAGNITUDES: dict[str, Union[PowerTower, ScientificMagnitude]] = {
    "millinillion": ScientificMagnitude(ONE, 3003),
    "googolplex": ScientificMagnitude(ONE, 10**100),
}


# ═══════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════


def _tower_fits_exactly(base: int, height: int) -> bool:
    """True when base↑↑height is below 10**(CEILING_POWER + 1)."""
    limit = CEILING_POWER + 1
    value = base
    if digit_count(value) > limit:
        return False
    for _ in range(height - 1):
        # digits(base**value) is roughly value * log10(base)
        if value * math.log10(base) > limit + 2:
            return False
        value = base**value
        if digit_count(value) > limit:
            return False
    return True


def _normalize_scientific(coefficient: HugeDecimal, exponent: int) -> ScientificMagnitude:
    if not coefficient.is_positive():
        raise ValueError("coefficient must be positive")
    order = coefficient.order_of_magnitude()
    return ScientificMagnitude(coefficient.mul_pow10(-order), exponent + order)


def _short_int(n: int) -> str:
    if digit_count(n) <= _MAX_PLAIN_DIGITS:
        return str(n)
    return _short_decimal(HugeDecimal.from_int(n))


def _short_decimal(value: HugeDecimal) -> str:
    """Plain digits when short, otherwise truncated ``c.cce<N>``."""
    digits = digit_count(value.magnitude)
    if value.order_of_magnitude() < _MAX_PLAIN_DIGITS and digits <= _MAX_PLAIN_DIGITS:
        return value.to_plain_string()
    order = value.order_of_magnitude()
    coefficient = value.mul_pow10(-order).divide_truncating(ONE, 2)
    return f"{coefficient.to_plain_string()}e{order}"


def _describe_scientific(expr: ScientificMagnitude) -> str:
    coefficient = expr.coefficient
    if digit_count(coefficient.magnitude) > 6:
        coefficient = coefficient.divide_truncating(ONE, 5)
    text = coefficient.to_plain_string()
    if digit_count(abs(expr.exponent)) <= _MAX_PLAIN_DIGITS:
        return f"{text}e{expr.exponent}"
    return f"{text} × 10^({_short_int(expr.exponent)})"


def _describe_expr(expr: SymbolicExpr) -> str:
    match expr:
        case PowerTower(base=base, height=height):
            if height <= 3:
                return "^".join([_short_int(base)] * height)
            return f"{_short_int(base)}↑↑{height}"
        case ScientificMagnitude():
            return _describe_scientific(expr)
        case NamedMagnitude(name=name):
            return name
        case ScaledMagnitude(inner=inner, factor=factor):
            return f"{_short_decimal(factor)} × {_describe_expr(inner)}"
    raise TypeError(f"Unknown symbolic expression: {expr!r}")


def _sort_key(expr: SymbolicExpr) -> tuple:
    factor = ONE
    if isinstance(expr, ScaledMagnitude):
        factor = expr.factor
        expr = expr.inner
    if isinstance(expr, NamedMagnitude):
        expr = expr.expr
    match expr:
        case ScientificMagnitude(coefficient=coefficient, exponent=exponent):
            return (1, exponent, coefficient, factor)
        case PowerTower(base=base, height=1):
            sci = _normalize_scientific(HugeDecimal.from_int(base), 0)
            return (1, sci.exponent, sci.coefficient, factor)
        case PowerTower(base=base, height=height):
            return (height, base, ONE, factor)
    raise TypeError(f"Unknown symbolic expression: {expr!r}")


# ═══════════════════════════════════════════════════════════════
#  HugeSymbolic
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class HugeSymbolic:
    """A magnitude strictly greater than every representable HugeDecimal."""

    expr: SymbolicExpr

    @classmethod
    def from_tower(cls, base: int, height: int) -> HugeSymbolic:
        if base < 2 or height < 1:
            raise IllFormedTowerError(
                f"Tower needs base >= 2 and height >= 1 (got base={base}, height={height})",
                {"base": base, "height": height},
            )
        if _tower_fits_exactly(base, height):
            raise IllFormedTowerError(
                f"{base}↑↑{height} fits in the exact range; use HugeDecimal",
                {"base": base, "height": height},
            )
        return cls(PowerTower(base, height))

    @classmethod
    def from_scientific(cls, coefficient: HugeDecimal, exponent: int) -> HugeSymbolic:
        """``coefficient × 10**exponent``; must land past the ceiling."""
        expr = _normalize_scientific(coefficient, exponent)
        if expr.exponent <= CEILING_POWER:
            raise ValueError(f"1e{expr.exponent} is within the exact range; use HugeDecimal")
        return cls(expr)

    @classmethod
    def from_exact(cls, value: HugeDecimal) -> HugeSymbolic:
        """Promote an exact value that overflowed the ceiling."""
        if value.is_negative():
            raise SymbolicArithmeticError("Symbolic magnitudes are positive", {"value": repr(value)})
        return cls.from_scientific(value, 0)

    @classmethod
    def named(cls, name: str) -> HugeSymbolic:
        key = name.strip().lower()
        if key not in NAMED_MAGNITUDES:
            raise KeyError(name)
        return cls(NamedMagnitude(key, NAMED_MAGNITUDES[key]))

    # ── Arithmetic ─────────────────────────────────────────────

    def multiply_by_exact(self, factor: HugeDecimal) -> HugeSymbolic:
        """Scale by a finite positive factor.

        The factor is never folded into a tower's base or height; it only
        combines with an existing scale factor.
        """
        if not factor.is_positive():
            raise SymbolicArithmeticError(
                "Symbolic magnitudes can only be scaled by a positive factor",
                {"factor": repr(factor)},
            )
        if factor == ONE:
            return self
        if isinstance(self.expr, ScaledMagnitude):
            combined = self.expr.factor.mul(factor)
            if combined == ONE:
                return HugeSymbolic(self.expr.inner)
            return HugeSymbolic(ScaledMagnitude(self.expr.inner, combined))
        return HugeSymbolic(ScaledMagnitude(self.expr, factor))

    # ── Comparison ─────────────────────────────────────────────

    def compare(self, other: HugeSymbolic) -> int:
        a = _sort_key(self.expr)
        b = _sort_key(other.expr)
        return (a > b) - (a < b)

    def _compare_any(self, other: object) -> int | None:
        if isinstance(other, HugeSymbolic):
            return self.compare(other)
        if isinstance(other, HugeDecimal) or (isinstance(other, int) and not isinstance(other, bool)):
            return 1
        return None

    def __lt__(self, other: object) -> bool:
        result = self._compare_any(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other: object) -> bool:
        result = self._compare_any(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other: object) -> bool:
        result = self._compare_any(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other: object) -> bool:
        result = self._compare_any(other)
        return NotImplemented if result is None else result >= 0

    # ── Display ────────────────────────────────────────────────

    def describe(self) -> str:
        """Short human label; never exact digits."""
        return _describe_expr(self.expr)

    def __str__(self) -> str:
        return self.describe()
