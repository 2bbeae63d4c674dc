"""Amount: the closed union of exact and symbolic values.

Call sites that may see either kind (comparison, display, parse results) go
through these helpers, which dispatch exhaustively over the two kinds.
"""

from __future__ import annotations

from typing import Union

from .errors import SymbolicArithmeticError
from .huge import HugeDecimal
from .symbolic import HugeSymbolic

Amount = Union[HugeDecimal, HugeSymbolic]


def is_symbolic(value: Amount) -> bool:
    return isinstance(value, HugeSymbolic)


def compare_amounts(a: Amount, b: Amount) -> int:
    """Total order: every HugeDecimal sorts below every HugeSymbolic."""
    match (a, b):
        case (HugeDecimal(), HugeDecimal()):
            return a.compare(b)
        case (HugeDecimal(), HugeSymbolic()):
            return -1
        case (HugeSymbolic(), HugeDecimal()):
            return 1
        case (HugeSymbolic(), HugeSymbolic()):
            return a.compare(b)
    raise TypeError(f"Not an amount: {type(a).__name__}, {type(b).__name__}")


def promote(value: HugeDecimal) -> Amount:
    """Exact values past the ceiling become scientific symbolic magnitudes."""
    if value.is_positive() and value.exceeds_ceiling():
        return HugeSymbolic.from_exact(value)
    return value


def require_exact(value: Amount) -> HugeDecimal:
    match value:
        case HugeDecimal():
            return value
        case HugeSymbolic():
            raise SymbolicArithmeticError(
                f"{value.describe()} is symbolic and cannot be used in exact arithmetic",
                {"value": value.describe()},
            )
    raise TypeError(f"Not an amount: {type(value).__name__}")


def add_amounts(a: Amount, b: Amount) -> Amount:
    return promote(require_exact(a).add(require_exact(b)))


def sub_amounts(a: Amount, b: Amount) -> Amount:
    return promote(require_exact(a).sub(require_exact(b)))


def mul_amounts(a: Amount, b: Amount) -> Amount:
    """Exact × exact, or symbolic × positive exact (a scaled magnitude)."""
    match (a, b):
        case (HugeDecimal(), HugeDecimal()):
            return promote(a.mul(b))
        case (HugeSymbolic(), HugeDecimal()):
            return a.multiply_by_exact(b)
        case (HugeDecimal(), HugeSymbolic()):
            return b.multiply_by_exact(a)
        case (HugeSymbolic(), HugeSymbolic()):
            raise SymbolicArithmeticError(
                "Cannot multiply two symbolic magnitudes",
                {"a": a.describe(), "b": b.describe()},
            )
    raise TypeError(f"Not an amount: {type(a).__name__}, {type(b).__name__}")


def max_amount(a: Amount, b: Amount) -> Amount:
    return a if compare_amounts(a, b) >= 0 else b


def min_amount(a: Amount, b: Amount) -> Amount:
    return a if compare_amounts(a, b) <= 0 else b
