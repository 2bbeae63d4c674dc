"""Exact arbitrary-precision decimal core.

Every monetary quantity in the bot (balances, bets, loan principal and
interest, admin grants) is a ``HugeDecimal``. Values are exact up to the
centillion ceiling (10^303) and the type never wraps or clamps: failures
surface as the typed conditions in ``errors``.

Representation: ``value = sign * magnitude * 10**scale`` where ``magnitude``
never carries trailing zeros (they are folded into ``scale``), so every value
has exactly one internal state and equality is structural. Ints compare and
hash like the equal ``HugeDecimal``.
"""

from __future__ import annotations

import json
import math
import re
import sys
from dataclasses import dataclass

from .errors import (
    DivisionByZeroError,
    InexactConversionError,
    IntegerOverflowError,
    UnparsableNumberError,
)

# Largest suffix power (centillion). Exactness is guaranteed for |v| < 10**304.
CEILING_POWER = 303

# Native integer range (SQLite INTEGER / signed 64-bit).
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_LOG10_2 = math.log10(2)
_HASH_MODULUS = sys.hash_info.modulus

_NUMBER_RE = re.compile(r"^([+-]?)(\d+)(?:\.(\d+))?(?:[eE]([+-]?\d+))?$")


def digit_count(n: int) -> int:
    """Number of decimal digits in a non-negative int (1 for zero).

    Works from ``bit_length`` so it is not subject to the interpreter's
    int-to-str digit limit.
    """
    if n == 0:
        return 1
    d = int((n.bit_length() - 1) * _LOG10_2) + 1
    if n >= 10**d:
        d += 1
    return d


@dataclass(frozen=True)
class HugeDecimal:
    """Exact signed decimal in canonical form. Immutable."""

    sign: int
    magnitude: int
    scale: int

    def __post_init__(self) -> None:
        if self.sign not in (-1, 0, 1):
            raise ValueError(f"sign must be -1, 0 or 1, got {self.sign}")
        if self.magnitude < 0:
            raise ValueError("magnitude must be non-negative")
        if self.magnitude == 0:
            if self.sign != 0 or self.scale != 0:
                raise ValueError("zero must be represented as (0, 0, 0)")
        elif self.sign == 0:
            raise ValueError("non-zero magnitude requires a sign")
        elif self.magnitude % 10 == 0:
            raise ValueError("magnitude has trailing zeros; use HugeDecimal.from_components()")

    # ══════════════════════════════════════════════════════════
    #  Construction
    # ══════════════════════════════════════════════════════════

    @classmethod
    def from_components(cls, sign: int, magnitude: int, scale: int = 0) -> HugeDecimal:
        """Build a value from possibly non-canonical parts."""
        if magnitude < 0:
            raise ValueError("magnitude must be non-negative")
        if magnitude == 0 or sign == 0:
            return ZERO
        while magnitude % 10 == 0:
            magnitude //= 10
            scale += 1
        return cls(1 if sign > 0 else -1, magnitude, scale)

    @classmethod
    def from_scaled_int(cls, value: int, scale: int = 0) -> HugeDecimal:
        """``value * 10**scale`` for a signed int."""
        if value == 0:
            return ZERO
        return cls.from_components(1 if value > 0 else -1, abs(value), scale)

    @classmethod
    def from_int(cls, value: int) -> HugeDecimal:
        """Exact conversion from an int of any size."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        return cls.from_scaled_int(value, 0)

    @classmethod
    def from_float(cls, value: float) -> HugeDecimal:
        """Approximate conversion from a float, truncating toward zero.

        The currency has no sub-unit, so the fractional part is dropped.
        Do not route values that are already exact integers through here.
        """
        if not math.isfinite(value):
            raise InexactConversionError(f"Cannot convert non-finite number {value!r}")
        return cls.from_scaled_int(int(value), 0)

    @classmethod
    def from_string(cls, text: str) -> HugeDecimal:
        """Strict parse of ``[+-]digits[.digits][e[+-]N]``.

        This is the persisted/canonical form; human input with suffixes and
        separators goes through ``parse.parse_amount`` instead.
        """
        s = text.strip()
        m = _NUMBER_RE.match(s)
        if not m:
            raise UnparsableNumberError(f"Invalid number format: {text!r}", {"raw": text})
        sign_str, int_part, frac_part, exp_str = m.groups()
        frac_part = frac_part or ""
        try:
            exponent = int(exp_str) if exp_str else 0
        except ValueError as exc:
            raise UnparsableNumberError(f"Exponent out of range: {text!r}", {"raw": text}) from exc
        magnitude = int(int_part + frac_part)
        sign = -1 if sign_str == "-" else 1
        return cls.from_components(sign, magnitude, exponent - len(frac_part))

    @classmethod
    def from_db_string(cls, value: str | None) -> HugeDecimal:
        """Load a persisted amount.

        Accepts the canonical exact string, legacy plain integers and the
        legacy JSON record ``{"t": "hd", "s", "m", "sc", "e"}``.
        """
        if value is None or value == "" or value == "0":
            return ZERO
        if value.startswith("{"):
            obj = json.loads(value)
            if obj.get("t") != "hd":
                raise UnparsableNumberError("Invalid HugeDecimal JSON", {"raw": value})
            return cls.from_components(
                int(obj["s"]), int(obj["m"]), int(obj["e"]) - int(obj["sc"]),
            )
        return cls.from_string(value)

    # ══════════════════════════════════════════════════════════
    #  Properties
    # ══════════════════════════════════════════════════════════

    def is_zero(self) -> bool:
        return self.sign == 0

    def is_positive(self) -> bool:
        return self.sign == 1

    def is_negative(self) -> bool:
        return self.sign == -1

    def is_integer(self) -> bool:
        # Canonical form: a negative scale always means non-zero fractional digits.
        return self.scale >= 0

    def order_of_magnitude(self) -> int:
        """floor(log10(|v|)); 0 for zero."""
        if self.sign == 0:
            return 0
        return digit_count(self.magnitude) - 1 + self.scale

    def exceeds_ceiling(self) -> bool:
        """True when |v| >= 10**304, past the centillion exactness range."""
        return self.order_of_magnitude() > CEILING_POWER

    # ══════════════════════════════════════════════════════════
    #  Comparison
    # ══════════════════════════════════════════════════════════

    def compare(self, other: HugeDecimal) -> int:
        """Return -1, 0 or 1."""
        if self.sign != other.sign:
            return -1 if self.sign < other.sign else 1
        if self.sign == 0:
            return 0
        return self._compare_magnitude(other) * self.sign

    def __eq__(self, other: object) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return (self.sign, self.magnitude, self.scale) == (other.sign, other.magnitude, other.scale)

    def __hash__(self) -> int:
        # Same reduction CPython uses for int and Fraction, without expanding 10**scale.
        reduced = self.magnitude * pow(10, self.scale, _HASH_MODULUS) % _HASH_MODULUS
        return hash(self.sign * reduced)

    def _compare_magnitude(self, other: HugeDecimal) -> int:
        a_order = self.order_of_magnitude()
        b_order = other.order_of_magnitude()
        if a_order != b_order:
            return -1 if a_order < b_order else 1
        a, b, _ = _align(self.magnitude, self.scale, other.magnitude, other.scale)
        return (a > b) - (a < b)

    def __lt__(self, other: object) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare(other) >= 0

    # ══════════════════════════════════════════════════════════
    #  Arithmetic
    # ══════════════════════════════════════════════════════════

    def negate(self) -> HugeDecimal:
        if self.sign == 0:
            return self
        return HugeDecimal(-self.sign, self.magnitude, self.scale)

    def abs(self) -> HugeDecimal:
        return self.negate() if self.sign == -1 else self

    def add(self, other: HugeDecimal) -> HugeDecimal:
        if self.sign == 0:
            return other
        if other.sign == 0:
            return self
        a, b, scale = _align(self.magnitude, self.scale, other.magnitude, other.scale)
        return HugeDecimal.from_scaled_int(self.sign * a + other.sign * b, scale)

    def sub(self, other: HugeDecimal) -> HugeDecimal:
        return self.add(other.negate())

    def mul(self, other: HugeDecimal) -> HugeDecimal:
        if self.sign == 0 or other.sign == 0:
            return ZERO
        return HugeDecimal.from_components(
            self.sign * other.sign,
            self.magnitude * other.magnitude,
            self.scale + other.scale,
        )

    def divide_truncating(self, divisor: HugeDecimal, places: int = 0) -> HugeDecimal:
        """Quotient truncated toward zero to ``places`` fractional digits.

        This is the only lossy operation in the core.
        """
        if divisor.sign == 0:
            raise DivisionByZeroError(details={"dividend": repr(self)})
        if places < 0:
            raise ValueError("places must be >= 0")
        if self.sign == 0:
            return ZERO
        num = self.magnitude
        den = divisor.magnitude
        shift = self.scale - divisor.scale + places
        if shift >= 0:
            num *= 10**shift
        else:
            den *= 10 ** (-shift)
        return HugeDecimal.from_components(self.sign * divisor.sign, num // den, -places)

    def mul_pow10(self, exponent: int) -> HugeDecimal:
        """Multiply by 10**exponent (exact, no digit expansion)."""
        if self.sign == 0:
            return self
        return HugeDecimal(self.sign, self.magnitude, self.scale + exponent)

    def pow(self, exponent: int) -> HugeDecimal:
        if exponent < 0:
            raise ValueError("Negative exponents not supported in pow")
        if exponent == 0:
            return ONE
        if self.sign == 0:
            return ZERO
        sign = -1 if self.sign == -1 and exponent % 2 else 1
        return HugeDecimal(sign, self.magnitude**exponent, self.scale * exponent)

    def truncate(self) -> HugeDecimal:
        """Drop the fractional part (toward zero)."""
        if self.scale >= 0:
            return self
        return HugeDecimal.from_components(self.sign, self.magnitude // 10 ** (-self.scale), 0)

    def __neg__(self) -> HugeDecimal:
        return self.negate()

    def __abs__(self) -> HugeDecimal:
        return self.abs()

    def __add__(self, other: object) -> HugeDecimal:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other: object) -> HugeDecimal:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other: object) -> HugeDecimal:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.sub(self)

    def __mul__(self, other: object) -> HugeDecimal:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.mul(other)

    __rmul__ = __mul__

    def __bool__(self) -> bool:
        return self.sign != 0

    # ══════════════════════════════════════════════════════════
    #  Conversion
    # ══════════════════════════════════════════════════════════

    def to_bigint(self) -> int:
        """Exact int of unlimited range; raises on fractional digits."""
        if self.sign == 0:
            return 0
        if self.scale < 0:
            raise InexactConversionError(
                f"{self.to_plain_string()} has fractional digits", {"value": repr(self)},
            )
        return self.sign * self.magnitude * 10**self.scale

    def to_int(self) -> int:
        """Exact int within the signed 64-bit range."""
        if self.sign != 0 and self.scale >= 0 and self.order_of_magnitude() > 18:
            raise IntegerOverflowError("Value exceeds the native integer range", {"value": repr(self)})
        value = self.to_bigint()
        if value < INT64_MIN or value > INT64_MAX:
            raise IntegerOverflowError("Value exceeds the native integer range", {"value": repr(self)})
        return value

    def to_float(self) -> float:
        """Approximate float, for charts and ratios only."""
        if self.sign == 0:
            return 0.0
        prefix = "-" if self.sign == -1 else ""
        return float(f"{prefix}{self.magnitude}e{self.scale}")

    def to_plain_string(self) -> str:
        """Exact digits: ``[-]int[.frac]`` with no grouping or exponent."""
        if self.sign == 0:
            return "0"
        prefix = "-" if self.sign == -1 else ""
        digits = str(self.magnitude)
        if self.scale >= 0:
            return prefix + digits + "0" * self.scale
        frac_len = -self.scale
        if len(digits) <= frac_len:
            return f"{prefix}0.{digits.rjust(frac_len, '0')}"
        return f"{prefix}{digits[:-frac_len]}.{digits[-frac_len:]}"

    def to_db_string(self) -> str:
        return self.to_plain_string()

    def __str__(self) -> str:
        return self.to_plain_string()


ZERO = HugeDecimal(0, 0, 0)
ONE = HugeDecimal(1, 1, 0)
NEG_ONE = HugeDecimal(-1, 1, 0)

HugeDecimal.ZERO = ZERO
HugeDecimal.ONE = ONE
HugeDecimal.NEG_ONE = NEG_ONE


def _align(a_mag: int, a_scale: int, b_mag: int, b_scale: int) -> tuple[int, int, int]:
    """Rescale two magnitudes to their common (smaller) scale."""
    common = min(a_scale, b_scale)
    return a_mag * 10 ** (a_scale - common), b_mag * 10 ** (b_scale - common), common


def _coerce(value: object) -> HugeDecimal:
    if isinstance(value, HugeDecimal):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return HugeDecimal.from_int(value)
    return NotImplemented


def divide_truncating(dividend: HugeDecimal, divisor: HugeDecimal, places: int = 0) -> HugeDecimal:
    return dividend.divide_truncating(divisor, places)


def min_of(a: HugeDecimal, b: HugeDecimal) -> HugeDecimal:
    return a if a.compare(b) <= 0 else b


def max_of(a: HugeDecimal, b: HugeDecimal) -> HugeDecimal:
    return a if a.compare(b) >= 0 else b


def clamp(value: HugeDecimal, lo: HugeDecimal, hi: HugeDecimal) -> HugeDecimal:
    if value.compare(lo) < 0:
        return lo
    if value.compare(hi) > 0:
        return hi
    return value
