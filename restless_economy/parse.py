"""Human-friendly amount parsing.

Accepts things like ``1_000``, ``3,500``, ``2.5qa``, ``1 million``,
``2 Quintillion``, ``1.5e6`` and ``2 googolplex``. The result is always a
``ParseOk`` or a ``ParseErr``; nothing is raised for bad user input, so
callers have to handle every error kind.

Magnitudes past the exact ceiling that are otherwise well-formed come back as
``ParseOk`` carrying a ``HugeSymbolic``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .amount import Amount, promote
from .errors import (
    AmountError,
    MagnitudeTooLargeError,
    NegativeInputError,
    UnknownSuffixError,
    UnparsableNumberError,
)
from .format import format_exact
from .huge import ZERO, HugeDecimal
from .suffixes import lookup_by_suffix, lookup_by_word, suggest_suffixes
from .symbolic import (
    NAMED_MAGNITUDES,
    HugeSymbolic,
    NamedMagnitude,
    ScaledMagnitude,
    ScientificMagnitude,
)

# Longest digit run accepted in a literal; larger magnitudes use e-notation or suffixes.
MAX_LITERAL_DIGITS = 1000

_AMOUNT_RE = re.compile(
    r"^(?P<int>\d*)(?:\.(?P<frac>\d*))?(?:e(?P<exp>[+-]?\d+))?\s*(?P<suffix>[a-z][a-z\s]*)?$",
    re.IGNORECASE,
)


class ParseErrorKind(Enum):
    NEGATIVE = "negative"
    BAD_NUMBER = "bad_number"
    BAD_SUFFIX = "bad_suffix"
    TOO_LARGE = "too_large"


@dataclass(frozen=True)
class ParseOptions:
    max_power: int | None = None
    allow_negative: bool = False


@dataclass(frozen=True)
class ParseOk:
    value: Amount
    normalized: str
    raw: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ParseErr:
    kind: ParseErrorKind
    raw: str
    message: str
    suggestions: tuple[str, ...] = ()
    max_power: int | None = None

    @property
    def ok(self) -> bool:
        return False

    def to_exception(self) -> AmountError:
        details = {"raw": self.raw}
        match self.kind:
            case ParseErrorKind.NEGATIVE:
                return NegativeInputError(self.message, details)
            case ParseErrorKind.BAD_NUMBER:
                return UnparsableNumberError(self.message, details)
            case ParseErrorKind.BAD_SUFFIX:
                return UnknownSuffixError(self.message, list(self.suggestions), details)
            case ParseErrorKind.TOO_LARGE:
                return MagnitudeTooLargeError(self.message, self.max_power, details)
        raise TypeError(f"Unknown parse error kind: {self.kind!r}")


ParseOutcome = Union[ParseOk, ParseErr]


# ═══════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════


def _lookup_named(token: str) -> str | None:
    key = "".join(token.split()).lower()
    if key in NAMED_MAGNITUDES:
        return key
    if key.endswith("s") and key[:-1] in NAMED_MAGNITUDES:
        return key[:-1]
    return None


def _order_of(value: Amount) -> int | None:
    """Decimal order of magnitude, or None when unbounded (towers)."""
    if isinstance(value, HugeDecimal):
        return value.order_of_magnitude()
    expr = value.expr
    extra = 0
    if isinstance(expr, ScaledMagnitude):
        extra = expr.factor.order_of_magnitude()
        expr = expr.inner
    if isinstance(expr, NamedMagnitude):
        expr = expr.expr
    if isinstance(expr, ScientificMagnitude):
        return expr.exponent + extra
    return None


def _normalize(value: Amount) -> str:
    if isinstance(value, HugeSymbolic):
        return value.describe()
    return format_exact(value)


# ═══════════════════════════════════════════════════════════════
#  Public API
# ═══════════════════════════════════════════════════════════════


def parse_amount(raw: str, options: ParseOptions | None = None) -> ParseOutcome:
    """Parse a human-entered amount. Pure: equal input gives an equal outcome."""
    opts = options or ParseOptions()
    raw = str(raw)
    text = raw.strip()
    if not text:
        return ParseErr(ParseErrorKind.BAD_NUMBER, raw, "Empty input")

    negative = text.startswith("-")
    if negative and not opts.allow_negative:
        return ParseErr(ParseErrorKind.NEGATIVE, raw, "Negative amounts not allowed")
    if text[0] in "+-":
        text = text[1:]

    body = text.replace(",", "").replace("_", "").strip()
    m = _AMOUNT_RE.match(body)
    if not m:
        return ParseErr(ParseErrorKind.BAD_NUMBER, raw, f"Invalid number format: {raw}")

    int_part = m.group("int") or ""
    frac_part = m.group("frac") or ""
    digits = int_part + frac_part
    if not digits:
        return ParseErr(ParseErrorKind.BAD_NUMBER, raw, f"Invalid number format: {raw}")
    if len(digits) > MAX_LITERAL_DIGITS:
        return ParseErr(ParseErrorKind.BAD_NUMBER, raw, f"Too many digits in {raw}")
    exp_text = m.group("exp") or "0"
    if len(exp_text.lstrip("+-")) > MAX_LITERAL_DIGITS:
        return ParseErr(ParseErrorKind.BAD_NUMBER, raw, f"Exponent out of range in {raw}")
    exponent = int(exp_text)

    number = HugeDecimal.from_components(1, int(digits), exponent - len(frac_part))
    if number.scale < -MAX_LITERAL_DIGITS:
        return ParseErr(ParseErrorKind.BAD_NUMBER, raw, f"Too many fractional digits in {raw}")

    suffix = (m.group("suffix") or "").strip()
    value: Amount
    if not suffix:
        value = number
    else:
        unit = lookup_by_suffix(suffix) or lookup_by_word(suffix)
        if unit is not None:
            value = number.mul_pow10(unit.power)
        else:
            name = _lookup_named(suffix)
            if name is None:
                suggestions = tuple(suggest_suffixes(suffix))
                return ParseErr(
                    ParseErrorKind.BAD_SUFFIX, raw, f"Unknown suffix '{suffix}'", suggestions,
                )
            if number.is_zero():
                value = ZERO
            elif negative:
                return ParseErr(ParseErrorKind.NEGATIVE, raw, "Symbolic magnitudes cannot be negative")
            else:
                value = HugeSymbolic.named(name).multiply_by_exact(number)

    if isinstance(value, HugeDecimal):
        if negative:
            value = value.negate()
        value = promote(value)

    if opts.max_power is not None and not (isinstance(value, HugeDecimal) and value.is_zero()):
        order = _order_of(value)
        if order is None or order > opts.max_power:
            return ParseErr(
                ParseErrorKind.TOO_LARGE,
                raw,
                f"Amount too large (max: 10^{opts.max_power})",
                max_power=opts.max_power,
            )

    return ParseOk(value, _normalize(value), raw)


def parse_positive_amount(raw: str, options: ParseOptions | None = None) -> ParseOutcome:
    """Like ``parse_amount`` but zero (and negatives) are rejected."""
    outcome = parse_amount(raw, options)
    if isinstance(outcome, ParseOk) and isinstance(outcome.value, HugeDecimal):
        if not outcome.value.is_positive():
            return ParseErr(ParseErrorKind.NEGATIVE, outcome.raw, "Amount must be positive")
    return outcome


def parse_amount_or_raise(raw: str, options: ParseOptions | None = None) -> Amount:
    outcome = parse_amount(raw, options)
    if isinstance(outcome, ParseErr):
        raise outcome.to_exception()
    return outcome.value
