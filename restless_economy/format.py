"""Amount formatting.

All formatters are pure and accept either kind of amount; symbolic values are
rendered through ``HugeSymbolic.describe()``.

``format_exact`` is the canonical persisted form: sign and digits (plus a
``.fraction`` when present), no grouping unless ``separators=True``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .amount import Amount
from .huge import HugeDecimal, digit_count
from .suffixes import best_suffix_for_power
from .symbolic import HugeSymbolic

HALF = HugeDecimal(1, 5, -1)

Formattable = Union[HugeDecimal, HugeSymbolic, int, float]


@dataclass(frozen=True)
class AmountDisplay:
    compact: str
    exact: str
    scientific: str | None = None


# ═══════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════


def _to_amount(value: Formattable) -> Amount:
    if isinstance(value, (HugeDecimal, HugeSymbolic)):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not an amount")
    if isinstance(value, int):
        return HugeDecimal.from_int(value)
    if isinstance(value, float):
        return HugeDecimal.from_float(value)
    raise TypeError(f"Cannot format {type(value).__name__} as an amount")


def _ratio_to_decimal(value: HugeDecimal | int | float) -> HugeDecimal:
    """Exact decimal for ratio inputs; floats use their shortest repr."""
    if isinstance(value, HugeDecimal):
        return value
    if isinstance(value, float):
        return HugeDecimal.from_string(repr(value))
    return HugeDecimal.from_int(value)


def _group(digits: str) -> str:
    head = len(digits) % 3 or 3
    parts = [digits[:head]] + [digits[i:i + 3] for i in range(head, len(digits), 3)]
    return ",".join(parts)


def _past_ceiling(value: HugeDecimal) -> str:
    """Label for an exact value too large to spell out."""
    label = HugeSymbolic.from_exact(value.abs()).describe()
    return f"-{label}" if value.is_negative() else label


def _round_half_up(value: HugeDecimal, decimals: int) -> int:
    """|value| rounded half-up to ``decimals`` places, as a scaled int."""
    return value.abs().mul_pow10(decimals).add(HALF).truncate().to_bigint()


def _fixed(scaled: int, decimals: int) -> str:
    if decimals <= 0:
        return str(scaled)
    whole, frac = divmod(scaled, 10**decimals)
    return f"{whole}.{str(frac).rjust(decimals, '0')}"


# ═══════════════════════════════════════════════════════════════
#  Formatters
# ═══════════════════════════════════════════════════════════════


def format_exact(value: Formattable, separators: bool = False) -> str:
    """Exact digits, e.g. ``1000000000`` (or ``1,000,000,000``)."""
    amount = _to_amount(value)
    if isinstance(amount, HugeSymbolic):
        return amount.describe()
    if amount.exceeds_ceiling():
        return _past_ceiling(amount)
    text = amount.to_plain_string()
    if not separators:
        return text
    sign = "-" if text.startswith("-") else ""
    whole, dot, frac = text.lstrip("-").partition(".")
    return f"{sign}{_group(whole)}{dot}{frac}"


def format_short(value: Formattable, sig_figs: int = 3, min_digits_for_suffix: int = 4) -> str:
    """Compact form with a suffix, e.g. ``1.50k``, ``12.3m``, ``100k``.

    Uses exact half-up rounding. If rounding would carry into the next suffix
    group the value is truncated instead (``999k``), so the suffix shown is
    never above the true magnitude.
    """
    amount = _to_amount(value)
    if isinstance(amount, HugeSymbolic):
        return amount.describe()
    if amount.is_zero():
        return "0"
    if amount.exceeds_ceiling():
        return _past_ceiling(amount)

    sign = "-" if amount.is_negative() else ""
    order = amount.order_of_magnitude()
    unit = best_suffix_for_power(order)
    if order < min_digits_for_suffix - 1 or unit is None:
        whole = amount.abs().truncate().to_bigint()
        if whole == 0:
            return "0"
        return sign + _group(str(whole))

    scaled_value = amount.mul_pow10(-unit.power)
    lead = order - unit.power + 1
    while True:
        decimals = max(sig_figs - lead, 0)
        rounded = _round_half_up(scaled_value, decimals)
        if digit_count(rounded) <= lead + decimals:
            break
        lead += 1
        if lead > 3:
            # Carry past 999: truncate rather than jump to the next suffix.
            decimals = 0
            rounded = scaled_value.abs().truncate().to_bigint()
            break
    return f"{sign}{_fixed(rounded, decimals)}{unit.code}"


def format_scientific(value: Formattable, sig_figs: int = 3) -> str:
    """``1.23e15`` style with ``sig_figs`` significant digits."""
    amount = _to_amount(value)
    if isinstance(amount, HugeSymbolic):
        return amount.describe()
    if amount.is_zero():
        return "0"
    sign = "-" if amount.is_negative() else ""
    order = amount.order_of_magnitude()
    rounded = _round_half_up(amount.mul_pow10(sig_figs - 1 - order), 0)
    if digit_count(rounded) > sig_figs:
        order += 1
        rounded = _round_half_up(amount.mul_pow10(sig_figs - 1 - order), 0)
    return f"{sign}{_fixed(rounded, sig_figs - 1)}e{order}"


def format_full(value: Formattable, sig_figs: int = 3) -> str:
    """``1.23qa (exact: 1,230,000,000,000,000)``; short values stay exact."""
    amount = _to_amount(value)
    if isinstance(amount, HugeSymbolic):
        return amount.describe()
    compact = format_short(amount, sig_figs)
    exact = format_exact(amount, separators=True)
    if compact == exact or len(exact.replace(",", "").lstrip("-")) <= 10:
        return exact
    return f"{compact} (exact: {exact})"


def format_display(value: Formattable, sig_figs: int = 3) -> AmountDisplay:
    amount = _to_amount(value)
    if isinstance(amount, HugeSymbolic):
        label = amount.describe()
        return AmountDisplay(compact=label, exact=label, scientific=label)
    scientific = None
    if amount.order_of_magnitude() >= 15:
        scientific = format_scientific(amount, sig_figs)
    return AmountDisplay(
        compact=format_short(amount, sig_figs),
        exact=format_exact(amount, separators=True),
        scientific=scientific,
    )


def format_balance(value: Formattable, symbol: str | None = None, sig_figs: int = 3,
                   min_digits_for_suffix: int = 4) -> str:
    """The user-facing wallet/economy form: ``1.50k`` or ``1.50k 🔩``."""
    text = format_short(value, sig_figs, min_digits_for_suffix)
    return f"{text} {symbol}" if symbol else text


def format_percent(value: HugeDecimal | int | float, decimals: int = 2) -> str:
    """``value`` is already in percent units: 12.5 -> ``12.50%``."""
    exact = _ratio_to_decimal(value)
    rounded = _round_half_up(exact, decimals)
    sign = "-" if exact.is_negative() and rounded else ""
    return f"{sign}{_fixed(rounded, decimals)}%"


def format_basis_points(bps: int, decimals: int = 2) -> str:
    """150 bps -> ``1.50%``."""
    return format_percent(HugeDecimal.from_int(bps).mul_pow10(-2), decimals)


def format_debug(value: Amount) -> str:
    """Internal representation for logs. Never show this to users."""
    return repr(value)
