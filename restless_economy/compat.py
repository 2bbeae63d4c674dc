"""Legacy integer adapter.

Older call sites work with plain ints (and store them as INTEGER/text). These
helpers route them through the exact engine. They never wrap: values that do
not fit raise ``IntegerOverflowError``/``InexactConversionError``.

Deprecated; new code should use ``HugeDecimal`` and ``parse_amount`` directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .amount import Amount, require_exact
from .errors import InexactConversionError, UnparsableNumberError
from .format import format_exact, format_short
from .huge import HugeDecimal
from .parse import ParseOptions, parse_amount_or_raise

LegacyValue = Union[HugeDecimal, int, float, str]


@dataclass(frozen=True)
class LegacyParse:
    value: int
    normalized: str
    raw: str
    huge: HugeDecimal


def parse_human_amount(raw: str, max_power: int | None = None) -> LegacyParse:
    """Parse user text and return both the int and the exact value.

    ``value`` is truncated toward zero (``"1.5"`` gives 1) the way legacy
    call sites always read amounts; ``huge`` keeps the exact parse. Raises the
    typed ``AmountError`` for the parse failure kind.
    """
    value = require_exact(parse_amount_or_raise(raw, ParseOptions(max_power=max_power)))
    return LegacyParse(
        value=value.truncate().to_bigint(),
        normalized=format_exact(value),
        raw=str(raw),
        huge=value,
    )


def to_huge(value: LegacyValue) -> HugeDecimal:
    if isinstance(value, HugeDecimal):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not an amount")
    if isinstance(value, int):
        return HugeDecimal.from_int(value)
    if isinstance(value, float):
        return HugeDecimal.from_float(value)
    if isinstance(value, str):
        return require_exact(parse_amount_or_raise(value, ParseOptions(allow_negative=True)))
    raise TypeError(f"Cannot convert {type(value).__name__} to HugeDecimal")


def to_int_strict(value: Amount | int) -> int:
    """Exact int in the signed 64-bit range, or a hard error."""
    if isinstance(value, int) and not isinstance(value, bool):
        return HugeDecimal.from_int(value).to_int()
    return require_exact(value).to_int()


def int_to_db(value: int) -> str:
    return format_exact(HugeDecimal.from_int(value))


def db_to_int(value: str | int | None) -> int:
    """Read a legacy stored amount as an exact int of any size."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if value is None or isinstance(value, str):
        huge = HugeDecimal.from_db_string(value.strip() if value else value)
        if not huge.is_integer():
            raise InexactConversionError(f"Stored amount {value!r} is not a whole number", {"raw": value})
        return huge.to_bigint()
    raise UnparsableNumberError(f"Unexpected stored amount type: {type(value).__name__}", {"raw": repr(value)})


def fmt_coins(value: HugeDecimal | int) -> str:
    return format_short(to_huge(value))


def fmt_coins_exact(value: HugeDecimal | int) -> str:
    return format_exact(to_huge(value))
