"""Chat-facing presentation of amounts.

Builds the compact/exact/scientific detail shown next to balances, the
"Exact"/"Copy" button payloads and their replies, and the error message for a
failed parse. Everything returns plain strings and dicts; the chat client
layer turns those into its own message types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .amount import Amount
from .errors import UnparsableNumberError
from .format import format_exact, format_short
from .huge import HugeDecimal
from .parse import ParseErr, ParseErrorKind
from .suffixes import SuffixUnit, lookup_by_suffix
from .symbolic import HugeSymbolic

if TYPE_CHECKING:
    from .config import AmountsConfig, CurrencyConfig

EXACT_PREFIX = "amt:exact:"
COPY_PREFIX = "amt:copy:"

ERROR_COLOR = 0xE53935

EXAMPLES = "`1b`, `2.5m`, `750k`, `10 qa`, `1_000`, `3,500`, `0.75t`"


@dataclass(frozen=True)
class AmountDetail:
    compact: str
    exact: str
    scientific: str
    unit: SuffixUnit | None = None


def _scientific(value: HugeDecimal, sig_figs: int) -> str:
    """``1.23 × 10^15``; digits are truncated, not rounded."""
    if value.is_zero():
        return "0 × 10^0"
    sign = "-" if value.is_negative() else ""
    order = value.order_of_magnitude()
    digits = value.abs().mul_pow10(sig_figs - 1 - order).truncate().to_plain_string()
    head, tail = digits[0], digits[1:]
    mantissa = f"{head}.{tail}" if tail else head
    return f"{sign}{mantissa} × 10^{order}"


def describe_amount(value: Amount, sig_figs: int = 3) -> AmountDetail:
    if isinstance(value, HugeSymbolic):
        label = value.describe()
        return AmountDetail(compact=label, exact=label, scientific=label)
    compact = format_short(value, sig_figs)
    code = compact.lstrip("-0123456789.,")
    unit = lookup_by_suffix(code) if code else None
    return AmountDetail(
        compact=compact,
        exact=format_exact(value, separators=True),
        scientific=_scientific(value, sig_figs),
        unit=unit,
    )


def render_amount_inline(value: Amount, sig_figs: int = 3) -> str:
    """``1.50k *(= 1,500)*``; the exact part is omitted when it adds nothing."""
    detail = describe_amount(value, sig_figs)
    if detail.exact == detail.compact:
        return detail.compact
    return f"{detail.compact} *(= {detail.exact})*"


def render_amount(value: Amount, amounts: AmountsConfig) -> dict[str, Any]:
    """Text plus optional buttons, according to ``amounts.exact_ui``."""
    match amounts.exact_ui:
        case "off":
            return {"text": format_short(value, amounts.sig_figs, amounts.min_digits_for_suffix), "buttons": []}
        case "inline":
            return {"text": render_amount_inline(value, amounts.sig_figs), "buttons": []}
        case "on_click":
            return exact_components(value, amounts.sig_figs)
    raise ValueError(f"Unknown exact_ui mode: {amounts.exact_ui!r}")


# ═══════════════════════════════════════════════════════════════
#  Exact / Copy buttons
# ═══════════════════════════════════════════════════════════════


def exact_components(value: Amount, sig_figs: int = 3) -> dict[str, Any]:
    """Compact text with "Exact" and "Copy" button payloads.

    Symbolic values have no digits to reveal, so they get no buttons.
    """
    detail = describe_amount(value, sig_figs)
    if isinstance(value, HugeSymbolic):
        return {"text": detail.compact, "buttons": []}
    raw = format_exact(value)
    return {
        "text": detail.compact,
        "buttons": [
            {"custom_id": f"{EXACT_PREFIX}{raw}", "label": "Exact", "style": "secondary"},
            {"custom_id": f"{COPY_PREFIX}{raw}", "label": "Copy", "style": "secondary"},
        ],
    }


def handle_amount_button(custom_id: str) -> str:
    """Ephemeral reply content for an ``amt:exact:`` / ``amt:copy:`` click."""
    if custom_id.startswith(COPY_PREFIX):
        raw = custom_id[len(COPY_PREFIX):]
        HugeDecimal.from_string(raw)
        return f"`{raw}`\nSelect and copy."
    if custom_id.startswith(EXACT_PREFIX):
        detail = describe_amount(HugeDecimal.from_string(custom_id[len(EXACT_PREFIX):]))
        lines = [
            f"**Exact:** {detail.exact}",
            f"**Scientific:** {detail.scientific}",
        ]
        if detail.unit is not None:
            lines.append(f"**Unit:** {detail.unit.code} = {detail.unit.word} (10^{detail.unit.power})")
        return "\n".join(lines)
    raise UnparsableNumberError(f"Not an amount button: {custom_id!r}", {"custom_id": custom_id})


# ═══════════════════════════════════════════════════════════════
#  Errors & currency
# ═══════════════════════════════════════════════════════════════


def amount_error_message(err: ParseErr, command: str | None = None) -> dict[str, Any]:
    """Embed-like dict describing why ``err.raw`` was rejected."""
    message: dict[str, Any] = {
        "title": "Invalid amount",
        "color": ERROR_COLOR,
        "description": "",
        "fields": [],
    }
    match err.kind:
        case ParseErrorKind.BAD_SUFFIX:
            message["description"] = (
                f"Unknown suffix in `{err.raw}`. Use: k, m, b, t, qa (quadrillion), "
                "qi (quintillion), sx, sp, oc, no, de, …, ce (centillion)."
            )
            if err.suggestions:
                message["fields"].append({
                    "name": "Did you mean",
                    "value": "  ".join(f"`{s}`" for s in err.suggestions),
                })
        case ParseErrorKind.BAD_NUMBER:
            message["description"] = f"Could not read a number from `{err.raw}`."
        case ParseErrorKind.NEGATIVE:
            message["description"] = f"Amount must be positive. You sent `{err.raw}`."
        case ParseErrorKind.TOO_LARGE:
            message["description"] = f"Amount exceeds the supported maximum (`10^{err.max_power}`)."
    if command:
        message["footer"] = f"/{command}"
    message["fields"].append({"name": "Examples", "value": EXAMPLES})
    return message


def format_currency(value: Amount, currency: CurrencyConfig, compact: bool = True, sig_figs: int = 3) -> str:
    """``1.50k 🔩`` (compact) or ``1,500 🔩``."""
    text = format_short(value, sig_figs) if compact else format_exact(value, separators=True)
    return f"{text} {currency.symbol}"
