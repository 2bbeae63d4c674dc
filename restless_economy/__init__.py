"""restless-economy — Exact amount engine for the Restless economy bot."""
from importlib.metadata import PackageNotFoundError, version

from .amount import Amount, compare_amounts, promote
from .errors import AmountError
from .format import format_balance, format_exact, format_short
from .huge import HugeDecimal
from .parse import ParseErr, ParseOk, ParseOptions, parse_amount
from .symbolic import HugeSymbolic

try:
    __version__ = version("restless-economy")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "Amount",
    "AmountError",
    "HugeDecimal",
    "HugeSymbolic",
    "ParseErr",
    "ParseOk",
    "ParseOptions",
    "compare_amounts",
    "format_balance",
    "format_exact",
    "format_short",
    "parse_amount",
    "promote",
]
