"""Exception hierarchy for the amount engine.

Each exception type maps to one category of amount failure. Parse failures
are normally returned as ``ParseErr`` values; these classes are what a
``ParseErr`` converts to, and what the arithmetic core raises directly.
"""

from __future__ import annotations


class AmountError(Exception):
    """Base exception for all amount engine failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class NegativeInputError(AmountError):
    """A user-entered amount carried a minus sign (or was not positive)."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("negative", message, details)


class UnparsableNumberError(AmountError):
    """No numeric literal could be read from the input."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("bad_number", message, details)


class UnknownSuffixError(AmountError):
    """The trailing token is not a known suffix, word or named magnitude."""

    def __init__(self, message: str, suggestions: list[str] | None = None, details: dict | None = None):
        self.suggestions = list(suggestions or [])
        super().__init__("bad_suffix", message, details)


class MagnitudeTooLargeError(AmountError):
    """The amount exceeds the caller-supplied power-of-ten ceiling."""

    def __init__(self, message: str, max_power: int | None = None, details: dict | None = None):
        self.max_power = max_power
        super().__init__("too_large", message, details)


class DivisionByZeroError(AmountError, ZeroDivisionError):
    def __init__(self, message: str = "Division by zero", details: dict | None = None):
        super().__init__("division_by_zero", message, details)


class InexactConversionError(AmountError, ValueError):
    """Conversion would drop non-zero fractional digits (or the input is not finite)."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("inexact", message, details)


class IntegerOverflowError(AmountError, OverflowError):
    """Value does not fit the native (signed 64-bit) integer range."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("overflow", message, details)


class IllFormedTowerError(AmountError, ValueError):
    def __init__(self, message: str, details: dict | None = None):
        super().__init__("ill_formed_tower", message, details)


class SymbolicArithmeticError(AmountError, ArithmeticError):
    """Precision-sensitive arithmetic was attempted on a symbolic magnitude."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("symbolic_arithmetic", message, details)
