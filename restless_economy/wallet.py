"""Wallet service: balance checks and movements on exact amounts.

Every credit/debit/grant/bet flows through here so the balance, cap and
max-bet checks are applied consistently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .amount import Amount, require_exact
from .errors import InexactConversionError, SymbolicArithmeticError
from .format import format_balance, format_debug, format_exact
from .huge import ZERO, HugeDecimal

if TYPE_CHECKING:
    from .config import EconomyConfig
    from .database import EconomyDatabase
    from .limits import EconomyLimits


class WalletResult(Enum):
    SUCCESS = "success"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    OVER_GRANT_CAP = "over_grant_cap"
    OVER_MAX_BET = "over_max_bet"
    INVALID_AMOUNT = "invalid_amount"


@dataclass(frozen=True)
class WalletOutcome:
    result: WalletResult
    message: str
    balance: HugeDecimal | None = None
    amount: HugeDecimal = ZERO

    @property
    def ok(self) -> bool:
        return self.result is WalletResult.SUCCESS


def to_exact(value: Amount | int) -> HugeDecimal:
    """Coerce to a whole exact amount; symbolic and fractional amounts are rejected."""
    if isinstance(value, int) and not isinstance(value, bool):
        return HugeDecimal.from_int(value)
    exact = require_exact(value)
    if not exact.is_integer():
        raise InexactConversionError(
            f"{format_exact(exact)} is not a whole amount", {"value": format_debug(exact)},
        )
    return exact


class WalletService:
    """Balance operations on top of EconomyDatabase."""

    def __init__(
        self,
        config: EconomyConfig,
        database: EconomyDatabase,
        limits: EconomyLimits,
        logger: logging.Logger,
    ) -> None:
        self._config = config
        self._db = database
        self._limits = limits
        self._logger = logger

    def update_config(self, new_config: EconomyConfig) -> None:
        """Hot-swap the config reference."""
        self._config = new_config

    def _fmt(self, value: HugeDecimal) -> str:
        amounts = self._config.amounts
        return format_balance(
            value, self._config.currency.symbol, amounts.sig_figs, amounts.min_digits_for_suffix,
        )

    def _invalid(self, message: str) -> WalletOutcome:
        return WalletOutcome(WalletResult.INVALID_AMOUNT, message)

    def _not_whole(self) -> WalletOutcome:
        return self._invalid(f"Amounts must be whole {self._config.currency.plural}.")

    # ══════════════════════════════════════════════════════════
    #  Queries
    # ══════════════════════════════════════════════════════════

    async def get_balance(self, guild_id: str, user_id: str) -> HugeDecimal:
        return await self._db.get_balance(guild_id, user_id)

    async def has_sufficient_balance(self, guild_id: str, user_id: str, amount: Amount | int) -> bool:
        balance = await self._db.get_balance(guild_id, user_id)
        return balance >= to_exact(amount)

    async def get_shortfall(self, guild_id: str, user_id: str, required: Amount | int) -> HugeDecimal:
        """How much is missing to cover ``required``; ZERO when covered."""
        balance = await self._db.get_balance(guild_id, user_id)
        needed = to_exact(required)
        if balance >= needed:
            return ZERO
        return needed.sub(balance)

    # ══════════════════════════════════════════════════════════
    #  Movements
    # ══════════════════════════════════════════════════════════

    async def credit(
        self, guild_id: str, user_id: str, amount: Amount | int,
        tx_type: str = "credit", reason: str | None = None,
    ) -> WalletOutcome:
        try:
            value = to_exact(amount)
        except InexactConversionError:
            return self._not_whole()
        if not value.is_positive():
            return self._invalid("Amount must be positive.")
        balance = await self._db.adjust_balance(guild_id, user_id, value, tx_type, reason)
        return WalletOutcome(
            WalletResult.SUCCESS, f"Added {self._fmt(value)}.", balance=balance, amount=value,
        )

    async def debit(
        self, guild_id: str, user_id: str, amount: Amount | int,
        tx_type: str = "debit", reason: str | None = None,
    ) -> WalletOutcome:
        try:
            value = to_exact(amount)
        except InexactConversionError:
            return self._not_whole()
        if not value.is_positive():
            return self._invalid("Amount must be positive.")
        balance = await self._db.adjust_balance(guild_id, user_id, value.negate(), tx_type, reason)
        if balance is None:
            shortfall = await self.get_shortfall(guild_id, user_id, value)
            return WalletOutcome(
                WalletResult.INSUFFICIENT_FUNDS,
                f"Insufficient funds. You need {self._fmt(shortfall)} more.",
                amount=value,
            )
        return WalletOutcome(
            WalletResult.SUCCESS, f"Removed {self._fmt(value)}.", balance=balance, amount=value,
        )

    async def admin_grant(
        self, guild_id: str, user_id: str, amount: Amount | int, reason: str | None = None,
    ) -> WalletOutcome:
        """Credit on behalf of an admin, subject to the guild's grant cap."""
        try:
            value = to_exact(amount)
        except InexactConversionError:
            return self._not_whole()
        if not value.is_positive():
            return self._invalid("Grant amount must be positive.")
        cap = await self._limits.get_max_admin_grant(guild_id)
        if value > cap:
            self._logger.info("Admin grant in %s rejected: above cap", guild_id)
            return WalletOutcome(
                WalletResult.OVER_GRANT_CAP,
                f"Grant exceeds this server's limit of {self._fmt(cap)}.",
                amount=value,
            )
        balance = await self._db.adjust_balance(guild_id, user_id, value, "admin_grant", reason)
        return WalletOutcome(
            WalletResult.SUCCESS, f"Granted {self._fmt(value)}.", balance=balance, amount=value,
        )

    async def place_bet(
        self, guild_id: str, user_id: str, amount: Amount | int, reason: str | None = None,
    ) -> WalletOutcome:
        """Check the max bet and funds, then take the wager."""
        try:
            value = to_exact(amount)
        except SymbolicArithmeticError:
            return self._invalid("That amount is too large to bet.")
        except InexactConversionError:
            return self._not_whole()
        if not value.is_positive():
            return self._invalid("Bet must be positive.")
        max_bet = await self._limits.get_max_bet(guild_id)
        if not max_bet.allows(value):
            return WalletOutcome(
                WalletResult.OVER_MAX_BET,
                f"Max bet is {self._fmt(max_bet.limit)}.",
                amount=value,
            )
        outcome = await self.debit(guild_id, user_id, value, "bet", reason)
        if outcome.ok:
            self._logger.debug("Bet placed in %s by %s", guild_id, user_id)
        return outcome
