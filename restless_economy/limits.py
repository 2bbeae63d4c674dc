"""Per-guild economy limits: the admin grant cap and the max bet.

Values live in the ``guild_config`` table and are cached per guild through an
injected ``TTLCache``. Writers call ``invalidate`` (or go through the setters
here, which refresh the cache themselves).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import AmountError, MagnitudeTooLargeError, NegativeInputError
from .format import format_exact
from .huge import HugeDecimal

if TYPE_CHECKING:
    from .cache import TTLCache
    from .config import EconomyConfig
    from .database import EconomyDatabase

MAX_ADMIN_GRANT_KEY = "economy.max_admin_grant"
MAX_BET_KEY = "max_bet"
UNLIMITED = "unlimited"


@dataclass(frozen=True)
class MaxBet:
    """Either disabled (no cap) or a concrete limit."""

    disabled: bool
    limit: HugeDecimal | None = None

    @classmethod
    def unlimited(cls) -> MaxBet:
        return cls(disabled=True)

    @classmethod
    def of(cls, limit: HugeDecimal) -> MaxBet:
        return cls(disabled=False, limit=limit)

    def allows(self, amount: HugeDecimal) -> bool:
        return self.disabled or amount <= self.limit


class EconomyLimits:
    """Reads and writes guild limits with validation on both paths."""

    def __init__(
        self,
        config: EconomyConfig,
        database: EconomyDatabase,
        cache: TTLCache,
        logger: logging.Logger,
    ) -> None:
        self._config = config
        self._db = database
        self._cache = cache
        self._logger = logger

    def update_config(self, new_config: EconomyConfig) -> None:
        """Hot-swap the config reference and drop cached values."""
        self._config = new_config
        self._cache.clear()

    def invalidate(self, guild_id: str) -> None:
        self._cache.invalidate((guild_id, MAX_ADMIN_GRANT_KEY))
        self._cache.invalidate((guild_id, MAX_BET_KEY))

    # ══════════════════════════════════════════════════════════
    #  Max Admin Grant
    # ══════════════════════════════════════════════════════════

    def _grant_in_bounds(self, value: HugeDecimal) -> bool:
        return not value.is_negative() and value <= self._config.limits.max_admin_grant_cap

    async def get_max_admin_grant(self, guild_id: str) -> HugeDecimal:
        cache_key = (guild_id, MAX_ADMIN_GRANT_KEY)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        value = self._config.limits.max_admin_grant_default
        raw = await self._db.get_config_value(guild_id, MAX_ADMIN_GRANT_KEY)
        if raw is not None:
            try:
                stored = HugeDecimal.from_db_string(raw)
            except (AmountError, ValueError):
                self._logger.warning("Ignoring bad stored max admin grant for %s: %r", guild_id, raw)
            else:
                if self._grant_in_bounds(stored):
                    value = stored
                else:
                    self._logger.warning("Stored max admin grant for %s out of range: %s", guild_id, raw)

        self._cache.set(cache_key, value)
        return value

    async def set_max_admin_grant(self, guild_id: str, value: HugeDecimal) -> None:
        if value.is_negative():
            raise NegativeInputError("Max admin grant cannot be negative", {"guild_id": guild_id})
        if not self._grant_in_bounds(value):
            raise MagnitudeTooLargeError(
                f"Max admin grant cannot exceed {format_exact(self._config.limits.max_admin_grant_cap)}",
                self._config.limits.max_admin_grant_cap.order_of_magnitude(),
                {"guild_id": guild_id},
            )
        await self._db.set_config_value(guild_id, MAX_ADMIN_GRANT_KEY, format_exact(value))
        self._cache.set((guild_id, MAX_ADMIN_GRANT_KEY), value)
        self._logger.info("Max admin grant for %s set to %s", guild_id, format_exact(value))

    # ══════════════════════════════════════════════════════════
    #  Max Bet
    # ══════════════════════════════════════════════════════════

    async def get_max_bet(self, guild_id: str) -> MaxBet:
        cache_key = (guild_id, MAX_BET_KEY)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        default = self._config.limits.max_bet_default
        result = MaxBet.unlimited() if default is None else MaxBet.of(default)
        raw = await self._db.get_config_value(guild_id, MAX_BET_KEY)
        if raw == UNLIMITED:
            result = MaxBet.unlimited()
        elif raw is not None:
            try:
                result = MaxBet.of(HugeDecimal.from_db_string(raw))
            except (AmountError, ValueError):
                self._logger.warning("Ignoring bad stored max bet for %s: %r", guild_id, raw)

        self._cache.set(cache_key, result)
        return result

    async def set_max_bet(self, guild_id: str, value: HugeDecimal) -> None:
        if not value.is_positive():
            raise NegativeInputError("Max bet must be positive", {"guild_id": guild_id})
        await self._db.set_config_value(guild_id, MAX_BET_KEY, format_exact(value))
        self._cache.set((guild_id, MAX_BET_KEY), MaxBet.of(value))

    async def disable_max_bet(self, guild_id: str) -> None:
        await self._db.set_config_value(guild_id, MAX_BET_KEY, UNLIMITED)
        self._cache.set((guild_id, MAX_BET_KEY), MaxBet.unlimited())
