"""Shared test fixtures for restless-economy."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from restless_economy.cache import TTLCache
from restless_economy.config import EconomyConfig
from restless_economy.database import EconomyDatabase
from restless_economy.limits import EconomyLimits
from restless_economy.wallet import WalletService


# ── Minimal config dict matching EconomyConfig schema ────────

def make_config_dict(**overrides) -> dict:
    """Build a valid config dict with sensible test defaults."""
    base = {
        "database": {"path": ":memory:"},
        "currency": {"name": "Bolts", "symbol": "B", "plural": "Bolts"},
        "amounts": {
            "max_power": None,
            "sig_figs": 3,
            "min_digits_for_suffix": 4,
            "percent_decimals": 2,
            "exact_ui": "inline",
        },
        "limits": {
            "default_max_admin_grant": "1b",
            "max_admin_grant_ceiling": "10qi",
            "default_max_bet": None,
            "cache_ttl_seconds": 60,
        },
    }
    base.update(overrides)
    return base


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def sample_config_dict() -> dict:
    """Return a config dict suitable for tests."""
    return make_config_dict()


@pytest.fixture
def sample_config(sample_config_dict: dict) -> EconomyConfig:
    """Return a parsed EconomyConfig."""
    return EconomyConfig(**sample_config_dict)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tmp_db_path(tmp_path: Path) -> str:
    """Return a temporary SQLite database path."""
    return str(tmp_path / "test_economy.db")


@pytest_asyncio.fixture
async def database(tmp_db_path: str) -> AsyncGenerator[EconomyDatabase, None]:
    """Provide an initialized database with temp file."""
    db = EconomyDatabase(tmp_db_path, logging.getLogger("test"))
    await db.initialize()
    yield db


@pytest.fixture
def cache(sample_config: EconomyConfig, clock: FakeClock) -> TTLCache:
    return TTLCache(sample_config.limits.cache_ttl_seconds, clock=clock)


@pytest.fixture
def limits(sample_config: EconomyConfig, database: EconomyDatabase, cache: TTLCache) -> EconomyLimits:
    return EconomyLimits(sample_config, database, cache, logging.getLogger("test"))


@pytest.fixture
def wallet(sample_config: EconomyConfig, database: EconomyDatabase, limits: EconomyLimits) -> WalletService:
    return WalletService(sample_config, database, limits, logging.getLogger("test"))
