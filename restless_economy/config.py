"""Configuration system for restless-economy.

Pydantic models with sensible defaults, loaded from YAML. Amount-valued
fields accept the same human text as the bot's commands (``1b``, ``10qi``,
``2.5m``) and are validated by the amount parser.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from .format import format_exact
from .huge import HugeDecimal
from .parse import ParseErr, parse_amount


def _exact_amount_text(value: Any) -> str:
    """Parse human amount text and return its canonical exact form."""
    outcome = parse_amount(str(value))
    if isinstance(outcome, ParseErr):
        raise ValueError(outcome.message)
    if not isinstance(outcome.value, HugeDecimal):
        raise ValueError(f"{outcome.normalized} is too large for a configured limit")
    return format_exact(outcome.value)


# ═══════════════════════════════════════════════════════════════
#  Sections
# ═══════════════════════════════════════════════════════════════

class DatabaseConfig(BaseModel):
    path: str = "economy.db"


class CurrencyConfig(BaseModel):
    name: str = "Bolts"
    symbol: str = "🔩"
    plural: str = "Bolts"


class AmountsConfig(BaseModel):
    """Parsing and display of amounts."""
    max_power: int | None = Field(default=None, ge=3, description="Reject input above 10^max_power")
    sig_figs: int = Field(default=3, ge=1, le=15)
    min_digits_for_suffix: int = Field(default=4, ge=1)
    percent_decimals: int = Field(default=2, ge=0, le=10)
    exact_ui: Literal["off", "inline", "on_click"] = "inline"


class LimitsConfig(BaseModel):
    """Guild-level caps. Stored per guild in guild_config; these are defaults."""
    default_max_admin_grant: str = "1b"
    max_admin_grant_ceiling: str = "10qi"
    default_max_bet: str | None = Field(default=None, description="None means betting is unlimited")
    cache_ttl_seconds: float = Field(default=60.0, gt=0)

    @field_validator("default_max_admin_grant", "max_admin_grant_ceiling", "default_max_bet", mode="before")
    @classmethod
    def _normalize_amount(cls, v: Any) -> Any:
        if v is None:
            return None
        return _exact_amount_text(v)

    @property
    def max_admin_grant_default(self) -> HugeDecimal:
        return HugeDecimal.from_string(self.default_max_admin_grant)

    @property
    def max_admin_grant_cap(self) -> HugeDecimal:
        return HugeDecimal.from_string(self.max_admin_grant_ceiling)

    @property
    def max_bet_default(self) -> HugeDecimal | None:
        if self.default_max_bet is None:
            return None
        return HugeDecimal.from_string(self.default_max_bet)


class EconomyConfig(BaseModel):
    """Root config."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    currency: CurrencyConfig = Field(default_factory=CurrencyConfig)
    amounts: AmountsConfig = Field(default_factory=AmountsConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)


# ═══════════════════════════════════════════════════════════════
#  Loading
# ═══════════════════════════════════════════════════════════════

def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand ${VAR} and ${VAR:-default} in string values."""
    if isinstance(obj, str):
        return re.sub(
            r"\$\{([^}:]+)(?::-(.*?))?\}",
            lambda m: os.environ.get(m.group(1), m.group(2) or ""),
            obj,
        )
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


def load_config(config_path: str) -> EconomyConfig:
    """Load and validate YAML config file into EconomyConfig."""
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError("Config file must contain a YAML mapping at the top level.")

    raw = _expand_env_vars(raw)
    return EconomyConfig(**raw)
