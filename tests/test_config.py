"""Tests for restless_economy.config module."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from restless_economy.config import (
    AmountsConfig,
    CurrencyConfig,
    DatabaseConfig,
    EconomyConfig,
    LimitsConfig,
    load_config,
)
from restless_economy.huge import HugeDecimal


class TestEconomyConfig:
    """Test EconomyConfig model parsing and validation."""

    def test_defaults_applied(self):
        cfg = EconomyConfig()
        assert cfg.database.path == "economy.db"
        assert cfg.currency.name == "Bolts"
        assert cfg.currency.symbol == "🔩"
        assert cfg.amounts.sig_figs == 3
        assert cfg.amounts.exact_ui == "inline"
        assert cfg.limits.default_max_bet is None

    def test_full_config(self, sample_config_dict: dict):
        cfg = EconomyConfig(**sample_config_dict)
        assert cfg.currency.symbol == "B"
        assert cfg.database.path == ":memory:"

    def test_sub_models_standalone(self):
        assert DatabaseConfig().path == "economy.db"
        assert CurrencyConfig().plural == "Bolts"
        assert AmountsConfig().min_digits_for_suffix == 4

    def test_exact_ui_choices(self):
        assert AmountsConfig(exact_ui="on_click").exact_ui == "on_click"
        with pytest.raises(ValidationError):
            AmountsConfig(exact_ui="sometimes")

    def test_sig_figs_bounds(self):
        with pytest.raises(ValidationError):
            AmountsConfig(sig_figs=0)


class TestLimitsConfig:
    """Amount-valued limits accept human text."""

    def test_defaults_normalized(self):
        limits = LimitsConfig()
        assert limits.default_max_admin_grant == "1000000000"
        assert limits.max_admin_grant_ceiling == "10000000000000000000"
        assert limits.max_admin_grant_default == HugeDecimal.from_int(10**9)
        assert limits.max_admin_grant_cap == HugeDecimal.from_int(10 * 10**18)

    def test_human_text(self):
        limits = LimitsConfig(default_max_admin_grant="2.5m", default_max_bet="750k")
        assert limits.max_admin_grant_default == HugeDecimal.from_int(2_500_000)
        assert limits.max_bet_default == HugeDecimal.from_int(750_000)

    def test_integer_values(self):
        limits = LimitsConfig(default_max_bet=5000)
        assert limits.default_max_bet == "5000"

    def test_unlimited_bet(self):
        assert LimitsConfig().max_bet_default is None

    @pytest.mark.parametrize("bad", ["lots", "-5", "5 zorks", "1e400"])
    def test_invalid_amount_text(self, bad: str):
        with pytest.raises(ValidationError):
            LimitsConfig(default_max_admin_grant=bad)

    def test_ttl_must_be_positive(self):
        with pytest.raises(ValidationError):
            LimitsConfig(cache_ttl_seconds=0)


class TestLoadConfig:
    """Test YAML file loading with environment variable expansion."""

    def test_load_valid_yaml(self, sample_config_dict: dict, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.dump(sample_config_dict))

        cfg = load_config(str(config_path))
        assert cfg.currency.symbol == "B"
        assert cfg.limits.max_admin_grant_default == HugeDecimal.from_int(10**9)

    def test_load_missing_file(self):
        with pytest.raises(FileNotFoundError):
            load_config("/nonexistent/path/config.yaml")

    def test_empty_file_uses_defaults(self, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("")
        assert load_config(str(config_path)).currency.name == "Bolts"

    def test_env_var_expansion(self, sample_config_dict: dict, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TEST_DB_PATH", "/tmp/test.db")
        sample_config_dict["database"] = {"path": "${TEST_DB_PATH}"}
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.dump(sample_config_dict))

        cfg = load_config(str(config_path))
        assert cfg.database.path == "/tmp/test.db"

    def test_env_var_with_default(self, sample_config_dict: dict, tmp_path: Path):
        os.environ.pop("UNSET_TEST_VAR", None)
        sample_config_dict["limits"] = {"default_max_bet": "${UNSET_TEST_VAR:-1m}"}
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.dump(sample_config_dict))

        cfg = load_config(str(config_path))
        assert cfg.limits.max_bet_default == HugeDecimal.from_int(1_000_000)

    def test_invalid_yaml_structure(self, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- just\n- a\n- list\n")

        with pytest.raises(ValueError, match="YAML mapping"):
            load_config(str(config_path))

    def test_invalid_limit_in_file(self, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("limits:\n  default_max_admin_grant: abc\n")

        with pytest.raises(ValidationError):
            load_config(str(config_path))

    def test_example_file_is_valid(self):
        example = Path(__file__).resolve().parent.parent / "config.example.yaml"
        cfg = load_config(str(example))
        assert cfg.amounts.exact_ui == "inline"
