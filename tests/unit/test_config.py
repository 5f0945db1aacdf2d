from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from tradebot.core.config import Config, StrategiesConfig
from tradebot.core.exceptions import ConfigError


def test_repo_defaults_match_strategy_defaults(test_config: Config) -> None:
    assert test_config.strategies.ma_crossover.short_window == 12
    assert test_config.strategies.ma_crossover.long_window == 26
    assert test_config.strategies.momentum.lookback == 20
    assert test_config.strategies.threshold.buy_threshold == -0.02
    assert test_config.strategies.threshold.sell_threshold == 0.03
    assert test_config.market_data.symbol == "IBM"
    assert test_config.api.port == 3000


def test_user_yaml_deep_merges_over_default(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    cfg_dir = tmp_path / "config"
    cfg_dir.mkdir()
    (cfg_dir / "default.yaml").write_text("strategies:\n  momentum:\n    lookback: 20\n  ma_crossover:\n    short_window: 9\n")
    (cfg_dir / "user.yaml").write_text("strategies:\n  momentum:\n    lookback: 5\n")

    cfg = Config.from_repo_defaults(tmp_path)
    assert cfg.strategies.momentum.lookback == 5
    assert cfg.strategies.ma_crossover.short_window == 9


def test_config_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRADEBOT_MARKET_DATA__SYMBOL", "MSFT")
    cfg = Config()  # BaseSettings reads env
    assert cfg.market_data.symbol == "MSFT"


def test_env_overrides_yaml_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRADEBOT_MARKET_DATA__API_KEY", "secret")
    monkeypatch.setenv("TRADEBOT_STRATEGIES__MOMENTUM__LOOKBACK", "7")
    cfg = Config.from_yaml(Path(__file__).resolve().parents[2] / "config" / "default.yaml")
    assert cfg.market_data.api_key == "secret"
    assert cfg.market_data.symbol == "IBM"
    assert cfg.strategies.momentum.lookback == 7
    assert cfg.strategies.ma_crossover.long_window == 26


def test_config_from_yaml_raises_if_missing(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        Config.from_yaml(tmp_path / "missing.yaml")


def test_enabled_strategies_must_be_unique() -> None:
    with pytest.raises(ValidationError):
        StrategiesConfig(enabled=["momentum", "momentum"])


def test_unknown_strategy_name_rejected() -> None:
    with pytest.raises(ValidationError):
        StrategiesConfig(enabled=["rsi"])
