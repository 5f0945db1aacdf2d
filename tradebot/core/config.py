"""tradebot.core.config

Three config surfaces only, lowest precedence first:
1) `config/default.yaml`
2) `config/user.yaml` (optional overlay, deep-merged)
3) Environment variables (`TRADEBOT_<SECTION>__<FIELD>`)

Everything else is derived.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from tradebot.core.exceptions import ConfigError

StrategyName = Literal["ma_crossover", "momentum", "threshold"]


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


class MarketDataConfig(BaseModel):
    url: str = "https://www.alphavantage.co/query"
    symbol: str = "IBM"
    interval: Literal["1min", "5min", "15min", "30min", "60min"] = "5min"
    outputsize: Literal["compact", "full"] = "full"
    api_key: str = "demo"
    timeout_s: float = 20.0
    max_retries: int = 2
    rate_limit_rps: float = 1.0
    max_bytes: int = 8 * 1024 * 1024


class MACrossoverConfig(BaseModel):
    short_window: int = 12
    long_window: int = 26


class MomentumConfig(BaseModel):
    lookback: int = 20


class ThresholdConfig(BaseModel):
    buy_threshold: float = -0.02
    sell_threshold: float = 0.03


class StrategiesConfig(BaseModel):
    """Strategy parameters. Values are validated again by each strategy at construction."""

    enabled: list[StrategyName] = ["ma_crossover", "momentum", "threshold"]
    ma_crossover: MACrossoverConfig = Field(default_factory=MACrossoverConfig)
    momentum: MomentumConfig = Field(default_factory=MomentumConfig)
    threshold: ThresholdConfig = Field(default_factory=ThresholdConfig)

    @field_validator("enabled")
    @classmethod
    def enabled_must_be_unique(cls, v: list[str]) -> list[str]:
        if len(set(v)) != len(v):
            raise ValueError(f"Duplicate strategies in enabled list: {v}")
        return v


class ReportConfig(BaseModel):
    sample_size: int = 5
    max_trades: int = 5

    @field_validator("sample_size", "max_trades")
    @classmethod
    def must_not_be_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("report sizes must be >= 0")
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class ApiConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 3000
    cors_origins: list[str] = []


class Config(BaseSettings):
    """Root configuration. Single source of truth."""

    market_data: MarketDataConfig = Field(default_factory=MarketDataConfig)
    strategies: StrategiesConfig = Field(default_factory=StrategiesConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    model_config = {"env_prefix": "TRADEBOT_", "env_nested_delimiter": "__"}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # YAML arrives as init kwargs; env must still win over it.
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def from_yaml(cls, path: Path, *, overlay: Path | None = None) -> Config:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        raw = yaml.safe_load(path.read_text()) or {}
        if overlay is not None and overlay.exists():
            user_data = yaml.safe_load(overlay.read_text()) or {}
            raw = _deep_merge(raw, user_data)

        return cls(**raw)

    @classmethod
    def from_repo_defaults(cls, repo_root: Path | None = None) -> Config:
        root = repo_root or Path.cwd()
        cfg_dir = root / "config"
        return cls.from_yaml(cfg_dir / "default.yaml", overlay=cfg_dir / "user.yaml")
