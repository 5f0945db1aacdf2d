from __future__ import annotations

from pathlib import Path

from fastapi import Request

from api.errors import ApiError
from tradebot.core.config import Config
from tradebot.market import PriceSeriesProvider


def _repo_root() -> Path:
    here = Path(__file__).resolve()
    for p in [Path.cwd(), here.parent.parent]:
        if (p / "config" / "default.yaml").exists():
            return p
    return Path.cwd()


def load_config() -> Config:
    root = _repo_root()
    if (root / "config" / "default.yaml").exists():
        return Config.from_repo_defaults(root)
    return Config()


def get_config(request: Request) -> Config:
    cfg = getattr(request.app.state, "config", None)
    return cfg or load_config()


def get_provider(request: Request) -> PriceSeriesProvider:
    # Created by the app lifespan; tests inject their own.
    provider = getattr(request.app.state, "provider", None)
    if provider is None:
        raise ApiError(code="market_data.unconfigured", message="No price provider configured", status=503)
    return provider
