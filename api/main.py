from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import load_config
from api.errors import ApiError, api_error_handler
from api.routes import get_api_router
from tradebot import __version__
from tradebot.backtest.engine import build_strategies
from tradebot.core.client import ClientConfig, DataClient
from tradebot.core.config import Config
from tradebot.core.log import configure_logging
from tradebot.market import AlphaVantageProvider


def create_app(config: Config | None = None) -> FastAPI:
    start = time.monotonic()
    config = config or load_config()
    configure_logging(config.logging)
    # Raises ConfigError on bad strategy parameters.
    build_strategies(config.strategies)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.started_at = start

        # Expose config/provider in app state for dependency injection + tests.
        app.state.config = getattr(app.state, "config", None) or config

        client: DataClient | None = None
        if getattr(app.state, "provider", None) is None:
            md = app.state.config.market_data
            client = DataClient(ClientConfig.from_market_data(md))
            app.state.provider = AlphaVantageProvider(client, md)

        yield

        # Close the HTTP client only if this lifespan created it.
        if client is not None:
            await client.aclose()

    openapi_tags = [
        {"name": "health", "description": "Liveness and version metadata."},
        {"name": "strategy", "description": "Run the configured strategies against the latest intraday series."},
    ]

    app = FastAPI(
        title="tradebot API",
        description="Intraday strategy backtests for a single ticker",
        version=__version__,
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )

    app.add_exception_handler(ApiError, api_error_handler)

    # CORS: only enable if origins explicitly configured
    if config.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.api.cors_origins,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    app.include_router(get_api_router())
    return app


# Module-level app for uvicorn (e.g. `uvicorn api.main:app`).
app = create_app()
