from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from api.deps import get_config, get_provider
from api.errors import ApiError
from api.report import assemble
from api.schemas.common import ErrorResponse
from api.schemas.strategy import RunStrategyResponse
from tradebot.backtest.engine import build_strategies, parse_kinds, run_backtest
from tradebot.backtest.strategies import StrategyKind
from tradebot.core.config import Config
from tradebot.core.exceptions import ConfigError, DataUnavailableError, DegenerateInputError
from tradebot.market import PriceSeriesProvider

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_strategies(raw: str | None) -> list[StrategyKind] | None:
    if raw is None:
        return None
    names = [s.strip() for s in raw.split(",") if s.strip()]
    if not names:
        return None
    try:
        return parse_kinds(names)
    except ConfigError as e:
        raise ApiError(code="strategy.invalid", message=str(e), status=400) from e


@router.get(
    "/run-strategy",
    response_model=RunStrategyResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def run_strategy(
    symbol: str | None = Query(default=None, min_length=1, max_length=16),
    strategies: str | None = Query(default=None, description="Comma-separated subset, e.g. ma_crossover,threshold"),
    config: Config = Depends(get_config),
    provider: PriceSeriesProvider = Depends(get_provider),
) -> RunStrategyResponse:
    sym = (symbol or config.market_data.symbol).upper()
    kinds = _parse_strategies(strategies)

    try:
        specs = build_strategies(config.strategies, kinds)
        series = await provider.fetch(sym)
        run = run_backtest(series=series, strategies=specs)
    except ConfigError as e:
        # Names were validated above; what remains is the server's own strategy config.
        logger.error("run_strategy_config_invalid", extra={"error": str(e)})
        raise ApiError(code="config.invalid", message=str(e), status=500) from e
    except DataUnavailableError as e:
        logger.warning("run_strategy_data_unavailable", extra={"symbol": sym, "error": str(e)})
        raise ApiError(code="market_data.unavailable", message="Failed to fetch market data", status=500) from e
    except DegenerateInputError as e:
        logger.warning("run_strategy_degenerate_input", extra={"symbol": sym, "error": str(e)})
        raise ApiError(code="market_data.degenerate", message=str(e), status=502) from e

    return assemble(sym, run, config.report)
