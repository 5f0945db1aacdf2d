"""tradebot.backtest.engine

Backtest entry point.

- refuse to compute on a missing or empty series
- annotate the series with every configured strategy
- walk it once per strategy (simulator)
- summarize the buy-and-hold market move alongside

Every call builds fresh state; nothing is shared across runs.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import numpy as np

from tradebot.backtest.io import PriceSeries
from tradebot.backtest.signals import AnnotatedSeries, annotate
from tradebot.backtest.simulator import BacktestResult, compute_returns
from tradebot.backtest.strategies import (
    MACrossoverStrategy,
    MomentumStrategy,
    StrategyKind,
    StrategySpec,
    ThresholdStrategy,
)
from tradebot.core.config import StrategiesConfig
from tradebot.core.exceptions import ConfigError, DataUnavailableError, DegenerateInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MarketSummary:
    initial_price: float
    final_price: float
    market_return_pct: float
    data_points: int


@dataclass(frozen=True, slots=True)
class BacktestRun:
    annotated: AnnotatedSeries
    market: MarketSummary
    results: Mapping[StrategyKind, BacktestResult]

    @property
    def series(self) -> PriceSeries:
        return self.annotated.series


def market_summary(series: PriceSeries) -> MarketSummary:
    if len(series) == 0:
        raise DataUnavailableError("price series is empty")

    initial = float(series.close[0])
    final = float(series.close[-1])
    if not math.isfinite(initial) or initial <= 0.0:
        raise DegenerateInputError(f"non-positive initial price {initial}")
    if not math.isfinite(final):
        raise DegenerateInputError(f"non-finite final price {final}")

    return MarketSummary(
        initial_price=initial,
        final_price=final,
        market_return_pct=(final - initial) / initial * 100.0,
        data_points=len(series),
    )


def parse_kinds(names: Sequence[str]) -> list[StrategyKind]:
    """Resolve strategy names, rejecting unknown names and repeats."""

    kinds: list[StrategyKind] = []
    for name in names:
        try:
            kind = StrategyKind(name)
        except ValueError:
            raise ConfigError(f"unknown strategy {name!r}; expected one of {[k.value for k in StrategyKind]}") from None
        if kind in kinds:
            raise ConfigError(f"strategy {name!r} requested more than once")
        kinds.append(kind)
    return kinds


def build_strategies(cfg: StrategiesConfig, kinds: Sequence[StrategyKind] | None = None) -> list[StrategySpec]:
    """Instantiate the enabled strategies (or the ``kinds`` subset) from config."""

    out: list[StrategySpec] = []
    for kind in kinds if kinds is not None else parse_kinds(cfg.enabled):
        if kind is StrategyKind.MA_CROSSOVER:
            out.append(
                MACrossoverStrategy(
                    short_window=cfg.ma_crossover.short_window,
                    long_window=cfg.ma_crossover.long_window,
                )
            )
        elif kind is StrategyKind.MOMENTUM:
            out.append(MomentumStrategy(lookback=cfg.momentum.lookback))
        else:
            out.append(
                ThresholdStrategy(
                    buy_threshold=cfg.threshold.buy_threshold,
                    sell_threshold=cfg.threshold.sell_threshold,
                )
            )
    return out


def run_backtest(*, series: PriceSeries | None, strategies: Sequence[StrategySpec]) -> BacktestRun:
    if series is None or len(series) == 0:
        raise DataUnavailableError("no price data to backtest")

    bad = np.flatnonzero(~np.isfinite(series.close) | (series.close <= 0.0))
    if bad.size:
        i = int(bad[0])
        raise DegenerateInputError(f"unusable price {float(series.close[i])} at {series.timestamps[i]}")

    annotated = annotate(series, strategies)
    results = {kind: compute_returns(annotated, kind) for kind in annotated.kinds}
    market = market_summary(series)

    logger.info(
        "backtest_completed",
        extra={
            "data_points": market.data_points,
            "market_return_pct": round(market.market_return_pct, 4),
            **{f"{k}_return_pct": round(r.final_return_pct, 4) for k, r in results.items()},
        },
    )
    return BacktestRun(annotated=annotated, market=market, results=results)
