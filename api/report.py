"""api.report

Presentation of backtest output: rounding, percent strings, sample slicing,
trade-log truncation. Nothing here feeds back into the computation.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from api.schemas.strategy import CurvePointOut, MarketReport, RunStrategyResponse, StrategyReport, TradeOut
from tradebot.backtest.engine import BacktestRun, MarketSummary
from tradebot.backtest.simulator import BacktestResult, Trade
from tradebot.core.config import ReportConfig

T = TypeVar("T")


def pct(value: float, ndigits: int = 2) -> str:
    return f"{value:.{ndigits}f}%"


def head_and_tail(items: Sequence[T], n: int) -> list[T]:
    if n <= 0:
        return []
    if len(items) <= 2 * n:
        return list(items)
    return list(items[:n]) + list(items[-n:])


def _trade(t: Trade) -> TradeOut:
    return TradeOut(
        timestamp=t.timestamp,
        side=t.side.value,
        price=round(t.price, 4),
        realized_return_pct=None if t.realized_return is None else round(t.realized_return * 100.0, 2),
    )


def strategy_report(result: BacktestResult, cfg: ReportConfig) -> StrategyReport:
    return StrategyReport(
        strategy=result.strategy.value,
        final_return_pct=round(result.final_return_pct, 2),
        total_return=pct(result.final_return_pct),
        number_of_trades=len(result.trades),
        trades=[_trade(t) for t in result.trades[: cfg.max_trades]],
        sample=[
            CurvePointOut(timestamp=p.timestamp, cumulative_return_pct=round(p.cumulative_return_pct, 2))
            for p in head_and_tail(result.curve, cfg.sample_size)
        ],
    )


def market_report(m: MarketSummary) -> MarketReport:
    return MarketReport(
        initial_price=m.initial_price,
        final_price=m.final_price,
        market_return_pct=round(m.market_return_pct, 2),
        market_return=pct(m.market_return_pct),
        data_points=m.data_points,
    )


def assemble(symbol: str, run: BacktestRun, cfg: ReportConfig) -> RunStrategyResponse:
    return RunStrategyResponse(
        symbol=symbol,
        market=market_report(run.market),
        strategies=[strategy_report(r, cfg) for r in run.results.values()],
    )
