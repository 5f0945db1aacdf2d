"""tradebot.backtest.simulator

Single-asset sequential backtest.

One forward walk per strategy:
- the position held entering step i earns position * price_return[i]
- returns accumulate additively (no compounding)
- a trade fires when the signal is non-FLAT and differs from the position

A SELL with no open BUY moves the position short but is not logged as a
trade. Shorts count toward returns; only long round-trips appear in the log.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum

from tradebot.backtest.signals import AnnotatedSeries
from tradebot.backtest.strategies import Signal, StrategyKind
from tradebot.core.exceptions import DegenerateInputError


class TradeSide(StrEnum):
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True, slots=True)
class Trade:
    timestamp: str
    side: TradeSide
    price: float
    realized_return: float | None = None  # fraction, SELL only


@dataclass(frozen=True, slots=True)
class CurvePoint:
    timestamp: str
    cumulative_return_pct: float


@dataclass(frozen=True, slots=True)
class BacktestResult:
    strategy: StrategyKind
    curve: tuple[CurvePoint, ...]
    trades: tuple[Trade, ...]
    final_return_pct: float

    @classmethod
    def empty(cls, strategy: StrategyKind) -> BacktestResult:
        return cls(strategy=strategy, curve=(), trades=(), final_return_pct=0.0)


@dataclass(slots=True)
class PositionState:
    position: int = 0
    cumulative_return: float = 0.0
    open_trade_price: float | None = None


def compute_returns(annotated: AnnotatedSeries, kind: StrategyKind) -> BacktestResult:
    signal = annotated.signal(kind)
    timestamps = annotated.series.timestamps
    close = annotated.series.close
    t_len = close.shape[0]
    if t_len < 2:
        return BacktestResult.empty(kind)

    state = PositionState()
    curve: list[CurvePoint] = []
    trades: list[Trade] = []

    for i in range(1, t_len):
        prev = float(close[i - 1])
        price = float(close[i])
        if not math.isfinite(prev) or prev <= 0.0:
            raise DegenerateInputError(f"non-positive prior price {prev} at {timestamps[i - 1]}")
        if not math.isfinite(price):
            raise DegenerateInputError(f"non-finite price {price} at {timestamps[i]}")

        price_return = (price - prev) / prev
        state.cumulative_return += state.position * price_return
        curve.append(CurvePoint(timestamp=timestamps[i], cumulative_return_pct=state.cumulative_return * 100.0))

        sig = int(signal[i])
        if sig == state.position or sig == Signal.FLAT:
            continue

        if sig == Signal.BUY:
            trades.append(Trade(timestamp=timestamps[i], side=TradeSide.BUY, price=price))
            state.open_trade_price = price
        elif state.open_trade_price is not None:
            entry = state.open_trade_price
            trades.append(
                Trade(
                    timestamp=timestamps[i],
                    side=TradeSide.SELL,
                    price=price,
                    realized_return=(price - entry) / entry,
                )
            )
            state.open_trade_price = None
        state.position = sig

    return BacktestResult(
        strategy=kind,
        curve=tuple(curve),
        trades=tuple(trades),
        final_return_pct=state.cumulative_return * 100.0,
    )
