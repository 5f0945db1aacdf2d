"""tradebot.backtest.strategies

Strategy library.

Three deliberately simple heuristics. Each is identified by a
:class:`StrategyKind`; no generator reads another's signal.
"""

from __future__ import annotations

from tradebot.backtest.strategies.base import Signal, Strategy, StrategyKind, StrategyResult
from tradebot.backtest.strategies.ma_crossover import MACrossoverStrategy
from tradebot.backtest.strategies.momentum import MomentumStrategy
from tradebot.backtest.strategies.threshold import ThresholdStrategy

StrategySpec = MACrossoverStrategy | MomentumStrategy | ThresholdStrategy

__all__ = [
    "Signal",
    "Strategy",
    "StrategyKind",
    "StrategyResult",
    "StrategySpec",
    "MACrossoverStrategy",
    "MomentumStrategy",
    "ThresholdStrategy",
]
