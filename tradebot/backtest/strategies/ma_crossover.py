"""tradebot.backtest.strategies.ma_crossover

Moving average crossover:
- BUY when short_ma > long_ma
- SELL otherwise (ties included)
- FLAT until both windows are populated (i < long_window - 1)

Defaults follow the classic 12/26 pair.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from tradebot.backtest.strategies.base import Strategy, StrategyKind, StrategyResult
from tradebot.core.exceptions import ConfigError


def _sma(x: np.ndarray, n: int) -> np.ndarray:
    """Trailing mean inclusive of i; NaN where fewer than ``n`` samples exist."""

    x = x.astype(np.float64)
    out = np.full_like(x, np.nan, dtype=np.float64)
    if x.size < n:
        return out
    out[n - 1 :] = sliding_window_view(x, n).mean(axis=1)
    return out


@dataclass(frozen=True, slots=True)
class MACrossoverStrategy(Strategy):
    kind: ClassVar[StrategyKind] = StrategyKind.MA_CROSSOVER

    short_window: int = 12
    long_window: int = 26

    def __post_init__(self) -> None:
        if int(self.short_window) <= 0 or int(self.long_window) <= 0:
            raise ConfigError(
                f"moving average windows must be positive, got short={self.short_window} long={self.long_window}"
            )

    def generate(self, *, close: np.ndarray) -> StrategyResult:
        t_len = close.shape[0]
        sig = np.zeros(t_len, dtype=np.int8)
        short_ma = _sma(close, int(self.short_window))
        long_ma = _sma(close, int(self.long_window))

        start = int(self.long_window) - 1
        if start < t_len:
            # NaN comparisons are False, so an unpopulated short window reads as SELL.
            sig[start:] = np.where(short_ma[start:] > long_ma[start:], 1, -1)
        # Index 0 never carries a signal, even with long_window == 1.
        if t_len:
            sig[0] = 0
        return StrategyResult(signal=sig, features={"short_ma": short_ma, "long_ma": long_ma})
