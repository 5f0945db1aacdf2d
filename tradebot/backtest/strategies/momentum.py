"""tradebot.backtest.strategies.momentum

Simple momentum strategy:
- BUY if close[i] > close[i - lookback]
- SELL otherwise (ties included)
- FLAT before the lookback is satisfied
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from tradebot.backtest.strategies.base import Strategy, StrategyKind, StrategyResult
from tradebot.core.exceptions import ConfigError


@dataclass(frozen=True, slots=True)
class MomentumStrategy(Strategy):
    kind: ClassVar[StrategyKind] = StrategyKind.MOMENTUM

    lookback: int = 20

    def __post_init__(self) -> None:
        if int(self.lookback) <= 0:
            raise ConfigError(f"momentum lookback must be positive, got {self.lookback}")

    def generate(self, *, close: np.ndarray) -> StrategyResult:
        close = close.astype(np.float64)
        t_len = close.shape[0]
        sig = np.zeros(t_len, dtype=np.int8)
        n = int(self.lookback)
        if n >= t_len:
            return StrategyResult(signal=sig)

        sig[n:] = np.where(close[n:] > close[:-n], 1, -1)
        return StrategyResult(signal=sig)
