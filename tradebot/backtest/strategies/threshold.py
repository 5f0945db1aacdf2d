"""tradebot.backtest.strategies.threshold

Threshold mean reversion (long entries only):
- BUY after a single-step drop of at least |buy_threshold|, arming the entry price
- SELL once price has risen sell_threshold above the armed entry
- FLAT otherwise

Unlike the other generators this one carries state (the armed price) through
a single forward pass. The state lives in ``generate`` only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from tradebot.backtest.strategies.base import Strategy, StrategyKind, StrategyResult
from tradebot.core.exceptions import ConfigError, DegenerateInputError


@dataclass(frozen=True, slots=True)
class ThresholdStrategy(Strategy):
    kind: ClassVar[StrategyKind] = StrategyKind.THRESHOLD

    buy_threshold: float = -0.02
    sell_threshold: float = 0.03

    def __post_init__(self) -> None:
        if not float(self.buy_threshold) < 0.0:
            raise ConfigError(f"buy_threshold must be negative, got {self.buy_threshold}")
        if not float(self.sell_threshold) > 0.0:
            raise ConfigError(f"sell_threshold must be positive, got {self.sell_threshold}")

    def generate(self, *, close: np.ndarray) -> StrategyResult:
        close = close.astype(np.float64)
        t_len = close.shape[0]
        sig = np.zeros(t_len, dtype=np.int8)
        buy_at = float(self.buy_threshold)
        sell_at = float(self.sell_threshold)

        armed: float | None = None
        for i in range(1, t_len):
            prev = float(close[i - 1])
            price = float(close[i])
            if not math.isfinite(prev) or prev <= 0.0:
                raise DegenerateInputError(f"non-positive prior price {prev} at index {i - 1}")

            change = (price - prev) / prev
            # Inclusive boundaries on both sides.
            if armed is None and change <= buy_at:
                sig[i] = 1
                armed = price
            elif armed is not None and (price - armed) / armed >= sell_at:
                sig[i] = -1
                armed = None

        return StrategyResult(signal=sig)
