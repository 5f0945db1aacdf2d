"""tradebot.backtest.strategies.base

Signal generator contract.

A strategy maps a full price series to one signal per sample.
It may not read any other strategy's output.

Signal convention:
- -1 = SELL / short
-  0 = FLAT / no signal
- +1 = BUY / long

Index 0 is always FLAT. The engine translates signals into positions and trades.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import ClassVar

import numpy as np


class Signal(IntEnum):
    SELL = -1
    FLAT = 0
    BUY = 1


class StrategyKind(StrEnum):
    MA_CROSSOVER = "ma_crossover"
    MOMENTUM = "momentum"
    THRESHOLD = "threshold"


@dataclass(frozen=True, slots=True)
class StrategyResult:
    signal: np.ndarray  # int8, shape (T,), values in {-1, 0, 1}
    features: Mapping[str, np.ndarray] = field(default_factory=dict)


class Strategy:
    kind: ClassVar[StrategyKind]

    def generate(self, *, close: np.ndarray) -> StrategyResult:
        raise NotImplementedError
