"""tradebot.backtest.signals

Annotated series: a price series plus one signal array per strategy kind.

Annotation is additive. Applying generators in any order yields the same
mapping, and a kind can only be annotated once.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np

from tradebot.backtest.io import PriceSeries
from tradebot.backtest.strategies import Strategy, StrategyKind
from tradebot.core.exceptions import ConfigError


@dataclass(frozen=True, slots=True)
class AnnotatedSeries:
    series: PriceSeries
    signals: Mapping[StrategyKind, np.ndarray] = field(default_factory=dict)
    features: Mapping[str, np.ndarray] = field(default_factory=dict)

    @property
    def kinds(self) -> tuple[StrategyKind, ...]:
        return tuple(self.signals)

    def signal(self, kind: StrategyKind) -> np.ndarray:
        try:
            return self.signals[kind]
        except KeyError:
            raise ConfigError(f"series has no signal for strategy {kind!s}; annotated: {list(self.signals)}") from None

    def with_strategy(self, strategy: Strategy) -> AnnotatedSeries:
        kind = strategy.kind
        if kind in self.signals:
            raise ConfigError(f"strategy {kind!s} already annotated")

        res = strategy.generate(close=self.series.close)
        sig = np.asarray(res.signal, dtype=np.int8)
        if sig.shape != self.series.close.shape:
            raise ValueError(f"{kind!s} produced {sig.shape[0]} signals for {len(self.series)} samples")
        sig.setflags(write=False)

        features = dict(self.features)
        for name, values in res.features.items():
            features[f"{kind}.{name}"] = values
        return AnnotatedSeries(
            series=self.series,
            signals=MappingProxyType({**self.signals, kind: sig}),
            features=MappingProxyType(features),
        )


def annotate(series: PriceSeries, strategies: Iterable[Strategy]) -> AnnotatedSeries:
    out = AnnotatedSeries(series=series)
    for strategy in strategies:
        out = out.with_strategy(strategy)
    return out
