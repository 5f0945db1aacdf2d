"""tradebot.market.base

Provider contract.

``fetch`` returns a chronologically ordered, non-empty series or raises
:class:`~tradebot.core.exceptions.DataUnavailableError`. Retries and timeouts
belong to the provider, never to the backtest core.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tradebot.backtest.io import PriceSeries


@runtime_checkable
class PriceSeriesProvider(Protocol):
    async def fetch(self, symbol: str) -> PriceSeries: ...
