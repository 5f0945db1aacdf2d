"""tradebot.market.alphavantage

Alpha Vantage intraday provider.

Fetches ``TIME_SERIES_INTRADAY`` and keeps the close of each bar. The API
returns bars newest first and signals quota/key problems with a 200 response
carrying ``Note``, ``Information`` or ``Error Message`` instead of data.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import httpx

from tradebot.backtest.io import PriceSample, PriceSeries
from tradebot.core.client import DataClient
from tradebot.core.config import MarketDataConfig
from tradebot.core.exceptions import DataUnavailableError, DegenerateInputError

logger = logging.getLogger(__name__)

_CLOSE_KEY = "4. close"
_API_MESSAGE_KEYS = ("Error Message", "Note", "Information")


def parse_intraday(data: dict[str, Any], *, interval: str) -> PriceSeries:
    """Turn an intraday payload into an ascending series of closes."""

    key = f"Time Series ({interval})"
    bars = data.get(key)
    if not isinstance(bars, dict):
        detail = next((str(data[k]) for k in _API_MESSAGE_KEYS if k in data), f"missing {key!r}")
        raise DataUnavailableError(f"intraday response has no time series: {detail}")
    if not bars:
        raise DataUnavailableError("intraday time series is empty")

    samples: list[PriceSample] = []
    for ts in sorted(bars):
        row = bars[ts]
        try:
            price = float(row[_CLOSE_KEY])
        except (KeyError, TypeError, ValueError) as e:
            raise DataUnavailableError(f"bad close for {ts}: {row!r}") from e
        if not math.isfinite(price) or price <= 0.0:
            raise DegenerateInputError(f"unusable close for {ts}: {price}")
        samples.append(PriceSample(timestamp=ts, price=price))
    return PriceSeries.from_samples(samples)


class AlphaVantageProvider:
    def __init__(self, client: DataClient, config: MarketDataConfig | None = None) -> None:
        self.client = client
        self.config = config or MarketDataConfig()

    def _params(self, symbol: str) -> dict[str, str]:
        return {
            "function": "TIME_SERIES_INTRADAY",
            "symbol": symbol,
            "interval": self.config.interval,
            "outputsize": self.config.outputsize,
            "apikey": self.config.api_key,
        }

    async def fetch(self, symbol: str) -> PriceSeries:
        try:
            data = await self.client.get_json(self.config.url, params=self._params(symbol))
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("market_data_fetch_failed", extra={"symbol": symbol, "error": str(e)})
            raise DataUnavailableError(f"failed to fetch market data for {symbol}: {e}") from e
        if not isinstance(data, dict):
            raise DataUnavailableError(f"unexpected intraday payload type for {symbol}: {type(data).__name__}")

        series = parse_intraday(data, interval=self.config.interval)
        logger.info(
            "market_data_fetched",
            extra={"symbol": symbol, "bars": len(series), "first": series.timestamps[0], "last": series.timestamps[-1]},
        )
        return series
