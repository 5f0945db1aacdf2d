"""tradebot.market

Price series providers. The only await point in a backtest request.
"""

from __future__ import annotations

from tradebot.market.alphavantage import AlphaVantageProvider
from tradebot.market.base import PriceSeriesProvider
from tradebot.market.local import CsvPriceProvider

__all__ = ["AlphaVantageProvider", "CsvPriceProvider", "PriceSeriesProvider"]
