"""tradebot.market.local

CSV-backed provider for offline runs. The symbol is informational only.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tradebot.backtest.io import PriceSeries, load_prices_csv
from tradebot.core.exceptions import DataUnavailableError

logger = logging.getLogger(__name__)


class CsvPriceProvider:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def fetch(self, symbol: str) -> PriceSeries:
        series = load_prices_csv(self.path)
        if len(series) == 0:
            raise DataUnavailableError(f"CSV has no rows: {self.path}")
        logger.info("csv_prices_loaded", extra={"symbol": symbol, "path": str(self.path), "rows": len(series)})
        return series
