from __future__ import annotations

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from tradebot.backtest.io import PriceSeries
from tradebot.core.exceptions import DataUnavailableError


def make_client(app: FastAPI) -> AsyncClient:
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


class StaticProvider:
    def __init__(self, series: PriceSeries) -> None:
        self.series = series
        self.calls: list[str] = []

    async def fetch(self, symbol: str) -> PriceSeries:
        self.calls.append(symbol)
        return self.series


class FailingProvider:
    async def fetch(self, symbol: str) -> PriceSeries:
        raise DataUnavailableError(f"upstream down for {symbol}")
