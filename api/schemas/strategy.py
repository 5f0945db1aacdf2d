from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class TradeOut(BaseModel):
    timestamp: str
    side: Literal["BUY", "SELL"]
    price: float
    realized_return_pct: float | None = None


class CurvePointOut(BaseModel):
    timestamp: str
    cumulative_return_pct: float


class StrategyReport(BaseModel):
    strategy: str
    final_return_pct: float
    total_return: str = Field(description="final_return_pct as a percent string, e.g. '2.98%'")
    number_of_trades: int = Field(ge=0)
    trades: list[TradeOut]
    sample: list[CurvePointOut]


class MarketReport(BaseModel):
    initial_price: float
    final_price: float
    market_return_pct: float
    market_return: str
    data_points: int = Field(ge=0)


class RunStrategyResponse(BaseModel):
    symbol: str
    market: MarketReport
    strategies: list[StrategyReport]
