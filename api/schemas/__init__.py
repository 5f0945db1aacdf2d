from api.schemas.common import ErrorBody, ErrorResponse
from api.schemas.strategy import CurvePointOut, MarketReport, RunStrategyResponse, StrategyReport, TradeOut

__all__ = [
    "CurvePointOut",
    "ErrorBody",
    "ErrorResponse",
    "MarketReport",
    "RunStrategyResponse",
    "StrategyReport",
    "TradeOut",
]
