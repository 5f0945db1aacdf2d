"""tradebot — intraday strategy backtests for a single ticker.

Price series in, signals and trade logs out.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "1.0.0"
