"""tradebot.backtest.io

Price series container + CSV loader.

CSV schema:
- required: timestamp (or date), close (or price)

Rows must already be in chronological order.
"""

from __future__ import annotations

import csv
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from tradebot.core.exceptions import DataUnavailableError, DegenerateInputError


@dataclass(frozen=True, slots=True)
class PriceSample:
    timestamp: str
    price: float


@dataclass(frozen=True, slots=True)
class PriceSeries:
    """Ordered samples for one instrument. Read-only once built."""

    timestamps: tuple[str, ...]
    close: np.ndarray  # float64, shape (T,)

    def __post_init__(self) -> None:
        if self.close.ndim != 1 or self.close.shape[0] != len(self.timestamps):
            raise ValueError("timestamps and close must be 1D and of same length")
        self.close.setflags(write=False)

    def __len__(self) -> int:
        return len(self.timestamps)

    def __iter__(self) -> Iterator[PriceSample]:
        for ts, px in zip(self.timestamps, self.close, strict=True):
            yield PriceSample(timestamp=ts, price=float(px))

    @classmethod
    def from_samples(cls, samples: Iterable[PriceSample]) -> PriceSeries:
        rows = list(samples)
        return cls(
            timestamps=tuple(s.timestamp for s in rows),
            close=np.array([s.price for s in rows], dtype=np.float64),
        )

    @classmethod
    def from_prices(cls, prices: Iterable[float], *, start: int = 0) -> PriceSeries:
        """Series with synthetic integer timestamps. Handy for tests and research."""

        close = np.array(list(prices), dtype=np.float64)
        return cls(timestamps=tuple(str(start + i) for i in range(close.shape[0])), close=close)


def load_prices_csv(path: str | Path) -> PriceSeries:
    p = Path(path)
    if not p.exists():
        raise DataUnavailableError(f"CSV not found: {p}")

    samples: list[PriceSample] = []
    with p.open("r", encoding="utf-8") as f:
        r = csv.DictReader(f)
        fields = {(name or "").strip() for name in (r.fieldnames or [])}
        ts_col = "timestamp" if "timestamp" in fields else "date"
        px_col = "close" if "close" in fields else "price"
        if ts_col not in fields or px_col not in fields:
            raise DataUnavailableError(f"CSV missing required columns (timestamp/date, close/price): {p}")

        for line_no, row in enumerate(r, start=2):
            row = {(k or "").strip(): (v.strip() if isinstance(v, str) else "") for k, v in row.items()}
            try:
                price = float(row[px_col])
            except ValueError as e:
                raise DataUnavailableError(f"{p}:{line_no}: non-numeric price {row[px_col]!r}") from e
            if not math.isfinite(price) or price <= 0.0:
                raise DegenerateInputError(f"{p}:{line_no}: unusable price {row[px_col]!r}")
            samples.append(PriceSample(timestamp=row[ts_col], price=price))

    return PriceSeries.from_samples(samples)
