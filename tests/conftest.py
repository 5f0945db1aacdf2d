from __future__ import annotations

import sys
from pathlib import Path

import pytest

# uv/pytest may run without installing the project; ensure repo root is importable.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from tradebot.backtest.io import PriceSeries  # noqa: E402
from tradebot.core.config import Config  # noqa: E402


@pytest.fixture()
def temp_dir(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture()
def test_config() -> Config:
    """Repo defaults, independent of the current working directory."""

    return Config.from_yaml(REPO_ROOT / "config" / "default.yaml")


@pytest.fixture()
def zigzag_series() -> PriceSeries:
    """60 bars: a rise, a sharp dip and a recovery. Exercises every strategy."""

    up = [100.0 + i for i in range(30)]
    dip = [125.0, 121.0, 117.0, 113.0, 110.0]
    recovery = [110.0 + 1.5 * i for i in range(1, 26)]
    return PriceSeries.from_prices(up + dip + recovery)


@pytest.fixture()
def anyio_backend() -> str:
    """The code under test is built on asyncio; run anyio-marked tests there."""

    return "asyncio"
