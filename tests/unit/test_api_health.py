from __future__ import annotations

import pytest

from api.main import create_app
from tests.unit._api_test_client import make_client
from tradebot import __version__


@pytest.mark.anyio
async def test_health_returns_version(test_config):
    app = create_app(test_config)

    async with make_client(app) as ac:
        r = await ac.get("/health")
        assert r.status_code == 200
        data = r.json()
        assert data["version"] == __version__
        assert "uptime_seconds" in data


def test_load_config_prefers_cwd_config(tmp_path, monkeypatch):
    from api.deps import load_config

    cfg_dir = tmp_path / "config"
    cfg_dir.mkdir()
    (cfg_dir / "default.yaml").write_text("market_data:\n  symbol: MSFT\n")
    monkeypatch.chdir(tmp_path)

    assert load_config().market_data.symbol == "MSFT"
