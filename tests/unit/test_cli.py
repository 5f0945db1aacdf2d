from __future__ import annotations

import json
from pathlib import Path

import pytest

from tradebot import __version__
from tradebot.cli import build_parser, main


def _write_csv(path: Path, prices: list[float]) -> Path:
    rows = ["timestamp,close"] + [f"2024-01-02 {9 + i // 12:02d}:{(i % 12) * 5:02d}:00,{p}" for i, p in enumerate(prices)]
    path.write_text("\n".join(rows) + "\n")
    return path


def test_cli_help_includes_subcommands(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main([])
    assert rc == 2
    out = capsys.readouterr().out
    assert "run" in out
    assert "api" in out


def test_cli_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["--version"])
    assert rc == 0
    assert capsys.readouterr().out.strip() == f"tradebot {__version__}"


def test_cli_unknown_command_errors() -> None:
    parser = build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["nope"])


def test_cli_run_from_csv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.chdir(tmp_path)
    prices = [100.0 + i for i in range(30)] + [125.0, 121.0, 130.0]
    csv_path = _write_csv(tmp_path / "prices.csv", prices)

    rc = main(["run", "--csv", str(csv_path), "--symbol", "ibm", "--strategies", "threshold,momentum"])
    assert rc == 0

    js = json.loads(capsys.readouterr().out)
    assert js["symbol"] == "IBM"
    assert js["market"]["data_points"] == 33
    assert [s["strategy"] for s in js["strategies"]] == ["threshold", "momentum"]
    assert js["strategies"][0]["number_of_trades"] == 2


def test_cli_run_missing_csv_fails(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.chdir(tmp_path)
    rc = main(["run", "--csv", str(tmp_path / "missing.csv")])
    assert rc == 1
    assert "CSV not found" in capsys.readouterr().err


def test_cli_api_passes_explicit_port_zero(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import uvicorn

    monkeypatch.chdir(tmp_path)
    seen: dict[str, object] = {}
    monkeypatch.setattr(uvicorn, "run", lambda app, **kw: seen.update(kw))

    assert main(["api", "--port", "0", "--host", "0.0.0.0"]) == 0
    assert seen["port"] == 0
    assert seen["host"] == "0.0.0.0"


def test_cli_api_defaults_to_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import uvicorn

    monkeypatch.chdir(tmp_path)
    seen: dict[str, object] = {}
    monkeypatch.setattr(uvicorn, "run", lambda app, **kw: seen.update(kw))

    assert main(["api"]) == 0
    assert (seen["host"], seen["port"]) == ("127.0.0.1", 3000)
