"""tradebot.cli

Command line interface entry point for tradebot.

Design constraints:
- argparse-based.
- Lazy imports: do not import heavy dependencies at parse time.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CliContext:
    repo_root: Path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tradebot",
        description="Backtest simple intraday strategies against a single ticker.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit.",
    )

    sub = parser.add_subparsers(dest="command")

    p_run = sub.add_parser("run", help="Fetch prices, run the strategies once, print JSON")
    p_run.add_argument("--symbol", default=None, help="Ticker (defaults to market_data.symbol).")
    p_run.add_argument("--csv", type=Path, default=None, help="Read prices from a CSV instead of the remote API.")
    p_run.add_argument(
        "--strategies",
        default=None,
        help="Comma-separated subset of ma_crossover,momentum,threshold.",
    )

    p_api = sub.add_parser("api", help="Start FastAPI server")
    p_api.add_argument("--host", default=None)
    p_api.add_argument("--port", type=int, default=None)

    return parser


def _print_version() -> None:
    from tradebot import __version__

    print(f"tradebot {__version__}")


def _load_config(ctx: CliContext):
    from tradebot.core.config import Config

    if (ctx.repo_root / "config" / "default.yaml").exists():
        return Config.from_repo_defaults(ctx.repo_root)
    return Config()


async def _fetch(config, args: argparse.Namespace, symbol: str):
    from tradebot.core.client import ClientConfig, DataClient
    from tradebot.market import AlphaVantageProvider, CsvPriceProvider

    if args.csv is not None:
        return await CsvPriceProvider(args.csv).fetch(symbol)

    md = config.market_data
    async with DataClient(ClientConfig.from_market_data(md)) as client:
        return await AlphaVantageProvider(client, md).fetch(symbol)


def _cmd_run(ctx: CliContext, args: argparse.Namespace) -> int:
    from api.report import assemble
    from tradebot.backtest.engine import build_strategies, parse_kinds, run_backtest
    from tradebot.core.exceptions import TradebotError
    from tradebot.core.log import configure_logging

    config = _load_config(ctx)
    configure_logging(config.logging)
    symbol = (args.symbol or config.market_data.symbol).upper()
    only = [s.strip() for s in args.strategies.split(",") if s.strip()] if args.strategies else None

    try:
        specs = build_strategies(config.strategies, parse_kinds(only) if only else None)
        series = asyncio.run(_fetch(config, args, symbol))
        run = run_backtest(series=series, strategies=specs)
    except TradebotError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(assemble(symbol, run, config.report).model_dump(mode="json"), indent=2))
    return 0


def _cmd_api(ctx: CliContext, args: argparse.Namespace) -> int:
    config = _load_config(ctx)
    host = args.host if args.host is not None else config.api.host
    port = args.port if args.port is not None else config.api.port

    import uvicorn

    uvicorn.run("api.main:app", host=host, port=port, reload=False)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        _print_version()
        return 0

    if not args.command:
        parser.print_help()
        return 2

    ctx = CliContext(repo_root=Path.cwd())

    dispatch: dict[str, Callable[[CliContext, argparse.Namespace], int]] = {
        "run": _cmd_run,
        "api": _cmd_api,
    }

    fn = dispatch.get(str(args.command))
    if fn is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 2

    return int(fn(ctx, args))


if __name__ == "__main__":
    raise SystemExit(main())
