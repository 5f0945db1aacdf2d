"""tradebot.backtest

Signal generation + sequential backtest.

- strategies annotate a price series with per-sample signals
- the engine walks the annotated series once per strategy
- results are plain frozen dataclasses, rebuilt on every run
"""
