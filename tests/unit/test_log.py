from __future__ import annotations

import json
import logging

from tradebot.core.config import LoggingConfig
from tradebot.core.log import JsonFormatter, KeyValueFormatter, configure_logging


def _record() -> logging.LogRecord:
    return logging.makeLogRecord(
        {"name": "tradebot.backtest.engine", "levelname": "INFO", "levelno": logging.INFO, "msg": "backtest_completed", "data_points": 60}
    )


def test_json_formatter_includes_extras() -> None:
    body = json.loads(JsonFormatter().format(_record()))
    assert body["event"] == "backtest_completed"
    assert body["level"] == "INFO"
    assert body["data_points"] == 60


def test_key_value_formatter_appends_extras() -> None:
    line = KeyValueFormatter("%(levelname)s %(message)s").format(_record())
    assert line == "INFO backtest_completed data_points=60"


def test_configure_logging_sets_level_and_single_handler() -> None:
    configure_logging(LoggingConfig(level="debug", json_output=True))
    configure_logging(LoggingConfig(level="warning", json_output=True))
    logger = logging.getLogger("tradebot")
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JsonFormatter)
    configure_logging(LoggingConfig())
