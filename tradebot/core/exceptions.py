"""tradebot.core.exceptions

Errors are part of the interface.

Each failure is local to one computation and distinguishable by type.
"""

from __future__ import annotations


class TradebotError(Exception):
    """Base exception for tradebot."""


class ConfigError(TradebotError):
    """Configuration or strategy parameters are missing, invalid, or inconsistent."""


class DataUnavailableError(TradebotError):
    """The price series could not be obtained."""


class DegenerateInputError(TradebotError):
    """Market data cannot be computed on (zero, negative, or non-finite denominator)."""
