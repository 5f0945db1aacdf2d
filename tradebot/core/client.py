"""tradebot.core.client

Async JSON GET client for market data endpoints.

- requests are spaced to at most ``rate_limit_rps``
- only throttling, server errors and network failures are retried
- a circuit breaker stops hammering an endpoint that keeps failing

Bounding the remote fetch is this client's job; the backtest core never retries.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx

from tradebot.core.config import MarketDataConfig

logger = logging.getLogger(__name__)

# 4xx other than 429 means a bad key or request; retrying only burns quota.
RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


@dataclass(frozen=True, slots=True)
class ClientConfig:
    rate_limit_rps: float = 1.0
    max_retries: int = 2
    timeout_s: float = 20.0
    max_bytes: int = 8 * 1024 * 1024
    breaker_threshold: int = 5
    breaker_cooldown_s: float = 30.0

    @classmethod
    def from_market_data(cls, md: MarketDataConfig) -> ClientConfig:
        return cls(
            rate_limit_rps=md.rate_limit_rps,
            max_retries=md.max_retries,
            timeout_s=md.timeout_s,
            max_bytes=md.max_bytes,
        )


class RateLimiter:
    """Minimum spacing between requests."""

    def __init__(self, rate_per_sec: float) -> None:
        self.interval = 1.0 / max(rate_per_sec, 0.001)
        self._next_at = 0.0
        self._lock = asyncio.Lock()

    async def wait(self) -> None:
        async with self._lock:
            delay = self._next_at - time.monotonic()
            if delay > 0:
                await asyncio.sleep(delay)
            self._next_at = time.monotonic() + self.interval


class CircuitBreaker:
    def __init__(self, threshold: int, cooldown_s: float) -> None:
        self.threshold = threshold
        self.cooldown_s = cooldown_s
        self.failures = 0
        self.opened_at: float | None = None

    @property
    def is_open(self) -> bool:
        if self.opened_at is None:
            return False
        if time.monotonic() - self.opened_at >= self.cooldown_s:
            self.failures = 0
            self.opened_at = None
            return False
        return True

    def record_success(self) -> None:
        self.failures = 0
        self.opened_at = None

    def record_failure(self) -> None:
        self.failures += 1
        if self.failures >= self.threshold:
            self.opened_at = time.monotonic()


def is_retryable(exc: httpx.HTTPError) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE_STATUS
    return isinstance(exc, (httpx.TimeoutException, httpx.NetworkError))


class DataClient:
    def __init__(self, config: ClientConfig | None = None, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config or ClientConfig()
        self._limiter = RateLimiter(self.config.rate_limit_rps)
        self._breaker = CircuitBreaker(self.config.breaker_threshold, self.config.breaker_cooldown_s)
        self._client = httpx.AsyncClient(timeout=self.config.timeout_s, transport=transport)

    async def __aenter__(self) -> DataClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_json(self, url: str, *, params: dict[str, str] | None = None) -> Any:
        if self._breaker.is_open:
            raise httpx.TransportError("circuit breaker open")

        attempt = 0
        while True:
            await self._limiter.wait()
            try:
                resp = await self._client.get(url, params=params)
                resp.raise_for_status()
            except (httpx.HTTPStatusError, httpx.TimeoutException, httpx.NetworkError) as e:
                self._breaker.record_failure()
                retry = is_retryable(e) and attempt < self.config.max_retries
                logger.warning("http_get_failed", extra={"url": url, "attempt": attempt, "retry": retry, "error": str(e)})
                if not retry:
                    raise
                await asyncio.sleep(min(0.5 * 2**attempt, 8.0))
                attempt += 1
                continue

            self._breaker.record_success()
            size = len(resp.content)
            if size > self.config.max_bytes:
                raise httpx.TransportError(f"response_too_large:{size}")
            return resp.json()
