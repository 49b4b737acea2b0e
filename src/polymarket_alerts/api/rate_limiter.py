"""
Client-side rate limiting for Polymarket API requests.

The public CLOB and Gamma read endpoints share one request budget per client, so a
burst of searches followed by market fetches is smoothed with a token bucket.
"""

import asyncio
import time

import structlog

logger = structlog.get_logger()

# Requests per second allowed by default for the public read endpoints.
DEFAULT_REQUESTS_PER_SECOND = 10.0

# Waits shorter than this are not worth a log line.
_LOG_WAIT_THRESHOLD_SECONDS = 0.1


class TokenBucket:
    """
    Token bucket refilled continuously at `rate` tokens per second.

    The bucket starts full and never holds more than `capacity` tokens (defaults to
    one second worth of tokens).
    """

    def __init__(self, rate: float, capacity: float | None = None) -> None:
        self._rate = rate
        self._capacity = float(capacity or rate)
        self._tokens = self._capacity
        self._updated_at = time.monotonic()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        self._tokens = min(self._capacity, self._tokens + (now - self._updated_at) * self._rate)
        self._updated_at = now

    async def acquire(self, tokens: float = 1.0) -> float:
        """
        Take `tokens` from the bucket, sleeping until enough have accumulated.

        Returns:
            Seconds spent waiting (0.0 when tokens were available).
        """
        async with self._lock:
            self._refill()
            wait_seconds = max(0.0, (tokens - self._tokens) / self._rate)
            if wait_seconds:
                await asyncio.sleep(wait_seconds)
                self._refill()
            self._tokens = max(0.0, self._tokens - tokens)
        return wait_seconds


class RateLimiter:
    """
    Request budget of one Polymarket API client.
    """

    def __init__(
        self,
        requests_per_second: float = DEFAULT_REQUESTS_PER_SECOND,
        safety_margin: float = 0.9,
    ) -> None:
        """
        Args:
            requests_per_second: Upstream request budget.
            safety_margin: Fraction of the budget actually used (0.9 = 90%)
        """
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")
        self._limit = requests_per_second * safety_margin
        self._bucket = TokenBucket(rate=self._limit)

        logger.debug("Rate limiter initialized", limit=self._limit)

    async def acquire(self) -> None:
        """Wait for permission to send one request."""
        waited = await self._bucket.acquire()
        if waited > _LOG_WAIT_THRESHOLD_SECONDS:
            logger.debug("Rate limit wait", wait_seconds=round(waited, 3), limit=self._limit)

    @property
    def limit(self) -> float:
        """Effective requests per second after the safety margin."""
        return self._limit
