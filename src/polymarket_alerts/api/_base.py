"""Base client infrastructure - HTTP plumbing, retries, rate limiting."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from polymarket_alerts.api.exceptions import PolymarketAPIError, RateLimitError
from polymarket_alerts.api.rate_limiter import DEFAULT_REQUESTS_PER_SECOND, RateLimiter
from polymarket_alerts.constants import DEFAULT_HTTP_TIMEOUT_SECONDS

if TYPE_CHECKING:
    from tenacity import RetryCallState


logger = structlog.get_logger()

_BACKOFF = wait_exponential(multiplier=1, min=1, max=60)
_RETRYABLE = (RateLimitError, httpx.NetworkError, httpx.TimeoutException)


def _backoff_seconds(retry_state: RetryCallState) -> float:
    """Honor the server's Retry-After on 429; otherwise back off exponentially."""
    if retry_state.outcome is not None:
        error = retry_state.outcome.exception()
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return error.retry_after
    return float(_BACKOFF(retry_state))


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome is not None else None
    logger.info(
        "Retrying Polymarket request",
        attempt=retry_state.attempt_number,
        error=str(error),
        sleep_seconds=retry_state.upcoming_sleep,
    )


def _retry_after(response: httpx.Response) -> float | None:
    """Seconds from a numeric Retry-After header (HTTP-date values are ignored)."""
    header = response.headers.get("Retry-After")
    if header is None:
        return None
    try:
        return max(0.0, float(header))
    except ValueError:
        return None


def _raise_for_status(response: httpx.Response) -> None:
    if response.status_code == 429:
        raise RateLimitError(
            message=response.text or "Rate limit exceeded",
            retry_after=_retry_after(response),
        )
    if response.status_code >= 400:
        raise PolymarketAPIError(status_code=response.status_code, message=response.text)


class ClientBase:
    """
    Base class for Polymarket API clients.

    Owns the httpx client, the request budget and the retry policy. Subclasses only
    build paths and turn JSON into models.
    """

    _client: httpx.AsyncClient
    _max_retries: int
    _rate_limiter: RateLimiter

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        max_retries: int = 5,
        requests_per_second: float = DEFAULT_REQUESTS_PER_SECOND,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )
        self._max_retries = max_retries
        self._rate_limiter = RateLimiter(requests_per_second=requests_per_second)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Rate-limited GET with retries on 429, network errors and timeouts.

        Returns:
            Decoded JSON body (object or list, depending on the endpoint).

        Raises:
            RateLimitError: If still rate limited after `max_retries` attempts.
            PolymarketAPIError: For any other HTTP error status.
        """
        await self._rate_limiter.acquire()

        retrying = AsyncRetrying(
            retry=retry_if_exception_type(_RETRYABLE),
            stop=stop_after_attempt(self._max_retries),
            wait=_backoff_seconds,
            before_sleep=_log_retry,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                response = await self._client.get(path, params=params)
                _raise_for_status(response)
                logger.debug("Polymarket response", path=path, status_code=response.status_code)
                return response.json()

        raise AssertionError("AsyncRetrying should have returned or raised")  # pragma: no cover
