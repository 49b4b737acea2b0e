"""Custom exceptions for Polymarket API errors."""

from __future__ import annotations


class PolymarketError(Exception):
    """Base exception for Polymarket API errors."""


class PolymarketAPIError(PolymarketError):
    """HTTP API error with status code."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"API Error {status_code}: {message}")


class RateLimitError(PolymarketAPIError):
    """Rate limit exceeded (HTTP 429)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: float | None = None,
    ) -> None:
        super().__init__(429, message)
        self.retry_after = retry_after


class MarketNotFoundError(PolymarketAPIError):
    """Market condition id not found (HTTP 404)."""

    def __init__(self, condition_id: str) -> None:
        super().__init__(404, f"Market not found: {condition_id}")
        self.condition_id = condition_id
