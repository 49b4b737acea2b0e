"""Polymarket API client module."""

from polymarket_alerts.api.client import ClobClient, GammaClient
from polymarket_alerts.api.exceptions import (
    MarketNotFoundError,
    PolymarketAPIError,
    PolymarketError,
    RateLimitError,
)
from polymarket_alerts.api.models import Market, MarketToken

__all__ = [
    # Clients
    "ClobClient",
    "GammaClient",
    # Exceptions
    "MarketNotFoundError",
    "PolymarketAPIError",
    "PolymarketError",
    "RateLimitError",
    # Models
    "Market",
    "MarketToken",
]
