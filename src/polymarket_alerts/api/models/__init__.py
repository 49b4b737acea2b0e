"""Pydantic models for Polymarket API responses."""

from polymarket_alerts.api.models.market import Market, MarketToken

__all__ = [
    "Market",
    "MarketToken",
]
