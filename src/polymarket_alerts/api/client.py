"""Polymarket API clients - CLOB (live prices) and Gamma (market discovery)."""

from __future__ import annotations

from typing import Any

import structlog

from polymarket_alerts.api._base import ClientBase
from polymarket_alerts.api.config import get_config
from polymarket_alerts.api.exceptions import MarketNotFoundError, PolymarketAPIError
from polymarket_alerts.api.models.market import Market
from polymarket_alerts.api.rate_limiter import DEFAULT_REQUESTS_PER_SECOND
from polymarket_alerts.constants import DEFAULT_HTTP_TIMEOUT_SECONDS, DEFAULT_SEARCH_LIMIT

logger = structlog.get_logger()


class ClobClient(ClientBase):
    """
    Unauthenticated client for the Polymarket CLOB market endpoint.

    This is the data source of the alert engine: it only reads current prices.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        max_retries: int = 5,
        requests_per_second: float = DEFAULT_REQUESTS_PER_SECOND,
    ) -> None:
        super().__init__(
            base_url=base_url or get_config().clob_url,
            timeout=timeout,
            max_retries=max_retries,
            requests_per_second=requests_per_second,
        )

    async def get_market(self, condition_id: str) -> Market:
        """
        Fetch a single market by condition id.

        Raises:
            MarketNotFoundError: If the market does not exist.
            PolymarketAPIError: For any other HTTP error.
        """
        try:
            data = await self._get(f"/markets/{condition_id}")
        except PolymarketAPIError as e:
            if e.status_code == 404:
                raise MarketNotFoundError(condition_id) from None
            raise
        if not isinstance(data, dict) or not data:
            raise MarketNotFoundError(condition_id)
        return Market.model_validate(data)

    async def fetch_market(self, market_id: str) -> Market | None:
        """Data-source capability: the market snapshot, or None when it does not exist."""
        try:
            return await self.get_market(market_id)
        except MarketNotFoundError:
            logger.info("Market not found", market_id=market_id)
            return None


class GammaClient(ClientBase):
    """Unauthenticated client for Polymarket Gamma market discovery."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        max_retries: int = 5,
        requests_per_second: float = DEFAULT_REQUESTS_PER_SECOND,
    ) -> None:
        super().__init__(
            base_url=base_url or get_config().gamma_url,
            timeout=timeout,
            max_retries=max_retries,
            requests_per_second=requests_per_second,
        )

    async def list_open_markets(self, limit: int = DEFAULT_SEARCH_LIMIT) -> list[Market]:
        """Fetch open markets (`closed=false`) from Gamma."""
        data = await self._get("/markets", params={"closed": "false", "limit": limit})
        rows: list[Any]
        if isinstance(data, list):
            rows = data
        elif isinstance(data, dict) and isinstance(data.get("data"), list):
            rows = data["data"]
        else:
            rows = []

        markets: list[Market] = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            try:
                markets.append(Market.from_gamma(row))
            except ValueError as e:
                logger.warning(
                    "Skipping malformed market",
                    market_id=row.get("conditionId"),
                    error=str(e),
                )
        return markets

    async def search_markets(
        self,
        query: str,
        *,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> list[Market]:
        """
        Search open markets by case-insensitive text match.

        Matches `query` against each market's question and description.
        """
        needle = query.strip().lower()
        if not needle:
            return []
        markets = await self.list_open_markets(limit=limit)
        matches = [
            m
            for m in markets
            if needle in m.question.lower() or needle in m.description.lower()
        ]
        logger.debug("Market search", query=query, scanned=len(markets), matched=len(matches))
        return matches
