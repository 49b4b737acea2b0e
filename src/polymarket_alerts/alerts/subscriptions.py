"""
Alert subscription flow: parse, resolve the market, authorize, admit.

This is the front-door side of the engine. The engine itself never parses text,
searches markets or checks authorization; it trusts whatever is admitted here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import structlog

from polymarket_alerts.alerts.conditions import Condition, Direction
from polymarket_alerts.alerts.exceptions import (
    AdmissionDeniedError,
    NoMatchingMarketError,
    UnparseableRequestError,
)
from polymarket_alerts.alerts.parser import extract_keywords, parse_one, split_segments

if TYPE_CHECKING:
    from polymarket_alerts.alerts.engine import AlertEngine, DataSource
    from polymarket_alerts.api.models.market import Market

logger = structlog.get_logger()


class MarketSearch(Protocol):
    """Finds markets by free-text query."""

    async def search_markets(self, query: str) -> list[Market]:
        """Markets matching `query`, best match first."""
        ...


class AdmissionGate(Protocol):
    """Authorization step every condition passes before it reaches the engine."""

    async def authorize(self, condition: Condition) -> bool:
        """True when `condition` may be admitted."""
        ...


class OpenGate:
    """Admits every condition."""

    async def authorize(self, condition: Condition) -> bool:
        return True


@dataclass(frozen=True)
class Subscription:
    """An admitted condition with the market it was resolved to."""

    index: int
    condition: Condition
    question: str


async def resolve_market(text: str, search: MarketSearch) -> Market:
    """
    Find the market an alert request is about.

    Keywords are tried longest first; the first keyword with any result wins and its
    first result is used.

    Raises:
        NoMatchingMarketError: If no keyword matches a market.
    """
    keywords = extract_keywords(text)
    for keyword in sorted(keywords, key=lambda k: (-len(k), k)):
        markets = await search.search_markets(keyword)
        if markets:
            logger.debug("Resolved market", keyword=keyword, market_id=markets[0].condition_id)
            return markets[0]
    raise NoMatchingMarketError(text, keywords)


async def resolve_request(
    text: str,
    notify_url: str,
    search: MarketSearch,
) -> list[tuple[Condition, Market]]:
    """
    Parse every condition of `text` and bind each one to a market.

    Each segment is resolved with its own keywords, so "Trump > 60% and Biden < 40%"
    yields two conditions on two markets.

    Raises:
        UnparseableRequestError: If no segment parses.
        NoMatchingMarketError: If a parsed segment matches no market.
    """
    resolved: list[tuple[Condition, Market]] = []
    for segment in split_segments(text):
        condition = parse_one(segment, notify_url)
        if condition is None:
            continue
        market = await resolve_market(segment, search)
        resolved.append((condition.with_market(market.condition_id), market))

    if not resolved:
        raise UnparseableRequestError(text)
    return resolved


class SubscriptionService:
    """
    Creates alert subscriptions on an `AlertEngine`.

    Usage:
        service = SubscriptionService(engine, data_source=clob, search=gamma)
        subs = await service.subscribe_text("Alert me when Trump odds exceed 60%", url)
    """

    def __init__(
        self,
        engine: AlertEngine,
        *,
        data_source: DataSource,
        search: MarketSearch | None = None,
        gate: AdmissionGate | None = None,
    ) -> None:
        self._engine = engine
        self._search = search
        self._data_source = data_source
        self._gate = gate or OpenGate()

    async def _admit(self, condition: Condition, question: str) -> Subscription:
        if not await self._gate.authorize(condition):
            raise AdmissionDeniedError(f"Admission denied for market {condition.market_id}")
        index = self._engine.add_condition(condition)
        logger.info(
            "Alert admitted",
            index=index,
            market_id=condition.market_id,
            label=condition.label,
        )
        return Subscription(index=index, condition=condition, question=question)

    async def subscribe_text(self, text: str, notify_url: str) -> list[Subscription]:
        """
        Subscribe to every condition described by a natural-language request.

        Raises:
            ValueError: If the service was built without a market search.
        """
        if self._search is None:
            raise ValueError("subscribe_text requires a market search")
        resolved = await resolve_request(text, notify_url, self._search)
        return [await self._admit(condition, market.question) for condition, market in resolved]

    async def subscribe_market(
        self,
        market_id: str,
        *,
        threshold: float,
        direction: Direction,
        notify_url: str,
        outcome: str = "Yes",
    ) -> Subscription:
        """
        Subscribe with structured input.

        Raises:
            NoMatchingMarketError: If the market does not exist.
        """
        market = await self._data_source.fetch_market(market_id)
        if market is None:
            raise NoMatchingMarketError(market_id)
        condition = Condition(
            market_id=market_id,
            outcome=outcome,
            threshold=threshold,
            direction=direction,
            notify_url=notify_url,
        )
        return await self._admit(condition, market.question)
