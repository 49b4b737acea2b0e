"""
Shared test fixtures.

PHILOSOPHY: Use REAL objects wherever possible. Only mock at system boundaries.
- Real Pydantic models (not dicts pretending to be models)
- Scripted data sources and recording notifiers instead of mocks for the engine
- respx ONLY for HTTP boundary
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from polymarket_alerts.api.config import APIConfig, set_config
from polymarket_alerts.api.models.market import Market, MarketToken

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

TRUMP_MARKET_ID = "0xtrump"
BIDEN_MARKET_ID = "0xbiden"


@pytest.fixture(autouse=True)
def _reset_api_config() -> Iterator[None]:
    set_config(APIConfig())
    yield
    set_config(APIConfig())


@pytest.fixture
def make_market() -> Callable[..., Market]:
    """Factory for real `Market` models with a Yes/No pair of tokens."""

    def _make(
        condition_id: str = TRUMP_MARKET_ID,
        yes_price: float = 0.5,
        *,
        question: str = "Will Trump win the 2028 election?",
        active: bool = True,
        closed: bool = False,
    ) -> Market:
        no_price = float(round(1 - yes_price, 4))
        return Market(
            condition_id=condition_id,
            question=question,
            active=active,
            closed=closed,
            tokens=[
                MarketToken(outcome="Yes", price=yes_price, token_id=f"{condition_id}-yes"),
                MarketToken(outcome="No", price=no_price, token_id=f"{condition_id}-no"),
            ],
        )

    return _make


@pytest.fixture
def clob_market_payload() -> dict[str, Any]:
    """Raw CLOB `/markets/{condition_id}` response body."""
    return {
        "condition_id": TRUMP_MARKET_ID,
        "question": "Will Trump win the 2028 election?",
        "description": "Resolves Yes if Trump wins the 2028 US presidential election.",
        "active": True,
        "closed": False,
        "tokens": [
            {"token_id": "111", "outcome": "Yes", "price": 0.65, "winner": False},
            {"token_id": "222", "outcome": "No", "price": 0.35, "winner": False},
        ],
    }


@pytest.fixture
def gamma_markets_payload() -> list[dict[str, Any]]:
    """Raw Gamma `/markets` response body (list fields are JSON strings)."""
    return [
        {
            "conditionId": TRUMP_MARKET_ID,
            "question": "Will Trump win the 2028 election?",
            "description": "Presidential election market.",
            "active": True,
            "closed": False,
            "outcomes": '["Yes", "No"]',
            "outcomePrices": '["0.65", "0.35"]',
            "clobTokenIds": '["111", "222"]',
            "volume": "1250000.5",
        },
        {
            "conditionId": BIDEN_MARKET_ID,
            "question": "Will Biden endorse a 2028 candidate before March?",
            "description": "",
            "active": True,
            "closed": False,
            "outcomes": '["Yes", "No"]',
            "outcomePrices": '["0.42", "0.58"]',
            "clobTokenIds": '["333", "444"]',
        },
    ]
