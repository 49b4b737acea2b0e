"""Market data models for the Polymarket CLOB and Gamma APIs."""

from __future__ import annotations

import json
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field

logger = structlog.get_logger()


class MarketToken(BaseModel):
    """One outcome token of a market with its current price."""

    model_config = ConfigDict(frozen=True)

    outcome: str = Field(..., description="Outcome label, e.g. 'Yes' or 'No'")
    price: float = Field(..., ge=0.0, le=1.0, description="Current price (0-1)")
    token_id: str = Field(default="", description="CLOB token identifier")
    winner: bool | None = None


class Market(BaseModel):
    """
    Read-only snapshot of a Polymarket market.

    Prices are on the source scale (0.0-1.0); alert thresholds are percentages,
    so callers convert with `polymarket_alerts.alerts.conditions.to_percent`.
    """

    model_config = ConfigDict(frozen=True)

    condition_id: str = Field(..., description="Unique market identifier")
    question: str = Field(..., description="Market question")
    description: str = Field(default="")
    active: bool = True
    closed: bool = False
    tokens: list[MarketToken] = Field(default_factory=list)
    volume: float | None = None

    @property
    def outcomes(self) -> list[str]:
        """Outcome labels in API order."""
        return [token.outcome for token in self.tokens]

    @property
    def outcome_prices(self) -> dict[str, float]:
        """Mapping of outcome label to current price."""
        return {token.outcome: token.price for token in self.tokens}

    @property
    def is_tradeable(self) -> bool:
        """True when the market is active and not closed."""
        return self.active and not self.closed

    def price_for(self, outcome: str) -> float | None:
        """Return the price of `outcome` (case-insensitive), or None if absent."""
        wanted = outcome.strip().lower()
        for token in self.tokens:
            if token.outcome.strip().lower() == wanted:
                return token.price
        return None

    @classmethod
    def from_gamma(cls, raw: dict[str, Any]) -> Market:
        """Convert a Gamma API market object (JSON-encoded outcome fields)."""
        names = _decode_json_list(raw.get("outcomes")) or ["Yes", "No"]
        prices = _decode_json_list(raw.get("outcomePrices"))
        token_ids = _decode_json_list(raw.get("clobTokenIds"))

        tokens: list[MarketToken] = []
        for i, name in enumerate(names):
            try:
                price = float(prices[i]) if i < len(prices) else 0.0
            except (TypeError, ValueError):
                price = 0.0
            token_id = str(token_ids[i]) if i < len(token_ids) else ""
            tokens.append(MarketToken(outcome=str(name), price=price, token_id=token_id))

        volume_raw = raw.get("volume")
        try:
            volume = float(volume_raw) if volume_raw is not None else None
        except (TypeError, ValueError):
            volume = None

        return cls(
            condition_id=str(raw.get("conditionId") or raw.get("condition_id") or ""),
            question=raw.get("question") or "",
            description=raw.get("description") or "",
            active=bool(raw.get("active", True)),
            closed=bool(raw.get("closed", False)),
            tokens=tokens,
            volume=volume,
        )


def _decode_json_list(value: object) -> list[Any]:
    """Gamma encodes list fields as JSON strings; accept both forms."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        try:
            decoded = json.loads(value) if value else []
        except json.JSONDecodeError:
            logger.debug("Undecodable Gamma list field", value=value)
            return []
        return decoded if isinstance(decoded, list) else []
    return []
