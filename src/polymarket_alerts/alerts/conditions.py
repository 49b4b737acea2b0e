"""Alert conditions and their deduplication identity."""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Any


class Direction(str, Enum):
    """Which side of the threshold triggers an alert."""

    ABOVE = "above"
    BELOW = "below"


def to_percent(price: float) -> float:
    """Convert a 0-1 source price to the 0-100 percentage scale without float drift."""
    return float(Decimal(str(price)) * 100)


@dataclass(frozen=True)
class ConditionKey:
    """
    Deduplication identity of a condition.

    Two conditions with equal keys are the same alert for firing purposes, even if
    they were created independently.
    """

    market_id: str
    outcome: str
    threshold: float
    direction: Direction


@dataclass(frozen=True)
class Condition:
    """
    A market-bound threshold rule.

    Attributes:
        market_id: Polymarket condition id (empty until resolved by market search)
        outcome: Outcome label the condition watches ("Yes", "No", ...)
        threshold: Percentage in [0, 100]
        direction: Trigger when the price is at/above or at/below the threshold
        notify_url: Webhook destination
    """

    market_id: str
    outcome: str
    threshold: float
    direction: Direction
    notify_url: str

    def __post_init__(self) -> None:
        if not 0.0 <= self.threshold <= 100.0:
            raise ValueError(f"threshold must be within [0, 100], got {self.threshold}")
        if not isinstance(self.direction, Direction):
            object.__setattr__(self, "direction", Direction(self.direction))
        object.__setattr__(self, "threshold", float(self.threshold))

    @property
    def key(self) -> ConditionKey:
        return ConditionKey(
            market_id=self.market_id,
            outcome=self.outcome,
            threshold=self.threshold,
            direction=self.direction,
        )

    @property
    def label(self) -> str:
        """Human-readable one-liner, e.g. `Yes above 60%`."""
        return f"{self.outcome} {self.direction.value} {self.threshold:g}%"

    def with_market(self, market_id: str) -> Condition:
        """Return a copy bound to `market_id`."""
        return replace(self, market_id=market_id)

    def is_met(self, price_percent: float) -> bool:
        """Both comparisons are inclusive at the boundary."""
        if self.direction is Direction.ABOVE:
            return price_percent >= self.threshold
        return price_percent <= self.threshold

    def to_dict(self) -> dict[str, Any]:
        return {
            "market_id": self.market_id,
            "outcome": self.outcome,
            "threshold": self.threshold,
            "direction": self.direction.value,
            "notify_url": self.notify_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Condition:
        return cls(
            market_id=str(data["market_id"]),
            outcome=str(data.get("outcome", "Yes")),
            threshold=float(data["threshold"]),
            direction=Direction(data.get("direction", Direction.ABOVE.value)),
            notify_url=str(data.get("notify_url", "")),
        )
