"""
Alert evaluation engine.

`run_pass` is a state transition: given an `EngineState`, a data source and a
notifier it evaluates every active condition once and returns the next state plus
descriptions of the alerts that fired. It holds no timer; the caller owns the
schedule (`AlertEngine.run_forever` is the scheduled loop used by the CLI).

Guarantees:
- A market is polled at most once per `MIN_POLL_INTERVAL_SECONDS`. The clock is
  per market, so conditions on the same market share it.
- A `ConditionKey` fires at most once per process lifetime. Its key enters
  `fired` only after the notifier reports success; a failed delivery is retried
  on a later pass.
- Failures are isolated per condition. Nothing in a pass is fatal.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol

import structlog

from polymarket_alerts.alerts.conditions import Condition, ConditionKey, to_percent
from polymarket_alerts.constants import (
    ALERT_PAYLOAD_TYPE,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_NOTIFY_TIMEOUT_SECONDS,
    DEFAULT_PASS_INTERVAL_SECONDS,
    MIN_POLL_INTERVAL_SECONDS,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from polymarket_alerts.api.models.market import Market

logger = structlog.get_logger()


class DataSource(Protocol):
    """Provides current market snapshots."""

    async def fetch_market(self, market_id: str) -> Market | None:
        """Return the market, or None when it does not exist."""
        ...


class Notifier(Protocol):
    """Delivers a fired alert."""

    async def notify(self, target: str, payload: dict[str, Any]) -> bool:
        """Deliver `payload` to `target`. Returns True on success."""
        ...


@dataclass
class EngineState:
    """
    Mutable engine state.

    Attributes:
        conditions: Active conditions; insertion order is evaluation order
        last_polled: market_id -> epoch seconds of the last poll
        fired: Keys already notified; never shrinks
    """

    conditions: list[Condition] = field(default_factory=list)
    last_polled: dict[str, float] = field(default_factory=dict)
    fired: set[ConditionKey] = field(default_factory=set)

    def copy(self) -> EngineState:
        return EngineState(
            conditions=list(self.conditions),
            last_polled=dict(self.last_polled),
            fired=set(self.fired),
        )


@dataclass(frozen=True)
class PassResult:
    """Outcome of one evaluation pass."""

    state: EngineState
    fired: list[str]


@dataclass(frozen=True)
class ConditionStatus:
    """A listed condition with its position and firing status."""

    index: int
    condition: Condition
    triggered: bool


def build_alert_payload(
    condition: Condition,
    market: Market,
    price_percent: float,
    triggered_at: datetime | None = None,
) -> dict[str, Any]:
    """Webhook JSON body for a fired condition. Field names are a public contract."""
    triggered_at = triggered_at or datetime.now(UTC)
    return {
        "type": ALERT_PAYLOAD_TYPE,
        "marketId": condition.market_id,
        "question": market.question,
        "outcome": condition.outcome,
        "threshold": condition.threshold,
        "direction": condition.direction.value,
        "currentPrice": f"{price_percent:.2f}",
        "triggeredAt": triggered_at.isoformat(),
    }


def describe_firing(condition: Condition, market: Market, price_percent: float) -> str:
    return f"Alert triggered: {market.question} - {condition.outcome} at {price_percent:.1f}%"


async def _fetch(data_source: DataSource, market_id: str, timeout: float) -> Market | None:
    """Fetch a snapshot; any failure (including timeout) is reported as None."""
    try:
        return await asyncio.wait_for(data_source.fetch_market(market_id), timeout=timeout)
    except TimeoutError:
        logger.warning("Market fetch timed out", market_id=market_id, timeout=timeout)
    except Exception as e:
        logger.warning("Market fetch failed", market_id=market_id, error=str(e), exc_info=True)
    return None


async def _deliver(
    notifier: Notifier,
    target: str,
    payload: dict[str, Any],
    timeout: float,
) -> bool:
    """Notify; any failure (including timeout) is reported as False."""
    try:
        return bool(await asyncio.wait_for(notifier.notify(target, payload), timeout=timeout))
    except TimeoutError:
        logger.warning("Notification timed out", target=target, timeout=timeout)
    except Exception as e:
        logger.warning("Notification failed", target=target, error=str(e), exc_info=True)
    return False


async def run_pass(
    state: EngineState,
    data_source: DataSource,
    notifier: Notifier,
    *,
    now: float | None = None,
    min_poll_interval: float = MIN_POLL_INTERVAL_SECONDS,
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
    notify_timeout: float = DEFAULT_NOTIFY_TIMEOUT_SECONDS,
) -> PassResult:
    """
    Evaluate every active condition once.

    Args:
        state: Current state (not mutated)
        data_source: Market snapshot provider
        notifier: Alert delivery channel
        now: Pass timestamp in epoch seconds (defaults to the wall clock)

    Returns:
        The next state and a description of every alert fired in this pass.
    """
    now = time.time() if now is None else now
    next_state = state.copy()
    fired: list[str] = []

    for condition in next_state.conditions:
        key = condition.key
        if key in next_state.fired:
            continue

        last_polled = next_state.last_polled.get(condition.market_id)
        if last_polled is not None and now - last_polled < min_poll_interval:
            continue

        # Recorded before the fetch so a slow or failing market is not retried
        # until the interval has elapsed.
        next_state.last_polled[condition.market_id] = now

        market = await _fetch(data_source, condition.market_id, fetch_timeout)
        if market is None or not market.is_tradeable:
            continue

        price = market.price_for(condition.outcome)
        if price is None:
            logger.warning(
                "Outcome not found in market",
                market_id=condition.market_id,
                outcome=condition.outcome,
                available=market.outcomes,
            )
            continue

        price_percent = to_percent(price)
        if not condition.is_met(price_percent):
            continue

        payload = build_alert_payload(condition, market, price_percent)
        if await _deliver(notifier, condition.notify_url, payload, notify_timeout):
            next_state.fired.add(key)
            fired.append(describe_firing(condition, market, price_percent))
            logger.info(
                "Alert fired",
                market_id=condition.market_id,
                outcome=condition.outcome,
                threshold=condition.threshold,
                direction=condition.direction.value,
                price=price_percent,
            )

    return PassResult(state=next_state, fired=fired)


class AlertEngine:
    """
    Owner of one `EngineState`.

    Passes never overlap: `run_pass` is serialized by a lock. A pass works on a copy
    of the state and merges back only the poll clock and the fired set, so
    conditions added or removed while a pass is in flight are not lost.

    Usage:
        engine = AlertEngine()
        engine.add_condition(condition)

        async with ClobClient() as clob:
            fired = await engine.run_pass(clob, WebhookNotifier())
    """

    def __init__(
        self,
        state: EngineState | None = None,
        *,
        min_poll_interval: float = MIN_POLL_INTERVAL_SECONDS,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        notify_timeout: float = DEFAULT_NOTIFY_TIMEOUT_SECONDS,
    ) -> None:
        self._state = state.copy() if state is not None else EngineState()
        self._min_poll_interval = min_poll_interval
        self._fetch_timeout = fetch_timeout
        self._notify_timeout = notify_timeout
        self._pass_lock = asyncio.Lock()

    @property
    def state(self) -> EngineState:
        """A copy of the current state."""
        return self._state.copy()

    def add_condition(self, condition: Condition) -> int:
        """Admit a market-bound condition. Returns its index."""
        if not condition.market_id:
            raise ValueError("condition must be bound to a market before it is added")
        self._state.conditions.append(condition)
        return len(self._state.conditions) - 1

    def remove_condition(self, index: int) -> Condition:
        """
        Remove the condition at `index`.

        Raises:
            IndexError: If no condition exists at `index`.
        """
        if not 0 <= index < len(self._state.conditions):
            raise IndexError(f"no condition at index {index}")
        return self._state.conditions.pop(index)

    def list_conditions(self) -> list[ConditionStatus]:
        return [
            ConditionStatus(index=i, condition=c, triggered=c.key in self._state.fired)
            for i, c in enumerate(self._state.conditions)
        ]

    async def run_pass(
        self,
        data_source: DataSource,
        notifier: Notifier,
        *,
        now: float | None = None,
    ) -> list[str]:
        """Run one pass and return the descriptions of fired alerts."""
        if self._pass_lock.locked():
            logger.debug("Pass already in flight; waiting")
        async with self._pass_lock:
            result = await run_pass(
                self._state,
                data_source,
                notifier,
                now=now,
                min_poll_interval=self._min_poll_interval,
                fetch_timeout=self._fetch_timeout,
                notify_timeout=self._notify_timeout,
            )
            self._state.last_polled.update(result.state.last_polled)
            self._state.fired |= result.state.fired
        return result.fired

    async def run_forever(
        self,
        data_source: DataSource,
        notifier: Notifier,
        *,
        interval: float = DEFAULT_PASS_INTERVAL_SECONDS,
        max_passes: int | None = None,
        on_pass: Callable[[list[str]], None] | None = None,
    ) -> list[str]:
        """
        Run passes on a fixed cadence.

        Args:
            interval: Seconds to sleep between the end of one pass and the next
            max_passes: Stop after this many passes (None = run until cancelled)
            on_pass: Called with the descriptions fired by each pass

        Returns:
            Every description fired while running.
        """
        fired: list[str] = []
        passes = 0
        while True:
            pass_fired = await self.run_pass(data_source, notifier)
            fired.extend(pass_fired)
            if on_pass is not None:
                on_pass(pass_fired)
            passes += 1
            if max_passes is not None and passes >= max_passes:
                return fired
            await asyncio.sleep(interval)
