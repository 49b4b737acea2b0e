"""Tests for alert conditions."""

from __future__ import annotations

import pytest

from polymarket_alerts.alerts.conditions import Condition, ConditionKey, Direction, to_percent


def _condition(**overrides: object) -> Condition:
    values: dict[str, object] = {
        "market_id": "0xabc",
        "outcome": "Yes",
        "threshold": 60.0,
        "direction": Direction.ABOVE,
        "notify_url": "https://hooks.example.com/alert",
    }
    values.update(overrides)
    return Condition(**values)  # type: ignore[arg-type]


class TestConditionKey:
    def test_equal_conditions_share_key(self) -> None:
        a = _condition()
        b = _condition(notify_url="https://other.example.com")

        assert a.key == b.key
        assert len({a.key, b.key}) == 1

    def test_key_fields(self) -> None:
        assert _condition().key == ConditionKey(
            market_id="0xabc",
            outcome="Yes",
            threshold=60.0,
            direction=Direction.ABOVE,
        )

    @pytest.mark.parametrize(
        "overrides",
        [
            {"market_id": "0xdef"},
            {"outcome": "No"},
            {"threshold": 61.0},
            {"direction": Direction.BELOW},
        ],
    )
    def test_any_field_changes_key(self, overrides: dict[str, object]) -> None:
        assert _condition(**overrides).key != _condition().key


class TestCondition:
    def test_threshold_out_of_range_rejected(self) -> None:
        with pytest.raises(ValueError, match="threshold"):
            _condition(threshold=101)
        with pytest.raises(ValueError, match="threshold"):
            _condition(threshold=-1)

    def test_threshold_bounds_accepted(self) -> None:
        assert _condition(threshold=0).threshold == 0.0
        assert _condition(threshold=100).threshold == 100.0

    def test_direction_coerced_from_string(self) -> None:
        assert _condition(direction="below").direction is Direction.BELOW

    def test_with_market_binds_copy(self) -> None:
        unbound = _condition(market_id="")
        bound = unbound.with_market("0x123")

        assert bound.market_id == "0x123"
        assert unbound.market_id == ""

    def test_label(self) -> None:
        assert _condition(threshold=60.5).label == "Yes above 60.5%"

    def test_above_is_inclusive(self) -> None:
        condition = _condition(threshold=60.0, direction=Direction.ABOVE)

        assert condition.is_met(60.0)
        assert condition.is_met(61.0)
        assert not condition.is_met(59.99)

    def test_below_is_inclusive(self) -> None:
        condition = _condition(threshold=60.0, direction=Direction.BELOW)

        assert condition.is_met(60.0)
        assert condition.is_met(10.0)
        assert not condition.is_met(60.01)

    def test_dict_round_trip(self) -> None:
        condition = _condition(direction=Direction.BELOW, outcome="No")

        data = condition.to_dict()

        assert data["direction"] == "below"
        assert Condition.from_dict(data) == condition


@pytest.mark.parametrize(
    ("price", "expected"),
    [(0.6, 60.0), (0.29, 29.0), (0.57, 57.0), (0.0, 0.0), (1.0, 100.0)],
)
def test_to_percent_is_exact(price: float, expected: float) -> None:
    assert to_percent(price) == expected
