"""Shared helpers for alert CLI commands."""

from pathlib import Path
from typing import Any

import typer

from polymarket_alerts.alerts.conditions import Condition
from polymarket_alerts.alerts.engine import AlertEngine
from polymarket_alerts.cli.utils import atomic_write_json, console, load_json_storage_file
from polymarket_alerts.paths import DEFAULT_ALERTS_PATH


def get_alerts_file() -> Path:
    """Get path to alerts storage file."""
    return DEFAULT_ALERTS_PATH


def load_alerts() -> dict[str, Any]:
    """Load alerts from storage."""
    alerts_file = get_alerts_file()
    return load_json_storage_file(path=alerts_file, kind="Alerts", required_list_key="conditions")


def save_alerts(data: dict[str, Any]) -> None:
    """Save alerts to storage."""
    alerts_file = get_alerts_file()
    atomic_write_json(alerts_file, data)


def load_engine() -> AlertEngine:
    """Build an engine holding every stored condition, in stored order."""
    data = load_alerts()
    engine = AlertEngine()
    for i, raw in enumerate(data["conditions"]):
        try:
            engine.add_condition(Condition.from_dict(raw))
        except (KeyError, TypeError, ValueError) as e:
            console.print(f"[red]Error:[/red] Stored alert #{i} is invalid: {e}")
            raise typer.Exit(1) from None
    return engine


def save_engine(engine: AlertEngine) -> None:
    """Persist the engine's conditions (not its poll clock or fired set)."""
    data = load_alerts()
    data["conditions"] = [status.condition.to_dict() for status in engine.list_conditions()]
    save_alerts(data)
