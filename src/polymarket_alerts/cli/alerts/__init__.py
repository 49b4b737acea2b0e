"""Typer CLI commands for creating and monitoring alerts.

This package provides alert commands for the polyalerts CLI:
- parse: Show how a natural-language request is understood
- add: Add alerts from a natural-language request
- add-market: Add an alert with structured input
- list: List stored alerts
- remove: Remove an alert by index
- monitor: Evaluate alerts on a schedule and deliver notifications
"""

import typer

from polymarket_alerts.cli.alerts.add_cmd import alerts_add, alerts_add_market
from polymarket_alerts.cli.alerts.list_cmd import alerts_list
from polymarket_alerts.cli.alerts.monitor import alerts_monitor
from polymarket_alerts.cli.alerts.parse_cmd import alerts_parse
from polymarket_alerts.cli.alerts.remove import alerts_remove

# Create main app and register commands
app = typer.Typer(help="Alert management commands.")

app.command("parse")(alerts_parse)
app.command("add")(alerts_add)
app.command("add-market")(alerts_add_market)
app.command("list")(alerts_list)
app.command("remove")(alerts_remove)
app.command("monitor")(alerts_monitor)

__all__ = [
    "alerts_add",
    "alerts_add_market",
    "alerts_list",
    "alerts_monitor",
    "alerts_parse",
    "alerts_remove",
    "app",
]
