"""Typer CLI commands for market lookup.

This package provides market commands for the polyalerts CLI:
- search: Search open markets by keyword (Gamma)
- get: Fetch a single market with live prices (CLOB)
"""

import typer

from polymarket_alerts.cli.market.get import market_get
from polymarket_alerts.cli.market.search import market_search

# Create main app and register commands
app = typer.Typer(help="Market lookup commands.")

app.command("get")(market_get)
app.command("search")(market_search)

__all__ = [
    "app",
    "market_get",
    "market_search",
]
