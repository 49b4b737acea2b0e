"""
CLI application for Polymarket Alerts.

Provides commands for creating, listing and monitoring prediction market alerts.
"""

from __future__ import annotations

import typer
from dotenv import find_dotenv, load_dotenv

from polymarket_alerts.cli.alerts import app as alerts_app
from polymarket_alerts.cli.market import app as market_app
from polymarket_alerts.cli.utils import console

app = typer.Typer(
    name="polyalerts",
    help="Polymarket Alerts CLI - threshold alerts for prediction markets.",
    add_completion=False,
)

app.add_typer(alerts_app, name="alerts")
app.add_typer(market_app, name="market")


@app.callback()
def main() -> None:
    """Polymarket Alerts CLI."""
    from polymarket_alerts.api.config import APIConfig, set_config

    load_dotenv(find_dotenv(usecwd=True))
    set_config(APIConfig.from_env())


@app.command()
def version() -> None:
    """Show version information."""
    from polymarket_alerts import __version__

    console.print(f"polymarket-alerts v{__version__}")
