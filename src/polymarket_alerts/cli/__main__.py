"""Allow `python -m polymarket_alerts.cli`."""

from polymarket_alerts.cli import app

app()
