"""
Polymarket Alerts.

Threshold alerts for Polymarket prediction markets: natural-language condition
parsing, a rate-limited evaluation engine and webhook notifications.
"""

__version__ = "0.1.0"

from polymarket_alerts.alerts import AlertEngine, Condition, ConditionKey, Direction

# Configure structlog once at import time (quiet by default).
from polymarket_alerts.logging import configure_structlog

configure_structlog()

__all__ = [
    "AlertEngine",
    "Condition",
    "ConditionKey",
    "Direction",
    "__version__",
]
