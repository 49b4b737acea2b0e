"""
Polymarket Alerts - Alerts Module.

Natural-language condition parsing, the rate-limited evaluation engine that fires
each condition at most once, and the notification channels it delivers through.
"""

from polymarket_alerts.alerts.conditions import Condition, ConditionKey, Direction
from polymarket_alerts.alerts.engine import AlertEngine, EngineState, PassResult, run_pass
from polymarket_alerts.alerts.parser import extract_keywords, parse_many, parse_one

__all__ = [
    "AlertEngine",
    "Condition",
    "ConditionKey",
    "Direction",
    "EngineState",
    "PassResult",
    "extract_keywords",
    "parse_many",
    "parse_one",
    "run_pass",
]
