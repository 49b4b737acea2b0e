"""
Centralized path defaults for Polymarket Alerts.

All paths are expressed relative to the current working directory.
"""

from pathlib import Path

DEFAULT_DATA_DIR = Path("data")
DEFAULT_ALERTS_PATH = DEFAULT_DATA_DIR / "alerts.json"

__all__ = [
    "DEFAULT_ALERTS_PATH",
    "DEFAULT_DATA_DIR",
]
