"""
Configuration for Polymarket API clients (endpoint URLs).
"""

from __future__ import annotations

import os

from pydantic import BaseModel

DEFAULT_CLOB_URL = "https://clob.polymarket.com"
DEFAULT_GAMMA_URL = "https://gamma-api.polymarket.com"


class APIConfig(BaseModel):
    """Configuration for Polymarket API clients."""

    clob_url: str = DEFAULT_CLOB_URL
    gamma_url: str = DEFAULT_GAMMA_URL

    @classmethod
    def from_env(cls) -> APIConfig:
        """Build a config from `POLYMARKET_CLOB_URL` / `POLYMARKET_GAMMA_URL`."""
        return cls(
            clob_url=os.getenv("POLYMARKET_CLOB_URL") or DEFAULT_CLOB_URL,
            gamma_url=os.getenv("POLYMARKET_GAMMA_URL") or DEFAULT_GAMMA_URL,
        )


# Singleton for global access
_config = APIConfig()


def get_config() -> APIConfig:
    """Get the current global configuration."""
    return _config


def set_config(config: APIConfig) -> None:
    """Replace the global API configuration."""
    global _config  # noqa: PLW0603 - intentional singleton for CLI state
    _config = config
