"""Tests for API endpoint configuration."""

from __future__ import annotations

import pytest

from polymarket_alerts.api import ClobClient, GammaClient
from polymarket_alerts.api.config import (
    DEFAULT_CLOB_URL,
    DEFAULT_GAMMA_URL,
    APIConfig,
    get_config,
    set_config,
)


def test_defaults() -> None:
    config = APIConfig()

    assert config.clob_url == DEFAULT_CLOB_URL == "https://clob.polymarket.com"
    assert config.gamma_url == DEFAULT_GAMMA_URL == "https://gamma-api.polymarket.com"


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POLYMARKET_CLOB_URL", "https://clob.example.test")
    monkeypatch.setenv("POLYMARKET_GAMMA_URL", "https://gamma.example.test")

    config = APIConfig.from_env()

    assert config.clob_url == "https://clob.example.test"
    assert config.gamma_url == "https://gamma.example.test"


def test_from_env_ignores_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POLYMARKET_CLOB_URL", "")
    monkeypatch.delenv("POLYMARKET_GAMMA_URL", raising=False)

    assert APIConfig.from_env() == APIConfig()


@pytest.mark.asyncio
async def test_clients_follow_global_config() -> None:
    set_config(
        APIConfig(clob_url="https://clob.example.test", gamma_url="https://gamma.example.test")
    )

    assert get_config().clob_url == "https://clob.example.test"
    async with ClobClient() as clob, GammaClient() as gamma:
        assert str(clob._client.base_url).startswith("https://clob.example.test")
        assert str(gamma._client.base_url).startswith("https://gamma.example.test")
