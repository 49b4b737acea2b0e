from __future__ import annotations

from typing import Any

import httpx
import respx
from typer.testing import CliRunner

from polymarket_alerts.cli import app

runner = CliRunner()

CLOB_URL = "https://clob.polymarket.com"
GAMMA_URL = "https://gamma-api.polymarket.com"


@respx.mock
def test_market_get(clob_market_payload: dict[str, Any]) -> None:
    respx.get(f"{CLOB_URL}/markets/0xtrump").mock(
        return_value=httpx.Response(200, json=clob_market_payload)
    )

    result = runner.invoke(app, ["market", "get", "0xtrump"])

    assert result.exit_code == 0, result.stdout
    assert "Will Trump win the 2028 election?" in result.stdout
    assert "65.0%" in result.stdout
    assert "35.0%" in result.stdout


@respx.mock
def test_market_get_not_found() -> None:
    respx.get(f"{CLOB_URL}/markets/0xmissing").mock(return_value=httpx.Response(404))

    result = runner.invoke(app, ["market", "get", "0xmissing"])

    assert result.exit_code == 1
    assert "Market not found: 0xmissing" in result.stdout


@respx.mock
def test_market_get_api_error() -> None:
    respx.get(f"{CLOB_URL}/markets/0xtrump").mock(
        return_value=httpx.Response(500, text="upstream down")
    )

    result = runner.invoke(app, ["market", "get", "0xtrump"])

    assert result.exit_code == 1
    assert "API Error 500" in result.stdout


@respx.mock
def test_market_search(gamma_markets_payload: list[dict[str, Any]]) -> None:
    route = respx.get(url__startswith=f"{GAMMA_URL}/markets").mock(
        return_value=httpx.Response(200, json=gamma_markets_payload)
    )

    result = runner.invoke(app, ["market", "search", "biden", "--limit", "25"])

    assert result.exit_code == 0, result.stdout
    assert "0xbiden" in result.stdout
    assert "0xtrump" not in result.stdout
    assert "Found 1 markets" in result.stdout
    assert route.calls.last.request.url.params["limit"] == "25"


@respx.mock
def test_market_search_no_results(gamma_markets_payload: list[dict[str, Any]]) -> None:
    respx.get(url__startswith=f"{GAMMA_URL}/markets").mock(
        return_value=httpx.Response(200, json=gamma_markets_payload)
    )

    result = runner.invoke(app, ["market", "search", "newsom"])

    assert result.exit_code == 0
    assert "No markets found for 'newsom'" in result.stdout


def test_market_search_query_too_short() -> None:
    result = runner.invoke(app, ["market", "search", "a"])

    assert result.exit_code == 1
    assert "at least 2 characters" in result.stdout


def test_version() -> None:
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "polymarket-alerts v" in result.stdout
