"""Tests for alert notifiers."""

from __future__ import annotations

import json
from unittest.mock import patch

import httpx
import pytest
import respx

from polymarket_alerts.alerts.notifiers import ConsoleNotifier, FileNotifier, WebhookNotifier

HOOK_URL = "https://hooks.example.com/alert"


def _payload() -> dict[str, object]:
    return {
        "type": "prediction_market_alert",
        "marketId": "0xtrump",
        "question": "Will Trump win the 2028 election?",
        "outcome": "Yes",
        "threshold": 60.0,
        "direction": "above",
        "currentPrice": "65.00",
        "triggeredAt": "2026-01-02T03:04:05+00:00",
    }


@pytest.mark.asyncio
async def test_console_notifier_prints_panel() -> None:
    notifier = ConsoleNotifier()

    with patch.object(notifier._console, "print") as mock_print:
        ok = await notifier.notify(HOOK_URL, _payload())

    assert ok is True
    assert mock_print.call_count == 1


@pytest.mark.asyncio
async def test_file_notifier_writes_jsonl(tmp_path) -> None:
    out = tmp_path / "nested" / "alerts.jsonl"
    notifier = FileNotifier(out)

    assert await notifier.notify(HOOK_URL, _payload())
    assert await notifier.notify(HOOK_URL, _payload())

    lines = out.read_text().splitlines()
    assert len(lines) == 2
    record = json.loads(lines[0])
    assert record["target"] == HOOK_URL
    assert record["payload"]["currentPrice"] == "65.00"


@pytest.mark.asyncio
async def test_file_notifier_reports_write_failure(tmp_path) -> None:
    out = tmp_path / "alerts.jsonl"
    out.mkdir()

    assert await FileNotifier(out).notify(HOOK_URL, _payload()) is False


@pytest.mark.asyncio
@respx.mock
async def test_webhook_notifier_posts_json() -> None:
    route = respx.post(HOOK_URL).mock(return_value=httpx.Response(200))

    ok = await WebhookNotifier().notify(HOOK_URL, _payload())

    assert ok is True
    assert route.called
    assert json.loads(route.calls.last.request.content) == _payload()


@pytest.mark.asyncio
@respx.mock
async def test_webhook_notifier_non_success_status_is_failure() -> None:
    respx.post(HOOK_URL).mock(return_value=httpx.Response(500))

    assert await WebhookNotifier().notify(HOOK_URL, _payload()) is False


@pytest.mark.asyncio
@respx.mock
async def test_webhook_notifier_transport_error_is_failure() -> None:
    respx.post(HOOK_URL).mock(side_effect=httpx.ConnectError("refused"))

    assert await WebhookNotifier().notify(HOOK_URL, _payload()) is False


@pytest.mark.asyncio
@respx.mock
async def test_webhook_notifier_uses_shared_client() -> None:
    route = respx.post(HOOK_URL).mock(return_value=httpx.Response(204))

    async with httpx.AsyncClient() as client:
        ok = await WebhookNotifier(client=client).notify(HOOK_URL, _payload())

    assert ok is True
    assert route.call_count == 1
