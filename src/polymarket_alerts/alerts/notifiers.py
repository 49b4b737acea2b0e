"""Alert notification channels."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import structlog
from rich.console import Console
from rich.panel import Panel

from polymarket_alerts.constants import DEFAULT_NOTIFY_TIMEOUT_SECONDS

logger = structlog.get_logger()


class WebhookNotifier:
    """HTTP webhook notification: POST the payload as JSON to the condition's target."""

    def __init__(
        self,
        timeout: float = DEFAULT_NOTIFY_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._timeout = timeout
        self._client = client

    async def notify(self, target: str, payload: dict[str, Any]) -> bool:
        """POST `payload` to `target`. Any non-2xx status or transport error is a failure."""
        try:
            if self._client is not None:
                response = await self._client.post(target, json=payload, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(target, json=payload)
        except httpx.HTTPError as e:
            logger.warning("Webhook delivery failed", target=target, error=str(e))
            return False

        if not response.is_success:
            logger.warning(
                "Webhook rejected alert",
                target=target,
                status_code=response.status_code,
            )
            return False
        return True


class ConsoleNotifier:
    """Rich console output instead of delivery (dry runs)."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    async def notify(self, target: str, payload: dict[str, Any]) -> bool:
        """Print the alert with Rich formatting. Always succeeds."""
        content = (
            f"[bold]{payload.get('question', '')}[/bold]\n\n"
            f"Market: {payload.get('marketId', '')}\n"
            f"Outcome: {payload.get('outcome', '')}\n"
            f"Condition: {payload.get('direction', '')} {payload.get('threshold', '')}%\n"
            f"Current Price: {payload.get('currentPrice', '')}%\n"
            f"Target: {target}\n"
            f"Triggered: {payload.get('triggeredAt', '')}"
        )
        self._console.print(
            Panel(
                content,
                title="[red]ALERT TRIGGERED[/red]",
                border_style="red",
            )
        )
        return True


class FileNotifier:
    """JSON lines log of alerts instead of delivery."""

    def __init__(self, file_path: Path | str) -> None:
        self._file_path = Path(file_path)
        self._file_path.parent.mkdir(parents=True, exist_ok=True)

    async def notify(self, target: str, payload: dict[str, Any]) -> bool:
        """Append `{"target": ..., "payload": ...}` to the file."""
        record = {"target": target, "payload": payload}
        try:
            with self._file_path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(record) + "\n")
        except OSError as e:
            logger.warning("Failed to write alert record", path=str(self._file_path), error=str(e))
            return False
        return True
