"""Shared utilities for CLI commands (console output, JSON storage, async helpers)."""

from __future__ import annotations

import asyncio
import json
import os
import uuid
from typing import TYPE_CHECKING, Any, NoReturn, TypeVar, cast

import typer
from rich.console import Console

if TYPE_CHECKING:
    from collections.abc import Coroutine
    from pathlib import Path

    from polymarket_alerts.api.exceptions import PolymarketError

console = Console()

T = TypeVar("T")


def run_async(coro: Coroutine[object, object, T]) -> T:
    """Run a coroutine from a sync CLI command.

    Raises:
        typer.Exit: With code 130 on KeyboardInterrupt (standard SIGINT exit code).
    """
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(130) from None


def exit_api_error(error: PolymarketError) -> NoReturn:
    """Print a Polymarket API error and exit with status 1."""
    from polymarket_alerts.api.exceptions import MarketNotFoundError, PolymarketAPIError

    if isinstance(error, MarketNotFoundError):
        console.print(f"[red]Error:[/red] Market not found: {error.condition_id}")
    elif isinstance(error, PolymarketAPIError):
        console.print(f"[red]API Error {error.status_code}:[/red] {error.message}")
    else:
        console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(1)


def atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    """Replace `path` with `data` as JSON without ever leaving a partial file behind."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    finally:
        tmp_path.unlink(missing_ok=True)


def _storage_error(kind: str, path: Path, problem: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {kind} file {problem}: {path}")
    console.print("[dim]Fix the file or restore it from a backup; it was not modified.[/dim]")
    raise typer.Exit(1)


def load_json_storage_file(*, path: Path, kind: str, required_list_key: str) -> dict[str, Any]:
    """Load a JSON storage file of the form `{required_list_key: [...], ...}`.

    A missing file reads as an empty list. A file that is not valid JSON or does not
    have that shape is reported and the command exits with status 1.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {required_list_key: []}

    try:
        raw = json.loads(text)
    except json.JSONDecodeError:
        _storage_error(kind, path, "is not valid JSON")

    if not isinstance(raw, dict):
        _storage_error(kind, path, "must contain a JSON object")
    if not isinstance(raw.get(required_list_key), list):
        _storage_error(kind, path, f"has no '{required_list_key}' list")

    return cast("dict[str, Any]", raw)
