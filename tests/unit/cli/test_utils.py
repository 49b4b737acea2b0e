from __future__ import annotations

import json
from pathlib import Path

import pytest
import typer

from polymarket_alerts.api.exceptions import MarketNotFoundError, PolymarketAPIError
from polymarket_alerts.cli.utils import (
    atomic_write_json,
    exit_api_error,
    load_json_storage_file,
    run_async,
)


def test_run_async_returns_result() -> None:
    async def _answer() -> int:
        return 42

    assert run_async(_answer()) == 42


def test_run_async_keyboard_interrupt_exits_130() -> None:
    async def _interrupted() -> None:
        raise KeyboardInterrupt

    with pytest.raises(typer.Exit) as exc_info:
        run_async(_interrupted())

    assert exc_info.value.exit_code == 130


def test_atomic_write_json_creates_parents(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "alerts.json"

    atomic_write_json(path, {"conditions": []})

    assert json.loads(path.read_text(encoding="utf-8")) == {"conditions": []}
    assert list(path.parent.iterdir()) == [path]


def test_load_json_storage_file_missing_returns_default(tmp_path: Path) -> None:
    data = load_json_storage_file(
        path=tmp_path / "missing.json", kind="Alerts", required_list_key="conditions"
    )

    assert data == {"conditions": []}


@pytest.mark.parametrize("content", ["{oops", "[]", '{"other": []}', '{"conditions": {}}'])
def test_load_json_storage_file_invalid_exits(tmp_path: Path, content: str) -> None:
    path = tmp_path / "alerts.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(typer.Exit) as exc_info:
        load_json_storage_file(path=path, kind="Alerts", required_list_key="conditions")

    assert exc_info.value.exit_code == 1


@pytest.mark.parametrize(
    "error",
    [MarketNotFoundError("0xmissing"), PolymarketAPIError(503, "unavailable")],
)
def test_exit_api_error(error: PolymarketAPIError) -> None:
    with pytest.raises(typer.Exit) as exc_info:
        exit_api_error(error)

    assert exc_info.value.exit_code == 1
