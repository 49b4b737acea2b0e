"""Market get command - fetch a single market by condition id."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.table import Table

from polymarket_alerts.cli.utils import console, exit_api_error, run_async


def market_get(
    market_id: Annotated[str, typer.Argument(help="Market condition id to fetch.")],
) -> None:
    """Fetch a single market with current prices."""
    from polymarket_alerts.cli.client_factory import clob_client

    async def _get() -> None:
        from polymarket_alerts.api.exceptions import PolymarketError

        async with clob_client() as client:
            try:
                market = await client.get_market(market_id)
            except PolymarketError as e:
                exit_api_error(e)

        table = Table(title=f"Market: {market.condition_id}")
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("Question", market.question)
        table.add_row("Active", "yes" if market.active else "no")
        table.add_row("Closed", "yes" if market.closed else "no")
        for token in market.tokens:
            table.add_row(f"Price ({token.outcome})", f"{token.price * 100:.1f}%")
        if market.volume is not None:
            table.add_row("Volume", f"{market.volume:,.0f}")

        console.print(table)

    run_async(_get())
