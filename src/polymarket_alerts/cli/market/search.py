"""Market search command - search open markets by keyword."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.table import Table

from polymarket_alerts.cli.utils import console, exit_api_error, run_async
from polymarket_alerts.constants import DEFAULT_SEARCH_LIMIT


def market_search(
    query: Annotated[str, typer.Argument(help="Keywords to match in question/description.")],
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Number of open markets to scan."),
    ] = DEFAULT_SEARCH_LIMIT,
) -> None:
    """Search open markets by keyword."""
    from polymarket_alerts.api.exceptions import PolymarketError
    from polymarket_alerts.cli.client_factory import gamma_client

    if len(query.strip()) < 2:
        console.print("[red]Error:[/red] Query must be at least 2 characters")
        raise typer.Exit(1)

    async def _search() -> None:
        async with gamma_client() as client:
            try:
                markets = await client.search_markets(query, limit=limit)
            except PolymarketError as e:
                exit_api_error(e)

        if not markets:
            console.print(f"[yellow]No markets found for '{query}'[/yellow]")
            return

        table = Table(title=f"Markets matching '{query}'")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Question", style="white")
        table.add_column("Prices", style="green")

        for market in markets:
            prices = ", ".join(
                f"{token.outcome} {token.price * 100:.1f}%" for token in market.tokens
            )
            table.add_row(market.condition_id, market.question, prices)

        console.print(table)
        console.print(f"\n[dim]Found {len(markets)} markets[/dim]")

    run_async(_search())
