"""Remove alert command."""

from typing import Annotated

import typer

from polymarket_alerts.cli.alerts._helpers import load_engine, save_engine
from polymarket_alerts.cli.utils import console


def alerts_remove(
    index: Annotated[int, typer.Argument(help="Alert index (see 'alerts list').")],
) -> None:
    """Remove an alert by index."""
    engine = load_engine()

    try:
        removed = engine.remove_condition(index)
    except IndexError:
        console.print(f"[red]Error:[/red] Alert not found: {index}")
        raise typer.Exit(2) from None

    save_engine(engine)
    console.print(
        f"[green]✓[/green] Alert removed: {removed.market_id} ({removed.label})"
    )
