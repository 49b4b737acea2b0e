"""List alerts command."""

from rich.table import Table

from polymarket_alerts.cli.alerts._helpers import load_engine
from polymarket_alerts.cli.utils import console


def alerts_list() -> None:
    """List all stored alerts."""
    statuses = load_engine().list_conditions()

    if not statuses:
        console.print("[yellow]No active alerts.[/yellow]")
        return

    table = Table(title="Active Alerts")
    table.add_column("Index", style="cyan")
    table.add_column("Market", style="white")
    table.add_column("Outcome", style="green")
    table.add_column("Condition", style="yellow")
    table.add_column("Notify URL", style="dim")

    for status in statuses:
        condition = status.condition
        table.add_row(
            str(status.index),
            condition.market_id,
            condition.outcome,
            f"{condition.direction.value} {condition.threshold:g}%",
            condition.notify_url,
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(statuses)} alerts[/dim]")
