"""Parse alert command - show how a request is understood, without side effects."""

from typing import Annotated

import typer
from rich.table import Table

from polymarket_alerts.cli.utils import console


def alerts_parse(
    text: Annotated[str, typer.Argument(help="Natural-language alert request.")],
) -> None:
    """Show the conditions and search keywords parsed from a request."""
    from polymarket_alerts.alerts.parser import extract_keywords, parse_one, split_segments

    table = Table(title="Parsed Conditions")
    table.add_column("Segment", style="dim")
    table.add_column("Outcome", style="green")
    table.add_column("Direction", style="cyan")
    table.add_column("Threshold", style="yellow")
    table.add_column("Keywords", style="white")

    parsed = 0
    for segment in split_segments(text):
        condition = parse_one(segment, "")
        if condition is None:
            continue
        parsed += 1
        table.add_row(
            segment,
            condition.outcome,
            condition.direction.value,
            f"{condition.threshold:g}%",
            ", ".join(sorted(extract_keywords(segment))),
        )

    if not parsed:
        console.print("[red]Error:[/red] Could not parse alert request")
        console.print('[dim]Try: "Alert me when Trump election odds exceed 60%"[/dim]')
        raise typer.Exit(1)

    console.print(table)
