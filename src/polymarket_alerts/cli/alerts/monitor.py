"""Monitor alerts command."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import structlog
import typer

from polymarket_alerts.cli.alerts._helpers import load_engine
from polymarket_alerts.cli.utils import console, run_async
from polymarket_alerts.constants import DEFAULT_PASS_INTERVAL_SECONDS

if TYPE_CHECKING:
    from polymarket_alerts.alerts.engine import AlertEngine, Notifier

logger = structlog.get_logger()


def _print_pass(fired: list[str]) -> None:
    for description in fired:
        console.print(f"[green]✓[/green] {description}")
    if not fired:
        console.print("[dim]No alerts triggered this pass[/dim]")


async def _run_alert_monitor_loop(
    *,
    interval: int,
    once: bool,
    engine: "AlertEngine",
    notifier: "Notifier",
) -> None:
    """Evaluate alerts on a fixed cadence.

    Args:
        interval: Sleep interval (seconds) between passes (ignored when `once=True`).
        once: If true, run a single pass and exit.
        engine: Engine holding the stored conditions.
        notifier: Delivery channel for fired alerts.
    """
    from polymarket_alerts.cli.client_factory import clob_client

    async with clob_client() as client:
        fired = await engine.run_forever(
            client,
            notifier,
            interval=interval,
            max_passes=1 if once else None,
            on_pass=_print_pass,
        )

    logger.info("Alert monitor finished", fired=len(fired))
    console.print("[green]✓[/green] Single check complete")


def alerts_monitor(
    interval: Annotated[
        int, typer.Option("--interval", "-i", help="Seconds between evaluation passes.")
    ] = DEFAULT_PASS_INTERVAL_SECONDS,
    once: Annotated[
        bool,
        typer.Option("--once", help="Run a single pass and exit."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Print triggered alerts instead of calling webhooks."),
    ] = False,
    output_file: Annotated[
        Path | None,
        typer.Option(
            "--output-file",
            help="Write triggered alerts to a JSONL file instead of calling webhooks.",
        ),
    ] = None,
) -> None:
    """Start monitoring alerts (runs in foreground)."""
    from polymarket_alerts.alerts.notifiers import ConsoleNotifier, FileNotifier, WebhookNotifier

    if dry_run and output_file is not None:
        console.print("[red]Error:[/red] Specify only one of --dry-run or --output-file")
        raise typer.Exit(1)

    engine = load_engine()
    count = len(engine.list_conditions())
    if not count:
        console.print(
            "[yellow]No alerts configured. Use 'polyalerts alerts add' to create some.[/yellow]"
        )
        return

    notifier: Notifier
    if dry_run:
        notifier = ConsoleNotifier(console)
    elif output_file is not None:
        notifier = FileNotifier(output_file)
    else:
        notifier = WebhookNotifier()

    if once:
        console.print(f"[green]✓[/green] Monitoring {count} alerts (single check)")
    else:
        console.print(f"[green]✓[/green] Monitoring {count} alerts (checking every {interval}s)")
        console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    run_async(
        _run_alert_monitor_loop(
            interval=interval,
            once=once,
            engine=engine,
            notifier=notifier,
        )
    )
