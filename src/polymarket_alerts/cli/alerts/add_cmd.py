"""Add alert commands (natural language and structured)."""

from typing import Annotated

import typer

from polymarket_alerts.cli.alerts._helpers import load_engine, save_engine
from polymarket_alerts.cli.utils import console, exit_api_error, run_async


def alerts_add(
    text: Annotated[str, typer.Argument(help="Natural-language alert request.")],
    notify_url: Annotated[
        str, typer.Option("--notify-url", "-u", help="Webhook URL to POST alerts to.")
    ],
) -> None:
    """Add alerts described in natural language (markets resolved via search)."""
    from polymarket_alerts.alerts.exceptions import (
        AdmissionDeniedError,
        NoMatchingMarketError,
        UnparseableRequestError,
    )
    from polymarket_alerts.alerts.subscriptions import SubscriptionService
    from polymarket_alerts.api.exceptions import PolymarketError
    from polymarket_alerts.cli.client_factory import clob_client, gamma_client

    engine = load_engine()

    async def _add() -> None:
        async with clob_client() as clob, gamma_client() as gamma:
            service = SubscriptionService(engine, search=gamma, data_source=clob)
            try:
                subscriptions = await service.subscribe_text(text, notify_url)
            except UnparseableRequestError:
                console.print("[red]Error:[/red] Could not parse alert request")
                console.print('[dim]Try: "Alert me when Trump election odds exceed 60%"[/dim]')
                raise typer.Exit(1) from None
            except NoMatchingMarketError as e:
                console.print(f"[red]Error:[/red] No matching markets found for: {e.text}")
                raise typer.Exit(1) from None
            except AdmissionDeniedError as e:
                console.print(f"[red]Error:[/red] {e}")
                raise typer.Exit(1) from None
            except PolymarketError as e:
                exit_api_error(e)

        save_engine(engine)
        for sub in subscriptions:
            console.print(f"[green]✓[/green] Alert added: {sub.question} ({sub.condition.label})")
            console.print(f"[dim]Index: {sub.index}  Market: {sub.condition.market_id}[/dim]")

    run_async(_add())


def alerts_add_market(
    market_id: Annotated[str, typer.Argument(help="Market condition id to monitor.")],
    notify_url: Annotated[
        str, typer.Option("--notify-url", "-u", help="Webhook URL to POST alerts to.")
    ],
    above: Annotated[
        float | None, typer.Option("--above", help="Trigger at or above this percentage")
    ] = None,
    below: Annotated[
        float | None, typer.Option("--below", help="Trigger at or below this percentage")
    ] = None,
    outcome: Annotated[str, typer.Option("--outcome", help="Outcome to watch.")] = "Yes",
) -> None:
    """Add an alert on a known market."""
    from polymarket_alerts.alerts.conditions import Direction
    from polymarket_alerts.alerts.exceptions import AdmissionDeniedError, NoMatchingMarketError
    from polymarket_alerts.alerts.subscriptions import SubscriptionService
    from polymarket_alerts.api.exceptions import PolymarketError
    from polymarket_alerts.cli.client_factory import clob_client

    if above is not None and below is not None:
        console.print("[red]Error:[/red] Specify only one of --above or --below")
        raise typer.Exit(1)

    if above is not None:
        threshold, direction = above, Direction.ABOVE
    elif below is not None:
        threshold, direction = below, Direction.BELOW
    else:
        console.print("[red]Error:[/red] Must specify either --above or --below")
        raise typer.Exit(1)

    if not 0 <= threshold <= 100:
        console.print("[red]Error:[/red] Threshold must be a percentage between 0 and 100")
        raise typer.Exit(1)

    engine = load_engine()

    async def _add() -> None:
        async with clob_client() as clob:
            service = SubscriptionService(engine, data_source=clob)
            try:
                sub = await service.subscribe_market(
                    market_id,
                    threshold=threshold,
                    direction=direction,
                    notify_url=notify_url,
                    outcome=outcome,
                )
            except NoMatchingMarketError:
                console.print(f"[red]Error:[/red] Market not found: {market_id}")
                raise typer.Exit(1) from None
            except AdmissionDeniedError as e:
                console.print(f"[red]Error:[/red] {e}")
                raise typer.Exit(1) from None
            except PolymarketError as e:
                exit_api_error(e)

        save_engine(engine)
        console.print(f"[green]✓[/green] Alert added: {sub.question} ({sub.condition.label})")
        console.print(f"[dim]Index: {sub.index}[/dim]")

    run_async(_add())
