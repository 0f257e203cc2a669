"""Mini README: Entry point CLI for the FinX personal ledger.

This script exposes a Typer CLI that can start the FastAPI dashboard and
also drive the ledger directly from a terminal: adding, listing, removing
and clearing transactions, and printing the summary with a text chart.
Settings come from ``FINX_`` environment variables; ``--ephemeral`` swaps
the ledger file for an in-memory slot so nothing is written to disk.
"""

from __future__ import annotations

from typing import Optional

import typer
import uvicorn

from finx.configuration import get_settings
from finx.errors import InvalidAmountError, InvalidTransactionTypeError
from finx.finance import MemoryStore, TextChartSurface, TransactionStorage
from finx.interface import (
    LedgerController,
    build_controller,
    build_storage,
    create_application,
    render_text_table,
)
from finx.logging_utils import configure_root_logger

cli = typer.Typer(help="Track personal income and expenses.")


@cli.callback()
def main(
    ctx: typer.Context,
    ephemeral: bool = typer.Option(
        False, help="Keep the ledger in memory for this invocation only."
    ),
) -> None:
    """Load settings and prepare the storage shared by every command."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    if ephemeral:
        storage = TransactionStorage(MemoryStore(), key=settings.storage_key)
    else:
        storage = build_storage(settings)
    ctx.obj = {"settings": settings, "storage": storage, "ephemeral": ephemeral}


def _controller(ctx: typer.Context, chart_surface: Optional[TextChartSurface] = None) -> LedgerController:
    return build_controller(
        ctx.obj["settings"], storage=ctx.obj["storage"], chart_surface=chart_surface
    )


@cli.command()
def serve(
    ctx: typer.Context,
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the dashboard using uvicorn."""

    settings = ctx.obj["settings"]
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port

    # 0.0.0.0 is a bind address, not something a browser can open.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting FinX on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    if ctx.obj["ephemeral"]:
        # The reloader re-imports the factory, which would rebuild file storage.
        app = create_application(settings, storage=ctx.obj["storage"])
        uvicorn.run(app, host=effective_host, port=effective_port, reload=False)
        return
    uvicorn.run(
        "finx.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


# Unknown options are passed through so negative amounts reach validation.
@cli.command(context_settings={"ignore_unknown_options": True})
def add(
    ctx: typer.Context,
    kind: str = typer.Argument(..., help="income or expense"),
    amount: str = typer.Argument(..., help="Positive amount, e.g. 12.50"),
    category: str = typer.Option("", help="Category label."),
    description: str = typer.Option("", help="Free-text note."),
) -> None:
    """Record a new transaction dated today."""

    controller = _controller(ctx)
    try:
        transaction = controller.submit(kind, amount, category, description)
    except (InvalidAmountError, InvalidTransactionTypeError) as error:
        typer.secho(str(error), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from error
    row = controller.presenter.present_row(transaction)
    typer.echo(f"Added {row.kind} {row.amount_text} ({row.category}) id={row.transaction_id}")


@cli.command("list")
def list_transactions(
    ctx: typer.Context,
    filter: str = typer.Option("all", "--filter", "-f", help="all, income or expense"),
) -> None:
    """Print the transactions for a filter mode with the summary totals."""

    controller = _controller(ctx)
    try:
        display = controller.set_filter(filter)
    except ValueError as error:
        raise typer.BadParameter(str(error), param_hint="--filter") from error
    typer.echo(render_text_table(display))


@cli.command()
def remove(
    ctx: typer.Context,
    transaction_id: int = typer.Argument(..., help="Identifier shown by 'list'."),
) -> None:
    """Delete one transaction by id."""

    if _controller(ctx).remove(transaction_id):
        typer.echo(f"Removed transaction {transaction_id}.")
    else:
        typer.echo(f"No transaction with id {transaction_id}.")


@cli.command()
def clear(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Delete every transaction after confirmation."""

    controller = _controller(ctx)
    if not len(controller.store):
        typer.echo("Nothing to clear.")
        return
    cleared = controller.clear(lambda message: yes or typer.confirm(message, default=False))
    typer.echo("All transactions cleared." if cleared else "Kept all transactions.")


@cli.command()
def summary(ctx: typer.Context) -> None:
    """Print totals and the per-category chart."""

    surface = TextChartSurface()
    display = _controller(ctx, chart_surface=surface).refresh()
    typer.echo(f"Balance: {display.balance_text}")
    typer.echo(f"Income:  {display.income_text}")
    typer.echo(f"Expense: {display.expense_text}")
    chart = surface.render()
    if chart:
        typer.echo("")
        typer.echo(chart)


if __name__ == "__main__":
    cli()
