"""Transaction viewing command."""

import click

from smartspend.cli.book_resolution import resolve_book_or_exit
from smartspend.cli.date_filters import date_filter_options, resolve_cli_date_range
from smartspend.cli.formatting import transaction_line


@click.command("view")
@click.option("--book", help="Book name or ID (defaults to the active book)")
@click.option("--type", "txn_type", type=click.Choice(["in", "out"]), help="Only cash-in or cash-out")
@click.option("--limit", type=click.IntRange(min=1), help="Show at most this many entries")
@date_filter_options
@click.pass_context
def view_transactions(
    ctx,
    book: str | None,
    txn_type: str | None,
    limit: int | None,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
):
    """View a book's entries, newest first.

    Examples:
        smartspend view --type out --this-month
        smartspend view --book Shop --start-date 2024-01-01 --end-date 2024-01-31
    """
    app = ctx.obj["app"]
    book_obj = resolve_book_or_exit(ctx, app.registry, book)
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )

    transactions = app.aggregation.filter(
        book_obj.id, type=txn_type, from_date=start, to_date=end
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    shown = transactions[:limit] if limit else transactions
    private = app.ledger.settings.private_mode

    click.echo(f"\n{book_obj.name}: showing {len(shown)} of {len(transactions)} transaction(s)")
    click.echo("-" * 100)
    click.echo(f"{'ID':<16} {'Date':<17} {'Amount':<15} {'Category':<20} Method")
    click.echo("-" * 100)
    for txn in shown:
        click.echo(transaction_line(txn, private))


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_transactions)
