"""Export commands.

Both exports use exactly the list ``view`` would show for the same filters.
"""

import click

from smartspend.cli.book_resolution import resolve_book_or_exit
from smartspend.cli.date_filters import date_filter_options, resolve_cli_date_range
from smartspend.cli.formatting import MASK, money
from smartspend.domain.reporting import TRANSACTION_COLUMNS, build_summary, write_transactions_csv


@click.group("export")
def export_group():
    """Export a book's entries."""
    pass


MONEY_COLUMNS = frozenset({"Amount", "CGST", "SGST", "IGST"})


def _masked(row: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(
        MASK if column in MONEY_COLUMNS else value
        for column, value in zip(TRANSACTION_COLUMNS, row)
    )


def _filtered(ctx, book, txn_type, start_date, end_date, period_flags):
    app = ctx.obj["app"]
    book_obj = resolve_book_or_exit(ctx, app.registry, book)
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )
    return book_obj, app.aggregation.filter(book_obj.id, type=txn_type, from_date=start, to_date=end)


@export_group.command("csv")
@click.option("--book", help="Book name or ID (defaults to the active book)")
@click.option("--type", "txn_type", type=click.Choice(["in", "out"]), help="Only cash-in or cash-out")
@click.option("--output", "-o", type=click.File("w", encoding="utf-8"), default="-", help="Output file (default: stdout)")
@date_filter_options
@click.pass_context
def export_csv(ctx, book, txn_type, output, start_date, end_date, period_flags):
    """Export entries as CSV.

    The file always holds real amounts, also in private mode.

    Examples:
        smartspend export csv --this-month -o march.csv
    """
    _, transactions = _filtered(ctx, book, txn_type, start_date, end_date, period_flags)
    write_transactions_csv(transactions, output)
    if output.name != "<stdout>":
        click.echo(f"Exported {len(transactions)} transaction(s) to {output.name}")


@export_group.command("summary")
@click.option("--book", help="Book name or ID (defaults to the active book)")
@click.option("--type", "txn_type", type=click.Choice(["in", "out"]), help="Only cash-in or cash-out")
@date_filter_options
@click.pass_context
def export_summary(ctx, book, txn_type, start_date, end_date, period_flags):
    """Print totals followed by the matching entries."""
    book_obj, transactions = _filtered(ctx, book, txn_type, start_date, end_date, period_flags)
    summary = build_summary(transactions, book_obj)
    private = ctx.obj["app"].ledger.settings.private_mode

    click.echo(f"\nCashbook: {summary.book_name}")
    click.echo("-" * 40)
    click.echo(f"Total cash-in:  {money(summary.total_in, private)}")
    click.echo(f"Total cash-out: {money(summary.total_out, private)}")
    click.echo(f"Net balance:    {money(summary.balance, private)}")
    click.echo(f"Total GST:      {money(summary.total_gst, private)}")

    if not summary.rows:
        click.echo("\nNo transactions in this selection.")
        return

    click.echo("")
    click.echo(" | ".join(TRANSACTION_COLUMNS))
    for row in summary.rows:
        click.echo(" | ".join(_masked(row) if private else row))


def register_commands(cli):
    """Register export commands with main CLI."""
    cli.add_command(export_group)
