"""Add transaction command."""

import click

from smartspend.cli.book_resolution import resolve_book_or_exit
from smartspend.cli.error_handling import handle_domain_error
from smartspend.cli.formatting import money
from smartspend.domain.entities import GstRequest
from smartspend.domain.errors import ValidationError
from smartspend.utils.amount_parser import parse_amount
from smartspend.utils.date_parser import local_now, parse_date


@click.command("add")
@click.argument("txn_type", metavar="in|out", type=click.Choice(["in", "out"]))
@click.argument("amount", metavar="AMOUNT")
@click.option("--book", help="Book name or ID (defaults to the active book)")
@click.option(
    "--date",
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday'; defaults to now)",
)
@click.option("--category", help="Category (defaults to Cash-in / Cash-out)")
@click.option("--note", help="Note")
@click.option("--method", "payment_method", help="Payment method (e.g., UPI, Cash)")
@click.option("--gst-rate", help="Apply GST at this rate in percent (requires GST enabled)")
@click.pass_context
def add_transaction(
    ctx,
    txn_type: str,
    amount: str,
    book: str | None,
    date: str | None,
    category: str | None,
    note: str | None,
    payment_method: str | None,
    gst_rate: str | None,
):
    """Record a cash-in or cash-out entry.

    Examples:
        smartspend add in 500 --category Sales --method UPI
        smartspend add out 1180 --date yesterday --gst-rate 18
    """
    app = ctx.obj["app"]
    book_obj = resolve_book_or_exit(ctx, app.registry, book)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    txn_date = local_now()
    if date:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    gst = None
    if gst_rate is not None:
        if not app.ledger.settings.gst_enabled:
            click.echo(
                "Warning: GST is disabled, recording without GST "
                "(enable with 'smartspend settings gst on')",
                err=True,
            )
        else:
            try:
                gst = GstRequest(rate=parse_amount(gst_rate))
            except ValueError as e:
                click.echo(f"Error: Invalid GST rate: {e}", err=True)
                ctx.exit(1)

    try:
        txn = app.ledger.add_transaction(
            book_id=book_obj.id,
            type=txn_type,
            amount=txn_amount,
            date=txn_date,
            category=category,
            note=note,
            payment_method=payment_method,
            gst=gst,
        )
    except ValidationError as e:
        handle_domain_error(ctx, e)

    private = app.ledger.settings.private_mode
    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Book: {book_obj.name}")
    click.echo(f"  Type: {txn.type.value}")
    click.echo(f"  Date: {txn.date:%Y-%m-%d %H:%M}")
    click.echo(f"  Amount: {money(txn.amount, private)}")
    click.echo(f"  Category: {txn.category}")
    if txn.is_gst_applied:
        click.echo(
            f"  GST {txn.gst_rate}%: CGST {money(txn.cgst, private)}, "
            f"SGST {money(txn.sgst, private)}"
        )


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
