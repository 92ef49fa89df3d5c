"""Transaction management commands."""

import click

from smartspend.cli.formatting import money


@click.command("delete")
@click.argument("transaction_id", metavar="TRANSACTION_ID")
@click.pass_context
def delete_transaction(ctx, transaction_id: str):
    """Delete a transaction permanently."""
    app = ctx.obj["app"]
    ledger = app.ledger

    txn = ledger.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"No transaction {transaction_id}, nothing deleted.")
        return

    ledger.delete_transaction(transaction_id)
    click.echo(
        f"Deleted transaction {transaction_id} "
        f"({txn.type.value} {money(txn.amount, ledger.settings.private_mode)})"
    )


@click.command("clear")
@click.option("--books", "include_books", is_flag=True, help="Also delete every book")
@click.confirmation_option(prompt="Delete all entries?")
@click.pass_context
def clear_transactions(ctx, include_books: bool):
    """Delete every transaction, and optionally every book."""
    app = ctx.obj["app"]
    if include_books:
        app.clear_everything()
        click.echo("Deleted all books and entries")
    else:
        app.ledger.clear_all_transactions()
        click.echo("Deleted all entries")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(delete_transaction)
    cli.add_command(clear_transactions)
