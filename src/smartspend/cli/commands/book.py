"""Book management commands."""

import click

from smartspend.cli.book_resolution import resolve_book_or_exit
from smartspend.cli.error_handling import handle_domain_error
from smartspend.cli.formatting import money
from smartspend.domain.errors import ValidationError


@click.group("book")
def book_group():
    """Manage cashbooks."""
    pass


@book_group.command("create")
@click.argument("name", metavar="BOOK_NAME")
@click.option("--description", help="Short description")
@click.option("--color", help="Display color (e.g., '#16A34A')")
@click.option("--use", "make_active", is_flag=True, help="Make the new book active")
@click.pass_context
def create_book(ctx, name: str, description: str | None, color: str | None, make_active: bool):
    """Create a new cashbook.

    The first book you create becomes the active book.

    Examples:
        smartspend book create "Shop"
        smartspend book create "Home" --description "Household" --use
    """
    registry = ctx.obj["app"].registry

    try:
        book = registry.add_book(name, description=description, color=color)
    except ValidationError as e:
        handle_domain_error(ctx, e)

    if make_active:
        registry.set_active_book(book.id)

    click.echo(f"Created book '{book.name}' (ID: {book.id})")
    if registry.active_book_id == book.id:
        click.echo("Book is now active")


@book_group.command("list")
@click.pass_context
def list_books(ctx):
    """List all cashbooks with their balances."""
    app = ctx.obj["app"]
    books = app.registry.list_books()
    if not books:
        click.echo("No books found.")
        return

    private = app.ledger.settings.private_mode
    click.echo("\nBooks:")
    click.echo("-" * 70)
    for book in books:
        marker = "*" if book.id == app.registry.active_book_id else " "
        balance = app.ledger.get_book_balance(book.id).balance
        click.echo(
            f"{marker} {book.id:<16} | {book.name:20s} | Balance: {money(balance, private)}"
        )


@book_group.command("use")
@click.argument("book", metavar="BOOK")
@click.pass_context
def use_book(ctx, book: str):
    """Make BOOK (name or ID) the active book."""
    registry = ctx.obj["app"].registry
    found = resolve_book_or_exit(ctx, registry, book)
    registry.set_active_book(found.id)
    click.echo(f"Active book: '{found.name}'")


@book_group.command("delete")
@click.argument("book", metavar="BOOK")
@click.confirmation_option(prompt="Delete this book? Its entries are kept.")
@click.pass_context
def delete_book(ctx, book: str):
    """Delete BOOK (name or ID).

    Entries recorded in the book are not deleted.
    """
    registry = ctx.obj["app"].registry
    found = resolve_book_or_exit(ctx, registry, book)
    registry.delete_book(found.id)
    click.echo(f"Deleted book '{found.name}'")

    active = registry.get_active_book()
    if active is not None:
        click.echo(f"Active book: '{active.name}'")
    else:
        click.echo("No active book")


@book_group.command("clear")
@click.confirmation_option(prompt="Delete every book?")
@click.pass_context
def clear_books(ctx):
    """Delete every cashbook (entries are kept)."""
    ctx.obj["app"].registry.clear_all_books()
    click.echo("Deleted all books")


def register_commands(cli):
    """Register book commands with main CLI."""
    cli.add_command(book_group)
