"""Balance, chart and budget commands."""

import click

from smartspend.cli.book_resolution import resolve_book_or_exit
from smartspend.cli.formatting import money
from smartspend.utils.date_parser import parse_date

BAR_WIDTH = 30


@click.command("balance")
@click.option("--book", help="Book name or ID (defaults to the active book)")
@click.pass_context
def show_balance(ctx, book: str | None):
    """Show total cash-in, cash-out and balance of a book."""
    app = ctx.obj["app"]
    book_obj = resolve_book_or_exit(ctx, app.registry, book)
    balance = app.ledger.get_book_balance(book_obj.id)
    private = app.ledger.settings.private_mode

    click.echo(f"\n{book_obj.name}")
    click.echo("-" * 40)
    click.echo(f"Cash-in:  {money(balance.in_total, private)}")
    click.echo(f"Cash-out: {money(balance.out_total, private)}")
    click.echo(f"Balance:  {money(balance.balance, private)}")


@click.command("chart")
@click.option("--book", help="Book name or ID (defaults to the active book)")
@click.option("--days", type=click.IntRange(min=1), default=7, show_default=True, help="Number of days")
@click.option("--anchor", help="Last day of the chart (defaults to today)")
@click.pass_context
def show_chart(ctx, book: str | None, days: int, anchor: str | None):
    """Chart the daily net cash flow of a book."""
    app = ctx.obj["app"]
    book_obj = resolve_book_or_exit(ctx, app.registry, book)

    anchor_date = None
    if anchor:
        try:
            anchor_date = parse_date(anchor)
        except ValueError as e:
            click.echo(f"Error: Invalid anchor date: {e}", err=True)
            ctx.exit(1)

    series = app.aggregation.daily_series(book_obj.id, days, anchor_date)
    private = app.ledger.settings.private_mode
    max_abs = max([abs(point.net) for point in series] + [1])

    click.echo(f"\n{book_obj.name}: net cash flow, last {days} day(s)")
    click.echo("-" * 60)
    for point in series:
        width = int(abs(point.net) / max_abs * BAR_WIDTH)
        bar = ("+" if point.net >= 0 else "-") * width
        click.echo(f"{point.label} {point.day:%d/%m} {money(point.net, private):>14} {bar}")


@click.command("budget")
@click.option("--book", help="Book name or ID (defaults to the active book)")
@click.pass_context
def show_budget(ctx, book: str | None):
    """Compare this month's entries with the budget and savings goal."""
    app = ctx.obj["app"]
    book_obj = resolve_book_or_exit(ctx, app.registry, book)
    status = app.aggregation.budget_status(book_obj.id)
    private = app.ledger.settings.private_mode

    click.echo(f"\n{book_obj.name}: {status.month_start:%B %Y}")
    click.echo("-" * 40)
    if status.monthly_budget is None:
        click.echo("Set a monthly budget with 'smartspend settings budget AMOUNT'")
    else:
        click.echo(
            f"Spent {money(status.spent, private)} of {money(status.monthly_budget, private)}"
        )
        if status.over_budget:
            click.echo("Over budget!")
        else:
            click.echo(f"Remaining: {money(status.remaining_budget, private)}")

    if status.savings_goal is None:
        click.echo("Set a savings goal with 'smartspend settings goal AMOUNT'")
    else:
        click.echo(
            f"Saved {money(status.saved, private)} of {money(status.savings_goal, private)}"
        )
        if status.goal_reached:
            click.echo("Savings goal reached")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(show_balance)
    cli.add_command(show_chart)
    cli.add_command(show_budget)
