"""CLI helpers for date range options."""

from datetime import date
import functools

import click

from smartspend.utils.date_parser import PERIODS, get_date_range, parse_date


def date_filter_options(command):
    """Add --start-date/--end-date and the period flags to a command."""
    options = [
        click.option("--start-date", help="First day to include (YYYY-MM-DD or 'last week', ...)"),
        click.option("--end-date", help="Last day to include"),
    ]
    for period in PERIODS:
        options.append(
            click.option(
                f"--{period}",
                period.replace("-", "_"),
                is_flag=True,
                help=f"Restrict to {period.replace('-', ' ')}",
            )
        )

    @functools.wraps(command)
    def wrapper(*args, **kwargs):
        kwargs["period_flags"] = {
            period: kwargs.pop(period.replace("-", "_")) for period in PERIODS
        }
        return command(*args, **kwargs)

    for option in reversed(options):
        wrapper = option(wrapper)
    return wrapper


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[date | None, date | None]:
    """Resolve the date range from period flags or explicit dates."""
    chosen = [period for period, is_set in period_flags.items() if is_set]

    if len(chosen) > 1:
        click.echo(
            "Error: Only one period option (--this-month, --this-year, --this-week, "
            "--last-month, --last-year, --last-week) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if chosen and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be "
            "combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if chosen:
        return get_date_range(chosen[0])

    start = end = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)
    return start, end
