"""Main CLI entry point."""

import click

from smartspend.app import bootstrap
from smartspend.cli.error_handling import warn_persistence_error
from smartspend.config.logging import configure_logging
from smartspend.storage.factories import create_sqlite_store

# Import and register all commands at module level
from smartspend.cli.commands import (
    book,
    add,
    transaction,
    view,
    report,
    export,
    settings,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SMARTSPEND_DB_PATH environment variable)",
    envvar="SMARTSPEND_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level (overrides SMARTSPEND_LOG_LEVEL environment variable)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """SmartSpend - cashbooks for everyday income and expenses.

    Keep several cashbooks, record cash-in and cash-out entries with optional
    GST, and review balances, daily cash flow and exports.
    """
    ctx.ensure_object(dict)

    # Open the store only when actually running a command (not for --help)
    if ctx.invoked_subcommand is not None:
        configure_logging(level=log_level.upper() if log_level else None)
        app = bootstrap(
            create_sqlite_store(database_path=db_path),
            on_error=warn_persistence_error,
        )
        ctx.obj["app"] = app
        ctx.call_on_close(app.close)


# Register all commands
book.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
view.register_commands(cli)
report.register_commands(cli)
export.register_commands(cli)
settings.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
