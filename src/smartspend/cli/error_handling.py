"""Rendering of domain and storage errors for CLI commands."""

import click
import structlog

from smartspend.domain.errors import DomainError, PersistenceError

logger = structlog.get_logger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Print ``error`` on stderr and exit the command with status 1."""
    logger.debug(
        "command_failed",
        command=ctx.command_path,
        kind=type(error).__name__,
        error=str(error),
    )
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def warn_persistence_error(error: PersistenceError) -> None:
    """Report a failed load or save; the command itself carries on."""
    click.echo(f"Warning: {error}", err=True)
