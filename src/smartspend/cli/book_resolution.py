"""CLI helpers for book resolution."""

from __future__ import annotations

import click

from smartspend.cli.error_handling import handle_domain_error
from smartspend.domain.books import BookRegistry
from smartspend.domain.entities import Book
from smartspend.domain.errors import NotFoundError
from smartspend.utils.book_resolver import resolve_book


def resolve_book_or_exit(
    ctx: click.Context, registry: BookRegistry, book: str | None
) -> Book:
    """Resolve a book id or name (or the active book), or exit with a CLI error."""
    try:
        return resolve_book(registry, book)
    except NotFoundError as exc:
        handle_domain_error(ctx, exc)
