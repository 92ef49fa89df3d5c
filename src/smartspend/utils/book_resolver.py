"""Utility for resolving book names to books."""

from typing import Optional

from smartspend.domain.books import BookRegistry
from smartspend.domain.entities import Book
from smartspend.domain.errors import NotFoundError, book_not_found


def resolve_book(registry: BookRegistry, book: Optional[str] = None) -> Book:
    """Resolve a book id or name, or the active book when none is given.

    Args:
        registry: BookRegistry instance
        book: Book id or name; None selects the active book

    Returns:
        Matching Book

    Raises:
        NotFoundError: If no book matches or no book is active
    """
    if book is None:
        active = registry.get_active_book()
        if active is None:
            raise NotFoundError(
                "No active book. Create one with 'smartspend book create NAME'"
            )
        return active

    found = registry.get_book(book) or registry.find_book_by_name(book)
    if found is None:
        raise NotFoundError(book_not_found(book))
    return found
