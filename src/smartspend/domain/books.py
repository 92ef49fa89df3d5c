"""Book registry domain service."""

from datetime import datetime
from typing import Callable, Iterable, Optional

import structlog

from smartspend.domain.entities import Book, DEFAULT_BOOK_COLOR
from smartspend.domain.errors import ValidationError, empty_book_name
from smartspend.domain.ids import make_id
from smartspend.utils.date_parser import local_now

logger = structlog.get_logger(__name__)


class BookRegistry:
    """Service owning the cashbooks and the active-book pointer.

    Books are kept most-recent-first. The active pointer is a plain id and may
    dangle after ``set_active_book``; lookups then return None.
    """

    def __init__(
        self,
        books: Iterable[Book] = (),
        active_book_id: Optional[str] = None,
        on_change: Optional[Callable[["BookRegistry"], object]] = None,
        id_factory: Callable[[], str] = make_id,
        clock: Callable[[], datetime] = local_now,
    ):
        """Initialize book registry.

        Args:
            books: Initial books, most recent first
            active_book_id: Initially active book id
            on_change: Called with the registry after every mutation
            id_factory: Produces new book ids
            clock: Produces creation timestamps
        """
        self._books: list[Book] = list(books)
        self._active_book_id = active_book_id
        self.on_change = on_change
        self.id_factory = id_factory
        self.clock = clock

    @property
    def books(self) -> tuple[Book, ...]:
        return tuple(self._books)

    @property
    def active_book_id(self) -> Optional[str]:
        return self._active_book_id

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self)

    def add_book(
        self,
        name: str,
        description: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Book:
        """Create a new book.

        The book becomes active if no book is currently active.

        Args:
            name: Display name
            description: Optional description
            color: Optional display color (defaults to blue)

        Returns:
            The created Book

        Raises:
            ValidationError: If name is empty or whitespace
        """
        if name is None or not name.strip():
            raise ValidationError(empty_book_name())

        book = Book(
            id=self.id_factory(),
            name=name.strip(),
            description=(description or "").strip(),
            color=color or DEFAULT_BOOK_COLOR,
            created_at=self.clock(),
        )
        self._books.insert(0, book)
        if not self._active_book_id:
            self._active_book_id = book.id

        logger.info("book_added", book_id=book.id, name=book.name)
        self._changed()
        return book

    def set_active_book(self, book_id: Optional[str]) -> None:
        """Point the active book at ``book_id`` without checking it exists."""
        self._active_book_id = book_id
        self._changed()

    def delete_book(self, book_id: str) -> None:
        """Delete a book, leaving its transactions untouched.

        If the deleted book was active, the most recent remaining book becomes
        active, or none if the registry is now empty. Deleting an unknown id
        does nothing.
        """
        remaining = [book for book in self._books if book.id != book_id]
        if len(remaining) == len(self._books):
            return
        self._books = remaining
        if self._active_book_id == book_id:
            self._active_book_id = self._books[0].id if self._books else None

        logger.info("book_deleted", book_id=book_id, active_book_id=self._active_book_id)
        self._changed()

    def clear_all_books(self) -> None:
        """Remove every book and clear the active pointer."""
        self._books = []
        self._active_book_id = None
        logger.info("books_cleared")
        self._changed()

    def get_book(self, book_id: Optional[str]) -> Optional[Book]:
        """Get book by ID, or None if absent."""
        if book_id is None:
            return None
        for book in self._books:
            if book.id == book_id:
                return book
        return None

    def get_active_book(self) -> Optional[Book]:
        """Return the active book, or None if unset or dangling."""
        return self.get_book(self._active_book_id)

    def find_book_by_name(self, name: str) -> Optional[Book]:
        """Return the most recent book named ``name``."""
        for book in self._books:
            if book.name == name:
                return book
        return None

    def list_books(self) -> list[Book]:
        """List books, most recent first."""
        return list(self._books)
