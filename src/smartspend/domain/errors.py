"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist.

    The ledger core never raises this for lookups (those return None); it is
    used by callers that need a hard failure, such as CLI book resolution.
    """


class PersistenceError(DomainError):
    """Reading from or writing to the blob store failed."""


def book_not_found(book: str) -> str:
    """Return message for missing book."""
    return f"Book '{book}' not found"


def empty_book_name() -> str:
    """Return message for a blank book name."""
    return "Book name must not be empty"


def negative_amount(amount) -> str:
    """Return message for a negative transaction amount."""
    return f"Amount must not be negative (got {amount})"


def negative_gst_rate(rate) -> str:
    """Return message for a negative GST rate."""
    return f"GST rate must not be negative (got {rate})"


def unknown_transaction_type(value) -> str:
    """Return message for a transaction type other than in/out."""
    return f"Unknown transaction type '{value}'. Expected 'in' or 'out'"


def store_failure(action: str, key: str, error: Exception) -> str:
    """Return message for a failed blob store call."""
    return f"Failed to {action} '{key}': {error}"
