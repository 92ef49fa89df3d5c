"""Conversion between domain entities and snapshot documents.

Snapshots keep the camelCase keys written by the SmartSpend mobile app so
existing data keeps loading. Decoding is best-effort: each field that is
missing or malformed falls back to a default instead of failing the whole
load.
"""

import json
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from dateutil import parser as date_parser

from smartspend.domain.entities import (
    Book,
    DEFAULT_BOOK_COLOR,
    Settings,
    Transaction,
    TransactionType,
    ZERO,
)

SNAPSHOT_VERSION = 1

BOOKS_KEY = "@smartspend_books_v1"
TRANSACTIONS_KEY = "@smartspend_transactions_v1"

DEFAULT_BOOK_NAME = "Cashbook"


class SnapshotFormatError(ValueError):
    """Blob is not a readable snapshot document."""


def _decimal_to_json(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else format(value, "f")


def _as_decimal(value: Any) -> Optional[Decimal]:
    """Read a JSON number or numeric string; anything else gives None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float):
        value = repr(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    return result if result.is_finite() else None


def _as_non_negative(value: Any) -> Decimal:
    result = _as_decimal(value)
    if result is None or result < 0:
        return ZERO
    return result


def _as_positive_or_none(value: Any) -> Optional[Decimal]:
    result = _as_decimal(value)
    if result is None or result <= 0:
        return None
    return result


def _as_str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _as_instant(value: Any, default: datetime) -> datetime:
    if not isinstance(value, str) or not value:
        return default
    try:
        return date_parser.isoparse(value).astimezone()
    except (ValueError, OverflowError):
        return default


def decode_document(data: bytes) -> dict[str, Any]:
    """Parse a blob into a JSON object."""
    try:
        document = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SnapshotFormatError(f"Snapshot is not valid JSON: {e}")
    if not isinstance(document, dict):
        raise SnapshotFormatError(
            f"Snapshot must be a JSON object, not {type(document).__name__}"
        )
    return document


def encode_document(document: dict[str, Any]) -> bytes:
    return json.dumps(document, ensure_ascii=False).encode("utf-8")


# Books
def book_to_dict(book: Book) -> dict[str, Any]:
    """Convert a Book to its snapshot form."""
    return {
        "id": book.id,
        "name": book.name,
        "description": book.description,
        "color": book.color,
        "createdAt": book.created_at.isoformat(),
    }


def book_from_dict(raw: Any, now: datetime) -> Optional[Book]:
    """Convert a snapshot entry to a Book; None if it has no usable id."""
    if not isinstance(raw, dict) or not isinstance(raw.get("id"), str) or not raw["id"]:
        return None
    return Book(
        id=raw["id"],
        name=_as_str(raw.get("name")).strip() or DEFAULT_BOOK_NAME,
        description=_as_str(raw.get("description")),
        color=_as_str(raw.get("color")) or DEFAULT_BOOK_COLOR,
        created_at=_as_instant(raw.get("createdAt"), now),
    )


def encode_books(books, active_book_id: Optional[str]) -> bytes:
    """Serialize the book registry state."""
    return encode_document(
        {
            "version": SNAPSHOT_VERSION,
            "books": [book_to_dict(book) for book in books],
            "activeBookId": active_book_id,
        }
    )


def decode_books(data: bytes, now: datetime) -> tuple[list[Book], Optional[str]]:
    """Deserialize the book registry state."""
    document = decode_document(data)
    raw_books = document.get("books")
    books = []
    seen = set()
    for raw in raw_books if isinstance(raw_books, list) else []:
        book = book_from_dict(raw, now)
        if book is not None and book.id not in seen:
            seen.add(book.id)
            books.append(book)
    active_book_id = document.get("activeBookId")
    if not isinstance(active_book_id, str) or not active_book_id:
        active_book_id = None
    return books, active_book_id


# Transactions
def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    """Convert a Transaction to its snapshot form."""
    return {
        "id": txn.id,
        "bookId": txn.book_id,
        "type": txn.type.value,
        "amount": _decimal_to_json(txn.amount),
        "date": txn.date.isoformat(),
        "createdAt": txn.created_at.isoformat(),
        "category": txn.category,
        "note": txn.note,
        "paymentMethod": txn.payment_method,
        "isGstApplied": txn.is_gst_applied,
        "gstRate": _decimal_to_json(txn.gst_rate),
        "cgst": _decimal_to_json(txn.cgst),
        "sgst": _decimal_to_json(txn.sgst),
        "igst": _decimal_to_json(txn.igst),
    }


def transaction_from_dict(raw: Any, now: datetime) -> Optional[Transaction]:
    """Convert a snapshot entry to a Transaction.

    Entries without an id or with a type other than in/out are dropped.
    """
    if not isinstance(raw, dict) or not isinstance(raw.get("id"), str) or not raw["id"]:
        return None
    try:
        txn_type = TransactionType(raw.get("type"))
    except ValueError:
        return None

    created_at = _as_instant(raw.get("createdAt"), now)
    gst_fields = {}
    if raw.get("isGstApplied") is True:
        gst_fields = dict(
            is_gst_applied=True,
            gst_rate=_as_non_negative(raw.get("gstRate")),
            cgst=_as_non_negative(raw.get("cgst")),
            sgst=_as_non_negative(raw.get("sgst")),
            igst=_as_non_negative(raw.get("igst")),
        )

    return Transaction(
        id=raw["id"],
        book_id=_as_str(raw.get("bookId")),
        type=txn_type,
        amount=_as_non_negative(raw.get("amount")),
        date=_as_instant(raw.get("date"), created_at),
        created_at=created_at,
        category=_as_str(raw.get("category")).strip() or txn_type.default_category,
        note=_as_str(raw.get("note")),
        payment_method=_as_str(raw.get("paymentMethod")),
        **gst_fields,
    )


def settings_to_dict(settings: Settings) -> dict[str, Any]:
    return {
        "gstEnabled": settings.gst_enabled,
        "roundUpEnabled": settings.round_up_enabled,
        "privateMode": settings.private_mode,
        "monthlyBudget": _decimal_to_json(settings.monthly_budget),
        "savingsGoal": _decimal_to_json(settings.savings_goal),
    }


def settings_from_dict(document: dict[str, Any]) -> Settings:
    return Settings(
        gst_enabled=bool(document.get("gstEnabled")),
        round_up_enabled=bool(document.get("roundUpEnabled")),
        private_mode=bool(document.get("privateMode")),
        monthly_budget=_as_positive_or_none(document.get("monthlyBudget")),
        savings_goal=_as_positive_or_none(document.get("savingsGoal")),
    )


def encode_transactions(transactions, settings: Settings) -> bytes:
    """Serialize the ledger state."""
    document = {
        "version": SNAPSHOT_VERSION,
        "transactions": [transaction_to_dict(txn) for txn in transactions],
    }
    document.update(settings_to_dict(settings))
    return encode_document(document)


def decode_transactions(data: bytes, now: datetime) -> tuple[list[Transaction], Settings]:
    """Deserialize the ledger state."""
    document = decode_document(data)
    raw_transactions = document.get("transactions")
    transactions = []
    seen = set()
    for raw in raw_transactions if isinstance(raw_transactions, list) else []:
        txn = transaction_from_dict(raw, now)
        if txn is not None and txn.id not in seen:
            seen.add(txn.id)
            transactions.append(txn)
    return transactions, settings_from_dict(document)
