"""Report export: tabular rows and summary totals for renderers.

Both exports take the already-filtered transaction sequence from
``AggregationEngine.filter`` so an export always matches what was on screen.
"""

import csv
import io
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Sequence, TextIO

from smartspend.domain.entities import Book, Transaction, TransactionType, ZERO

TRANSACTION_COLUMNS = (
    "Date",
    "Type",
    "Category",
    "Amount",
    "Payment Method",
    "GST Applied",
    "GST Rate",
    "CGST",
    "SGST",
    "IGST",
    "Note",
)

DATE_FORMAT = "%d %b %Y %H:%M"


@dataclass(frozen=True)
class SummaryExport:
    """Aggregate totals plus per-transaction rows for document rendering."""

    book_name: Optional[str]
    total_in: Decimal
    total_out: Decimal
    total_gst: Decimal
    rows: tuple[tuple[str, ...], ...]

    @property
    def balance(self) -> Decimal:
        return self.total_in - self.total_out


def format_amount(value: Decimal) -> str:
    """Render a decimal without exponent notation."""
    return format(value, "f")


def transaction_row(txn: Transaction) -> tuple[str, ...]:
    """Flatten a transaction into one export row, in TRANSACTION_COLUMNS order."""
    return (
        txn.date.astimezone().strftime(DATE_FORMAT),
        txn.type.value,
        txn.category,
        format_amount(txn.amount),
        txn.payment_method,
        "Yes" if txn.is_gst_applied else "No",
        format_amount(txn.gst_rate),
        format_amount(txn.cgst),
        format_amount(txn.sgst),
        format_amount(txn.igst),
        txn.note,
    )


def write_transactions_csv(transactions: Iterable[Transaction], stream: TextIO) -> None:
    """Write a header plus one CSV row per transaction to ``stream``.

    Fields containing a comma, quote or newline are quoted and embedded
    quotes are doubled.
    """
    writer = csv.writer(stream, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(TRANSACTION_COLUMNS)
    for txn in transactions:
        writer.writerow(transaction_row(txn))


def transactions_to_csv(transactions: Iterable[Transaction]) -> str:
    """Render transactions as CSV text."""
    buffer = io.StringIO()
    write_transactions_csv(transactions, buffer)
    return buffer.getvalue()


def build_summary(
    transactions: Sequence[Transaction], book: Optional[Book] = None
) -> SummaryExport:
    """Total up ``transactions`` for a summary document."""
    total_in = ZERO
    total_out = ZERO
    total_gst = ZERO
    for txn in transactions:
        if txn.type is TransactionType.IN:
            total_in += txn.amount
        else:
            total_out += txn.amount
        if txn.is_gst_applied:
            total_gst += txn.total_gst

    return SummaryExport(
        book_name=book.name if book is not None else None,
        total_in=total_in,
        total_out=total_out,
        total_gst=total_gst,
        rows=tuple(transaction_row(txn) for txn in transactions),
    )
