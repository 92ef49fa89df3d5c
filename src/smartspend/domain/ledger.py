"""Transaction ledger domain service."""

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Iterable, Optional

import structlog

from smartspend.domain.entities import (
    Balance,
    GstRequest,
    Settings,
    Transaction,
    TransactionType,
    ZERO,
)
from smartspend.domain.errors import (
    ValidationError,
    negative_amount,
    unknown_transaction_type,
)
from smartspend.domain.ids import make_id
from smartspend.domain.tax import split
from smartspend.utils.date_parser import local_now, to_local_instant

logger = structlog.get_logger(__name__)


def to_decimal(value, field: str = "amount") -> Decimal:
    """Convert a numeric value to Decimal without float artifacts."""
    if isinstance(value, float):
        value = repr(value)
    try:
        result = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"Invalid {field} '{value}'")
    if not result.is_finite():
        raise ValidationError(f"Invalid {field} '{value}'")
    return result


def totals(transactions: Iterable[Transaction]) -> Balance:
    """Sum cash-in and cash-out over ``transactions``."""
    in_total = ZERO
    out_total = ZERO
    for txn in transactions:
        if txn.type is TransactionType.IN:
            in_total += txn.amount
        else:
            out_total += txn.amount
    return Balance(in_total=in_total, out_total=out_total)


def parse_type(value: TransactionType | str) -> TransactionType:
    """Coerce ``value`` to a TransactionType."""
    try:
        return TransactionType(value)
    except ValueError:
        raise ValidationError(unknown_transaction_type(value))


class TransactionLedger:
    """Service owning the transactions and the ledger settings.

    Transactions are kept in insertion order, newest first. Nothing here
    checks that a ``book_id`` refers to an existing book.
    """

    def __init__(
        self,
        transactions: Iterable[Transaction] = (),
        settings: Optional[Settings] = None,
        on_change: Optional[Callable[["TransactionLedger"], object]] = None,
        id_factory: Callable[[], str] = make_id,
        clock: Callable[[], datetime] = local_now,
    ):
        """Initialize transaction ledger.

        Args:
            transactions: Initial transactions, newest first
            settings: Initial settings (defaults to everything off/unset)
            on_change: Called with the ledger after every mutation
            id_factory: Produces new transaction ids
            clock: Produces creation timestamps
        """
        self._transactions: list[Transaction] = list(transactions)
        self._settings = settings or Settings()
        self.on_change = on_change
        self.id_factory = id_factory
        self.clock = clock

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions)

    @property
    def settings(self) -> Settings:
        return self._settings

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self)

    def add_transaction(
        self,
        book_id: str,
        type: TransactionType | str,
        amount: Decimal,
        date: datetime | date,
        category: Optional[str] = None,
        note: Optional[str] = None,
        payment_method: Optional[str] = None,
        gst: Optional[GstRequest] = None,
    ) -> Transaction:
        """Record a transaction.

        Args:
            book_id: Owning book id
            type: "in" or "out"
            amount: Non-negative amount
            date: When the movement happened (may be back- or future-dated)
            category: Optional category (defaults to Cash-in/Cash-out)
            note: Optional note
            payment_method: Optional payment method
            gst: Optional GST request; a zero rate records no GST

        Returns:
            The created Transaction

        Raises:
            ValidationError: If type is unknown, amount or GST rate negative
        """
        txn_type = parse_type(type)
        amount = to_decimal(amount)
        if amount < 0:
            raise ValidationError(negative_amount(amount))

        gst_fields = {}
        if gst is not None:
            rate = to_decimal(gst.rate, field="GST rate")
            tax = split(amount, rate)
            if rate > 0:
                gst_fields = dict(
                    is_gst_applied=True,
                    gst_rate=rate,
                    cgst=tax.cgst,
                    sgst=tax.sgst,
                    igst=tax.igst,
                )

        txn = Transaction(
            id=self.id_factory(),
            book_id=book_id,
            type=txn_type,
            amount=amount,
            date=to_local_instant(date),
            created_at=self.clock(),
            category=(category or "").strip() or txn_type.default_category,
            note=(note or "").strip(),
            payment_method=(payment_method or "").strip(),
            **gst_fields,
        )
        self._transactions.insert(0, txn)

        logger.info(
            "transaction_added",
            transaction_id=txn.id,
            book_id=book_id,
            type=txn_type.value,
            amount=str(amount),
        )
        self._changed()
        return txn

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID, or None if absent."""
        for txn in self._transactions:
            if txn.id == transaction_id:
                return txn
        return None

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction; deleting an unknown id does nothing."""
        remaining = [txn for txn in self._transactions if txn.id != transaction_id]
        if len(remaining) == len(self._transactions):
            return
        self._transactions = remaining
        logger.info("transaction_deleted", transaction_id=transaction_id)
        self._changed()

    def clear_all_transactions(self) -> None:
        """Remove every transaction."""
        self._transactions = []
        logger.info("transactions_cleared")
        self._changed()

    def transactions_for_book(self, book_id: str) -> list[Transaction]:
        """List a book's transactions in insertion order, newest first."""
        return [txn for txn in self._transactions if txn.book_id == book_id]

    def get_book_balance(self, book_id: str) -> Balance:
        """Sum a book's cash-in and cash-out amounts."""
        return totals(self.transactions_for_book(book_id))

    # Settings
    def _update_settings(self, **changes) -> None:
        self._settings = replace(self._settings, **changes)
        logger.info("settings_updated", **changes)
        self._changed()

    def set_gst_enabled(self, enabled: bool) -> None:
        self._update_settings(gst_enabled=bool(enabled))

    def set_round_up_enabled(self, enabled: bool) -> None:
        self._update_settings(round_up_enabled=bool(enabled))

    def set_private_mode(self, enabled: bool) -> None:
        self._update_settings(private_mode=bool(enabled))

    def set_monthly_budget(self, amount: Optional[Decimal]) -> None:
        """Set the monthly budget; zero, negative or None unsets it."""
        self._update_settings(monthly_budget=_positive_or_none(amount, "monthly budget"))

    def set_savings_goal(self, amount: Optional[Decimal]) -> None:
        """Set the savings goal; zero, negative or None unsets it."""
        self._update_settings(savings_goal=_positive_or_none(amount, "savings goal"))


def _positive_or_none(value, field: str) -> Optional[Decimal]:
    if value is None:
        return None
    value = to_decimal(value, field=field)
    return value if value > 0 else None
