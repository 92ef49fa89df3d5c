"""Domain model entities for smartspend.

These are pure data classes representing ledger concepts, independent of how
they are serialized. Books and transactions are immutable once created; the
stores replace or drop them, never edit them in place.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

ZERO = Decimal("0")

DEFAULT_BOOK_COLOR = "#2563EB"


class TransactionType(str, Enum):
    """Direction of a cash movement."""

    IN = "in"
    OUT = "out"

    @property
    def default_category(self) -> str:
        return "Cash-in" if self is TransactionType.IN else "Cash-out"


@dataclass(frozen=True)
class Book:
    """Cashbook domain entity."""

    id: str
    name: str
    created_at: datetime
    description: str = ""
    color: str = DEFAULT_BOOK_COLOR


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``book_id`` is a weak reference: the owning book may have been deleted, in
    which case the transaction simply no longer appears in book-scoped views.
    """

    id: str
    book_id: str
    type: TransactionType
    amount: Decimal
    date: datetime
    created_at: datetime
    category: str
    note: str = ""
    payment_method: str = ""
    is_gst_applied: bool = False
    gst_rate: Decimal = ZERO
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO

    @property
    def total_gst(self) -> Decimal:
        return self.cgst + self.sgst + self.igst


@dataclass(frozen=True)
class Settings:
    """Process-wide ledger settings."""

    gst_enabled: bool = False
    round_up_enabled: bool = False
    private_mode: bool = False
    monthly_budget: Optional[Decimal] = None
    savings_goal: Optional[Decimal] = None


@dataclass(frozen=True)
class GstRequest:
    """Caller's request to apply GST at ``rate`` percent."""

    rate: Decimal


@dataclass(frozen=True)
class GstSplit:
    """GST decomposition of a tax amount."""

    cgst: Decimal
    sgst: Decimal
    igst: Decimal

    @property
    def total(self) -> Decimal:
        return self.cgst + self.sgst + self.igst


@dataclass(frozen=True)
class Balance:
    """Cash-in/cash-out totals for a book."""

    in_total: Decimal = ZERO
    out_total: Decimal = ZERO

    @property
    def balance(self) -> Decimal:
        return self.in_total - self.out_total


@dataclass(frozen=True)
class DailyPoint:
    """Net cash flow of one calendar day."""

    day: date
    label: str
    net: Decimal


@dataclass(frozen=True)
class BudgetStatus:
    """Month-to-date spending measured against the budget and savings goal."""

    month_start: date
    month_end: date
    spent: Decimal
    saved: Decimal
    monthly_budget: Optional[Decimal]
    savings_goal: Optional[Decimal]

    @property
    def remaining_budget(self) -> Optional[Decimal]:
        if self.monthly_budget is None:
            return None
        return self.monthly_budget - self.spent

    @property
    def over_budget(self) -> bool:
        return self.monthly_budget is not None and self.spent > self.monthly_budget

    @property
    def goal_reached(self) -> bool:
        return self.savings_goal is not None and self.saved >= self.savings_goal


@dataclass(frozen=True)
class LoadedState:
    """Everything the persistence layer restores at startup."""

    books: tuple[Book, ...] = ()
    active_book_id: Optional[str] = None
    transactions: tuple[Transaction, ...] = ()
    settings: Settings = field(default_factory=Settings)
