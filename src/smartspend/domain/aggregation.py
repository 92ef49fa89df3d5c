"""Aggregation domain service: filtered views and time-bucketed series."""

from collections import defaultdict
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

from smartspend.domain.entities import (
    Balance,
    BudgetStatus,
    DailyPoint,
    Transaction,
    TransactionType,
    ZERO,
)
from smartspend.domain.errors import ValidationError
from smartspend.domain.ledger import TransactionLedger, parse_type, totals
from smartspend.utils.date_parser import as_day, local_date, local_now, month_bounds

WEEKDAY_LABELS = ("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su")


def signed_amount(txn: Transaction) -> Decimal:
    """Return the amount with cash-out negated."""
    return txn.amount if txn.type is TransactionType.IN else -txn.amount


class AggregationEngine:
    """Service deriving views and series from a TransactionLedger.

    Everything is computed on demand from the ledger's current state.
    """

    def __init__(self, ledger: TransactionLedger):
        """Initialize aggregation engine.

        Args:
            ledger: Ledger to read transactions and settings from
        """
        self.ledger = ledger

    def filter(
        self,
        book_id: str,
        type: Optional[TransactionType | str] = None,
        from_date: Optional[date | datetime] = None,
        to_date: Optional[date | datetime] = None,
    ) -> list[Transaction]:
        """Filter a book's transactions, newest first by date.

        Date bounds are inclusive calendar days in local time: ``from_date``
        starts at 00:00:00.000 and ``to_date`` ends at 23:59:59.999.

        Args:
            book_id: Book to list
            type: Optional "in" or "out" restriction
            from_date: Optional first day to include
            to_date: Optional last day to include

        Returns:
            Matching transactions sorted by date descending
        """
        txn_type = parse_type(type) if type is not None else None
        start = as_day(from_date)
        end = as_day(to_date)

        matches = []
        for txn in self.ledger.transactions:
            if txn.book_id != book_id:
                continue
            if txn_type is not None and txn.type is not txn_type:
                continue
            day = local_date(txn.date)
            if start is not None and day < start:
                continue
            if end is not None and day > end:
                continue
            matches.append(txn)

        return sorted(matches, key=lambda txn: txn.date, reverse=True)

    def recent(self, book_id: str, n: int) -> list[Transaction]:
        """Return the ``n`` most recent transactions of a book."""
        return self.filter(book_id)[: max(n, 0)]

    def daily_series(
        self,
        book_id: str,
        days: int,
        anchor_date: Optional[date | datetime] = None,
    ) -> list[DailyPoint]:
        """Net cash flow per day for the ``days`` days ending at ``anchor_date``.

        Args:
            book_id: Book to aggregate
            days: Number of calendar days, at least 1
            anchor_date: Last day of the series (defaults to today)

        Returns:
            One DailyPoint per day, oldest first
        """
        if days < 1:
            raise ValidationError(f"Series must span at least one day (got {days})")
        anchor = as_day(anchor_date) or local_date(local_now())
        try:
            first = anchor - timedelta(days=days - 1)
        except OverflowError:
            raise ValidationError(
                f"Series of {days} days ending {anchor} starts before {date.min}"
            )

        net_by_day: dict[date, Decimal] = defaultdict(lambda: ZERO)
        for txn in self.ledger.transactions:
            if txn.book_id != book_id:
                continue
            day = local_date(txn.date)
            if first <= day <= anchor:
                net_by_day[day] += signed_amount(txn)

        series = []
        for offset in range(days):
            day = first + timedelta(days=offset)
            series.append(
                DailyPoint(day=day, label=WEEKDAY_LABELS[day.weekday()], net=net_by_day[day])
            )
        return series

    def period_totals(
        self,
        book_id: str,
        from_date: Optional[date | datetime] = None,
        to_date: Optional[date | datetime] = None,
    ) -> Balance:
        """Cash-in/cash-out totals of a book within a date range."""
        return totals(self.filter(book_id, from_date=from_date, to_date=to_date))

    def budget_status(
        self, book_id: str, anchor_date: Optional[date | datetime] = None
    ) -> BudgetStatus:
        """Measure the anchor month's spending against budget and savings goal."""
        anchor = as_day(anchor_date) or local_date(local_now())
        month_start, month_end = month_bounds(anchor)
        month = self.period_totals(book_id, month_start, month_end)
        settings = self.ledger.settings
        return BudgetStatus(
            month_start=month_start,
            month_end=month_end,
            spent=month.out_total,
            saved=month.balance,
            monthly_budget=settings.monthly_budget,
            savings_goal=settings.savings_goal,
        )
