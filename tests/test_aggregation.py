"""Tests for the aggregation engine."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from smartspend.domain.aggregation import WEEKDAY_LABELS
from smartspend.domain.entities import TransactionType
from smartspend.domain.errors import ValidationError


@pytest.fixture
def populated(ledger):
    """A ledger with entries across several days in two books."""
    entries = [
        ("shop", "in", "500", datetime(2024, 1, 10, 9, 0)),
        ("shop", "out", "120", datetime(2024, 1, 10, 23, 59, 59, 999000)),
        ("shop", "in", "75.50", datetime(2024, 1, 12, 0, 0)),
        ("shop", "out", "30", datetime(2024, 1, 14, 13, 0)),
        ("shop", "in", "1000", datetime(2024, 1, 20, 8, 0)),
        ("home", "out", "999", datetime(2024, 1, 12, 12, 0)),
    ]
    for book_id, txn_type, amount, when in entries:
        ledger.add_transaction(book_id, txn_type, Decimal(amount), when)
    return ledger


class TestFilter:
    """Tests for AggregationEngine.filter."""

    def test_no_filters_returns_book_sorted_by_date(self, populated, aggregation):
        result = aggregation.filter("shop")
        assert len(result) == 5
        assert all(txn.book_id == "shop" for txn in result)
        assert [txn.date for txn in result] == sorted((t.date for t in result), reverse=True)

    def test_sorted_by_date_not_insertion(self, ledger, aggregation):
        older = ledger.add_transaction("b", "in", 1, datetime(2024, 1, 1))
        newer = ledger.add_transaction("b", "in", 1, datetime(2024, 2, 1))
        backdated = ledger.add_transaction("b", "in", 1, datetime(2023, 12, 1))
        assert aggregation.filter("b") == [newer, older, backdated]

    def test_type_filter(self, populated, aggregation):
        result = aggregation.filter("shop", type="in")
        assert [txn.amount for txn in result] == [Decimal("1000"), Decimal("75.50"), Decimal("500")]
        assert all(txn.type is TransactionType.IN for txn in result)

    def test_type_filter_accepts_enum(self, populated, aggregation):
        assert len(aggregation.filter("shop", type=TransactionType.OUT)) == 2

    def test_invalid_type_filter(self, populated, aggregation):
        with pytest.raises(ValidationError):
            aggregation.filter("shop", type="both")

    def test_date_bounds_are_whole_days(self, populated, aggregation):
        result = aggregation.filter("shop", from_date=date(2024, 1, 10), to_date=date(2024, 1, 12))
        amounts = sorted(txn.amount for txn in result)
        assert amounts == [Decimal("75.50"), Decimal("120"), Decimal("500")]

    def test_from_date_only(self, populated, aggregation):
        result = aggregation.filter("shop", from_date=date(2024, 1, 14))
        assert [txn.amount for txn in result] == [Decimal("1000"), Decimal("30")]

    def test_to_date_only(self, populated, aggregation):
        result = aggregation.filter("shop", to_date=date(2024, 1, 10))
        assert sorted(txn.amount for txn in result) == [Decimal("120"), Decimal("500")]

    def test_datetime_bounds_use_their_day(self, populated, aggregation):
        result = aggregation.filter(
            "shop",
            from_date=datetime(2024, 1, 10, 22, 0),
            to_date=datetime(2024, 1, 10, 1, 0),
        )
        assert len(result) == 2

    def test_combined_filters(self, populated, aggregation):
        result = aggregation.filter(
            "shop", type="out", from_date=date(2024, 1, 11), to_date=date(2024, 1, 31)
        )
        assert [txn.amount for txn in result] == [Decimal("30")]

    def test_unknown_book(self, populated, aggregation):
        assert aggregation.filter("missing") == []


class TestRecent:
    """Tests for AggregationEngine.recent."""

    def test_recent_truncates(self, populated, aggregation):
        recent = aggregation.recent("shop", 2)
        assert recent == aggregation.filter("shop")[:2]
        assert recent[0].amount == Decimal("1000")

    def test_recent_more_than_available(self, populated, aggregation):
        assert len(aggregation.recent("shop", 50)) == 5

    def test_recent_zero(self, populated, aggregation):
        assert aggregation.recent("shop", 0) == []


class TestDailySeries:
    """Tests for AggregationEngine.daily_series."""

    def test_seven_days_oldest_first(self, populated, aggregation):
        series = aggregation.daily_series("shop", 7, date(2024, 1, 14))

        assert len(series) == 7
        assert [point.day for point in series] == [
            date(2024, 1, 8) + timedelta(days=i) for i in range(7)
        ]
        nets = {point.day: point.net for point in series}
        assert nets[date(2024, 1, 10)] == Decimal("380")
        assert nets[date(2024, 1, 12)] == Decimal("75.50")
        assert nets[date(2024, 1, 14)] == Decimal("-30")
        assert nets[date(2024, 1, 8)] == 0

    def test_excludes_days_outside_window(self, populated, aggregation):
        series = aggregation.daily_series("shop", 7, date(2024, 1, 14))
        assert sum(point.net for point in series) == Decimal("425.50")

    def test_labels(self, populated, aggregation):
        series = aggregation.daily_series("shop", 7, date(2024, 1, 14))
        # 2024-01-08 is a Monday
        assert [point.label for point in series] == list(WEEKDAY_LABELS)

    def test_other_books_ignored(self, populated, aggregation):
        series = aggregation.daily_series("home", 1, date(2024, 1, 12))
        assert series[0].net == Decimal("-999")

    def test_anchor_accepts_datetime(self, populated, aggregation):
        series = aggregation.daily_series("shop", 3, datetime(2024, 1, 12, 17, 0))
        assert series[-1].day == date(2024, 1, 12)

    def test_default_anchor_is_today(self, ledger, aggregation):
        ledger.add_transaction("b", "in", Decimal("5"), datetime.now())
        series = aggregation.daily_series("b", 7)
        assert series[-1].day == date.today()
        assert series[-1].net == Decimal("5")

    def test_days_must_be_positive(self, aggregation):
        with pytest.raises(ValidationError):
            aggregation.daily_series("b", 0, date(2024, 1, 1))

    @pytest.mark.parametrize("days", [10**9, 10**12])
    def test_days_reaching_before_year_one(self, aggregation, days):
        with pytest.raises(ValidationError, match="starts before"):
            aggregation.daily_series("b", days, date(2024, 1, 1))


class TestTotalsAndBudget:
    """Tests for period totals and budget status."""

    def test_period_totals(self, populated, aggregation):
        totals = aggregation.period_totals("shop", date(2024, 1, 10), date(2024, 1, 14))
        assert totals.in_total == Decimal("575.50")
        assert totals.out_total == Decimal("150")

    def test_budget_status(self, populated, ledger, aggregation):
        ledger.set_monthly_budget(Decimal("100"))
        ledger.set_savings_goal(Decimal("1000"))
        ledger.add_transaction("shop", "out", Decimal("50"), datetime(2024, 2, 1, 10, 0))

        status = aggregation.budget_status("shop", date(2024, 1, 31))

        assert status.month_start == date(2024, 1, 1)
        assert status.month_end == date(2024, 1, 31)
        assert status.spent == Decimal("150")
        assert status.saved == Decimal("1425.50")
        assert status.over_budget is True
        assert status.goal_reached is True

    def test_budget_status_unset(self, populated, aggregation):
        status = aggregation.budget_status("shop", date(2024, 1, 15))
        assert status.monthly_budget is None
        assert status.savings_goal is None
        assert status.remaining_budget is None
