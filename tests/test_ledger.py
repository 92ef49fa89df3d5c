"""Tests for the transaction ledger."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from smartspend.domain.entities import GstRequest, TransactionType
from smartspend.domain.errors import ValidationError
from smartspend.domain.ledger import TransactionLedger, to_decimal


D1 = datetime(2024, 1, 10, 11, 30)
D2 = datetime(2024, 1, 12, 18, 45)


class TestAddTransaction:
    """Tests for recording transactions."""

    def test_minimal_transaction(self, ledger):
        txn = ledger.add_transaction("book-1", "in", Decimal("500"), D1)

        assert txn.id == "txn-1"
        assert txn.book_id == "book-1"
        assert txn.type is TransactionType.IN
        assert txn.amount == Decimal("500")
        assert txn.date == D1.astimezone()
        assert txn.created_at.tzinfo is not None
        assert txn.category == "Cash-in"
        assert txn.is_gst_applied is False
        assert (txn.gst_rate, txn.cgst, txn.sgst, txn.igst) == (0, 0, 0, 0)

    def test_default_category_by_type(self, ledger):
        assert ledger.add_transaction("b", "out", 1, D1).category == "Cash-out"
        assert ledger.add_transaction("b", "in", 1, D1, category="   ").category == "Cash-in"

    def test_optional_fields_are_trimmed(self, ledger):
        txn = ledger.add_transaction(
            "b", TransactionType.OUT, Decimal("40"), D1,
            category=" Tea ", note=" morning ", payment_method=" UPI ",
        )
        assert txn.category == "Tea"
        assert txn.note == "morning"
        assert txn.payment_method == "UPI"

    def test_plain_date_is_local_midnight(self, ledger):
        txn = ledger.add_transaction("b", "in", 1, date(2024, 1, 10))
        assert txn.date == datetime(2024, 1, 10, 0, 0).astimezone()

    def test_float_amount_has_no_binary_artifacts(self, ledger):
        txn = ledger.add_transaction("b", "in", 0.1, D1)
        assert txn.amount == Decimal("0.1")

    def test_zero_amount_allowed(self, ledger):
        assert ledger.add_transaction("b", "in", 0, D1).amount == 0

    def test_negative_amount_rejected(self, ledger):
        with pytest.raises(ValidationError):
            ledger.add_transaction("b", "in", Decimal("-1"), D1)
        assert ledger.transactions == ()

    def test_unknown_type_rejected(self, ledger):
        with pytest.raises(ValidationError):
            ledger.add_transaction("b", "sideways", Decimal("1"), D1)

    def test_gst_applied(self, ledger):
        txn = ledger.add_transaction(
            "b", "out", Decimal("1000"), D1, gst=GstRequest(rate=Decimal("18"))
        )
        assert txn.is_gst_applied is True
        assert txn.gst_rate == Decimal("18")
        assert txn.cgst == Decimal("90")
        assert txn.sgst == Decimal("90")
        assert txn.igst == 0

    def test_zero_gst_rate_records_no_gst(self, ledger):
        txn = ledger.add_transaction("b", "out", Decimal("1000"), D1, gst=GstRequest(rate=0))
        assert txn.is_gst_applied is False
        assert txn.total_gst == 0

    def test_negative_gst_rate_rejected(self, ledger):
        with pytest.raises(ValidationError):
            ledger.add_transaction("b", "out", Decimal("10"), D1, gst=GstRequest(rate=-5))
        assert ledger.transactions == ()

    def test_unknown_book_is_accepted(self, ledger):
        txn = ledger.add_transaction("no-such-book", "in", 1, D1)
        assert ledger.get_transaction(txn.id) == txn

    def test_newest_first(self, ledger):
        first = ledger.add_transaction("b", "in", 1, D2)
        second = ledger.add_transaction("b", "in", 2, D1)
        assert [t.id for t in ledger.transactions] == [second.id, first.id]


class TestDeleteAndClear:
    """Tests for removing transactions."""

    def test_delete_transaction(self, ledger):
        keep = ledger.add_transaction("b", "in", 1, D1)
        drop = ledger.add_transaction("b", "in", 2, D1)
        ledger.delete_transaction(drop.id)
        assert ledger.transactions == (keep,)
        assert ledger.get_transaction(drop.id) is None

    def test_delete_missing_is_noop(self, ledger):
        calls = []
        ledger.on_change = calls.append
        ledger.delete_transaction("missing")
        assert calls == []

    def test_clear_twice(self, ledger):
        ledger.add_transaction("b", "in", 1, D1)
        ledger.clear_all_transactions()
        assert ledger.transactions == ()
        ledger.clear_all_transactions()
        assert ledger.transactions == ()


class TestBalance:
    """Tests for book balances."""

    def test_shop_scenario(self, ledger, registry):
        shop = registry.add_book("Shop")
        ledger.add_transaction(shop.id, "in", Decimal("500"), D1)
        ledger.add_transaction(shop.id, "out", Decimal("120"), D2)

        balance = ledger.get_book_balance(shop.id)
        assert balance.in_total == Decimal("500")
        assert balance.out_total == Decimal("120")
        assert balance.balance == Decimal("380")

    def test_balance_is_exact(self, ledger):
        for _ in range(10):
            ledger.add_transaction("b", "in", Decimal("0.1"), D1)
        ledger.add_transaction("b", "out", Decimal("0.3"), D1)
        assert ledger.get_book_balance("b").balance == Decimal("0.7")

    def test_balance_ignores_other_books(self, ledger):
        ledger.add_transaction("a", "in", Decimal("100"), D1)
        ledger.add_transaction("b", "in", Decimal("7"), D1)
        assert ledger.get_book_balance("a").in_total == Decimal("100")

    def test_unknown_book_has_zero_balance(self, ledger):
        balance = ledger.get_book_balance("missing")
        assert (balance.in_total, balance.out_total, balance.balance) == (0, 0, 0)

    def test_transactions_survive_book_deletion(self, ledger, registry):
        shop = registry.add_book("Shop")
        ledger.add_transaction(shop.id, "in", Decimal("50"), D1)
        registry.delete_book(shop.id)
        assert ledger.get_book_balance(shop.id).balance == Decimal("50")


class TestSettings:
    """Tests for ledger settings."""

    def test_flags(self, ledger):
        ledger.set_gst_enabled(True)
        ledger.set_round_up_enabled(True)
        ledger.set_private_mode(True)
        settings = ledger.settings
        assert settings.gst_enabled and settings.round_up_enabled and settings.private_mode

        ledger.set_private_mode(False)
        assert ledger.settings.private_mode is False

    def test_positive_budget_and_goal(self, ledger):
        ledger.set_monthly_budget(Decimal("15000"))
        ledger.set_savings_goal(2500)
        assert ledger.settings.monthly_budget == Decimal("15000")
        assert ledger.settings.savings_goal == Decimal("2500")

    @pytest.mark.parametrize("value", [0, Decimal("-10"), None])
    def test_non_positive_values_unset(self, ledger, value):
        ledger.set_monthly_budget(Decimal("100"))
        ledger.set_savings_goal(Decimal("100"))
        ledger.set_monthly_budget(value)
        ledger.set_savings_goal(value)
        assert ledger.settings.monthly_budget is None
        assert ledger.settings.savings_goal is None

    def test_every_setter_notifies(self):
        calls = []
        ledger = TransactionLedger(on_change=calls.append)
        ledger.set_gst_enabled(True)
        ledger.set_round_up_enabled(True)
        ledger.set_private_mode(True)
        ledger.set_monthly_budget(1)
        ledger.set_savings_goal(1)
        assert len(calls) == 5


def test_to_decimal_rejects_garbage():
    with pytest.raises(ValidationError):
        to_decimal("abc")
    with pytest.raises(ValidationError):
        to_decimal(Decimal("NaN"))
