"""Tests for identifier generation and GST splitting."""

import random
from decimal import Decimal

import pytest

from smartspend.domain.entities import GstSplit
from smartspend.domain.errors import ValidationError
from smartspend.domain.ids import IdGenerator, make_id, to_base36
from smartspend.domain.tax import split


class TestIdGenerator:
    """Tests for IdGenerator."""

    def test_to_base36(self):
        assert to_base36(0) == "0"
        assert to_base36(35) == "z"
        assert to_base36(36) == "10"
        with pytest.raises(ValueError):
            to_base36(-1)

    def test_id_shape(self):
        generator = IdGenerator(clock=lambda: 1.0, rng=random.Random(1))
        prefix, suffix = generator().split("-")
        assert prefix == to_base36(1000)
        assert len(suffix) == 6

    def test_ids_are_unique(self):
        ids = {make_id() for _ in range(500)}
        assert len(ids) == 500

    def test_prefix_follows_creation_time(self):
        times = iter([1.0, 2.0])
        generator = IdGenerator(clock=lambda: next(times))
        first, second = generator(), generator()
        assert int(first.split("-")[0], 36) < int(second.split("-")[0], 36)


class TestSplit:
    """Tests for the GST split calculator."""

    def test_eighteen_percent(self):
        assert split(Decimal("1000"), Decimal("18")) == GstSplit(
            cgst=Decimal("90"), sgst=Decimal("90"), igst=Decimal("0")
        )

    def test_igst_is_always_zero(self):
        result = split(Decimal("250"), Decimal("28"))
        assert result.igst == 0
        assert result.cgst == result.sgst == Decimal("35")

    def test_fractional_amounts_stay_exact(self):
        result = split(Decimal("99.99"), Decimal("5"))
        assert result.total == Decimal("4.9995")

    def test_zero_rate(self):
        assert split(Decimal("100"), Decimal("0")).total == 0

    def test_accepts_plain_numbers(self):
        assert split(1000, 18).cgst == Decimal("90")

    def test_negative_rate_rejected(self):
        with pytest.raises(ValidationError):
            split(Decimal("100"), Decimal("-1"))

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            split(Decimal("-100"), Decimal("18"))
