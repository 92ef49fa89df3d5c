"""Utility functions for smartspend."""

from smartspend.utils.date_parser import parse_date
from smartspend.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
