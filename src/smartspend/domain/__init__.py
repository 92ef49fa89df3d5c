"""Domain layer for smartspend application."""

from smartspend.domain.books import BookRegistry
from smartspend.domain.ledger import TransactionLedger
from smartspend.domain.aggregation import AggregationEngine
from smartspend.domain.tax import split

__all__ = [
    "BookRegistry",
    "TransactionLedger",
    "AggregationEngine",
    "split",
]
