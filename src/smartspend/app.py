"""Application wiring: build the services around a blob store."""

from dataclasses import dataclass
from typing import Callable, Optional

from smartspend.domain.aggregation import AggregationEngine
from smartspend.domain.books import BookRegistry
from smartspend.domain.errors import PersistenceError
from smartspend.domain.ledger import TransactionLedger
from smartspend.storage.base import BlobStore
from smartspend.storage.persistence import PersistenceAdapter


@dataclass
class SmartSpendApp:
    """The services of one session, sharing a persistence adapter."""

    registry: BookRegistry
    ledger: TransactionLedger
    aggregation: AggregationEngine
    persistence: PersistenceAdapter

    def clear_everything(self) -> None:
        """Delete all books and all transactions."""
        self.registry.clear_all_books()
        self.ledger.clear_all_transactions()

    def close(self) -> None:
        self.persistence.close()


def bootstrap(
    store: BlobStore,
    background: bool = False,
    on_error: Optional[Callable[[PersistenceError], object]] = None,
) -> SmartSpendApp:
    """Load persisted state and build the services.

    Loading completes before this returns, so queries never see a
    half-loaded state. Every later mutation saves the owning store's
    snapshot.

    Args:
        store: Durable blob store
        background: Run saves on a worker thread instead of inline
        on_error: Called with persistence failures

    Returns:
        SmartSpendApp with registry, ledger and aggregation engine
    """
    persistence = PersistenceAdapter(store, background=background, on_error=on_error)
    state = persistence.load_state()

    registry = BookRegistry(
        books=state.books,
        active_book_id=state.active_book_id,
        on_change=persistence.save_books,
    )
    ledger = TransactionLedger(
        transactions=state.transactions,
        settings=state.settings,
        on_change=persistence.save_transactions,
    )
    return SmartSpendApp(
        registry=registry,
        ledger=ledger,
        aggregation=AggregationEngine(ledger),
        persistence=persistence,
    )
