"""Persistence adapter between the in-memory stores and a BlobStore.

In-memory state is the source of truth. Saves write full snapshots and never
raise into the caller: failures are logged, handed to ``on_error`` and left
on the returned future.
"""

from concurrent.futures import Future, ThreadPoolExecutor, wait
from datetime import datetime
from typing import Callable, Optional

import structlog

from smartspend.domain.books import BookRegistry
from smartspend.domain.entities import LoadedState, Settings
from smartspend.domain.errors import PersistenceError, store_failure
from smartspend.domain.ledger import TransactionLedger
from smartspend.storage.base import BlobStore
from smartspend.storage.snapshots import (
    BOOKS_KEY,
    TRANSACTIONS_KEY,
    SnapshotFormatError,
    decode_books,
    decode_transactions,
    encode_books,
    encode_transactions,
)
from smartspend.utils.date_parser import local_now

logger = structlog.get_logger(__name__)


class PersistenceAdapter:
    """Load and save ledger snapshots through a BlobStore."""

    def __init__(
        self,
        store: BlobStore,
        background: bool = False,
        on_error: Optional[Callable[[PersistenceError], object]] = None,
        clock: Callable[[], datetime] = local_now,
    ):
        """Initialize persistence adapter.

        Args:
            store: Durable blob store
            background: If True, writes run on a single worker thread in
                submission order; otherwise they run inline
            on_error: Called with every PersistenceError
            clock: Fallback timestamp for snapshot entries missing one
        """
        self.store = store
        self.on_error = on_error
        self.clock = clock
        self._executor: Optional[ThreadPoolExecutor] = None
        if background:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="smartspend-save"
            )
        self._pending: list[Future] = []

    def _report(self, error: PersistenceError) -> None:
        logger.warning("persistence_error", error=str(error))
        if self.on_error is not None:
            self.on_error(error)

    # Loading
    def _load_blob(self, key: str) -> Optional[bytes]:
        try:
            return self.store.load(key)
        except PersistenceError as e:
            self._report(e)
            return None
        except Exception as e:
            self._report(PersistenceError(store_failure("load", key, e)))
            return None

    def load_state(self) -> LoadedState:
        """Read both snapshots, defaulting whatever is missing or unreadable."""
        now = self.clock()
        books, active_book_id = [], None
        transactions, settings = [], None

        data = self._load_blob(BOOKS_KEY)
        if data is not None:
            try:
                books, active_book_id = decode_books(data, now)
            except SnapshotFormatError as e:
                self._report(PersistenceError(store_failure("decode", BOOKS_KEY, e)))

        data = self._load_blob(TRANSACTIONS_KEY)
        if data is not None:
            try:
                transactions, settings = decode_transactions(data, now)
            except SnapshotFormatError as e:
                self._report(PersistenceError(store_failure("decode", TRANSACTIONS_KEY, e)))

        logger.info(
            "state_loaded",
            books=len(books),
            transactions=len(transactions),
            active_book_id=active_book_id,
        )
        return LoadedState(
            books=tuple(books),
            active_book_id=active_book_id,
            transactions=tuple(transactions),
            settings=settings or Settings(),
        )

    # Saving
    def _write_blob(self, key: str, data: bytes) -> None:
        try:
            self.store.save(key, data)
        except PersistenceError as e:
            self._report(e)
            raise
        except Exception as e:
            error = PersistenceError(store_failure("save", key, e))
            self._report(error)
            raise error from e
        logger.debug("snapshot_saved", key=key, size=len(data))

    def _write(self, key: str, data: bytes) -> Future:
        if self._executor is not None:
            future = self._executor.submit(self._write_blob, key, data)
            self._pending = [f for f in self._pending if not f.done()]
            self._pending.append(future)
            return future

        done: Future = Future()
        try:
            self._write_blob(key, data)
        except PersistenceError as e:
            done.set_exception(e)
        else:
            done.set_result(None)
        return done

    def save_books(self, registry: BookRegistry) -> Future:
        """Write the book registry snapshot."""
        return self._write(BOOKS_KEY, encode_books(registry.books, registry.active_book_id))

    def save_transactions(self, ledger: TransactionLedger) -> Future:
        """Write the transaction ledger snapshot."""
        return self._write(
            TRANSACTIONS_KEY, encode_transactions(ledger.transactions, ledger.settings)
        )

    def save_state(
        self, registry: BookRegistry, ledger: TransactionLedger
    ) -> tuple[Future, Future]:
        """Write both snapshots."""
        return self.save_books(registry), self.save_transactions(ledger)

    def flush(self, timeout: Optional[float] = None) -> None:
        """Wait for background writes issued so far."""
        pending, self._pending = self._pending, []
        if pending:
            wait(pending, timeout=timeout)

    def close(self) -> None:
        """Flush outstanding writes and release the store."""
        self.flush()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        self.store.close()
