"""Shared pytest fixtures for smartspend tests."""

import itertools
import os
import tempfile
from datetime import datetime, timedelta

import pytest

from smartspend.app import bootstrap
from smartspend.domain.aggregation import AggregationEngine
from smartspend.domain.books import BookRegistry
from smartspend.domain.ledger import TransactionLedger
from smartspend.storage.memory import InMemoryBlobStore
from smartspend.storage.persistence import PersistenceAdapter


class StepClock:
    """Clock returning a fixed local instant that advances one second per call."""

    def __init__(self, start: datetime):
        self.current = start.astimezone()

    def __call__(self) -> datetime:
        now = self.current
        self.current += timedelta(seconds=1)
        return now


def sequential_ids(prefix: str):
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


@pytest.fixture
def clock():
    """A deterministic clock starting 2024-01-15 09:00 local time."""
    return StepClock(datetime(2024, 1, 15, 9, 0))


@pytest.fixture
def registry(clock):
    """Create an empty BookRegistry with predictable ids."""
    return BookRegistry(id_factory=sequential_ids("book-"), clock=clock)


@pytest.fixture
def ledger(clock):
    """Create an empty TransactionLedger with predictable ids."""
    return TransactionLedger(id_factory=sequential_ids("txn-"), clock=clock)


@pytest.fixture
def aggregation(ledger):
    """Create an AggregationEngine over the ledger fixture."""
    return AggregationEngine(ledger)


@pytest.fixture
def memory_store():
    """Create an empty in-memory blob store."""
    return InMemoryBlobStore()


@pytest.fixture
def persistence(memory_store):
    """Create a PersistenceAdapter writing inline to the memory store."""
    return PersistenceAdapter(memory_store)


@pytest.fixture
def sample_book(registry):
    """Create a sample book for testing."""
    return registry.add_book("Shop", description="Corner shop", color="#16A34A")


@pytest.fixture
def app(memory_store):
    """Bootstrap the full application over the memory store."""
    application = bootstrap(memory_store)
    yield application
    application.close()


@pytest.fixture
def temp_db_path():
    """Path to a temporary SQLite database file."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    os.unlink(db_path)

    yield db_path

    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
