"""Shared pytest fixtures for ledgerkit tests."""

import itertools
import logging
import os
import tempfile
from decimal import Decimal
from pathlib import Path

import pytest

from ledgerkit import logging_setup
from ledgerkit.database.base import LedgerRepository
from ledgerkit.database.factories import create_sqlite_repository
from ledgerkit.database.outbox import Outbox
from ledgerkit.domain.entities import AccountKind
from ledgerkit.domain.ledger_controller import LedgerController
from ledgerkit.domain.ledger_store import LedgerStore


class RecordingRepository(LedgerRepository):
    """In-memory repository that records calls and can fail on demand."""

    def __init__(self, failures: int = 0):
        self.failures = failures
        self.saved = []
        self.deleted = []

    def _maybe_fail(self):
        if self.failures > 0:
            self.failures -= 1
            raise RuntimeError("backend unavailable")

    def connect(self):
        pass

    def disconnect(self):
        pass

    def save(self, record):
        self._maybe_fail()
        self.saved.append(record)

    def delete_transaction(self, transaction_id):
        self._maybe_fail()
        self.deleted.append(transaction_id)

    def load_accounts(self):
        return []

    def load_transactions(self):
        return []

    def load_goals(self):
        return []


@pytest.fixture(autouse=True)
def propagate_ledgerkit_logs(monkeypatch):
    """Let caplog see package logs, undoing any CLI logging configuration."""
    logger = logging.getLogger("ledgerkit")
    previous = (logger.propagate, logger.level, list(logger.handlers))
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    yield
    logger.propagate, level, handlers = previous
    logger.setLevel(level)
    logger.handlers[:] = handlers


@pytest.fixture
def temp_db():
    """Create a temporary SQLite repository for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    repository = create_sqlite_repository(database_path=db_path)
    # Store the path for tests that need it
    repository.database_path = db_path
    repository.connect()

    yield repository

    repository.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def recording_repository():
    return RecordingRepository()


@pytest.fixture
def failing_repository():
    """Repository whose next ten calls fail."""
    return RecordingRepository(failures=10)


@pytest.fixture
def outbox(recording_repository):
    return Outbox(recording_repository)


@pytest.fixture
def store():
    return LedgerStore()


@pytest.fixture
def controller(store, outbox):
    """Controller with sequential ids (id1, id2, ...)."""
    counter = itertools.count(1)
    return LedgerController(store, outbox, id_factory=lambda: f"id{next(counter)}")


@pytest.fixture
def bank(controller):
    return controller.create_account("Checking", AccountKind.BANK, Decimal("1000.00"))


@pytest.fixture
def savings(controller):
    return controller.create_account("Savings", AccountKind.BANK, Decimal("0.00"))


@pytest.fixture
def card(controller, bank):
    """Credit card owing 300, settled from the checking account."""
    return controller.create_account(
        "Visa",
        AccountKind.CREDIT,
        Decimal("-300.00"),
        linked_account_id=bank.id,
        credit_limit=Decimal("3000.00"),
    )


@pytest.fixture
def debit_card(controller, bank):
    return controller.create_account("Debit", AccountKind.DEBIT, linked_account_id=bank.id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "ledger.db")


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
