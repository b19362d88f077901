"""Persistence layer for ledgerkit."""

from ledgerkit.database.base import LedgerRepository
from ledgerkit.database.factories import create_sqlite_repository
from ledgerkit.database.outbox import Outbox, OutboxWorker

__all__ = ["LedgerRepository", "create_sqlite_repository", "Outbox", "OutboxWorker"]
