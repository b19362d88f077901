"""Outbox between ledger mutations and the persistence collaborator.

Mutations enqueue intents and return immediately; ``drain`` delivers them
later. Delivery failures are logged and retried on the next drain, up to
``max_attempts``; they never touch the local ledger.
"""

import threading
from collections import deque
from dataclasses import dataclass
from typing import Optional

from ledgerkit.database.base import LedgerRepository
from ledgerkit.domain.entities import LedgerRecord
from ledgerkit.logging_setup import get_logger

_logger = get_logger("ledgerkit.database.outbox")

SAVE = "save"
DELETE = "delete"


@dataclass
class PersistenceIntent:
    """One pending write to the repository."""

    action: str
    record_type: str
    record_id: str
    record: Optional[LedgerRecord] = None
    attempts: int = 0

    @property
    def key(self) -> tuple[str, str]:
        return (self.record_type, self.record_id)


@dataclass(frozen=True)
class DrainResult:
    delivered: int = 0
    failed: int = 0
    dropped: int = 0


class Outbox:
    """FIFO queue of persistence intents."""

    def __init__(self, repository: LedgerRepository, max_attempts: int = 3):
        self.repository = repository
        self.max_attempts = max_attempts
        self._queue: deque[PersistenceIntent] = deque()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._queue)

    def _discard_pending(self, key: tuple[str, str]) -> None:
        self._queue = deque(i for i in self._queue if i.key != key)

    def enqueue_save(self, record: LedgerRecord) -> None:
        """Queue a save; an older pending write of the same record is superseded."""
        intent = PersistenceIntent(SAVE, type(record).__name__, record.id, record)
        with self._lock:
            self._discard_pending(intent.key)
            self._queue.append(intent)

    def enqueue_delete(self, transaction_id: str) -> None:
        intent = PersistenceIntent(DELETE, "Transaction", transaction_id)
        with self._lock:
            self._discard_pending(intent.key)
            self._queue.append(intent)

    def _deliver(self, intent: PersistenceIntent) -> None:
        if intent.action == SAVE:
            self.repository.save(intent.record)
        else:
            self.repository.delete_transaction(intent.record_id)

    def drain(self) -> DrainResult:
        """Deliver every pending intent once, in order."""
        with self._lock:
            batch = list(self._queue)
            self._queue.clear()

        delivered = failed = dropped = 0
        retry: list[PersistenceIntent] = []
        for intent in batch:
            try:
                self._deliver(intent)
                delivered += 1
            except Exception as e:
                intent.attempts += 1
                failed += 1
                if intent.attempts >= self.max_attempts:
                    dropped += 1
                    _logger.error(
                        "Giving up on %s %s %s after %d attempts: %s",
                        intent.action, intent.record_type, intent.record_id, intent.attempts, e,
                    )
                else:
                    retry.append(intent)
                    _logger.warning(
                        "Failed to %s %s %s (attempt %d): %s",
                        intent.action, intent.record_type, intent.record_id, intent.attempts, e,
                    )

        if retry:
            with self._lock:
                # Retries go ahead of anything queued meanwhile, unless superseded.
                newer = {i.key for i in self._queue}
                self._queue.extendleft(reversed([i for i in retry if i.key not in newer]))

        if batch:
            _logger.debug(
                "Outbox drained: %d delivered, %d failed, %d dropped", delivered, failed, dropped
            )
        return DrainResult(delivered=delivered, failed=failed, dropped=dropped)


class OutboxWorker(threading.Thread):
    """Background thread that drains an outbox every ``interval`` seconds."""

    def __init__(self, outbox: Outbox, interval: float = 1.0):
        super().__init__(name="ledgerkit-outbox", daemon=True)
        self.outbox = outbox
        self.interval = interval
        self._stopped = threading.Event()

    def run(self) -> None:
        while not self._stopped.wait(self.interval):
            self.outbox.drain()

    def stop(self) -> DrainResult:
        """Stop the thread and flush what is left."""
        self._stopped.set()
        if self.is_alive():
            self.join()
        return self.outbox.drain()
