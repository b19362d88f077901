"""Abstract persistence collaborator interface."""

from abc import ABC, abstractmethod

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerkit.domain.entities import Account, Goal, LedgerRecord, Transaction


class LedgerRepository(ABC):
    """Remote/durable copy of the ledger.

    The in-memory ledger store is authoritative for a running session; a
    repository only receives records after they changed locally.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the backing store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the backing store."""
        pass

    @abstractmethod
    def save(self, record: LedgerRecord) -> None:
        """Insert or replace an account, transaction or goal."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction; deleting a missing one is not an error."""
        pass

    @abstractmethod
    def load_accounts(self) -> list[Account]:
        """Load all accounts."""
        pass

    @abstractmethod
    def load_transactions(self) -> list[Transaction]:
        """Load all transactions."""
        pass

    @abstractmethod
    def load_goals(self) -> list[Goal]:
        """Load all goals."""
        pass
