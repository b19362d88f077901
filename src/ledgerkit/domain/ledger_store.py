"""Authoritative in-memory ledger: accounts, transactions and goals."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional

from ledgerkit.domain import errors
from ledgerkit.domain.entities import Account, Goal, Transaction, ZERO
from ledgerkit.domain.errors import NotFoundError

if TYPE_CHECKING:
    from ledgerkit.database.base import LedgerRepository


class LedgerStore:
    """Records plus the primitives the controller mutates them with.

    Only the ledger controller should call the mutating methods; anything
    else reads.
    """

    def __init__(
        self,
        accounts: Iterable[Account] = (),
        transactions: Iterable[Transaction] = (),
        goals: Iterable[Goal] = (),
    ):
        self._accounts: dict[str, Account] = {a.id: a for a in accounts}
        self._transactions: dict[str, Transaction] = {t.id: t for t in transactions}
        self._goals: dict[str, Goal] = {g.id: g for g in goals}

    @classmethod
    def from_repository(cls, repository: LedgerRepository) -> LedgerStore:
        """Hydrate a store from persisted records."""
        return cls(
            accounts=repository.load_accounts(),
            transactions=repository.load_transactions(),
            goals=repository.load_goals(),
        )

    # Account operations
    def get_account(self, account_id: str) -> Optional[Account]:
        return self._accounts.get(account_id)

    def require_account(self, account_id: str) -> Account:
        account = self._accounts.get(account_id)
        if account is None:
            raise NotFoundError(errors.account_not_found(account_id))
        return account

    def list_accounts(self) -> list[Account]:
        return sorted(self._accounts.values(), key=lambda a: a.name.lower())

    def put_account(self, account: Account) -> None:
        self._accounts[account.id] = account

    # Transaction operations
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    def require_transaction(self, transaction_id: str) -> Transaction:
        txn = self._transactions.get(transaction_id)
        if txn is None:
            raise NotFoundError(errors.transaction_not_found(transaction_id))
        return txn

    def list_transactions(self, account_id: Optional[str] = None) -> list[Transaction]:
        """List transactions by date, optionally only those owned by an account."""
        txns = self._transactions.values()
        if account_id is not None:
            txns = [t for t in txns if t.account_id == account_id]
        return sorted(txns, key=lambda t: t.date)

    def put_transaction(self, txn: Transaction) -> None:
        self._transactions[txn.id] = txn

    def remove_transaction(self, transaction_id: str) -> Transaction:
        return self._transactions.pop(transaction_id)

    # Goal operations
    def get_goal(self, goal_id: str) -> Optional[Goal]:
        return self._goals.get(goal_id)

    def require_goal(self, goal_id: str) -> Goal:
        goal = self._goals.get(goal_id)
        if goal is None:
            raise NotFoundError(errors.goal_not_found(goal_id))
        return goal

    def list_goals(self) -> list[Goal]:
        return sorted(self._goals.values(), key=lambda g: g.name.lower())

    def put_goal(self, goal: Goal) -> None:
        self._goals[goal.id] = goal

    # Balances
    def balance_holder(self, account_id: str) -> str:
        """Return the id of the account whose balance absorbs ``account_id``'s transactions."""
        account = self.require_account(account_id)
        if account.is_proxy:
            return account.linked_account_id
        return account.id

    def apply_delta(
        self, account_id: str, balance_delta: Decimal, statement_delta: Decimal = ZERO
    ) -> Account:
        """Shift an account's balance (and cycle debt, floored at zero)."""
        account = self.require_account(account_id)
        statement = account.statement_balance
        if statement_delta:
            statement = max(ZERO, statement + statement_delta)
        updated = replace(
            account, balance=account.balance + balance_delta, statement_balance=statement
        )
        self._accounts[account_id] = updated
        return updated

    def expected_balance(self, account_id: str) -> Decimal:
        """Opening balance plus every transaction attributed to the account."""
        account = self.require_account(account_id)
        if account.is_proxy:
            return account.opening_balance
        total = account.opening_balance
        for txn in self._transactions.values():
            owner = self._accounts.get(txn.account_id)
            if owner is None:
                continue
            holder = owner.linked_account_id if owner.is_proxy else owner.id
            if holder == account_id:
                total += txn.signed_amount
        return total

    def verify_balances(self) -> dict[str, tuple[Decimal, Decimal]]:
        """Return ``{account_id: (expected, actual)}`` for every drifted account."""
        drift = {}
        for account in self._accounts.values():
            expected = self.expected_balance(account.id)
            if expected != account.balance:
                drift[account.id] = (expected, account.balance)
        return drift
