"""Ledger controller: the only writer of the ledger store.

Every mutation runs the same sequence: validate inputs, compute balance
deltas, apply them to the affected accounts, apply the record change, then
queue the changed records for the persistence collaborator. Validation
happens before anything is touched, so a failing call leaves the store
exactly as it was; persistence failures never roll back local state.
"""

from __future__ import annotations

import uuid
from collections import defaultdict
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from ledgerkit.domain import errors
from ledgerkit.domain.entities import (
    Account,
    AccountKind,
    Goal,
    LedgerRecord,
    NewTransaction,
    Transaction,
    TransactionType,
    TRANSFER_CATEGORY,
    ZERO,
)
from ledgerkit.domain.errors import ConflictError, SettlementError, ValidationError
from ledgerkit.domain.ledger_store import LedgerStore
from ledgerkit.logging_setup import get_logger

if TYPE_CHECKING:
    from ledgerkit.database.outbox import Outbox

_logger = get_logger("ledgerkit.domain.ledger_controller")

# account id -> [balance delta, statement delta]
Deltas = dict[str, list[Decimal]]


def new_id() -> str:
    return uuid.uuid4().hex[:12]


class LedgerController:
    """Atomic multi-record mutations on top of a ledger store."""

    def __init__(
        self,
        store: LedgerStore,
        outbox: Optional[Outbox] = None,
        *,
        expense_alert_threshold: Optional[Decimal] = None,
        id_factory: Callable[[], str] = new_id,
    ):
        """Initialize the controller.

        Args:
            store: Ledger store to mutate
            outbox: Where changed records are queued; None disables persistence
            expense_alert_threshold: Expenses above this amount log a warning
            id_factory: Generates ids for new records
        """
        self.store = store
        self.outbox = outbox
        self.expense_alert_threshold = expense_alert_threshold
        self.id_factory = id_factory

    # Internals
    def _persist(self, *records: LedgerRecord) -> None:
        if self.outbox is None:
            return
        for record in records:
            self.outbox.enqueue_save(record)

    def _check_new(self, data: NewTransaction | Transaction) -> None:
        if not isinstance(data.type, TransactionType):
            raise ValidationError(f"Invalid transaction type: {data.type!r}")
        if not isinstance(data.amount, Decimal) or not data.amount.is_finite():
            raise ValidationError(f"Amount must be a finite Decimal (got {data.amount!r})")
        if data.amount <= ZERO:
            raise ValidationError(errors.non_positive_amount(data.amount))
        if not isinstance(data.date, date):
            raise ValidationError(f"Invalid transaction date: {data.date!r}")
        if not data.category:
            raise ValidationError("Category cannot be empty")
        self.store.require_account(data.account_id)

    def _effects(self, txn: Transaction | NewTransaction, direction: int, deltas: Deltas) -> None:
        """Accumulate ``txn``'s effect (``direction`` +1 apply, -1 reverse)."""
        account = self.store.require_account(txn.account_id)
        holder = self.store.balance_holder(account.id)
        signed = txn.amount if txn.type == TransactionType.INCOME else -txn.amount
        deltas[holder][0] += direction * signed

        # Card cycle debt follows purchases and refunds, not payments or transfers.
        if account.is_credit and txn.category != TRANSFER_CATEGORY:
            deltas[account.id][1] -= direction * signed

    def _apply(self, deltas: Deltas) -> list[Account]:
        changed = []
        for account_id, (balance_delta, statement_delta) in deltas.items():
            if balance_delta == ZERO and statement_delta == ZERO:
                continue
            changed.append(self.store.apply_delta(account_id, balance_delta, statement_delta))
        return changed

    @staticmethod
    def _new_deltas() -> Deltas:
        return defaultdict(lambda: [ZERO, ZERO])

    def _alert_if_large(self, txn: Transaction) -> None:
        threshold = self.expense_alert_threshold
        if threshold is not None and txn.type == TransactionType.EXPENSE and txn.amount > threshold:
            _logger.warning(
                "Expense of %s on account %s exceeds alert threshold %s",
                txn.amount, txn.account_id, threshold,
            )

    # Accounts and goals
    def create_account(
        self,
        name: str,
        kind: AccountKind = AccountKind.BANK,
        balance: Decimal = ZERO,
        **fields,
    ) -> Account:
        """Create an account whose opening balance is ``balance``.

        Extra keyword arguments set kind-specific fields (``linked_account_id``,
        ``credit_limit``, ``cutoff_day``, ``payment_day``, ``payment_mode``,
        ``bank_name``, ``statement_balance``).

        Raises:
            ValidationError: If the name is empty or a day is out of range
            ConflictError: If an account with the same name exists
            NotFoundError: If the linked account doesn't exist
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name cannot be empty")
        if any(a.name.lower() == name.lower() for a in self.store.list_accounts()):
            raise ConflictError(errors.duplicate_account_name(name))
        for day_field in ("cutoff_day", "payment_day"):
            day = fields.get(day_field)
            if day is not None and not 1 <= day <= 31:
                raise ValidationError(f"{day_field} must be between 1 and 31")

        linked = fields.get("linked_account_id")
        if linked is not None:
            self.store.require_account(linked)
            if kind == AccountKind.DEBIT and self.store.require_account(linked).is_proxy:
                raise ValidationError("A debit card cannot be linked to another debit card")

        account = Account(
            id=self.id_factory(),
            name=name,
            kind=kind,
            balance=balance,
            opening_balance=balance,
            **fields,
        )
        self.store.put_account(account)
        self._persist(account)
        _logger.info("Created %s account '%s' (%s)", kind.value, name, account.id)
        return account

    def create_goal(
        self, name: str, target_amount: Decimal, deadline: Optional[date] = None
    ) -> Goal:
        if target_amount <= ZERO:
            raise ValidationError(errors.non_positive_amount(target_amount))
        goal = Goal(id=self.id_factory(), name=name, target_amount=target_amount, deadline=deadline)
        self.store.put_goal(goal)
        self._persist(goal)
        _logger.info("Created goal '%s' (%s)", name, goal.id)
        return goal

    # Transactions
    def add_transaction(self, data: NewTransaction) -> Transaction:
        """Create one transaction and apply its balance effect.

        Raises:
            ValidationError: If the data is invalid
            NotFoundError: If the account doesn't exist
        """
        return self.add_transactions([data])[0]

    def check_transactions(self, batch: Sequence[NewTransaction]) -> None:
        """Validate a batch without touching the store.

        Raises:
            ValidationError: If any item is invalid
            NotFoundError: If an item's account doesn't exist
        """
        for data in batch:
            self._check_new(data)

    def add_transactions(self, batch: Sequence[NewTransaction]) -> list[Transaction]:
        """Create several transactions as one mutation.

        Either every transaction is added or, if any fails validation, none
        is. Balance deltas are aggregated per account and applied once.
        """
        self.check_transactions(batch)

        txns = [data.with_id(self.id_factory()) for data in batch]
        deltas = self._new_deltas()
        for txn in txns:
            self._effects(txn, +1, deltas)

        changed = self._apply(deltas)
        for txn in txns:
            self.store.put_transaction(txn)
            self._alert_if_large(txn)

        self._persist(*changed, *txns)
        if len(txns) == 1:
            txn = txns[0]
            _logger.info(
                "Added %s of %s on account %s (%s)", txn.type.value, txn.amount, txn.account_id, txn.id
            )
        elif txns:
            _logger.info("Added %d transactions", len(txns))
        return txns

    def edit_transaction(self, updated: Transaction) -> None:
        """Replace a transaction, reversing the old effect before applying the new one.

        Raises:
            NotFoundError: If the transaction or its new account doesn't exist
            ValidationError: If the new data is invalid
        """
        old = self.store.require_transaction(updated.id)
        self._check_new(updated)

        deltas = self._new_deltas()
        self._effects(old, -1, deltas)
        self._effects(updated, +1, deltas)

        changed = self._apply(deltas)
        self.store.put_transaction(updated)
        self._persist(*changed, updated)
        _logger.info("Edited transaction %s", updated.id)

    def delete_transaction(self, transaction_id: str) -> None:
        """Reverse a transaction's effect once and remove it.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        txn = self.store.require_transaction(transaction_id)

        deltas = self._new_deltas()
        self._effects(txn, -1, deltas)

        changed = self._apply(deltas)
        self.store.remove_transaction(transaction_id)
        self._persist(*changed)
        if self.outbox is not None:
            self.outbox.enqueue_delete(transaction_id)
        _logger.info("Deleted transaction %s", transaction_id)

    # Transfers
    def transfer(
        self,
        from_id: str,
        to_id: str,
        amount: Decimal,
        on_date: date,
        goal_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> tuple[Transaction, Transaction]:
        """Move money between two accounts as a pair of Transfer transactions.

        Returns:
            Tuple of (outgoing EXPENSE leg, incoming INCOME leg)

        Raises:
            ValidationError: If the amount is not positive or the accounts match
            NotFoundError: If an account or the goal doesn't exist
        """
        source = self.store.require_account(from_id)
        destination = self.store.require_account(to_id)
        if from_id == to_id:
            raise ValidationError("Cannot transfer an account to itself")
        goal = self.store.require_goal(goal_id) if goal_id is not None else None

        outgoing = Transaction(
            id=self.id_factory(),
            type=TransactionType.EXPENSE,
            amount=amount,
            date=on_date,
            account_id=from_id,
            category=TRANSFER_CATEGORY,
            subcategory="Between accounts",
            description=description or f"Transfer to {destination.name}",
        )
        incoming = Transaction(
            id=self.id_factory(),
            type=TransactionType.INCOME,
            amount=amount,
            date=on_date,
            account_id=to_id,
            category=TRANSFER_CATEGORY,
            subcategory="From another account",
            description=description or f"Received from {source.name}",
        )
        self._check_new(outgoing)
        self._check_new(incoming)

        deltas = self._new_deltas()
        self._effects(outgoing, +1, deltas)
        self._effects(incoming, +1, deltas)

        changed = self._apply(deltas)
        self.store.put_transaction(outgoing)
        self.store.put_transaction(incoming)
        self._persist(*changed, outgoing, incoming)

        if goal is not None:
            goal = replace(goal, current_amount=goal.current_amount + amount)
            self.store.put_goal(goal)
            self._persist(goal)
            _logger.info("Goal '%s' increased by %s", goal.name, amount)

        _logger.info("Transferred %s from %s to %s", amount, source.name, destination.name)
        return outgoing, incoming

    def settle_credit_cycle(
        self, card_id: str, on_date: Optional[date] = None
    ) -> Optional[tuple[Transaction, Transaction]]:
        """Pay the card's current cycle debt from its linked bank account.

        Returns:
            The transfer pair, or None when there is no cycle debt to settle

        Raises:
            ValidationError: If the account is not a credit card
            SettlementError: If the card has no linked bank account
            NotFoundError: If the card or its linked account doesn't exist
        """
        card = self.store.require_account(card_id)
        if not card.is_credit:
            raise ValidationError(f"Account '{card.name}' is not a credit card")

        amount = card.statement_balance
        if amount <= ZERO:
            _logger.info("Card '%s' has no cycle debt to settle", card.name)
            return None
        if card.linked_account_id is None:
            raise SettlementError(errors.missing_linked_account(card.name))

        legs = self.transfer(
            card.linked_account_id,
            card.id,
            amount,
            on_date or date.today(),
            description=f"Cycle settlement {card.name}",
        )
        settled = replace(self.store.require_account(card.id), statement_balance=ZERO)
        self.store.put_account(settled)
        self._persist(settled)
        _logger.info("Settled cycle of %s for card '%s'", amount, card.name)
        return legs
