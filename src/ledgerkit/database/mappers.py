"""Mapper functions to convert between domain entities and SQLAlchemy models.

This layer isolates the conversion logic, so the ledger entities stay
independent of the database schema.
"""

from decimal import Decimal

from ledgerkit.domain import entities as domain
from ledgerkit.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
    Goal as ORMGoal,
)


def _decimal(value) -> Decimal:
    return Decimal(value) if value is not None else domain.ZERO


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        kind=domain.AccountKind(orm_account.kind),
        balance=_decimal(orm_account.balance),
        opening_balance=_decimal(orm_account.opening_balance),
        bank_name=orm_account.bank_name,
        credit_limit=Decimal(orm_account.credit_limit) if orm_account.credit_limit is not None else None,
        cutoff_day=orm_account.cutoff_day,
        payment_day=orm_account.payment_day,
        payment_mode=domain.PaymentMode(orm_account.payment_mode) if orm_account.payment_mode else None,
        linked_account_id=orm_account.linked_account_id,
        statement_balance=_decimal(orm_account.statement_balance),
        created_at=orm_account.created_at,
    )


def account_to_orm(account: domain.Account) -> ORMAccount:
    """Convert domain Account entity to a detached SQLAlchemy model."""
    return ORMAccount(
        id=account.id,
        name=account.name,
        kind=account.kind.value,
        balance=account.balance,
        opening_balance=account.opening_balance,
        bank_name=account.bank_name,
        credit_limit=account.credit_limit,
        cutoff_day=account.cutoff_day,
        payment_day=account.payment_day,
        payment_mode=account.payment_mode.value if account.payment_mode else None,
        linked_account_id=account.linked_account_id,
        statement_balance=account.statement_balance,
        created_at=account.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    recurrence = None
    if orm_transaction.frequency:
        recurrence = domain.Recurrence(
            frequency=domain.Frequency(orm_transaction.frequency),
            is_recurring=orm_transaction.is_recurring,
        )
    return domain.Transaction(
        id=orm_transaction.id,
        type=domain.TransactionType(orm_transaction.type),
        amount=_decimal(orm_transaction.amount),
        date=orm_transaction.date,
        account_id=orm_transaction.account_id,
        category=orm_transaction.category,
        subcategory=orm_transaction.subcategory,
        description=orm_transaction.description or "",
        recurrence=recurrence,
        notes=orm_transaction.notes,
    )


def transaction_to_orm(txn: domain.Transaction) -> ORMTransaction:
    """Convert domain Transaction entity to a detached SQLAlchemy model."""
    return ORMTransaction(
        id=txn.id,
        type=txn.type.value,
        amount=txn.amount,
        date=txn.date,
        account_id=txn.account_id,
        category=txn.category,
        subcategory=txn.subcategory,
        description=txn.description,
        frequency=txn.recurrence.frequency.value if txn.recurrence else None,
        is_recurring=bool(txn.recurrence and txn.recurrence.is_recurring),
        notes=txn.notes,
    )


def goal_to_domain(orm_goal: ORMGoal) -> domain.Goal:
    """Convert SQLAlchemy Goal model to domain Goal entity."""
    return domain.Goal(
        id=orm_goal.id,
        name=orm_goal.name,
        target_amount=_decimal(orm_goal.target_amount),
        current_amount=_decimal(orm_goal.current_amount),
        deadline=orm_goal.deadline,
    )


def goal_to_orm(goal: domain.Goal) -> ORMGoal:
    """Convert domain Goal entity to a detached SQLAlchemy model."""
    return ORMGoal(
        id=goal.id,
        name=goal.name,
        target_amount=goal.target_amount,
        current_amount=goal.current_amount,
        deadline=goal.deadline,
    )
