"""Tests for the SQLAlchemy ledger repository and its mappers."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerkit.database.factories import create_sqlite_repository
from ledgerkit.database.mappers import account_to_orm, transaction_to_domain, transaction_to_orm
from ledgerkit.domain.entities import (
    Account,
    AccountKind,
    Frequency,
    Goal,
    PaymentMode,
    Recurrence,
    Transaction,
    TransactionType,
)
from ledgerkit.domain.ledger_store import LedgerStore


def card_account():
    return Account(
        id="cc",
        name="Visa",
        kind=AccountKind.CREDIT,
        balance=Decimal("-300.00"),
        opening_balance=Decimal("-300.00"),
        credit_limit=Decimal("3000.00"),
        cutoff_day=25,
        payment_day=5,
        payment_mode=PaymentMode.PAY_IN_FULL,
        linked_account_id="chk",
        statement_balance=Decimal("120.50"),
    )


def expense(txn_id="t1", amount="42.10"):
    return Transaction(
        id=txn_id,
        type=TransactionType.EXPENSE,
        amount=Decimal(amount),
        date=date(2024, 3, 1),
        account_id="cc",
        category="Food",
        subcategory="Supermarkets",
        description="MERCADONA",
        recurrence=Recurrence(Frequency.WEEKLY),
    )


class TestMappers:
    """Tests for domain/ORM conversion."""

    def test_account_enums_are_stored_as_values(self):
        orm = account_to_orm(card_account())

        assert orm.kind == "CREDIT"
        assert orm.payment_mode == "PAY_IN_FULL"

    def test_transaction_without_recurrence(self):
        txn = Transaction(
            id="t9",
            type=TransactionType.INCOME,
            amount=Decimal("5"),
            date=date(2024, 1, 1),
            account_id="chk",
        )

        round_tripped = transaction_to_domain(transaction_to_orm(txn))

        assert round_tripped.recurrence is None
        assert round_tripped.category == "Other"


class TestSQLAlchemyLedgerRepository:
    """Tests against a temporary SQLite file."""

    def test_account_fields_persist(self, temp_db):
        temp_db.save(card_account())

        [loaded] = temp_db.load_accounts()

        assert loaded.kind == AccountKind.CREDIT
        assert loaded.balance == Decimal("-300.00")
        assert loaded.statement_balance == Decimal("120.50")
        assert loaded.payment_mode == PaymentMode.PAY_IN_FULL
        assert loaded.linked_account_id == "chk"
        assert (loaded.cutoff_day, loaded.payment_day) == (25, 5)

    def test_save_replaces_existing_record(self, temp_db):
        temp_db.save(card_account())
        temp_db.save(Account(id="cc", name="Visa Gold", kind=AccountKind.CREDIT, balance=Decimal("-10")))

        [loaded] = temp_db.load_accounts()

        assert loaded.name == "Visa Gold"
        assert loaded.balance == Decimal("-10")

    def test_transaction_fields_persist(self, temp_db):
        temp_db.save(card_account())
        temp_db.save(expense())

        [loaded] = temp_db.load_transactions()

        assert loaded == expense()

    def test_delete_transaction(self, temp_db):
        temp_db.save(card_account())
        temp_db.save(expense("t1"))
        temp_db.save(expense("t2"))

        temp_db.delete_transaction("t1")
        temp_db.delete_transaction("missing")

        assert [t.id for t in temp_db.load_transactions()] == ["t2"]

    def test_goal_fields_persist(self, temp_db):
        goal = Goal(
            id="g1",
            name="Holidays",
            target_amount=Decimal("1500"),
            current_amount=Decimal("200.25"),
            deadline=date(2024, 8, 1),
        )
        temp_db.save(goal)

        assert temp_db.load_goals() == [goal]

    def test_rejects_unknown_records(self, temp_db):
        with pytest.raises(TypeError):
            temp_db.save("not a record")

    def test_store_survives_reconnect(self, temp_db):
        temp_db.save(card_account())
        temp_db.save(expense())
        temp_db.disconnect()

        reopened = create_sqlite_repository(temp_db.database_path)
        store = LedgerStore.from_repository(reopened)
        reopened.disconnect()

        assert store.require_account("cc").statement_balance == Decimal("120.50")
        assert store.require_transaction("t1").amount == Decimal("42.10")


def test_factory_reads_environment(tmp_path, monkeypatch):
    db_file = tmp_path / "env.db"
    monkeypatch.setenv("LEDGERKIT_DB_PATH", str(db_file))

    repository = create_sqlite_repository()
    repository.save(card_account())
    repository.disconnect()

    assert repository.database_url == f"sqlite:///{db_file}"
    assert db_file.exists()
