"""Domain model entities for ledgerkit.

Persisted records (Account, Transaction, Goal) are frozen; the ledger store
replaces them wholesale on every mutation. Import-pipeline records
(CandidateTransaction, ColumnMapping) are mutable working objects that never
leave the pipeline as-is.

Default-value policies:

- ``Account.balance``/``opening_balance``/``statement_balance`` default to 0.
- ``Transaction.category`` defaults to "Other"; ``description`` to "".
- ``Goal.current_amount`` defaults to 0.
- ``CandidateTransaction.date``/``amount``/``type`` are ``None`` when the
  source cell could not be parsed; the validator reports them.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, UTC
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Union

DEFAULT_CATEGORY = "Other"
TRANSFER_CATEGORY = "Transfer"
ZERO = Decimal("0")

# A raw spreadsheet/CSV row keyed by whatever headers the source file uses.
RawRow = Mapping[str, Any]


class AccountKind(str, Enum):
    BANK = "BANK"
    CASH = "CASH"
    INVESTMENT = "INVESTMENT"
    WALLET = "WALLET"
    ASSET = "ASSET"
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class PaymentMode(str, Enum):
    PAY_IN_FULL = "PAY_IN_FULL"
    REVOLVING = "REVOLVING"


class Frequency(str, Enum):
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


@dataclass(frozen=True)
class Recurrence:
    """How often a transaction repeats."""

    frequency: Frequency = Frequency.MONTHLY
    is_recurring: bool = True


@dataclass(frozen=True)
class Account:
    """A named store of value.

    ``balance`` is authoritative for every kind except a linked DEBIT proxy,
    whose transactions land on ``linked_account_id`` instead. For CREDIT
    accounts ``linked_account_id`` is the bank account used to settle the
    cycle and ``statement_balance`` is the debt accrued since the last
    settlement.
    """

    id: str
    name: str
    kind: AccountKind
    balance: Decimal = ZERO
    opening_balance: Decimal = ZERO
    bank_name: Optional[str] = None
    credit_limit: Optional[Decimal] = None
    cutoff_day: Optional[int] = None
    payment_day: Optional[int] = None
    payment_mode: Optional[PaymentMode] = None
    linked_account_id: Optional[str] = None
    statement_balance: Decimal = ZERO
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_proxy(self) -> bool:
        """True when another account absorbs this account's transactions."""
        return self.kind == AccountKind.DEBIT and self.linked_account_id is not None

    @property
    def is_credit(self) -> bool:
        return self.kind == AccountKind.CREDIT


@dataclass(frozen=True)
class Transaction:
    """A single signed money movement; the sign comes from ``type``."""

    id: str
    type: TransactionType
    amount: Decimal
    date: date
    account_id: str
    category: str = DEFAULT_CATEGORY
    subcategory: Optional[str] = None
    description: str = ""
    recurrence: Optional[Recurrence] = None
    notes: Optional[str] = None

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type == TransactionType.INCOME else -self.amount

    @property
    def is_transfer(self) -> bool:
        return self.category == TRANSFER_CATEGORY


@dataclass(frozen=True)
class NewTransaction:
    """Transaction data before the controller assigns an id."""

    type: TransactionType
    amount: Decimal
    date: date
    account_id: str
    category: str = DEFAULT_CATEGORY
    subcategory: Optional[str] = None
    description: str = ""
    recurrence: Optional[Recurrence] = None
    notes: Optional[str] = None

    def with_id(self, transaction_id: str) -> Transaction:
        return Transaction(
            id=transaction_id,
            type=self.type,
            amount=self.amount,
            date=self.date,
            account_id=self.account_id,
            category=self.category,
            subcategory=self.subcategory,
            description=self.description,
            recurrence=self.recurrence,
            notes=self.notes,
        )


@dataclass(frozen=True)
class Goal:
    """Savings goal fed by transfers."""

    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal = ZERO
    deadline: Optional[date] = None


LedgerRecord = Union[Account, Transaction, Goal]


@dataclass(frozen=True)
class CategoryStructure:
    """A category of the caller's taxonomy and its subcategories."""

    name: str
    subcategories: tuple[str, ...] = ()
    type: TransactionType = TransactionType.EXPENSE


@dataclass(frozen=True)
class TemplateColumns:
    """Source column names a bank uses for each canonical field."""

    date: str
    amount: str
    description: str
    category: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class BankTemplate:
    """Static export layout of one bank."""

    id: str
    name: str
    delimiter: str
    date_format: str
    columns: TemplateColumns
    amount_negative_is_expense: bool = True


REQUIRED_MAPPING_FIELDS = ("date", "amount")


@dataclass
class ColumnMapping:
    """User-editable association of canonical fields to file headers."""

    date: Optional[str] = None
    amount: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    type: Optional[str] = None

    @classmethod
    def from_template(cls, template: BankTemplate) -> "ColumnMapping":
        return cls(
            date=template.columns.date,
            amount=template.columns.amount,
            description=template.columns.description,
            category=template.columns.category,
            type=template.columns.type,
        )

    def missing_required(self) -> list[str]:
        """Return required canonical fields that have no column assigned."""
        return [name for name in REQUIRED_MAPPING_FIELDS if not getattr(self, name)]


class RowErrorReason(str, Enum):
    INVALID_DATE = "INVALID_DATE"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    ZERO_AMOUNT = "ZERO_AMOUNT"
    MISSING_DESCRIPTION = "MISSING_DESCRIPTION"


@dataclass(frozen=True)
class RowError:
    """A row that cannot be committed, and why."""

    row_index: int
    reason: RowErrorReason

    @property
    def row_number(self) -> int:
        """Line number in the source file (header is line 1)."""
        return self.row_index + 2


@dataclass
class CandidateTransaction:
    """Working record for one imported row."""

    row_index: int
    date: Optional[date] = None
    amount: Optional[Decimal] = None
    type: Optional[TransactionType] = None
    description: str = ""
    raw_category: Optional[str] = None
    raw_subcategory: Optional[str] = None
    category: str = DEFAULT_CATEGORY
    subcategory: Optional[str] = None
    auto_detected: bool = False
    is_card_payment: bool = False
    errors: list[RowErrorReason] = field(default_factory=list)
    duplicate_of: list[Transaction] = field(default_factory=list)
    duplicate_rows: list[int] = field(default_factory=list)

    @property
    def iso_date(self) -> Optional[str]:
        return self.date.isoformat() if self.date is not None else None

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def is_duplicate(self) -> bool:
        return bool(self.duplicate_of or self.duplicate_rows)

    @property
    def signed_amount(self) -> Decimal:
        if self.amount is None or self.type is None:
            return ZERO
        return self.amount if self.type == TransactionType.INCOME else -self.amount

    def to_new_transaction(self, account_id: str) -> NewTransaction:
        return NewTransaction(
            type=self.type,
            amount=self.amount,
            date=self.date,
            account_id=account_id,
            category=self.category,
            subcategory=self.subcategory,
            description=self.description,
        )


@dataclass(frozen=True)
class DuplicateMatch:
    """Advisory report: candidate ``index`` plausibly repeats these records."""

    index: int
    existing: tuple[Transaction, ...] = ()
    batch_indices: tuple[int, ...] = ()


@dataclass(frozen=True)
class BalanceImpact:
    """Preview of what committing a set of candidates does to a balance."""

    current_balance: Decimal
    income_total: Decimal
    expense_total: Decimal
    net_impact: Decimal
    final_balance: Decimal
