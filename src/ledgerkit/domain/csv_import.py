"""Statement import: the staged pipeline from raw file to committed transactions.

The orchestrator walks UPLOAD -> TEMPLATE_SELECT -> ACCOUNT_SELECT ->
COLUMN_MAPPING -> PREVIEW -> DONE. Nothing touches the ledger before
:meth:`ImportOrchestrator.commit`; abandoning an import at any earlier step
has no side effects.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from ledgerkit.domain import errors
from ledgerkit.domain.balance_impact import calculate_balance_impact
from ledgerkit.domain.bank_templates import get_bank_template
from ledgerkit.domain.card_payments import CardPaymentClassifier
from ledgerkit.domain.categorizer import Categorizer
from ledgerkit.domain.duplicates import DuplicateDetector
from ledgerkit.domain.entities import (
    BalanceImpact,
    BankTemplate,
    CandidateTransaction,
    CategoryStructure,
    ColumnMapping,
    DuplicateMatch,
    RawRow,
    RowError,
    Transaction,
    TransactionType,
)
from ledgerkit.domain.errors import (
    ConfigurationError,
    InvalidTransitionError,
    ValidationError,
)
from ledgerkit.domain.ledger_controller import LedgerController
from ledgerkit.domain.lexicon import DEFAULT_LEXICON, DEFAULT_TAXONOMY, Lexicon
from ledgerkit.domain.normalizer import RowNormalizer, auto_map_columns
from ledgerkit.domain.validator import validate_candidates
from ledgerkit.logging_setup import get_logger
from ledgerkit.utils.table_reader import SPREADSHEET_SUFFIXES, read_table

_logger = get_logger("ledgerkit.domain.csv_import")


class ImportStep(str, Enum):
    UPLOAD = "UPLOAD"
    TEMPLATE_SELECT = "TEMPLATE_SELECT"
    ACCOUNT_SELECT = "ACCOUNT_SELECT"
    COLUMN_MAPPING = "COLUMN_MAPPING"
    PREVIEW = "PREVIEW"
    DONE = "DONE"


@dataclass(frozen=True)
class PreviewStats:
    total: int
    valid: int
    invalid: int
    duplicates: int
    card_payments: int
    auto_categorized: int


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a commit.

    ``excluded_count`` covers rows left out for failing validation or
    because the user skipped duplicates.
    """

    imported_count: int
    transferred_count: int
    excluded_count: int = 0
    transactions: tuple[Transaction, ...] = ()


def accepted_candidates(
    candidates: Iterable[CandidateTransaction], skip_duplicates: bool = False
) -> list[CandidateTransaction]:
    """Candidates eligible for commit: valid, and not duplicates if skipping them."""
    return [
        c for c in candidates if c.is_valid and not (skip_duplicates and c.is_duplicate)
    ]


def split_card_payments(
    accepted: Iterable[CandidateTransaction], redirect: bool
) -> tuple[list[CandidateTransaction], list[CandidateTransaction]]:
    """Partition accepted candidates into (regular rows, card payment rows).

    Only expense rows are card payments. Without a designated credit account
    (``redirect`` False) every row is regular.
    """
    regular, card_rows = [], []
    for candidate in accepted:
        if redirect and candidate.is_card_payment and candidate.type == TransactionType.EXPENSE:
            card_rows.append(candidate)
        else:
            regular.append(candidate)
    return regular, card_rows


def _check_credit_account(
    controller: LedgerController, account_id: str, credit_card_account_id: str
) -> None:
    card = controller.store.require_account(credit_card_account_id)
    if not card.is_credit:
        raise ValidationError(f"Account '{card.name}' is not a credit card")
    if card.id == account_id:
        raise ValidationError("Card payments cannot be redirected to the account being imported")


def commit_rows(
    controller: LedgerController,
    accepted: Sequence[CandidateTransaction],
    account_id: str,
    credit_card_account_id: Optional[str] = None,
) -> ImportResult:
    """Write accepted candidates to the ledger.

    Card payment rows become transfers from ``account_id`` to the credit
    account, one per row, before the regular rows are added as one batch.
    Every row and account is checked before anything is written. Invalid
    candidates in ``accepted`` are left out.

    Raises:
        NotFoundError: If an account doesn't exist
        ValidationError: If the credit account is not usable for redirection
    """
    controller.store.require_account(account_id)
    if credit_card_account_id is not None:
        _check_credit_account(controller, account_id, credit_card_account_id)

    rows = [c for c in accepted if c.is_valid]
    regular, card_rows = split_card_payments(rows, redirect=credit_card_account_id is not None)

    unredirected = sum(
        1 for c in regular if c.is_card_payment and c.type == TransactionType.EXPENSE
    )
    if unredirected:
        _logger.info(
            "%d card payment row(s) imported as plain expenses; "
            "designate a credit account to record them as transfers",
            unredirected,
        )

    batch = [c.to_new_transaction(account_id) for c in regular]
    # Transfers are written one by one; the batch must be known good first.
    controller.check_transactions(batch)
    for candidate in card_rows:
        if candidate.amount is None or candidate.amount <= 0:
            raise ValidationError(errors.non_positive_amount(candidate.amount))

    created: list[Transaction] = []
    for candidate in card_rows:
        created.extend(
            controller.transfer(
                account_id,
                credit_card_account_id,
                candidate.amount,
                candidate.date,
                description=candidate.description,
            )
        )
    created.extend(controller.add_transactions(batch))

    _logger.info(
        "Imported %d transaction(s) and %d card payment transfer(s) into account %s",
        len(regular), len(card_rows), account_id,
    )
    return ImportResult(
        imported_count=len(regular),
        transferred_count=len(card_rows),
        excluded_count=len(accepted) - len(rows),
        transactions=tuple(created),
    )


@dataclass
class ImportPreview:
    """Full pipeline report for every row, held until commit."""

    account_id: str
    current_balance: Decimal
    candidates: list[CandidateTransaction]
    row_errors: list[RowError] = field(default_factory=list)
    duplicates: list[DuplicateMatch] = field(default_factory=list)

    @property
    def stats(self) -> PreviewStats:
        valid = [c for c in self.candidates if c.is_valid]
        return PreviewStats(
            total=len(self.candidates),
            valid=len(valid),
            invalid=len(self.candidates) - len(valid),
            duplicates=sum(1 for c in valid if c.is_duplicate),
            card_payments=sum(1 for c in valid if c.is_card_payment),
            auto_categorized=sum(1 for c in valid if c.auto_detected),
        )

    def accepted(self, skip_duplicates: bool = False) -> list[CandidateTransaction]:
        return accepted_candidates(self.candidates, skip_duplicates)

    def impact_for(
        self, skip_duplicates: bool = False, credit_card_account_id: Optional[str] = None
    ) -> BalanceImpact:
        """Balance impact of the regular rows a commit with these options would add."""
        regular, _ = split_card_payments(
            self.accepted(skip_duplicates), redirect=credit_card_account_id is not None
        )
        return calculate_balance_impact(regular, self.current_balance)


class ImportOrchestrator:
    """Drive one import through its steps.

    Each action is only valid at one step and raises
    :class:`InvalidTransitionError` elsewhere. ``back()`` returns to the
    previous step; ``cancel()`` discards everything.
    """

    def __init__(
        self,
        controller: LedgerController,
        *,
        lexicon: Lexicon = DEFAULT_LEXICON,
        taxonomy: Iterable[CategoryStructure] = DEFAULT_TAXONOMY,
        duplicate_detector: Optional[DuplicateDetector] = None,
    ):
        self.controller = controller
        self.lexicon = lexicon
        self.categorizer = Categorizer(taxonomy, lexicon)
        self.card_classifier = CardPaymentClassifier(lexicon.card_payment_phrases)
        self.duplicate_detector = duplicate_detector or DuplicateDetector()
        self._reset()

    def _reset(self) -> None:
        self.step = ImportStep.UPLOAD
        self._history: list[ImportStep] = []
        self.file_path: Optional[Path] = None
        self.headers: list[str] = []
        self.rows: list[dict[str, Any]] = []
        self.template: Optional[BankTemplate] = None
        self.account_id: Optional[str] = None
        self.mapping = ColumnMapping()
        self.preview: Optional[ImportPreview] = None
        self.result: Optional[ImportResult] = None

    def _require_step(self, action: str, step: ImportStep) -> None:
        if self.step != step:
            raise InvalidTransitionError(errors.invalid_step(action, self.step.value))

    def _advance(self, step: ImportStep) -> None:
        self._history.append(self.step)
        self.step = step
        _logger.debug("Import moved to %s", step.value)

    # UPLOAD
    def load_rows(self, headers: Sequence[str], rows: Iterable[RawRow]) -> None:
        """Take already-read rows keyed by header."""
        self._require_step("load rows", ImportStep.UPLOAD)
        self.file_path = None
        self.headers = list(headers)
        self.rows = [dict(row) for row in rows]
        _logger.info("Loaded %d row(s) with columns %s", len(self.rows), ", ".join(self.headers))
        self._advance(ImportStep.TEMPLATE_SELECT)

    def load_file(self, file_path: str | Path) -> None:
        """Read a CSV or spreadsheet file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValidationError: If the file type is unsupported or has no header
        """
        self._require_step("load a file", ImportStep.UPLOAD)
        headers, rows = read_table(file_path)
        self.load_rows(headers, rows)
        self.file_path = Path(file_path)

    # TEMPLATE_SELECT
    def select_template(self, template_id: Optional[str] = None) -> ColumnMapping:
        """Choose a bank template, or None to map columns by header keywords.

        Returns:
            The proposed column mapping, editable at the mapping step

        Raises:
            ValidationError: If the template is unknown or no account exists
        """
        self._require_step("select a template", ImportStep.TEMPLATE_SELECT)
        template = None
        if template_id is not None:
            template = get_bank_template(template_id)
            if template is None:
                raise ValidationError(f"Unknown bank template: {template_id}")

        accounts = self.controller.store.list_accounts()
        if not accounts:
            raise ValidationError("Create an account before importing")

        if (
            template is not None
            and self.file_path is not None
            and self.file_path.suffix.lower() not in SPREADSHEET_SUFFIXES
        ):
            self.headers, self.rows = read_table(self.file_path, delimiter=template.delimiter)

        self.template = template
        if template is not None:
            self.mapping = ColumnMapping.from_template(template)
            absent = [
                column
                for column in (self.mapping.date, self.mapping.amount, self.mapping.description)
                if column and column not in self.headers
            ]
            if absent:
                _logger.warning(
                    "File has no column(s) %s expected by template %s", ", ".join(absent), template.id
                )
        else:
            self.mapping = auto_map_columns(self.headers, self.lexicon)

        if len(accounts) == 1:
            self.account_id = accounts[0].id
            self._advance(ImportStep.COLUMN_MAPPING)
        else:
            self._advance(ImportStep.ACCOUNT_SELECT)
        return self.mapping

    # ACCOUNT_SELECT
    def select_account(self, account_id: str) -> None:
        """Choose the account the rows are imported into.

        Raises:
            NotFoundError: If the account doesn't exist
        """
        self._require_step("select an account", ImportStep.ACCOUNT_SELECT)
        self.account_id = self.controller.store.require_account(account_id).id
        self._advance(ImportStep.COLUMN_MAPPING)

    # COLUMN_MAPPING
    def set_mapping(self, **columns: Optional[str]) -> ColumnMapping:
        """Override mapped columns, e.g. ``set_mapping(amount="Importe")``.

        Raises:
            ValidationError: If a field is unknown or a column is not in the file
        """
        self._require_step("change the column mapping", ImportStep.COLUMN_MAPPING)
        for name, column in columns.items():
            if not hasattr(self.mapping, name):
                raise ValidationError(f"Unknown mapping field: {name}")
            if column is not None and column not in self.headers:
                raise ValidationError(f"Column '{column}' is not in the file")
        self.mapping = replace(self.mapping, **columns)
        return self.mapping

    def build_preview(self) -> ImportPreview:
        """Run every pipeline stage over every row and move to PREVIEW.

        Raises:
            ConfigurationError: If the date or amount column is not mapped
        """
        self._require_step("build a preview", ImportStep.COLUMN_MAPPING)
        missing = self.mapping.missing_required()
        if missing:
            raise ConfigurationError(errors.missing_required_mappings(missing))

        store = self.controller.store
        normalizer = RowNormalizer(self.mapping, self.template, self.lexicon)
        candidates = []
        for index, row in enumerate(self.rows):
            candidate = normalizer.normalize(index, row)
            self.categorizer.categorize(candidate)
            self.card_classifier.classify(candidate)
            candidates.append(candidate)
            _logger.debug(
                "Row %d: %s %s %s -> %s", index + 2, candidate.iso_date, candidate.amount,
                candidate.description, candidate.category,
            )

        row_errors = validate_candidates(candidates)
        duplicates = self.duplicate_detector.detect(
            [c for c in candidates if c.is_valid], store.list_transactions()
        )

        holder = store.require_account(store.balance_holder(self.account_id))
        self.preview = ImportPreview(
            account_id=self.account_id,
            current_balance=holder.balance,
            candidates=candidates,
            row_errors=row_errors,
            duplicates=duplicates,
        )
        stats = self.preview.stats
        _logger.info(
            "Preview: %d valid, %d invalid, %d duplicate, %d card payment row(s)",
            stats.valid, stats.invalid, stats.duplicates, stats.card_payments,
        )
        self._advance(ImportStep.PREVIEW)
        return self.preview

    # PREVIEW
    def commit(
        self, credit_card_account_id: Optional[str] = None, skip_duplicates: bool = False
    ) -> ImportResult:
        """Write the accepted rows and finish the import.

        Raises:
            NotFoundError: If the credit account doesn't exist
            ValidationError: If the credit account is not a credit card
        """
        self._require_step("commit", ImportStep.PREVIEW)
        candidates = self.preview.candidates
        accepted = self.preview.accepted(skip_duplicates)
        result = commit_rows(self.controller, accepted, self.account_id, credit_card_account_id)
        self.result = replace(result, excluded_count=len(candidates) - len(accepted))
        self._advance(ImportStep.DONE)
        return self.result

    # Navigation
    def back(self) -> ImportStep:
        """Return to the previous step, discarding a built preview."""
        if self.step == ImportStep.DONE or not self._history:
            raise InvalidTransitionError(errors.invalid_step("go back", self.step.value))
        if self.step == ImportStep.PREVIEW:
            self.preview = None
        self.step = self._history.pop()
        return self.step

    def cancel(self) -> None:
        """Abandon the import. The ledger is untouched."""
        if self.step == ImportStep.DONE:
            raise InvalidTransitionError(errors.invalid_step("cancel", self.step.value))
        self._reset()
        _logger.info("Import cancelled")
