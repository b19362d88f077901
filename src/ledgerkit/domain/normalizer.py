"""Row normalizer: one raw row in, one candidate transaction out."""

from typing import Any, Optional

from ledgerkit.domain.entities import (
    BankTemplate,
    CandidateTransaction,
    ColumnMapping,
    RawRow,
    TransactionType,
)
from ledgerkit.domain.lexicon import DEFAULT_LEXICON, Lexicon
from ledgerkit.utils.amount_parser import parse_amount
from ledgerkit.utils.date_parser import parse_statement_date
from ledgerkit.utils.text import clean_description, fold


def auto_map_columns(headers: list[str], lexicon: Lexicon = DEFAULT_LEXICON) -> ColumnMapping:
    """Guess a column mapping from header names.

    Keywords are tried in lexicon order, so earlier keywords win over later
    ones. A header is never assigned to two fields, and the more specific
    subcategory keywords are matched before category.
    """
    folded = [fold(h) for h in headers]
    taken: set[int] = set()
    found: dict[str, Optional[str]] = {}

    for field_name in ("subcategory", "date", "amount", "description", "category", "type"):
        found[field_name] = None
        for keyword in lexicon.column_keywords.get(field_name, ()):
            index = next(
                (i for i, header in enumerate(folded) if i not in taken and keyword in header),
                None,
            )
            if index is not None:
                found[field_name] = headers[index]
                taken.add(index)
                break

    return ColumnMapping(**found)


class RowNormalizer:
    """Convert raw rows into candidates using a column mapping.

    Never raises for bad data: unparseable dates or amounts become ``None``
    on the candidate and are reported later by the validator.
    """

    def __init__(
        self,
        mapping: ColumnMapping,
        template: Optional[BankTemplate] = None,
        lexicon: Lexicon = DEFAULT_LEXICON,
    ):
        self.mapping = mapping
        self.template = template
        self.lexicon = lexicon

    def _cell(self, row: RawRow, column: Optional[str]) -> Any:
        if not column:
            return None
        value = row.get(column)
        if isinstance(value, str):
            value = value.strip()
        return value if value not in ("", None) else None

    def _type_from_column(self, value: Any) -> Optional[TransactionType]:
        if value is None:
            return None
        folded = fold(str(value))
        for txn_type, keywords in self.lexicon.type_keywords.items():
            if any(keyword in folded for keyword in keywords):
                return txn_type
        return None

    def normalize(self, row_index: int, row: RawRow) -> CandidateTransaction:
        candidate = CandidateTransaction(row_index=row_index)

        date_format = self.template.date_format if self.template else None
        candidate.date = parse_statement_date(self._cell(row, self.mapping.date), date_format)

        raw_amount = self._cell(row, self.mapping.amount)
        if raw_amount is not None:
            try:
                value = parse_amount(raw_amount)
            except ValueError:
                value = None
            if value is not None:
                candidate.amount = abs(value)
                candidate.type = TransactionType.INCOME if value >= 0 else TransactionType.EXPENSE

                sign_is_direction = self.template is None or self.template.amount_negative_is_expense
                if not sign_is_direction:
                    declared = self._type_from_column(self._cell(row, self.mapping.type))
                    if declared is not None:
                        candidate.type = declared

        description = clean_description(self._cell(row, self.mapping.description))
        candidate.description = description or self.lexicon.missing_description

        raw_category = self._cell(row, self.mapping.category)
        raw_subcategory = self._cell(row, self.mapping.subcategory)
        candidate.raw_category = clean_description(raw_category) or None
        candidate.raw_subcategory = clean_description(raw_subcategory) or None
        return candidate
