"""Tests for column auto-mapping and row normalization."""

from datetime import date
from decimal import Decimal

from ledgerkit.domain.bank_templates import get_bank_template
from ledgerkit.domain.entities import ColumnMapping, TransactionType
from ledgerkit.domain.normalizer import RowNormalizer, auto_map_columns


class TestAutoMapColumns:
    """Tests for header keyword mapping."""

    def test_spanish_headers(self):
        mapping = auto_map_columns(["Fecha", "Concepto", "Importe", "Categoría", "Subcategoría"])

        assert mapping.date == "Fecha"
        assert mapping.amount == "Importe"
        assert mapping.description == "Concepto"
        assert mapping.category == "Categoría"
        assert mapping.subcategory == "Subcategoría"

    def test_english_headers(self):
        mapping = auto_map_columns(["Date", "Description", "Amount"])

        assert mapping == ColumnMapping(date="Date", amount="Amount", description="Description")

    def test_value_date_does_not_become_amount(self):
        """Test that 'Fecha valor' is not taken as the amount column."""
        mapping = auto_map_columns(["Fecha", "Fecha valor", "Concepto", "Importe"])

        assert mapping.date == "Fecha"
        assert mapping.amount == "Importe"

    def test_unknown_headers_stay_unmapped(self):
        mapping = auto_map_columns(["foo", "bar"])

        assert mapping.missing_required() == ["date", "amount"]


class TestRowNormalizer:
    """Tests for RowNormalizer."""

    def test_negative_amount_is_expense(self):
        normalizer = RowNormalizer(ColumnMapping(date="d", amount="a", description="t"))

        candidate = normalizer.normalize(0, {"d": "2024-01-05", "a": "-50,00", "t": "  SUPER\tMERCADO "})

        assert candidate.date == date(2024, 1, 5)
        assert candidate.amount == Decimal("50.00")
        assert candidate.type == TransactionType.EXPENSE
        assert candidate.description == "SUPER MERCADO"

    def test_positive_amount_is_income(self):
        normalizer = RowNormalizer(ColumnMapping(date="d", amount="a"))

        candidate = normalizer.normalize(1, {"d": "2024-01-06", "a": "1200"})

        assert candidate.type == TransactionType.INCOME
        assert candidate.row_index == 1

    def test_parentheses_amount_is_expense(self):
        normalizer = RowNormalizer(ColumnMapping(date="d", amount="a"))

        candidate = normalizer.normalize(0, {"d": "2024-01-06", "a": "(42,00)"})

        assert candidate.amount == Decimal("42.00")
        assert candidate.type == TransactionType.EXPENSE

    def test_missing_description_placeholder(self):
        normalizer = RowNormalizer(ColumnMapping(date="d", amount="a", description="t"))

        candidate = normalizer.normalize(0, {"d": "2024-01-06", "a": "5", "t": ""})

        assert candidate.description == "No description"

    def test_bad_cells_become_none(self):
        normalizer = RowNormalizer(ColumnMapping(date="d", amount="a"))

        candidate = normalizer.normalize(0, {"d": "someday", "a": "n/a"})

        assert candidate.date is None
        assert candidate.amount is None
        assert candidate.type is None

    def test_template_date_format(self):
        template = get_bank_template("BBVA")
        normalizer = RowNormalizer(ColumnMapping.from_template(template), template)

        candidate = normalizer.normalize(0, {"Fecha": "03/04/2024", "Importe": "-1,00", "Concepto": "X"})

        assert candidate.date == date(2024, 4, 3)

    def test_type_column_overrides_sign(self):
        template = get_bank_template("revolut")
        normalizer = RowNormalizer(ColumnMapping.from_template(template), template)

        candidate = normalizer.normalize(
            0,
            {"Started Date": "2024-02-02", "Amount": "12.50", "Description": "Netflix", "Type": "CARD_PAYMENT"},
        )

        assert candidate.type == TransactionType.EXPENSE
        assert candidate.amount == Decimal("12.50")

    def test_raw_category_is_kept(self):
        normalizer = RowNormalizer(ColumnMapping(date="d", amount="a", category="c"))

        candidate = normalizer.normalize(0, {"d": "2024-01-06", "a": "-5", "c": " Alimentación "})

        assert candidate.raw_category == "Alimentación"
        assert candidate.raw_subcategory is None
