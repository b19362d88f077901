"""Tests for the smaller import stages: card payments, validation, balance impact, templates."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerkit.domain.balance_impact import calculate_balance_impact
from ledgerkit.domain.bank_templates import get_bank_template, list_bank_templates
from ledgerkit.domain.card_payments import CardPaymentClassifier
from ledgerkit.domain.entities import (
    CandidateTransaction,
    ColumnMapping,
    RowErrorReason,
    TransactionType,
)
from ledgerkit.domain.validator import validate_candidate, validate_candidates
from ledgerkit.utils.text import clean_description, fold


def candidate(amount="10.00", txn_type=TransactionType.EXPENSE, description="Shop", row_index=0):
    return CandidateTransaction(
        row_index=row_index,
        date=date(2024, 1, 5),
        amount=Decimal(amount) if amount is not None else None,
        type=txn_type,
        description=description,
    )


class TestCardPaymentClassifier:
    """Tests for CardPaymentClassifier."""

    @pytest.mark.parametrize(
        "description",
        ["PAGO TARJETA VISA", "Liquidación tarjeta 4512", "recibo tarjeta credito", "Credit card payment"],
    )
    def test_card_payment_phrases(self, description):
        assert CardPaymentClassifier().is_card_payment(description)

    @pytest.mark.parametrize("description", ["MERCADONA", "TARJETA REGALO", "PAGO ALQUILER"])
    def test_ordinary_descriptions(self, description):
        assert not CardPaymentClassifier().is_card_payment(description)

    def test_classify_sets_flag(self):
        row = CardPaymentClassifier().classify(candidate(description="PAGO TARJETA VISA"))
        assert row.is_card_payment

    def test_custom_phrases(self):
        classifier = CardPaymentClassifier(["Kreditkarte"])
        assert classifier.is_card_payment("ABRECHNUNG KREDITKARTE")


class TestValidator:
    """Tests for candidate validation."""

    def test_valid_candidate(self):
        assert validate_candidate(candidate()) == []

    def test_every_reason_is_reported(self):
        broken = CandidateTransaction(row_index=3, description=" ")

        reasons = validate_candidate(broken)

        assert reasons == [
            RowErrorReason.INVALID_DATE,
            RowErrorReason.INVALID_AMOUNT,
            RowErrorReason.MISSING_DESCRIPTION,
        ]

    def test_zero_amount(self):
        assert validate_candidate(candidate(amount="0")) == [RowErrorReason.ZERO_AMOUNT]

    def test_report_uses_file_line_numbers(self):
        rows = [candidate(row_index=0), candidate(amount="0", row_index=1)]

        report = validate_candidates(rows)

        assert len(report) == 1
        assert report[0].row_number == 3
        assert rows[0].is_valid
        assert not rows[1].is_valid


class TestBalanceImpact:
    """Tests for calculate_balance_impact."""

    def test_totals_and_final_balance(self):
        rows = [
            candidate("50.00"),
            candidate("1200.00", TransactionType.INCOME),
        ]

        impact = calculate_balance_impact(rows, Decimal("1000.00"))

        assert impact.income_total == Decimal("1200.00")
        assert impact.expense_total == Decimal("50.00")
        assert impact.net_impact == Decimal("1150.00")
        assert impact.final_balance == Decimal("2150.00")

    def test_empty_batch(self):
        impact = calculate_balance_impact([], Decimal("-300"))

        assert impact.net_impact == Decimal("0")
        assert impact.final_balance == Decimal("-300")


class TestBankTemplates:
    """Tests for the bank template registry."""

    def test_lookup_is_case_insensitive(self):
        assert get_bank_template("bbva").id == "BBVA"
        assert get_bank_template(" Santander ").name == "Santander"

    def test_unknown_bank(self):
        assert get_bank_template("nope") is None

    def test_every_template_maps_required_columns(self):
        templates = list_bank_templates()

        assert len(templates) >= 6
        for template in templates:
            assert ColumnMapping.from_template(template).missing_required() == []

    def test_revolut_uses_type_column(self):
        template = get_bank_template("REVOLUT")

        assert not template.amount_negative_is_expense
        assert template.columns.type == "Type"


class TestText:
    """Tests for text helpers."""

    def test_clean_description(self):
        assert clean_description("  PAGO\x00 TARJETA\n\nVISA  ") == "PAGO TARJETA VISA"
        assert clean_description(None) == ""

    def test_fold(self):
        assert fold("Liquidación TARJETA") == "liquidacion tarjeta"
