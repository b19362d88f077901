"""Tests for category assignment."""

from decimal import Decimal

import pytest

from ledgerkit.domain.categorizer import Categorizer
from ledgerkit.domain.entities import CandidateTransaction, CategoryStructure, TransactionType
from ledgerkit.domain.lexicon import Lexicon, MerchantRule


def candidate(description, raw_category=None, raw_subcategory=None):
    return CandidateTransaction(
        row_index=0,
        amount=Decimal("10"),
        type=TransactionType.EXPENSE,
        description=description,
        raw_category=raw_category,
        raw_subcategory=raw_subcategory,
    )


@pytest.fixture
def categorizer():
    return Categorizer()


def test_merchant_keyword_is_auto_detected(categorizer):
    result = categorizer.categorize(candidate("COMPRA MERCADONA VALENCIA"))

    assert result.category == "Food"
    assert result.subcategory == "Supermarkets"
    assert result.auto_detected


def test_keywords_match_whole_words(categorizer):
    """Test that a keyword inside a longer word does not match."""
    result = categorizer.categorize(candidate("CALLE MORATALAZ 12"))

    assert result.category == "Other"
    assert not result.auto_detected


def test_accents_are_ignored(categorizer):
    assert categorizer.categorize(candidate("Nómina enero")).category == "Income"


def test_category_column_wins_over_description(categorizer):
    result = categorizer.categorize(candidate("MERCADONA", raw_category="Restaurantes"))

    assert result.category == "Dining"
    assert not result.auto_detected


def test_category_column_accepts_canonical_names(categorizer):
    assert categorizer.categorize(candidate("x", raw_category="transport")).category == "Transport"


def test_category_column_with_subcategory_name(categorizer):
    result = categorizer.categorize(candidate("x", raw_category="Pharmacy"))

    assert result.category == "Health"
    assert result.subcategory == "Pharmacy"


def test_unknown_category_falls_back_to_default(categorizer):
    result = categorizer.categorize(candidate("x", raw_category="Mystery"))

    assert result.category == "Other"
    assert not result.auto_detected


def test_subcategory_column_is_kept(categorizer):
    result = categorizer.categorize(candidate("x", raw_category="Food", raw_subcategory="Bakery"))

    assert result.subcategory == "Bakery"


def test_subcategory_detected_within_category(categorizer):
    result = categorizer.categorize(candidate("GLOVO PEDIDO 123", raw_category="Dining"))

    assert result.subcategory == "Delivery"


def test_custom_lexicon():
    lexicon = Lexicon(merchant_rules=(MerchantRule(("ACME",), "Tools", "Hardware"),))
    taxonomy = (CategoryStructure("Tools", ("Hardware",)), CategoryStructure("Other"))

    result = Categorizer(taxonomy, lexicon).categorize(candidate("acme store"))

    assert result.category == "Tools"
    assert result.subcategory == "Hardware"
