"""Tests for advisory duplicate detection."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerkit.domain.duplicates import DuplicateDetector, description_similarity
from ledgerkit.domain.entities import CandidateTransaction, Transaction, TransactionType


def existing(description="MERCADONA VALENCIA", amount="50.00", day=5, txn_type=TransactionType.EXPENSE):
    return Transaction(
        id=f"t{day}{description[:3]}",
        type=txn_type,
        amount=Decimal(amount),
        date=date(2024, 1, day),
        account_id="acc",
        description=description,
    )


def incoming(row_index=0, description="MERCADONA VALENCIA", amount="50.00", day=5,
             txn_type=TransactionType.EXPENSE):
    return CandidateTransaction(
        row_index=row_index,
        date=date(2024, 1, day),
        amount=Decimal(amount),
        type=txn_type,
        description=description,
    )


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ("MERCADONA", "Compra MERCADONA Valencia", 1.0),
        ("Café Central", "cafe central", 1.0),
        ("AMAZON MARKETPLACE EU", "AMAZON PRIME EU", 0.5),
        ("NETFLIX", "SPOTIFY", 0.0),
        ("", "anything", 0.0),
    ],
)
def test_description_similarity(a, b, expected):
    assert description_similarity(a, b) == pytest.approx(expected)


def test_exact_repeat_is_flagged():
    detector = DuplicateDetector()
    candidates = [incoming()]

    report = detector.detect(candidates, [existing()])

    assert len(report) == 1
    assert report[0].index == 0
    assert candidates[0].duplicate_of[0].description == "MERCADONA VALENCIA"


def test_date_window():
    detector = DuplicateDetector(window_days=1)

    assert detector.detect([incoming(day=6)], [existing(day=5)])
    assert not detector.detect([incoming(day=7)], [existing(day=5)])


def test_amount_and_type_must_match():
    detector = DuplicateDetector()

    assert not detector.detect([incoming(amount="50.01")], [existing()])
    assert not detector.detect([incoming(txn_type=TransactionType.INCOME)], [existing()])


def test_similarity_threshold():
    strict = DuplicateDetector(similarity_threshold=0.9)
    loose = DuplicateDetector(similarity_threshold=0.3)
    candidate_desc = "AMAZON MARKETPLACE EU"

    assert not strict.detect([incoming(description=candidate_desc)], [existing("AMAZON PRIME EU")])
    assert loose.detect([incoming(description=candidate_desc)], [existing("AMAZON PRIME EU")])


def test_earlier_rows_in_batch():
    detector = DuplicateDetector()
    candidates = [incoming(0), incoming(1, day=6), incoming(2, description="OTHER SHOP")]

    report = detector.detect(candidates, [])

    assert [m.index for m in report] == [1]
    assert candidates[1].duplicate_rows == [0]
    assert not candidates[2].is_duplicate


def test_unparsed_candidates_are_skipped():
    detector = DuplicateDetector()
    broken = CandidateTransaction(row_index=0, description="MERCADONA VALENCIA")

    assert detector.detect([broken], [existing()]) == []
    assert not broken.is_duplicate


def test_detect_replaces_previous_annotations():
    detector = DuplicateDetector()
    candidate = incoming()
    detector.detect([candidate], [existing()])

    detector.detect([candidate], [])

    assert candidate.duplicate_of == []
    assert not candidate.is_duplicate
