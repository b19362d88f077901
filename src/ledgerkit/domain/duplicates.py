"""Advisory duplicate detection for imported rows.

Bank exports are often re-imported after a partial earlier import, so the
match is permissive: a flagged non-duplicate costs the user a glance, a
missed duplicate costs a wrong balance.
"""

import re
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ledgerkit.domain.entities import (
    CandidateTransaction,
    DuplicateMatch,
    Transaction,
    TransactionType,
)
from ledgerkit.utils.text import fold

_TOKEN = re.compile(r"\w+")


def _tokens(text: str) -> set[str]:
    return set(_TOKEN.findall(fold(text)))


def description_similarity(a: str, b: str) -> float:
    """Similarity in [0, 1]: 1.0 on substring containment, else token Jaccard."""
    left = " ".join(_TOKEN.findall(fold(a)))
    right = " ".join(_TOKEN.findall(fold(b)))
    if not left or not right:
        return 0.0
    if left in right or right in left:
        return 1.0
    left_tokens, right_tokens = set(left.split()), set(right.split())
    return len(left_tokens & right_tokens) / len(left_tokens | right_tokens)


class DuplicateDetector:
    """Compare candidates against the ledger and against earlier batch rows."""

    def __init__(self, window_days: int = 1, similarity_threshold: float = 0.5):
        self.window_days = window_days
        self.similarity_threshold = similarity_threshold

    def is_match(
        self,
        first: tuple[date, Decimal, TransactionType, str],
        second: tuple[date, Decimal, TransactionType, str],
    ) -> bool:
        first_date, first_amount, first_type, first_desc = first
        second_date, second_amount, second_type, second_desc = second
        if abs((first_date - second_date).days) > self.window_days:
            return False
        if first_amount != second_amount or first_type != second_type:
            return False
        return description_similarity(first_desc, second_desc) >= self.similarity_threshold

    @staticmethod
    def _key(record) -> Optional[tuple[date, Decimal, TransactionType, str]]:
        if record.date is None or record.amount is None or record.type is None:
            return None
        return (record.date, record.amount, record.type, record.description)

    def detect(
        self,
        candidates: Sequence[CandidateTransaction],
        existing: Iterable[Transaction],
    ) -> list[DuplicateMatch]:
        """Annotate candidates with their matches and return the report.

        Nothing is removed; each candidate's ``duplicate_of`` and
        ``duplicate_rows`` are replaced.
        """
        ledger = [(txn, self._key(txn)) for txn in existing]
        report = []

        for position, candidate in enumerate(candidates):
            candidate.duplicate_of = []
            candidate.duplicate_rows = []
            key = self._key(candidate)
            if key is None:
                continue

            candidate.duplicate_of = [txn for txn, other in ledger if self.is_match(key, other)]
            for earlier in candidates[:position]:
                other = self._key(earlier)
                if other is not None and self.is_match(key, other):
                    candidate.duplicate_rows.append(earlier.row_index)

            if candidate.is_duplicate:
                report.append(
                    DuplicateMatch(
                        index=candidate.row_index,
                        existing=tuple(candidate.duplicate_of),
                        batch_indices=tuple(candidate.duplicate_rows),
                    )
                )
        return report
