"""Detect bank-statement lines that pay off a credit card.

Such a line, imported as a plain expense, would count the card's purchases
twice (once on the card, once as the bank payment). The import commit turns
flagged rows into a bank -> card transfer when the user names the card.
"""

from typing import Iterable

from ledgerkit.domain.entities import CandidateTransaction
from ledgerkit.domain.lexicon import DEFAULT_CARD_PAYMENT_PHRASES
from ledgerkit.utils.text import fold


class CardPaymentClassifier:
    """Pure predicate over cleaned descriptions."""

    def __init__(self, phrases: Iterable[str] = DEFAULT_CARD_PAYMENT_PHRASES):
        self.phrases = tuple(fold(p) for p in phrases)

    def is_card_payment(self, description: str) -> bool:
        folded = fold(description)
        return any(phrase in folded for phrase in self.phrases)

    def classify(self, candidate: CandidateTransaction) -> CandidateTransaction:
        candidate.is_card_payment = self.is_card_payment(candidate.description)
        return candidate
