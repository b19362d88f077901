"""Structural checks on candidate transactions."""

from typing import Iterable

from ledgerkit.domain.entities import CandidateTransaction, RowError, RowErrorReason, ZERO


def validate_candidate(candidate: CandidateTransaction) -> list[RowErrorReason]:
    """Return every reason ``candidate`` cannot be committed."""
    reasons = []
    if candidate.date is None:
        reasons.append(RowErrorReason.INVALID_DATE)
    if candidate.amount is None or candidate.type is None:
        reasons.append(RowErrorReason.INVALID_AMOUNT)
    elif candidate.amount == ZERO:
        reasons.append(RowErrorReason.ZERO_AMOUNT)
    if not candidate.description.strip():
        reasons.append(RowErrorReason.MISSING_DESCRIPTION)
    return reasons


def validate_candidates(candidates: Iterable[CandidateTransaction]) -> list[RowError]:
    """Flag invalid candidates (never raises) and return the report.

    Each candidate's ``errors`` list is replaced with its reasons.
    """
    report = []
    for candidate in candidates:
        candidate.errors = validate_candidate(candidate)
        report.extend(RowError(candidate.row_index, reason) for reason in candidate.errors)
    return report
