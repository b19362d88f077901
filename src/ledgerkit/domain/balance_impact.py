"""Preview of a batch's effect on an account balance."""

from decimal import Decimal
from typing import Iterable

from ledgerkit.domain.entities import BalanceImpact, CandidateTransaction, TransactionType, ZERO


def calculate_balance_impact(
    candidates: Iterable[CandidateTransaction], current_balance: Decimal
) -> BalanceImpact:
    """Sum incomes and expenses of ``candidates`` and project the balance.

    Pass exactly the candidates that will be committed as regular
    transactions, or the preview will not match the committed result.
    """
    income_total = ZERO
    expense_total = ZERO
    for candidate in candidates:
        if candidate.amount is None or candidate.type is None:
            continue
        if candidate.type == TransactionType.INCOME:
            income_total += candidate.amount
        else:
            expense_total += candidate.amount

    net_impact = income_total - expense_total
    return BalanceImpact(
        current_balance=current_balance,
        income_total=income_total,
        expense_total=expense_total,
        net_impact=net_impact,
        final_balance=current_balance + net_impact,
    )
