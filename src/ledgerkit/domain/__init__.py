"""Domain layer for ledgerkit."""

from ledgerkit.domain.ledger_store import LedgerStore
from ledgerkit.domain.ledger_controller import LedgerController
from ledgerkit.domain.csv_import import ImportOrchestrator, ImportStep, ImportResult
from ledgerkit.domain.bank_templates import get_bank_template, list_bank_templates

__all__ = [
    "LedgerStore",
    "LedgerController",
    "ImportOrchestrator",
    "ImportStep",
    "ImportResult",
    "get_bank_template",
    "list_bank_templates",
]
