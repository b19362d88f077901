"""Utility for resolving account names to IDs."""

from ledgerkit.domain.errors import NotFoundError
from ledgerkit.domain.ledger_store import LedgerStore


def resolve_account(store: LedgerStore, account: str) -> str:
    """Resolve account name or ID to account ID.

    IDs win over names; names are matched case-insensitively.

    Raises:
        NotFoundError: If no account matches
    """
    if store.get_account(account) is not None:
        return account

    wanted = account.strip().lower()
    for acc in store.list_accounts():
        if acc.name.lower() == wanted:
            return acc.id

    raise NotFoundError(f"Account '{account}' not found")
