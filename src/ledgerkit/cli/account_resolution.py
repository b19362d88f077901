"""CLI helpers for account and goal resolution."""

from __future__ import annotations

import click

from ledgerkit.domain.errors import NotFoundError
from ledgerkit.domain.ledger_store import LedgerStore
from ledgerkit.utils.account_resolver import resolve_account


def resolve_account_or_exit(ctx: click.Context, store: LedgerStore, account: str) -> str:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(store, account)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_goal_or_exit(ctx: click.Context, store: LedgerStore, goal: str) -> str:
    """Resolve goal name or ID, or exit with a CLI error."""
    if store.get_goal(goal) is not None:
        return goal
    for candidate in store.list_goals():
        if candidate.name.lower() == goal.strip().lower():
            return candidate.id
    click.echo(f"Error: Goal '{goal}' not found", err=True)
    ctx.exit(1)
