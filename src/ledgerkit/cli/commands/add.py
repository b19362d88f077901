"""Add transaction command."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.entities import (
    DEFAULT_CATEGORY,
    Frequency,
    NewTransaction,
    Recurrence,
    TransactionType,
)
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.amount_parser import parse_amount
from ledgerkit.utils.date_parser import parse_date


def split_signed_amount(amount: str):
    """Parse a signed amount into (magnitude, type); negative means expense."""
    value = parse_amount(amount)
    txn_type = TransactionType.EXPENSE if value < 0 else TransactionType.INCOME
    return abs(value), txn_type


@click.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option(
    "--date",
    required=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option(
    "--amount", required=True, help="Transaction amount; negative for expenses (e.g., -50,00)"
)
@click.option("--description", default="", help="Transaction description")
@click.option("--category", default=DEFAULT_CATEGORY, show_default=True, help="Category name")
@click.option("--subcategory", help="Subcategory name")
@click.option("--notes", help="Notes")
@click.option(
    "--recurring",
    type=click.Choice([f.value for f in Frequency], case_sensitive=False),
    help="Mark the transaction as recurring with this frequency",
)
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    date: str,
    amount: str,
    description: str,
    category: str,
    subcategory: str | None,
    notes: str | None,
    recurring: str | None,
):
    """Add a transaction manually.

    Examples:
        ledgerkit add --account Checking --date 2024-01-15 --amount -50.00 --description "Grocery store"
        ledgerkit add --account Checking --date today --amount 1200 --category Income --subcategory Salary
    """
    store = ctx.obj["store"]
    controller = ctx.obj["controller"]

    account_id = resolve_account_or_exit(ctx, store, account)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        magnitude, txn_type = split_signed_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    data = NewTransaction(
        type=txn_type,
        amount=magnitude,
        date=txn_date,
        account_id=account_id,
        category=category,
        subcategory=subcategory,
        description=description,
        recurrence=Recurrence(Frequency(recurring.upper())) if recurring else None,
        notes=notes,
    )
    try:
        txn = controller.add_transaction(data)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Account: {store.require_account(account_id).name}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {txn.signed_amount:,.2f}")
    if description:
        click.echo(f"  Description: {description}")
    click.echo(f"  Category: {category}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
