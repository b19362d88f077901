"""Transaction management commands."""

from dataclasses import replace

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.commands.add import split_signed_amount
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("edit")
@click.argument("transaction_id")
@click.option("--account", help="Account name or ID")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--amount", help="Transaction amount; negative for expenses")
@click.option("--description", help="Transaction description")
@click.option("--category", help="Category name")
@click.option("--subcategory", help="Subcategory name, or empty string to clear")
@click.option("--notes", help="Notes")
@click.pass_context
def edit_transaction(
    ctx,
    transaction_id: str,
    account: str | None,
    date: str | None,
    amount: str | None,
    description: str | None,
    category: str | None,
    subcategory: str | None,
    notes: str | None,
) -> None:
    """Edit a transaction.

    Updates only the fields that are provided. Balances are corrected for
    the old and new values, including a move to another account.

    Examples:
        ledgerkit transaction edit 3f2a9c1d4e5b --amount -75.00
        ledgerkit transaction edit 3f2a9c1d4e5b --account "Savings" --category Food
    """
    store = ctx.obj["store"]
    controller = ctx.obj["controller"]

    txn = store.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    changes = {}
    if account is not None:
        changes["account_id"] = resolve_account_or_exit(ctx, store, account)

    if date is not None:
        try:
            changes["date"] = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    if amount is not None:
        try:
            changes["amount"], changes["type"] = split_signed_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    if description is not None:
        changes["description"] = description
    if category is not None:
        changes["category"] = category
    if subcategory is not None:
        changes["subcategory"] = subcategory or None
    if notes is not None:
        changes["notes"] = notes

    try:
        controller.edit_transaction(replace(txn, **changes))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction and reverse its effect on balances."""
    store = ctx.obj["store"]
    controller = ctx.obj["controller"]

    txn = store.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Delete {txn.type.value.lower()} of {txn.amount:,.2f} on {txn.date} ({txn.description})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        controller.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("list")
@click.option("--account", help="Account name or ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@click.option("--category", help="Only transactions in this category")
@click.pass_context
def list_transactions(
    ctx,
    account: str | None,
    start_date: str | None,
    end_date: str | None,
    category: str | None,
) -> None:
    """List transactions with optional filters.

    Examples:
        ledgerkit transaction list --account Checking
        ledgerkit transaction list --start-date "this month" --category Food
    """
    store = ctx.obj["store"]

    account_id = resolve_account_or_exit(ctx, store, account) if account is not None else None

    try:
        start = parse_date(start_date) if start_date else None
        end = parse_date(end_date) if end_date else None
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    txns = store.list_transactions(account_id=account_id)
    if start is not None:
        txns = [t for t in txns if t.date >= start]
    if end is not None:
        txns = [t for t in txns if t.date <= end]
    if category is not None:
        txns = [t for t in txns if t.category.lower() == category.lower()]

    if not txns:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{'ID':12s} | {'Date':10s} | {'Account':15s} | {'Amount':>12s} | {'Category':20s} | Description")
    click.echo("-" * 100)
    for txn in txns:
        acc = store.get_account(txn.account_id)
        acc_name = acc.name if acc else txn.account_id
        category_path = txn.category + (f" > {txn.subcategory}" if txn.subcategory else "")
        click.echo(
            f"{txn.id:12s} | {txn.date} | {acc_name[:15]:15s} | {txn.signed_amount:>12,.2f} | "
            f"{category_path[:20]:20s} | {txn.description}"
        )
    click.echo(f"\nTotal: {len(txns)} transaction(s)")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
