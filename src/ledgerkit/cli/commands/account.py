"""Account management commands."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.entities import AccountKind, PaymentMode
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.amount_parser import parse_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--kind",
    type=click.Choice([k.value for k in AccountKind], case_sensitive=False),
    default=AccountKind.BANK.value,
    show_default=True,
    help="Account kind",
)
@click.option("--balance", default="0", help="Opening balance (e.g., 1000 or -300,00)")
@click.option("--bank", help="Bank name")
@click.option(
    "--linked-account",
    help="Account name or ID that absorbs a debit card's transactions, "
    "or pays a credit card's cycle",
)
@click.option("--credit-limit", help="Credit limit (credit cards)")
@click.option("--cutoff-day", type=int, help="Statement cutoff day of month (credit cards)")
@click.option("--payment-day", type=int, help="Payment day of month (credit cards)")
@click.option(
    "--payment-mode",
    type=click.Choice([m.value for m in PaymentMode], case_sensitive=False),
    help="How the card is paid (credit cards)",
)
@click.pass_context
def create_account(
    ctx,
    name: str,
    kind: str,
    balance: str,
    bank: str | None,
    linked_account: str | None,
    credit_limit: str | None,
    cutoff_day: int | None,
    payment_day: int | None,
    payment_mode: str | None,
):
    """Create a new account.

    Examples:
        ledgerkit account create "Checking" --balance 1000
        ledgerkit account create "Visa" --kind CREDIT --linked-account "Checking" --credit-limit 3000
        ledgerkit account create "Debit card" --kind DEBIT --linked-account "Checking"
    """
    store = ctx.obj["store"]
    controller = ctx.obj["controller"]

    fields = {
        "bank_name": bank,
        "cutoff_day": cutoff_day,
        "payment_day": payment_day,
        "payment_mode": PaymentMode(payment_mode.upper()) if payment_mode else None,
    }
    if linked_account is not None:
        fields["linked_account_id"] = resolve_account_or_exit(ctx, store, linked_account)

    try:
        opening = parse_amount(balance)
        if credit_limit is not None:
            fields["credit_limit"] = parse_amount(credit_limit)
        account = controller.create_account(name, AccountKind(kind.upper()), opening, **fields)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created account '{account.name}' (ID: {account.id})")
    if account.is_proxy:
        linked = store.require_account(account.linked_account_id)
        click.echo(f"Transactions will be applied to '{linked.name}'")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    store = ctx.obj["store"]

    accounts = store.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:12s} | {acc.name:20s} | {acc.kind.value:10s} | Balance: {acc.balance:>12,.2f}"
        )


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str):
    """Show an account and its transactions.

    ACCOUNT can be an account name or ID.
    """
    store = ctx.obj["store"]
    account_id = resolve_account_or_exit(ctx, store, account)
    acc = store.require_account(account_id)

    click.echo(f"\n{acc.name} ({acc.kind.value}, ID: {acc.id})")
    if acc.bank_name:
        click.echo(f"  Bank: {acc.bank_name}")
    click.echo(f"  Balance: {acc.balance:,.2f}")
    click.echo(f"  Opening balance: {acc.opening_balance:,.2f}")
    if acc.linked_account_id:
        linked = store.get_account(acc.linked_account_id)
        click.echo(f"  Linked account: {linked.name if linked else acc.linked_account_id}")
    if acc.is_credit:
        click.echo(f"  Cycle debt: {acc.statement_balance:,.2f}")
        if acc.credit_limit is not None:
            click.echo(f"  Credit limit: {acc.credit_limit:,.2f}")
        if acc.cutoff_day is not None:
            click.echo(f"  Cutoff day: {acc.cutoff_day}")
        if acc.payment_day is not None:
            click.echo(f"  Payment day: {acc.payment_day}")

    txns = store.list_transactions(account_id=account_id)
    click.echo(f"\n  {len(txns)} transaction(s)")
    for txn in txns[-10:]:
        click.echo(f"  {txn.date} | {txn.signed_amount:>12,.2f} | {txn.category:15s} | {txn.description}")


@account_group.command("verify")
@click.pass_context
def verify_accounts(ctx):
    """Check every balance against opening balance plus transaction history."""
    store = ctx.obj["store"]

    drift = store.verify_balances()
    if not drift:
        click.echo("All balances match their transaction history.")
        return

    for account_id, (expected, actual) in drift.items():
        acc = store.require_account(account_id)
        click.echo(
            f"Error: '{acc.name}' balance is {actual:,.2f}, history says {expected:,.2f}", err=True
        )
    ctx.exit(1)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
