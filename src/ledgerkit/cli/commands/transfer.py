"""Transfer and credit card settlement commands."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit, resolve_goal_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.amount_parser import parse_amount
from ledgerkit.utils.date_parser import parse_date


@click.command("transfer")
@click.argument("source", metavar="FROM_ACCOUNT")
@click.argument("destination", metavar="TO_ACCOUNT")
@click.argument("amount")
@click.option("--date", default="today", show_default=True, help="Transfer date")
@click.option("--goal", help="Goal name or ID that receives the transferred amount")
@click.option("--description", help="Description for both legs")
@click.pass_context
def transfer(
    ctx,
    source: str,
    destination: str,
    amount: str,
    date: str,
    goal: str | None,
    description: str | None,
):
    """Move money between two accounts.

    Examples:
        ledgerkit transfer Checking Savings 200
        ledgerkit transfer Checking Savings 150 --goal Holidays
    """
    store = ctx.obj["store"]
    controller = ctx.obj["controller"]

    from_id = resolve_account_or_exit(ctx, store, source)
    to_id = resolve_account_or_exit(ctx, store, destination)
    goal_id = resolve_goal_or_exit(ctx, store, goal) if goal is not None else None

    try:
        transfer_amount = parse_amount(amount)
        transfer_date = parse_date(date)
        outgoing, incoming = controller.transfer(
            from_id, to_id, transfer_amount, transfer_date, goal_id=goal_id, description=description
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Transferred {outgoing.amount:,.2f} on {outgoing.date}")
    for account_id in (from_id, to_id):
        holder = store.require_account(store.balance_holder(account_id))
        click.echo(f"  {holder.name}: {holder.balance:,.2f}")
    if goal_id is not None:
        g = store.require_goal(goal_id)
        click.echo(f"  Goal '{g.name}': {g.current_amount:,.2f} / {g.target_amount:,.2f}")


@click.command("settle")
@click.argument("card", metavar="CREDIT_CARD")
@click.option("--date", default="today", show_default=True, help="Settlement date")
@click.pass_context
def settle(ctx, card: str, date: str):
    """Pay a credit card's cycle debt from its linked bank account.

    Examples:
        ledgerkit settle Visa
    """
    store = ctx.obj["store"]
    controller = ctx.obj["controller"]

    card_id = resolve_account_or_exit(ctx, store, card)
    try:
        legs = controller.settle_credit_cycle(card_id, parse_date(date))
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    card_account = store.require_account(card_id)
    if legs is None:
        click.echo(f"'{card_account.name}' has no cycle debt to settle.")
        return

    outgoing, _ = legs
    bank = store.require_account(card_account.linked_account_id)
    click.echo(f"Settled {outgoing.amount:,.2f} on '{card_account.name}' from '{bank.name}'")
    click.echo(f"  {bank.name}: {store.require_account(store.balance_holder(bank.id)).balance:,.2f}")
    click.echo(f"  {card_account.name}: {card_account.balance:,.2f}")


def register_commands(cli):
    """Register transfer commands with main CLI."""
    cli.add_command(transfer)
    cli.add_command(settle)
