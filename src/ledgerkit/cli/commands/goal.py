"""Savings goal commands."""

import click

from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.amount_parser import parse_amount
from ledgerkit.utils.date_parser import parse_date


@click.group()
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("create")
@click.argument("name", metavar="GOAL_NAME")
@click.option("--target", required=True, help="Target amount")
@click.option("--deadline", help="Deadline (YYYY-MM-DD or relative like 'this year')")
@click.pass_context
def create_goal(ctx, name: str, target: str, deadline: str | None):
    """Create a savings goal.

    Transfers made with --goal add to the goal's current amount.

    Examples:
        ledgerkit goal create "Holidays" --target 1500
    """
    controller = ctx.obj["controller"]

    try:
        target_amount = parse_amount(target)
        goal_deadline = parse_date(deadline) if deadline else None
        goal = controller.create_goal(name, target_amount, goal_deadline)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created goal '{goal.name}' (ID: {goal.id})")


@goal_group.command("list")
@click.pass_context
def list_goals(ctx):
    """List savings goals and their progress."""
    store = ctx.obj["store"]

    goals = store.list_goals()
    if not goals:
        click.echo("No goals found.")
        return

    click.echo("\nGoals:")
    click.echo("-" * 60)
    for g in goals:
        deadline = f" | by {g.deadline}" if g.deadline else ""
        click.echo(
            f"ID: {g.id:12s} | {g.name:20s} | {g.current_amount:,.2f} / {g.target_amount:,.2f}{deadline}"
        )


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
