"""Bank template commands."""

import click

from ledgerkit.domain.bank_templates import list_bank_templates


@click.group()
def template_group():
    """Inspect bank statement templates."""
    pass


@template_group.command("list")
def list_templates():
    """List the bank templates usable with 'import --template'."""
    click.echo("\nBank templates:")
    click.echo("-" * 80)
    for tpl in list_bank_templates():
        cols = tpl.columns
        click.echo(
            f"{tpl.id:12s} | {tpl.name:15s} | delimiter '{tpl.delimiter}' | {tpl.date_format:10s} | "
            f"{cols.date}, {cols.amount}, {cols.description}"
        )


def register_commands(cli):
    """Register template commands with main CLI."""
    cli.add_command(template_group, name="template")
