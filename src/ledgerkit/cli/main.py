"""Main CLI entry point."""

from dataclasses import replace

import click

from ledgerkit.config import ENV_DB_PATH, ENV_LOG_LEVEL, LedgerSettings
from ledgerkit.database.factories import create_sqlite_repository
from ledgerkit.database.outbox import Outbox
from ledgerkit.domain.errors import ConfigurationError
from ledgerkit.domain.ledger_controller import LedgerController
from ledgerkit.domain.ledger_store import LedgerStore
from ledgerkit.logging_setup import configure_logging

# Import and register all commands at module level
from ledgerkit.cli.commands import (
    account,
    goal,
    add,
    transaction,
    transfer,
    template,
    import_cmd,
)


def _close_session(outbox: Outbox, repository) -> None:
    outbox.drain()
    repository.disconnect()


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERKIT_DB_PATH environment variable)",
    envvar=ENV_DB_PATH,
)
@click.option(
    "--log-level",
    help="Log level name, e.g. DEBUG or WARNING (overrides LEDGERKIT_LOG_LEVEL)",
    envvar=ENV_LOG_LEVEL,
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Ledgerkit - Ledger consistency and statement reconciliation.

    Keep account balances consistent with their transactions, move money
    between accounts, settle credit card cycles, and import bank statements
    with duplicate and card payment detection.
    """
    ctx.ensure_object(dict)

    # Open the ledger only when actually running a command (not for --help)
    if ctx.invoked_subcommand is None:
        return

    try:
        settings = LedgerSettings.from_env()
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    if db_path:
        settings = replace(settings, database_path=db_path)
    if log_level:
        settings = replace(settings, log_level=log_level)
    configure_logging(settings.log_level)

    repository = create_sqlite_repository(database_path=settings.resolved_database_path())
    repository.connect()
    store = LedgerStore.from_repository(repository)
    outbox = Outbox(repository, max_attempts=settings.outbox_max_attempts)
    controller = LedgerController(
        store, outbox, expense_alert_threshold=settings.expense_alert_threshold
    )

    ctx.obj["settings"] = settings
    ctx.obj["repository"] = repository
    ctx.obj["store"] = store
    ctx.obj["controller"] = controller
    ctx.call_on_close(lambda: _close_session(outbox, repository))


# Register all commands
account.register_commands(cli)
goal.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
transfer.register_commands(cli)
template.register_commands(cli)
import_cmd.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
