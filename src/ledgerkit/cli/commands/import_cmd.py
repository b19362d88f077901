"""Statement import command."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.csv_import import ImportOrchestrator, ImportPreview, ImportStep
from ledgerkit.domain.duplicates import DuplicateDetector
from ledgerkit.domain.errors import DomainError


def _echo_preview(preview: ImportPreview, skip_duplicates: bool, credit_account_id: str | None) -> None:
    stats = preview.stats
    click.echo("\nPreview:")
    click.echo(f"  Rows: {stats.total}")
    click.echo(f"  Valid: {stats.valid}")
    click.echo(f"  Invalid: {stats.invalid}")
    click.echo(f"  Duplicates: {stats.duplicates}")
    click.echo(f"  Card payments: {stats.card_payments}")
    click.echo(f"  Auto-categorized: {stats.auto_categorized}")

    for error in preview.row_errors:
        click.echo(f"    Row {error.row_number}: {error.reason.value}", err=True)

    for candidate in preview.candidates:
        if not candidate.is_valid:
            continue
        flags = []
        if candidate.is_duplicate:
            flags.append("duplicate")
        if candidate.is_card_payment:
            flags.append("card payment")
        if candidate.auto_detected:
            flags.append("auto")
        suffix = f"  [{', '.join(flags)}]" if flags else ""
        click.echo(
            f"    {candidate.date} | {candidate.signed_amount:>12,.2f} | "
            f"{candidate.category[:15]:15s} | {candidate.description}{suffix}"
        )

    impact = preview.impact_for(skip_duplicates, credit_account_id)
    click.echo("\nBalance impact:")
    click.echo(f"  Current balance: {impact.current_balance:,.2f}")
    click.echo(f"  Income: {impact.income_total:,.2f}")
    click.echo(f"  Expenses: {impact.expense_total:,.2f}")
    click.echo(f"  Net: {impact.net_impact:,.2f}")
    click.echo(f"  Final balance: {impact.final_balance:,.2f}")


@click.command("import")
@click.argument("file", type=click.Path(exists=True))
@click.option("--template", help="Bank template ID (see 'template list'); auto-maps columns if omitted")
@click.option("--account", help="Account name or ID to import into (required with several accounts)")
@click.option(
    "--credit-account",
    help="Credit card name or ID; card payment rows become transfers to it",
)
@click.option("--skip-duplicates", is_flag=True, help="Leave out rows flagged as duplicates")
@click.option("--date-column", help="Column holding the date")
@click.option("--amount-column", help="Column holding the amount")
@click.option("--description-column", help="Column holding the description")
@click.option("--category-column", help="Column holding the category")
@click.option("--yes", is_flag=True, help="Commit without asking for confirmation")
@click.pass_context
def import_statement(
    ctx,
    file: str,
    template: str | None,
    account: str | None,
    credit_account: str | None,
    skip_duplicates: bool,
    date_column: str | None,
    amount_column: str | None,
    description_column: str | None,
    category_column: str | None,
    yes: bool,
):
    """Import transactions from a bank statement (CSV or XLSX).

    Examples:
        ledgerkit import statement.csv --template BBVA --account Checking
        ledgerkit import export.xlsx --account Checking --credit-account Visa --skip-duplicates
    """
    settings = ctx.obj["settings"]
    store = ctx.obj["store"]
    controller = ctx.obj["controller"]

    orchestrator = ImportOrchestrator(
        controller,
        duplicate_detector=DuplicateDetector(
            window_days=settings.duplicate_window_days,
            similarity_threshold=settings.similarity_threshold,
        ),
    )

    credit_account_id = (
        resolve_account_or_exit(ctx, store, credit_account) if credit_account is not None else None
    )

    try:
        orchestrator.load_file(file)
        orchestrator.select_template(template)

        if orchestrator.step == ImportStep.ACCOUNT_SELECT:
            if account is None:
                click.echo("Error: Several accounts exist; choose one with --account", err=True)
                ctx.exit(1)
            orchestrator.select_account(resolve_account_or_exit(ctx, store, account))
        elif account is not None:
            resolve_account_or_exit(ctx, store, account)

        overrides = {
            "date": date_column,
            "amount": amount_column,
            "description": description_column,
            "category": category_column,
        }
        overrides = {name: column for name, column in overrides.items() if column is not None}
        if overrides:
            orchestrator.set_mapping(**overrides)

        preview = orchestrator.build_preview()
    except (DomainError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)

    _echo_preview(preview, skip_duplicates, credit_account_id)
    if preview.stats.card_payments and credit_account_id is None:
        click.echo(
            "\nCard payment rows will be imported as expenses. "
            "Use --credit-account to record them as transfers to the card."
        )

    if not yes and not click.confirm("\nImport these transactions?"):
        orchestrator.cancel()
        click.echo("Import cancelled.")
        return

    try:
        result = orchestrator.commit(credit_account_id, skip_duplicates=skip_duplicates)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result.imported_count} transactions")
    click.echo(f"  Transferred: {result.transferred_count} card payments")
    click.echo(f"  Excluded: {result.excluded_count} rows")
    holder = store.require_account(store.balance_holder(orchestrator.account_id))
    click.echo(f"  {holder.name} balance: {holder.balance:,.2f}")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_statement)
