"""Pre-configured export layouts for popular Spanish banks.

Adding a bank only requires a new entry in ``BANK_TEMPLATES``.
"""

from typing import Optional

from ledgerkit.domain.entities import BankTemplate, TemplateColumns

BANK_TEMPLATES: dict[str, BankTemplate] = {
    "BBVA": BankTemplate(
        id="BBVA",
        name="BBVA",
        delimiter=";",
        date_format="DD/MM/YYYY",
        columns=TemplateColumns(date="Fecha", amount="Importe", description="Concepto"),
    ),
    "SANTANDER": BankTemplate(
        id="SANTANDER",
        name="Santander",
        delimiter=";",
        date_format="DD/MM/YYYY",
        columns=TemplateColumns(date="Fecha", amount="Importe", description="Concepto"),
    ),
    "CAIXABANK": BankTemplate(
        id="CAIXABANK",
        name="CaixaBank",
        delimiter=";",
        date_format="DD/MM/YYYY",
        columns=TemplateColumns(date="Fecha operación", amount="Importe", description="Descripción"),
    ),
    "ING": BankTemplate(
        id="ING",
        name="ING",
        delimiter=";",
        date_format="DD/MM/YYYY",
        columns=TemplateColumns(date="Fecha", amount="Cantidad", description="Descripción"),
    ),
    "N26": BankTemplate(
        id="N26",
        name="N26",
        delimiter=",",
        date_format="YYYY-MM-DD",
        columns=TemplateColumns(date="Date", amount="Amount (EUR)", description="Payee"),
    ),
    "REVOLUT": BankTemplate(
        id="REVOLUT",
        name="Revolut",
        delimiter=",",
        date_format="YYYY-MM-DD",
        columns=TemplateColumns(
            date="Started Date", amount="Amount", description="Description", type="Type"
        ),
        # Revolut states the direction in its Type column
        amount_negative_is_expense=False,
    ),
    "BANKINTER": BankTemplate(
        id="BANKINTER",
        name="Bankinter",
        delimiter=";",
        date_format="DD/MM/YYYY",
        columns=TemplateColumns(date="Fecha", amount="Importe", description="Concepto"),
    ),
    "SABADELL": BankTemplate(
        id="SABADELL",
        name="Banco Sabadell",
        delimiter=";",
        date_format="DD/MM/YYYY",
        columns=TemplateColumns(date="Fecha", amount="Importe", description="Concepto"),
    ),
}


def get_bank_template(bank_id: str) -> Optional[BankTemplate]:
    """Return the template for ``bank_id`` (case-insensitive) or None."""
    return BANK_TEMPLATES.get(bank_id.strip().upper())


def list_bank_templates() -> list[BankTemplate]:
    return list(BANK_TEMPLATES.values())
