"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class ConfigurationError(ValidationError):
    """Configuration that blocks progress, such as a missing column mapping."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class SettlementError(DomainError):
    """A credit cycle cannot be settled; the message tells the user what to do."""


class InvalidTransitionError(DomainError):
    """Import pipeline action attempted from the wrong step."""


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def goal_not_found(goal_id: str) -> str:
    """Return message for missing goal."""
    return f"Goal {goal_id} not found"


def non_positive_amount(amount) -> str:
    """Return message for an amount that is zero or negative."""
    return f"Amount must be greater than 0 (got {amount})"


def duplicate_account_name(name: str) -> str:
    """Return message for duplicate account name."""
    return f"Account with name '{name}' already exists"


def missing_linked_account(card_name: str) -> str:
    """Return guidance when a card has no bank account to settle from."""
    return (
        f"Credit card '{card_name}' has no linked bank account. "
        "Link a bank account to the card before settling its cycle."
    )


def missing_required_mappings(fields: list[str]) -> str:
    """Return message when required column mappings are missing."""
    return f"Column mapping is missing required fields: {', '.join(sorted(fields))}"


def invalid_step(action: str, step: str) -> str:
    """Return message for an import action attempted from the wrong step."""
    return f"Cannot {action} while import is at step {step}"
