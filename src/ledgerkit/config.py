"""Runtime settings for ledgerkit."""

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Mapping, Optional

from ledgerkit.domain.errors import ConfigurationError

ENV_DB_PATH = "LEDGERKIT_DB_PATH"
ENV_LOG_LEVEL = "LEDGERKIT_LOG_LEVEL"
ENV_DUPLICATE_WINDOW = "LEDGERKIT_DUPLICATE_WINDOW_DAYS"
ENV_SIMILARITY = "LEDGERKIT_SIMILARITY_THRESHOLD"
ENV_EXPENSE_ALERT = "LEDGERKIT_EXPENSE_ALERT"


def default_database_path() -> str:
    """Return ~/.ledgerkit/ledgerkit.db, creating the directory."""
    db_dir = Path.home() / ".ledgerkit"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "ledgerkit.db")


@dataclass(frozen=True)
class LedgerSettings:
    """Settings with their defaults.

    Attributes:
        database_path: SQLite file; None means :func:`default_database_path`.
        log_level: Level name for the package logger.
        duplicate_window_days: Max date distance for two rows to be duplicates.
        similarity_threshold: Min description similarity (0..1) for duplicates.
        expense_alert_threshold: Expenses above this are logged as warnings.
        outbox_max_attempts: Deliveries tried before an intent is dropped.
    """

    database_path: Optional[str] = None
    log_level: str = "INFO"
    duplicate_window_days: int = 1
    similarity_threshold: float = 0.5
    expense_alert_threshold: Optional[Decimal] = None
    outbox_max_attempts: int = 3

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LedgerSettings":
        """Build settings from environment variables.

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        if env.get(ENV_DB_PATH):
            kwargs["database_path"] = env[ENV_DB_PATH]
        if env.get(ENV_LOG_LEVEL):
            kwargs["log_level"] = env[ENV_LOG_LEVEL]
        try:
            if env.get(ENV_DUPLICATE_WINDOW):
                kwargs["duplicate_window_days"] = int(env[ENV_DUPLICATE_WINDOW])
            if env.get(ENV_SIMILARITY):
                kwargs["similarity_threshold"] = float(env[ENV_SIMILARITY])
            if env.get(ENV_EXPENSE_ALERT):
                kwargs["expense_alert_threshold"] = Decimal(env[ENV_EXPENSE_ALERT])
        except (ValueError, InvalidOperation) as e:
            raise ConfigurationError(f"Invalid ledgerkit setting: {e}") from e

        settings = cls(**kwargs)
        settings.validate()
        return settings

    def validate(self) -> None:
        if self.duplicate_window_days < 0:
            raise ConfigurationError("duplicate_window_days cannot be negative")
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ConfigurationError("similarity_threshold must be between 0 and 1")
        if self.outbox_max_attempts < 1:
            raise ConfigurationError("outbox_max_attempts must be at least 1")

    def resolved_database_path(self) -> str:
        return self.database_path or default_database_path()
