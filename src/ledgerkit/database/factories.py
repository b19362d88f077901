"""Repository factory functions."""

import os
from typing import Optional

from ledgerkit.config import default_database_path, ENV_DB_PATH
from ledgerkit.database.sqlalchemy_db import SQLAlchemyLedgerRepository


def create_sqlite_repository(database_path: Optional[str] = None) -> SQLAlchemyLedgerRepository:
    """Create a SQLite-backed ledger repository.

    Args:
        database_path: Path to SQLite database file. If None, checks LEDGERKIT_DB_PATH
            environment variable, then defaults to ~/.ledgerkit/ledgerkit.db

    Returns:
        SQLAlchemyLedgerRepository configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(ENV_DB_PATH)

    if database_path is None:
        database_path = default_database_path()

    return SQLAlchemyLedgerRepository(f"sqlite:///{database_path}")
