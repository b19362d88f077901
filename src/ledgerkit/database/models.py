"""SQLAlchemy models for the ledgerkit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Integer,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    kind = Column(String, nullable=False)
    balance = Column(Numeric(14, 2), nullable=False, default=0)
    opening_balance = Column(Numeric(14, 2), nullable=False, default=0)
    bank_name = Column(String, nullable=True)
    credit_limit = Column(Numeric(14, 2), nullable=True)
    cutoff_day = Column(Integer, nullable=True)
    payment_day = Column(Integer, nullable=True)
    payment_mode = Column(String, nullable=True)
    linked_account_id = Column(String, nullable=True)
    statement_balance = Column(Numeric(14, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="account")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    type = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(Date, nullable=False)
    account_id = Column(String, ForeignKey("accounts.id"), nullable=False)
    category = Column(String, nullable=False)
    subcategory = Column(String, nullable=True)
    description = Column(String, nullable=False, default="")
    frequency = Column(String, nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=False)
    notes = Column(String, nullable=True)

    # Relationships
    account = relationship("Account", back_populates="transactions")


class Goal(Base):
    """Savings goal model."""

    __tablename__ = "goals"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    target_amount = Column(Numeric(14, 2), nullable=False)
    current_amount = Column(Numeric(14, 2), nullable=False, default=0)
    deadline = Column(Date, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
