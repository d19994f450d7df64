"""SQLAlchemy models for bankledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    JSON,
    CheckConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Bank(Base):
    """Bank account model."""

    __tablename__ = "banks"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    iban = Column(String, nullable=True)
    opening_balance = Column(Numeric(14, 2), default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Entries are never removed implicitly; deleting a bank with entries is refused
    entries = relationship("Entry", back_populates="bank")


class Entry(Base):
    """Debit/credit entry model."""

    __tablename__ = "entries"

    id = Column(Integer, primary_key=True)
    bank_id = Column(Integer, ForeignKey("banks.id"), nullable=False, index=True)
    type = Column(String(6), nullable=False, index=True)
    description = Column(String, nullable=False)
    date = Column(Date, nullable=False, index=True)
    amount = Column(Numeric(14, 2), nullable=False)

    __table_args__ = (
        CheckConstraint("type IN ('debit', 'credit')", name="ck_entry_type"),
        CheckConstraint("amount > 0", name="ck_entry_amount_positive"),
    )

    bank = relationship("Bank", back_populates="entries")


class Setting(Base):
    """Key-value ledger setting."""

    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(JSON, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
