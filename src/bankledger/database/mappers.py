"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from decimal import Decimal

from bankledger.domain import entities as domain
from bankledger.database.models import (
    Bank as ORMBank,
    Entry as ORMEntry,
)


def bank_to_domain(orm_bank: ORMBank) -> domain.Bank:
    """Convert SQLAlchemy Bank model to domain Bank entity."""
    return domain.Bank(
        id=orm_bank.id,
        name=orm_bank.name,
        iban=orm_bank.iban,
        opening_balance=Decimal(str(orm_bank.opening_balance or 0)),
        created_at=orm_bank.created_at,
    )


def entry_to_domain(orm_entry: ORMEntry) -> domain.Entry:
    """Convert SQLAlchemy Entry model to domain Entry entity."""
    return domain.Entry(
        id=orm_entry.id,
        bank_id=orm_entry.bank_id,
        type=domain.EntryType(orm_entry.type),
        description=orm_entry.description,
        date=orm_entry.date,
        amount=Decimal(str(orm_entry.amount)),
    )
