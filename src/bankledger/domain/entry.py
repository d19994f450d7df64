"""Entry domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from bankledger.database.base import Database
from bankledger.domain.entities import Entry as EntryEntity, EntryQuery, EntryType
from bankledger.domain.errors import (
    NotFoundError,
    ValidationError,
    bank_not_found,
    entry_not_found,
)

logger = logging.getLogger(__name__)

# Money columns hold two decimal places
CENT = Decimal("0.01")


def validate_cents(value: Decimal, label: str = "Amount") -> Decimal:
    """Require ``value`` to fit in whole cents instead of rounding it away."""
    try:
        fits = value == value.quantize(CENT)
    except ArithmeticError:
        fits = False
    if not fits:
        raise ValidationError(f"{label} '{value}' has more than two decimal places")
    return value


def validate_entry_type(entry_type) -> EntryType:
    """Return the EntryType for ``entry_type`` or raise ValidationError."""
    try:
        return EntryType(entry_type)
    except ValueError as e:
        raise ValidationError(
            f"Invalid entry type '{entry_type}'. Expected 'debit' or 'credit'"
        ) from e


def validate_amount(amount) -> Decimal:
    """Return ``amount`` as a Decimal, requiring it to be strictly positive whole cents."""
    if amount is None:
        raise ValidationError("Amount is required")
    try:
        value = Decimal(str(amount))
    except ArithmeticError as e:
        raise ValidationError(f"Invalid amount '{amount}'") from e
    if not value.is_finite() or value <= 0:
        raise ValidationError("Amount must be greater than zero")
    return validate_cents(value)


def validate_description(description: Optional[str]) -> str:
    """Return the stripped description, requiring it to be non-empty."""
    if description is None or not description.strip():
        raise ValidationError("Description is required")
    return description.strip()


def validate_entry_date(value) -> date:
    """Require a calendar date."""
    if not isinstance(value, date):
        raise ValidationError(f"Invalid entry date '{value}'")
    return value


class EntryService:
    """Service for recording and editing debit/credit entries."""

    def __init__(self, db: Database):
        """Initialize entry service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_entry(
        self,
        bank_id: int,
        entry_type: EntryType | str,
        description: str,
        date: date,
        amount: Decimal,
    ) -> int:
        """Record an entry against a bank.

        Args:
            bank_id: Bank ID
            entry_type: "debit" or "credit"
            description: Non-empty description
            date: Entry date
            amount: Strictly positive amount; direction comes from entry_type

        Returns:
            Entry ID

        Raises:
            ValidationError: If a field is missing or invalid
            NotFoundError: If the bank does not exist
        """
        entry_type = validate_entry_type(entry_type)
        description = validate_description(description)
        date = validate_entry_date(date)
        amount = validate_amount(amount)

        if self.db.get_bank(bank_id) is None:
            raise NotFoundError(bank_not_found(bank_id))

        entry_id = self.db.create_entry(
            bank_id=bank_id,
            entry_type=entry_type,
            description=description,
            date=date,
            amount=amount,
        )
        logger.info("Created %s entry %d for bank %d", entry_type.value, entry_id, bank_id)
        return entry_id

    def get_entry(self, entry_id: int) -> Optional[EntryEntity]:
        """Get entry by ID.

        Args:
            entry_id: Entry ID

        Returns:
            Entry entity or None if not found
        """
        return self.db.get_entry(entry_id)

    def list_entries(self, query: Optional[EntryQuery] = None) -> list[EntryEntity]:
        """List entries matching ``query`` ordered by date."""
        return self.db.list_entries(query)

    def update_entry(
        self,
        entry_id: int,
        bank_id: Optional[int] = None,
        entry_type: Optional[EntryType | str] = None,
        description: Optional[str] = None,
        date: Optional[date] = None,
        amount: Optional[Decimal] = None,
    ) -> None:
        """Update entry fields.

        Only the given fields change; each is validated like in create_entry.

        Raises:
            NotFoundError: If the entry or the new bank does not exist
            ValidationError: If a new value is invalid
        """
        if self.db.get_entry(entry_id) is None:
            raise NotFoundError(entry_not_found(entry_id))

        if bank_id is not None and self.db.get_bank(bank_id) is None:
            raise NotFoundError(bank_not_found(bank_id))

        self.db.update_entry(
            entry_id=entry_id,
            bank_id=bank_id,
            entry_type=validate_entry_type(entry_type) if entry_type is not None else None,
            description=validate_description(description) if description is not None else None,
            date=validate_entry_date(date) if date is not None else None,
            amount=validate_amount(amount) if amount is not None else None,
        )

    def delete_entry(self, entry_id: int) -> None:
        """Delete an entry.

        Raises:
            NotFoundError: If the entry does not exist
        """
        if self.db.get_entry(entry_id) is None:
            raise NotFoundError(entry_not_found(entry_id))
        self.db.delete_entry(entry_id)
        logger.info("Deleted entry %d", entry_id)
