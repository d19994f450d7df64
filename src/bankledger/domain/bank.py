"""Bank domain service."""

import logging
from decimal import Decimal
from typing import Optional

from bankledger.database.base import Database
from bankledger.domain.entities import Bank as BankEntity
from bankledger.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    bank_delete_blocked,
    bank_not_found,
    duplicate_bank_name,
)
from bankledger.domain.entry import validate_cents

logger = logging.getLogger(__name__)


class BankService:
    """Service for managing banks."""

    def __init__(self, db: Database):
        """Initialize bank service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate_name(self, name: Optional[str]) -> str:
        if name is None or not name.strip():
            raise ValidationError("Bank name is required")
        return name.strip()

    def _validate_opening_balance(self, opening_balance) -> Decimal:
        try:
            value = Decimal(str(opening_balance))
        except ArithmeticError as e:
            raise ValidationError(f"Invalid opening balance '{opening_balance}'") from e
        if not value.is_finite():
            raise ValidationError(f"Invalid opening balance '{opening_balance}'")
        return validate_cents(value, "Opening balance")

    def create_bank(
        self, name: str, opening_balance: Decimal = Decimal("0"), iban: Optional[str] = None
    ) -> int:
        """Create a new bank.

        Args:
            name: Bank name
            opening_balance: Balance of the bank before any recorded entry
            iban: Optional IBAN

        Returns:
            Bank ID

        Raises:
            ValidationError: If the name is empty or the opening balance has sub-cent digits
            ConflictError: If a bank with the same name exists
        """
        name = self._validate_name(name)
        opening_balance = self._validate_opening_balance(opening_balance)
        if self.db.get_bank_by_name(name) is not None:
            raise ConflictError(duplicate_bank_name(name))

        bank_id = self.db.create_bank(name=name, opening_balance=opening_balance, iban=iban or None)
        logger.info("Created bank %d (%s)", bank_id, name)
        return bank_id

    def get_bank(self, bank_id: int) -> Optional[BankEntity]:
        """Get bank by ID.

        Args:
            bank_id: Bank ID

        Returns:
            Bank entity or None if not found
        """
        return self.db.get_bank(bank_id)

    def get_bank_by_name(self, name: str) -> Optional[BankEntity]:
        """Get bank by its exact name."""
        return self.db.get_bank_by_name(name)

    def require_bank(self, bank_id: int) -> BankEntity:
        """Get bank by ID or raise NotFoundError."""
        bank = self.db.get_bank(bank_id)
        if bank is None:
            raise NotFoundError(bank_not_found(bank_id))
        return bank

    def list_banks(self) -> list[BankEntity]:
        """List all banks.

        Returns:
            List of bank entities
        """
        return self.db.list_banks()

    def update_bank(
        self,
        bank_id: int,
        name: Optional[str] = None,
        iban: Optional[str] = None,
        opening_balance: Optional[Decimal] = None,
    ) -> None:
        """Edit a bank's name, IBAN or opening balance.

        Only the given fields change. Changing the opening balance does not touch
        any entry; balances are recomputed on the next query.

        Raises:
            NotFoundError: If the bank does not exist
            ValidationError: If the new name is empty or the opening balance is invalid
            ConflictError: If the new name is taken by another bank
        """
        self.require_bank(bank_id)

        if name is not None:
            name = self._validate_name(name)
            existing = self.db.get_bank_by_name(name)
            if existing is not None and existing.id != bank_id:
                raise ConflictError(duplicate_bank_name(name))

        self.db.update_bank(
            bank_id=bank_id,
            name=name,
            iban=iban,
            opening_balance=(
                self._validate_opening_balance(opening_balance)
                if opening_balance is not None
                else None
            ),
        )

    def delete_bank(self, bank_id: int, cascade: bool = False) -> int:
        """Delete a bank.

        Args:
            bank_id: Bank ID to delete
            cascade: Also delete the bank's entries instead of refusing

        Returns:
            Number of entries deleted along with the bank

        Raises:
            NotFoundError: If the bank does not exist
            DependencyError: If the bank has entries and cascade is False
        """
        self.require_bank(bank_id)

        entry_count = self.db.get_bank_entry_count(bank_id)
        if entry_count > 0 and not cascade:
            raise DependencyError(bank_delete_blocked(bank_id, entry_count))

        self.db.delete_bank(bank_id, cascade=cascade)
        logger.info("Deleted bank %d with %d entries", bank_id, entry_count)
        return entry_count
