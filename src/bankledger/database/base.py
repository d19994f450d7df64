"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from bankledger.domain.entities import Bank, Entry, EntryQuery, EntryType


class Database(ABC):
    """Abstract database interface for bankledger.

    Storage failures are raised to the caller unchanged.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Bank operations
    @abstractmethod
    def create_bank(
        self, name: str, opening_balance: Decimal, iban: Optional[str] = None
    ) -> int:
        """Create a new bank. Returns bank ID."""
        pass

    @abstractmethod
    def get_bank(self, bank_id: int) -> Optional[Bank]:
        """Get bank by ID."""
        pass

    @abstractmethod
    def get_bank_by_name(self, name: str) -> Optional[Bank]:
        """Get bank by name."""
        pass

    @abstractmethod
    def list_banks(self) -> list[Bank]:
        """List all banks."""
        pass

    @abstractmethod
    def update_bank(
        self,
        bank_id: int,
        name: Optional[str] = None,
        iban: Optional[str] = None,
        opening_balance: Optional[Decimal] = None,
    ) -> None:
        """Update bank fields that are not None."""
        pass

    @abstractmethod
    def delete_bank(self, bank_id: int, cascade: bool = False) -> None:
        """Delete a bank.

        Refuses when the bank still has entries, unless ``cascade`` is True, in
        which case its entries are deleted first in the same transaction.
        """
        pass

    @abstractmethod
    def get_bank_entry_count(self, bank_id: int) -> int:
        """Get count of entries posted against a bank."""
        pass

    # Entry operations
    @abstractmethod
    def create_entry(
        self,
        bank_id: int,
        entry_type: EntryType,
        description: str,
        date: date,
        amount: Decimal,
    ) -> int:
        """Create an entry. Returns entry ID."""
        pass

    @abstractmethod
    def get_entry(self, entry_id: int) -> Optional[Entry]:
        """Get entry by ID."""
        pass

    @abstractmethod
    def update_entry(
        self,
        entry_id: int,
        bank_id: Optional[int] = None,
        entry_type: Optional[EntryType] = None,
        description: Optional[str] = None,
        date: Optional[date] = None,
        amount: Optional[Decimal] = None,
    ) -> None:
        """Update entry fields that are not None."""
        pass

    @abstractmethod
    def delete_entry(self, entry_id: int) -> None:
        """Delete an entry."""
        pass

    @abstractmethod
    def delete_entries_for_bank(self, bank_id: int) -> int:
        """Delete every entry of a bank. Returns the number deleted."""
        pass

    @abstractmethod
    def list_entries(self, query: Optional[EntryQuery] = None) -> list[Entry]:
        """List entries matching a query, ordered by date then ID.

        Date bounds are inclusive. Without a bank ID entries of all banks are
        returned; without an entry type both debits and credits are returned.
        """
        pass

    # Settings operations
    @abstractmethod
    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value, or ``default`` if the key is not stored."""
        pass

    @abstractmethod
    def set_setting(self, key: str, value: Any) -> None:
        """Create or replace a setting value."""
        pass

    @abstractmethod
    def list_settings(self) -> dict[str, Any]:
        """Return all settings as a key-value mapping."""
        pass

    # Bulk operations
    @abstractmethod
    def replace_all(
        self,
        banks: list[dict[str, Any]],
        entries: list[dict[str, Any]],
        settings: list[dict[str, Any]],
    ) -> None:
        """Replace all banks, entries and settings in one transaction.

        Rows are dictionaries keyed by the ORM column names. On any failure
        nothing is changed and the error is re-raised.
        """
        pass
