"""Utility for resolving bank names to IDs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bankledger.domain.errors import NotFoundError

if TYPE_CHECKING:
    from bankledger.domain.bank import BankService


def resolve_bank(bank_service: BankService, bank: str | int) -> int:
    """Resolve bank name or ID to bank ID.

    Args:
        bank_service: BankService instance
        bank: Bank name (str) or ID (int or string representation of int)

    Returns:
        Bank ID

    Raises:
        NotFoundError: If bank is not found
    """
    if isinstance(bank, int):
        if bank_service.get_bank(bank) is None:
            raise NotFoundError(f"Bank ID {bank} not found")
        return bank

    # Digits are treated as an ID, anything else as a name
    try:
        bank_id = int(bank)
    except (ValueError, TypeError):
        bank_id = None

    if bank_id is not None:
        if bank_service.get_bank(bank_id) is None:
            raise NotFoundError(f"Bank ID {bank_id} not found")
        return bank_id

    bank_obj = bank_service.get_bank_by_name(bank)
    if bank_obj is None:
        raise NotFoundError(f"Bank '{bank}' not found")
    return bank_obj.id
