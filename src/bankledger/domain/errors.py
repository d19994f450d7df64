"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested bank or entry does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class BackupError(ValidationError):
    """Backup payload is malformed and cannot be applied."""


def bank_not_found(bank_id: int) -> str:
    """Return message for missing bank."""
    return f"Bank {bank_id} not found"


def entry_not_found(entry_id: int) -> str:
    """Return message for missing entry."""
    return f"Entry {entry_id} not found"


def duplicate_bank_name(name: str) -> str:
    """Return message for a bank name that is already taken."""
    return f"Bank with name '{name}' already exists"


def bank_delete_blocked(bank_id: int, entry_count: int) -> str:
    """Return message when a bank still has entries."""
    return (
        f"Cannot delete bank {bank_id}: it has "
        f"{entry_count} entr{'ies' if entry_count != 1 else 'y'}. "
        "Delete them first or request a cascading delete."
    )
