"""JSON backup export and transactional restore."""

import json
import logging
from datetime import date, datetime, UTC
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

from dateutil import parser as date_parser

from bankledger.database.base import Database
from bankledger.domain.entities import EntryType
from bankledger.domain.entry import validate_cents
from bankledger.domain.errors import BackupError, ValidationError
from bankledger.domain.settings import (
    FISCAL_END_MONTH,
    FISCAL_START_MONTH,
    FIXED_DATE,
    SettingsService,
    validate_fixed_date,
    validate_month,
)
from bankledger.utils.date_parser import format_date, parse_iso_date
from bankledger.utils.money import parse_amount

logger = logging.getLogger(__name__)

BACKUP_VERSION = 1
REQUIRED_SECTIONS = ("banks", "entries", "settings")


def default_backup_file_name(today: Optional[date] = None) -> str:
    """Return the default file name of a backup taken on ``today``."""
    today = today or date.today()
    return f"bank-ledger-backup-{format_date(today)}.json"


def _money_to_json(value: Decimal) -> float | int:
    number = Decimal(value)
    return int(number) if number == number.to_integral_value() else float(number)


def _parse_money_field(value: Any, what: str) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise BackupError(f"{what}: missing or invalid amount")
    try:
        return validate_cents(parse_amount(str(value)))
    except ValueError as e:
        raise BackupError(f"{what}: {e}") from e


def _parse_int_field(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise BackupError(f"{what} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise BackupError(f"{what} must be an integer") from e


def _parse_bank(raw: Any, index: int) -> dict[str, Any]:
    what = f"Bank #{index + 1}"
    if not isinstance(raw, dict):
        raise BackupError(f"{what} is not an object")
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise BackupError(f"{what} has no name")

    opening = raw.get("openingBalance", 0)
    row: dict[str, Any] = {
        "id": _parse_int_field(raw.get("id"), f"{what} id"),
        "name": name.strip(),
        "iban": raw.get("iban") or None,
        "opening_balance": _parse_money_field(opening if opening is not None else 0, what),
    }
    created_at = raw.get("createdAt")
    if created_at:
        try:
            row["created_at"] = date_parser.isoparse(str(created_at))
        except ValueError as e:
            raise BackupError(f"{what} has an invalid createdAt '{created_at}'") from e
    return row


def _parse_entry(raw: Any, index: int, bank_ids: set[int]) -> dict[str, Any]:
    what = f"Entry #{index + 1}"
    if not isinstance(raw, dict):
        raise BackupError(f"{what} is not an object")

    bank_id = _parse_int_field(raw.get("bankId"), f"{what} bankId")
    if bank_id not in bank_ids:
        raise BackupError(f"{what} references unknown bank {bank_id}")

    try:
        entry_type = EntryType(raw.get("type"))
    except ValueError as e:
        raise BackupError(f"{what} has invalid type {raw.get('type')!r}") from e

    description = raw.get("description")
    if not isinstance(description, str) or not description.strip():
        raise BackupError(f"{what} has no description")

    try:
        entry_date = parse_iso_date(raw.get("date"))
    except ValueError as e:
        raise BackupError(f"{what} has an invalid date {raw.get('date')!r}") from e

    amount = _parse_money_field(raw.get("amount"), what)
    if amount <= 0:
        raise BackupError(f"{what}: amount must be greater than zero")

    row: dict[str, Any] = {
        "bank_id": bank_id,
        "type": entry_type.value,
        "description": description.strip(),
        "date": entry_date,
        "amount": amount,
    }
    if raw.get("id") is not None:
        row["id"] = _parse_int_field(raw.get("id"), f"{what} id")
    return row


def _parse_setting(raw: Any, index: int) -> dict[str, Any]:
    if not isinstance(raw, dict) or not isinstance(raw.get("key"), str):
        raise BackupError(f"Setting #{index + 1} has no key")
    key = raw["key"]
    value = raw.get("value")
    try:
        if key == FISCAL_START_MONTH:
            value = validate_month(value, "Fiscal start month")
        elif key == FISCAL_END_MONTH:
            value = validate_month(value, "Fiscal end month")
        elif key == FIXED_DATE:
            value = validate_fixed_date(value)
    except ValidationError as e:
        raise BackupError(f"Setting '{key}': {e}") from e
    return {"key": key, "value": value}


def parse_backup(payload: Any) -> tuple[list[dict], list[dict], list[dict]]:
    """Validate a backup payload and convert it to storage rows.

    Accepts the current layout and the older one that nested the three
    collections under "data".

    Returns:
        (banks, entries, settings) rows keyed by column name

    Raises:
        BackupError: If the payload is malformed
    """
    if not isinstance(payload, dict):
        raise BackupError("Invalid backup file structure: expected a JSON object")
    if "banks" not in payload and isinstance(payload.get("data"), dict):
        payload = payload["data"]

    for section in REQUIRED_SECTIONS:
        if not isinstance(payload.get(section), list):
            raise BackupError(f"Invalid backup file structure: '{section}' must be a list")

    banks = [_parse_bank(raw, i) for i, raw in enumerate(payload["banks"])]
    bank_ids = {bank["id"] for bank in banks}
    entries = [_parse_entry(raw, i, bank_ids) for i, raw in enumerate(payload["entries"])]
    settings = [_parse_setting(raw, i) for i, raw in enumerate(payload["settings"])]
    return banks, entries, settings


class BackupService:
    """Service for exporting and restoring the whole ledger."""

    def __init__(self, db: Database):
        """Initialize backup service.

        Args:
            db: Database instance
        """
        self.db = db

    def export_backup(self) -> dict[str, Any]:
        """Return the whole ledger as a JSON-serializable backup payload."""
        settings = SettingsService(self.db).all()
        banks = self.db.list_banks()
        entries = self.db.list_entries()

        payload = {
            "version": BACKUP_VERSION,
            "exportedAt": datetime.now(UTC).isoformat(),
            "banks": [
                {
                    "id": bank.id,
                    "name": bank.name,
                    "iban": bank.iban or "",
                    "openingBalance": _money_to_json(bank.opening_balance),
                    "createdAt": bank.created_at.isoformat() if bank.created_at else None,
                }
                for bank in sorted(banks, key=lambda b: b.id)
            ],
            "entries": [
                {
                    "id": entry.id,
                    "bankId": entry.bank_id,
                    "type": entry.type.value,
                    "description": entry.description,
                    "date": format_date(entry.date),
                    "amount": _money_to_json(entry.amount),
                }
                for entry in entries
            ],
            "settings": [{"key": key, "value": value} for key, value in settings.items()],
        }
        logger.info(
            "Exported backup with %d banks and %d entries", len(banks), len(entries)
        )
        return payload

    def write_backup(self, path: str | Path) -> Path:
        """Write a backup JSON file and return its path."""
        path = Path(path)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(self.export_backup(), handle, indent=2, ensure_ascii=False)
        return path

    def import_backup(self, payload: Any) -> dict[str, int]:
        """Replace all ledger data with a backup payload.

        The payload is validated completely before anything is deleted, and the
        replacement runs in a single transaction.

        Returns:
            Counts of restored banks, entries and settings

        Raises:
            BackupError: If the payload is malformed
        """
        banks, entries, settings = parse_backup(payload)
        self.db.replace_all(banks, entries, settings)
        logger.info(
            "Restored backup with %d banks, %d entries, %d settings",
            len(banks),
            len(entries),
            len(settings),
        )
        return {"banks": len(banks), "entries": len(entries), "settings": len(settings)}

    def read_backup(self, path: str | Path) -> Any:
        """Load a backup JSON file.

        Raises:
            BackupError: If the file is not valid JSON
        """
        try:
            with Path(path).open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise BackupError(f"Invalid backup file: {e}") from e

    def restore_file(self, path: str | Path) -> dict[str, int]:
        """Read a backup file and apply it."""
        return self.import_backup(self.read_backup(path))
