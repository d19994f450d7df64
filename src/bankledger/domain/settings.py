"""Ledger settings domain service."""

import logging
from datetime import date
from typing import Any, Optional

from bankledger.database.base import Database
from bankledger.domain.errors import ValidationError
from bankledger.domain.fiscal import DEFAULT_FISCAL_END_MONTH, DEFAULT_FISCAL_START_MONTH
from bankledger.utils.date_parser import format_date, parse_iso_date

logger = logging.getLogger(__name__)

FISCAL_START_MONTH = "fiscalStartMonth"
FISCAL_END_MONTH = "fiscalEndMonth"
FIXED_DATE = "fixedDate"

DEFAULT_SETTINGS: dict[str, Any] = {
    FISCAL_START_MONTH: DEFAULT_FISCAL_START_MONTH,
    FISCAL_END_MONTH: DEFAULT_FISCAL_END_MONTH,
    FIXED_DATE: None,
}


def validate_month(value: Any, label: str) -> int:
    """Return ``value`` as a month number, requiring 1-12."""
    message = f"{label} must be a month number between 1 and 12"
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(message)
    try:
        month = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(message) from e
    if not 1 <= month <= 12:
        raise ValidationError(message)
    return month


def validate_fixed_date(value: Any) -> Any:
    """Check a stored fixed date override and return it unchanged.

    Accepts None, an empty string, a ``YYYY-MM-DD`` string or the older
    {"enabled": bool, "date": "YYYY-MM-DD"} object.

    Raises:
        ValidationError: If the date is not a valid ``YYYY-MM-DD`` date
    """
    pinned = value
    if isinstance(value, dict):
        if not value.get("enabled"):
            return value
        pinned = value.get("date")
    if pinned is None or pinned == "":
        return value
    try:
        parse_iso_date(pinned)
    except ValueError as e:
        raise ValidationError(f"Invalid fixed date {pinned!r}. Expected YYYY-MM-DD") from e
    return value


class SettingsService:
    """Service for the fiscal month configuration and the fixed date override.

    Defaults are written to storage the first time any setting is read.
    """

    def __init__(self, db: Database):
        """Initialize settings service.

        Args:
            db: Database instance
        """
        self.db = db
        self._seeded = False

    def ensure_defaults(self) -> None:
        """Store every default setting that is not yet present."""
        if self._seeded:
            return
        stored = self.db.list_settings()
        for key, value in DEFAULT_SETTINGS.items():
            if key not in stored:
                self.db.set_setting(key, value)
                logger.debug("Seeded setting %s=%r", key, value)
        self._seeded = True

    def get(self, key: str) -> Any:
        """Get a setting value, seeding defaults first."""
        self.ensure_defaults()
        return self.db.get_setting(key, DEFAULT_SETTINGS.get(key))

    def all(self) -> dict[str, Any]:
        """Return all settings, seeding defaults first."""
        self.ensure_defaults()
        return self.db.list_settings()

    def fiscal_months(self) -> tuple[int, int]:
        """Return the configured (start_month, end_month) of the fiscal year."""
        start = self.get(FISCAL_START_MONTH)
        end = self.get(FISCAL_END_MONTH)
        return (
            int(start) if start is not None else DEFAULT_FISCAL_START_MONTH,
            int(end) if end is not None else DEFAULT_FISCAL_END_MONTH,
        )

    def set_fiscal_months(self, start_month: int, end_month: int) -> None:
        """Set the fiscal year start and end months.

        The pair is not checked for spanning exactly twelve months.

        Raises:
            ValidationError: If a month is outside 1-12
        """
        start_month = validate_month(start_month, "Fiscal start month")
        end_month = validate_month(end_month, "Fiscal end month")
        self.ensure_defaults()
        self.db.set_setting(FISCAL_START_MONTH, start_month)
        self.db.set_setting(FISCAL_END_MONTH, end_month)

    def fixed_date(self) -> Optional[date]:
        """Return the fixed date override, or None when the real date is used."""
        value = self.get(FIXED_DATE)
        # Older stores kept {"enabled": bool, "date": "YYYY-MM-DD"}
        if isinstance(value, dict):
            value = value.get("date") if value.get("enabled") else None
        if not value:
            return None
        text = format_date(value)
        if not text:
            logger.warning("Ignoring unreadable fixed date setting %r", value)
            return None
        return date.fromisoformat(text)

    def set_fixed_date(self, value: Optional[date]) -> None:
        """Set or clear (None) the fixed date override."""
        self.ensure_defaults()
        self.db.set_setting(FIXED_DATE, format_date(value) if value is not None else None)

    def today(self) -> date:
        """Return the fixed date override if set, otherwise the real current date."""
        fixed = self.fixed_date()
        return fixed if fixed is not None else date.today()
