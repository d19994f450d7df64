"""Spreadsheet export for bankledger."""

from bankledger.export.spreadsheet import (
    write_bank_entries,
    write_bank_month,
    write_monthly_report,
    write_yearly_report,
)

__all__ = [
    "write_yearly_report",
    "write_monthly_report",
    "write_bank_entries",
    "write_bank_month",
]
