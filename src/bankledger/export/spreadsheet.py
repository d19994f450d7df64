"""Excel workbook writers for reports and entry listings."""

import calendar
import logging
from datetime import date
from pathlib import Path
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.worksheet.worksheet import Worksheet

from bankledger.domain.entities import (
    BalanceSnapshot,
    Bank,
    Entry,
    EntryType,
    FiscalRange,
    MonthlyReport,
    YearlyReport,
)
from bankledger.utils.date_parser import format_date

logger = logging.getLogger(__name__)

MONEY_FORMAT = "#,##0.00"

YEARLY_HEADERS = ["Bank", "Opening balance", "Total debit", "Total credit", "Final balance"]
MONTHLY_HEADERS = ["Month", "Debit", "Credit", "Balance"]
ENTRY_HEADERS = ["Description", "Date", "Amount"]

DEBIT_SHEET = "Debit"
CREDIT_SHEET = "Credit"
SUMMARY_SHEET = "Summary"


def _file_label(fiscal_range: FiscalRange) -> str:
    return fiscal_range.label.replace("/", "-")


def month_label(year: int, month: int) -> str:
    """Return e.g. ``July 2024``."""
    return f"{calendar.month_name[month]} {year}"


def yearly_report_file_name(fiscal_range: FiscalRange) -> str:
    return f"Bank balances - fiscal year {_file_label(fiscal_range)}.xlsx"


def monthly_report_file_name(bank_name: str, fiscal_range: FiscalRange) -> str:
    return f"{bank_name} - monthly report - fiscal year {_file_label(fiscal_range)}.xlsx"


def bank_entries_file_name(bank_name: str, export_date: date) -> str:
    return f"{bank_name} - all entries - {format_date(export_date)}.xlsx"


def bank_month_file_name(bank_name: str, year: int, month: int) -> str:
    return f"{bank_name} - {month_label(year, month)}.xlsx"


def _write_header(sheet: Worksheet, headers: list[str]) -> None:
    sheet.append(headers)
    for cell in sheet[sheet.max_row]:
        cell.font = Font(bold=True)


def _format_money_cells(sheet: Worksheet, row: int, columns: Iterable[int]) -> None:
    for column in columns:
        sheet.cell(row=row, column=column).number_format = MONEY_FORMAT


def _set_widths(sheet: Worksheet, widths: dict[str, int]) -> None:
    for column, width in widths.items():
        sheet.column_dimensions[column].width = width


def _save(workbook: Workbook, path: str | Path) -> Path:
    path = Path(path)
    workbook.save(path)
    logger.info("Wrote workbook %s", path)
    return path


def write_yearly_report(report: YearlyReport, path: str | Path) -> Path:
    """Write the fiscal year report of all banks.

    Layout: title row, header row, one row per bank, a blank spacer row and
    the grand total row.
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Fiscal year summary"

    sheet.append([f"Bank balances - fiscal year {report.fiscal_range.label}"])
    sheet["A1"].font = Font(size=14, bold=True)
    _write_header(sheet, YEARLY_HEADERS)

    for row in report.rows:
        sheet.append(
            [
                row.bank_name,
                row.opening_balance,
                row.total_debit,
                row.total_credit,
                row.final_balance,
            ]
        )
        _format_money_cells(sheet, sheet.max_row, range(2, 6))

    totals = report.totals
    # one blank spacer row before the grand total
    total_row = sheet.max_row + 2
    sheet.cell(row=total_row, column=1, value="Grand total")
    for column, value in enumerate(
        [totals.opening_balance, totals.total_debit, totals.total_credit, totals.final_balance],
        start=2,
    ):
        sheet.cell(row=total_row, column=column, value=value)
    _format_money_cells(sheet, total_row, range(2, 6))
    for cell in sheet[total_row]:
        cell.font = Font(bold=True)

    _set_widths(sheet, {"A": 25, "B": 20, "C": 20, "D": 20, "E": 20})
    return _save(workbook, path)


def write_monthly_report(report: MonthlyReport, path: str | Path) -> Path:
    """Write the monthly comparative report of one bank."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Monthly report"

    sheet.append([f"{report.bank_name} - fiscal year {report.fiscal_range.label}"])
    sheet["A1"].font = Font(size=14, bold=True)
    _write_header(sheet, MONTHLY_HEADERS)

    sheet.append(["Opening balance", None, None, report.opening_balance])
    _format_money_cells(sheet, sheet.max_row, [4])

    for bucket in report.months:
        sheet.append([month_label(bucket.year, bucket.month), bucket.debit, bucket.credit, bucket.balance])
        _format_money_cells(sheet, sheet.max_row, range(2, 5))

    totals = report.totals
    sheet.append(["Total", totals.debit, totals.credit, totals.final_balance])
    _format_money_cells(sheet, sheet.max_row, range(2, 5))
    for cell in sheet[sheet.max_row]:
        cell.font = Font(bold=True)

    _set_widths(sheet, {"A": 20, "B": 18, "C": 18, "D": 18})
    return _save(workbook, path)


def _write_entry_sheet(sheet: Worksheet, entries: list[Entry]) -> None:
    _write_header(sheet, ENTRY_HEADERS)
    for entry in entries:
        sheet.append([entry.description, format_date(entry.date), entry.amount])
        _format_money_cells(sheet, sheet.max_row, [3])
    _set_widths(sheet, {"A": 40, "B": 15, "C": 15})


def _split_by_type(entries: Iterable[Entry]) -> tuple[list[Entry], list[Entry]]:
    debits = []
    credits = []
    for entry in entries:
        if entry.type == EntryType.DEBIT:
            debits.append(entry)
        else:
            credits.append(entry)
    return debits, credits


def write_bank_entries(bank: Bank, entries: Iterable[Entry], path: str | Path) -> Path:
    """Write a bank's entries to a workbook with a Debit and a Credit sheet."""
    debits, credits = _split_by_type(entry for entry in entries if entry.bank_id == bank.id)

    workbook = Workbook()
    debit_sheet = workbook.active
    debit_sheet.title = DEBIT_SHEET
    _write_entry_sheet(debit_sheet, debits)
    _write_entry_sheet(workbook.create_sheet(CREDIT_SHEET), credits)
    return _save(workbook, path)


def write_bank_month(
    bank: Bank,
    year: int,
    month: int,
    entries: Iterable[Entry],
    snapshot: BalanceSnapshot,
    path: str | Path,
) -> Path:
    """Write one month of a bank: a Summary sheet followed by Debit and Credit sheets.

    ``snapshot`` holds the month's totals and the balance at the month's end.
    """
    debits, credits = _split_by_type(
        entry
        for entry in entries
        if entry.bank_id == bank.id and entry.date.year == year and entry.date.month == month
    )

    workbook = Workbook()
    summary = workbook.active
    summary.title = SUMMARY_SHEET
    summary.append([f"{bank.name} - {month_label(year, month)}"])
    summary["A1"].font = Font(size=14, bold=True)
    summary.append(["Bank", bank.name])
    summary.append(["Month", month_label(year, month)])
    for label, value in (
        ("Total debit", snapshot.total_debit),
        ("Total credit", snapshot.total_credit),
        ("Balance", snapshot.balance),
    ):
        summary.append([label, value])
        _format_money_cells(summary, summary.max_row, [2])
    for row in summary.iter_rows(min_row=2, max_col=1):
        row[0].font = Font(bold=True)
    _set_widths(summary, {"A": 20, "B": 25})

    _write_entry_sheet(workbook.create_sheet(DEBIT_SHEET), debits)
    _write_entry_sheet(workbook.create_sheet(CREDIT_SHEET), credits)
    return _save(workbook, path)
