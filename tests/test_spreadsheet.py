"""Tests for Excel workbook writers and the export command."""

from datetime import date, datetime, UTC
from decimal import Decimal

import pytest
from openpyxl import load_workbook

from bankledger.cli.main import cli
from bankledger.domain.entities import BalanceSnapshot, Bank, Entry, EntryType
from bankledger.domain.fiscal import fiscal_range_for
from bankledger.domain.reports import build_monthly_report, build_yearly_report
from bankledger.export.spreadsheet import (
    MONEY_FORMAT,
    bank_entries_file_name,
    bank_month_file_name,
    monthly_report_file_name,
    write_bank_entries,
    write_bank_month,
    write_monthly_report,
    write_yearly_report,
    yearly_report_file_name,
)

FISCAL = fiscal_range_for(date(2024, 8, 1))
BANK = Bank(id=1, name="CIB", iban=None, opening_balance=Decimal("1000"), created_at=datetime.now(UTC))
ENTRIES = [
    Entry(1, 1, EntryType.DEBIT, "Salary", date(2024, 7, 1), Decimal("1500")),
    Entry(2, 1, EntryType.CREDIT, "Rent", date(2024, 7, 15), Decimal("500")),
    Entry(3, 1, EntryType.DEBIT, "Bonus", date(2024, 8, 10), Decimal("2200")),
]


def _rows(sheet):
    return [list(row) for row in sheet.iter_rows(values_only=True)]


def test_yearly_report_workbook(tmp_path):
    report = build_yearly_report([BANK], ENTRIES, FISCAL)
    path = write_yearly_report(report, tmp_path / "yearly.xlsx")

    sheet = load_workbook(path).active
    assert sheet["A1"].value == "Bank balances - fiscal year 2024/2025"
    assert [c.value for c in sheet[2]] == [
        "Bank", "Opening balance", "Total debit", "Total credit", "Final balance"
    ]
    assert [c.value for c in sheet[3]] == ["CIB", 1000, 3700, 500, 4200]
    assert all(c.value is None for c in sheet[4])
    assert [c.value for c in sheet[5]] == ["Grand total", 1000, 3700, 500, 4200]
    assert sheet["E3"].number_format == MONEY_FORMAT


def test_monthly_report_workbook(tmp_path):
    report = build_monthly_report(BANK, ENTRIES, FISCAL)
    path = write_monthly_report(report, tmp_path / "monthly.xlsx")

    rows = _rows(load_workbook(path).active)
    assert rows[0][0] == "CIB - fiscal year 2024/2025"
    assert rows[2] == ["Opening balance", None, None, 1000]
    assert rows[3] == ["July 2024", 1500, 500, 2000]
    assert rows[4] == ["August 2024", 2200, 0, 4200]
    assert rows[14][0] == "June 2025"
    assert rows[15] == ["Total", 3700, 500, 4200]


def test_bank_entries_workbook(tmp_path):
    path = write_bank_entries(BANK, ENTRIES, tmp_path / "entries.xlsx")

    workbook = load_workbook(path)
    assert workbook.sheetnames == ["Debit", "Credit"]
    assert _rows(workbook["Debit"]) == [
        ["Description", "Date", "Amount"],
        ["Salary", "2024-07-01", 1500],
        ["Bonus", "2024-08-10", 2200],
    ]
    assert _rows(workbook["Credit"]) == [
        ["Description", "Date", "Amount"],
        ["Rent", "2024-07-15", 500],
    ]


def test_bank_month_workbook(tmp_path):
    snapshot = BalanceSnapshot(
        total_debit=Decimal("1500"), total_credit=Decimal("500"), balance=Decimal("2000")
    )
    path = write_bank_month(BANK, 2024, 7, ENTRIES, snapshot, tmp_path / "july.xlsx")

    workbook = load_workbook(path)
    assert workbook.sheetnames == ["Summary", "Debit", "Credit"]
    assert _rows(workbook["Summary"])[1:] == [
        ["Bank", "CIB"],
        ["Month", "July 2024"],
        ["Total debit", 1500],
        ["Total credit", 500],
        ["Balance", 2000],
    ]
    # August entries are left out
    assert [row[0] for row in _rows(workbook["Debit"])] == ["Description", "Salary"]


def test_default_file_names():
    assert yearly_report_file_name(FISCAL) == "Bank balances - fiscal year 2024-2025.xlsx"
    assert monthly_report_file_name("CIB", FISCAL) == "CIB - monthly report - fiscal year 2024-2025.xlsx"
    assert bank_entries_file_name("CIB", date(2024, 7, 25)) == "CIB - all entries - 2024-07-25.xlsx"
    assert bank_month_file_name("CIB", 2024, 7) == "CIB - July 2024.xlsx"


class TestExportCommand:
    """Tests for the export entries command."""

    def test_export_all_entries(self, cli_runner, temp_db, sample_entries, tmp_path):
        target = tmp_path / "all.xlsx"
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "export", "entries", "--bank", "National Bank", "--output", str(target)],
        )

        assert result.exit_code == 0
        assert "Exported 3 entries" in result.output
        assert load_workbook(target).sheetnames == ["Debit", "Credit"]

    def test_export_month(self, cli_runner, temp_db, sample_entries, tmp_path):
        result = cli_runner.invoke(
            cli,
            [
                "--db-path", temp_db.database_path,
                "export", "entries", "--bank", "1", "--month", "2024-08", "--output", str(tmp_path),
            ],
        )

        assert result.exit_code == 0
        path = tmp_path / "National Bank - August 2024.xlsx"
        summary = _rows(load_workbook(path)["Summary"])
        assert ["Total debit", 2200] in summary
        assert ["Balance", 4200] in summary

    @pytest.mark.parametrize("month", ["2024-13", "August", "24-08"])
    def test_export_invalid_month(self, cli_runner, temp_db, sample_entries, tmp_path, month):
        result = cli_runner.invoke(
            cli,
            [
                "--db-path", temp_db.database_path,
                "export", "entries", "--bank", "1", "--month", month, "--output", str(tmp_path),
            ],
        )

        assert result.exit_code == 1
        assert "Invalid month" in result.output
