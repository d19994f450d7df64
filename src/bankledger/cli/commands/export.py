"""Spreadsheet export commands."""

import re
from pathlib import Path

import click
from bankledger.cli.bank_resolution import resolve_bank_or_exit
from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.bank import BankService
from bankledger.domain.entities import EntryQuery
from bankledger.domain.errors import DomainError
from bankledger.domain.fiscal import month_range
from bankledger.domain.reports import ReportService
from bankledger.export.spreadsheet import (
    bank_entries_file_name,
    bank_month_file_name,
    write_bank_entries,
    write_bank_month,
)

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})$")


def _parse_month_or_exit(ctx, value: str) -> tuple[int, int]:
    match = _MONTH_PATTERN.match(value.strip())
    if match is None or not 1 <= int(match.group(2)) <= 12:
        click.echo(f"Error: Invalid month '{value}'. Expected YYYY-MM", err=True)
        ctx.exit(1)
    return int(match.group(1)), int(match.group(2))


@click.group()
def export_group():
    """Export ledger data to Excel."""
    pass


@export_group.command("entries")
@click.option("--bank", required=True, help="Bank name or ID")
@click.option("--month", help="Only this month (YYYY-MM), with a summary sheet")
@click.option("--output", required=True, type=click.Path(), help="Excel file or directory to write")
@click.pass_context
def export_entries(ctx, bank: str, month: str | None, output: str):
    """Write a bank's entries to an Excel workbook.

    The workbook has a Debit and a Credit sheet. With --month it covers that
    month only and starts with a Summary sheet holding the month's totals and
    the bank balance at the month's end.

    Examples:
        bankledger export entries --bank "CIB" --output exports/
        bankledger export entries --bank 1 --month 2024-07 --output cib-july.xlsx
    """
    db = ctx.obj["db"]
    service = ReportService(db)
    bank_id = resolve_bank_or_exit(ctx, BankService(db), bank)
    bank_obj = db.get_bank(bank_id)
    output_path = Path(output)

    try:
        if month is None:
            if output_path.is_dir():
                output_path = output_path / bank_entries_file_name(bank_obj.name, service.settings.today())
            entries = db.list_entries(EntryQuery(bank_id=bank_id))
            path = write_bank_entries(bank_obj, entries, output_path)
        else:
            year, month_number = _parse_month_or_exit(ctx, month)
            period = month_range(year, month_number)
            if output_path.is_dir():
                output_path = output_path / bank_month_file_name(bank_obj.name, year, month_number)
            entries = db.list_entries(
                EntryQuery(bank_id=bank_id, start_date=period.start_date, end_date=period.end_date)
            )
            snapshot = service.bank_summary(bank_id, period)
            path = write_bank_month(bank_obj, year, month_number, entries, snapshot, output_path)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Exported {len(entries)} entr{'y' if len(entries) == 1 else 'ies'} to {path}")


def register_commands(cli):
    """Register export commands with main CLI."""
    cli.add_command(export_group, name="export")
