"""Fiscal year report commands."""

from pathlib import Path

import click
from bankledger.cli.bank_resolution import resolve_bank_or_exit
from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.bank import BankService
from bankledger.domain.entities import FiscalRange
from bankledger.domain.errors import DomainError
from bankledger.domain.fiscal import parse_fiscal_label
from bankledger.domain.reports import ReportService
from bankledger.export.spreadsheet import (
    month_label,
    monthly_report_file_name,
    write_monthly_report,
    write_yearly_report,
    yearly_report_file_name,
)
from bankledger.utils.date_parser import format_date
from bankledger.utils.money import format_money


def _fiscal_range_or_exit(ctx, service: ReportService, label: str | None) -> FiscalRange:
    """Resolve --fiscal-year, defaulting to the fiscal year of today."""
    if label is None:
        return service.fiscal_range()
    start_month, end_month = service.settings.fiscal_months()
    try:
        return parse_fiscal_label(label, start_month, end_month)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def _xlsx_target(xlsx: str, default_name: str) -> Path:
    path = Path(xlsx)
    if path.is_dir():
        return path / default_name
    return path


@click.group()
def report_group():
    """Fiscal year reports."""
    pass


@report_group.command("yearly")
@click.option("--fiscal-year", help="Fiscal year label like 2023/2024 (defaults to the current one)")
@click.option("--xlsx", type=click.Path(), help="Also write the report to this Excel file or directory")
@click.pass_context
def yearly_report(ctx, fiscal_year: str | None, xlsx: str | None):
    """Show opening balance, debit, credit and final balance of every bank.

    Examples:
        bankledger report yearly
        bankledger report yearly --fiscal-year 2023/2024 --xlsx reports/
    """
    db = ctx.obj["db"]
    service = ReportService(db)
    fiscal_range = _fiscal_range_or_exit(ctx, service, fiscal_year)
    report = service.yearly_report(fiscal_range)

    click.echo(
        f"\nFiscal year {fiscal_range.label} "
        f"({format_date(fiscal_range.start_date)} to {format_date(fiscal_range.end_date)})"
    )
    if not report.rows:
        click.echo("No banks found.")
        return

    click.echo("-" * 100)
    click.echo(f"{'Bank':<20} {'Opening':>18} {'Debit':>18} {'Credit':>18} {'Final':>18}")
    click.echo("-" * 100)
    for row in report.rows:
        click.echo(
            f"{row.bank_name[:20]:<20} {format_money(row.opening_balance):>18} "
            f"{format_money(row.total_debit):>18} {format_money(row.total_credit):>18} "
            f"{format_money(row.final_balance):>18}"
        )
    click.echo("-" * 100)
    totals = report.totals
    click.echo(
        f"{'Grand total':<20} {format_money(totals.opening_balance):>18} "
        f"{format_money(totals.total_debit):>18} {format_money(totals.total_credit):>18} "
        f"{format_money(totals.final_balance):>18}"
    )

    if xlsx:
        path = write_yearly_report(report, _xlsx_target(xlsx, yearly_report_file_name(fiscal_range)))
        click.echo(f"\nWrote {path}")


@report_group.command("monthly")
@click.option("--bank", required=True, help="Bank name or ID")
@click.option("--fiscal-year", help="Fiscal year label like 2023/2024 (defaults to the current one)")
@click.option("--xlsx", type=click.Path(), help="Also write the report to this Excel file or directory")
@click.pass_context
def monthly_report(ctx, bank: str, fiscal_year: str | None, xlsx: str | None):
    """Show a bank's debit, credit and running balance for each fiscal month.

    Examples:
        bankledger report monthly --bank "CIB"
        bankledger report monthly --bank 1 --fiscal-year 2023/2024 --xlsx cib.xlsx
    """
    db = ctx.obj["db"]
    service = ReportService(db)
    bank_id = resolve_bank_or_exit(ctx, BankService(db), bank)
    fiscal_range = _fiscal_range_or_exit(ctx, service, fiscal_year)

    try:
        report = service.monthly_report(bank_id, fiscal_range)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\n{report.bank_name} - fiscal year {fiscal_range.label}")
    click.echo("-" * 80)
    click.echo(f"{'Month':<20} {'Debit':>18} {'Credit':>18} {'Balance':>18}")
    click.echo("-" * 80)
    click.echo(f"{'Opening balance':<20} {'':>18} {'':>18} {format_money(report.opening_balance):>18}")
    for bucket in report.months:
        click.echo(
            f"{month_label(bucket.year, bucket.month):<20} {format_money(bucket.debit):>18} "
            f"{format_money(bucket.credit):>18} {format_money(bucket.balance):>18}"
        )
    click.echo("-" * 80)
    totals = report.totals
    click.echo(
        f"{'Total':<20} {format_money(totals.debit):>18} "
        f"{format_money(totals.credit):>18} {format_money(totals.final_balance):>18}"
    )

    if xlsx:
        default_name = monthly_report_file_name(report.bank_name, fiscal_range)
        path = write_monthly_report(report, _xlsx_target(xlsx, default_name))
        click.echo(f"\nWrote {path}")


@report_group.command("fiscal-years")
@click.option("--count", default=5, show_default=True, type=click.IntRange(min=1), help="Number of fiscal years")
@click.pass_context
def fiscal_years(ctx, count: int):
    """List the current fiscal year and the ones before it."""
    db = ctx.obj["db"]
    service = ReportService(db)

    for fiscal_range in service.available_fiscal_ranges(count):
        click.echo(
            f"{fiscal_range.label:<12} {format_date(fiscal_range.start_date)} to "
            f"{format_date(fiscal_range.end_date)}"
        )


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
