"""Bank balance summary command."""

import click
from datetime import date
from bankledger.cli.bank_resolution import resolve_bank_or_exit
from bankledger.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.bank import BankService
from bankledger.domain.entities import DateRange
from bankledger.domain.errors import DomainError
from bankledger.domain.reports import ReportService
from bankledger.utils.date_parser import format_date
from bankledger.utils.money import format_money


@click.command("balance")
@click.option("--bank", required=True, help="Bank name or ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@period_options
@click.pass_context
def balance(ctx, bank: str, start_date: str | None, end_date: str | None, **kwargs):
    """Show a bank's totals and balance.

    Without a period all entries are summed. With a period the totals cover
    that period only and the balance is the bank's balance at its end.

    Examples:
        bankledger balance --bank "CIB"
        bankledger balance --bank 1 --last-month
    """
    db = ctx.obj["db"]
    service = ReportService(db)
    bank_id = resolve_bank_or_exit(ctx, BankService(db), bank)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(kwargs),
        today=service.settings.today(),
    )

    date_range = None
    if start is not None or end is not None:
        date_range = DateRange(
            start_date=start if start is not None else date.min,
            end_date=end if end is not None else service.settings.today(),
        )

    try:
        bank_obj = service.db.get_bank(bank_id)
        snapshot = service.bank_summary(bank_id, date_range)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\n{bank_obj.name}")
    if date_range is not None:
        since = format_date(start) if start is not None else "the beginning"
        click.echo(f"Period: {since} to {format_date(date_range.end_date)}")
    click.echo("-" * 40)
    click.echo(f"{'Opening balance':<20}{format_money(bank_obj.opening_balance):>20}")
    click.echo(f"{'Total debit':<20}{format_money(snapshot.total_debit):>20}")
    click.echo(f"{'Total credit':<20}{format_money(snapshot.total_credit):>20}")
    click.echo("-" * 40)
    click.echo(f"{'Balance':<20}{format_money(snapshot.balance):>20}")


def register_commands(cli):
    """Register balance command with main CLI."""
    cli.add_command(balance)
