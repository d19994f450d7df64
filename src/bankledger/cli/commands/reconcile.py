"""Daily reconciliation command."""

import click
from bankledger.cli.bank_resolution import resolve_bank_or_exit
from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.bank import BankService
from bankledger.domain.errors import DomainError
from bankledger.domain.reports import ReportService
from bankledger.utils.date_parser import format_date, parse_date
from bankledger.utils.money import format_money, parse_amount


@click.command("reconcile")
@click.option("--bank", required=True, help="Bank name or ID")
@click.option("--date", "target_date", help="Day to reconcile (defaults to today)")
@click.option("--statement-balance", help="End-of-day balance shown on the bank statement")
@click.pass_context
def reconcile(ctx, bank: str, target_date: str | None, statement_balance: str | None):
    """Compare a bank's end-of-day balance with the bank statement.

    The system balance is the opening balance plus every entry up to and
    including the day. It matches the statement when they differ by less than
    0.01. Without --statement-balance only the system balance is shown.

    Examples:
        bankledger reconcile --bank "CIB" --date 2024-07-31 --statement-balance 20000
    """
    db = ctx.obj["db"]
    service = ReportService(db)
    bank_id = resolve_bank_or_exit(ctx, BankService(db), bank)
    today = service.settings.today()

    on_date = today
    if target_date:
        try:
            on_date = parse_date(target_date, today=today)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    statement = None
    if statement_balance is not None:
        try:
            statement = parse_amount(statement_balance)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        result = service.reconcile(bank_id, on_date, statement)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nReconciliation for {format_date(result.target_date)}")
    click.echo("-" * 44)
    click.echo(f"{'Day opening balance':<24}{format_money(result.opening_balance):>20}")
    click.echo(f"{'Net change':<24}{format_money(result.net_change):>20}")
    click.echo(f"{'System balance':<24}{format_money(result.system_balance):>20}")
    if result.statement_balance is None:
        return

    click.echo(f"{'Statement balance':<24}{format_money(result.statement_balance):>20}")
    click.echo(f"{'Difference':<24}{format_money(result.difference):>20}")
    click.echo("-" * 44)
    if result.matched:
        click.echo("Balances match.")
    else:
        click.echo("Balances do not match.")


def register_commands(cli):
    """Register reconcile command with main CLI."""
    cli.add_command(reconcile)
