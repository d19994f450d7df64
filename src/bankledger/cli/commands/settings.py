"""Ledger settings commands."""

import click
from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.errors import DomainError
from bankledger.domain.settings import SettingsService
from bankledger.utils.date_parser import format_date, parse_date


@click.group()
def settings_group():
    """Show and change ledger settings."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show the fiscal year months and the date override."""
    service = SettingsService(ctx.obj["db"])

    start_month, end_month = service.fiscal_months()
    fixed = service.fixed_date()
    click.echo(f"Fiscal start month: {start_month}")
    click.echo(f"Fiscal end month:   {end_month}")
    click.echo(f"Fixed date:         {format_date(fixed) if fixed else 'off (using the real date)'}")


@settings_group.command("fiscal")
@click.argument("start_month", type=int)
@click.argument("end_month", type=int)
@click.pass_context
def set_fiscal(ctx, start_month: int, end_month: int):
    """Set the first and last month of the fiscal year.

    Examples:
        bankledger settings fiscal 7 6
        bankledger settings fiscal 1 12
    """
    service = SettingsService(ctx.obj["db"])
    try:
        service.set_fiscal_months(start_month, end_month)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Fiscal year now runs from month {start_month} to month {end_month}")


@settings_group.command("fixed-date")
@click.argument("value", required=False, metavar="DATE")
@click.option("--clear", is_flag=True, help="Use the real current date again")
@click.pass_context
def set_fixed_date(ctx, value: str | None, clear: bool):
    """Pin "today" to DATE for new entries, reconciliation and reports.

    Without arguments the current override is shown.

    Examples:
        bankledger settings fixed-date 2024-06-30
        bankledger settings fixed-date --clear
    """
    service = SettingsService(ctx.obj["db"])

    if clear and value:
        click.echo("Error: Give either a DATE or --clear, not both.", err=True)
        ctx.exit(1)

    if clear:
        service.set_fixed_date(None)
        click.echo("Fixed date cleared")
        return

    if value is None:
        fixed = service.fixed_date()
        click.echo(f"Fixed date: {format_date(fixed) if fixed else 'off'}")
        return

    try:
        pinned = parse_date(value, today=service.today())
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    service.set_fixed_date(pinned)
    click.echo(f"Fixed date set to {format_date(pinned)}")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
