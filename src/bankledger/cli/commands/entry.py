"""Entry management commands."""

import click
from bankledger.cli.bank_resolution import resolve_bank_or_exit
from bankledger.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.bank import BankService
from bankledger.domain.entities import EntryQuery, EntryType
from bankledger.domain.entry import EntryService
from bankledger.domain.errors import DomainError
from bankledger.domain.settings import SettingsService
from bankledger.utils.date_parser import format_date, parse_date
from bankledger.utils.money import format_money, parse_amount

ENTRY_TYPES = click.Choice([t.value for t in EntryType], case_sensitive=False)


def _parse_date_or_exit(ctx, value: str, settings: SettingsService):
    try:
        return parse_date(value, today=settings.today())
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _parse_amount_or_exit(ctx, value: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@click.group()
def entry_group():
    """Manage debit and credit entries."""
    pass


@entry_group.command("add")
@click.option("--bank", required=True, help="Bank name or ID")
@click.option("--type", "entry_type", required=True, type=ENTRY_TYPES, help="Entry type")
@click.option("--amount", required=True, help="Positive amount (e.g., 1500 or 1,500.00)")
@click.option("--description", required=True, help="Entry description")
@click.option("--date", "entry_date", help="Entry date (YYYY-MM-DD or relative like 'today'); defaults to today")
@click.pass_context
def add_entry(ctx, bank: str, entry_type: str, amount: str, description: str, entry_date: str | None):
    """Record a debit or credit entry.

    Debits increase the bank balance, credits decrease it.

    Examples:
        bankledger entry add --bank "CIB" --type debit --amount 1500 --description "Salary"
        bankledger entry add --bank 1 --type credit --amount 250 --description "Rent" --date 2024-07-05
    """
    db = ctx.obj["db"]
    settings = SettingsService(db)
    bank_id = resolve_bank_or_exit(ctx, BankService(db), bank)

    on_date = _parse_date_or_exit(ctx, entry_date, settings) if entry_date else settings.today()
    value = _parse_amount_or_exit(ctx, amount)

    try:
        entry_id = EntryService(db).create_entry(
            bank_id=bank_id,
            entry_type=entry_type.lower(),
            description=description,
            date=on_date,
            amount=value,
        )
        click.echo(
            f"Added {entry_type.lower()} entry {entry_id}: {format_money(value)} on {format_date(on_date)}"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@entry_group.command("list")
@click.option("--bank", help="Bank name or ID")
@click.option("--type", "entry_type", type=ENTRY_TYPES, help="Only debit or only credit entries")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@period_options
@click.pass_context
def list_entries(ctx, bank: str | None, entry_type: str | None, start_date: str | None, end_date: str | None, **kwargs):
    """List entries with optional filters.

    Bank can be specified by name or ID.
    """
    db = ctx.obj["db"]
    settings = SettingsService(db)
    bank_service = BankService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(kwargs),
        today=settings.today(),
    )

    bank_id = resolve_bank_or_exit(ctx, bank_service, bank) if bank else None

    entries = EntryService(db).list_entries(
        EntryQuery(
            bank_id=bank_id,
            start_date=start,
            end_date=end,
            entry_type=EntryType(entry_type.lower()) if entry_type else None,
        )
    )

    if not entries:
        click.echo("No entries found.")
        return

    banks = {b.id: b.name for b in bank_service.list_banks()}

    click.echo(f"\nFound {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}:")
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Date':<12} {'Type':<7} {'Amount':>18}  {'Bank':<20} {'Description':<30}")
    click.echo("-" * 100)
    for entry in entries:
        click.echo(
            f"{entry.id:<6} {format_date(entry.date):<12} {entry.type.value:<7} "
            f"{format_money(entry.amount):>18}  {banks.get(entry.bank_id, 'Unknown'):<20} "
            f"{entry.description[:30]:<30}"
        )


@entry_group.command("edit")
@click.argument("entry_id", type=int)
@click.option("--bank", help="Move the entry to another bank (name or ID)")
@click.option("--type", "entry_type", type=ENTRY_TYPES, help="New entry type")
@click.option("--amount", help="New positive amount")
@click.option("--description", help="New description")
@click.option("--date", "entry_date", help="New entry date")
@click.pass_context
def edit_entry(
    ctx,
    entry_id: int,
    bank: str | None,
    entry_type: str | None,
    amount: str | None,
    description: str | None,
    entry_date: str | None,
) -> None:
    """Edit an entry.

    Updates only the fields that are provided.

    Examples:
        bankledger entry edit 12 --amount 1750
        bankledger entry edit 12 --type credit --date 2024-08-01
    """
    db = ctx.obj["db"]
    settings = SettingsService(db)

    bank_id = resolve_bank_or_exit(ctx, BankService(db), bank) if bank is not None else None
    new_date = _parse_date_or_exit(ctx, entry_date, settings) if entry_date is not None else None
    new_amount = _parse_amount_or_exit(ctx, amount) if amount is not None else None

    try:
        EntryService(db).update_entry(
            entry_id=entry_id,
            bank_id=bank_id,
            entry_type=entry_type.lower() if entry_type else None,
            description=description,
            date=new_date,
            amount=new_amount,
        )
        click.echo(f"Updated entry {entry_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@entry_group.command("delete")
@click.argument("entry_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entry(ctx, entry_id: int, yes: bool) -> None:
    """Delete an entry."""
    db = ctx.obj["db"]
    service = EntryService(db)

    entry = service.get_entry(entry_id)
    if entry is None:
        click.echo(f"Error: Entry {entry_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete entry {entry_id} "
        f"({entry.type.value} {format_money(entry.amount)}, {entry.description})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_entry(entry_id)
        click.echo(f"Deleted entry {entry_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
