"""Bank management commands."""

import click
from decimal import Decimal
from bankledger.cli.bank_resolution import resolve_bank_or_exit
from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.balance import aggregate
from bankledger.domain.bank import BankService
from bankledger.domain.entities import EntryQuery
from bankledger.domain.errors import DomainError
from bankledger.utils.money import format_money, parse_amount


def _parse_balance_or_exit(ctx, value: str) -> Decimal:
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@click.group()
def bank_group():
    """Manage banks."""
    pass


@bank_group.command("create")
@click.argument("name", metavar="BANK_NAME")
@click.option("--opening-balance", default="0", show_default=True, help="Balance before the first entry")
@click.option("--iban", help="IBAN of the account")
@click.pass_context
def create_bank(ctx, name: str, opening_balance: str, iban: str | None):
    """Create a new bank.

    Examples:
        bankledger bank create "National Bank" --opening-balance 10000
        bankledger bank create "CIB" --opening-balance "1,250.50" --iban EG380019000500000000263180002
    """
    db = ctx.obj["db"]
    service = BankService(db)
    balance = _parse_balance_or_exit(ctx, opening_balance)

    try:
        bank_id = service.create_bank(name=name, opening_balance=balance, iban=iban)
        click.echo(f"Created bank '{name.strip()}' (ID: {bank_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@bank_group.command("list")
@click.pass_context
def list_banks(ctx):
    """List all banks with their current balance."""
    db = ctx.obj["db"]
    service = BankService(db)

    banks = service.list_banks()
    if not banks:
        click.echo("No banks found.")
        return

    click.echo("\nBanks:")
    click.echo("-" * 100)
    for bank in banks:
        entries = db.list_entries(EntryQuery(bank_id=bank.id))
        current = aggregate(bank.opening_balance, entries).balance
        click.echo(
            f"ID: {bank.id:3d} | {bank.name:20s} | IBAN: {(bank.iban or '-'):24s} | "
            f"Opening: {format_money(bank.opening_balance):>18s} | Balance: {format_money(current):>18s}"
        )


@bank_group.command("edit")
@click.argument("bank", metavar="BANK")
@click.option("--name", help="New bank name")
@click.option("--iban", help="New IBAN (empty string to clear)")
@click.option("--opening-balance", help="New opening balance")
@click.pass_context
def edit_bank(ctx, bank: str, name: str | None, iban: str | None, opening_balance: str | None) -> None:
    """Edit a bank.

    BANK can be a bank name or ID. Only the given fields change. Changing the
    opening balance changes every balance derived from it.

    Examples:
        bankledger bank edit "CIB" --name "CIB Current"
        bankledger bank edit 1 --opening-balance 12000
    """
    db = ctx.obj["db"]
    service = BankService(db)
    bank_id = resolve_bank_or_exit(ctx, service, bank)

    if name is None and iban is None and opening_balance is None:
        click.echo("Error: Nothing to change. Use --name, --iban or --opening-balance.", err=True)
        ctx.exit(1)

    balance = _parse_balance_or_exit(ctx, opening_balance) if opening_balance is not None else None

    try:
        service.update_bank(bank_id=bank_id, name=name, iban=iban, opening_balance=balance)
        click.echo(f"Updated bank {bank_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@bank_group.command("delete")
@click.argument("bank", metavar="BANK")
@click.option("--cascade", is_flag=True, help="Also delete all entries of the bank")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_bank(ctx, bank: str, cascade: bool, yes: bool) -> None:
    """Delete a bank.

    BANK can be a bank name or ID.

    A bank that still has entries is only deleted together with them, when
    --cascade is given.

    Examples:
        bankledger bank delete "Old Bank"
        bankledger bank delete 3 --cascade --yes
    """
    db = ctx.obj["db"]
    service = BankService(db)
    bank_id = resolve_bank_or_exit(ctx, service, bank)
    bank_obj = service.require_bank(bank_id)

    entry_count = db.get_bank_entry_count(bank_id)
    if entry_count > 0 and not cascade:
        click.echo(
            f"Error: Cannot delete bank '{bank_obj.name}': it has {entry_count} "
            f"entr{'y' if entry_count == 1 else 'ies'}.",
            err=True,
        )
        click.echo("Delete them first or use --cascade.", err=True)
        ctx.exit(1)

    prompt = f"Are you sure you want to delete bank '{bank_obj.name}' (ID: {bank_id})"
    if entry_count > 0:
        prompt += f" and its {entry_count} entr{'y' if entry_count == 1 else 'ies'}"
    if not yes and not click.confirm(f"{prompt}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        deleted = service.delete_bank(bank_id, cascade=cascade)
        click.echo(f"Deleted bank '{bank_obj.name}'")
        if deleted:
            click.echo(f"Deleted {deleted} entr{'y' if deleted == 1 else 'ies'}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register bank commands with main CLI."""
    cli.add_command(bank_group, name="bank")
