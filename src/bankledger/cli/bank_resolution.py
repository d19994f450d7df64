"""CLI helpers for bank resolution."""

from __future__ import annotations

import click
from bankledger.domain.bank import BankService
from bankledger.utils.bank_resolver import resolve_bank


def resolve_bank_or_exit(ctx: click.Context, bank_service: BankService, bank: str | int) -> int:
    """Resolve bank name or ID, or exit with a CLI error."""
    try:
        return resolve_bank(bank_service, bank)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
