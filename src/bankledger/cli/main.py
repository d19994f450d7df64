"""Main CLI entry point."""

import logging

import click
from bankledger.database.factories import DB_PATH_ENV_VAR, create_sqlite_database

# Import and register all commands at module level
from bankledger.cli.commands import (
    bank,
    entry,
    balance,
    reconcile,
    report,
    export,
    backup,
    settings,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Bankledger - Personal bank ledger.

    Record debit and credit entries against your banks, reconcile daily
    balances with bank statements and produce fiscal year reports.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
bank.register_commands(cli)
entry.register_commands(cli)
balance.register_commands(cli)
reconcile.register_commands(cli)
report.register_commands(cli)
export.register_commands(cli)
backup.register_commands(cli)
settings.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
