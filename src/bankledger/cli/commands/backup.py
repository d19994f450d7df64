"""JSON backup commands."""

from pathlib import Path

import click
from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.backup import BackupService, default_backup_file_name
from bankledger.domain.errors import DomainError
from bankledger.domain.settings import SettingsService


@click.group()
def backup_group():
    """Back up and restore the whole ledger."""
    pass


@backup_group.command("export")
@click.argument("path", type=click.Path())
@click.pass_context
def export_backup(ctx, path: str):
    """Write every bank, entry and setting to a JSON file.

    PATH can be a file or an existing directory.

    Examples:
        bankledger backup export ledger.json
        bankledger backup export backups/
    """
    db = ctx.obj["db"]
    target = Path(path)
    if target.is_dir():
        target = target / default_backup_file_name(SettingsService(db).today())

    written = BackupService(db).write_backup(target)
    click.echo(f"Backup written to {written}")


@backup_group.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_backup(ctx, path: str, yes: bool):
    """Replace ALL ledger data with the contents of a backup file.

    The file is checked completely before anything is deleted; a malformed
    backup leaves the ledger untouched.
    """
    db = ctx.obj["db"]
    service = BackupService(db)

    try:
        payload = service.read_backup(path)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not yes and not click.confirm(
        "This deletes all banks, entries and settings and replaces them with the backup. Continue?"
    ):
        click.echo("Import cancelled.")
        return

    try:
        counts = service.import_backup(payload)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Restored {counts['banks']} bank(s), {counts['entries']} entr"
        f"{'y' if counts['entries'] == 1 else 'ies'} and {counts['settings']} setting(s)"
    )


def register_commands(cli):
    """Register backup commands with main CLI."""
    cli.add_command(backup_group, name="backup")
