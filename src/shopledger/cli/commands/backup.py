"""Backup export and restore commands."""

import logging
from pathlib import Path

import click
from shopledger.domain.errors import SnapshotError
from shopledger.domain.snapshot import export_filename

logger = logging.getLogger(__name__)


@click.group()
def backup_group():
    """Export or restore the whole ledger."""
    pass


@backup_group.command("export")
@click.argument("output", required=False, type=click.Path(dir_okay=True, writable=True))
@click.pass_context
def export_backup(ctx, output: str | None):
    """Write the full ledger to a JSON backup file.

    OUTPUT may be a file or a directory; the file name defaults to
    ledger_backup_<YYYY-MM-DD>.json.
    """
    store = ctx.obj["store"]

    path = Path(output) if output else Path.cwd()
    if path.is_dir():
        path = path / export_filename()

    try:
        path.write_text(store.export_snapshot(), encoding="utf-8")
    except OSError as e:
        click.echo(f"Error: Could not write backup: {e}", err=True)
        ctx.exit(1)
    click.echo(f"Exported backup to {path}")


@backup_group.command("import")
@click.argument("backup_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_backup(ctx, backup_file: str, yes: bool):
    """Replace the whole ledger with a JSON backup file.

    The file must contain at least customers and transactions. A file that
    cannot be read leaves the current ledger untouched.
    """
    store = ctx.obj["store"]

    try:
        content = Path(backup_file).read_bytes()
    except OSError as e:
        click.echo(f"Error: Could not read backup: {e}", err=True)
        ctx.exit(1)

    if not yes and not click.confirm("Restoring replaces ALL current data. Continue?"):
        click.echo("Restore cancelled.")
        return

    try:
        store.import_snapshot(content)
    except SnapshotError as e:
        logger.warning("Rejected backup %s: %s", backup_file, e)
        click.echo(f"Error: Backup not restored: {e}", err=True)
        ctx.exit(1)

    state = store.state
    click.echo(
        f"Restored '{state.shop_name}': {len(state.customers)} customers, "
        f"{len(state.transactions)} transactions, {len(state.expenses)} expenses"
    )


def register_commands(cli):
    """Register backup commands with main CLI."""
    cli.add_command(backup_group, name="backup")
