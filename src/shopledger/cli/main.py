"""Main CLI entry point."""

import click
from shopledger import __version__
from shopledger.database.factories import create_sqlite_storage
from shopledger.domain.ledger import LedgerStore
from shopledger.logging_config import setup_logging

# Import and register all commands at module level
from shopledger.cli.commands import (
    backup,
    customer,
    dashboard,
    expense,
    insight,
    product,
    report,
    shop,
    transaction,
)


@click.group()
@click.version_option(__version__, prog_name="shopledger")
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SHOPLEDGER_DB_PATH environment variable)",
    envvar="SHOPLEDGER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="SHOPLEDGER_LOG_LEVEL",
    help="Logging verbosity (written to stderr)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Shopledger - Retail shop bookkeeping.

    Keep track of customers, products, cash and credit sales, payments
    received and shop expenses, with dashboards and backups.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level)

    # Load the ledger only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        storage = create_sqlite_storage(database_path=db_path)
        storage.connect()
        store = LedgerStore(storage.load_state())
        # Write-through: every committed mutation is persisted immediately
        store.subscribe(storage.save)
        ctx.obj["storage"] = storage
        ctx.obj["store"] = store
        ctx.call_on_close(storage.disconnect)


# Register all commands
customer.register_commands(cli)
product.register_commands(cli)
transaction.register_commands(cli)
expense.register_commands(cli)
shop.register_commands(cli)
dashboard.register_commands(cli)
backup.register_commands(cli)
insight.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
