"""Main CLI entry point."""

import logging

import click
from ledgerdesk.database.factories import DB_PATH_ENV_VAR, create_sqlite_database

# Import and register all commands at module level
from ledgerdesk.cli.commands import (
    accounts,
    customer,
    ledger,
    margin,
)

# Subcommands that never touch the database
COMMANDS_WITHOUT_DATABASE = {"margin"}


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
    """Ledgerdesk - bookkeeping for a small service counter.

    Keep customer debit/credit ledgers, collect bank account numbers from
    transfer sheets, and work out service margins.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # that needs it (not when showing help)
    subcommand = ctx.invoked_subcommand
    if subcommand is not None and subcommand not in COMMANDS_WITHOUT_DATABASE:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
customer.register_commands(cli)
ledger.register_commands(cli)
accounts.register_commands(cli)
margin.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
