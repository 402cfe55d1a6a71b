"""Main CLI entry point."""

import logging

import click
from shopbooks.cli.notifications import ClickNotifier
from shopbooks.database.factories import DB_PATH_ENV_VAR, create_sqlite_database
from shopbooks.domain.notifications import NullNotifier

# Import and register all commands at module level
from shopbooks.cli.commands import (
    expense,
    invoice,
    movement,
    party,
    product,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option("--verbose", "-v", is_flag=True, help="Log every ledger write")
@click.option("--quiet", "-q", is_flag=True, help="Hide success notifications")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool, quiet: bool):
    """Shopbooks - Small-business bookkeeping.

    Track inventory, receivables, payables and expenses, and see the
    resulting financial report.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["notifier"] = NullNotifier() if quiet else ClickNotifier()


# Register all commands
product.register_commands(cli)
movement.register_commands(cli)
party.register_commands(cli)
invoice.register_commands(cli)
expense.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
