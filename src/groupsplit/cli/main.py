"""Main CLI entry point."""

import logging

import click
from groupsplit.database.factories import create_sqlite_database

# Import and register all commands at module level
from groupsplit.cli.commands import (
    user,
    group,
    expense,
    debt,
    balances,
    report,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides GROUPSPLIT_DB_PATH environment variable)",
    envvar="GROUPSPLIT_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="GROUPSPLIT_LOG_LEVEL",
    help="Logging verbosity (overrides GROUPSPLIT_LOG_LEVEL environment variable)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Groupsplit - Shared expense tracking for groups.

    Record who paid for what, see who owes whom, and get the shortest
    list of payments that settles everyone up.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
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
user.register_commands(cli)
group.register_commands(cli)
expense.register_commands(cli)
debt.register_commands(cli)
balances.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
