"""Main CLI entry point."""

import logging
import os

import click
from logibase.database.factories import create_sqlite_database

# Import and register all commands at module level
from logibase.cli.commands import partner, region

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: int) -> None:
    """Set the root log level from -v flags or LOGIBASE_LOG_LEVEL."""
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        name = os.environ.get("LOGIBASE_LOG_LEVEL", "WARNING").upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LOGIBASE_DB_PATH environment variable)",
    envvar="LOGIBASE_DB_PATH",
)
@click.option(
    "--user",
    help="User recorded as creator of new records (overrides LOGIBASE_USER)",
    envvar="LOGIBASE_USER",
)
@click.option("--verbose", "-v", count=True, help="Log progress (-v) or debug output (-vv)")
@click.pass_context
def cli(ctx, db_path: str | None, user: str | None, verbose: int):
    """Logibase - Customer, supplier and vendor master data.

    Create and update business partners together with their addresses,
    contacts and bank accounts, and maintain the country and Indonesian
    region lookup tables their addresses refer to.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            db = create_sqlite_database(database_path=db_path)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["user"] = user


# Register all commands
partner.register_commands(cli)
region.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
