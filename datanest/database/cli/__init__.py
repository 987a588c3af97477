#!/usr/bin/env python3
"""
Datanest Command-Line Interface
-------------------------------

Modular command-line interface for the snippet catalog.

This module provides the main CLI group and shared context setup
for all commands.

Command Structure:
    - Setup & Initialization (init)
    - Dashboard (stats)
    - Snippets (snippets list|show|add|edit|delete)
    - Tags (tags list|add|edit|delete|prune)
    - Categories (categories list|add|delete)
    - Settings (settings show|set)
    - Migration Management (migration upgrade|status)

Usage:
    # Get general help
    datanest --help

    # Get help for a specific command group
    datanest snippets --help

    # Get help for a specific command
    datanest snippets add --help
"""
import click
import logging
from pathlib import Path

from datanest.core.logging_manager import setup_logger
from datanest.core.paths import DB_PATH, ALEMBIC_DIR, LOG_DIR
from datanest.database import DatanestDB


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    default=str(DB_PATH),
    help="Path to database file",
)
@click.option(
    "--alembic-dir",
    type=click.Path(),
    default=str(ALEMBIC_DIR),
    help="Path to Alembic directory",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Path to log directory",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, db_path, alembic_dir, log_dir, verbose):
    """Datanest snippet catalog"""

    # Suppress Alembic INFO logging by default
    logging.getLogger("alembic").setLevel(logging.WARNING)

    ctx.ensure_object(dict)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["alembic_dir"] = Path(alembic_dir)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "cli")


def get_db(ctx) -> DatanestDB:
    """Get or create database instance from context."""
    if "db" not in ctx.obj:
        ctx.obj["db"] = DatanestDB(
            db_path=ctx.obj["db_path"],
            alembic_dir=ctx.obj["alembic_dir"],
            log_dir=ctx.obj["log_dir"],
        )
    return ctx.obj["db"]


# Import and register command modules
# These imports must come after CLI group definition
from .setup import init  # noqa: E402
from .stats import stats  # noqa: E402
from .snippets import snippets  # noqa: E402
from .tags import tags  # noqa: E402
from .categories import categories  # noqa: E402
from .settings import settings  # noqa: E402
from .migration import migration  # noqa: E402

# Register top-level commands
cli.add_command(init)
cli.add_command(stats)

# Register command groups
cli.add_command(snippets)
cli.add_command(tags)
cli.add_command(categories)
cli.add_command(settings)
cli.add_command(migration)


if __name__ == "__main__":
    cli(obj={})
