"""
Setup & Initialization Commands
--------------------------------

Database initialization commands.

Commands:
    - init: Create the schema (or migrate an existing one) and the settings row
"""
import click

from datanest.core.logging_manager import handle_cli_error
from datanest.core.exceptions import DatabaseError
from . import get_db


@click.command()
@click.pass_context
def init(ctx):
    """Initialize the database schema and default settings."""
    try:
        click.echo("🚀 Initializing Datanest database...")
        db = get_db(ctx)

        click.echo("🗄️  Initializing database schema...")
        db.initialize_schema()

        history = db.get_migration_history()
        click.echo(f"✅ Database ready: {db.db_path}")
        if history.get("current_revision"):
            click.echo(f"   Revision: {history['current_revision']}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "init")
