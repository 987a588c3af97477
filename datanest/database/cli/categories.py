"""
Category Commands
-----------------

Commands:
    - list: All categories with snippet counts
    - add: Create a category
    - delete: Delete a category (its snippets become uncategorized)
"""
import click

from datanest.core.logging_manager import handle_cli_error
from datanest.core.exceptions import DatabaseError, NotFoundError, ValidationError
from . import get_db

CLI_ERRORS = (DatabaseError, NotFoundError, ValidationError)


@click.group()
@click.pass_context
def categories(ctx: click.Context) -> None:
    """Manage categories."""
    pass


@categories.command("list")
@click.pass_context
def list_categories(ctx):
    """List categories by name with their snippet counts."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            all_categories = db.categories.get_all()

            if not all_categories:
                click.echo("⚠️  No categories found")
                return

            click.echo(f"\n📁 Categories ({len(all_categories)}):\n")
            for category in all_categories:
                click.echo(f"  [{category.id}] {category.name}: {category.snippet_count}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "list_categories")


@categories.command("add")
@click.argument("name")
@click.option("--description", help="Optional description")
@click.option("--color", help="Display color token")
@click.pass_context
def add(ctx, name, description, color):
    """Create a category."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            category = db.categories.create(
                {"name": name, "description": description, "color": color}
            )
            click.echo(f"✅ Created category [{category.id}] {category.name}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "add_category", additional_context={"name": name})


@categories.command("delete")
@click.argument("category_id", type=int)
@click.pass_context
def delete(ctx, category_id):
    """Delete a category; its snippets are kept without a category."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            db.categories.delete(category_id)
        click.echo(f"🗑️  Deleted category [{category_id}]")

    except CLI_ERRORS as e:
        handle_cli_error(
            ctx, e, "delete_category", additional_context={"category_id": category_id}
        )
