"""
Tag Commands
------------

Commands:
    - list: All tags with snippet counts
    - add: Create a tag (name is normalized, e.g. "React Hooks" -> react-hooks)
    - edit: Rename or recolor a tag
    - delete: Delete one or more tags by id
    - prune: Delete tags not used by any snippet
"""
import click

from datanest.core.logging_manager import handle_cli_error
from datanest.core.exceptions import DatabaseError, NotFoundError, ValidationError
from . import get_db

CLI_ERRORS = (DatabaseError, NotFoundError, ValidationError)


@click.group()
@click.pass_context
def tags(ctx: click.Context) -> None:
    """Manage tags."""
    pass


@tags.command("list")
@click.pass_context
def list_tags(ctx):
    """List tags by name with their snippet counts."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            all_tags = db.tags.get_all()

            if not all_tags:
                click.echo("⚠️  No tags found")
                return

            click.echo(f"\n🏷️  Tags ({len(all_tags)}):\n")
            for tag in all_tags:
                click.echo(f"  [{tag.id}] {tag.name}: {tag.snippet_count}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "list_tags")


@tags.command("add")
@click.argument("name")
@click.option("--color", help="Display color token")
@click.pass_context
def add(ctx, name, color):
    """Create a tag."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            tag = db.tags.create({"name": name, "color": color})
            click.echo(f"✅ Created tag [{tag.id}] {tag.name}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "add_tag", additional_context={"name": name})


@tags.command("edit")
@click.argument("tag_id", type=int)
@click.option("--name", help="New name")
@click.option("--color", help="New color token")
@click.pass_context
def edit(ctx, tag_id, name, color):
    """Rename or recolor a tag."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            tag = db.tags.update(tag_id, {"name": name, "color": color})
            click.echo(f"✅ Updated tag [{tag.id}] {tag.name}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "edit_tag", additional_context={"tag_id": tag_id})


@tags.command("delete")
@click.argument("tag_ids", type=int, nargs=-1, required=True)
@click.pass_context
def delete(ctx, tag_ids):
    """Delete tags by id; a single id must exist, unknown ids in a batch are skipped."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            if len(tag_ids) == 1:
                db.tags.delete(tag_ids[0])
                deleted = 1
            else:
                deleted = db.tags.delete_many(tag_ids)
        click.echo(f"🗑️  Deleted {deleted} tag(s)")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "delete_tags", additional_context={"tag_ids": list(tag_ids)})


@tags.command("prune")
@click.option("--dry-run", is_flag=True, help="Only list the unused tags")
@click.pass_context
def prune(ctx, dry_run):
    """Delete tags that no snippet uses."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            unused = db.tags.get_unused()

            if not unused:
                click.echo("✅ No unused tags")
                return

            for tag in unused:
                click.echo(f"  • {tag.name}")

            if dry_run:
                click.echo(f"\n💡 {len(unused)} unused tag(s); run without --dry-run to delete")
                return

            deleted = db.tags.delete_many([tag.id for tag in unused])
        click.echo(f"🗑️  Pruned {deleted} tag(s)")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "prune_tags")
