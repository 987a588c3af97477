"""
Snippet Commands
----------------

Browse and edit snippets.

Commands:
    - list: Filtered snippet listing
    - show: Display one snippet with its code
    - add: Create a snippet
    - edit: Change a snippet (unspecified fields keep their value)
    - delete: Remove a snippet

Usage:
    datanest snippets list --language python --search retry
    datanest snippets add --title Debounce --language javascript \\
        --code-file debounce.js --category-id 1 --tag-id 2 --tag-id 3
    datanest snippets edit 4 --clear-tags
"""
import json

import click

from datanest.core.logging_manager import handle_cli_error
from datanest.core.exceptions import DatabaseError, NotFoundError, ValidationError
from . import get_db

CLI_ERRORS = (DatabaseError, NotFoundError, ValidationError)


def format_snippet_line(snippet) -> str:
    """One-line summary: id, title, language, category and tags."""
    line = f"  [{snippet.id}] {snippet.title} ({snippet.language})"
    if snippet.category is not None:
        line += f" · {snippet.category.name}"
    if snippet.tag_links:
        line += " · " + " ".join(f"#{name}" for name in snippet.tag_names)
    return line


def _read_code(code, code_file):
    if code_file is not None:
        return code_file.read()
    return code


@click.group()
@click.pass_context
def snippets(ctx: click.Context) -> None:
    """Browse and edit snippets."""
    pass


@snippets.command("list")
@click.option("--language", help="Exact language ('all' for every language)")
@click.option("--category", help="Exact category name")
@click.option("--tag", help="Exact tag name")
@click.option("--search", help="Text to find in title, description or code")
@click.option("--limit", type=int, help="Maximum number of snippets")
@click.pass_context
def list_snippets(ctx, language, category, tag, search, limit):
    """List snippets, most recently updated first."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            results = db.snippets.get_all(
                language=language,
                category=category,
                tag=tag,
                search=search,
                limit=limit,
            )

            if not results:
                click.echo("⚠️  No snippets found")
                return

            click.echo(f"\n📚 Snippets ({len(results)}):\n")
            for snippet in results:
                click.echo(format_snippet_line(snippet))

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "list_snippets")


@snippets.command("show")
@click.argument("snippet_id", type=int)
@click.option("--json", "as_json", is_flag=True, help="Print the snippet as JSON")
@click.pass_context
def show(ctx, snippet_id, as_json):
    """Display a single snippet."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            snippet = db.snippets.get(snippet_id)

            if as_json:
                click.echo(json.dumps(snippet.to_dict(), indent=2, ensure_ascii=False))
                return

            click.echo(f"\n📄 {snippet.title}")
            click.echo(f"💬 {snippet.language}")
            if snippet.category is not None:
                click.echo(f"📁 {snippet.category.name}")
            if snippet.tag_links:
                click.echo(f"🏷️  Tags: {', '.join(snippet.tag_names)}")
            if snippet.description:
                click.echo(f"\n{snippet.description}")
            click.echo("")
            click.echo(snippet.code)

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "show_snippet", additional_context={"snippet_id": snippet_id})


@snippets.command("add")
@click.option("--title", required=True, help="Snippet title")
@click.option("--language", required=True, help="Programming language")
@click.option("--code", help="Source code")
@click.option("--code-file", type=click.File("r"), help="Read source code from a file")
@click.option("--description", help="Optional description")
@click.option("--category-id", type=int, help="Category id")
@click.option("--tag-id", "tag_ids", type=int, multiple=True, help="Tag id (repeatable)")
@click.pass_context
def add(ctx, title, language, code, code_file, description, category_id, tag_ids):
    """Create a snippet."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            snippet = db.snippets.create(
                {
                    "title": title,
                    "code": _read_code(code, code_file),
                    "language": language,
                    "description": description,
                    "category_id": category_id,
                    "tags": list(tag_ids),
                }
            )
            click.echo(f"✅ Created snippet [{snippet.id}] {snippet.title}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "add_snippet", additional_context={"title": title})


@snippets.command("edit")
@click.argument("snippet_id", type=int)
@click.option("--title", help="New title")
@click.option("--language", help="New language")
@click.option("--code", help="New source code")
@click.option("--code-file", type=click.File("r"), help="Read new source code from a file")
@click.option("--description", help="New description ('' clears it)")
@click.option("--category-id", type=int, help="Move to this category")
@click.option("--no-category", is_flag=True, help="Remove the snippet from its category")
@click.option("--tag-id", "tag_ids", type=int, multiple=True, help="Replace tags (repeatable)")
@click.option("--clear-tags", is_flag=True, help="Remove every tag")
@click.pass_context
def edit(
    ctx,
    snippet_id,
    title,
    language,
    code,
    code_file,
    description,
    category_id,
    no_category,
    tag_ids,
    clear_tags,
):
    """Change a snippet; options not given keep their current value."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            current = db.snippets.get(snippet_id)

            changes = {}
            if title is not None:
                changes["title"] = title
            if language is not None:
                changes["language"] = language
            new_code = _read_code(code, code_file)
            if new_code is not None:
                changes["code"] = new_code
            if description is not None:
                changes["description"] = description

            if no_category:
                changes["category_id"] = None
            elif category_id is not None:
                changes["category_id"] = category_id
            else:
                changes["category_id"] = current.category_id

            if clear_tags:
                changes["tags"] = []
            elif tag_ids:
                changes["tags"] = list(tag_ids)
            else:
                changes["tags"] = [tag.id for tag in current.tags]

            snippet = db.snippets.update(snippet_id, changes)
            click.echo(f"✅ Updated snippet [{snippet.id}] {snippet.title}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "edit_snippet", additional_context={"snippet_id": snippet_id})


@snippets.command("delete")
@click.argument("snippet_id", type=int)
@click.confirmation_option(prompt="Delete this snippet?")
@click.pass_context
def delete(ctx, snippet_id):
    """Delete a snippet."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            db.snippets.delete(snippet_id)
        click.echo(f"🗑️  Deleted snippet [{snippet_id}]")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "delete_snippet", additional_context={"snippet_id": snippet_id})
