"""
Settings Commands
-----------------

Commands:
    - show: Display settings (the API key is always masked)
    - set: Change one or more settings
"""
import click

from datanest.core.logging_manager import handle_cli_error
from datanest.core.exceptions import DatabaseError, ValidationError
from . import get_db

CLI_ERRORS = (DatabaseError, ValidationError)


def _echo_settings(record) -> None:
    click.echo("\n⚙️  Settings")
    click.echo("=" * 50)
    click.echo(f"  AI provider: {record['ai_provider']}")
    click.echo(f"  API key: {record['ai_api_key'] or '(not set)'}")
    click.echo(f"  Local model endpoint: {record['local_model_endpoint']}")
    click.echo(f"  Theme: {record['theme']}")
    click.echo(f"  Editor theme: {record['editor_theme']}")
    click.echo(f"  Font size: {record['font_size']}")


@click.group()
@click.pass_context
def settings(ctx: click.Context) -> None:
    """Show or change application settings."""
    pass


@settings.command("show")
@click.pass_context
def show(ctx):
    """Display current settings."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            record = db.settings.get().to_dict()
        _echo_settings(record)

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "show_settings")


@settings.command("set")
@click.option("--ai-provider", help="AI provider (claude, openai, local)")
@click.option("--api-key", help="API key for the provider ('' removes it)")
@click.option("--endpoint", "local_model_endpoint", help="Local model endpoint URL")
@click.option("--theme", help="UI theme (light, dark, system)")
@click.option("--editor-theme", help="Code editor theme")
@click.option("--font-size", type=int, help="Editor font size")
@click.pass_context
def set_settings(ctx, ai_provider, api_key, local_model_endpoint, theme, editor_theme, font_size):
    """Change the given settings; others keep their value."""
    changes = {
        key: value
        for key, value in {
            "ai_provider": ai_provider,
            "ai_api_key": api_key,
            "local_model_endpoint": local_model_endpoint,
            "theme": theme,
            "editor_theme": editor_theme,
            "font_size": font_size,
        }.items()
        if value is not None
    }

    if not changes:
        click.echo("⚠️  Nothing to change")
        return

    try:
        db = get_db(ctx)
        with db.session_scope():
            record = db.settings.update(changes).to_dict()
        click.echo(f"✅ Updated: {', '.join(sorted(changes))}")
        _echo_settings(record)

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "set_settings")
