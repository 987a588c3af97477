"""
Dashboard Commands
------------------

Commands:
    - stats: Catalog totals and most recently modified snippets
"""
import click

from datanest.core.logging_manager import handle_cli_error
from datanest.core.exceptions import DatabaseError
from . import get_db
from .snippets import format_snippet_line


@click.command()
@click.option("--languages", is_flag=True, help="Also show snippet count per language")
@click.pass_context
def stats(ctx, languages):
    """Display catalog statistics."""
    try:
        db = get_db(ctx)
        with db.session_scope() as session:
            dashboard = db.query_analytics.get_dashboard_stats(session)
            counts = dashboard["stats"]

            click.echo("\n📊 Datanest Statistics")
            click.echo("=" * 50)
            click.echo(f"  Snippets: {counts['snippets']}")
            click.echo(f"  Categories: {counts['categories']}")
            click.echo(f"  Tags: {counts['tags']}")
            click.echo(f"  AI Queries: {counts['ai_queries']}")

            if dashboard["recent_snippets"]:
                click.echo("\n🕑 Recently Updated:")
                for snippet in dashboard["recent_snippets"]:
                    click.echo(format_snippet_line(snippet))

            if languages:
                breakdown = db.query_analytics.get_language_breakdown(session)
                click.echo("\n💬 Languages:")
                for row in breakdown:
                    click.echo(f"  {row['language']}: {row['count']}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "stats")
