#!/usr/bin/env python3
"""
query_analytics.py
------------------
Aggregate queries over the snippet catalog.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from datanest.core.logging_manager import DatanestLogger
from .decorators import handle_db_errors, log_database_operation
from .models import AiQuery, Category, Snippet, SnippetTag, Tag

RECENT_SNIPPETS_LIMIT = 5


class QueryAnalytics:
    """
    Handles catalog-wide statistics.

    All counts are read in the caller's session, so they reflect one
    consistent snapshot of the store.
    """

    def __init__(self, logger: Optional[DatanestLogger] = None) -> None:
        """
        Initialize query analytics.

        Args:
            logger: Optional logger for query operations
        """
        self.logger = logger

    @staticmethod
    def _count(session: Session, model) -> int:
        return session.scalar(select(func.count()).select_from(model)) or 0

    @handle_db_errors
    @log_database_operation("get_dashboard_stats")
    def get_dashboard_stats(self, session: Session) -> Dict[str, Any]:
        """
        Totals and the most recently modified snippets.

        Args:
            session: SQLAlchemy session

        Returns:
            Dictionary with keys:
                - stats: counts of snippets, categories, tags and AI queries
                - recent_snippets: up to RECENT_SNIPPETS_LIMIT snippets,
                  newest modification first, with category and tags resolved
        """
        stats = {
            "snippets": self._count(session, Snippet),
            "categories": self._count(session, Category),
            "tags": self._count(session, Tag),
            "ai_queries": self._count(session, AiQuery),
        }

        recent = session.scalars(
            select(Snippet)
            .options(
                selectinload(Snippet.category),
                selectinload(Snippet.tag_links).selectinload(SnippetTag.tag),
            )
            .order_by(Snippet.updated_at.desc(), Snippet.id.desc())
            .limit(RECENT_SNIPPETS_LIMIT)
        )

        return {"stats": stats, "recent_snippets": list(recent)}

    @handle_db_errors
    @log_database_operation("get_language_breakdown")
    def get_language_breakdown(self, session: Session) -> List[Dict[str, Any]]:
        """
        Snippet count per language, most used first.

        Returns:
            List of {"language": str, "count": int}
        """
        rows = session.execute(
            select(Snippet.language, func.count(Snippet.id).label("count"))
            .group_by(Snippet.language)
            .order_by(func.count(Snippet.id).desc(), Snippet.language)
        )
        return [{"language": language, "count": count} for language, count in rows]
