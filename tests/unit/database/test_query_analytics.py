"""Tests for dashboard statistics."""
from datanest.database.models import AiQuery
from datanest.database.query_analytics import RECENT_SNIPPETS_LIMIT, QueryAnalytics


class TestDashboardStats:
    """Tests for QueryAnalytics.get_dashboard_stats()."""

    def test_empty_catalog(self, db_session):
        """All counts are zero and nothing is recent."""
        dashboard = QueryAnalytics().get_dashboard_stats(db_session)

        assert dashboard["stats"] == {
            "snippets": 0,
            "categories": 0,
            "tags": 0,
            "ai_queries": 0,
        }
        assert dashboard["recent_snippets"] == []

    def test_counts_every_entity(
        self, db_session, make_snippet, category_manager, tag_manager
    ):
        """Each entity type is counted independently."""
        category_manager.create({"name": "Utilities"})
        tag_manager.create({"name": "a"})
        tag_manager.create({"name": "b"})
        make_snippet()
        db_session.add(AiQuery(query="How do I debounce?"))
        db_session.flush()

        stats = QueryAnalytics().get_dashboard_stats(db_session)["stats"]

        assert stats == {"snippets": 1, "categories": 1, "tags": 2, "ai_queries": 1}

    def test_recent_snippets_limited_and_ordered(self, db_session, make_snippet):
        """Only the five most recently modified snippets are returned."""
        for number in range(7):
            make_snippet(title=f"Snippet {number}")

        recent = QueryAnalytics().get_dashboard_stats(db_session)["recent_snippets"]

        assert RECENT_SNIPPETS_LIMIT == 5
        assert [s.title for s in recent] == [f"Snippet {n}" for n in (6, 5, 4, 3, 2)]

    def test_language_breakdown(self, db_session, make_snippet):
        """Languages are counted, most used first."""
        make_snippet(language="python")
        make_snippet(language="python")
        make_snippet(language="sql")

        breakdown = QueryAnalytics().get_language_breakdown(db_session)

        assert breakdown == [
            {"language": "python", "count": 2},
            {"language": "sql", "count": 1},
        ]
