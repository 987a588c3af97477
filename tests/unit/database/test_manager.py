"""
test_manager.py
---------------
Tests for the DatanestDB facade: session scopes, manager access,
schema initialization and foreign key enforcement.
"""
import pytest
from sqlalchemy import text

from datanest.core.exceptions import DatabaseError, NotFoundError
from datanest.database.manager import DatanestDB
from datanest.database.models import Category, Settings, Snippet, SnippetTag, Tag


class TestSessionScope:
    """Tests for DatanestDB.session_scope()."""

    def test_commits_on_success(self, test_db):
        """Work done in a scope is visible in the next one."""
        with test_db.session_scope():
            test_db.tags.create({"name": "python"})

        with test_db.session_scope():
            assert test_db.tags.exists("python")

    def test_rolls_back_on_error(self, test_db):
        """An exception undoes the whole scope."""
        with pytest.raises(NotFoundError):
            with test_db.session_scope():
                test_db.tags.create({"name": "python"})
                test_db.snippets.create(
                    {"title": "T", "code": "x", "language": "python", "tags": [404]}
                )

        with test_db.session_scope():
            assert test_db.tags.get_all() == []

    def test_managers_unavailable_outside_scope(self, test_db):
        """Manager properties require an open session."""
        with pytest.raises(DatabaseError, match="requires active session"):
            test_db.snippets.get_all()
        with pytest.raises(DatabaseError):
            test_db.tags.get_all()
        with pytest.raises(DatabaseError):
            test_db.categories.get_all()
        with pytest.raises(DatabaseError):
            test_db.settings.get()

    def test_duplicate_name_is_database_error(self, test_db):
        """Integrity violations surface as DatabaseError."""
        with test_db.session_scope():
            test_db.categories.create({"name": "Utilities"})

        with pytest.raises(DatabaseError):
            with test_db.session_scope():
                test_db.categories.create({"name": "Utilities"})


class TestSchema:
    """Tests for schema creation and migrations."""

    def test_fresh_database_has_settings_row(self, test_db):
        """Initialization provisions the settings singleton."""
        with test_db.session_scope() as session:
            assert session.query(Settings).count() == 1

    def test_fresh_database_is_stamped(self, test_db):
        """The schema is marked as current for Alembic."""
        history = test_db.get_migration_history()
        assert history["status"] == "up_to_date"
        assert history["current_revision"]

    def test_reopening_keeps_data(self, test_db, test_db_path, test_alembic_dir):
        """A second instance on the same file sees existing rows."""
        with test_db.session_scope():
            test_db.tags.create({"name": "python"})
        test_db.close()

        with DatanestDB(test_db_path, test_alembic_dir) as reopened:
            with reopened.session_scope():
                assert reopened.tags.exists("python")

    def test_initialize_schema_is_repeatable(self, test_db):
        """Running initialization again on a current schema is harmless."""
        test_db.initialize_schema()

        with test_db.session_scope() as session:
            assert session.query(Settings).count() == 1

    def test_log_dir_enables_logging(self, tmp_dir):
        """With a log directory, operations are written to disk."""
        db = DatanestDB(tmp_dir / "logged.db", tmp_dir / "no-alembic", log_dir=tmp_dir / "logs")
        with db.session_scope():
            db.tags.create({"name": "python"})
        db.close()

        assert (tmp_dir / "logs" / "system" / "database.log").exists()


class TestForeignKeys:
    """Tests for store-level referential actions."""

    def test_foreign_keys_enabled(self, test_db):
        """Every connection enforces foreign keys."""
        with test_db.engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_raw_tag_delete_cascades_links(self, test_db):
        """Deleting a tag row outside the ORM still removes its links."""
        with test_db.session_scope():
            tag = test_db.tags.create({"name": "python"})
            test_db.snippets.create(
                {"title": "T", "code": "x", "language": "python", "tags": [tag.id]}
            )
            tag_id = tag.id

        with test_db.session_scope() as session:
            session.execute(text("DELETE FROM tags WHERE id = :id"), {"id": tag_id})

        with test_db.session_scope() as session:
            assert session.query(SnippetTag).count() == 0
            assert session.query(Snippet).count() == 1

    def test_raw_category_delete_nulls_snippets(self, test_db):
        """Deleting a category row outside the ORM leaves uncategorized snippets."""
        with test_db.session_scope():
            category = test_db.categories.create({"name": "Utilities"})
            snippet = test_db.snippets.create(
                {"title": "T", "code": "x", "language": "python", "category_id": category.id}
            )
            snippet_id = snippet.id

        with test_db.session_scope() as session:
            session.execute(text("DELETE FROM categories"))

        with test_db.session_scope() as session:
            assert session.query(Category).count() == 0
            assert session.get(Snippet, snippet_id).category_id is None

    def test_tags_table_exists(self, test_db):
        """ORM metadata tables are created."""
        with test_db.session_scope() as session:
            assert session.query(Tag).count() == 0
