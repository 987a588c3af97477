"""
test_snippet_manager.py
-----------------------
Unit tests for SnippetManager queries and mutations.

Covers the listing filters and ordering, full tag replacement on update,
category clearing and cascade behavior on delete.
"""
import pytest

from datanest.core.exceptions import NotFoundError, ValidationError
from datanest.database.models import SnippetTag


class TestSnippetManagerCreate:
    """Test SnippetManager.create() method."""

    def test_create_then_get_round_trip(
        self, snippet_manager, category_manager, tag_manager
    ):
        """A created snippet reads back with category and tags resolved."""
        utilities = category_manager.create({"name": "Utilities"})
        hooks = tag_manager.create({"name": "hooks"})
        timers = tag_manager.create({"name": "timers"})

        created = snippet_manager.create(
            {
                "title": "Debounce",
                "description": "Delay calls",
                "code": "function debounce() {}",
                "language": "javascript",
                "category_id": utilities.id,
                "tags": [hooks.id, timers.id],
            }
        )
        fetched = snippet_manager.get(created.id)

        assert fetched.title == "Debounce"
        assert fetched.description == "Delay calls"
        assert fetched.code == "function debounce() {}"
        assert fetched.language == "javascript"
        assert fetched.category.name == "Utilities"
        assert fetched.tag_names == ["hooks", "timers"]
        assert fetched.created_at is not None
        assert fetched.updated_at is not None

    def test_create_keeps_surrounding_whitespace(self, snippet_manager, make_snippet):
        """Scalar fields read back exactly as written."""
        created = make_snippet(title="  Debounce  ", description=" d ", language="javascript ")
        fetched = snippet_manager.get(created.id)

        assert (fetched.title, fetched.description, fetched.language) == (
            "  Debounce  ",
            " d ",
            "javascript ",
        )

    def test_create_without_optional_fields(self, make_snippet):
        """Category and tags are optional."""
        snippet = make_snippet()
        assert snippet.category is None
        assert snippet.tags == []
        assert snippet.description is None

    @pytest.mark.parametrize("missing", ["title", "code", "language"])
    def test_create_requires_fields(self, snippet_manager, missing):
        """Each required field must be present and non-empty."""
        metadata = {"title": "T", "code": "x = 1", "language": "python"}
        metadata[missing] = "  "
        with pytest.raises(ValidationError, match=missing):
            snippet_manager.create(metadata)

    def test_create_duplicate_tag_ids_link_once(self, make_snippet, tag_manager, db_session):
        """Repeated ids produce a single link."""
        tag = tag_manager.create({"name": "python"})
        snippet = make_snippet(tags=[tag.id, tag.id])
        assert db_session.query(SnippetTag).filter_by(snippet_id=snippet.id).count() == 1

    def test_create_unknown_tag_raises(self, make_snippet):
        """Tags must exist."""
        with pytest.raises(NotFoundError) as exc_info:
            make_snippet(tags=[404])
        assert exc_info.value.entity == "Tag"

    def test_create_unknown_category_raises(self, make_snippet):
        """Categories must exist."""
        with pytest.raises(NotFoundError):
            make_snippet(category_id=404)


class TestSnippetManagerListing:
    """Test SnippetManager.get_all() filters and ordering."""

    @pytest.fixture
    def catalog(self, make_snippet, category_manager, tag_manager):
        """Three snippets across two languages, one category and two tags."""
        utilities = category_manager.create({"name": "Utilities"})
        hooks = tag_manager.create({"name": "hooks"})
        sql = tag_manager.create({"name": "sql"})

        return {
            "debounce": make_snippet(
                title="Debounce",
                language="javascript",
                description="Rate limit 100% of calls",
                category_id=utilities.id,
                tags=[hooks.id],
            ),
            "retry": make_snippet(
                title="Retry decorator",
                language="python",
                code="def retry(fn): ...",
            ),
            "upsert": make_snippet(
                title="Upsert",
                language="python",
                code="INSERT ... ON CONFLICT DO UPDATE",
                tags=[sql.id],
            ),
        }

    def test_newest_first(self, snippet_manager, catalog):
        """Most recently modified snippets come first."""
        titles = [s.title for s in snippet_manager.get_all()]
        assert titles == ["Upsert", "Retry decorator", "Debounce"]

    def test_update_moves_snippet_to_front(self, snippet_manager, catalog):
        """Editing bumps updated_at."""
        debounce = catalog["debounce"]
        before = debounce.updated_at
        snippet_manager.update(debounce.id, {"title": "Debounce v2"})

        assert debounce.updated_at > before
        assert snippet_manager.get_all()[0].id == debounce.id

    def test_language_filter_is_exact(self, snippet_manager, catalog):
        """Only snippets with exactly this language are returned."""
        results = snippet_manager.get_all(language="python")
        assert {s.title for s in results} == {"Retry decorator", "Upsert"}
        assert snippet_manager.get_all(language="pyth") == []

    @pytest.mark.parametrize("language", [None, "", "all"])
    def test_language_all_disables_filter(self, snippet_manager, catalog, language):
        """'all' and empty values return every language."""
        assert len(snippet_manager.get_all(language=language)) == 3

    def test_category_filter(self, snippet_manager, catalog):
        """Category filter matches the category name."""
        results = snippet_manager.get_all(category="Utilities")
        assert [s.title for s in results] == ["Debounce"]

    def test_tag_filter(self, snippet_manager, catalog):
        """Tag filter matches through the join table."""
        results = snippet_manager.get_all(tag="sql")
        assert [s.title for s in results] == ["Upsert"]

    def test_search_covers_title_description_and_code(self, snippet_manager, catalog):
        """Search is a substring match on any of the text fields."""
        assert [s.title for s in snippet_manager.get_all(search="Retry")] == [
            "Retry decorator"
        ]
        assert [s.title for s in snippet_manager.get_all(search="Rate limit")] == [
            "Debounce"
        ]
        assert [s.title for s in snippet_manager.get_all(search="ON CONFLICT")] == [
            "Upsert"
        ]

    def test_search_escapes_wildcards(self, snippet_manager, catalog):
        """A literal percent sign does not match everything."""
        assert [s.title for s in snippet_manager.get_all(search="100%")] == ["Debounce"]
        assert snippet_manager.get_all(search="_x_") == []

    def test_filters_combine(self, snippet_manager, catalog):
        """Every given filter must hold."""
        assert snippet_manager.get_all(language="python", tag="sql")[0].title == "Upsert"
        assert snippet_manager.get_all(language="javascript", tag="sql") == []

    def test_unknown_filter_values_return_empty(self, snippet_manager, catalog):
        """No match is an empty list, never an error."""
        assert snippet_manager.get_all(category="Nope") == []
        assert snippet_manager.get_all(tag="nope") == []

    def test_limit(self, snippet_manager, catalog):
        """limit caps the listing."""
        assert len(snippet_manager.get_all(limit=2)) == 2

    def test_languages(self, snippet_manager, catalog):
        """Distinct languages, alphabetically."""
        assert snippet_manager.languages() == ["javascript", "python"]


class TestSnippetManagerUpdate:
    """Test SnippetManager.update() method."""

    def test_tags_fully_replaced(self, snippet_manager, tag_manager, make_snippet):
        """The new list replaces the old one; nothing is merged."""
        a = tag_manager.create({"name": "a"})
        b = tag_manager.create({"name": "b"})
        c = tag_manager.create({"name": "c"})
        snippet = make_snippet(tags=[a.id, b.id])

        snippet_manager.update(snippet.id, {"tags": [b.id, c.id]})

        assert snippet_manager.get(snippet.id).tag_names == ["b", "c"]
        assert a.snippet_count == 0
        assert c.snippet_count == 1

    def test_empty_tag_list_clears_tags(self, snippet_manager, tag_manager, make_snippet, db_session):
        """An empty list leaves the snippet with no tags."""
        tag = tag_manager.create({"name": "python"})
        snippet = make_snippet(tags=[tag.id])

        snippet_manager.update(snippet.id, {"tags": []})

        assert snippet_manager.get(snippet.id).tags == []
        assert db_session.query(SnippetTag).filter_by(snippet_id=snippet.id).count() == 0

    def test_absent_tags_clear_tags(self, snippet_manager, tag_manager, make_snippet):
        """Omitting tags is the same as an empty list."""
        tag = tag_manager.create({"name": "python"})
        snippet = make_snippet(tags=[tag.id])

        snippet_manager.update(snippet.id, {"title": "Renamed"})

        assert snippet.tags == []

    def test_absent_category_clears_category(
        self, snippet_manager, category_manager, make_snippet
    ):
        """Omitting category_id removes the snippet from its category."""
        utilities = category_manager.create({"name": "Utilities"})
        snippet = make_snippet(category_id=utilities.id)

        snippet_manager.update(snippet.id, {"title": "Renamed"})

        assert snippet.category is None

    def test_move_to_other_category(self, snippet_manager, category_manager, make_snippet):
        """category_id moves the snippet."""
        first = category_manager.create({"name": "First"})
        second = category_manager.create({"name": "Second"})
        snippet = make_snippet(category_id=first.id)

        snippet_manager.update(snippet.id, {"category_id": second.id})

        assert snippet.category is second
        assert first.snippet_count == 0
        assert second.snippet_count == 1

    def test_scalars_replaced_only_when_present(self, snippet_manager, make_snippet):
        """Fields not in the payload keep their value."""
        snippet = make_snippet(description="old")

        snippet_manager.update(snippet.id, {"code": "const x = 1;"})

        assert snippet.code == "const x = 1;"
        assert snippet.title == "Debounce"
        assert snippet.description == "old"

    def test_update_keeps_surrounding_whitespace(self, snippet_manager, make_snippet):
        """Updated scalars are stored verbatim."""
        snippet = make_snippet()

        snippet_manager.update(snippet.id, {"title": " Throttle ", "description": "\tnote"})

        fetched = snippet_manager.get(snippet.id)
        assert fetched.title == " Throttle "
        assert fetched.description == "\tnote"

    def test_description_can_be_cleared(self, snippet_manager, make_snippet):
        """An empty description clears it."""
        snippet = make_snippet(description="old")
        snippet_manager.update(snippet.id, {"description": ""})
        assert snippet.description is None

    def test_required_field_cannot_be_blanked(self, snippet_manager, make_snippet):
        """title, code and language stay non-empty."""
        snippet = make_snippet()
        with pytest.raises(ValidationError):
            snippet_manager.update(snippet.id, {"title": "   "})
        assert snippet.title == "Debounce"

    def test_update_missing_raises(self, snippet_manager):
        """Unknown ids raise NotFoundError."""
        with pytest.raises(NotFoundError):
            snippet_manager.update(999, {"title": "x"})

    def test_unknown_tag_leaves_snippet_untouched(self, snippet_manager, tag_manager, make_snippet):
        """Ids are resolved before any link is removed."""
        tag = tag_manager.create({"name": "python"})
        snippet = make_snippet(tags=[tag.id])

        with pytest.raises(NotFoundError):
            snippet_manager.update(snippet.id, {"tags": [tag.id, 404]})

        assert snippet.tag_names == ["python"]


class TestSnippetManagerDelete:
    """Test SnippetManager.delete() method."""

    def test_delete_removes_links(self, snippet_manager, tag_manager, make_snippet, db_session):
        """Links go with the snippet; the tag stays."""
        tag = tag_manager.create({"name": "python"})
        snippet = make_snippet(tags=[tag.id])
        snippet_id = snippet.id

        snippet_manager.delete(snippet_id)

        with pytest.raises(NotFoundError):
            snippet_manager.get(snippet_id)
        assert db_session.query(SnippetTag).count() == 0
        assert tag_manager.get(tag.id).snippet_count == 0

    def test_delete_updates_category_count(
        self, snippet_manager, category_manager, make_snippet
    ):
        """The category no longer counts a deleted snippet."""
        utilities = category_manager.create({"name": "Utilities"})
        snippet = make_snippet(category_id=utilities.id)

        snippet_manager.delete(snippet.id)

        assert utilities.snippet_count == 0

    def test_delete_missing_raises(self, snippet_manager):
        """Deleting an unknown id is an error."""
        with pytest.raises(NotFoundError):
            snippet_manager.delete(999)
