#!/usr/bin/env python3
"""
snippet_manager.py
--------------------
Manages Snippet entities, their category reference and their tag links.

This is the query and mutation core of the catalog:

Listing:
    Filters combine with AND. ``language`` is an exact match ("all"
    disables it), ``category`` and ``tag`` match names exactly, and
    ``search`` is a substring match OR-ed across title, description and
    code. Results are newest-modified first.

Tag replacement:
    ``update`` never merges tag lists. Every existing SnippetTag row of
    the snippet is deleted and flushed, then one row per supplied tag id
    is inserted, all inside the caller's transaction. A concurrent reader
    may briefly see the snippet with no tags.

Usage:
    snip_mgr = SnippetManager(session, logger)

    snippet = snip_mgr.create({
        "title": "Debounce",
        "code": "function debounce(fn, ms) { ... }",
        "language": "javascript",
        "category_id": utilities.id,
        "tags": [hooks.id, timers.id],
    })
    snip_mgr.get_all(language="javascript", search="debounce")
    snip_mgr.update(snippet.id, {"tags": []})
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import selectinload

from datanest.core.validators import DataValidator
from datanest.database.decorators import DatabaseOperation, validate_metadata
from datanest.database.models import Category, Snippet, SnippetTag, Tag
from .base_manager import BaseManager

REQUIRED_FIELDS = ["title", "code", "language"]
ALL_LANGUAGES = "all"


class SnippetManager(BaseManager):
    """
    Manages Snippet table operations and relationships.

    Snippets exclusively own their SnippetTag rows; categories and tags
    are only referenced.
    """

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _base_query():
        """Snippet select with category and tags eagerly loaded."""
        return select(Snippet).options(
            selectinload(Snippet.category),
            selectinload(Snippet.tag_links).selectinload(SnippetTag.tag),
        )

    def _resolve_category(self, category_id: Any) -> Optional[Category]:
        category_id = DataValidator.normalize_int(category_id)
        if not category_id:
            return None
        return self._require(Category, category_id)

    def _replace_tags(self, snippet: Snippet, tag_ids: Any) -> None:
        """
        Replace the whole tag set of a snippet.

        Existing links are deleted and flushed before the new ones are
        inserted so the (snippet_id, tag_id) key can be reused.
        """
        tags = self._require_many(Tag, DataValidator.normalize_id_list(tag_ids))

        if snippet.tag_links:
            previous = [link.tag for link in snippet.tag_links]
            snippet.tag_links.clear()
            self.session.flush()
            self._expire_links(previous)

        for tag in tags:
            snippet.tag_links.append(SnippetTag(tag=tag))

    def _expire_links(self, tags: List[Tag]) -> None:
        """Drop stale ``snippet_links`` of tags whose links were deleted."""
        for tag in tags:
            if tag is not None:
                self.session.expire(tag, ["snippet_links"])

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, snippet_id: int) -> Snippet:
        """
        Retrieve one snippet with category and tags resolved.

        Raises:
            NotFoundError: If no snippet has this id
        """
        with DatabaseOperation(self.logger, "get_snippet"):
            return self._require(Snippet, snippet_id)

    def get_all(
        self,
        language: Optional[str] = None,
        category: Optional[str] = None,
        tag: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Snippet]:
        """
        List snippets matching every given filter.

        Args:
            language: Exact language value; None, "" or "all" disables it
            category: Exact category name
            tag: Exact tag name (the snippet must carry it)
            search: Substring looked up in title, description and code
            limit: Maximum number of snippets to return

        Returns:
            Snippets ordered by last modification, newest first. An empty
            list when nothing matches.
        """
        with DatabaseOperation(self.logger, "get_all_snippets"):
            stmt = self._base_query()

            if language and language != ALL_LANGUAGES:
                stmt = stmt.where(Snippet.language == language)

            if category:
                stmt = stmt.where(Snippet.category.has(Category.name == category))

            if tag:
                stmt = stmt.where(
                    Snippet.tag_links.any(SnippetTag.tag.has(Tag.name == tag))
                )

            if search:
                stmt = stmt.where(
                    or_(
                        Snippet.title.contains(search, autoescape=True),
                        Snippet.description.contains(search, autoescape=True),
                        Snippet.code.contains(search, autoescape=True),
                    )
                )

            stmt = stmt.order_by(Snippet.updated_at.desc(), Snippet.id.desc())
            if limit is not None:
                stmt = stmt.limit(limit)

            return list(self.session.scalars(stmt))

    def get_recent(self, limit: int = 5) -> List[Snippet]:
        """Most recently modified snippets."""
        return self.get_all(limit=limit)

    def languages(self) -> List[str]:
        """Distinct languages in use, alphabetically."""
        with DatabaseOperation(self.logger, "get_snippet_languages"):
            stmt = select(Snippet.language).distinct().order_by(Snippet.language)
            return list(self.session.scalars(stmt))

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    @validate_metadata(REQUIRED_FIELDS)
    def create(self, metadata: Dict[str, Any]) -> Snippet:
        """
        Create a new snippet.

        Args:
            metadata: Dictionary with keys:
                - title, code, language: Required, non-empty
                - description: Optional
                - category_id: Optional id of an existing category
                - tags: Optional list of existing tag ids

        Returns:
            The created Snippet

        Raises:
            ValidationError: If a required field is missing or empty
            NotFoundError: If category_id or a tag id does not exist
        """

        def _do_create() -> Snippet:
            snippet = Snippet(
                title=DataValidator.non_blank_text(metadata["title"]),
                description=DataValidator.non_blank_text(metadata.get("description")),
                code=metadata["code"],
                language=DataValidator.non_blank_text(metadata["language"]),
                category=self._resolve_category(metadata.get("category_id")),
            )
            self.session.add(snippet)
            self._replace_tags(snippet, metadata.get("tags"))
            self.session.flush()
            return snippet

        with DatabaseOperation(self.logger, "create_snippet"):
            snippet = self._execute_with_retry(_do_create)

            if self.logger:
                self.logger.log_debug(
                    f"Created snippet: {snippet.title}",
                    {"snippet_id": snippet.id, "tag_count": len(snippet.tag_links)},
                )

            return snippet

    def update(self, snippet_id: int, metadata: Dict[str, Any]) -> Snippet:
        """
        Update a snippet.

        Args:
            snippet_id: Id of the snippet to update
            metadata: Dictionary with any of:
                - title, code, language: Replaced when present (never blanked)
                - description: Replaced when present (may be cleared)
                - category_id: New category; absent or empty clears it
                - tags: New complete list of tag ids; absent or empty
                  leaves the snippet with no tags

        Returns:
            The updated Snippet

        Raises:
            NotFoundError: If the snippet, category or a tag does not exist
            ValidationError: If a required field is given as empty
        """
        present_required = [field for field in REQUIRED_FIELDS if field in metadata]
        DataValidator.validate_required_fields(metadata, present_required)

        def _do_update() -> Snippet:
            snippet = self._require(Snippet, snippet_id)

            self._update_scalar_fields(
                snippet,
                metadata,
                [
                    ("title", DataValidator.non_blank_text),
                    ("description", DataValidator.non_blank_text, True),
                    ("language", DataValidator.non_blank_text),
                ],
            )
            if "code" in metadata:
                snippet.code = metadata["code"]

            snippet.category = self._resolve_category(metadata.get("category_id"))
            self._replace_tags(snippet, metadata.get("tags"))
            snippet.touch()
            self.session.flush()
            return snippet

        with DatabaseOperation(self.logger, "update_snippet"):
            return self._execute_with_retry(_do_update)

    def delete(self, snippet_id: int) -> None:
        """
        Delete a snippet and its tag links.

        Raises:
            NotFoundError: If no snippet has this id
        """
        with DatabaseOperation(self.logger, "delete_snippet"):
            snippet = self._require(Snippet, snippet_id)
            tags = list(snippet.tags)
            category = snippet.category

            self.session.delete(snippet)
            self.session.flush()

            self._expire_links(tags)
            if category is not None:
                self.session.expire(category, ["snippets"])

            if self.logger:
                self.logger.log_debug(
                    f"Deleted snippet: {snippet.title}", {"snippet_id": snippet_id}
                )
