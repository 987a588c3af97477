#!/usr/bin/env python3
"""
tag_manager.py
--------------------
Manages Tag entities and their links to snippets.

Tag names are always stored in canonical form: trimmed, lowercased,
whitespace runs collapsed to hyphens ("React Hooks" -> "react-hooks").
Deleting a tag removes its SnippetTag rows; the snippets themselves are
untouched.

Key Features:
    - CRUD operations for tags
    - Bulk deletion tolerant of unknown ids
    - Live snippet counts
    - Automatic tag normalization

Usage:
    tag_mgr = TagManager(session, logger)

    tag = tag_mgr.create({"name": "React Hooks", "color": "bg-cyan-500"})
    tag_mgr.update(tag.id, {"name": "hooks"})
    for tag in tag_mgr.get_all():
        print(tag.name, tag.snippet_count)
    tag_mgr.delete_many([tag.id, 999])
"""
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from datanest.core.exceptions import ValidationError
from datanest.core.validators import DataValidator
from datanest.database.decorators import DatabaseOperation
from datanest.database.models import DEFAULT_COLOR, Tag
from .base_manager import BaseManager


class TagManager(BaseManager):
    """
    Manages Tag table operations.

    Tags are canonical keyword labels. Each tag name is unique and can be
    linked to many snippets through SnippetTag rows.
    """

    @staticmethod
    def _normalize_name(raw_name: Any) -> str:
        """Canonical tag name or ValidationError when nothing is left."""
        name = DataValidator.normalize_tag_name(raw_name)
        if not name:
            raise ValidationError("Tag name cannot be empty")
        return name

    def _delete_tags(self, tags: List[Tag]) -> None:
        """
        Delete tags and their links, then expire the affected snippets'
        ``tag_links`` so loaded snippets no longer show the removed tags.
        """
        affected = {link.snippet for tag in tags for link in tag.snippet_links}

        for tag in tags:
            self.session.delete(tag)
        self.session.flush()

        for snippet in affected:
            self.session.expire(snippet, ["tag_links"])

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def exists(self, tag_name: Optional[str]) -> bool:
        """
        Check if a tag exists without raising exceptions.

        Args:
            tag_name: The tag text to check (normalized before lookup)

        Returns:
            True if tag exists, False otherwise
        """
        return self.get_by_name(tag_name) is not None

    def get(self, tag_id: int) -> Tag:
        """
        Retrieve a tag by ID.

        Raises:
            NotFoundError: If no tag has this id
        """
        with DatabaseOperation(self.logger, "get_tag"):
            return self._require(Tag, tag_id)

    def get_by_name(self, tag_name: Optional[str]) -> Optional[Tag]:
        """
        Retrieve a tag by name.

        Args:
            tag_name: Tag text, normalized before lookup

        Returns:
            Tag object if found, None otherwise
        """
        with DatabaseOperation(self.logger, "get_tag_by_name"):
            return self._get_by_field(
                Tag, "name", DataValidator.normalize_tag_name(tag_name)
            )

    def get_all(self) -> List[Tag]:
        """
        Retrieve all tags sorted by name, with their links preloaded so
        that ``snippet_count`` does not issue one query per tag.
        """
        with DatabaseOperation(self.logger, "get_all_tags"):
            stmt = (
                select(Tag)
                .options(selectinload(Tag.snippet_links))
                .order_by(Tag.name.asc())
            )
            return list(self.session.scalars(stmt))

    def get_unused(self) -> List[Tag]:
        """Tags not linked to any snippet."""
        return [tag for tag in self.get_all() if tag.snippet_count == 0]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, metadata: Dict[str, Any]) -> Tag:
        """
        Create a new tag.

        Args:
            metadata: Dictionary with keys:
                - name: Tag text (required, normalized)
                - color: Display color token (optional)

        Returns:
            Created Tag object (snippet count zero)

        Raises:
            ValidationError: If name is missing or empty after normalization
            DatabaseError: If a tag with the same canonical name exists
        """
        with DatabaseOperation(self.logger, "create_tag"):
            name = self._normalize_name(metadata.get("name"))
            color = DataValidator.normalize_string(metadata.get("color")) or DEFAULT_COLOR

            tag = Tag(name=name, color=color)
            self.session.add(tag)
            self.session.flush()

            if self.logger:
                self.logger.log_debug(f"Created tag: {name}", {"tag_id": tag.id})

            return tag

    def update(self, tag_id: int, metadata: Dict[str, Any]) -> Tag:
        """
        Rename and/or recolor a tag.

        Args:
            tag_id: Id of the tag to update
            metadata: Optional keys ``name`` (renormalized) and ``color``

        Raises:
            NotFoundError: If no tag has this id
            ValidationError: If the new name is empty after normalization
            DatabaseError: If the new name collides with another tag
        """
        with DatabaseOperation(self.logger, "update_tag"):
            tag = self._require(Tag, tag_id)

            if metadata.get("name") is not None:
                tag.name = self._normalize_name(metadata["name"])

            self._update_scalar_fields(
                tag, metadata, [("color", DataValidator.normalize_string)]
            )
            self.session.flush()
            return tag

    def delete(self, tag_id: int) -> None:
        """
        Delete a tag.

        Notes:
            - Cascade delete removes every snippet-tag link of this tag
            - Deleting an unknown id is an error, not a no-op

        Raises:
            NotFoundError: If no tag has this id
        """
        with DatabaseOperation(self.logger, "delete_tag"):
            tag = self._require(Tag, tag_id)

            if self.logger:
                self.logger.log_debug(
                    f"Deleting tag: {tag.name}",
                    {"tag_id": tag.id, "snippet_count": tag.snippet_count},
                )

            self._delete_tags([tag])

    def delete_many(self, tag_ids: Iterable[Any]) -> int:
        """
        Delete every tag whose id is in ``tag_ids``.

        Ids with no matching tag are ignored, including ids that are not
        integers. All deletions happen in the caller's transaction.

        Returns:
            Number of tags actually deleted

        Raises:
            ValidationError: If tag_ids is not a list
        """
        with DatabaseOperation(self.logger, "delete_tags"):
            ids = DataValidator.normalize_id_list(tag_ids, skip_invalid=True)
            if not ids:
                return 0

            tags = list(self.session.scalars(select(Tag).where(Tag.id.in_(ids))))
            self._delete_tags(tags)

            if self.logger:
                self.logger.log_debug(
                    "Bulk deleted tags",
                    {"requested": len(ids), "deleted": len(tags)},
                )

            return len(tags)
