#!/usr/bin/env python3
"""
category_manager.py
--------------------
Manages Category entities.

A category owns nothing: deleting it clears the category reference of
its snippets and leaves them in place.

Usage:
    cat_mgr = CategoryManager(session, logger)

    utilities = cat_mgr.create({"name": "Utilities", "color": "bg-green-500"})
    for category in cat_mgr.get_all():
        print(category.name, category.snippet_count)
    cat_mgr.delete(utilities.id)
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from datanest.core.validators import DataValidator
from datanest.database.decorators import DatabaseOperation
from datanest.database.models import DEFAULT_COLOR, Category, Snippet
from .base_manager import BaseManager


class CategoryManager(BaseManager):
    """Manages Category table operations."""

    def get(self, category_id: int) -> Category:
        """
        Retrieve a category by ID.

        Raises:
            NotFoundError: If no category has this id
        """
        with DatabaseOperation(self.logger, "get_category"):
            return self._require(Category, category_id)

    def get_by_name(self, name: Optional[str]) -> Optional[Category]:
        """Retrieve a category by its exact (trimmed) name."""
        with DatabaseOperation(self.logger, "get_category_by_name"):
            return self._get_by_field(
                Category, "name", DataValidator.normalize_string(name)
            )

    def get_all(self) -> List[Category]:
        """
        Retrieve all categories sorted by name.

        Only snippet ids are preloaded, enough for ``snippet_count``.
        """
        with DatabaseOperation(self.logger, "get_all_categories"):
            stmt = (
                select(Category)
                .options(selectinload(Category.snippets).load_only(Snippet.id))
                .order_by(Category.name.asc())
            )
            return list(self.session.scalars(stmt))

    def create(self, metadata: Dict[str, Any]) -> Category:
        """
        Create a new category.

        Args:
            metadata: Dictionary with keys:
                - name: Category name (required)
                - description: Optional description
                - color: Display color token (optional)

        Returns:
            Created Category (snippet count zero)

        Raises:
            ValidationError: If name is missing or empty
            DatabaseError: If a category with this name exists
        """
        DataValidator.validate_required_fields(metadata, ["name"])

        with DatabaseOperation(self.logger, "create_category"):
            category = Category(
                name=DataValidator.normalize_string(metadata["name"]),
                description=DataValidator.normalize_string(metadata.get("description")),
                color=DataValidator.normalize_string(metadata.get("color")) or DEFAULT_COLOR,
            )
            self.session.add(category)
            self.session.flush()
            return category

    def delete(self, category_id: int) -> None:
        """
        Delete a category, detaching its snippets.

        Raises:
            NotFoundError: If no category has this id
        """
        with DatabaseOperation(self.logger, "delete_category"):
            category = self._require(Category, category_id)
            snippets = list(category.snippets)

            for snippet in snippets:
                snippet.category = None
            self.session.delete(category)
            self.session.flush()

            if self.logger:
                self.logger.log_debug(
                    f"Deleted category: {category.name}",
                    {"category_id": category_id, "detached_snippets": len(snippets)},
                )
