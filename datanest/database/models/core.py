"""
Core Models
------------

Central model for the Datanest database.

Models:
    - Snippet: A stored code fragment (the primary model)

A snippet optionally belongs to one Category and carries any number of
Tags through SnippetTag join rows, which it owns.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .associations import SnippetTag
from .base import Base, TimestampMixin, isoformat

if TYPE_CHECKING:
    from .entities import Category, Tag


class Snippet(Base, TimestampMixin):
    """
    A reusable code fragment.

    Attributes:
        id: Primary key
        title: Short human title (required)
        description: Optional free-text explanation
        code: The code body (required)
        language: Language label, free text (required, e.g. "python")
        category_id: Optional FK to categories (cleared when the category goes)
        created_at: When this snippet was created
        updated_at: When this snippet was last modified

    Relationships:
        category: Many-to-one with Category (optional)
        tag_links: One-to-many with SnippetTag (owned, cascade delete)

    Computed Properties:
        tags: Flattened list of Tag entities
        tag_names: Names of the flattened tags
    """

    __tablename__ = "snippets"
    __table_args__ = (
        CheckConstraint("title != ''", name="ck_snippet_non_empty_title"),
        CheckConstraint("code != ''", name="ck_snippet_non_empty_code"),
        CheckConstraint("language != ''", name="ck_snippet_non_empty_language"),
    )

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    code: Mapped[str] = mapped_column(Text, nullable=False)
    language: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # ---- Relationships ----
    category: Mapped[Optional["Category"]] = relationship(
        "Category", back_populates="snippets"
    )
    tag_links: Mapped[List[SnippetTag]] = relationship(
        SnippetTag,
        back_populates="snippet",
        cascade="all, delete-orphan",
    )

    # ---- Computed properties ----
    @property
    def tags(self) -> List["Tag"]:
        """Tags of this snippet with the join rows collapsed away."""
        return [link.tag for link in self.tag_links]

    @property
    def tag_names(self) -> List[str]:
        """Sorted names of this snippet's tags."""
        return sorted(tag.name for tag in self.tags)

    def to_dict(self) -> Dict[str, Any]:
        """Plain record with resolved category and flattened tags."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "code": self.code,
            "language": self.language,
            "category_id": self.category_id,
            "category": self.category.to_dict() if self.category else None,
            "tags": [tag.to_dict(include_count=False) for tag in self.tags],
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Snippet(id={self.id}, title={self.title!r}, language={self.language!r})>"
