"""
Entity Models
-------------

Classification entities referenced (not owned) by snippets.

Models:
    - Category: Named bucket a snippet may belong to (zero-or-one)
    - Tag: Canonical keyword label, many-to-many with snippets

Both carry a display color token used by the front end; when none is
given the DEFAULT_COLOR token is stored.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import CheckConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .associations import SnippetTag
from .base import Base, TimestampMixin, isoformat

if TYPE_CHECKING:
    from .core import Snippet

DEFAULT_COLOR = "bg-blue-500"


class Category(Base, TimestampMixin):
    """
    Named grouping of snippets.

    Attributes:
        id: Primary key
        name: Category name (unique)
        description: Optional description
        color: Display color token

    Relationships:
        snippets: One-to-many with Snippet. Deleting a category clears
            ``category_id`` on its snippets; they are never deleted with it.

    Computed Properties:
        snippet_count: Number of snippets in this category
    """

    __tablename__ = "categories"
    __table_args__ = (
        CheckConstraint("name != ''", name="ck_category_non_empty_name"),
    )

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    color: Mapped[str] = mapped_column(
        String(64), nullable=False, default=DEFAULT_COLOR
    )

    # ---- Relationship ----
    snippets: Mapped[List["Snippet"]] = relationship(
        "Snippet", back_populates="category"
    )

    # ---- Computed properties ----
    @property
    def snippet_count(self) -> int:
        """Number of snippets in this category."""
        return len(self.snippets)

    def to_dict(self, include_count: bool = True) -> Dict[str, Any]:
        """Plain record of this category."""
        record: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "color": self.color,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
        if include_count:
            record["snippet_count"] = self.snippet_count
        return record

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name!r})>"


class Tag(Base, TimestampMixin):
    """
    Canonical keyword label for snippets.

    Attributes:
        id: Primary key
        name: Canonical tag name (unique, lowercase, hyphenated)
        color: Display color token

    Relationships:
        snippet_links: One-to-many with SnippetTag (cascade delete)

    Computed Properties:
        snippets: Snippets carrying this tag
        snippet_count: Number of snippets carrying this tag
    """

    __tablename__ = "tags"
    __table_args__ = (CheckConstraint("name != ''", name="ck_tag_non_empty_name"),)

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    color: Mapped[str] = mapped_column(
        String(64), nullable=False, default=DEFAULT_COLOR
    )

    # ---- Relationships ----
    snippet_links: Mapped[List[SnippetTag]] = relationship(
        SnippetTag,
        back_populates="tag",
        cascade="all, delete-orphan",
    )

    # ---- Computed properties ----
    @property
    def snippets(self) -> List["Snippet"]:
        """Snippets carrying this tag."""
        return [link.snippet for link in self.snippet_links]

    @property
    def snippet_count(self) -> int:
        """Number of snippets carrying this tag."""
        return len(self.snippet_links)

    def to_dict(self, include_count: bool = True) -> Dict[str, Any]:
        """Plain record of this tag."""
        record: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
        if include_count:
            record["snippet_count"] = self.snippet_count
        return record

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name={self.name!r})>"
