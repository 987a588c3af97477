"""
Association Objects
-------------------

Many-to-many join entities for the Datanest database.

SnippetTag pairs one Snippet with one Tag. It is mapped as a class (not
a bare ``Table``) so that the join is an explicit, auditable relation:
rows are owned by both sides and vanish when either side is deleted,
through ORM ``delete-orphan`` cascades and ``ON DELETE CASCADE``
foreign keys alike.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import TYPE_CHECKING

# --- Third party imports ---
from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from .base import Base

if TYPE_CHECKING:
    from .core import Snippet
    from .entities import Tag


class SnippetTag(Base):
    """
    Join row linking a snippet to one of its tags.

    Attributes:
        snippet_id: FK to snippets (part of the primary key)
        tag_id: FK to tags (part of the primary key)

    Relationships:
        snippet: Many-to-one with Snippet
        tag: Many-to-one with Tag
    """

    __tablename__ = "snippet_tags"

    snippet_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("snippets.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    snippet: Mapped["Snippet"] = relationship("Snippet", back_populates="tag_links")
    tag: Mapped["Tag"] = relationship("Tag", back_populates="snippet_links")

    def __repr__(self) -> str:
        return f"<SnippetTag(snippet_id={self.snippet_id}, tag_id={self.tag_id})>"
