"""
Base Classes and Mixins
------------------------

Foundational ORM classes for the Datanest database.

Classes:
    - Base: Declarative base for all SQLAlchemy models
    - TimestampMixin: created_at/updated_at columns kept in UTC

This module provides the core infrastructure that other model modules build upon.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone
from typing import Optional

# --- Third party ---
from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def isoformat(value: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime for plain records, None-safe."""
    return value.isoformat() if value is not None else None


# --- Base ORM class ---
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Serves as the declarative base for SQLAlchemy models and provides
    access to the metadata object for table creation and migrations.
    """

    pass


# --- Timestamps ---
class TimestampMixin:
    """
    Mixin providing creation and last-modification timestamps.

    Attributes:
        created_at: When the row was inserted
        updated_at: When the row was last modified (bumped on every UPDATE)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
        index=True,
    )

    def touch(self) -> None:
        """Mark the record as modified now."""
        self.updated_at = utc_now()
