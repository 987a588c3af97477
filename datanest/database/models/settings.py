"""
Settings & AI Models
--------------------

Application-level records that are not part of the snippet catalog.

Models:
    - Settings: Singleton row (fixed id) with AI-provider and theme preferences
    - AiQuery: Log of AI chat queries, only counted for dashboard statistics
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, isoformat, utc_now

SETTINGS_ID = "default"
API_KEY_MASK = "••••••••"

SETTINGS_DEFAULTS: Dict[str, Any] = {
    "ai_provider": "claude",
    "ai_api_key": None,
    "local_model_endpoint": "http://localhost:11434",
    "theme": "system",
    "editor_theme": "dark",
    "font_size": 14,
}


class Settings(Base, TimestampMixin):
    """
    Application preferences, stored as a single well-known row.

    Attributes:
        id: Fixed identity (SETTINGS_ID)
        ai_provider: Provider for the AI assistant ("claude", "openai", "local")
        ai_api_key: Secret key for the provider; never serialized raw
        local_model_endpoint: URL of a locally hosted model
        theme: UI theme ("light", "dark", "system")
        editor_theme: Code editor theme
        font_size: Editor font size in points
    """

    __tablename__ = "settings"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=SETTINGS_ID)
    ai_provider: Mapped[str] = mapped_column(
        String(64), nullable=False, default=SETTINGS_DEFAULTS["ai_provider"]
    )
    ai_api_key: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    local_model_endpoint: Mapped[Optional[str]] = mapped_column(
        String(255), default=SETTINGS_DEFAULTS["local_model_endpoint"]
    )
    theme: Mapped[str] = mapped_column(
        String(32), nullable=False, default=SETTINGS_DEFAULTS["theme"]
    )
    editor_theme: Mapped[str] = mapped_column(
        String(32), nullable=False, default=SETTINGS_DEFAULTS["editor_theme"]
    )
    font_size: Mapped[int] = mapped_column(
        Integer, nullable=False, default=SETTINGS_DEFAULTS["font_size"]
    )

    @property
    def has_api_key(self) -> bool:
        """Whether an API key is stored."""
        return bool(self.ai_api_key)

    def to_dict(self) -> Dict[str, Any]:
        """Plain record with the API key masked."""
        return {
            "id": self.id,
            "ai_provider": self.ai_provider,
            "ai_api_key": API_KEY_MASK if self.has_api_key else None,
            "has_api_key": self.has_api_key,
            "local_model_endpoint": self.local_model_endpoint,
            "theme": self.theme,
            "editor_theme": self.editor_theme,
            "font_size": self.font_size,
            "updated_at": isoformat(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Settings(id={self.id!r}, ai_provider={self.ai_provider!r})>"


class AiQuery(Base):
    """
    A question asked to the AI assistant.

    Attributes:
        id: Primary key
        query: The user prompt
        response: The assistant's answer, if any
        created_at: When the query was made
    """

    __tablename__ = "ai_queries"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    query: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    def __repr__(self) -> str:
        return f"<AiQuery(id={self.id})>"
