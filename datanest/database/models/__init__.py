"""
Database Models Package
------------------------

SQLAlchemy ORM models for the Datanest snippet database.

This package provides a modular organization of database models:
- base: Base class and timestamp mixin
- associations: SnippetTag join entity
- core: Snippet model
- entities: Category, Tag
- settings: Settings singleton, AiQuery log

Usage:
    from datanest.database.models import Snippet, Tag, Category
"""
# Base classes
from .base import Base, TimestampMixin, utc_now

# Join entities
from .associations import SnippetTag

# Core models
from .core import Snippet

# Entity models
from .entities import DEFAULT_COLOR, Category, Tag

# Application records
from .settings import API_KEY_MASK, SETTINGS_DEFAULTS, SETTINGS_ID, AiQuery, Settings

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "utc_now",
    # Join entities
    "SnippetTag",
    # Core
    "Snippet",
    # Entities
    "Category",
    "Tag",
    "DEFAULT_COLOR",
    # Application records
    "Settings",
    "AiQuery",
    "SETTINGS_ID",
    "SETTINGS_DEFAULTS",
    "API_KEY_MASK",
]
