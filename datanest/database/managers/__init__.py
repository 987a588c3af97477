#!/usr/bin/env python3
"""
managers package
--------------------
Entity managers for the Datanest database.

Each manager handles operations for one entity type and inherits from
BaseManager. Managers never commit; the session owner does.

Available Managers:
    BaseManager: Abstract base class with common utilities
    SnippetManager: Snippet listing, creation, update and deletion
    TagManager: Tag CRUD and bulk deletion
    CategoryManager: Category listing, creation and deletion
    SettingsManager: Settings singleton read and partial update

Usage:
    from datanest.database.managers import SnippetManager, TagManager

    snip_mgr = SnippetManager(session, logger)
    tag_mgr = TagManager(session, logger)
"""
from .base_manager import BaseManager
from .snippet_manager import SnippetManager
from .tag_manager import TagManager
from .category_manager import CategoryManager
from .settings_manager import SettingsManager

__all__ = [
    "BaseManager",
    "SnippetManager",
    "TagManager",
    "CategoryManager",
    "SettingsManager",
]
