#!/usr/bin/env python3
"""
Datanest Database Package
-------------------------
Snippet catalog persistence with a modular architecture:
- DatanestDB: engine, session scopes and migrations
- managers: per-entity query and mutation logic
- query_analytics: dashboard statistics
- cli: command-line interface
"""

from .manager import DatanestDB
from datanest.core.exceptions import DatabaseError, NotFoundError, ValidationError

__all__ = [
    "DatanestDB",
    "DatabaseError",
    "NotFoundError",
    "ValidationError",
]
