"""
Datanest
========

A personal code-snippet catalog.

Snippets carry a title, source code and a language, belong to at most
one category and may be labeled with any number of tags. Everything is
stored in a local SQLite database managed through SQLAlchemy, with the
schema versioned by Alembic.

Main Components:
    - database: ORM models, entity managers, analytics and the CLI
    - core: Logging, validation, exceptions and path constants

Primary Interfaces:
    - datanest.database.cli: Command-line interface (``datanest``)
    - datanest.database.manager.DatanestDB: Main database interface

Example Usage:
    >>> from datanest import DatanestDB
    >>> from datanest.core.paths import DB_PATH, ALEMBIC_DIR, LOG_DIR
    >>> db = DatanestDB(db_path=DB_PATH, alembic_dir=ALEMBIC_DIR, log_dir=LOG_DIR)
    >>> with db.session_scope() as session:
    ...     recent = db.snippets.get_all(limit=5)
"""

__version__ = "1.0.0"

from datanest.database.manager import DatanestDB
from datanest.core.paths import DATA_DIR, DB_PATH, LOG_DIR

__all__ = [
    "DatanestDB",
    "DATA_DIR",
    "DB_PATH",
    "LOG_DIR",
]
