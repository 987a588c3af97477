#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the Datanest snippet catalog.

Provides the DatanestDB class for interacting with the SQLite database.
Handles:
    - Initialization of the database engine and sessionmaker
    - Transactional session scopes exposing the entity managers
    - Dashboard statistics through QueryAnalytics
    - Migration management via Alembic

Key Features:
    - Transaction management with automatic rollback
    - Foreign keys enforced on every SQLite connection
    - Settings singleton provisioned on schema creation
    - Comprehensive error handling and logging

Core Operations:
    Snippets (db.snippets):
        - get_all / get: Filtered listings and single lookups
        - create / update / delete: Mutations with tag replacement

    Tags (db.tags):
        - get_all / get / get_by_name
        - create / update / delete / delete_many

    Categories (db.categories):
        - get_all / get / get_by_name
        - create / delete

    Settings (db.settings):
        - get / update

    Database Maintenance:
        - initialize_schema: Create tables, stamp Alembic head
        - upgrade_database: Apply pending migrations
        - get_migration_history: Current Alembic revision

Notes
==============
- Managers flush but never commit; session_scope owns the transaction
- All datetime fields are UTC-aware
- Retry logic handles SQLite lock contention
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine, event, inspect
from sqlalchemy.orm import Session, sessionmaker

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext

# --- Local imports ---
from datanest.core.exceptions import DatabaseError
from datanest.core.logging_manager import DatanestLogger
from datanest.core.paths import ALEMBIC_INI
from .decorators import handle_db_errors, log_database_operation
from .managers import CategoryManager, SettingsManager, SnippetManager, TagManager
from .models import Base
from .query_analytics import QueryAnalytics


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite leaves foreign key enforcement off unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ----- Main Database Manager -----
class DatanestDB:
    """
    Main database manager for the Datanest snippet catalog.

    Attributes:
        - db_path (Path): Filesystem path to the SQLite database file.
        - alembic_dir (Path): Filesystem path to the Alembic directory.
        - engine (Engine): SQLAlchemy engine instance.
        - SessionLocal (sessionmaker): SQLAlchemy session factory.

    Usage:
        db = DatanestDB("~/data/datanest.db", ALEMBIC_DIR)
        with db.session_scope() as session:
            snippets = db.snippets.get_all(language="python")
            stats = db.query_analytics.get_dashboard_stats(session)
    """

    # ---- Initialization ----
    def __init__(
        self,
        db_path: Union[str, Path],
        alembic_dir: Union[str, Path],
        log_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        """
        Initialize database engine and session factory.

        Args:
            db_path (str | Path): Path to the SQLite file.
            alembic_dir (str | Path): Path to the Alembic directory.
            log_dir (str | Path): Directory for log files (optional)
        """
        self.db_path = Path(db_path).expanduser().resolve()
        self.alembic_dir = Path(alembic_dir).expanduser().resolve()

        # --- Logging ---
        if log_dir:
            self.log_dir = Path(log_dir).expanduser().resolve() / "system"
            self.logger: Optional[DatanestLogger] = DatanestLogger(
                self.log_dir,
                component_name="database",
            )
        else:
            self.logger = None

        self.query_analytics = QueryAnalytics(self.logger)

        # Entity managers, bound per session in session_scope
        self._snippet_manager: Optional[SnippetManager] = None
        self._tag_manager: Optional[TagManager] = None
        self._category_manager: Optional[CategoryManager] = None
        self._settings_manager: Optional[SettingsManager] = None

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Initialize database engine and session factory."""
        try:
            if self.logger:
                self.logger.log_operation(
                    "database_init_start",
                    {
                        "db_path": str(self.db_path),
                        "alembic_dir": str(self.alembic_dir),
                    },
                )

            is_new = not self.db_path.exists()
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self.engine: Engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                pool_pre_ping=True,
            )
            event.listen(self.engine, "connect", _enable_foreign_keys)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )

            self.alembic_cfg: Config = self._setup_alembic()

            if is_new:
                self.initialize_schema()

            if self.logger:
                self.logger.log_operation("database_init_complete", {"success": True})

        except DatabaseError:
            raise
        except Exception as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around operations with logging.

        Entity managers bound to the session are available through the
        ``snippets``, ``tags``, ``categories`` and ``settings`` properties
        while the scope is open.

        Usage:
            with db.session_scope() as session:
                tag = db.tags.create({"name": "React Hooks"})
                db.snippets.create({..., "tags": [tag.id]})
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

        self._snippet_manager = SnippetManager(session, self.logger)
        self._tag_manager = TagManager(session, self.logger)
        self._category_manager = CategoryManager(session, self.logger)
        self._settings_manager = SettingsManager(session, self.logger)

        if self.logger:
            self.logger.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            if self.logger:
                self.logger.log_debug("session_commit", {"session_id": session_id})

        except Exception as e:
            session.rollback()
            if self.logger:
                self.logger.log_error(
                    e, {"operation": "session_rollback", "session_id": session_id}
                )
            raise
        finally:
            self._snippet_manager = None
            self._tag_manager = None
            self._category_manager = None
            self._settings_manager = None

            session.close()
            if self.logger:
                self.logger.log_debug("session_close", {"session_id": session_id})

    def get_session(self) -> Session:
        """Create and return a new SQLAlchemy session."""
        return self.SessionLocal()

    # -------------------------------------------------------------------------
    # Entity Manager Properties
    # -------------------------------------------------------------------------

    @staticmethod
    def _active(manager, name: str):
        if manager is None:
            raise DatabaseError(
                f"{name} requires active session. "
                "Use within session_scope: "
                "with db.session_scope() as session: ..."
            )
        return manager

    @property
    def snippets(self) -> SnippetManager:
        """
        Access SnippetManager for snippet operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._active(self._snippet_manager, "SnippetManager")

    @property
    def tags(self) -> TagManager:
        """
        Access TagManager for tag operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._active(self._tag_manager, "TagManager")

    @property
    def categories(self) -> CategoryManager:
        """
        Access CategoryManager for category operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._active(self._category_manager, "CategoryManager")

    @property
    def settings(self) -> SettingsManager:
        """
        Access SettingsManager for the settings singleton.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._active(self._settings_manager, "SettingsManager")

    # -------------------------------------------------------------------------
    # Migrations
    # -------------------------------------------------------------------------

    def _setup_alembic(self) -> Config:
        """Setup Alembic configuration."""
        try:
            if self.logger:
                self.logger.log_debug("Setting up Alembic configuration...")

            alembic_cfg = Config(str(ALEMBIC_INI)) if ALEMBIC_INI.is_file() else Config()
            alembic_cfg.set_main_option("script_location", str(self.alembic_dir))
            alembic_cfg.set_main_option("sqlalchemy.url", f"sqlite:///{self.db_path}")
            alembic_cfg.attributes["configure_logger"] = False

            return alembic_cfg
        except Exception as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "setup_alembic"})
            raise DatabaseError(f"Alembic configuration failed: {e}") from e

    @handle_db_errors
    @log_database_operation("initialize_schema")
    def initialize_schema(self) -> None:
        """
        Initialize database - create tables if needed and run migrations.

        Actions:
            Checks if the database is fresh (no tables)
            If fresh,
                creates all tables from the ORM models
                stamps the Alembic revision to head
            If not,
                runs pending migrations to update schema
            Provisions the settings row in both cases
        """
        table_names = inspect(self.engine).get_table_names()

        if not table_names:
            Base.metadata.create_all(bind=self.engine)
            try:
                command.stamp(self.alembic_cfg, "head")
            except Exception as e:
                if self.logger:
                    self.logger.log_error(e, {"operation": "stamp_database"})
            if self.logger:
                self.logger.log_operation(
                    "fresh_database_created",
                    {"tables_created": len(Base.metadata.tables)},
                )
        else:
            self.upgrade_database()
            if self.logger:
                self.logger.log_operation(
                    "existing_database_migrated", {"table_count": len(table_names)}
                )

        with self.session_scope():
            self.settings.ensure()

    @handle_db_errors
    @log_database_operation("upgrade_database")
    def upgrade_database(self, revision: str = "head") -> None:
        """
        Upgrade the database schema to the specified Alembic revision.

        Args:
            revision (str, optional):
                The target revision to upgrade to.
                Defaults to 'head' (latest revision).
        """
        try:
            command.upgrade(self.alembic_cfg, revision)
        except Exception as e:
            raise DatabaseError(f"Database upgrade failed: {e}") from e

    def get_migration_history(self) -> Dict[str, Optional[str]]:
        """
        Get the current migration status of the database.

        Returns:
            Dictionary with keys:
                - 'current_revision' (str | None):
                  Current Alembic revision of the database.
                - 'status' (str):
                  Either 'up_to_date' or 'needs_migration'.
                - 'error' (str, optional):
                  Present if an exception occurred.
        """
        try:
            with self.engine.connect() as conn:
                context = MigrationContext.configure(conn)
                current_rev = context.get_current_revision()

            return {
                "current_revision": current_rev,
                "status": "up_to_date" if current_rev else "needs_migration",
            }
        except Exception as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "get_migration_history"})
            return {"error": str(e)}

    # ----  Helper methods ----
    def close(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    def __enter__(self) -> "DatanestDB":
        """Support for context manager usage."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Cleanup on context manager exit."""
        del exc_type, exc_val, exc_tb
        self.close()
