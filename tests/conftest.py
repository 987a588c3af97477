"""
conftest.py
-----------
Shared pytest fixtures for Datanest tests.

Provides fixtures for:
- Database setup and teardown
- Per-manager instances bound to a test session
- Small catalog factories
"""
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory

from datanest.core.paths import ALEMBIC_DIR


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ----- Database Fixtures -----

@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "test.db"


@pytest.fixture
def test_alembic_dir():
    """Path to Alembic directory."""
    return ALEMBIC_DIR


@pytest.fixture
def test_db(test_db_path, test_alembic_dir):
    """
    Create test database instance with schema.

    Returns a DatanestDB instance on a fresh file, so the schema and the
    settings row are provisioned by DatanestDB itself.
    """
    from datanest.database.manager import DatanestDB

    db = DatanestDB(db_path=test_db_path, alembic_dir=test_alembic_dir)

    yield db

    db.close()
    if test_db_path.exists():
        test_db_path.unlink()


@pytest.fixture
def db_session(test_db):
    """
    Create a database session for tests.

    Provides a session with automatic rollback after test.
    """
    with test_db.session_scope() as session:
        yield session
        session.rollback()


@pytest.fixture
def snippet_manager(db_session):
    """Create SnippetManager instance for testing."""
    from datanest.database.managers.snippet_manager import SnippetManager
    return SnippetManager(db_session)


@pytest.fixture
def tag_manager(db_session):
    """Create TagManager instance for testing."""
    from datanest.database.managers.tag_manager import TagManager
    return TagManager(db_session)


@pytest.fixture
def category_manager(db_session):
    """Create CategoryManager instance for testing."""
    from datanest.database.managers.category_manager import CategoryManager
    return CategoryManager(db_session)


@pytest.fixture
def settings_manager(db_session):
    """Create SettingsManager instance for testing."""
    from datanest.database.managers.settings_manager import SettingsManager
    return SettingsManager(db_session)


# ----- Factories -----

@pytest.fixture
def make_snippet(snippet_manager):
    """Factory creating a snippet with sensible defaults."""

    def _make(**overrides):
        metadata = {
            "title": "Debounce",
            "code": "function debounce(fn, ms) { let t; return () => {}; }",
            "language": "javascript",
        }
        metadata.update(overrides)
        return snippet_manager.create(metadata)

    return _make
