"""Tests for database decorators and context managers."""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from datanest.database.decorators import (
    DatabaseOperation,
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from datanest.core.exceptions import DatabaseError, NotFoundError, ValidationError
from datanest.core.logging_manager import DatanestLogger


class TestDatabaseOperation:
    """Tests for DatabaseOperation context manager."""

    def test_successful_operation(self):
        """DatabaseOperation should log completion on success."""
        mock_logger = MagicMock(spec=DatanestLogger)

        with DatabaseOperation(mock_logger, "test_operation"):
            result = 1 + 1

        assert result == 2
        mock_logger.log_operation.assert_called_once()
        call_args = mock_logger.log_operation.call_args
        assert call_args[0][0] == "test_operation_completed"
        assert call_args[0][1]["success"] is True

    def test_successful_operation_with_none_logger(self):
        """DatabaseOperation should work with None logger (uses NullLogger)."""
        with DatabaseOperation(None, "test_operation"):
            result = 1 + 1

        assert result == 2

    def test_integrity_error_raises_database_error(self):
        """DatabaseOperation should convert IntegrityError to DatabaseError."""
        mock_logger = MagicMock(spec=DatanestLogger)

        with pytest.raises(DatabaseError) as exc_info:
            with DatabaseOperation(mock_logger, "test_operation"):
                raise IntegrityError("statement", {}, Exception("duplicate"))

        assert "Data integrity violation" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, IntegrityError)
        mock_logger.log_error.assert_called_once()

    def test_sqlalchemy_error_raises_database_error(self):
        """DatabaseOperation should convert SQLAlchemyError to DatabaseError."""
        mock_logger = MagicMock(spec=DatanestLogger)

        with pytest.raises(DatabaseError) as exc_info:
            with DatabaseOperation(mock_logger, "test_operation"):
                raise SQLAlchemyError("connection failed")

        assert "Database operation failed" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, SQLAlchemyError)
        mock_logger.log_error.assert_called_once()

    def test_other_exceptions_propagate(self):
        """DatabaseOperation should propagate non-SQLAlchemy exceptions."""
        mock_logger = MagicMock(spec=DatanestLogger)

        with pytest.raises(ValueError):
            with DatabaseOperation(mock_logger, "test_operation"):
                raise ValueError("invalid value")

        mock_logger.log_error.assert_called_once()

    @pytest.mark.parametrize(
        "error",
        [ValidationError("title missing"), NotFoundError("Snippet", 42)],
    )
    def test_expected_errors_logged_as_warnings(self, error):
        """Validation and not-found errors propagate unchanged as warnings."""
        mock_logger = MagicMock(spec=DatanestLogger)

        with pytest.raises(type(error)) as exc_info:
            with DatabaseOperation(mock_logger, "test_operation"):
                raise error

        assert exc_info.value is error
        mock_logger.log_warning.assert_called_once()
        mock_logger.log_error.assert_not_called()

    def test_log_start_option(self):
        """DatabaseOperation should log start when log_start=True."""
        mock_logger = MagicMock(spec=DatanestLogger)

        with DatabaseOperation(mock_logger, "test_operation", log_start=True):
            pass

        mock_logger.log_debug.assert_called_once()
        assert "Starting test_operation" in mock_logger.log_debug.call_args[0][0]

    def test_no_log_start_by_default(self):
        """DatabaseOperation should not log start by default."""
        mock_logger = MagicMock(spec=DatanestLogger)

        with DatabaseOperation(mock_logger, "test_operation"):
            pass

        mock_logger.log_debug.assert_not_called()

    def test_duration_is_logged(self):
        """DatabaseOperation should log duration on completion."""
        mock_logger = MagicMock(spec=DatanestLogger)

        with DatabaseOperation(mock_logger, "test_operation"):
            pass

        call_args = mock_logger.log_operation.call_args
        assert "duration_seconds" in call_args[0][1]
        assert isinstance(call_args[0][1]["duration_seconds"], float)


class _Service:
    """Minimal object exposing a logger, as decorated services do."""

    def __init__(self, logger=None):
        self.logger = logger

    @handle_db_errors
    @log_database_operation("compute")
    def compute(self, value):
        return value * 2

    @handle_db_errors
    @log_database_operation("explode")
    def explode(self):
        raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    @validate_metadata(["name"])
    def create(self, metadata):
        return metadata["name"]


class TestDecorators:
    """Tests for the function decorators."""

    def test_log_database_operation_logs_completion(self):
        """Completed calls are logged with a success flag."""
        mock_logger = MagicMock(spec=DatanestLogger)

        assert _Service(mock_logger).compute(21) == 42

        mock_logger.log_operation.assert_called_once()
        name, details = mock_logger.log_operation.call_args[0]
        assert name == "compute_completed"
        assert details["success"] is True

    def test_handle_db_errors_wraps_integrity_error(self):
        """Store failures surface as DatabaseError chained to the cause."""
        mock_logger = MagicMock(spec=DatanestLogger)

        with pytest.raises(DatabaseError) as exc_info:
            _Service(mock_logger).explode()

        assert "Data integrity violation" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, IntegrityError)
        mock_logger.log_error.assert_called_once()

    def test_decorators_work_without_logger(self):
        """A None logger is replaced by the null logger."""
        assert _Service().compute(1) == 2

    def test_validate_metadata_rejects_missing_field(self):
        """Missing required fields raise ValidationError before the call."""
        with pytest.raises(ValidationError, match="name"):
            _Service().create({"color": "bg-red-500"})

    def test_validate_metadata_accepts_keyword(self):
        """Metadata may be passed by keyword."""
        assert _Service().create(metadata={"name": "utilities"}) == "utilities"
