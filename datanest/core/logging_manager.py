#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Rotating file logs for the catalog's database layer and CLI.

Each component (``database``, ``cli``) writes to ``<component>.log``
under its log directory; errors are also collected in ``errors.log``.
Every record is one line: an event label, a name, and the structured
context (snippet ids, tag ids, durations) as compact JSON, so a log
line can be grepped by operation or by entity id.

    12:04:55 - database.operations - INFO - operation create_snippet_completed {"duration_seconds": 0.002}
    12:04:55 - database.errors - ERROR - error NotFoundError: Tag not found with id: 9 {"operation": "update_snippet", "snippet_id": 4}

Callers that may run without a log directory use ``safe_logger`` to get
a NullLogger instead of checking for None.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

Context = Optional[Dict[str, Any]]

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _render(label: str, name: str, context: Context) -> str:
    """One log line: label, name and the context as sorted JSON."""
    if not context:
        return f"{label} {name}"
    return f"{label} {name} {json.dumps(context, default=str, sort_keys=True)}"


class DatanestLogger:
    """
    Structured logger for one component.

    Attributes:
        log_dir: Directory holding the component and error logs
        component_name: Component label, also the log file stem
        main_logger: Receives operations, debug records and warnings
        error_logger: Receives errors only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "datanest",
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._build(
            "operations", f"{component_name}.log", logging.DEBUG, max_bytes, backup_count
        )
        self.error_logger = self._build(
            "errors", "errors.log", logging.ERROR, max_bytes, backup_count
        )

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.main_logger.addHandler(console)

    def _build(
        self, channel: str, filename: str, level: int, max_bytes: int, backup_count: int
    ) -> logging.Logger:
        # Loggers are process-global; drop handlers left by an earlier instance
        logger = logging.getLogger(f"{self.component_name}.{channel}")
        logger.setLevel(level)
        logger.propagate = False
        logger.handlers = []

        handler = RotatingFileHandler(
            self.log_dir / filename,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        return logger

    def log_operation(self, operation: str, details: Context = None) -> None:
        """Record a finished operation, e.g. ``create_tag_completed``."""
        self.main_logger.info(_render("operation", operation, details))

    def log_debug(self, message: str, details: Context = None) -> None:
        self.main_logger.debug(_render("debug", message, details))

    def log_warning(self, message: str, details: Context = None) -> None:
        """Record a rejected request (validation, missing entity)."""
        self.main_logger.warning(_render("warning", message, details))

    def log_error(self, error: BaseException, context: Context = None) -> None:
        """
        Record a failure with its context, chained cause and traceback.

        Args:
            error: The exception raised
            context: Operation name and the ids involved
        """
        self.error_logger.error(_render("error", f"{type(error).__name__}: {error}", context))

        cause = error.__cause__
        if cause is not None:
            self.error_logger.error(f"Caused by {type(cause).__name__}: {cause}")

        if error.__traceback__ is not None:
            self.error_logger.error("".join(_format_traceback(error)).rstrip())


class NullLogger:
    """Stand-in for DatanestLogger when no log directory is configured."""

    def log_operation(self, operation: str, details: Context = None) -> None:
        pass

    def log_debug(self, message: str, details: Context = None) -> None:
        pass

    def log_warning(self, message: str, details: Context = None) -> None:
        pass

    def log_error(self, error: BaseException, context: Context = None) -> None:
        pass


_null_logger = NullLogger()


def safe_logger(logger: Optional[DatanestLogger]) -> DatanestLogger:
    """Return ``logger``, or the shared NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]


def setup_logger(log_dir: Path, component_name: str) -> DatanestLogger:
    """Logger for a CLI component, writing under ``log_dir/operations``."""
    return DatanestLogger(Path(log_dir) / "operations", component_name=component_name)


def _format_traceback(error: BaseException):
    return traceback.format_exception(type(error), error, error.__traceback__)


def format_cli_error(error: BaseException, verbose: bool = False) -> str:
    """
    One-line error message for the terminal.

    Examples:
        >>> format_cli_error(NotFoundError("Snippet", 3))
        '❌ NotFoundError: Snippet not found with id: 3'
    """
    message = f"❌ {type(error).__name__}: {error}"
    if verbose:
        return f"{message}\n\n{''.join(_format_traceback(error))}"
    return message


def handle_cli_error(
    ctx: click.Context,
    error: Exception,
    operation: str,
    additional_context: Context = None,
    exit_code: int = 1,
) -> None:
    """
    Log a failed command, print its message to stderr and exit.

    Args:
        ctx: Click context carrying ``logger`` and ``verbose``
        error: Exception raised by the command
        operation: Command operation name (e.g. 'add_snippet')
        additional_context: Ids or names the command was working on
        exit_code: Process exit status
    """
    obj = ctx.obj or {}
    context: Dict[str, Any] = {"operation": operation, **(additional_context or {})}

    safe_logger(obj.get("logger")).log_error(error, context)
    click.echo(format_cli_error(error, verbose=obj.get("verbose", False)), err=True)
    sys.exit(exit_code)
