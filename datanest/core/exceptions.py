#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Datanest project.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Persistence failures (integrity, connectivity, ...)
    ├── ValidationError - Data validation failures
    └── NotFoundError - Operation targets an id absent from the store

Usage:
    from datanest.core.exceptions import DatabaseError, NotFoundError, ValidationError

    try:
        db.snippets.update(snippet_id, metadata)
    except (ValidationError, NotFoundError) as e:
        click.echo(f"Cannot update snippet: {e}")
    except DatabaseError as e:
        logger.log_error(e)
"""


class DatabaseError(Exception):
    """
    Base exception for database-related errors.

    Raised when the underlying store fails: connection issues, query
    errors, unique/foreign key violations. The originating SQLAlchemy
    exception is kept as ``__cause__`` for diagnostics.

    Examples:
        >>> raise DatabaseError("Data integrity violation: UNIQUE constraint failed: tags.name")
        >>> raise DatabaseError("Database initialization failed: unable to open database file")
    """

    pass


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Missing required fields (title, code, language)
    - Empty names after normalization
    - Type mismatches in settings values

    Examples:
        >>> raise ValidationError("Required field 'code' missing or empty")
        >>> raise ValidationError("Tag name cannot be empty")
    """

    pass


class NotFoundError(Exception):
    """
    Exception for lookups of entities that do not exist.

    Raised by get/update/delete operations addressed by id, and when a
    payload references a category or tag id that is not in the store.

    Attributes:
        entity: Name of the entity type (e.g. "Snippet")
        entity_id: The id that was looked up

    Examples:
        >>> raise NotFoundError("Snippet", 42)
    """

    def __init__(self, entity: str, entity_id: object) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found with id: {entity_id}")
