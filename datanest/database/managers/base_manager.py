#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common CRUD operations and utilities.
All entity managers should inherit from this class.

Key Features:
    - Retry logic for database lock handling
    - Id resolution that raises NotFoundError for absent rows
    - Lookup by unique field
    - Scalar field updates driven by (field, normalizer) configs
    - Consistent error handling and logging via DatabaseOperation

Usage:
    Subclass BaseManager for each entity type and implement:
    - get(): Retrieve single entity, raising NotFoundError if absent
    - get_all(): Retrieve the entity listing
    - create(): Create new entity with validation and relationships
    - update(): Update entity with validation and relationships
    - delete(): Delete entity

Example:
    class CategoryManager(BaseManager):
        def create(self, metadata: Dict[str, Any]) -> Category:
            DataValidator.validate_required_fields(metadata, ["name"])
            with DatabaseOperation(self.logger, "create_category"):
                ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import time
from abc import ABC
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Type, TypeVar

# --- Third party imports ---
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Mapped, Session

# --- Local imports ---
from datanest.core.exceptions import DatabaseError, NotFoundError
from datanest.core.logging_manager import DatanestLogger, safe_logger


class HasId(Protocol):
    """Protocol for objects that have an id attribute."""

    id: Mapped[int]


T = TypeVar("T", bound=HasId)


class BaseManager(ABC):
    """
    Abstract base manager providing common CRUD operations and utilities.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[DatanestLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Core Helper Methods
    # -------------------------------------------------------------------------

    def _execute_with_retry(
        self,
        operation: Callable,
        max_retries: int = 3,
        retry_delay: float = 0.1,
    ) -> Any:
        """
        Execute database operation with retry on lock.

        Args:
            operation: Callable that performs the operation
            max_retries: Maximum number of retry attempts
            retry_delay: Base delay between retries (exponential backoff)

        Returns:
            Result of the operation

        Raises:
            OperationalError: If all retries exhausted
            DatabaseError: If retry loop completes without success
        """
        for attempt in range(max_retries):
            try:
                return operation()
            except OperationalError as e:
                error_msg = str(e).lower()

                if (
                    "locked" in error_msg or "busy" in error_msg
                ) and attempt < max_retries - 1:
                    wait_time = retry_delay * (2**attempt)

                    safe_logger(self.logger).log_debug(
                        f"Database locked, retrying in {wait_time}s",
                        {"attempt": attempt + 1, "max_retries": max_retries},
                    )

                    time.sleep(wait_time)
                    continue

                raise

        raise DatabaseError("Retry loop completed without success")

    def _require(self, model_class: Type[T], entity_id: Any) -> T:
        """
        Fetch an entity by id or fail.

        Args:
            model_class: ORM model class
            entity_id: Primary key value

        Returns:
            The persisted entity

        Raises:
            NotFoundError: If no row has this id
        """
        entity = self.session.get(model_class, entity_id) if entity_id is not None else None
        if entity is None:
            raise NotFoundError(model_class.__name__, entity_id)
        return entity

    def _require_many(self, model_class: Type[T], entity_ids: Iterable[int]) -> List[T]:
        """
        Fetch several entities by id, in the order given.

        Raises:
            NotFoundError: For the first id that is not in the store
        """
        ids = list(entity_ids)
        if not ids:
            return []

        found = {
            entity.id: entity
            for entity in self.session.scalars(
                select(model_class).where(model_class.id.in_(ids))
            )
        }
        for entity_id in ids:
            if entity_id not in found:
                raise NotFoundError(model_class.__name__, entity_id)
        return [found[entity_id] for entity_id in ids]

    # -------------------------------------------------------------------------
    # Generic CRUD Helpers
    # -------------------------------------------------------------------------

    def _get_by_field(self, model_class: Type[T], field_name: str, value: Any) -> Optional[T]:
        """
        Get entity by a specific field value.

        Args:
            model_class: ORM model class
            field_name: Field name to filter by
            value: Value to look up (already normalized)

        Returns:
            Entity if found, None otherwise
        """
        if value is None:
            return None
        return self.session.query(model_class).filter_by(**{field_name: value}).first()

    # -------------------------------------------------------------------------
    # Scalar Field Update Helpers
    # -------------------------------------------------------------------------

    def _update_scalar_fields(
        self,
        entity: Any,
        metadata: Dict[str, Any],
        field_configs: List[tuple],
    ) -> None:
        """
        Update multiple scalar fields from metadata using normalizers.

        Args:
            entity: Entity to update
            metadata: Dictionary containing field values
            field_configs: List of tuples:
                - (field_name, normalizer) for fields that keep their old
                  value when the normalizer yields None
                - (field_name, normalizer, allow_none) for nullable fields

        Example:
            self._update_scalar_fields(snippet, metadata, [
                ("language", DataValidator.normalize_string),
                ("description", DataValidator.normalize_string, True),
            ])
        """
        for config in field_configs:
            field_name = config[0]
            normalizer = config[1]
            allow_none = config[2] if len(config) > 2 else False

            if field_name not in metadata:
                continue

            value = normalizer(metadata[field_name])
            if value is not None or allow_none:
                setattr(entity, field_name, value)
