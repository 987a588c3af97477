#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for all Datanest operations.

Provides type-safe conversion, validation, and normalization functions
used by the entity managers and the CLI.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from .exceptions import ValidationError

_WHITESPACE_RUN = re.compile(r"\s+")


class DataValidator:
    """Centralized data validation for database operations."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any],
        required_fields: List[str],
        allow_falsy: bool = False,
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names
            allow_falsy: Accept falsy values other than None (0, "")

        Raises:
            ValidationError: If validation fails
        """
        for field in required_fields:
            if field not in data or data[field] is None:
                raise ValidationError(f"Required field '{field}' missing or empty")
            value = data[field]
            if allow_falsy:
                continue
            if isinstance(value, str):
                value = value.strip()
            if not value:
                raise ValidationError(f"Required field '{field}' missing or empty")

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Normalize string value.

        Args:
            value: Value to normalize

        Returns:
            Stripped string, or None if the result is empty
        """
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def non_blank_text(value: Any) -> Optional[str]:
        """Return the text unchanged, or None if it is empty or whitespace."""
        if value is None:
            return None
        text = str(value)
        return text if text.strip() else None

    @staticmethod
    def normalize_tag_name(value: Any) -> Optional[str]:
        """
        Canonicalize free-text tag input into its slug form.

        Trims, lowercases and collapses every internal whitespace run
        into a single hyphen. Applying it to an already-canonical name
        returns the same name.

        Args:
            value: Raw tag text

        Returns:
            Canonical tag name, or None when nothing is left

        Examples:
            >>> DataValidator.normalize_tag_name("  React   Hooks ")
            'react-hooks'
        """
        text = DataValidator.normalize_string(value)
        if text is None:
            return None
        return _WHITESPACE_RUN.sub("-", text.lower())

    @staticmethod
    def normalize_int(value: Any) -> Optional[int]:
        """
        Convert value to integer.

        Args:
            value: Value to convert

        Returns:
            Integer value or None

        Raises:
            ValidationError: If the value is not an integer
        """
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            raise ValidationError(f"Cannot convert '{value}' to integer")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Cannot convert '{value}' to integer")

    @staticmethod
    def normalize_id_list(values: Any, skip_invalid: bool = False) -> List[int]:
        """
        Normalize a list of entity ids, dropping duplicates and blanks.

        Order of first appearance is preserved.

        Args:
            values: Iterable of ids
            skip_invalid: Drop values that are not integers instead of raising

        Raises:
            ValidationError: If values is not a list, or holds a non-integer
                and skip_invalid is False
        """
        if values is None:
            return []
        if isinstance(values, (str, bytes)) or not hasattr(values, "__iter__"):
            raise ValidationError("Expected a list of ids")

        ids: List[int] = []
        for value in values:
            try:
                normalized = DataValidator.normalize_int(value)
            except ValidationError:
                if skip_invalid:
                    continue
                raise
            if normalized is not None and normalized not in ids:
                ids.append(normalized)
        return ids
