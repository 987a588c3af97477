#!/usr/bin/env python3
"""
settings_manager.py
--------------------
Manages the application Settings singleton.

There is exactly one Settings row, identified by SETTINGS_ID. It is
provisioned with defaults the first time it is needed; concurrent
provisioning is safe because the insert ignores an existing row.

Usage:
    settings_mgr = SettingsManager(session, logger)

    settings_mgr.get().to_dict()
    settings_mgr.update({"theme": "dark", "font_size": 16})
"""
from typing import Any, Callable, Dict, Optional

from sqlalchemy.dialects.sqlite import insert

from datanest.core.validators import DataValidator
from datanest.database.decorators import DatabaseOperation
from datanest.database.models import SETTINGS_DEFAULTS, SETTINGS_ID, Settings
from .base_manager import BaseManager


def _keep(value: Any) -> Any:
    return value


# Field -> normalizer. Keys outside this map are ignored by update().
SETTINGS_FIELDS: Dict[str, Callable[[Any], Any]] = {
    "ai_provider": DataValidator.normalize_string,
    "ai_api_key": _keep,
    "local_model_endpoint": DataValidator.normalize_string,
    "theme": DataValidator.normalize_string,
    "editor_theme": DataValidator.normalize_string,
    "font_size": DataValidator.normalize_int,
}

NULLABLE_FIELDS = {"ai_api_key", "local_model_endpoint"}


class SettingsManager(BaseManager):
    """Reads and partially updates the Settings singleton."""

    def ensure(self) -> Settings:
        """
        Make sure the singleton row exists and return it.

        Uses INSERT ... ON CONFLICT DO NOTHING so two writers racing to
        provision the row end up with one row.
        """
        with DatabaseOperation(self.logger, "ensure_settings"):
            stmt = (
                insert(Settings)
                .values(id=SETTINGS_ID, **SETTINGS_DEFAULTS)
                .on_conflict_do_nothing(index_elements=["id"])
            )
            self.session.execute(stmt)
            return self.session.get(Settings, SETTINGS_ID)

    def get(self) -> Settings:
        """Current settings, provisioned with defaults if absent."""
        with DatabaseOperation(self.logger, "get_settings"):
            settings: Optional[Settings] = self.session.get(Settings, SETTINGS_ID)
        if settings is None:
            settings = self.ensure()
        return settings

    def update(self, changes: Dict[str, Any]) -> Settings:
        """
        Apply a partial update.

        Only recognized keys that are present in ``changes`` are written.
        An empty string or None clears a nullable field (such as the API
        key) and is ignored for the others.

        Args:
            changes: Mapping of setting name to new value

        Returns:
            The updated Settings

        Raises:
            ValidationError: If font_size is not an integer
        """

        def _do_update() -> Settings:
            settings = self.get()
            applied = []

            for field, normalizer in SETTINGS_FIELDS.items():
                if field not in changes:
                    continue
                value = normalizer(changes[field])
                if value == "":
                    value = None
                if value is None and field not in NULLABLE_FIELDS:
                    continue
                setattr(settings, field, value)
                applied.append(field)

            settings.touch()
            self.session.flush()

            if self.logger:
                self.logger.log_debug("Updated settings", {"fields": applied})
            return settings

        with DatabaseOperation(self.logger, "update_settings"):
            return self._execute_with_retry(_do_update)
