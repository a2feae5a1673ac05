"""Field settings stores that supply allowed identifier types."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

import msgspec

from .exceptions import FieldSettingsError

logger = logging.getLogger(__name__)


class FieldSettings(msgspec.Struct, frozen=True):
    """Settings of one typed identifier field."""

    allowed_identifier_types: list[str] = []


class FieldSettingsStore(Protocol):
    """Read-only lookup of field settings by configuration id.

    Configuration ids follow the ``<entity>.<bundle>.<field_name>`` form.
    """

    def load(self, config_id: str) -> FieldSettings | None: ...


class InMemoryFieldSettingsStore:
    """Field settings held in a plain mapping."""

    def __init__(self, settings: Mapping[str, FieldSettings]) -> None:
        self._settings = dict(settings)

    def load(self, config_id: str) -> FieldSettings | None:
        return self._settings.get(config_id)


class JsonFieldSettingsStore:
    """Field settings read from a JSON document.

    The document is an object keyed by configuration id::

        {"node.scholarly_work.field_work_typed_ids":
            {"allowed_identifier_types": ["doi", "openalex", "generic"]}}

    The file is decoded on first use and kept for the lifetime of the store.
    """

    def __init__(self, settings_path: Path) -> None:
        self.settings_path = settings_path
        self._settings: dict[str, FieldSettings] | None = None

    def load(self, config_id: str) -> FieldSettings | None:
        """Return the settings for ``config_id`` or ``None`` when absent.

        Raises:
            FieldSettingsError: If the settings file cannot be read or decoded
        """
        if self._settings is None:
            self._settings = self._read()
        return self._settings.get(config_id)

    def _read(self) -> dict[str, FieldSettings]:
        try:
            raw = self.settings_path.read_bytes()
        except OSError as e:
            raise FieldSettingsError(
                f"Failed to read field settings {self.settings_path}: {e}"
            ) from e

        try:
            settings = msgspec.json.decode(raw, type=dict[str, FieldSettings])
        except msgspec.DecodeError as e:
            raise FieldSettingsError(
                f"Invalid field settings in {self.settings_path}: {e}"
            ) from e

        logger.debug("Loaded settings for %d fields from %s", len(settings), self.settings_path)
        return settings
