"""Transform configuration for typed identifier field mappings."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import msgspec

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Entity bundle that owns every destination field looked up in the settings store
DEFAULT_BUNDLE = "node.scholarly_work"


class TransformConfig(msgspec.Struct, frozen=True, kw_only=True):
    """Options for one typed identifier field mapping.

    Attribute names are pythonic; the encoded names match the migration
    plugin options (``is_nested``, ``check_field_settings`` and so on).
    """

    nested: bool = msgspec.field(default=False, name="is_nested")
    exclude_keys: frozenset[str] = frozenset()
    check_allow_list: bool = msgspec.field(default=False, name="check_field_settings")
    use_generic_fallback: bool = False
    destination_field: str = ""
    source: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TransformConfig":
        """Build a configuration from plugin-style options.

        Args:
            data: Mapping of option names to values

        Returns:
            TransformConfig with defaults for missing options; integer and
            string flags such as ``1`` or ``"true"`` are accepted as booleans

        Raises:
            ConfigurationError: If an option cannot be converted to its type
        """
        try:
            return msgspec.convert(dict(data), type=cls, strict=False)
        except msgspec.ValidationError as e:
            raise ConfigurationError(f"Invalid transform configuration: {e}") from e


def load_field_mappings(mapping_path: Path) -> dict[str, TransformConfig]:
    """Load destination field mappings from a JSON file.

    Args:
        mapping_path: Path to a JSON object keyed by destination field name

    Returns:
        Dictionary mapping destination field names to their configuration

    Raises:
        FileNotFoundError: If the mapping file doesn't exist
        ConfigurationError: If the file is not a valid mapping document
    """
    if not mapping_path.exists():
        raise FileNotFoundError(f"Mapping file not found: {mapping_path}")

    try:
        mappings = msgspec.json.decode(
            mapping_path.read_bytes(), type=dict[str, TransformConfig], strict=False
        )
    except OSError as e:
        raise ConfigurationError(f"Failed to read {mapping_path}: {e}") from e
    except (msgspec.DecodeError, msgspec.ValidationError) as e:
        raise ConfigurationError(f"Invalid mapping file {mapping_path}: {e}") from e

    logger.debug("Loaded %d field mappings from %s", len(mappings), mapping_path)
    return mappings
