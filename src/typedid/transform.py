"""Transform raw identifier values into typed identifier items."""

from __future__ import annotations

import logging
from typing import Any

from .classify import classify, is_empty
from .config import TransformConfig
from .detect import IdentifierDetector
from .policy import resolve_allow_list
from .settings import FieldSettingsStore
from .shape import normalize_input
from .types import TypedIdentifierItem

logger = logging.getLogger(__name__)


class TypedIdentifierTransform:
    """Convert flat or nested identifier maps into typed identifier items.

    Usage for work identifiers (flat object)::

        config = TransformConfig.from_mapping({
            "exclude_keys": ["mag"],
            "check_field_settings": True,
            "use_generic_fallback": True,
            "destination_field": "field_work_typed_ids",
        })
        items = transformer.transform(record["ids"], config)

    Usage for authorships (nested list) sets ``is_nested`` and excludes
    non-identifier keys such as ``display_name`` and ``author_position``.

    Both collaborators are optional. Without a detector the ``id`` key is
    typed like any other key; without a settings store every allow-list
    lookup fails closed.
    """

    def __init__(
        self,
        store: FieldSettingsStore | None = None,
        detector: IdentifierDetector | None = None,
    ) -> None:
        self.store = store
        self.detector = detector

    def transform(self, value: Any, config: TransformConfig) -> list[TypedIdentifierItem]:
        """Transform one raw source value.

        Args:
            value: A flat identifier map, or a list of maps when ``config.nested``
            config: Transform configuration for the destination field

        Returns:
            Typed identifier items in input order, possibly empty
        """
        if is_empty(value):
            return []

        policy = resolve_allow_list(
            self.store, config.destination_field, config.check_allow_list
        )
        candidates = normalize_input(value, config.nested)
        items = classify(candidates, config, policy, self.detector)

        logger.debug(
            "Produced %d typed identifiers from %d candidate maps", len(items), len(candidates)
        )
        return items


def transform(
    value: Any,
    config: TransformConfig,
    *,
    store: FieldSettingsStore | None = None,
    detector: IdentifierDetector | None = None,
) -> list[TypedIdentifierItem]:
    """Transform ``value`` with a one-off :class:`TypedIdentifierTransform`."""
    return TypedIdentifierTransform(store=store, detector=detector).transform(value, config)
