"""Allow-list resolution for typed identifier destination fields."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import DEFAULT_BUNDLE
from .settings import FieldSettingsStore

logger = logging.getLogger(__name__)

# Allow-list entry that permits "generic:<key>" fallback types
GENERIC_TYPE = "generic"


@dataclass(frozen=True, slots=True)
class AllowListPolicy:
    """Identifier types permitted for one destination field."""

    allowed: frozenset[str]
    generic_allowed: bool

    def permits(self, itemtype: str) -> bool:
        return itemtype in self.allowed


UNRESTRICTED = AllowListPolicy(allowed=frozenset(), generic_allowed=False)

# Lookup failures resolve to the same empty policy: nothing is permitted once
# enforcement is active.
FAIL_CLOSED = UNRESTRICTED


def resolve_allow_list(
    store: FieldSettingsStore | None,
    destination_field: str,
    check_allow_list: bool,
    *,
    bundle: str = DEFAULT_BUNDLE,
) -> AllowListPolicy:
    """Resolve the allow-list policy for a destination field.

    Args:
        store: Field settings store, or ``None`` when none is configured
        destination_field: Machine name of the destination field
        check_allow_list: Whether allow-list enforcement is requested
        bundle: Entity bundle that owns the field

    Returns:
        The field's :class:`AllowListPolicy`. Disabled checks and missing
        field names give an empty policy; a missing store, an unknown field
        or any lookup error give the fail-closed policy.
    """
    if not check_allow_list or not destination_field:
        return UNRESTRICTED

    config_id = f"{bundle}.{destination_field}"

    if store is None:
        logger.warning("No field settings store configured; nothing allowed for %s", config_id)
        return FAIL_CLOSED

    try:
        settings = store.load(config_id)
    except Exception as e:
        logger.warning("Field settings lookup failed for %s: %s", config_id, e)
        return FAIL_CLOSED

    if settings is None:
        logger.warning("No field settings found for %s", config_id)
        return FAIL_CLOSED

    allowed = frozenset(settings.allowed_identifier_types)
    logger.debug("Allowed identifier types for %s: %s", config_id, ", ".join(sorted(allowed)))
    return AllowListPolicy(allowed=allowed, generic_allowed=GENERIC_TYPE in allowed)
