"""Classification of identifier map entries into typed identifier items."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sized
from dataclasses import dataclass
from typing import Any

from .config import TransformConfig
from .detect import IdentifierDetector, safe_detect
from .policy import AllowListPolicy
from .types import Scalar, TypedIdentifierItem

logger = logging.getLogger(__name__)

# Key whose value is typed by detection instead of by the key itself
AUTO_DETECT_KEY = "id"
GENERIC_PREFIX = "generic:"


@dataclass(frozen=True, slots=True)
class Keep:
    """Entry accepted as a typed identifier."""

    itemtype: str
    itemvalue: str

    def as_item(self) -> TypedIdentifierItem:
        return {"itemtype": self.itemtype, "itemvalue": self.itemvalue}


@dataclass(frozen=True, slots=True)
class Drop:
    """Entry left out of the output."""

    reason: str


Decision = Keep | Drop


def is_empty(value: Any) -> bool:
    """Return ``True`` for values treated as missing.

    ``None``, ``False``, numeric zero, ``""``, ``"0"`` and zero-length
    collections are all empty. Zero-valued identifiers are dropped with them.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def coerce_value(value: Scalar) -> str:
    """Render a scalar identifier value as a string."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def resolve_itemtype(
    itemtype: str, config: TransformConfig, policy: AllowListPolicy
) -> str | None:
    """Apply the allow-list and generic fallback to a candidate item type.

    Returns the item type to emit, or ``None`` when the entry must be dropped.
    """
    if not config.check_allow_list:
        return itemtype

    if policy.permits(itemtype):
        return itemtype

    if policy.generic_allowed and config.use_generic_fallback:
        return GENERIC_PREFIX + itemtype

    return None


def classify_entry(
    key: str,
    value: Any,
    config: TransformConfig,
    policy: AllowListPolicy,
    detector: IdentifierDetector | None = None,
) -> Decision:
    """Decide the fate of a single ``key``/``value`` entry of a candidate map."""
    if key in config.exclude_keys:
        return Drop("excluded key")

    if is_empty(value):
        return Drop("empty value")

    if not isinstance(value, (str, int, float)):
        return Drop("non-scalar value")

    itemvalue = coerce_value(value)

    if key == AUTO_DETECT_KEY and detector is not None:
        detected = safe_detect(detector, itemvalue)
        if detected is not None:
            itemtype = resolve_itemtype(detected.itemtype, config, policy)
            if itemtype is None:
                return Drop(f"detected type {detected.itemtype!r} not allowed")
            return Keep(itemtype, detected.itemvalue)

    itemtype = resolve_itemtype(key, config, policy)
    if itemtype is None:
        return Drop("type not allowed")

    return Keep(itemtype, itemvalue)


def classify(
    candidates: Iterable[Any],
    config: TransformConfig,
    policy: AllowListPolicy,
    detector: IdentifierDetector | None = None,
) -> list[TypedIdentifierItem]:
    """Classify every entry of every candidate map, preserving input order.

    Args:
        candidates: Candidate identifier maps; non-mapping elements are skipped
        config: Transform configuration for the destination field
        policy: Allow-list policy resolved for the destination field
        detector: Optional identifier detector used for the ``id`` key

    Returns:
        Typed identifier items for every accepted entry
    """
    items: list[TypedIdentifierItem] = []

    for candidate in candidates:
        if not isinstance(candidate, Mapping):
            logger.debug("Skipping non-mapping candidate of type %s", type(candidate).__name__)
            continue

        for raw_key, value in candidate.items():
            key = str(raw_key)
            decision = classify_entry(key, value, config, policy, detector)

            if isinstance(decision, Drop):
                logger.debug("Dropping %s: %s", key, decision.reason)
                continue

            items.append(decision.as_item())

    return items
