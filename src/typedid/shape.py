"""Normalization of raw field values into candidate identifier maps."""

from collections.abc import Sequence
from typing import Any


def normalize_input(value: Any, nested: bool) -> list[Any]:
    """Turn a raw source value into an ordered list of candidate maps.

    A flat value (one work's identifiers) is wrapped in a single-element list.
    A nested value (one identifier map per author) must already be a sequence
    and is returned element by element; anything else yields an empty list.
    Elements are not checked here, non-mapping elements are skipped later by
    the classifier.
    """
    if nested:
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            return list(value)
        return []

    return [value]
