"""Type definitions for typed identifier data structures."""

from typing import Any, TypedDict


class TypedIdentifierItem(TypedDict):
    """One typed identifier as stored by the destination field."""

    itemtype: str
    itemvalue: str


# Type aliases for common data structures
Scalar = str | int | float | bool | None
Record = dict[str, Any]
