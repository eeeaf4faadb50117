from __future__ import annotations

from enum import Enum


class FilterOperation(str, Enum):
    """Operations accepted by dynamic filter conditions."""

    # Comparison
    EQUAL = "eq"
    NOT_EQUAL = "ne"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL = "ge"
    LESS_THAN = "lt"
    LESS_THAN_OR_EQUAL = "le"

    # String matching
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "startswith"
    ENDS_WITH = "endswith"

    # Membership (value must be a non-string collection)
    IN = "in"
    NOT_IN = "not_in"

    @classmethod
    def parse(cls, raw: FilterOperation | str) -> FilterOperation:
        """
        Accept a member, its value (``"contains"``) or its name in any
        casing (``"Contains"``, ``"NOT_CONTAINS"``, ``"notContains"``).
        """
        if isinstance(raw, cls):
            return raw
        text = str(raw).strip()
        try:
            return cls(text.lower())
        except ValueError:
            pass
        key = text.replace("-", "").replace("_", "").lower()
        for member in cls:
            if member.name.replace("_", "").lower() == key:
                return member
        raise ValueError(f"Unknown filter operation: {raw!r}")


STRING_OPERATIONS: frozenset[FilterOperation] = frozenset(
    {
        FilterOperation.CONTAINS,
        FilterOperation.NOT_CONTAINS,
        FilterOperation.STARTS_WITH,
        FilterOperation.ENDS_WITH,
    }
)

COLLECTION_OPERATIONS: frozenset[FilterOperation] = frozenset(
    {FilterOperation.IN, FilterOperation.NOT_IN}
)
