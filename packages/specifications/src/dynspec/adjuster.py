from __future__ import annotations

import logging
from typing import Any

from .introspection import TypeCategory, classify
from .operators import FilterOperation

logger = logging.getLogger(__name__)

# String-only operations degrade to equality on non-text members.
_NON_TEXT_FALLBACK: dict[FilterOperation, FilterOperation] = {
    FilterOperation.CONTAINS: FilterOperation.EQUAL,
    FilterOperation.NOT_CONTAINS: FilterOperation.NOT_EQUAL,
    FilterOperation.STARTS_WITH: FilterOperation.EQUAL,
    FilterOperation.ENDS_WITH: FilterOperation.EQUAL,
}


def adjust_operation(terminal_type: Any, operation: FilterOperation) -> FilterOperation:
    """
    Return the operation that is valid for a member of *terminal_type*.

    Text members keep every operation.  Members of any other known type
    map ``CONTAINS``/``STARTS_WITH``/``ENDS_WITH`` to ``EQUAL`` and
    ``NOT_CONTAINS`` to ``NOT_EQUAL``.  Comparison and membership
    operations are never altered, and an unknown type passes through.
    """
    operation = FilterOperation.parse(operation)
    category = classify(terminal_type)
    if category in (TypeCategory.TEXT, TypeCategory.UNKNOWN):
        return operation

    adjusted = _NON_TEXT_FALLBACK.get(operation, operation)
    if adjusted is not operation:
        logger.debug(
            "Adjusted %s to %s for %s member",
            operation.name,
            adjusted.name,
            category.value,
        )
    return adjusted
