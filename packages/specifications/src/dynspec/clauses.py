"""
Textual rendering of single conditions.

Values are never interpolated: each clause binds the positional
placeholder ``:p<index>`` and reports the next free index, so a sequence
of clauses can share one parameter list.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from .exceptions import UnsupportedOperationError
from .operators import FilterOperation
from .resolver import ResolvedPath

PLACEHOLDER_PREFIX = "p"

_COMPARISON_SYMBOLS: dict[FilterOperation, str] = {
    FilterOperation.EQUAL: "=",
    FilterOperation.NOT_EQUAL: "<>",
    FilterOperation.GREATER_THAN: ">",
    FilterOperation.GREATER_THAN_OR_EQUAL: ">=",
    FilterOperation.LESS_THAN: "<",
    FilterOperation.LESS_THAN_OR_EQUAL: "<=",
}

_PATTERN_TEMPLATES: dict[FilterOperation, str] = {
    FilterOperation.CONTAINS: "{path} LIKE '%' || {param} || '%'",
    FilterOperation.NOT_CONTAINS: "{path} NOT LIKE '%' || {param} || '%'",
    FilterOperation.STARTS_WITH: "{path} LIKE {param} || '%'",
    FilterOperation.ENDS_WITH: "{path} LIKE '%' || {param}",
    FilterOperation.IN: "{path} IN {param}",
    FilterOperation.NOT_IN: "{path} NOT IN {param}",
}


class ClauseText(NamedTuple):
    text: str
    next_index: int


def placeholder(index: int) -> str:
    return f":{PLACEHOLDER_PREFIX}{index}"


def parameter_name(index: int) -> str:
    return f"{PLACEHOLDER_PREFIX}{index}"


def build_clause(
    resolved_path: ResolvedPath | str,
    operation: FilterOperation,
    value: Any,
    parameter_index: int,
) -> ClauseText:
    """
    Render one condition.

    ``None`` compared with ``EQUAL``/``NOT_EQUAL`` renders ``IS NULL``/
    ``IS NOT NULL`` and consumes no parameter slot.

    Raises:
        UnsupportedOperationError: the operation has no textual form.
    """
    path = str(resolved_path)
    try:
        operation = FilterOperation.parse(operation)
    except ValueError as e:
        raise UnsupportedOperationError(operation) from e

    if value is None:
        if operation is FilterOperation.EQUAL:
            return ClauseText(f"{path} IS NULL", parameter_index)
        if operation is FilterOperation.NOT_EQUAL:
            return ClauseText(f"{path} IS NOT NULL", parameter_index)

    param = placeholder(parameter_index)
    symbol = _COMPARISON_SYMBOLS.get(operation)
    if symbol is not None:
        return ClauseText(f"{path} {symbol} {param}", parameter_index + 1)

    template = _PATTERN_TEMPLATES.get(operation)
    if template is None:
        raise UnsupportedOperationError(operation)
    return ClauseText(template.format(path=path, param=param), parameter_index + 1)
