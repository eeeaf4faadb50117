"""
Dynamic predicate composition from caller-supplied filter triples.

Every dynamic entry point runs the same pipeline on a condition:

1. resolve the property path against the entity type
2. reject ``IN``/``NOT_IN`` whose value is not a non-string collection
3. adjust the operation to the member type
4. validate enum values

If any step fails the condition is skipped: the base predicate is
returned unchanged and the reason is logged at DEBUG level.  Only an
empty property path or an unknown operation raises.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from .adjuster import adjust_operation
from .conditions import FilterCondition
from .enum_values import coerce_enum_value, coerce_enum_values, is_valid_enum_value
from .exceptions import (
    EmptyCompositionError,
    InvalidPropertyPathError,
    UnsupportedOperationError,
)
from .operators import COLLECTION_OPERATIONS, FilterOperation
from .predicates import Condition, Predicate, and_, compose, or_
from .resolver import DEFAULT_RESOLVER, PropertyResolver

logger = logging.getLogger(__name__)

_COLLECTION_TYPES = (list, tuple, set, frozenset)


def _parse_operation(operation: FilterOperation | str) -> FilterOperation:
    try:
        return FilterOperation.parse(operation)
    except ValueError as e:
        raise UnsupportedOperationError(operation) from e


def build_condition(
    entity_type: type,
    property_path: str,
    operation: FilterOperation | str,
    value: Any,
    *,
    resolver: PropertyResolver = DEFAULT_RESOLVER,
) -> Condition | None:
    """
    Run the dynamic pipeline for one triple.

    Returns ``None`` when the condition must be skipped.

    Raises:
        InvalidPropertyPathError: *property_path* is empty or blank.
        UnsupportedOperationError: *operation* is not a known operation.
    """
    if property_path is None or not str(property_path).strip():
        raise InvalidPropertyPathError(property_path)
    op = _parse_operation(operation)

    resolved = resolver.resolve(entity_type, property_path)
    if resolved is None:
        logger.debug(
            "Skipping condition: %r does not resolve on %s",
            property_path,
            entity_type.__name__,
        )
        return None

    if op in COLLECTION_OPERATIONS and not isinstance(value, _COLLECTION_TYPES):
        logger.debug(
            "Skipping condition on %s: %s requires a collection value, got %s",
            resolved.path,
            op.name,
            type(value).__name__,
        )
        return None

    op = adjust_operation(resolved.terminal_type, op)

    terminal = resolved.terminal
    enum_type = terminal.python_type
    if isinstance(enum_type, type) and issubclass(enum_type, Enum):
        if op in COLLECTION_OPERATIONS:
            if not all(is_valid_enum_value(terminal, v) for v in value):
                logger.debug(
                    "Skipping condition on %s: invalid %s value in %r",
                    resolved.path,
                    enum_type.__name__,
                    value,
                )
                return None
            value = coerce_enum_values(enum_type, value)
        else:
            if not is_valid_enum_value(terminal, value):
                logger.debug(
                    "Skipping condition on %s: %r is not a valid %s",
                    resolved.path,
                    value,
                    enum_type.__name__,
                )
                return None
            value = coerce_enum_value(enum_type, value)

    if op in COLLECTION_OPERATIONS:
        value = tuple(value)
    return Condition(resolved, op, value)


def dynamic_and(
    base: Predicate | None,
    entity_type: type,
    property_path: str,
    operation: FilterOperation | str,
    value: Any,
    *,
    resolver: PropertyResolver = DEFAULT_RESOLVER,
) -> Predicate | None:
    """``base AND condition``, or *base* unchanged if the condition is skipped."""
    condition = build_condition(
        entity_type, property_path, operation, value, resolver=resolver
    )
    return base if condition is None else and_(base, condition)


def dynamic_or(
    base: Predicate | None,
    entity_type: type,
    property_path: str,
    operation: FilterOperation | str,
    value: Any,
    *,
    resolver: PropertyResolver = DEFAULT_RESOLVER,
) -> Predicate | None:
    """``base OR condition``, or *base* unchanged if the condition is skipped."""
    condition = build_condition(
        entity_type, property_path, operation, value, resolver=resolver
    )
    return base if condition is None else or_(base, condition)


class PredicateBuilder:
    """
    Fluent composer mixing static and dynamic conditions.

    Example::

        predicate = (
            PredicateBuilder(Product, seed=TRUE)
            .dynamic_and("category.name", "contains", "Elec")
            .or_(Condition.create(Product, "is_active", "eq", False))
            .build()
        )
    """

    def __init__(
        self,
        entity_type: type,
        seed: Predicate | None = None,
        *,
        resolver: PropertyResolver = DEFAULT_RESOLVER,
    ) -> None:
        self.entity_type = entity_type
        self._resolver = resolver
        self._predicate = seed

    @property
    def predicate(self) -> Predicate | None:
        return self._predicate

    def and_(self, addition: Predicate) -> PredicateBuilder:
        self._predicate = and_(self._predicate, addition)
        return self

    def or_(self, addition: Predicate) -> PredicateBuilder:
        self._predicate = or_(self._predicate, addition)
        return self

    def dynamic_and(
        self, property_path: str, operation: FilterOperation | str, value: Any
    ) -> PredicateBuilder:
        self._predicate = dynamic_and(
            self._predicate,
            self.entity_type,
            property_path,
            operation,
            value,
            resolver=self._resolver,
        )
        return self

    def dynamic_or(
        self, property_path: str, operation: FilterOperation | str, value: Any
    ) -> PredicateBuilder:
        self._predicate = dynamic_or(
            self._predicate,
            self.entity_type,
            property_path,
            operation,
            value,
            resolver=self._resolver,
        )
        return self

    def build(self) -> Predicate:
        if self._predicate is None:
            raise EmptyCompositionError(
                f"No predicate was built for '{self.entity_type.__name__}'."
            )
        return self._predicate


class DynamicPredicateBuilder:
    """
    Collect filter triples and combine them with AND.

    ``build()`` renders the conjunction as text plus ordered parameters;
    ``to_predicate()`` returns the predicate tree for a query backend.
    """

    def __init__(
        self, entity_type: type, *, resolver: PropertyResolver = DEFAULT_RESOLVER
    ) -> None:
        self.entity_type = entity_type
        self._resolver = resolver
        self._filters: list[FilterCondition] = []

    def with_(
        self, property_path: str, operation: FilterOperation | str, value: Any
    ) -> DynamicPredicateBuilder:
        if property_path is None or not str(property_path).strip():
            raise InvalidPropertyPathError(property_path)
        op = _parse_operation(operation)
        return self.with_condition(
            FilterCondition(property_path=property_path, operation=op, value=value)
        )

    def with_condition(self, condition: FilterCondition) -> DynamicPredicateBuilder:
        self._filters.append(condition)
        return self

    def _conditions(self) -> list[Condition]:
        if not self._filters:
            raise EmptyCompositionError("No filters have been added.")
        built = (
            build_condition(
                self.entity_type,
                f.property_path,
                f.operation,
                f.value,
                resolver=self._resolver,
            )
            for f in self._filters
        )
        return [c for c in built if c is not None]

    def to_predicate(self) -> Predicate | None:
        """The AND of all valid conditions, or ``None`` if all were skipped."""
        conditions = self._conditions()
        return compose(conditions) if conditions else None

    def build(self) -> tuple[str, list[Any]]:
        """
        Render the conjunction as ``(expression, parameters)``.

        Conditions are joined with ``" AND "`` and number their
        placeholders from ``:p0`` in the order they were added.  When every
        condition was skipped the expression is empty.
        """
        parts: list[str] = []
        params: list[Any] = []
        for condition in self._conditions():
            rendered = condition.render(len(params))
            parts.append(rendered.text)
            params.extend(rendered.parameters)
        return " AND ".join(parts), params
