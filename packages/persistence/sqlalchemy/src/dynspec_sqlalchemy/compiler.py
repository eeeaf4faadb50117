"""
Compile ``dynspec`` predicates and specifications into SQLAlchemy.

Uses the strategy pattern: each filter operation is an isolated class in
``operators/``, registered in a ``SQLAlchemyOperatorRegistry``.
``compile_predicate`` walks the predicate tree and delegates leaf
compilation to the registry.

Navigation segments of a condition path become ``relationship.has()``
for scalar relationships and ``relationship.any()`` for collections, so

    Condition(Product, "category.name", CONTAINS, "Elec")

compiles to ``EXISTS (SELECT 1 FROM categories WHERE ... LIKE ...)``.

Specifications
--------------
``apply_specification`` takes a ``Select`` statement and a
``Specification`` and applies, in this order: the ambient filter of the
root entity, the filter predicate, includes (``selectinload`` chains) and
ordering.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    ColumnElement,
    Select,
    TextClause,
    and_,
    bindparam,
    false,
    not_,
    or_,
    text,
    true,
)
from sqlalchemy.orm import selectinload

from dynspec.clauses import parameter_name
from dynspec.exceptions import UnsupportedOperationError
from dynspec.predicates import (
    AndPredicate,
    Condition,
    Constant,
    NotPredicate,
    OrPredicate,
    Predicate,
)

from .operators import DEFAULT_SQLA_REGISTRY

if TYPE_CHECKING:
    from dynspec.introspection import MemberInfo
    from dynspec.resolver import ResolvedPath
    from dynspec.specification import Specification

    from .strategy import SQLAlchemyOperatorRegistry

logger = logging.getLogger(__name__)

AmbientFilter = Callable[[type[Any]], ColumnElement[bool]]

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compile_predicate(
    model: type[Any],
    predicate: Predicate,
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> ColumnElement[bool]:
    """
    Build a SQLAlchemy boolean expression from a predicate tree.

    Args:
        model: The mapped class the predicate was resolved against.
        predicate: The predicate tree.
        registry: Optional custom operator registry.  Falls back to
            ``DEFAULT_SQLA_REGISTRY``.
    """
    reg = registry or DEFAULT_SQLA_REGISTRY
    return _compile_node(model, predicate, reg)


def apply_specification(
    stmt: Select[Any],
    spec: Specification[Any],
    *,
    ambient_filters: Mapping[type[Any], AmbientFilter] | None = None,
    registry: SQLAlchemyOperatorRegistry | None = None,
    include_navigations: bool = True,
    apply_ordering: bool = True,
) -> Select[Any]:
    """
    Apply a specification to a ``Select`` over ``spec.entity_type``.

    ``include_navigations`` and ``apply_ordering`` can be turned off for
    aggregate queries (count, exists) where they only cost time.
    """
    model = spec.entity_type
    stmt = _apply_ambient_filter(stmt, spec, ambient_filters)

    if spec.filter_query is not None:
        stmt = stmt.where(
            compile_predicate(model, spec.filter_query, registry=registry)
        )

    if include_navigations:
        for include in spec.includes:
            stmt = stmt.options(_include_option(model, include))

    if apply_ordering:
        stmt = _apply_order_by(stmt, spec)
    return stmt


def build_text_filter(
    expression: str, parameters: list[Any] | tuple[Any, ...]
) -> TextClause | ColumnElement[bool]:
    """
    Bind a rendered ``DynamicPredicateBuilder`` expression.

    Placeholders ``:p0 .. :pN`` are bound positionally from *parameters*;
    collection values (``IN``/``NOT_IN``) become expanding parameters.
    An empty expression, produced when every condition was skipped,
    yields ``true()``.
    """
    if not expression.strip():
        return true()
    binds = []
    for index, value in enumerate(parameters):
        if isinstance(value, (list, tuple, set, frozenset)):
            binds.append(
                bindparam(parameter_name(index), value=list(value), expanding=True)
            )
        else:
            binds.append(bindparam(parameter_name(index), value=value))
    return text(expression).bindparams(*binds)


# ---------------------------------------------------------------------------
# Internal compilation
# ---------------------------------------------------------------------------


def _compile_node(
    model: type[Any], node: Predicate, registry: SQLAlchemyOperatorRegistry
) -> ColumnElement[bool]:
    if isinstance(node, Condition):
        return _compile_condition(model, node.path.steps, node, registry)
    if isinstance(node, AndPredicate):
        return and_(
            _compile_node(model, node.left, registry),
            _compile_node(model, node.right, registry),
        )
    if isinstance(node, OrPredicate):
        return or_(
            _compile_node(model, node.left, registry),
            _compile_node(model, node.right, registry),
        )
    if isinstance(node, NotPredicate):
        return not_(_compile_node(model, node.operand, registry))
    if isinstance(node, Constant):
        return true() if node.value else false()
    raise UnsupportedOperationError(type(node).__name__)


def _compile_condition(
    model: type[Any],
    steps: tuple[MemberInfo, ...],
    condition: Condition,
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    member, rest = steps[0], steps[1:]
    attr = getattr(model, member.name)
    if not rest:
        return registry.compile(condition.operation, attr, condition.value)

    relationship = attr.property
    inner = _compile_condition(relationship.mapper.class_, rest, condition, registry)
    return attr.any(inner) if relationship.uselist else attr.has(inner)


def _apply_ambient_filter(
    stmt: Select[Any],
    spec: Specification[Any],
    ambient_filters: Mapping[type[Any], AmbientFilter] | None,
) -> Select[Any]:
    if not ambient_filters:
        return stmt
    if spec.ignore_query_filters:
        logger.debug("Ambient filters ignored for %s", spec.entity_type.__name__)
        return stmt
    ambient = ambient_filters.get(spec.entity_type)
    if ambient is None:
        return stmt
    return stmt.where(ambient(spec.entity_type))


def _include_option(model: type[Any], include: ResolvedPath) -> Any:
    current = model
    option = None
    for segment in include.segments:
        attr = getattr(current, segment)
        option = selectinload(attr) if option is None else option.selectinload(attr)
        current = attr.property.mapper.class_
    return option


def _apply_order_by(stmt: Select[Any], spec: Specification[Any]) -> Select[Any]:
    """Apply ordering; scalar navigations are outer-joined once each."""
    if not spec.order_by:
        return stmt

    joined: set[tuple[str, ...]] = set()
    order_clauses: list[Any] = []
    for clause in spec.order_by:
        current = spec.entity_type
        prefix: tuple[str, ...] = ()
        for member in clause.path.navigations:
            if member.is_collection:
                raise UnsupportedOperationError(
                    f"order by collection navigation '{clause.path.path}'"
                )
            attr = getattr(current, member.name)
            prefix += (member.name,)
            if prefix not in joined:
                stmt = stmt.outerjoin(attr)
                joined.add(prefix)
            current = attr.property.mapper.class_
        column = getattr(current, clause.path.terminal.name)
        order_clauses.append(column.desc() if clause.descending else column.asc())

    return stmt.order_by(*order_clauses)
