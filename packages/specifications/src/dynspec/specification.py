"""
Reusable query descriptions.

A :class:`Specification` bundles a filter predicate, eager-load includes,
ordering and the ambient-filter switch for one entity type.  It describes
*what* to query; a backend (see ``dynspec_sqlalchemy``) decides *how*.

Specifications are usually subclassed so the constructor states the
query::

    class ActiveProductsByPrice(Specification[Product]):
        def __init__(self) -> None:
            super().__init__(Product)
            self.where("is_active", "eq", True)
            self.add_include("category")
            self.add_order_by("price")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .dynamic import PredicateBuilder, dynamic_and, dynamic_or
from .exceptions import OrderingRequiredError, RelationshipTraversalError
from .predicates import Predicate, and_, or_
from .resolver import DEFAULT_RESOLVER, PropertyResolver, ResolvedPath

if TYPE_CHECKING:
    from .evaluator import MemoryOperatorRegistry
    from .operators import FilterOperation

T = TypeVar("T")
M = TypeVar("M")


@dataclass(frozen=True)
class OrderClause:
    """One ordering key; clauses apply in the order they were added."""

    path: ResolvedPath
    descending: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path.path, "descending": self.descending}


class Specification(Generic[T]):
    """
    Filter, includes, ordering and ambient-filter switch for ``T``.

    Pass ``source=`` to copy another specification: the new instance owns
    fresh include and ordering collections holding the same elements.
    """

    def __init__(
        self,
        entity_type: type[T],
        filter_query: Predicate | None = None,
        *,
        source: Specification[T] | None = None,
        resolver: PropertyResolver = DEFAULT_RESOLVER,
    ) -> None:
        self.entity_type = entity_type
        self._resolver = resolver
        self._filter: Predicate | None = None
        self._includes: list[ResolvedPath] = []
        self._order_by: list[OrderClause] = []
        self._ignore_query_filters = False

        if source is not None:
            self._filter = source.filter_query
            self._includes = list(source.includes)
            self._order_by = list(source.order_by)
            self._ignore_query_filters = source.ignore_query_filters
        if filter_query is not None:
            self.with_filter(filter_query)

    # -- read access ---------------------------------------------------------

    @property
    def filter_query(self) -> Predicate | None:
        return self._filter

    @property
    def includes(self) -> tuple[ResolvedPath, ...]:
        return tuple(self._includes)

    @property
    def order_by(self) -> tuple[OrderClause, ...]:
        return tuple(self._order_by)

    @property
    def ignore_query_filters(self) -> bool:
        return self._ignore_query_filters

    @property
    def has_ordering(self) -> bool:
        return bool(self._order_by)

    @property
    def resolver(self) -> PropertyResolver:
        return self._resolver

    # -- mutators ------------------------------------------------------------

    def with_filter(self, predicate: Predicate) -> Specification[T]:
        """Replace the filter predicate."""
        self._filter = predicate
        return self

    def where(
        self, property_path: str, operation: FilterOperation | str, value: Any
    ) -> Specification[T]:
        """AND a dynamic condition onto the filter; invalid ones are skipped."""
        self._filter = dynamic_and(
            self._filter,
            self.entity_type,
            property_path,
            operation,
            value,
            resolver=self._resolver,
        )
        return self

    def or_where(
        self, property_path: str, operation: FilterOperation | str, value: Any
    ) -> Specification[T]:
        """OR a dynamic condition onto the filter; invalid ones are skipped."""
        self._filter = dynamic_or(
            self._filter,
            self.entity_type,
            property_path,
            operation,
            value,
            resolver=self._resolver,
        )
        return self

    def add_include(self, path: str) -> Specification[T]:
        """
        Eager-load the navigation at *path*.

        Raises ``FieldNotFoundError`` for an unknown path and
        ``RelationshipTraversalError`` when it ends on a scalar member.
        Adding the same navigation twice, in any casing, keeps a single
        include.
        """
        resolved = self._resolver.require(self.entity_type, path)
        if not resolved.terminal.is_navigation:
            raise RelationshipTraversalError(
                resolved.terminal.name, self.entity_type.__name__, resolved.path
            )
        if all(existing.key != resolved.key for existing in self._includes):
            self._includes.append(resolved)
        return self

    def add_order_by(self, path: str, descending: bool = False) -> Specification[T]:
        """
        Append an ordering key.

        A blank *path* is ignored, and an identical clause is added once.
        """
        if path is None or not str(path).strip():
            return self
        clause = OrderClause(self._resolver.require(self.entity_type, path), descending)
        if all(
            (c.path.key, c.descending) != (clause.path.key, clause.descending)
            for c in self._order_by
        ):
            self._order_by.append(clause)
        return self

    def add_order_by_descending(self, path: str) -> Specification[T]:
        return self.add_order_by(path, descending=True)

    def ignore_ambient_filters(self) -> Specification[T]:
        """Bypass the backend's global query filters for this specification."""
        self._ignore_query_filters = True
        return self

    # -- helpers -------------------------------------------------------------

    def create_predicate(self, seed: Predicate | None = None) -> PredicateBuilder:
        """Return a predicate builder bound to this specification's entity type."""
        return PredicateBuilder(self.entity_type, seed, resolver=self._resolver)

    def ensure_ordering(self) -> None:
        if not self.has_ordering:
            raise OrderingRequiredError(self.entity_type.__name__)

    def copy(self) -> Specification[T]:
        return Specification(self.entity_type, source=self, resolver=self._resolver)

    def is_satisfied_by(
        self, candidate: T, registry: MemoryOperatorRegistry | None = None
    ) -> bool:
        if self._filter is None:
            return True
        return self._filter.is_satisfied_by(candidate, registry)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"entity": self.entity_type.__name__}
        if self._filter is not None:
            result["filter"] = self._filter.to_dict()
        if self._includes:
            result["includes"] = [p.path for p in self._includes]
        if self._order_by:
            result["order_by"] = [c.to_dict() for c in self._order_by]
        if self._ignore_query_filters:
            result["ignore_query_filters"] = True
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


class AndSpecification(Specification[T]):
    """Specification whose filter is ``left AND right``."""

    def __init__(self, left: Specification[T], right: Specification[T]) -> None:
        _check_same_entity(left, right)
        super().__init__(left.entity_type, resolver=left.resolver)
        merged = _merge(left.filter_query, right.filter_query, and_)
        if merged is not None:
            self.with_filter(merged)


class OrSpecification(Specification[T]):
    """Specification whose filter is ``left OR right``."""

    def __init__(self, left: Specification[T], right: Specification[T]) -> None:
        _check_same_entity(left, right)
        super().__init__(left.entity_type, resolver=left.resolver)
        merged = _merge(left.filter_query, right.filter_query, or_)
        if merged is not None:
            self.with_filter(merged)


class ModelSpecification(Specification[T], Generic[T, M]):
    """
    Specification whose results are projected into ``model_type``.

    The projection is done by the backend with
    ``model_type.model_validate(entity, from_attributes=True)``.
    """

    def __init__(
        self,
        entity_type: type[T],
        model_type: type[M],
        filter_query: Predicate | None = None,
        *,
        source: Specification[T] | None = None,
        resolver: PropertyResolver = DEFAULT_RESOLVER,
    ) -> None:
        super().__init__(entity_type, filter_query, source=source, resolver=resolver)
        self.model_type = model_type

    def copy(self) -> ModelSpecification[T, M]:
        return ModelSpecification(
            self.entity_type, self.model_type, source=self, resolver=self.resolver
        )


def _check_same_entity(left: Specification[Any], right: Specification[Any]) -> None:
    if left.entity_type is not right.entity_type:
        raise TypeError(
            f"Cannot combine specifications of '{left.entity_type.__name__}' "
            f"and '{right.entity_type.__name__}'."
        )


def _merge(
    left: Predicate | None, right: Predicate | None, combine: Any
) -> Predicate | None:
    if left is None:
        return right
    if right is None:
        return left
    return combine(left, right)
