"""
Boolean predicate trees over entity types.

A predicate is an immutable tree of :class:`Constant`, :class:`Condition`,
:class:`AndPredicate`, :class:`OrPredicate` and :class:`NotPredicate`
nodes.  Binary nodes preserve the order in which they were combined, so

    seed & c1 & c2 | c3

is ``((seed AND c1) AND c2) OR c3``.  A tree can be:

- evaluated against a plain object (``is_satisfied_by``)
- rendered into parameterised text (``render``)
- compiled into a native query by a backend (see ``dynspec_sqlalchemy``)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal, NamedTuple

from .clauses import build_clause
from .enum_values import coerce_enum_value, coerce_enum_values
from .exceptions import EmptyCompositionError, UnsupportedOperationError
from .operators import COLLECTION_OPERATIONS, FilterOperation
from .operators_memory import DEFAULT_MEMORY_REGISTRY
from .resolver import DEFAULT_RESOLVER, PropertyResolver, ResolvedPath

if TYPE_CHECKING:
    from .evaluator import MemoryOperatorRegistry

Combinator = Literal["and", "or"]


class RenderedPredicate(NamedTuple):
    text: str
    parameters: tuple[Any, ...]
    next_index: int


class Predicate(ABC):
    """Base class for predicate nodes with logic operator support."""

    @abstractmethod
    def is_satisfied_by(
        self, candidate: Any, registry: MemoryOperatorRegistry | None = None
    ) -> bool:
        ...

    @abstractmethod
    def render(self, start_index: int = 0) -> RenderedPredicate:
        """Render the tree as text with ``:pN`` placeholders."""
        ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        ...

    def __and__(self, other: Predicate) -> AndPredicate:
        if not isinstance(other, Predicate):
            return NotImplemented
        return AndPredicate(self, other)

    def __or__(self, other: Predicate) -> OrPredicate:
        if not isinstance(other, Predicate):
            return NotImplemented
        return OrPredicate(self, other)

    def __invert__(self) -> NotPredicate:
        return NotPredicate(self)


@dataclass(frozen=True, eq=True)
class Constant(Predicate):
    """A predicate with a fixed outcome, typically the seed of a chain."""

    value: bool

    def is_satisfied_by(
        self, candidate: Any, registry: MemoryOperatorRegistry | None = None
    ) -> bool:
        return self.value

    def render(self, start_index: int = 0) -> RenderedPredicate:
        return RenderedPredicate("1 = 1" if self.value else "1 = 0", (), start_index)

    def to_dict(self) -> dict[str, Any]:
        return {"op": "const", "val": self.value}


TRUE = Constant(True)
FALSE = Constant(False)


@dataclass(frozen=True, eq=True)
class Condition(Predicate):
    """A single ``path <operation> value`` comparison on a resolved path."""

    path: ResolvedPath
    operation: FilterOperation
    value: Any = None

    @classmethod
    def create(
        cls,
        entity_type: type,
        path: str,
        operation: FilterOperation | str,
        value: Any = None,
        *,
        resolver: PropertyResolver = DEFAULT_RESOLVER,
    ) -> Condition:
        """
        Build a condition from a statically authored path.

        Unlike the dynamic entry points this raises on an unknown path
        (``FieldNotFoundError``), an unknown operation
        (``UnsupportedOperationError``) or an invalid enum value (``ValueError``).
        """
        try:
            op = FilterOperation.parse(operation)
        except ValueError as e:
            raise UnsupportedOperationError(operation) from e
        resolved = resolver.require(entity_type, path)
        enum_type = _enum_type(resolved)
        if enum_type is not None and value is not None:
            if op in COLLECTION_OPERATIONS:
                value = coerce_enum_values(enum_type, value)
            else:
                value = coerce_enum_value(enum_type, value)
        return cls(resolved, op, _freeze(value) if op in COLLECTION_OPERATIONS else value)

    def is_satisfied_by(
        self, candidate: Any, registry: MemoryOperatorRegistry | None = None
    ) -> bool:
        registry = registry or DEFAULT_MEMORY_REGISTRY
        return _evaluate(candidate, self.path.steps, self.operation, self.value, registry)

    def render(self, start_index: int = 0) -> RenderedPredicate:
        clause = build_clause(self.path, self.operation, self.value, start_index)
        params = (self.value,) if clause.next_index > start_index else ()
        return RenderedPredicate(clause.text, params, clause.next_index)

    def to_dict(self) -> dict[str, Any]:
        value = self.value
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, tuple):
            value = [v.value if isinstance(v, Enum) else v for v in value]
        return {"op": self.operation.value, "attr": self.path.path, "val": value}


@dataclass(frozen=True, eq=True)
class AndPredicate(Predicate):
    """Logical AND of two predicates, left evaluated first."""

    left: Predicate
    right: Predicate

    def is_satisfied_by(
        self, candidate: Any, registry: MemoryOperatorRegistry | None = None
    ) -> bool:
        return self.left.is_satisfied_by(
            candidate, registry
        ) and self.right.is_satisfied_by(candidate, registry)

    def render(self, start_index: int = 0) -> RenderedPredicate:
        return _render_binary("AND", self.left, self.right, start_index)

    def to_dict(self) -> dict[str, Any]:
        return {"op": "and", "conditions": [self.left.to_dict(), self.right.to_dict()]}


@dataclass(frozen=True, eq=True)
class OrPredicate(Predicate):
    """Logical OR of two predicates, left evaluated first."""

    left: Predicate
    right: Predicate

    def is_satisfied_by(
        self, candidate: Any, registry: MemoryOperatorRegistry | None = None
    ) -> bool:
        return self.left.is_satisfied_by(
            candidate, registry
        ) or self.right.is_satisfied_by(candidate, registry)

    def render(self, start_index: int = 0) -> RenderedPredicate:
        return _render_binary("OR", self.left, self.right, start_index)

    def to_dict(self) -> dict[str, Any]:
        return {"op": "or", "conditions": [self.left.to_dict(), self.right.to_dict()]}


@dataclass(frozen=True, eq=True)
class NotPredicate(Predicate):
    """Logical negation."""

    operand: Predicate

    def is_satisfied_by(
        self, candidate: Any, registry: MemoryOperatorRegistry | None = None
    ) -> bool:
        return not self.operand.is_satisfied_by(candidate, registry)

    def render(self, start_index: int = 0) -> RenderedPredicate:
        inner = self.operand.render(start_index)
        return RenderedPredicate(f"NOT ({inner.text})", inner.parameters, inner.next_index)

    def to_dict(self) -> dict[str, Any]:
        return {"op": "not", "conditions": [self.operand.to_dict()]}


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def and_(base: Predicate | None, addition: Predicate) -> Predicate:
    """
    ``base AND addition``.

    A ``None`` base means the chain has not started yet, so the addition
    becomes the chain.  An explicit seed such as ``TRUE`` is kept.
    """
    return addition if base is None else AndPredicate(base, addition)


def or_(base: Predicate | None, addition: Predicate) -> Predicate:
    """``base OR addition``; a ``None`` base yields *addition*."""
    return addition if base is None else OrPredicate(base, addition)


def compose(predicates: Iterable[Predicate], combinator: Combinator = "and") -> Predicate:
    """
    Fold *predicates* from the left with AND or OR.

    Raises:
        EmptyCompositionError: no predicates were given.
    """
    combine = {"and": and_, "or": or_}.get(combinator)
    if combine is None:
        raise ValueError(f"Unknown combinator: {combinator!r}")

    result: Predicate | None = None
    for predicate in predicates:
        result = combine(result, predicate)
    if result is None:
        raise EmptyCompositionError("Cannot compose an empty sequence of predicates.")
    return result


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _render_binary(
    keyword: str, left: Predicate, right: Predicate, start_index: int
) -> RenderedPredicate:
    lhs = left.render(start_index)
    rhs = right.render(lhs.next_index)
    return RenderedPredicate(
        f"({lhs.text} {keyword} {rhs.text})",
        lhs.parameters + rhs.parameters,
        rhs.next_index,
    )


def _member_value(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _evaluate(
    obj: Any,
    steps: tuple[Any, ...],
    operation: FilterOperation,
    value: Any,
    registry: MemoryOperatorRegistry,
) -> bool:
    member, rest = steps[0], steps[1:]
    current = _member_value(obj, member.name)
    if not rest:
        return registry.evaluate(operation, current, value)
    if current is None:
        return False
    if member.is_collection:
        return any(_evaluate(item, rest, operation, value, registry) for item in current)
    return _evaluate(current, rest, operation, value, registry)


def _enum_type(resolved: ResolvedPath) -> type[Enum] | None:
    tp = resolved.terminal_type
    if isinstance(tp, type) and issubclass(tp, Enum):
        return tp
    return None


def _freeze(value: Any) -> Any:
    """Store collection values as tuples so conditions stay immutable."""
    if isinstance(value, (list, set, frozenset)):
        return tuple(value)
    return value
