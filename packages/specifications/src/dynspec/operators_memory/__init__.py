"""
Built-in in-memory operators.

``DEFAULT_MEMORY_REGISTRY`` is what ``Predicate.is_satisfied_by`` uses
when no registry is passed.  Build a fresh one to customise::

    registry = build_default_registry()
    spec.is_satisfied_by(product, registry)
"""

from __future__ import annotations

from ..evaluator import MemoryOperatorRegistry
from .set import InOperator, NotInOperator
from .standard import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    LessEqualOperator,
    LessThanOperator,
    NotEqualOperator,
)
from .string import (
    ContainsOperator,
    EndsWithOperator,
    NotContainsOperator,
    StartsWithOperator,
)

BUILTIN_OPERATORS = (
    EqualOperator,
    NotEqualOperator,
    GreaterThanOperator,
    GreaterEqualOperator,
    LessThanOperator,
    LessEqualOperator,
    ContainsOperator,
    NotContainsOperator,
    StartsWithOperator,
    EndsWithOperator,
    InOperator,
    NotInOperator,
)


def build_default_registry() -> MemoryOperatorRegistry:
    """A new registry holding one instance of every built-in operator."""
    return MemoryOperatorRegistry(*(cls() for cls in BUILTIN_OPERATORS))


DEFAULT_MEMORY_REGISTRY = build_default_registry()

__all__ = [
    "BUILTIN_OPERATORS",
    "DEFAULT_MEMORY_REGISTRY",
    "MemoryOperatorRegistry",
    "build_default_registry",
]
