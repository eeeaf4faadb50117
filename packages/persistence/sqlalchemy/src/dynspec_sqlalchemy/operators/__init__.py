"""
Built-in SQLAlchemy operators.

``compile_predicate`` falls back to ``DEFAULT_SQLA_REGISTRY``.  To change
the SQL for one operation, register a replacement on a fresh registry::

    registry = build_default_sqla_registry()
    registry.register(CaseInsensitiveContains())
    repo = SpecificationRepository(session, registry=registry)
"""

from __future__ import annotations

from ..strategy import SQLAlchemyOperatorRegistry
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

BUILTIN_SQLA_OPERATORS = (
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


def build_default_sqla_registry() -> SQLAlchemyOperatorRegistry:
    return SQLAlchemyOperatorRegistry(*(cls() for cls in BUILTIN_SQLA_OPERATORS))


DEFAULT_SQLA_REGISTRY = build_default_sqla_registry()

__all__ = [
    "BUILTIN_SQLA_OPERATORS",
    "DEFAULT_SQLA_REGISTRY",
    "SQLAlchemyOperatorRegistry",
    "build_default_sqla_registry",
]
