"""SQLAlchemy query execution for dynspec specifications."""

from __future__ import annotations

from .compiler import (
    AmbientFilter,
    apply_specification,
    build_text_filter,
    compile_predicate,
)
from .describer import SQLALCHEMY_RESOLVER, SQLAlchemyDescriber
from .exceptions import (
    NoResultFoundError,
    RepositoryError,
    SQLAlchemyPersistenceError,
)
from .operators import DEFAULT_SQLA_REGISTRY, build_default_sqla_registry
from .repository import PagedList, SpecificationRepository
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

__all__ = [
    # Compilation
    "compile_predicate",
    "apply_specification",
    "build_text_filter",
    "AmbientFilter",
    # Strategy
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "DEFAULT_SQLA_REGISTRY",
    "build_default_sqla_registry",
    # Metadata
    "SQLAlchemyDescriber",
    "SQLALCHEMY_RESOLVER",
    # Repository
    "SpecificationRepository",
    "PagedList",
    # Exceptions
    "SQLAlchemyPersistenceError",
    "RepositoryError",
    "NoResultFoundError",
]
