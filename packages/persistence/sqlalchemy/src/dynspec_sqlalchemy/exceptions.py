"""Exceptions for the SQLAlchemy query-execution layer."""

from __future__ import annotations


class SQLAlchemyPersistenceError(Exception):
    """Base exception for all SQLAlchemy-specific persistence errors."""


class RepositoryError(SQLAlchemyPersistenceError):
    """Raised when repository operations fail."""


class NoResultFoundError(RepositoryError, LookupError):
    """``first()`` found no entity matching the specification."""

    def __init__(self, entity_name: str) -> None:
        self.entity_name = entity_name
        super().__init__(f"No '{entity_name}' matches the specification.")


__all__: list[str] = [
    "NoResultFoundError",
    "RepositoryError",
    "SQLAlchemyPersistenceError",
]
