"""
Compilation of single conditions into SQLAlchemy clauses.

Mirrors :mod:`dynspec.evaluator`: one :class:`SQLAlchemyOperator` per
:class:`FilterOperation`, looked up through a registry, so a backend can
swap the SQL produced for an operation without touching the compiler.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, ClassVar

from dynspec.exceptions import UnsupportedOperationError

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from dynspec.operators import FilterOperation


class SQLAlchemyOperator(ABC):
    """One filter operation rendered as a boolean column expression."""

    operation: ClassVar[FilterOperation]

    @abstractmethod
    def compile(self, column: Any, value: Any) -> ColumnElement[bool]:
        """
        Args:
            column: The instrumented attribute the condition targets.
            value: The condition value, already coerced (enum members,
                tuples for ``IN``).
        """


class SQLAlchemyOperatorRegistry:
    """Operators keyed by operation; later registrations replace earlier ones."""

    def __init__(self, *operators: SQLAlchemyOperator) -> None:
        self._operators: dict[FilterOperation, SQLAlchemyOperator] = {}
        self.register(*operators)

    def register(self, *operators: SQLAlchemyOperator) -> None:
        for operator in operators:
            self._operators[operator.operation] = operator

    def __getitem__(self, operation: FilterOperation) -> SQLAlchemyOperator:
        operator = self._operators.get(operation)
        if operator is None:
            raise UnsupportedOperationError(operation)
        return operator

    def __contains__(self, operation: object) -> bool:
        return operation in self._operators

    def __iter__(self) -> Iterator[FilterOperation]:
        return iter(self._operators)

    def compile(
        self, operation: FilterOperation, column: Any, value: Any
    ) -> ColumnElement[bool]:
        """
        Raises:
            UnsupportedOperationError: nothing is registered for *operation*.
        """
        return self[operation].compile(column, value)
