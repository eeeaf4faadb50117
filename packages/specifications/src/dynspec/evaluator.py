"""
Evaluation of conditions against plain Python objects.

``Condition.is_satisfied_by`` hands the member value it reached and the
condition value to a :class:`MemoryOperatorRegistry`, which dispatches on
the :class:`FilterOperation`.  Missing member values follow SQL ``NULL``
rules: every operator answers ``False`` unless it explicitly compares
against ``None``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any, ClassVar

from .exceptions import UnsupportedOperationError
from .operators import FilterOperation


class MemoryOperator(ABC):
    """One filter operation evaluated in memory."""

    operation: ClassVar[FilterOperation]

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None or condition_value is None:
            return False
        return bool(self.compare(field_value, condition_value))

    @abstractmethod
    def compare(self, field_value: Any, condition_value: Any) -> bool:
        """Compare two values that are both present."""


class MemoryOperatorRegistry:
    """
    Operators keyed by the operation they implement.

    Registering an operator for an operation that already has one
    replaces it, so a default registry can be customised in place::

        registry = build_default_registry()
        registry.register(CaseInsensitiveContains())
    """

    def __init__(self, *operators: MemoryOperator) -> None:
        self._operators: dict[FilterOperation, MemoryOperator] = {}
        self.register(*operators)

    def register(self, *operators: MemoryOperator) -> None:
        for operator in operators:
            self._operators[operator.operation] = operator

    def __getitem__(self, operation: FilterOperation) -> MemoryOperator:
        operator = self._operators.get(operation)
        if operator is None:
            raise UnsupportedOperationError(operation)
        return operator

    def __contains__(self, operation: object) -> bool:
        return operation in self._operators

    def __iter__(self) -> Iterator[FilterOperation]:
        return iter(self._operators)

    def evaluate(
        self, operation: FilterOperation, field_value: Any, condition_value: Any
    ) -> bool:
        return self[operation].evaluate(field_value, condition_value)
