"""Equality and ordering."""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any, ClassVar

from ..evaluator import MemoryOperator
from ..operators import FilterOperation


class EqualOperator(MemoryOperator):
    """``None`` equals ``None``, as ``IS NULL`` would."""

    operation = FilterOperation.EQUAL

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None or condition_value is None:
            return field_value is condition_value
        return self.compare(field_value, condition_value)

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value == condition_value)


class NotEqualOperator(MemoryOperator):
    """Comparing with ``None`` means ``IS NOT NULL``; a missing member never differs."""

    operation = FilterOperation.NOT_EQUAL

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if condition_value is None:
            return field_value is not None
        return super().evaluate(field_value, condition_value)

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value != condition_value)


class _OrderingOperator(MemoryOperator):
    compare_values: ClassVar[Callable[[Any, Any], Any]]

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return bool(type(self).compare_values(field_value, condition_value))


class GreaterThanOperator(_OrderingOperator):
    operation = FilterOperation.GREATER_THAN
    compare_values = operator.gt


class GreaterEqualOperator(_OrderingOperator):
    operation = FilterOperation.GREATER_THAN_OR_EQUAL
    compare_values = operator.ge


class LessThanOperator(_OrderingOperator):
    operation = FilterOperation.LESS_THAN
    compare_values = operator.lt


class LessEqualOperator(_OrderingOperator):
    operation = FilterOperation.LESS_THAN_OR_EQUAL
    compare_values = operator.le
