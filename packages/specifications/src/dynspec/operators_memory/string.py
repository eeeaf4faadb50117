"""Substring matching on the string form of both values."""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import FilterOperation


class ContainsOperator(MemoryOperator):
    operation = FilterOperation.CONTAINS

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return str(condition_value) in str(field_value)


class NotContainsOperator(MemoryOperator):
    operation = FilterOperation.NOT_CONTAINS

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return str(condition_value) not in str(field_value)


class StartsWithOperator(MemoryOperator):
    operation = FilterOperation.STARTS_WITH

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return str(field_value).startswith(str(condition_value))


class EndsWithOperator(MemoryOperator):
    operation = FilterOperation.ENDS_WITH

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return str(field_value).endswith(str(condition_value))
