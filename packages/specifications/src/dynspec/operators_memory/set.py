"""Membership in the condition's value collection."""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import FilterOperation


class InOperator(MemoryOperator):
    operation = FilterOperation.IN

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return field_value in condition_value


class NotInOperator(MemoryOperator):
    operation = FilterOperation.NOT_IN

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return field_value not in condition_value
