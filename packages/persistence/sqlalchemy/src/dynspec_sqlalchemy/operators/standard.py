"""Equality and ordering; ``None`` compiles to ``IS [NOT] NULL``."""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, cast

from dynspec.operators import FilterOperation

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class _ComparisonOperator(SQLAlchemyOperator):
    compare_values: ClassVar[Callable[[Any, Any], Any]]

    def compile(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", type(self).compare_values(column, value))


class EqualOperator(_ComparisonOperator):
    operation = FilterOperation.EQUAL
    compare_values = operator.eq

    def compile(self, column: Any, value: Any) -> ColumnElement[bool]:
        if value is None:
            return cast("ColumnElement[bool]", column.is_(None))
        return super().compile(column, value)


class NotEqualOperator(_ComparisonOperator):
    operation = FilterOperation.NOT_EQUAL
    compare_values = operator.ne

    def compile(self, column: Any, value: Any) -> ColumnElement[bool]:
        if value is None:
            return cast("ColumnElement[bool]", column.is_not(None))
        return super().compile(column, value)


class GreaterThanOperator(_ComparisonOperator):
    operation = FilterOperation.GREATER_THAN
    compare_values = operator.gt


class GreaterEqualOperator(_ComparisonOperator):
    operation = FilterOperation.GREATER_THAN_OR_EQUAL
    compare_values = operator.ge


class LessThanOperator(_ComparisonOperator):
    operation = FilterOperation.LESS_THAN
    compare_values = operator.lt


class LessEqualOperator(_ComparisonOperator):
    operation = FilterOperation.LESS_THAN_OR_EQUAL
    compare_values = operator.le
