"""``LIKE`` operators; ``%`` and ``_`` in the value match literally."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, cast

from dynspec.operators import FilterOperation

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class _PatternOperator(SQLAlchemyOperator):
    method: ClassVar[str]
    negated: ClassVar[bool] = False

    def compile(self, column: Any, value: Any) -> ColumnElement[bool]:
        clause = getattr(column, self.method)(str(value), autoescape=True)
        return cast("ColumnElement[bool]", ~clause if self.negated else clause)


class ContainsOperator(_PatternOperator):
    operation = FilterOperation.CONTAINS
    method = "contains"


class NotContainsOperator(_PatternOperator):
    operation = FilterOperation.NOT_CONTAINS
    method = "contains"
    negated = True


class StartsWithOperator(_PatternOperator):
    operation = FilterOperation.STARTS_WITH
    method = "startswith"


class EndsWithOperator(_PatternOperator):
    operation = FilterOperation.ENDS_WITH
    method = "endswith"
