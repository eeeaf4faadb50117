from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from dynspec.operators import FilterOperation

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class InOperator(SQLAlchemyOperator):
    operation = FilterOperation.IN

    def compile(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.in_(list(value)))


class NotInOperator(SQLAlchemyOperator):
    operation = FilterOperation.NOT_IN

    def compile(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.not_in(list(value)))
