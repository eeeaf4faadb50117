from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .exceptions import InvalidPropertyPathError
from .operators import FilterOperation


class FilterCondition(BaseModel):
    """
    One caller-supplied ``(property path, operation, value)`` triple.

    Typically parsed straight from a request body::

        FilterCondition.model_validate(
            {"property_path": "Category.Name", "operation": "contains", "value": "Elec"}
        )
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    property_path: str
    operation: FilterOperation
    value: Any = None

    @field_validator("property_path")
    @classmethod
    def _path_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise InvalidPropertyPathError(v)
        return v.strip()

    @field_validator("operation", mode="before")
    @classmethod
    def _parse_operation(cls, v: Any) -> FilterOperation:
        return FilterOperation.parse(v)
