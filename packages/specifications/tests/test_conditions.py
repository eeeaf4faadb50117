"""Tests for FilterCondition and FilterOperation parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from dynspec import FilterCondition, FilterOperation


@pytest.mark.parametrize(
    "raw",
    ["contains", "Contains", "CONTAINS", FilterOperation.CONTAINS],
)
def test_parse_operation(raw):
    assert FilterOperation.parse(raw) is FilterOperation.CONTAINS


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("notContains", FilterOperation.NOT_CONTAINS),
        ("NOT_CONTAINS", FilterOperation.NOT_CONTAINS),
        ("GreaterThanOrEqual", FilterOperation.GREATER_THAN_OR_EQUAL),
        ("startswith", FilterOperation.STARTS_WITH),
        ("StartsWith", FilterOperation.STARTS_WITH),
        ("not_in", FilterOperation.NOT_IN),
    ],
)
def test_parse_operation_names(raw, expected):
    assert FilterOperation.parse(raw) is expected


def test_parse_unknown_operation():
    with pytest.raises(ValueError, match="Unknown filter operation"):
        FilterOperation.parse("between")


def test_condition_from_json_payload():
    condition = FilterCondition.model_validate(
        {"property_path": " category.name ", "operation": "Contains", "value": "Elec"}
    )
    assert condition.property_path == "category.name"
    assert condition.operation is FilterOperation.CONTAINS
    assert condition.value == "Elec"


@pytest.mark.parametrize("path", ["", "   "])
def test_condition_rejects_blank_path(path):
    with pytest.raises(ValidationError):
        FilterCondition(property_path=path, operation="eq", value=1)


def test_condition_is_frozen():
    condition = FilterCondition(property_path="name", operation="eq", value="x")
    with pytest.raises(ValidationError):
        condition.value = "y"
