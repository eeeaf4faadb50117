"""Tests for operation adjustment by member type."""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal
from typing import Any

import pytest

from catalog import OrderStatus, Priority
from dynspec import FilterOperation, adjust_operation

NON_TEXT_TYPES = [int, float, Decimal, bool, datetime.datetime, uuid.UUID, OrderStatus]


@pytest.mark.parametrize("operation", list(FilterOperation))
def test_text_members_keep_every_operation(operation: FilterOperation):
    assert adjust_operation(str, operation) is operation


@pytest.mark.parametrize("terminal_type", NON_TEXT_TYPES)
@pytest.mark.parametrize(
    ("operation", "expected"),
    [
        (FilterOperation.CONTAINS, FilterOperation.EQUAL),
        (FilterOperation.NOT_CONTAINS, FilterOperation.NOT_EQUAL),
        (FilterOperation.STARTS_WITH, FilterOperation.EQUAL),
        (FilterOperation.ENDS_WITH, FilterOperation.EQUAL),
    ],
)
def test_string_operations_degrade_on_non_text(
    terminal_type: Any, operation: FilterOperation, expected: FilterOperation
):
    assert adjust_operation(terminal_type, operation) is expected


@pytest.mark.parametrize("terminal_type", NON_TEXT_TYPES)
@pytest.mark.parametrize(
    "operation",
    [
        FilterOperation.EQUAL,
        FilterOperation.NOT_EQUAL,
        FilterOperation.GREATER_THAN,
        FilterOperation.GREATER_THAN_OR_EQUAL,
        FilterOperation.LESS_THAN,
        FilterOperation.LESS_THAN_OR_EQUAL,
        FilterOperation.IN,
        FilterOperation.NOT_IN,
    ],
)
def test_comparison_and_membership_never_change(
    terminal_type: Any, operation: FilterOperation
):
    assert adjust_operation(terminal_type, operation) is operation


def test_str_based_enum_is_not_text():
    assert adjust_operation(Priority, FilterOperation.CONTAINS) is FilterOperation.EQUAL


def test_unknown_type_passes_through():
    assert adjust_operation(None, FilterOperation.CONTAINS) is FilterOperation.CONTAINS


def test_accepts_operation_names():
    assert adjust_operation(int, "Contains") is FilterOperation.EQUAL
