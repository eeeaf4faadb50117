"""Tests for enum value validation and coercion."""

from __future__ import annotations

import pytest

from catalog import Order, OrderStatus, Priority
from dynspec import DEFAULT_RESOLVER, coerce_enum_value, is_valid_enum_value


@pytest.mark.parametrize(
    "value",
    ["Shipped", "SHIPPED", "shipped", 2, "2", OrderStatus.SHIPPED],
)
def test_valid_values(value):
    assert is_valid_enum_value(OrderStatus, value) is True
    assert coerce_enum_value(OrderStatus, value) is OrderStatus.SHIPPED


@pytest.mark.parametrize("value", ["InvalidStatus", 99, "99", "", True, 2.5, [2]])
def test_invalid_values(value):
    assert is_valid_enum_value(OrderStatus, value) is False


def test_string_enum_accepts_value_and_name():
    assert coerce_enum_value(Priority, "high") is Priority.HIGH
    assert coerce_enum_value(Priority, "HIGH") is Priority.HIGH
    assert is_valid_enum_value(Priority, "urgent") is False


def test_none_only_valid_for_nullable_member():
    status = DEFAULT_RESOLVER.require(Order, "status").terminal
    previous = DEFAULT_RESOLVER.require(Order, "previous_status").terminal

    assert is_valid_enum_value(status, None) is False
    assert is_valid_enum_value(previous, None) is True
    assert is_valid_enum_value(OrderStatus, None) is False
    assert is_valid_enum_value(OrderStatus, None, nullable=True) is True


def test_non_enum_target_accepts_anything():
    assert is_valid_enum_value(int, "whatever") is True


def test_coerce_invalid_raises():
    with pytest.raises(ValueError, match="not a valid OrderStatus"):
        coerce_enum_value(OrderStatus, "InvalidStatus")
