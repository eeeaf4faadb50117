"""Tests for predicate trees: composition, rendering and in-memory evaluation."""

from __future__ import annotations

from decimal import Decimal

import pytest

from catalog import Order, OrderStatus, Product
from dynspec import (
    FALSE,
    TRUE,
    AndPredicate,
    Condition,
    EmptyCompositionError,
    FieldNotFoundError,
    FilterOperation,
    NotPredicate,
    OrPredicate,
    UnsupportedOperationError,
    and_,
    compose,
    or_,
)


def _ids(products, predicate) -> set[int]:
    return {p.id for p in products if predicate.is_satisfied_by(p)}


@pytest.fixture
def expensive() -> Condition:
    return Condition.create(Product, "price", "gt", 100)


@pytest.fixture
def active() -> Condition:
    return Condition.create(Product, "is_active", "eq", True)


@pytest.fixture
def out_of_stock() -> Condition:
    return Condition.create(Product, "stock_quantity", "eq", 0)


# -- Composition order -------------------------------------------------------


def test_chain_is_left_associative(products, expensive, active, out_of_stock):
    predicate = or_(and_(and_(TRUE, expensive), active), out_of_stock)

    assert isinstance(predicate, OrPredicate)
    assert isinstance(predicate.left, AndPredicate)
    assert _ids(products, predicate) == {7, 12, 14, 16, 18, 20}


def test_operator_overloads_match_functions(products, expensive, active, out_of_stock):
    by_operators = TRUE & expensive & active | out_of_stock
    by_functions = or_(and_(and_(TRUE, expensive), active), out_of_stock)
    assert by_operators == by_functions


def test_right_grouping_differs(products, expensive, active, out_of_stock):
    predicate = and_(expensive, or_(active, out_of_stock))
    assert _ids(products, predicate) == {12, 14, 16, 18, 20}


def test_none_base_starts_chain(expensive):
    assert and_(None, expensive) is expensive
    assert or_(None, expensive) is expensive


def test_explicit_seed_is_kept(products, expensive):
    assert _ids(products, or_(FALSE, expensive)) == set(range(11, 21))
    assert _ids(products, and_(FALSE, expensive)) == set()


def test_compose_folds_left(expensive, active, out_of_stock):
    predicate = compose([expensive, active, out_of_stock], "or")
    assert predicate == OrPredicate(OrPredicate(expensive, active), out_of_stock)


def test_compose_empty_raises():
    with pytest.raises(EmptyCompositionError):
        compose([])
    with pytest.raises(ValueError):
        compose([], "or")


def test_not(products, active):
    assert _ids(products, ~active) == {p.id for p in products if not p.is_active}
    assert isinstance(~active, NotPredicate)


# -- Rendering ---------------------------------------------------------------


def test_render_numbers_parameters_in_order(expensive, active, out_of_stock):
    rendered = ((expensive & active) | out_of_stock).render()
    assert rendered.text == (
        "((price > :p0 AND is_active = :p1) OR stock_quantity = :p2)"
    )
    assert rendered.parameters == (100, True, 0)
    assert rendered.next_index == 3


def test_render_null_takes_no_parameter():
    predicate = Condition.create(Product, "description", "eq", None) & Condition.create(
        Product, "name", "startswith", "Pro"
    )
    rendered = predicate.render(start_index=4)
    assert rendered.text == "(description IS NULL AND name LIKE :p4 || '%')"
    assert rendered.parameters == ("Pro",)


def test_render_constants():
    assert TRUE.render().text == "1 = 1"
    assert FALSE.render().text == "1 = 0"


# -- In-memory evaluation ----------------------------------------------------


def test_navigation_through_none_is_false(products):
    named = Condition.create(Product, "category.name", "eq", "Garden")
    not_named = Condition.create(Product, "category.name", "ne", "Garden")
    assert _ids(products, named) == {15, 16, 17, 18, 19}
    assert 20 not in _ids(products, not_named)


def test_collection_navigation_matches_any(products):
    predicate = Condition.create(Product, "order_items.quantity", "gt", 18)
    assert _ids(products, predicate) == {19, 20}


def test_null_field_comparisons(products):
    missing = Condition.create(Product, "description", "eq", None)
    assert _ids(products, missing) == {5, 10, 15, 20}

    contains = Condition.create(Product, "description", "contains", "Desc")
    assert _ids(products, contains).isdisjoint({5, 10, 15, 20})


def test_string_operations(products):
    assert _ids(products, Condition.create(Product, "name", "endswith", "07")) == {7}
    assert _ids(products, Condition.create(Product, "name", "contains", "t 1")) == set(
        range(10, 20)
    )


def test_membership(products):
    predicate = Condition.create(Product, "id", "in", [1, 2, 3])
    assert predicate.value == (1, 2, 3)
    assert _ids(products, predicate) == {1, 2, 3}


# -- Static conditions -------------------------------------------------------


def test_create_coerces_enum_values():
    condition = Condition.create(Order, "status", FilterOperation.EQUAL, "shipped")
    assert condition.value is OrderStatus.SHIPPED

    many = Condition.create(Order, "status", "in", ["Pending", 2])
    assert many.value == (OrderStatus.PENDING, OrderStatus.SHIPPED)


def test_create_rejects_invalid_input():
    with pytest.raises(FieldNotFoundError):
        Condition.create(Product, "colour", "eq", "red")
    with pytest.raises(ValueError):
        Condition.create(Order, "status", "eq", "InvalidStatus")
    with pytest.raises(UnsupportedOperationError):
        Condition.create(Product, "price", "between", 1)


def test_to_dict(expensive, active):
    assert (expensive & active).to_dict() == {
        "op": "and",
        "conditions": [
            {"op": "gt", "attr": "price", "val": 100},
            {"op": "eq", "attr": "is_active", "val": True},
        ],
    }


def test_decimal_values_compare(products):
    predicate = Condition.create(Product, "price", "le", Decimal("30"))
    assert _ids(products, predicate) == {1, 2, 3}
