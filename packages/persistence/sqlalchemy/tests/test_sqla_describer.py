from __future__ import annotations

from datetime import datetime

from dynspec import PropertyResolver, TypeCategory
from dynspec_sqlalchemy import SQLALCHEMY_RESOLVER, SQLAlchemyDescriber
from sqla_catalog import (
    CategoryRecord,
    OrderItemRecord,
    OrderRecord,
    OrderStatus,
    ProductRecord,
    SupplierRecord,
    Tier,
)


def test_supports_mapped_classes_only():
    describer = SQLAlchemyDescriber()
    assert describer.supports(ProductRecord)
    assert describer.supports(SupplierRecord)
    assert not describer.supports(OrderStatus)
    assert not describer.supports(int)


def test_classic_columns_resolve():
    name = SQLALCHEMY_RESOLVER.resolve(SupplierRecord, "Name")
    rating = SQLALCHEMY_RESOLVER.resolve(SupplierRecord, "rating")
    tier = SQLALCHEMY_RESOLVER.resolve(SupplierRecord, "TIER")

    assert name is not None
    assert name.terminal_type is str
    assert name.terminal.nullable is False
    assert rating is not None
    assert rating.terminal_type is int
    assert rating.terminal.nullable is True
    assert tier is not None
    assert tier.terminal_type is Tier
    assert tier.terminal.category is TypeCategory.ENUM


def test_classic_columns_need_the_mapper():
    assert PropertyResolver().resolve(SupplierRecord, "name") is None


def test_relationships_are_navigations():
    category = SQLALCHEMY_RESOLVER.resolve(ProductRecord, "category.name")
    items = SQLALCHEMY_RESOLVER.resolve(ProductRecord, "orderItems.quantity")

    assert category is not None
    assert category.navigations[0].target is CategoryRecord
    assert category.navigations[0].is_collection is False
    assert items is not None
    assert items.navigations[0].target is OrderItemRecord
    assert items.navigations[0].is_collection is True


def test_column_types():
    created = SQLALCHEMY_RESOLVER.resolve(ProductRecord, "created_date")
    status = SQLALCHEMY_RESOLVER.resolve(OrderRecord, "status")
    assert created is not None
    assert created.terminal_type is datetime
    assert created.terminal.category is TypeCategory.TEMPORAL
    assert status is not None
    assert status.terminal_type is OrderStatus


def test_mapped_annotations_resolve_without_the_mapper():
    resolved = PropertyResolver().resolve(ProductRecord, "category.name")
    assert resolved is not None
    assert resolved.navigations[0].target is CategoryRecord
    assert resolved.terminal_type is str
