"""Shared fixtures for specification engine tests."""

from __future__ import annotations

import pytest

from catalog import make_products
from dynspec import PropertyResolver
from dynspec.operators_memory import build_default_registry


@pytest.fixture
def registry():
    """Default in-memory operator registry."""
    return build_default_registry()


@pytest.fixture
def resolver() -> PropertyResolver:
    return PropertyResolver()


@pytest.fixture
def products():
    return make_products()
