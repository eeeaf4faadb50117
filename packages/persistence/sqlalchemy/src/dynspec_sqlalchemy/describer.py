"""
Type metadata for mapped SQLAlchemy classes.

Reads the mapper through ``sqlalchemy.inspect()`` so classic
``Column(...)`` declarations resolve as well as ``Mapped[...]`` ones.
Column types come from ``TypeEngine.python_type``; relationships become
navigation members whose target is the related mapped class.
"""

from __future__ import annotations

import functools
import logging
import types
from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Mapper

from dynspec.introspection import (
    AnnotationDescriber,
    MemberInfo,
    PydanticDescriber,
    TypeCategory,
    TypeDescriptor,
    classify,
    normalize_key,
)
from dynspec.resolver import PropertyResolver

logger = logging.getLogger(__name__)


class SQLAlchemyDescriber:
    """Describe mapped classes through their ``Mapper``."""

    def supports(self, cls: type) -> bool:
        return isinstance(cls, type) and isinstance(
            sa_inspect(cls, raiseerr=False), Mapper
        )

    def describe(self, cls: type) -> TypeDescriptor:
        return _describe_mapped(cls)


@functools.lru_cache(maxsize=None)
def _describe_mapped(cls: type) -> TypeDescriptor:
    mapper: Mapper[Any] = sa_inspect(cls)
    members: dict[str, MemberInfo] = {}

    for attr in mapper.column_attrs:
        column = attr.columns[0]
        python_type = _column_python_type(column)
        members[normalize_key(attr.key)] = MemberInfo(
            name=attr.key,
            python_type=python_type,
            category=classify(python_type),
            nullable=bool(getattr(column, "nullable", True)),
        )

    for rel in mapper.relationships:
        members[normalize_key(rel.key)] = MemberInfo(
            name=rel.key,
            python_type=rel.mapper.class_,
            category=TypeCategory.OBJECT,
            nullable=not rel.uselist,
            is_collection=bool(rel.uselist),
        )

    return TypeDescriptor(entity_type=cls, members=types.MappingProxyType(members))


def _column_python_type(column: Any) -> type | None:
    col_type = column.type
    enum_class = getattr(col_type, "enum_class", None)
    if enum_class is not None:
        return enum_class
    try:
        return col_type.python_type
    except NotImplementedError:
        logger.debug("No python type for column %s (%r)", column, col_type)
        return None


SQLALCHEMY_RESOLVER = PropertyResolver(
    describers=(SQLAlchemyDescriber(), PydanticDescriber(), AnnotationDescriber())
)
