"""
Runtime type metadata for property-path resolution.

A *describer* turns an entity class into a lookup table that maps the
normalised member key (see :func:`normalize_key`) to a :class:`MemberInfo`.
Tables are built once per class and cached, so repeated resolution never
rescans the class.

Built-in describers:

- :class:`PydanticDescriber`: ``BaseModel.model_fields``
- :class:`AnnotationDescriber`: class annotations across the MRO; covers
  dataclasses, plain annotated classes and SQLAlchemy 2.0 ``Mapped[...]``
  declarations

Backends may add their own describer (the SQLAlchemy package ships one built
on ``sqlalchemy.inspect``) and hand it to a ``PropertyResolver``.
"""

from __future__ import annotations

import datetime
import decimal
import functools
import inspect
import logging
import types
import typing
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Protocol, Union, get_args, get_origin

from pydantic import BaseModel

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)
_SEPARATORS = ("_", "-")
# Framework base classes whose annotations are never entity members.
_FRAMEWORK_MODULES = ("builtins", "typing", "pydantic", "sqlalchemy", "abc")


class TypeCategory(str, Enum):
    TEXT = "text"
    BOOLEAN = "boolean"
    NUMERIC = "numeric"
    TEMPORAL = "temporal"
    ENUM = "enum"
    UUID = "uuid"
    OBJECT = "object"
    OTHER = "other"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class MemberInfo:
    """
    Metadata for one accessible member of an entity type.

    ``python_type`` is the unwrapped type: ``Optional``/``Annotated``/
    ``Mapped`` wrappers are removed, and for collections it is the element
    type.  ``None`` means the type is unknown.
    """

    name: str
    python_type: Any
    category: TypeCategory
    nullable: bool = False
    is_collection: bool = False
    annotation: Any = None

    @property
    def is_navigation(self) -> bool:
        return self.category is TypeCategory.OBJECT

    @property
    def target(self) -> type | None:
        """Entity type reached by traversing this member, if any."""
        return self.python_type if self.is_navigation else None


@dataclass(frozen=True)
class TypeDescriptor:
    """Cached member table of one entity type."""

    entity_type: type
    members: Mapping[str, MemberInfo]

    def find(self, segment: str) -> MemberInfo | None:
        return self.members.get(normalize_key(segment))

    @property
    def member_names(self) -> list[str]:
        return [m.name for m in self.members.values()]


class TypeDescriber(Protocol):
    """Strategy that extracts member metadata from a class."""

    def supports(self, cls: type) -> bool:
        ...

    def describe(self, cls: type) -> TypeDescriptor:
        ...


# ---------------------------------------------------------------------------
# Name normalisation
# ---------------------------------------------------------------------------


def normalize_key(name: str) -> str:
    """
    Fold a member name to its lookup key.

    ``stockQuantity``, ``StockQuantity``, ``STOCK_QUANTITY``,
    ``stock-quantity`` and ``stock_quantity`` all become ``stockquantity``.
    """
    key = name.strip()
    for sep in _SEPARATORS:
        key = key.replace(sep, "")
    return key.lower()


# ---------------------------------------------------------------------------
# Annotation analysis
# ---------------------------------------------------------------------------


def _unwrap(annotation: Any) -> tuple[Any, bool, bool]:
    """Return ``(inner_type, nullable, is_collection)`` for an annotation."""
    nullable = False
    is_collection = False
    tp = annotation

    for _ in range(8):
        origin = get_origin(tp)
        if origin is None:
            break
        args = get_args(tp)
        if origin is typing.Annotated:
            tp = args[0]
        elif origin is Union or origin is types.UnionType:
            non_none = [a for a in args if a is not _NONE_TYPE]
            nullable = nullable or len(non_none) != len(args)
            if len(non_none) != 1:
                return None, nullable, is_collection
            tp = non_none[0]
        elif getattr(origin, "__name__", "") == "Mapped":
            # sqlalchemy.orm.Mapped[...] without importing SQLAlchemy here
            tp = args[0] if args else None
        elif origin is ClassVar:
            return None, nullable, is_collection
        elif _is_collection_origin(origin):
            is_collection = True
            tp = args[0] if args else None
        else:
            tp = origin
            break

    if tp is None or tp is Any or isinstance(tp, (str, typing.ForwardRef, typing.TypeVar)):
        return None, nullable, is_collection
    return tp, nullable, is_collection


def _is_collection_origin(origin: Any) -> bool:
    if not isinstance(origin, type) or issubclass(origin, (str, bytes, Mapping)):
        return False
    return issubclass(origin, Iterable)


def classify(tp: Any) -> TypeCategory:
    """Map an unwrapped python type to its :class:`TypeCategory`."""
    if tp is None or not isinstance(tp, type):
        return TypeCategory.UNKNOWN
    if issubclass(tp, Enum):
        return TypeCategory.ENUM
    if issubclass(tp, str):
        return TypeCategory.TEXT
    if issubclass(tp, bool):
        return TypeCategory.BOOLEAN
    if issubclass(tp, (int, float, decimal.Decimal, complex)):
        return TypeCategory.NUMERIC
    if issubclass(
        tp, (datetime.date, datetime.datetime, datetime.time, datetime.timedelta)
    ):
        return TypeCategory.TEMPORAL
    if issubclass(tp, uuid.UUID):
        return TypeCategory.UUID
    if _is_entity_class(tp):
        return TypeCategory.OBJECT
    return TypeCategory.OTHER


def _is_entity_class(tp: type) -> bool:
    if issubclass(tp, BaseModel):
        return True
    if tp.__module__.split(".")[0] in _FRAMEWORK_MODULES:
        return False
    return any(_own_annotations(klass) for klass in _user_mro(tp))


def member_info(name: str, annotation: Any) -> MemberInfo:
    tp, nullable, is_collection = _unwrap(annotation)
    return MemberInfo(
        name=name,
        python_type=tp,
        category=classify(tp),
        nullable=nullable,
        is_collection=is_collection,
        annotation=annotation,
    )


def _user_mro(cls: type) -> list[type]:
    return [
        klass
        for klass in reversed(cls.__mro__)
        if klass.__module__.split(".")[0] not in _FRAMEWORK_MODULES
    ]


def _own_annotations(klass: type) -> dict[str, Any]:
    return dict(inspect.get_annotations(klass))


def _evaluate_annotation(klass: type, name: str, annotation: Any) -> Any:
    """
    Resolve one (possibly string) annotation in the namespace of *klass*.

    Each annotation is evaluated on its own so that one unresolvable
    forward reference does not hide every other member of the class.
    """
    if not isinstance(annotation, (str, typing.ForwardRef)) and not _has_forward_ref(
        annotation
    ):
        return annotation
    holder = type(
        "_AnnotationHolder",
        (),
        {"__annotations__": {name: annotation}, "__module__": klass.__module__},
    )
    try:
        return typing.get_type_hints(
            holder, localns=dict(vars(klass)), include_extras=True
        )[name]
    except Exception:  # noqa: BLE001
        logger.debug(
            "Could not evaluate annotation %r of %s.%s",
            annotation,
            klass.__name__,
            name,
        )
        return None


def _has_forward_ref(annotation: Any) -> bool:
    return any(
        isinstance(arg, (str, typing.ForwardRef)) or _has_forward_ref(arg)
        for arg in get_args(annotation)
    )


# ---------------------------------------------------------------------------
# Describers
# ---------------------------------------------------------------------------


class PydanticDescriber:
    """Describe pydantic models through ``model_fields``."""

    def supports(self, cls: type) -> bool:
        return isinstance(cls, type) and issubclass(cls, BaseModel)

    def describe(self, cls: type) -> TypeDescriptor:
        return _describe_pydantic(cls)


@functools.lru_cache(maxsize=None)
def _describe_pydantic(cls: type[BaseModel]) -> TypeDescriptor:
    members = {
        normalize_key(name): member_info(name, field.annotation)
        for name, field in cls.model_fields.items()
    }
    return TypeDescriptor(entity_type=cls, members=types.MappingProxyType(members))


class AnnotationDescriber:
    """
    Describe any class through its annotations.

    Private names (leading underscore) and ``ClassVar`` members are skipped.
    Annotations declared by framework base classes are ignored.
    """

    def supports(self, cls: type) -> bool:
        return isinstance(cls, type) and any(
            _own_annotations(klass) for klass in _user_mro(cls)
        )

    def describe(self, cls: type) -> TypeDescriptor:
        return _describe_annotated(cls)


@functools.lru_cache(maxsize=None)
def _describe_annotated(cls: type) -> TypeDescriptor:
    members: dict[str, MemberInfo] = {}
    for klass in _user_mro(cls):
        for name, raw in _own_annotations(klass).items():
            if name.startswith("_"):
                continue
            annotation = _evaluate_annotation(klass, name, raw)
            if get_origin(annotation) is ClassVar or annotation is ClassVar:
                continue
            members[normalize_key(name)] = member_info(name, annotation)
    return TypeDescriptor(entity_type=cls, members=types.MappingProxyType(members))


DEFAULT_DESCRIBERS: tuple[TypeDescriber, ...] = (
    PydanticDescriber(),
    AnnotationDescriber(),
)


def describe(
    cls: type, describers: Iterable[TypeDescriber] = DEFAULT_DESCRIBERS
) -> TypeDescriptor | None:
    """Return the member table of *cls* from the first supporting describer."""
    for describer in describers:
        if describer.supports(cls):
            return describer.describe(cls)
    return None
