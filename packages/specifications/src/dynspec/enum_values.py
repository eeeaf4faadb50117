"""
Validation of caller-supplied values against enumeration members.

A value is accepted when it identifies exactly one member:

- a string equal to a member name, ignoring case (``"shipped"``)
- a value equal to a member value (``"SHP"`` or ``2``)
- a numeric string equal to an integer member value (``"2"``)

``bool`` is never accepted, even though it is an ``int`` subclass.
``None`` is accepted only for nullable members.
"""

from __future__ import annotations

from collections.abc import Collection
from enum import Enum
from typing import Any

from .introspection import MemberInfo

_MISSING = object()


def is_valid_enum_value(
    target: type[Enum] | MemberInfo, value: Any, *, nullable: bool = False
) -> bool:
    """
    Check *value* against an enum type or an enum-typed member.

    When *target* is a :class:`MemberInfo`, its nullability decides whether
    ``None`` is acceptable.
    """
    enum_type, nullable = _unpack(target, nullable)
    if enum_type is None:
        return True
    if value is None:
        return nullable
    return _lookup(enum_type, value) is not _MISSING


def coerce_enum_value(enum_type: type[Enum], value: Any) -> Any:
    """
    Return the member identified by *value*.

    ``None`` is returned unchanged.  Raises ``ValueError`` when the value
    does not identify a member.
    """
    if value is None:
        return None
    member = _lookup(enum_type, value)
    if member is _MISSING:
        raise ValueError(f"{value!r} is not a valid {enum_type.__name__}")
    return member


def coerce_enum_values(enum_type: type[Enum], values: Collection[Any]) -> list[Any]:
    return [coerce_enum_value(enum_type, v) for v in values]


def _unpack(
    target: type[Enum] | MemberInfo, nullable: bool
) -> tuple[type[Enum] | None, bool]:
    if isinstance(target, MemberInfo):
        tp = target.python_type
        nullable = target.nullable
    else:
        tp = target
    if isinstance(tp, type) and issubclass(tp, Enum):
        return tp, nullable
    return None, nullable


def _lookup(enum_type: type[Enum], value: Any) -> Any:
    if isinstance(value, bool):
        return _MISSING
    if isinstance(value, enum_type):
        return value

    for member in enum_type:
        if member.value == value and type(member.value) is not bool:
            return member

    if isinstance(value, str):
        text = value.strip()
        folded = text.casefold()
        for member in enum_type:
            if member.name.casefold() == folded:
                return member
        number = _parse_int(text)
        if number is not None:
            for member in enum_type:
                if isinstance(member.value, int) and member.value == number:
                    return member
    return _MISSING


def _parse_int(text: str) -> int | None:
    try:
        return int(text)
    except ValueError:
        return None
