"""
Dotted property-path resolution against entity types.

``PropertyResolver.resolve`` is the lenient form used for caller-supplied
dynamic filters: it returns ``None`` when a path cannot be resolved.
``PropertyResolver.require`` is the strict form used for statically
authored predicates, includes and ordering, and raises instead.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .exceptions import (
    FieldNotFoundError,
    InvalidPropertyPathError,
    RelationshipTraversalError,
)
from .introspection import (
    DEFAULT_DESCRIBERS,
    MemberInfo,
    TypeCategory,
    TypeDescriber,
    TypeDescriptor,
    describe,
    normalize_key,
)


@dataclass(frozen=True)
class ResolvedPath:
    """
    A property path whose every segment exists on the type reached so far.

    ``segments`` carries the declared member names, so a caller-supplied
    ``"CATEGORY.name"`` resolves to ``("category", "name")``.
    """

    root_type: type
    segments: tuple[str, ...]
    steps: tuple[MemberInfo, ...]

    @property
    def path(self) -> str:
        return ".".join(self.segments)

    @property
    def terminal(self) -> MemberInfo:
        return self.steps[-1]

    @property
    def terminal_type(self) -> Any:
        return self.terminal.python_type

    @property
    def navigations(self) -> tuple[MemberInfo, ...]:
        """Members traversed before the terminal one."""
        return self.steps[:-1]

    @property
    def key(self) -> str:
        return ".".join(normalize_key(s) for s in self.segments)

    def __str__(self) -> str:
        return self.path


class PropertyResolver:
    """
    Resolve dotted paths through cached type descriptors.

    The describers are tried in order; the first that supports a class
    provides its member table.
    """

    def __init__(self, describers: Iterable[TypeDescriber] | None = None) -> None:
        self._describers: tuple[TypeDescriber, ...] = (
            tuple(describers) if describers is not None else DEFAULT_DESCRIBERS
        )

    @property
    def describers(self) -> tuple[TypeDescriber, ...]:
        return self._describers

    def describe(self, entity_type: type) -> TypeDescriptor | None:
        return describe(entity_type, self._describers)

    def resolve(self, root_type: type, path: str) -> ResolvedPath | None:
        """Return the resolved path, or ``None`` if any segment is unknown."""
        try:
            return self._walk(root_type, path)
        except (FieldNotFoundError, RelationshipTraversalError):
            return None

    def require(self, root_type: type, path: str) -> ResolvedPath:
        """
        Resolve *path* or raise.

        Raises:
            InvalidPropertyPathError: the path is empty or blank.
            FieldNotFoundError: a segment does not exist on its type.
            RelationshipTraversalError: a segment follows a scalar member.
        """
        return self._walk(root_type, path)

    def _walk(self, root_type: type, path: str) -> ResolvedPath:
        if path is None or not str(path).strip():
            raise InvalidPropertyPathError(path)

        raw_segments = [s.strip() for s in str(path).strip().split(".")]
        current: type | None = root_type
        owner: type = root_type
        steps: list[MemberInfo] = []

        for position, segment in enumerate(raw_segments):
            if current is None:
                raise RelationshipTraversalError(
                    steps[-1].name, _type_name(owner), path
                )
            owner = current
            descriptor = self.describe(current)
            member = descriptor.find(segment) if descriptor and segment else None
            if member is None:
                raise FieldNotFoundError(
                    segment,
                    current.__name__,
                    descriptor.member_names if descriptor else [],
                    full_path=path,
                )
            steps.append(member)
            is_last = position == len(raw_segments) - 1
            if not is_last:
                current = self._navigate(member)

        return ResolvedPath(
            root_type=root_type,
            segments=tuple(m.name for m in steps),
            steps=tuple(steps),
        )

    def _navigate(self, member: MemberInfo) -> type | None:
        """Type reached through *member*, or ``None`` for scalar members."""
        if member.category is not TypeCategory.OBJECT:
            return None
        target = member.python_type
        return target if self.describe(target) is not None else None


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", repr(tp))


DEFAULT_RESOLVER = PropertyResolver()
