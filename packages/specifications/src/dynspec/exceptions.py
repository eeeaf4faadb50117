"""
Exception hierarchy for the dynamic specification engine.

Only programmer errors are raised.  Soft failures (unresolvable paths,
invalid enum values, operator adjustments) never surface as exceptions;
the affected condition is dropped instead.

Every exception renders as an API error payload through ``to_dict()``:
``{"error": <code>, **details}``.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any, ClassVar

# Members listed in a FieldNotFoundError message before it is cut short.
MEMBER_PREVIEW_LIMIT = 15


class SpecificationError(Exception):
    """Base exception for all specification errors."""

    code: ClassVar[str | None] = None

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code or type(self).__name__, **self.details()}

    def details(self) -> dict[str, Any]:
        return {"message": str(self)}


class InvalidPropertyPathError(SpecificationError, ValueError):
    """An empty or blank property path was supplied."""

    code = "INVALID_PROPERTY_PATH"

    def __init__(self, path: str | None) -> None:
        self.path = path
        super().__init__("Property path cannot be null or empty.")

    def details(self) -> dict[str, Any]:
        return {"message": str(self), "path": self.path}


class FieldNotFoundError(SpecificationError):
    """
    A path segment names no member of the type it is applied to.

    Raised only by strict resolution (static conditions, includes and
    ordering).  Close member names are offered as suggestions::

        Product has no member 'stok_quantity' (in path 'stok_quantity').
        Did you mean 'stock_quantity'?
        Members: category, created_date, description, id, ...
    """

    code = "FIELD_NOT_FOUND"

    def __init__(
        self,
        invalid_field: str,
        model_name: str,
        available_fields: list[str],
        full_path: str | None = None,
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.model_name = model_name
        self.available_fields = sorted(available_fields)
        self.full_path = full_path or invalid_field
        self.suggestions = get_close_matches(
            invalid_field, self.available_fields, n=5, cutoff=cutoff
        )
        super().__init__(self._describe())

    def _describe(self) -> str:
        text = (
            f"{self.model_name} has no member '{self.invalid_field}' "
            f"(in path '{self.full_path}')."
        )
        if self.suggestions:
            quoted = " or ".join(f"'{s}'" for s in self.suggestions)
            text += f"\nDid you mean {quoted}?"
        members = self.available_fields[:MEMBER_PREVIEW_LIMIT]
        if len(self.available_fields) > MEMBER_PREVIEW_LIMIT:
            members = [*members, "..."]
        return text + f"\nMembers: {', '.join(members) or '(none)'}"

    def details(self) -> dict[str, Any]:
        return {
            "field": self.invalid_field,
            "model": self.model_name,
            "full_path": self.full_path,
            "suggestions": self.suggestions,
            "available_fields": self.available_fields,
        }


class RelationshipTraversalError(SpecificationError):
    """
    A path continues after, or must end on, a navigation member, but the
    member is a plain value: ``name.length`` where ``name`` is a string.
    """

    code = "RELATIONSHIP_TRAVERSAL_ERROR"

    def __init__(self, field: str, model_name: str, full_path: str) -> None:
        self.field = field
        self.model_name = model_name
        self.full_path = full_path
        super().__init__(
            f"'{field}' on {model_name} is not a navigation property "
            f"(in path '{full_path}')."
        )

    def details(self) -> dict[str, Any]:
        return {"field": self.field, "model": self.model_name, "full_path": self.full_path}


class EmptyCompositionError(SpecificationError, ValueError):
    """Composing zero conditions has no defined combinator semantics."""


class UnsupportedOperationError(SpecificationError, ValueError):
    """The filter operation is unknown to the component handling it."""

    code = "UNSUPPORTED_OPERATION"

    def __init__(self, operation: Any) -> None:
        self.operation = operation
        super().__init__(f"Operation {operation!r} not supported.")

    def details(self) -> dict[str, Any]:
        return {"operation": str(getattr(self.operation, "value", self.operation))}


class InvalidPageSizeError(SpecificationError, ValueError):
    """Paged enumeration requires a strictly positive page size."""

    def __init__(self, page_size: int) -> None:
        self.page_size = page_size
        super().__init__(f"page_size must be greater than zero, got {page_size}.")

    def details(self) -> dict[str, Any]:
        return {"message": str(self), "page_size": self.page_size}


class OrderingRequiredError(SpecificationError, NotImplementedError):
    """Paged enumeration was requested for a specification without ordering."""

    def __init__(self, entity_name: str) -> None:
        self.entity_name = entity_name
        super().__init__(
            f"Specification for '{entity_name}' must define at least one "
            "order_by clause to be enumerated page by page."
        )
