from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import Select, func, select

from dynspec.exceptions import InvalidPageSizeError
from dynspec.paging import DEFAULT_PAGE_SIZE, PageAsyncEnumerator
from dynspec.specification import ModelSpecification

from .compiler import AmbientFilter, apply_specification
from .exceptions import NoResultFoundError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from dynspec.specification import Specification

    from .strategy import SQLAlchemyOperatorRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class PagedList(Generic[T]):
    """One page of results plus the totals needed to render a pager."""

    items: tuple[T, ...]
    page_number: int
    page_size: int
    total_count: int

    @property
    def page_count(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.total_count else 0

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.page_count

    @property
    def is_first_page(self) -> bool:
        return self.page_number == 1

    @property
    def is_last_page(self) -> bool:
        return self.page_number >= self.page_count

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Any:
        return iter(self.items)


class SpecificationRepository:
    """
    Execute specifications on an ``AsyncSession``.

    Every query starts from ``select(spec.entity_type)`` and goes through
    :func:`apply_specification`.  Results of a :class:`ModelSpecification`
    are projected into its pydantic ``model_type``::

        repo = SpecificationRepository(session, ambient_filters={
            Product: lambda m: m.is_deleted.is_(False),
        })
        products = await repo.to_list(ActiveProductsByPrice())

        async for product in repo.to_page_enumerable(spec, page_size=50):
            ...

    Args:
        session: The session queries run on.
        ambient_filters: Global filters per mapped class, skipped for
            specifications that call ``ignore_ambient_filters()``.
        registry: Optional custom operator registry.
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        ambient_filters: Mapping[type[Any], AmbientFilter] | None = None,
        registry: SQLAlchemyOperatorRegistry | None = None,
    ) -> None:
        self.session = session
        self._ambient_filters = dict(ambient_filters or {})
        self._registry = registry

    # -- statements ----------------------------------------------------------

    def query(self, spec: Specification[Any], **options: Any) -> Select[Any]:
        """The ``Select`` statement a specification compiles to."""
        return apply_specification(
            select(spec.entity_type),
            spec,
            ambient_filters=self._ambient_filters,
            registry=self._registry,
            **options,
        )

    # -- execution -----------------------------------------------------------

    async def to_list(self, spec: Specification[Any]) -> list[Any]:
        result = await self.session.execute(self.query(spec))
        return [self._project(spec, e) for e in result.scalars().all()]

    async def first_or_default(self, spec: Specification[Any]) -> Any | None:
        """The first match, or ``None``."""
        result = await self.session.execute(self.query(spec).limit(1))
        entity = result.scalars().first()
        return None if entity is None else self._project(spec, entity)

    async def first(self, spec: Specification[Any]) -> Any:
        """
        The first match.

        Raises:
            NoResultFoundError: nothing matches.
        """
        entity = await self.first_or_default(spec)
        if entity is None:
            raise NoResultFoundError(spec.entity_type.__name__)
        return entity

    async def any(self, spec: Specification[Any]) -> bool:
        stmt = self.query(spec, include_navigations=False, apply_ordering=False)
        return bool(await self.session.scalar(select(stmt.exists())))

    async def count(self, spec: Specification[Any]) -> int:
        stmt = self.query(spec, include_navigations=False, apply_ordering=False)
        total = await self.session.scalar(
            select(func.count()).select_from(stmt.subquery())
        )
        return int(total or 0)

    async def to_paged_list(
        self,
        spec: Specification[Any],
        page_number: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> PagedList[Any]:
        """
        Fetch page *page_number* (1-based) together with the total count.

        Raises:
            InvalidPageSizeError: *page_size* is not positive.
            ValueError: *page_number* is lower than 1.
        """
        if page_size <= 0:
            raise InvalidPageSizeError(page_size)
        if page_number < 1:
            raise ValueError(f"page_number must be 1 or greater, got {page_number}.")

        total = await self.count(spec)
        items = await self._fetch_page(spec, (page_number - 1) * page_size, page_size)
        return PagedList(
            items=tuple(items),
            page_number=page_number,
            page_size=page_size,
            total_count=total,
        )

    def to_page_enumerable(
        self,
        spec: Specification[Any],
        page_size: int = DEFAULT_PAGE_SIZE,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> PageAsyncEnumerator[Any]:
        """
        Lazily enumerate every match, one page query at a time.

        Raises:
            OrderingRequiredError: the specification has no ordering, so
                page boundaries would not be stable.
            InvalidPageSizeError: *page_size* is not positive.
        """
        spec.ensure_ordering()

        async def fetch_page(offset: int, limit: int) -> Sequence[Any]:
            logger.debug(
                "Fetching %s page offset=%d limit=%d",
                spec.entity_type.__name__,
                offset,
                limit,
            )
            return await self._fetch_page(spec, offset, limit)

        return PageAsyncEnumerator(fetch_page, page_size, cancel_event=cancel_event)

    # -- internals -----------------------------------------------------------

    async def _fetch_page(
        self, spec: Specification[Any], offset: int, limit: int
    ) -> list[Any]:
        result = await self.session.execute(
            self.query(spec).offset(offset).limit(limit)
        )
        return [self._project(spec, e) for e in result.scalars().all()]

    @staticmethod
    def _project(spec: Specification[Any], entity: Any) -> Any:
        if isinstance(spec, ModelSpecification):
            return spec.model_type.model_validate(entity, from_attributes=True)
        return entity
