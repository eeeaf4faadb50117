"""
Lazy page-by-page async enumeration.

``PageAsyncEnumerator`` turns an async ``fetch_page(offset, limit)``
callable into an async iterable of items.  Pages are requested only as the
consumer advances, and enumeration stops at the first short or empty
page.  Every ``async for`` starts again from offset zero.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from typing import Generic, TypeVar

from .exceptions import InvalidPageSizeError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 100

FetchPage = Callable[[int, int], Awaitable[Sequence[T]]]


class PageAsyncEnumerator(Generic[T]):
    """
    Async iterable over pages returned by *fetch_page*.

    Args:
        fetch_page: ``async (offset, limit) -> sequence`` returning at most
            *limit* items starting at *offset*.
        page_size: Items requested per page; must be positive.
        cancel_event: When set, enumeration raises
            ``asyncio.CancelledError`` before the next page fetch or the
            next yielded item.  Items already yielded stay with the caller.
    """

    def __init__(
        self,
        fetch_page: FetchPage[T],
        page_size: int = DEFAULT_PAGE_SIZE,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        if page_size <= 0:
            raise InvalidPageSizeError(page_size)
        self._fetch_page = fetch_page
        self.page_size = page_size
        self._cancel_event = cancel_event

    def __aiter__(self) -> AsyncIterator[T]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[T]:
        offset = 0
        while True:
            self._check_cancelled()
            page = await self._fetch_page(offset, self.page_size)
            logger.debug(
                "Fetched page at offset %d: %d item(s)", offset, len(page)
            )
            for item in page:
                self._check_cancelled()
                yield item
            if len(page) < self.page_size:
                return
            offset += self.page_size

    async def to_list(self) -> list[T]:
        return [item async for item in self]

    def _check_cancelled(self) -> None:
        if self._cancel_event is not None and self._cancel_event.is_set():
            raise asyncio.CancelledError("Page enumeration was cancelled.")
