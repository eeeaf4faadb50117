"""Tests for lazy page-by-page enumeration."""

from __future__ import annotations

import asyncio

import pytest

from dynspec import DEFAULT_PAGE_SIZE, InvalidPageSizeError, PageAsyncEnumerator


class RecordingSource:
    """In-memory page source that records every fetch."""

    def __init__(self, items: list[int]) -> None:
        self.items = items
        self.calls: list[tuple[int, int]] = []

    async def fetch_page(self, offset: int, limit: int) -> list[int]:
        self.calls.append((offset, limit))
        return self.items[offset : offset + limit]


@pytest.fixture
def source() -> RecordingSource:
    return RecordingSource(list(range(20)))


@pytest.mark.asyncio
@pytest.mark.parametrize("page_size", [1, 5, 7, 25])
async def test_yields_every_item_once_in_order(source, page_size):
    enumerator = PageAsyncEnumerator(source.fetch_page, page_size)
    assert [item async for item in enumerator] == list(range(20))


@pytest.mark.asyncio
async def test_stops_on_short_page(source):
    await PageAsyncEnumerator(source.fetch_page, 7).to_list()
    assert source.calls == [(0, 7), (7, 7), (14, 7)]


@pytest.mark.asyncio
async def test_exact_multiple_needs_one_empty_page(source):
    await PageAsyncEnumerator(source.fetch_page, 5).to_list()
    assert source.calls[-1] == (20, 5)
    assert len(source.calls) == 5


@pytest.mark.asyncio
async def test_empty_source():
    source = RecordingSource([])
    assert await PageAsyncEnumerator(source.fetch_page, 10).to_list() == []
    assert source.calls == [(0, 10)]


@pytest.mark.asyncio
async def test_pages_are_fetched_lazily(source):
    iterator = aiter(PageAsyncEnumerator(source.fetch_page, 5))
    assert source.calls == []
    assert await anext(iterator) == 0
    assert source.calls == [(0, 5)]
    for _ in range(4):
        await anext(iterator)
    assert source.calls == [(0, 5)]
    assert await anext(iterator) == 5
    assert source.calls == [(0, 5), (5, 5)]


@pytest.mark.asyncio
async def test_each_iteration_starts_over(source):
    enumerator = PageAsyncEnumerator(source.fetch_page, 25)
    first = [item async for item in enumerator]
    second = [item async for item in enumerator]
    assert first == second == list(range(20))
    assert source.calls == [(0, 25), (0, 25)]


@pytest.mark.asyncio
async def test_cancellation_after_first_item(source):
    cancel = asyncio.Event()
    enumerator = PageAsyncEnumerator(source.fetch_page, 5, cancel_event=cancel)
    received = []
    with pytest.raises(asyncio.CancelledError):
        async for item in enumerator:
            received.append(item)
            cancel.set()
    assert received == [0]
    assert source.calls == [(0, 5)]


@pytest.mark.asyncio
async def test_cancelled_before_start(source):
    cancel = asyncio.Event()
    cancel.set()
    with pytest.raises(asyncio.CancelledError):
        await PageAsyncEnumerator(source.fetch_page, 5, cancel_event=cancel).to_list()
    assert source.calls == []


@pytest.mark.parametrize("page_size", [0, -1])
def test_invalid_page_size(page_size):
    with pytest.raises(InvalidPageSizeError):
        PageAsyncEnumerator(RecordingSource([]).fetch_page, page_size)
    with pytest.raises(ValueError):
        PageAsyncEnumerator(RecordingSource([]).fetch_page, page_size)


def test_default_page_size():
    assert DEFAULT_PAGE_SIZE == 100
    assert PageAsyncEnumerator(RecordingSource([]).fetch_page).page_size == 100
