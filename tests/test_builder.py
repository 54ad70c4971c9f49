from __future__ import annotations

import asyncio

import pytest

from clueboard.builder import BoardBuilder
from clueboard.errors import SetupFailed
from clueboard.model import DOLLAR_AMOUNTS, FALLBACK_TITLE

from .conftest import FakeClueSource


@pytest.mark.asyncio
async def test_builds_requested_number_of_categories(source):
    board = await BoardBuilder(source, 6).build()

    assert len(board) == 6
    for category in board:
        assert len(category) == 5
        assert tuple(clue.value for clue in category) == DOLLAR_AMOUNTS


@pytest.mark.asyncio
async def test_one_failed_category_becomes_fallback():
    source = FakeClueSource([1, 2, 3, 4, 5, 6], failing={4})
    board = await BoardBuilder(source, 6).build()

    assert len(board) == 6
    assert [c.title for c in board] == [
        "Category 1",
        "Category 2",
        "Category 3",
        FALLBACK_TITLE,
        "Category 5",
        "Category 6",
    ]
    assert board[3].is_fallback
    assert len(board[3]) == 0
    assert all(len(c) in (0, 5) for c in board)


@pytest.mark.asyncio
async def test_exception_in_fetch_becomes_fallback():
    source = FakeClueSource([1, 2, 3], raising={2})
    board = await BoardBuilder(source, 3).build()

    assert len(board) == 3
    assert board[1].is_fallback
    assert not board[0].is_fallback


@pytest.mark.asyncio
async def test_order_follows_ids_not_completion():
    source = FakeClueSource([1, 2, 3, 4], delays={1: 0.04, 2: 0.03, 3: 0.02, 4: 0.01})
    board = await BoardBuilder(source, 4).build()

    assert source.fetched == [4, 3, 2, 1]
    assert [c.title for c in board] == ["Category 1", "Category 2", "Category 3", "Category 4"]


@pytest.mark.asyncio
async def test_fetches_run_concurrently():
    source = FakeClueSource([1, 2, 3, 4, 5, 6])
    source.gate = asyncio.Event()

    task = asyncio.create_task(BoardBuilder(source, 6).build())
    for _ in range(10):
        await asyncio.sleep(0)

    assert source.in_flight == 6
    source.gate.set()
    board = await task

    assert source.max_in_flight == 6
    assert len(board) == 6


@pytest.mark.asyncio
async def test_listing_failure_aborts():
    source = FakeClueSource([1, 2, 3, 4, 5, 6], list_error=True)

    with pytest.raises(SetupFailed) as err:
        await BoardBuilder(source, 6).build()

    assert err.value.__cause__ is not None
    assert source.fetched == []


@pytest.mark.asyncio
async def test_too_few_ids_aborts():
    source = FakeClueSource([1, 2, 3, 4, 5, 6], short_list=5)

    with pytest.raises(SetupFailed):
        await BoardBuilder(source, 6).build()

    assert source.fetched == []


def test_needs_a_category(source):
    with pytest.raises(ValueError):
        BoardBuilder(source, 0)


@pytest.mark.asyncio
async def test_unexpected_listing_error_aborts():
    source = FakeClueSource([1, 2, 3, 4, 5, 6], list_exception=RuntimeError("bug in source"))

    with pytest.raises(SetupFailed) as err:
        await BoardBuilder(source, 6).build()

    assert isinstance(err.value.__cause__, RuntimeError)
    assert source.fetched == []
