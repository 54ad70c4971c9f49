"""
Shared fixtures for the clueboard tests.

FakeClueSource stands in for the question service. It does no sampling:
list_category_ids returns the first `count` ids in catalogue order, and each
category's clues are its first five questions. Question text is
"Q{category_id}.{n}", answers "A{category_id}.{n}".
"""

from __future__ import annotations

import asyncio

import pytest

from clueboard.errors import SourceUnavailable
from clueboard.model import Category
from clueboard.source import ClueSource


def make_pairs(category_id: int, count: int = 5) -> list[tuple[str, str]]:
    return [(f"Q{category_id}.{n}", f"A{category_id}.{n}") for n in range(count)]


class FakeClueSource(ClueSource):
    def __init__(
        self,
        ids: list[int],
        *,
        failing: set[int] | None = None,
        raising: set[int] | None = None,
        delays: dict[int, float] | None = None,
        list_error: bool = False,
        list_exception: Exception | None = None,
        short_list: int | None = None,
    ) -> None:
        self.ids = ids
        self.failing = failing or set()
        self.raising = raising or set()
        self.delays = delays or {}
        self.list_error = list_error
        self.list_exception = list_exception
        self.short_list = short_list

        self.list_calls = 0
        self.fetched: list[int] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.gate: asyncio.Event | None = None

    async def list_category_ids(self, count: int) -> list[int]:
        self.list_calls += 1
        if self.list_error:
            raise SourceUnavailable("service down")
        if self.list_exception is not None:
            raise self.list_exception
        if self.short_list is not None:
            return self.ids[: self.short_list]
        return self.ids[:count]

    async def fetch_category(self, category_id: int) -> Category:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.gate is not None:
                await self.gate.wait()
            await asyncio.sleep(self.delays.get(category_id, 0))
        finally:
            self.in_flight -= 1

        self.fetched.append(category_id)

        if category_id in self.raising:
            raise RuntimeError(f"boom {category_id}")
        if category_id in self.failing:
            return Category.fallback()

        return Category.from_pairs(f"Category {category_id}", make_pairs(category_id))


@pytest.fixture
def source() -> FakeClueSource:
    return FakeClueSource([10, 11, 12, 13, 14, 15, 16, 17])
