# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

import asyncio
import logging

from .errors import SetupFailed, SourceUnavailable
from .model import Board, Category
from .source import ClueSource

DEFAULT_CATEGORIES = 6


class BoardBuilder:
    source: ClueSource
    categories: int
    logger: logging.Logger

    def __init__(
        self,
        source: ClueSource,
        categories: int = DEFAULT_CATEGORIES,
        logger: logging.Logger | None = None,
    ) -> None:
        if categories < 1:
            raise ValueError("A board needs at least one category")  # noqa: TRY003

        self.source = source
        self.categories = categories
        self.logger = logger or logging.getLogger("clueboard.builder")

    async def build(self) -> Board:
        try:
            ids = await self.source.list_category_ids(self.categories)
        except SourceUnavailable as ex:
            raise SetupFailed(str(ex)) from ex
        except Exception as ex:
            raise SetupFailed(f"Error listing categories: {ex!r}") from ex  # noqa: TRY003

        if len(ids) < self.categories:
            raise SetupFailed(  # noqa: TRY003
                f"Needed {self.categories} categories, got {len(ids)}",
            )

        ids = ids[: self.categories]
        self.logger.info("Fetching categories %s", ids)

        # gather() returns in argument order, whatever order the fetches finish in.
        results = await asyncio.gather(
            *(self.source.fetch_category(category_id) for category_id in ids),
            return_exceptions=True,
        )

        categories: list[Category] = []
        for category_id, result in zip(ids, results, strict=True):
            if isinstance(result, Category):
                categories.append(result)
                continue

            if not isinstance(result, Exception):
                raise result

            self.logger.error("Error fetching category %s", category_id, exc_info=result)
            categories.append(Category.fallback())

        board = Board(categories)
        fallbacks = sum(1 for category in board if category.is_fallback)
        if fallbacks:
            self.logger.warning("Board built with %d unavailable categories", fallbacks)

        return board
