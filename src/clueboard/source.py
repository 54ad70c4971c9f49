# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from http import HTTPStatus
from typing import Any

import abc
import logging
import random

import aiohttp
import yarl

from .errors import SourceUnavailable
from .model import CLUES_PER_CATEGORY, Category

DEFAULT_API = yarl.URL("https://rithm-jeopardy.herokuapp.com/api/")
DEFAULT_POOL_SIZE = 100


class ClueSource(abc.ABC):
    """
    Somewhere to get trivia categories from.

    Implementations must never raise from fetch_category: a category that
    can not be loaded is reported as Category.fallback() instead.
    """

    @abc.abstractmethod
    async def list_category_ids(self, count: int) -> list[int]:
        pass

    @abc.abstractmethod
    async def fetch_category(self, category_id: int) -> Category:
        pass


class _BadResponse(Exception):  # noqa: N818
    pass


class JServiceClueSource(ClueSource):
    _http: aiohttp.ClientSession
    _api: yarl.URL
    _pool_size: int
    _random: random.Random
    _logger: logging.Logger

    def __init__(
        self,
        http: aiohttp.ClientSession,
        api: yarl.URL = DEFAULT_API,
        *,
        pool_size: int = DEFAULT_POOL_SIZE,
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._http = http
        self._api = api
        self._pool_size = pool_size
        self._random = rng or random.Random()  # noqa: S311 - Not crypto
        self._logger = logger or logging.getLogger("clueboard.source")

    async def _get(self, endpoint: str, **query: int) -> Any:  # noqa: ANN401 - JSON payload
        url = self._api.joinpath(endpoint).with_query(query)

        async with self._http.get(url) as resp:
            if resp.status != HTTPStatus.OK:
                message = await resp.text()
                self._logger.error(
                    "Error fetching %s: %s",
                    url,
                    message,
                    extra={"status_code": resp.status},
                )
                raise _BadResponse(f"{endpoint} returned HTTP {resp.status}")

            return await resp.json(content_type=None)

    async def list_category_ids(self, count: int) -> list[int]:
        try:
            data = await self._get("categories", count=self._pool_size)
            ids = list({int(category["id"]): None for category in data})
        except (aiohttp.ClientError, TimeoutError, _BadResponse) as ex:
            raise SourceUnavailable("Unable to fetch category list") from ex  # noqa: TRY003
        except (TypeError, KeyError, ValueError) as ex:
            raise SourceUnavailable("Malformed category list") from ex  # noqa: TRY003

        if len(ids) < count:
            raise SourceUnavailable(  # noqa: TRY003
                f"Wanted {count} categories, service offered {len(ids)}",
            )

        return self._random.sample(ids, count)

    async def fetch_category(self, category_id: int) -> Category:
        try:
            data = await self._get("category", id=category_id)
            title = str(data["title"])
            pool = [(str(clue["question"]), str(clue["answer"])) for clue in data["clues"]]
        except (aiohttp.ClientError, TimeoutError, _BadResponse) as ex:
            self._logger.warning("Failed to fetch category %s", category_id, exc_info=ex)
            return Category.fallback()
        except (TypeError, KeyError, ValueError) as ex:
            self._logger.warning("Malformed category %s", category_id, exc_info=ex)
            return Category.fallback()

        if len(pool) < CLUES_PER_CATEGORY:
            self._logger.warning(
                "Category %s (%s) only has %d clues",
                category_id,
                title,
                len(pool),
            )
            return Category.fallback()

        return Category.from_pairs(title, self._random.sample(pool, CLUES_PER_CATEGORY))
