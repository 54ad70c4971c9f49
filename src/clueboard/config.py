# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from collections.abc import Mapping

import dataclasses
import math
import os

import yarl

from .builder import DEFAULT_CATEGORIES
from .source import DEFAULT_API, DEFAULT_POOL_SIZE

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _flag(value: str) -> bool:
    if value.lower() in _TRUTHY:
        return True
    if value.lower() in _FALSY:
        return False
    raise ValueError(f"Not a boolean: {value!r}")  # noqa: TRY003


def _positive(name: str, value: str) -> int:
    number = int(value)
    if number < 1:
        raise ValueError(f"{name} must be positive, got {number}")  # noqa: TRY003
    return number


def _timeout(value: str) -> float:
    seconds = float(value)
    if not math.isfinite(seconds) or seconds <= 0:
        raise ValueError(  # noqa: TRY003
            f"CLUEBOARD_TIMEOUT must be a positive number of seconds, got {value!r}",
        )
    return seconds


def parse_port(value: str) -> int:
    number = int(value)
    if not 1 <= number <= 65535:  # noqa: PLR2004
        raise ValueError(f"Port must be between 1 and 65535, got {number}")  # noqa: TRY003
    return number


@dataclasses.dataclass
class Settings:
    api: yarl.URL = DEFAULT_API
    categories: int = DEFAULT_CATEGORIES
    pool_size: int = DEFAULT_POOL_SIZE
    timeout: float = 15
    strict: bool = True
    host: str = "127.0.0.1"
    port: int = 33333

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        settings = cls()

        if api := env.get("CLUEBOARD_API"):
            settings.api = yarl.URL(api if api.endswith("/") else api + "/")
        if categories := env.get("CLUEBOARD_CATEGORIES"):
            settings.categories = _positive("CLUEBOARD_CATEGORIES", categories)
        if pool := env.get("CLUEBOARD_POOL"):
            settings.pool_size = _positive("CLUEBOARD_POOL", pool)
        if timeout := env.get("CLUEBOARD_TIMEOUT"):
            settings.timeout = _timeout(timeout)
        if strict := env.get("CLUEBOARD_STRICT"):
            settings.strict = _flag(strict)
        if host := env.get("CLUEBOARD_HOST"):
            settings.host = host
        if port := env.get("CLUEBOARD_PORT"):
            settings.port = parse_port(port)

        if settings.pool_size < settings.categories:
            raise ValueError(  # noqa: TRY003
                f"Pool of {settings.pool_size} can not fill {settings.categories} categories",
            )

        return settings
