# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from types import TracebackType
from typing import Any

import logging
import traceback

from pythonjsonlogger.jsonlogger import JsonFormatter as _JsonFormatter

_SysExcInfoType = (
    tuple[type[BaseException], BaseException, TracebackType | None] | tuple[None, None, None]
)


def _json_default(obj: Any) -> Any:  # noqa: ANN401
    if hasattr(obj, "json"):
        return obj.json()
    return repr(obj)


class JsonFormatter(_JsonFormatter):
    """
    Log formatter for the board server.

    Objects passed in `extra` that know how to snapshot themselves
    (coordinates, boards, categories) are logged as their json() form.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:  # noqa: ANN401
        kwargs.setdefault("json_default", _json_default)
        super().__init__(*args, **kwargs)

    def formatException(self, ei: _SysExcInfoType) -> list[dict[str, Any]] | None:  # type: ignore[override]
        _, exc_value, _ = ei
        if exc_value is None:
            return None

        # Outermost error first, then each explicit cause.
        chain: list[dict[str, Any]] = []
        error: BaseException | None = exc_value
        while error is not None:
            chain.append(
                {
                    "type": type(error).__name__,
                    "message": str(error),
                    "at": [
                        f"{frame.filename}:{frame.lineno} in {frame.name}"
                        for frame in reversed(traceback.extract_tb(error.__traceback__))
                    ],
                },
            )
            error = error.__cause__

        return chain


def configure(level: int = logging.INFO, *, indent: int | None = None) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(json_indent=indent))  # type: ignore[no-untyped-call]
    handler.setLevel(level)

    logger = logging.getLogger("clueboard")
    logger.addHandler(handler)
    logger.setLevel(level)

    return handler
