# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .model import Coordinate


class ClueBoardError(Exception):
    pass


class SourceUnavailable(ClueBoardError):  # noqa: N818
    """
    The question service could not supply a usable list of categories.
    """


class SetupFailed(ClueBoardError):  # noqa: N818
    pass


class GameNotReady(ClueBoardError):  # noqa: N818
    pass


class InvalidCoordinate(ClueBoardError, LookupError):  # noqa: N818
    coordinate: Coordinate

    def __init__(self, coordinate: Coordinate) -> None:
        super().__init__(f"No clue at {tuple(coordinate)}")
        self.coordinate = coordinate
