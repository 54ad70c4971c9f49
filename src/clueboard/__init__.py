# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from .builder import BoardBuilder
from .controller import GameController, GameListener, GameState
from .errors import (
    ClueBoardError,
    GameNotReady,
    InvalidCoordinate,
    SetupFailed,
    SourceUnavailable,
)
from .model import DOLLAR_AMOUNTS, Board, Category, Clue, Coordinate, RevealState
from .reveal import reveal, transition
from .source import ClueSource, JServiceClueSource

__all__ = [
    "DOLLAR_AMOUNTS",
    "Board",
    "BoardBuilder",
    "Category",
    "Clue",
    "ClueBoardError",
    "ClueSource",
    "Coordinate",
    "GameController",
    "GameListener",
    "GameNotReady",
    "GameState",
    "InvalidCoordinate",
    "JServiceClueSource",
    "RevealState",
    "SetupFailed",
    "SourceUnavailable",
    "reveal",
    "transition",
]
