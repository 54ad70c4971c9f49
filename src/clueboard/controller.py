# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from typing import TYPE_CHECKING, Protocol

import enum
import logging

from .errors import GameNotReady, InvalidCoordinate, SetupFailed
from .model import Coordinate, JSONDict
from .reveal import reveal

if TYPE_CHECKING:
    from .builder import BoardBuilder
    from .model import Board


class GameState(enum.StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


class GameListener(Protocol):
    async def state_changed(self, state: GameState) -> None:
        pass

    async def board_ready(self, board: Board) -> None:
        pass

    async def setup_failed(self, error: SetupFailed) -> None:
        pass

    async def clue_revealed(self, coordinate: Coordinate, text: str) -> None:
        pass


class GameController:
    """
    Owns the board for one game, and routes clicks on the board to the clues.

    A game is Idle until started, Loading while the board is built,
    and Ready once a board is available. A failed build returns to Idle
    and leaves whatever board was there before in place.
    """

    builder: BoardBuilder
    strict: bool
    logger: logging.Logger

    _state: GameState
    _board: Board | None
    _last_error: SetupFailed | None
    _listeners: list[GameListener]

    def __init__(
        self,
        builder: BoardBuilder,
        *,
        strict: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self.builder = builder
        self.strict = strict
        self.logger = logger or logging.getLogger("clueboard.controller")

        self._state = GameState.IDLE
        self._board = None
        self._last_error = None
        self._listeners = []

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def board(self) -> Board | None:
        return self._board

    @property
    def last_error(self) -> SetupFailed | None:
        return self._last_error

    def add_listener(self, listener: GameListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: GameListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def _notify(self, event: str, *args: object) -> None:
        for listener in list(self._listeners):
            try:
                await getattr(listener, event)(*args)
            except Exception as ex:  # noqa: BLE001 - Being passed to logger
                self.logger.error("Listener %r failed handling %s", listener, event, exc_info=ex)

    async def _set_state(self, state: GameState) -> None:
        self._state = state
        await self._notify("state_changed", state)

    async def start(self) -> Board | None:
        if self._state == GameState.LOADING:
            self.logger.warning("Ignoring start request, a board is already loading")
            return None

        await self._set_state(GameState.LOADING)
        self.logger.info("Building new board")

        try:
            board = await self.builder.build()
        except SetupFailed as ex:
            self.logger.error("Board setup failed", exc_info=ex)
            self._last_error = ex
            self._state = GameState.IDLE
            await self._notify("setup_failed", ex)
            await self._notify("state_changed", self._state)
            return None
        except BaseException:
            self.logger.exception("Unexpected error building board")
            await self._set_state(
                GameState.READY if self._board is not None else GameState.IDLE,
            )
            raise

        self._board = board
        self._last_error = None
        self.logger.info("Board ready: %r", board)

        await self._set_state(GameState.READY)
        await self._notify("board_ready", board)
        return board

    async def restart(self) -> Board | None:
        return await self.start()

    async def handle_interaction(self, coordinate: Coordinate) -> str | None:
        if self._state != GameState.READY or self._board is None:
            raise GameNotReady(f"Game is {self._state}")  # noqa: TRY003

        coordinate = Coordinate(*coordinate)
        clue = self._board.clue(coordinate)

        if clue is None:
            if self.strict:
                raise InvalidCoordinate(coordinate)

            self.logger.debug("Ignoring interaction with %s", coordinate)
            return None

        text = reveal(clue)

        if text is not None:
            await self._notify("clue_revealed", coordinate, text)

        return text

    def json(self) -> JSONDict:
        return {
            "state": self._state,
            "board": self._board.json() if self._board is not None else None,
            "error": str(self._last_error) if self._last_error else None,
        }
