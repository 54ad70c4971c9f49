# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, ParamSpec

import asyncio
import json
import logging
import uuid

import aiohttp
from aiohttp import http_websocket, web

from .builder import BoardBuilder
from .controller import GameController, GameState
from .errors import ClueBoardError, InvalidCoordinate
from .model import Coordinate
from .source import ClueSource, JServiceClueSource

if TYPE_CHECKING:
    from .config import Settings
    from .errors import SetupFailed
    from .model import Board, JSONDict


P = ParamSpec("P")


def command(
    func: Callable[P, Awaitable[JSONDict | None]],
) -> Callable[P, Awaitable[JSONDict | None]]:
    func.__is_rpc__ = True  # type: ignore[attr-defined]
    return func


class Socket(web.WebSocketResponse):
    remote: str
    socket_id: str

    def __init__(self, request: web.Request) -> None:
        super().__init__(heartbeat=10)

        self.remote = (
            request.headers.get("x-forwarded-for") or request.remote or "[unknown endpoint]"
        )
        self.socket_id = str(uuid.uuid4())

    def __repr__(self) -> str:
        return f"Socket<remote={self.remote},socket_id={self.socket_id[0:8]}>"

    def __str__(self) -> str:
        return f"{self.remote}/{self.socket_id[0:4]}"


class BoardServlet:
    """
    Websocket front end for a single game board.

    Clients send {"cmd": "start"} or {"cmd": "interact", "category": 2, "clue": 3},
    and every connected client receives the board, reveals, and state changes.
    """

    controller: GameController
    logger: logging.Logger
    _sockets: set[Socket]
    _tasks: set[asyncio.Task[Any]]

    def __init__(self, controller: GameController, logger: logging.Logger | None = None) -> None:
        self.controller = controller
        self.logger = logger or logging.getLogger("clueboard.server")
        self._sockets = set()
        self._tasks = set()

        controller.add_listener(self)

    def add_routes(self, app: web.Application) -> None:
        app.router.add_route("GET", "/", self.status)
        app.router.add_route("GET", "/board", self.board)
        app.router.add_route("GET", "/ws", self.socket)

    async def status(self, _: web.Request) -> web.Response:
        return web.json_response({"state": self.controller.state, "clients": len(self._sockets)})

    async def board(self, _: web.Request) -> web.Response:
        if self.controller.board is None:
            raise web.HTTPNotFound(text="No board has been built")

        return web.json_response(self.controller.board.json())

    async def socket(self, request: web.Request) -> web.StreamResponse:
        socket = Socket(request)
        self.logger.info("Accepting new connection from %s", socket)
        await socket.prepare(request)

        self._sockets.add(socket)
        await socket.send_json({"cmd": "state", **self.controller.json()})

        # The first visitor gets a board without having to ask for one.
        if self.controller.state == GameState.IDLE and self.controller.board is None:
            self._add_task(asyncio.create_task(self.controller.start(), name="initial-board"))

        try:
            await self._process_messages(socket)
        finally:
            self._sockets.discard(socket)
            self.logger.info("Disconnecting %s", socket)

        return socket

    def _add_task(self, task: asyncio.Task[Any]) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)

        if not task.cancelled() and (ex := task.exception()):
            self.logger.error("Background task %s failed", task.get_name(), exc_info=ex)

    async def _process_messages(self, socket: Socket) -> None:
        message: http_websocket.WSMessage
        async for message in socket:
            if message.type != aiohttp.WSMsgType.TEXT:
                self.logger.warning(
                    "Connection from %s closing with exception %s",
                    socket,
                    socket.exception(),
                )
                return

            await self._parse_message(socket, message)

    async def _parse_message(self, socket: Socket, message: http_websocket.WSMessage) -> None:
        try:
            data = message.json()
        except json.JSONDecodeError as ex:
            self.logger.warning("Invalid JSON from %s", socket, exc_info=ex)
            return await socket.send_json({"cmd": "error", "message": "Invalid JSON"})

        if not isinstance(data, dict):
            return await socket.send_json({"cmd": "error", "message": "Expected an object"})

        cmd_name = data.pop("cmd", "[NO COMMAND SPECIFIED]")
        cmd = getattr(self, str(cmd_name), None)

        if not cmd or not hasattr(cmd, "__is_rpc__"):
            self.logger.error("Invalid command %s from %s", cmd_name, socket)
            return await socket.send_json(
                {"cmd": "error", "message": f"Invalid command {cmd_name}"},
            )

        try:
            self.logger.info("Running command %s for %s", cmd_name, socket)
            if resp := await cmd(**data):
                await socket.send_json(resp)
        except (ClueBoardError, TypeError, ValueError) as ex:
            self.logger.exception("Error processing command %s", cmd_name)
            await socket.send_json({"cmd": "error", "message": str(ex)})

        return None

    @command
    async def start(self) -> JSONDict | None:
        if self.controller.state == GameState.LOADING:
            return {"cmd": "error", "message": "A board is already loading"}

        await self.controller.start()
        return None

    @command
    async def restart(self) -> JSONDict | None:
        return await self.start()

    @command
    async def interact(self, category: int, clue: int) -> JSONDict | None:
        coordinate = Coordinate(category, clue)

        # JSON numbers arrive as int or float; only exact integers address a clue.
        if not all(isinstance(i, int) and not isinstance(i, bool) for i in coordinate):
            raise InvalidCoordinate(coordinate)

        await self.controller.handle_interaction(coordinate)
        return None

    async def _fanout(self, data: JSONDict) -> None:
        results = await asyncio.gather(
            *(socket.send_json(data) for socket in self._sockets),
            return_exceptions=True,
        )

        for result in results:
            if isinstance(result, Exception):
                self.logger.error("Error in fanout", exc_info=result)

    async def state_changed(self, state: GameState) -> None:
        await self._fanout({"cmd": "state", "state": state})

    async def board_ready(self, board: Board) -> None:
        await self._fanout({"cmd": "board", "board": board.json()})

    async def setup_failed(self, error: SetupFailed) -> None:
        await self._fanout({"cmd": "error", "message": f"Unable to set up board: {error}"})

    async def clue_revealed(self, coordinate: Coordinate, text: str) -> None:
        await self._fanout({"cmd": "reveal", **coordinate.json(), "text": text})

    async def shutdown(self, _: web.Application) -> None:
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)

        for socket in self._sockets.copy():
            self.logger.info("Closing %s due to shutdown", socket)
            await socket.close()


async def create_app(settings: Settings, source: ClueSource | None = None) -> web.Application:
    app = web.Application()

    if source is None:
        http = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=settings.timeout))
        source = JServiceClueSource(http, settings.api, pool_size=settings.pool_size)

        async def close_http(_: web.Application) -> None:
            await http.close()

        app.on_cleanup.append(close_http)

    controller = GameController(BoardBuilder(source, settings.categories), strict=settings.strict)
    servlet = BoardServlet(controller)
    servlet.add_routes(app)
    app.on_shutdown.append(servlet.shutdown)

    return app
