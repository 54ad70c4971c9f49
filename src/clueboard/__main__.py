# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

import argparse
import logging

import yarl
from aiohttp import web
from dotenv import load_dotenv

from clueboard.config import Settings, parse_port
from clueboard.logger import configure
from clueboard.server import create_app


def main() -> None:
    load_dotenv()
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(prog="clueboard")
    parser.add_argument("--api", default=str(settings.api))
    parser.add_argument("--categories", type=int, default=settings.categories)
    parser.add_argument("--local", action="store_true", default=False)
    parser.add_argument("--lenient", action="store_true", default=not settings.strict)
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=parse_port, default=settings.port)
    args = parser.parse_args()

    if args.categories < 1:
        parser.error("--categories must be positive")
    if args.categories > settings.pool_size:
        parser.error(f"--categories can not exceed the pool of {settings.pool_size}")

    settings.api = yarl.URL(args.api if args.api.endswith("/") else args.api + "/")
    settings.categories = args.categories
    settings.strict = not args.lenient
    settings.host = args.host
    settings.port = args.port

    configure(logging.DEBUG if args.local else logging.INFO, indent=2 if args.local else None)

    web.run_app(create_app(settings), host=settings.host, port=settings.port, access_log=None)


if __name__ == "__main__":
    main()
