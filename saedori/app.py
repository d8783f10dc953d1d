"""Application assembly and the command that starts the server."""

from __future__ import annotations

import argparse
import logging
import re
from typing import Any

from pymongo import MongoClient

from saedori.config import Config, load_config
from saedori.crawling import CrawlingScheduler
from saedori.keywords import KeywordScheduler
from saedori.repository import Repository
from saedori.router import Router
from saedori.service import Service

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_MONGODB_URI = "mongodb://localhost:27017"
_PORT_NUMBER = re.compile(r"[0-9]+")


def parse_port(port: str) -> tuple[str, int]:
    """Split a listen address of the form "[host]:port" into host and port.

    An empty host means every interface; an empty address means ":8080".
    """
    if not port:
        return DEFAULT_HOST, DEFAULT_PORT
    host, separator, number = port.rpartition(":")
    if not separator:
        raise ValueError(f"missing port in address: {port!r}")
    if not _PORT_NUMBER.fullmatch(number) or int(number) > 65535:
        raise ValueError(f"invalid port in address: {port!r}")
    host = host.removeprefix("[").removesuffix("]")
    return host or DEFAULT_HOST, int(number)


class Application:
    """The repositories, services, schedulers and router of the server."""

    def __init__(self, config: Config, client: Any) -> None:
        self.config = config
        self.repository = Repository(client)
        self.crawling_scheduler = CrawlingScheduler(self.repository.dashboard, config)
        self.service = Service(self.repository)
        self.keyword_scheduler = KeywordScheduler(
            self.service.dashboard, self.repository.dashboard.keyword_repository
        )
        self.router = Router(self.service)

    def start(self) -> None:
        """Start both schedulers, then serve requests until stopped."""
        self.crawling_scheduler.start()
        self.keyword_scheduler.start()
        self.router.server_start(self.config.server.port)


def main(argv: list[str] | None = None) -> int:
    """Load the configuration, connect to the database and run the server."""
    parser = argparse.ArgumentParser(prog="saedori", description="Run the dashboard API server.")
    parser.add_argument(
        "--mongodb-uri",
        default=DEFAULT_MONGODB_URI,
        help="connection string of the database (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = load_config()
    client = MongoClient(args.mongodb_uri)
    Application(config, client).start()
    return 0