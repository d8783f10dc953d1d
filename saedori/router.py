"""HTTP routing of the dashboard API."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from flask import Flask

from saedori.handler import Handler

API_PREFIX = "/api/v1"


class Router:
    """A Flask application with the dashboard endpoints registered."""

    def __init__(self, service: Any) -> None:
        self.app = Flask(__name__)
        self.handler = Handler(service.dashboard)

        self.get(f"{API_PREFIX}/keywords", self.handler.get_keywords_list)
        self.get(f"{API_PREFIX}/download", self.handler.get_download_data)
        self.get(f"{API_PREFIX}/interest/detail", self.handler.get_interest_detail)

    def get(self, path: str, view: Callable[[], Any]) -> Router:
        """Serve GET requests for path with view and return the router."""
        self.app.add_url_rule(path, endpoint=f"GET {path}", view_func=view, methods=["GET"])
        return self

    def server_start(self, port: str) -> None:
        """Serve requests on an address such as ":8080" until stopped."""
        from saedori.app import parse_port

        host, number = parse_port(port)
        self.app.run(host=host, port=number)