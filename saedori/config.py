"""Server configuration loaded from a per-environment TOML file."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class ServerConfig:
    """Settings of the HTTP server and the crawler it calls."""

    port: str = ""
    crawl_api_base_url: str = ""


@dataclass
class Config:
    """Top-level configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)


def _string_setting(table: dict, key: str) -> str:
    value = table.get(key, "")
    if not isinstance(value, str):
        raise ValueError(f"server.{key} must be a string")
    return value


def load_config(env: str | None = None) -> Config:
    """Read config.<env>.toml from the working directory.

    The environment defaults to APP_ENV, then to "dev". Missing or malformed
    files raise.
    """
    if not env:
        env = os.environ.get("APP_ENV") or "dev"
    path = Path(f"config.{env}.toml")
    with path.open("rb") as handle:
        data = tomllib.load(handle)

    server = data.get("server", {})
    if not isinstance(server, dict):
        raise ValueError("server must be a table")
    return Config(
        server=ServerConfig(
            port=_string_setting(server, "port"),
            crawl_api_base_url=_string_setting(server, "crawl_api_base_url"),
        )
    )