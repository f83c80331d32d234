"""Domain records and configuration loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


@dataclass
class Comic:
    """A stored comic: its image URL and comma-separated keywords."""

    id: int = 0
    url: str = ""
    keywords: str = ""


@dataclass
class User:
    """A registered user with a hashed password and a role."""

    id: int = 0
    username: str = ""
    password: str = ""
    role: str = ""


@dataclass
class ComicCount:
    """Result of a database update."""

    updated_comics: int = 0
    total_comics: int = 0

    def to_dict(self) -> dict[str, int]:
        """Return the JSON form of the count."""
        return {
            "updated_comics": self.updated_comics,
            "total_comics": self.total_comics,
        }


@dataclass
class Config:
    """Service configuration as read from a YAML file."""

    source_url: str = ""
    db_file: str = ""
    parallel: int = 0
    index_file: str = ""
    port: int = 0
    dsn: str = ""
    token_time: int = 0
    conc_lim: int = 0
    rate_lim: int = 0
    web_port: int = 0
    xkcd_url: str = ""


_YAML_FIELDS: dict[str, tuple[str, type]] = {
    "source_url": ("source_url", str),
    "db_file": ("db_file", str),
    "parallel": ("parallel", int),
    "index_file": ("index_file", str),
    "port": ("port", int),
    "dsn": ("dsn", str),
    "token_max_time": ("token_time", int),
    "concurrency_limit": ("conc_lim", int),
    "rate_limit": ("rate_lim", int),
    "webport": ("web_port", int),
    "xkcd_url": ("xkcd_url", str),
}


def _coerce(key: str, value: Any, kind: type) -> Any:
    if value is None:
        return kind()
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"configuration field {key!r} must be an integer, got {value!r}")
        return int(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        raise ValueError(f"configuration field {key!r} must be a scalar, got {value!r}")
    return str(value)


def load_config(config_path: str | Path) -> Config:
    """Read a YAML configuration file.

    Raises OSError when the file cannot be read and ValueError when its
    contents do not describe a configuration.
    """
    try:
        text = Path(config_path).read_text(encoding="utf-8")
    except OSError:
        logger.error("error reading configuration file %s", config_path)
        raise

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        logger.error("error parsing configuration file %s", config_path)
        raise ValueError(f"invalid configuration: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        logger.error("error parsing configuration file %s", config_path)
        raise ValueError("configuration must be a mapping")

    values = {
        attr: _coerce(key, data[key], kind)
        for key, (attr, kind) in _YAML_FIELDS.items()
        if key in data
    }
    return Config(**values)