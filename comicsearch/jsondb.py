"""Comic database kept as a stream of JSON objects appended to a file."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_INDENT = 3
_WHITESPACE = " \t\n\r"


@dataclass
class StoredComic:
    """A comic as kept in the JSON database: image URL and keyword list."""

    url: str = ""
    keywords: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of the comic."""
        return {"url": self.url, "keywords": list(self.keywords)}


def _comic_from_json(value: Any) -> StoredComic:
    if value is None:
        return StoredComic()
    if not isinstance(value, dict):
        raise ValueError("comic entry must be a JSON object")
    url = value.get("url")
    if url is None:
        url = ""
    elif not isinstance(url, str):
        raise ValueError("comic url must be a string")
    keywords = value.get("keywords")
    if keywords is None:
        keywords = []
    elif not isinstance(keywords, list) or not all(isinstance(word, str) for word in keywords):
        raise ValueError("comic keywords must be a list of strings")
    return StoredComic(url=url, keywords=list(keywords))


def _documents(text: str) -> Iterator[Any]:
    """Yield each JSON value of a whitespace-separated stream."""
    decoder = json.JSONDecoder()
    pos, end = 0, len(text)
    while True:
        while pos < end and text[pos] in _WHITESPACE:
            pos += 1
        if pos >= end:
            return
        value, pos = decoder.raw_decode(text, pos)
        yield value


def load_comics(db_file: str | Path) -> tuple[dict[str, StoredComic], int]:
    """Read every stored comic and the number of entries read.

    Raises OSError when the file cannot be read and ValueError when its
    contents are not a stream of comic objects.
    """
    text = Path(db_file).read_text(encoding="utf-8")
    comics: dict[str, StoredComic] = {}
    count = 0
    for document in _documents(text):
        if document is None:
            continue
        if not isinstance(document, dict):
            raise ValueError("database entry must be a JSON object")
        for key, value in document.items():
            comics[key] = _comic_from_json(value)
            count += 1
    return comics, count


def save_comic(db_file: str | Path, comic: StoredComic, num: int) -> None:
    """Append a comic under its number, creating the file if needed."""
    text = json.dumps({str(num): comic.to_dict()}, indent=_INDENT, ensure_ascii=False)
    with open(db_file, "a", encoding="utf-8") as file:
        file.write(text + "\n")


def get_comic(db_file: str | Path, num: int) -> StoredComic:
    """Return the first stored comic with a number; raise LookupError if absent."""
    text = Path(db_file).read_text(encoding="utf-8")
    key = str(num)
    for document in _documents(text):
        if document is None:
            continue
        if not isinstance(document, dict):
            raise ValueError("database entry must be a JSON object")
        if key in document:
            return _comic_from_json(document[key])
    raise LookupError(f"comic with ID {num} not found")


def load_database(path: str | Path) -> dict[str, StoredComic]:
    """Return all stored comics, or an empty mapping when the file cannot be loaded."""
    try:
        comics, _ = load_comics(path)
    except (OSError, ValueError) as exc:
        logger.error("error loading comics from database file: %s", exc)
        return {}
    return comics


def get_count(path: str | Path) -> int:
    """Return the number of stored entries, or 0 when the file cannot be loaded."""
    try:
        _, count = load_comics(path)
    except (OSError, ValueError) as exc:
        logger.error("error loading comics from database file: %s", exc)
        return 0
    return count


def ensure_database(db_file: str | Path) -> None:
    """Create an empty database file if none exists."""
    path = Path(db_file)
    if path.exists():
        return
    try:
        path.touch()
    except OSError as exc:
        logger.error("error creating the database: %s", exc)