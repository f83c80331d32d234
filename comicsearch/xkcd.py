"""Client that downloads comic metadata and stores the comics that are missing."""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Protocol

import requests

from comicsearch.models import Comic
from comicsearch.words import normalize_words

logger = logging.getLogger(__name__)

_TIMEOUT = 30
_TEXT_FIELDS = ("img", "alt", "transcript", "title")


class Storage(Protocol):
    def get_comic_by_id(self, comic_id: int) -> Comic: ...
    def save_comic(self, comic: Comic) -> None: ...


class ComicNotFoundError(LookupError):
    """Raised when the source has no comic with the requested number."""


def _decode_info(content: bytes) -> dict[str, str]:
    payload = json.loads(content)
    if not isinstance(payload, dict):
        raise ValueError("comic info must be a JSON object")
    info = {}
    for field in _TEXT_FIELDS:
        value = payload.get(field)
        if value is None:
            value = ""
        elif not isinstance(value, str):
            raise ValueError(f"comic info field {field!r} must be a string")
        info[field] = value
    return info


class XkcdClient:
    """Fetches comics from a source URL and saves the new ones to storage."""

    def __init__(self, base_url: str, storage: Any) -> None:
        self.base_url = base_url
        self._storage = storage

    def retrieve_comic(self, num: int) -> Comic:
        """Download one comic and extract its keywords.

        Raises ComicNotFoundError on a 404, ValueError on a malformed body,
        and requests.RequestException when the request fails.
        """
        response = requests.get(f"{self.base_url}/{num}/info.0.json", timeout=_TIMEOUT)
        with response:
            if response.status_code == 404:
                raise ComicNotFoundError(f"comic {num} not found")
            info = _decode_info(response.content)
        keywords = normalize_words(info["title"], info["transcript"], info["alt"])
        return Comic(url=info["img"], keywords=",".join(keywords))

    def retrieve_latest_comic_num(self) -> int:
        """Return the number of the newest comic at the source."""
        response = requests.get(f"{self.base_url}/info.0.json", timeout=_TIMEOUT)
        with response:
            payload = json.loads(response.content)
        if not isinstance(payload, dict):
            raise ValueError("latest comic info must be a JSON object")
        num = payload.get("num")
        if num is None:
            return 0
        if isinstance(num, bool) or not isinstance(num, int):
            raise ValueError("latest comic number must be an integer")
        return num

    def _missing_comics(self, latest: int):
        for num in range(1, latest + 1):
            try:
                self._storage.get_comic_by_id(num)
                continue
            except Exception:
                pass
            try:
                yield self.retrieve_comic(num)
            except Exception as exc:
                logger.debug("skipping comic %d: %s", num, exc)

    def _save(self, comic: Comic) -> None:
        try:
            self._storage.save_comic(comic)
        except Exception as exc:
            logger.debug("error saving comic %s: %s", comic.url, exc)

    def run_workers(self, workers: int) -> None:
        """Download every comic not yet stored and save them with parallel workers."""
        if workers <= 0:
            raise ValueError("workers must be positive")
        try:
            latest = self.retrieve_latest_comic_num()
        except Exception as exc:
            logger.error("error retrieving latest comic number: %s", exc)
            latest = 0

        logger.info("Loading comics..")
        with ThreadPoolExecutor(max_workers=workers) as pool:
            for comic in self._missing_comics(latest):
                pool.submit(self._save, comic)
        logger.info("Finished loading.")