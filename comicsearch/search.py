"""Keyword search over stored comics, backed by an inverted index kept in a JSON file."""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any, Protocol

from comicsearch.models import Comic
from comicsearch.words import normalize_words

logger = logging.getLogger(__name__)

RESULT_LIMIT = 10


class Storage(Protocol):
    def get_all_comics(self) -> list[Comic]: ...
    def get_comic_by_id(self, comic_id: int) -> Comic: ...


def _parse_index(data: Any) -> dict[str, list[int]]:
    """Decode an index document mapping keywords to lists of comic ids."""
    index = json.loads(data)
    if index is None:
        return {}
    if not isinstance(index, dict):
        raise ValueError("index must be a JSON object")
    for keyword, ids in index.items():
        if ids is None:
            continue
        if not isinstance(ids, list) or not all(
            isinstance(comic_id, int) and not isinstance(comic_id, bool) for comic_id in ids
        ):
            raise ValueError(f"index entry {keyword!r} must be a list of integers")
    return {keyword: ids or [] for keyword, ids in index.items()}


def index_search(data: Any, keywords: list[str]) -> dict[int, int]:
    """Count, per comic id, how many of the keywords the index lists it under.

    An index document that cannot be decoded is logged and yields no matches.
    """
    try:
        index = _parse_index(data)
    except (TypeError, ValueError):
        logger.error("error loading index")
        return {}
    scores: Counter[int] = Counter()
    for keyword in keywords:
        for comic_id in index.get(keyword, ()):
            scores[comic_id] += 1
    return dict(scores)


def count_matching_keywords(comic: Comic, keywords: list[str]) -> int:
    """Number of normalized query words found, case-insensitively, among a comic's keywords."""
    comic_keywords = [keyword.casefold() for keyword in comic.keywords.split(",")]
    return sum(
        1
        for keyword in keywords
        for normalized in normalize_words(keyword)
        if normalized.casefold() in comic_keywords
    )


class Search:
    """Finds the comics most relevant to a query."""

    def __init__(self, storage: Any) -> None:
        self._storage = storage

    def find_relevant_comics(self, keywords: list[str]) -> list[Comic]:
        """Scan every comic and return those matching any keyword, best first."""
        scored = [
            (count_matching_keywords(comic, keywords), comic)
            for comic in self._storage.get_all_comics()
        ]
        relevant = [(score, comic) for score, comic in scored if score > 0]
        relevant.sort(key=lambda pair: pair[0], reverse=True)
        return [comic for _, comic in relevant]

    def relevant_comic(self, scores: dict[int, int]) -> list[Comic]:
        """Load the scored comics in order of descending score, skipping those that fail."""
        comics = []
        for comic_id, _ in sorted(scores.items(), key=lambda item: item[1], reverse=True):
            try:
                comics.append(self._storage.get_comic_by_id(comic_id))
            except Exception as exc:
                logger.error("Error getting comic with ID %d: %s", comic_id, exc)
        return comics

    def build_index(self, index_file: str | Path) -> None:
        """Write the keyword-to-ids index of all stored comics to a file."""
        logger.info("Building index...")
        try:
            comics = self._storage.get_all_comics()
        except Exception:
            logger.error("error getting comics from database")
            raise

        index: dict[str, list[int]] = {}
        for comic in comics:
            for keyword in comic.keywords.split(","):
                index.setdefault(keyword, []).append(comic.id)

        try:
            Path(index_file).write_text(
                json.dumps(index, indent=4, sort_keys=True) + "\n", encoding="utf-8"
            )
        except OSError:
            logger.error("error creating index file")
            raise
        logger.info("Index built successfully. File location: %s", index_file)

    def new_index(self, index_file: str | Path) -> bytes:
        """Rebuild the index file and return its contents."""
        try:
            self.build_index(index_file)
        except Exception:
            logger.error("error building index")
            raise
        try:
            return Path(index_file).read_bytes()
        except OSError:
            logger.error("error loading index")
            raise

    def relevant_urls(self, query: str, index_file: str | Path) -> tuple[list[str], list[Comic]]:
        """Search a query through a fresh index; return the top URLs and all matches."""
        keywords = normalize_words(query)
        try:
            index: bytes | None = self.new_index(index_file)
        except Exception:
            index = None
        comics = self.relevant_comic(index_search(index, keywords))
        urls = [comic.url for comic in comics[:RESULT_LIMIT]]
        return urls, comics