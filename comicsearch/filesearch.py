"""Keyword search over the file-based comic database."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path

from comicsearch.jsondb import StoredComic, get_comic
from comicsearch.words import normalize_words

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _comic_number(key: str) -> int:
    return int(key) if _INTEGER.fullmatch(key) else 0


def relevant_comics(scores: Mapping[int, int], db_file: str | Path) -> list[StoredComic]:
    """Load the scored comics in order of descending score.

    If any comic cannot be loaded the error is logged and nothing is returned.
    """
    comics = []
    for num, _ in sorted(scores.items(), key=lambda item: item[1], reverse=True):
        try:
            comics.append(get_comic(db_file, num))
        except (LookupError, OSError, ValueError) as exc:
            logger.error("error during getting comic: %s", exc)
            return []
    return comics


def build_index(db: Mapping[str, StoredComic], index_file: str | Path) -> None:
    """Write the keyword-to-numbers index of a database to a file."""
    index: dict[str, list[int]] = {}
    for key, comic in db.items():
        num = _comic_number(key)
        for keyword in comic.keywords:
            index.setdefault(keyword, []).append(num)
    Path(index_file).write_text(
        json.dumps(index, indent=4, sort_keys=True, ensure_ascii=False) + "\n", encoding="utf-8"
    )
    logger.info("Index built.")


def load_index(db: Mapping[str, StoredComic], index_file: str | Path) -> bytes:
    """Rebuild the index file from a database and return its contents.

    Failures are logged; an unreadable index yields empty bytes.
    """
    try:
        build_index(db, index_file)
    except OSError as exc:
        logger.error("error building index: %s", exc)
    try:
        return Path(index_file).read_bytes()
    except OSError as exc:
        logger.error("error loading index: %s", exc)
        return b""


def count_matching_keywords(comic: StoredComic, keywords: list[str]) -> int:
    """Number of normalized query words found, case-insensitively, among a comic's keywords."""
    comic_keywords = [keyword.casefold() for keyword in comic.keywords]
    return sum(
        1
        for keyword in keywords
        for normalized in normalize_words(keyword)
        if normalized.casefold() in comic_keywords
    )


def _relevance(comic: StoredComic, keywords: list[str]) -> int:
    """Number of the comic's keywords that match any normalized query word."""
    normalized = [
        word.casefold() for keyword in keywords for word in normalize_words(keyword)
    ]
    return sum(
        1
        for comic_keyword in comic.keywords
        for _ in keywords
        if comic_keyword.casefold() in normalized
    )


def find_relevant_comics(
    db: Mapping[str, StoredComic], keywords: list[str]
) -> list[StoredComic]:
    """Scan the database and return comics matching any keyword, best first."""
    relevant = [comic for comic in db.values() if _relevance(comic, keywords) > 0]
    relevant.sort(key=lambda comic: count_matching_keywords(comic, keywords), reverse=True)
    return relevant