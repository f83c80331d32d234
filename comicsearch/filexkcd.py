"""Client that downloads comics into the file-based comic database."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from comicsearch.jsondb import StoredComic, ensure_database, load_database, save_comic
from comicsearch.xkcd import XkcdClient

logger = logging.getLogger(__name__)

# The source deliberately has no comic with this number.
_ABSENT_COMIC = 404


class FileXkcdClient:
    """Fetches comics from a source URL and appends the new ones to a database file."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url
        self._source = XkcdClient(base_url, None)

    def retrieve_comic(self, num: int) -> StoredComic:
        """Download one comic and extract its keywords.

        Raises ComicNotFoundError on a 404, ValueError on a malformed body,
        and requests.RequestException when the request fails.
        """
        self._source.base_url = self.base_url
        comic = self._source.retrieve_comic(num)
        keywords = comic.keywords.split(",") if comic.keywords else []
        return StoredComic(url=comic.url, keywords=keywords)

    def retrieve_latest_comic_num(self) -> int:
        """Return the number of the newest comic at the source."""
        self._source.base_url = self.base_url
        return self._source.retrieve_latest_comic_num()

    def _fetch(self, num: int) -> StoredComic | None:
        try:
            return self.retrieve_comic(num)
        except Exception as exc:
            logger.debug("skipping comic %d: %s", num, exc)
            return None

    def run_workers(self, workers: int, db_file: str | Path) -> None:
        """Download every comic missing from the database with parallel workers."""
        if workers <= 0:
            raise ValueError("workers must be positive")
        try:
            latest = self.retrieve_latest_comic_num()
        except Exception as exc:
            logger.error("error retrieving latest comic number: %s", exc)
            latest = 0

        logger.info("Loading comics..")
        ensure_database(db_file)
        stored = load_database(db_file)
        missing = [
            num
            for num in range(1, latest + 1)
            if num != _ABSENT_COMIC and str(num) not in stored
        ]
        with ThreadPoolExecutor(max_workers=workers) as pool:
            for num, comic in zip(missing, pool.map(self._fetch, missing)):
                if comic is None:
                    continue
                try:
                    save_comic(db_file, comic, num)
                except OSError as exc:
                    logger.error("error saving comic %d: %s", num, exc)
        logger.info("Finish loading.")