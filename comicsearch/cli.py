"""Command line tool: search the comic database or download missing comics."""

from __future__ import annotations

import argparse
import logging

from comicsearch.filesearch import find_relevant_comics, load_index, relevant_comics
from comicsearch.filexkcd import FileXkcdClient
from comicsearch.jsondb import load_database
from comicsearch.models import load_config
from comicsearch.search import index_search
from comicsearch.words import normalize_words

logger = logging.getLogger(__name__)

RESULT_LIMIT = 10


def main(argv: list[str] | None = None) -> int:
    """Search comics for a query, or fetch missing comics when no query is given."""
    parser = argparse.ArgumentParser(description="Search and download comics")
    parser.add_argument("-c", dest="config", default="config.yaml",
                        help="path to configuration file")
    parser.add_argument("-s", dest="search", default="", help="search string")
    parser.add_argument("-i", dest="use_index", action="store_true",
                        help="use index file for searching")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        logger.error("cannot load configuration: %s", exc)
        return 1

    if not args.search:
        try:
            FileXkcdClient(config.source_url).run_workers(config.parallel, config.db_file)
        except ValueError as exc:
            logger.error("cannot load comics: %s", exc)
            return 1
        return 0

    db = load_database(config.db_file)
    keywords = normalize_words(args.search)
    if args.use_index:
        index = load_index(db, config.index_file)
        comics = relevant_comics(index_search(index, keywords), config.db_file)
    else:
        comics = find_relevant_comics(db, keywords)

    print("Most relevant comics:")
    for number, comic in enumerate(comics[:RESULT_LIMIT], start=1):
        print(f"Comic {number}: {comic.url}")
    return 0