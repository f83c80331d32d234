"""Keyword search over xkcd comics: fetching, stemmed keyword extraction, indexing and search."""

__version__ = "0.1.0"