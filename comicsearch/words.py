"""Keyword extraction: splitting, cleaning, stemming and stop-word filtering."""

from __future__ import annotations

import re
import unicodedata
from itertools import groupby

from comicsearch.stemmer import stem

STOPWORDS = frozenset(
    {
        "i", "me", "my", "you", "your", "he", "she", "him", "his", "her",
        "it", "we", "us", "our", "they", "them", "their", "this", "that",
        "these", "those", "am", "is", "are", "was", "were", "be", "been",
        "being", "have", "has", "had", "do", "does", "did", "shall", "will",
        "should", "would", "may", "might", "must", "can", "could", "of",
        "a", "an", "the", "as",
    }
)

_RAW_STOPWORDS = frozenset(
    {
        "a", "alt", "ll", "th", "about", "above", "after", "again", "against",
        "all", "am", "an", "and", "any", "are", "as", "at", "be", "because",
        "been", "before", "being", "below", "between", "both", "but", "by",
        "can", "did", "do", "does", "doing", "don", "down", "during", "each",
        "few", "for", "from", "further", "had", "has", "have", "having", "he",
        "her", "here", "hers", "herself", "him", "himself", "his", "how", "i",
        "if", "in", "into", "is", "it", "its", "itself", "just", "me", "more",
        "most", "my", "myself", "no", "nor", "not", "now", "of", "off", "on",
        "oh", "once", "only", "or", "other", "our", "ours", "ourselves", "out",
        "over", "own", "s", "same", "she", "should", "so", "some", "such", "t",
        "than", "that", "the", "their", "theirs", "them", "themselves", "then",
        "there", "these", "they", "this", "those", "through", "to", "too",
        "under", "until", "up", "very", "was", "we", "were", "what", "when",
        "where", "which", "while", "who", "whom", "why", "will", "with", "you",
        "your", "yours", "yourself", "yourselves", "text", "title",
        "transcript", "actual", "",
    }
)

# Mathematical bold script letters mapped to plain Latin letters.
STYLED_TO_NORMAL = {
    **{chr(0x1D4EA + offset): chr(ord("a") + offset) for offset in range(26)},
    **{chr(0x1D4D0 + offset): chr(ord("A") + offset) for offset in range(26)},
}
_UNSTYLE_TABLE = str.maketrans(STYLED_TO_NORMAL)

_VERB_ENDING = re.compile(r"(|n)'(ll|ve|re|s|d|m|t)\b", re.ASCII)
_NON_LATIN = re.compile(r"[^a-zA-Z]+")


def _is_letter(ch: str) -> bool:
    return unicodedata.category(ch).startswith("L")


def _is_word_char(ch: str) -> bool:
    return unicodedata.category(ch)[0] in "LN"


def is_stop_word(word: str) -> bool:
    """Whether a raw, case-sensitive word is ignored as a keyword."""
    return word in _RAW_STOPWORDS


def clean_word(word: str) -> str:
    """Strip contraction endings and every character that is not a Latin letter."""
    return _NON_LATIN.sub("", _VERB_ENDING.sub("", word))


def unstyle(text: str) -> str:
    """Replace styled script letters with their plain counterparts."""
    return text.translate(_UNSTYLE_TABLE)


def normalize(word: str) -> str:
    """Reduce one word to its lower-case stem."""
    cleaned = "".join(ch for ch in word if _is_letter(ch) or ch == "'")
    return stem(clean_word(cleaned))


def normalize_words(*args: str) -> list[str]:
    """Extract distinct keyword stems, in order of first appearance, from texts."""
    keywords: list[str] = []
    seen: set[str] = set()
    for text in args:
        for is_word, chars in groupby(text, key=_is_word_char):
            if not is_word:
                continue
            word = "".join(chars)
            normalized = unstyle(normalize(word))
            if normalized in seen or normalized in STOPWORDS or is_stop_word(word):
                continue
            seen.add(normalized)
            if len(normalized) > 2:
                keywords.append(normalized)
    return keywords