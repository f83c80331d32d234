"""English (Porter2) Snowball stemmer."""

from __future__ import annotations

_VOWELS = frozenset("aeiouy")
_DOUBLES = ("bb", "dd", "ff", "gg", "mm", "nn", "pp", "rr", "tt")
_LI_ENDINGS = frozenset("cdeghkmnrt")
_R1_PREFIXES = ("gener", "commun", "arsen")

_EXCEPTIONS = {
    "skis": "ski",
    "skies": "sky",
    "dying": "die",
    "lying": "lie",
    "tying": "tie",
    "idly": "idl",
    "gently": "gentl",
    "ugly": "ugli",
    "early": "earli",
    "only": "onli",
    "singly": "singl",
}
_INVARIANT = frozenset({"sky", "news", "howe", "atlas", "cosmos", "bias", "andes"})
_INVARIANT_AFTER_1A = frozenset(
    {"inning", "outing", "canning", "herring", "earring", "proceed", "exceed", "succeed"}
)


def _by_length(pairs):
    return tuple(sorted(pairs, key=lambda pair: len(pair[0]), reverse=True))


_STEP1B_SUFFIXES = ("eedly", "ingly", "edly", "eed", "ing", "ed")

_STEP2_SUFFIXES = _by_length(
    [
        ("ization", "ize"), ("ational", "ate"), ("fulness", "ful"),
        ("ousness", "ous"), ("iveness", "ive"), ("tional", "tion"),
        ("biliti", "ble"), ("lessli", "less"), ("entli", "ent"),
        ("ation", "ate"), ("alism", "al"), ("aliti", "al"),
        ("ousli", "ous"), ("iviti", "ive"), ("fulli", "ful"),
        ("enci", "ence"), ("anci", "ance"), ("abli", "able"),
        ("izer", "ize"), ("ator", "ate"), ("alli", "al"),
        ("bli", "ble"), ("ogi", "og"), ("li", ""),
    ]
)

_STEP3_SUFFIXES = _by_length(
    [
        ("ational", "ate"), ("tional", "tion"), ("alize", "al"),
        ("icate", "ic"), ("iciti", "ic"), ("ative", ""),
        ("ical", "ic"), ("ness", ""), ("ful", ""),
    ]
)

_STEP4_SUFFIXES = tuple(
    sorted(
        ("ement", "ance", "ence", "able", "ible", "ment", "ant", "ent", "ism",
         "ate", "iti", "ous", "ive", "ize", "ion", "al", "er", "ic"),
        key=len,
        reverse=True,
    )
)


def _region_start(word: str, start: int) -> int:
    """Position after the first non-vowel that follows a vowel, from start."""
    for pos in range(start + 1, len(word)):
        if word[pos] not in _VOWELS and word[pos - 1] in _VOWELS:
            return pos + 1
    return len(word)


def _ends_short_syllable(word: str) -> bool:
    if len(word) == 2:
        return word[0] in _VOWELS and word[1] not in _VOWELS
    if len(word) >= 3:
        before, vowel, last = word[-3:]
        return (
            last not in _VOWELS
            and last not in "wxY"
            and vowel in _VOWELS
            and before not in _VOWELS
        )
    return False


def _has_vowel(text: str) -> bool:
    return any(ch in _VOWELS for ch in text)


class _Stemming:
    """Working state of one word passing through the algorithm's steps."""

    def __init__(self, word: str) -> None:
        chars = list(word)
        for pos, ch in enumerate(chars):
            if ch == "y" and (pos == 0 or chars[pos - 1] in _VOWELS):
                chars[pos] = "Y"
        self.word = "".join(chars)
        prefix = next((p for p in _R1_PREFIXES if self.word.startswith(p)), None)
        self.r1 = len(prefix) if prefix else _region_start(self.word, 0)
        self.r2 = _region_start(self.word, self.r1)

    def _suffix_start(self, suffix: str) -> int:
        return len(self.word) - len(suffix)

    def _replace(self, suffix: str, replacement: str) -> None:
        self.word = self.word[: self._suffix_start(suffix)] + replacement

    def step0(self) -> None:
        for suffix in ("'s'", "'s", "'"):
            if self.word.endswith(suffix):
                self._replace(suffix, "")
                return

    def step1a(self) -> None:
        word = self.word
        if word.endswith("sses"):
            self._replace("sses", "ss")
        elif word.endswith(("ied", "ies")):
            self._replace(word[-3:], "i" if len(word) > 4 else "ie")
        elif word.endswith(("us", "ss")):
            return
        elif word.endswith("s") and _has_vowel(word[:-2]):
            self._replace("s", "")

    def step1b(self) -> None:
        suffix = next((s for s in _STEP1B_SUFFIXES if self.word.endswith(s)), None)
        if suffix is None:
            return
        if suffix in ("eed", "eedly"):
            if self._suffix_start(suffix) >= self.r1:
                self._replace(suffix, "ee")
            return
        stem = self.word[: self._suffix_start(suffix)]
        if not _has_vowel(stem):
            return
        self.word = stem
        if stem.endswith(("at", "bl", "iz")):
            self.word += "e"
        elif stem.endswith(_DOUBLES):
            self.word = stem[:-1]
        elif self.r1 >= len(stem) and _ends_short_syllable(stem):
            self.word += "e"

    def step1c(self) -> None:
        word = self.word
        if len(word) > 2 and word[-1] in "yY" and word[-2] not in _VOWELS:
            self.word = word[:-1] + "i"

    def step2(self) -> None:
        found = next(((s, r) for s, r in _STEP2_SUFFIXES if self.word.endswith(s)), None)
        if found is None:
            return
        suffix, replacement = found
        start = self._suffix_start(suffix)
        if start < self.r1:
            return
        if suffix == "ogi" and (start == 0 or self.word[start - 1] != "l"):
            return
        if suffix == "li" and (start == 0 or self.word[start - 1] not in _LI_ENDINGS):
            return
        self._replace(suffix, replacement)

    def step3(self) -> None:
        found = next(((s, r) for s, r in _STEP3_SUFFIXES if self.word.endswith(s)), None)
        if found is None:
            return
        suffix, replacement = found
        start = self._suffix_start(suffix)
        if start < self.r1:
            return
        if suffix == "ative" and start < self.r2:
            return
        self._replace(suffix, replacement)

    def step4(self) -> None:
        suffix = next((s for s in _STEP4_SUFFIXES if self.word.endswith(s)), None)
        if suffix is None:
            return
        start = self._suffix_start(suffix)
        if start < self.r2:
            return
        if suffix == "ion" and (start == 0 or self.word[start - 1] not in "st"):
            return
        self._replace(suffix, "")

    def step5(self) -> None:
        word = self.word
        last = len(word) - 1
        if word.endswith("e"):
            if last >= self.r2 or (last >= self.r1 and not _ends_short_syllable(word[:-1])):
                self.word = word[:-1]
        elif word.endswith("l"):
            if last >= self.r2 and len(word) >= 2 and word[-2] == "l":
                self.word = word[:-1]

    def result(self) -> str:
        return self.word.replace("Y", "y")


def stem(word: str) -> str:
    """Return the English Snowball stem of a word, lower-cased."""
    word = word.strip().lower()
    for quote in ("\u2019", "\u2018", "\u201b"):
        word = word.replace(quote, "'")
    word = word.lstrip("'")
    if len(word) <= 2:
        return word
    if word in _EXCEPTIONS:
        return _EXCEPTIONS[word]
    if word in _INVARIANT:
        return word

    state = _Stemming(word)
    state.step0()
    state.step1a()
    if state.word in _INVARIANT_AFTER_1A:
        return state.result()
    state.step1b()
    state.step1c()
    state.step2()
    state.step3()
    state.step4()
    state.step5()
    return state.result()