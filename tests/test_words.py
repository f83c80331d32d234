import pytest

from comicsearch.words import (
    STYLED_TO_NORMAL,
    clean_word,
    is_stop_word,
    normalize,
    normalize_words,
    unstyle,
)


@pytest.mark.parametrize(
    ("word", "expected"),
    [("running", "run"), ("cleaning", "clean"), ("happily", "happili"), ("", "")],
)
def test_normalize(word, expected):
    assert normalize(word) == expected


@pytest.mark.parametrize(
    ("word", "expected"),
    [("you're", "you"), ("can't", "ca"), ("", "")],
)
def test_clean_word(word, expected):
    assert clean_word(word) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [("𝓪𝓫𝓬", "abc"), ("ma𝓷ana", "manana"), ("", "")],
)
def test_unstyle(text, expected):
    assert unstyle(text) == expected


@pytest.mark.parametrize(
    ("texts", "expected"),
    [
        (["This is a test, and only a test."], ["test"]),
        (["Running, jumping, and playing!"], ["run", "jump", "play"]),
        (["i'll follow you as long as you are following me"], ["follow", "long"]),
        ([""], []),
    ],
)
def test_normalize_words(texts, expected):
    assert normalize_words(*texts) == expected


def test_normalize_words_across_several_texts():
    result = normalize_words("Test Comic", "Test transcript, apple doctor", "Test alt")
    assert result == ["test", "comic", "appl", "doctor"]


def test_normalize_words_without_texts():
    assert normalize_words() == []


def test_normalize_words_has_no_duplicates():
    result = normalize_words("apple apples", "Apple")
    assert result == ["appl"]
    assert len(result) == len(set(result))


def test_normalize_words_drops_short_stems():
    assert all(len(word) > 2 for word in normalize_words("go run ox apple"))


def test_normalize_handles_styled_and_punctuated_input():
    assert normalize("apple's") == normalize("apple")


def test_is_stop_word():
    assert is_stop_word("alt")
    assert is_stop_word("transcript")
    assert is_stop_word("")
    assert not is_stop_word("apple")


def test_is_stop_word_is_case_sensitive():
    assert is_stop_word("the")
    assert not is_stop_word("The")


def test_unstyle_capitals_and_mapping_size():
    assert unstyle("𝓐𝓩") == "AZ"
    assert len(STYLED_TO_NORMAL) == 52
    assert sorted(STYLED_TO_NORMAL.values()) == sorted("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")


def test_unstyle_leaves_other_characters():
    assert unstyle("plain text 123") == "plain text 123"