import pytest

from comicsearch.jsondb import (
    StoredComic,
    ensure_database,
    get_comic,
    get_count,
    load_comics,
    load_database,
    save_comic,
)


def test_save_and_load_round_trip(tmp_path):
    db = tmp_path / "db.json"
    first = StoredComic(url="http://img.example.com/1.png", keywords=["apple", "pie"])
    second = StoredComic(url="http://img.example.com/2.png", keywords=[])
    save_comic(db, first, 1)
    save_comic(db, second, 2)
    comics, count = load_comics(db)
    assert comics == {"1": first, "2": second}
    assert count == 2


def test_save_format(tmp_path):
    db = tmp_path / "db.json"
    save_comic(db, StoredComic(url="u", keywords=["a"]), 7)
    expected = (
        '{\n   "7": {\n      "url": "u",\n      "keywords": [\n         "a"\n'
        "      ]\n   }\n}\n"
    )
    assert db.read_text(encoding="utf-8") == expected


def test_count_includes_repeated_entries(tmp_path):
    db = tmp_path / "db.json"
    save_comic(db, StoredComic(url="a"), 1)
    save_comic(db, StoredComic(url="b"), 1)
    comics, count = load_comics(db)
    assert count == 2
    assert comics["1"].url == "b"
    assert get_count(db) == 2


def test_get_comic(tmp_path):
    db = tmp_path / "db.json"
    comic = StoredComic(url="x", keywords=["k"])
    save_comic(db, StoredComic(url="y"), 3)
    save_comic(db, comic, 5)
    assert get_comic(db, 5) == comic


def test_get_comic_missing(tmp_path):
    db = tmp_path / "db.json"
    save_comic(db, StoredComic(url="y"), 3)
    with pytest.raises(LookupError):
        get_comic(db, 4)


def test_get_comic_missing_file(tmp_path):
    with pytest.raises(OSError):
        get_comic(tmp_path / "absent.json", 1)


def test_null_keywords_read_as_empty(tmp_path):
    db = tmp_path / "db.json"
    db.write_text('{"1": {"url": "u", "keywords": null}}\n{"2": null}', encoding="utf-8")
    comics, count = load_comics(db)
    assert comics == {"1": StoredComic(url="u"), "2": StoredComic()}
    assert count == 2


def test_invalid_contents_raise(tmp_path):
    db = tmp_path / "db.json"
    db.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_comics(db)
    db.write_text('{"1": {"url": 5}}', encoding="utf-8")
    with pytest.raises(ValueError):
        load_comics(db)


def test_load_database_and_count_on_missing_file(tmp_path):
    missing = tmp_path / "absent.json"
    assert load_database(missing) == {}
    assert get_count(missing) == 0


def test_ensure_database_creates_empty_file(tmp_path):
    db = tmp_path / "db.json"
    ensure_database(db)
    assert db.read_text(encoding="utf-8") == ""
    assert load_comics(db) == ({}, 0)


def test_ensure_database_keeps_existing(tmp_path):
    db = tmp_path / "db.json"
    comic = StoredComic(url="kept", keywords=["word"])
    save_comic(db, comic, 9)
    ensure_database(db)
    assert load_database(db) == {"9": comic}