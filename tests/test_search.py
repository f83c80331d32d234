import json
from unittest.mock import Mock

import pytest

from comicsearch.models import Comic
from comicsearch.search import Search, count_matching_keywords, index_search
from comicsearch.storage import NotFoundError


class FiveComics:
    comics = [
        Comic(id=1, keywords="apple,pie"),
        Comic(id=2, keywords="pie"),
        Comic(id=3, keywords="apple"),
        Comic(id=4, keywords="root"),
        Comic(id=5, keywords="pie"),
    ]

    def get_all_comics(self):
        return list(self.comics)

    def get_comic_by_id(self, comic_id):
        for comic in self.comics:
            if comic.id == comic_id:
                return comic
        raise NotFoundError(f"comic with ID {comic_id} not found")


def test_index_search_single_keyword():
    data = b'{"keyword1":[1,2,3],"keyword2":[2,3,4]}'
    assert index_search(data, ["keyword1"]) == {1: 1, 2: 1, 3: 1}


def test_index_search_counts_each_keyword():
    data = b'{"keyword1":[1,2,3],"keyword2":[2,3,4]}'
    assert index_search(data, ["keyword1", "keyword2", "missing"]) == {1: 1, 2: 2, 3: 2, 4: 1}


@pytest.mark.parametrize("data", [None, b"", b"not json", b"[1, 2]", b'{"a": "b"}'])
def test_index_search_invalid_index_yields_nothing(data):
    assert index_search(data, ["a"]) == {}


def test_build_index_empty_storage(tmp_path):
    storage = Mock()
    storage.get_all_comics.return_value = []
    target = tmp_path / "test_index.json"
    Search(storage).build_index(target)
    assert json.loads(target.read_text()) == {}


def test_build_index_propagates_storage_error(tmp_path):
    storage = Mock()
    storage.get_all_comics.side_effect = RuntimeError("down")
    with pytest.raises(RuntimeError):
        Search(storage).build_index(tmp_path / "index.json")


def test_new_index_rebuilds_file(tmp_path):
    target = tmp_path / "index"
    target.write_text('{"stale": [9]}')
    data = Search(FiveComics()).new_index(target)
    assert json.loads(data) == {"apple": [1, 3], "pie": [1, 2, 5], "root": [4]}
    assert target.read_bytes() == data


def test_relevant_comic_orders_by_score():
    scores = {3: 3, 1: 10, 2: 5}
    comics = Search(FiveComics()).relevant_comic(scores)
    assert comics == [
        Comic(id=1, keywords="apple,pie"),
        Comic(id=2, keywords="pie"),
        Comic(id=3, keywords="apple"),
    ]


def test_relevant_comic_skips_missing():
    comics = Search(FiveComics()).relevant_comic({42: 5, 4: 1})
    assert comics == [Comic(id=4, keywords="root")]


def test_relevant_urls(tmp_path):
    storage = Mock()
    storage.get_all_comics.return_value = [
        Comic(id=1, url="comic1URL", keywords="apple,pie"),
        Comic(id=2, url="comic2URL", keywords="apple,dock"),
    ]
    storage.get_comic_by_id.return_value = Comic(id=1, url="comic1URL")
    urls, comics = Search(storage).relevant_urls("apple pie", tmp_path / "index.json")
    assert urls == ["comic1URL"]
    assert comics == [Comic(id=1, url="comic1URL")]
    storage.get_comic_by_id.assert_called_once_with(1)


def test_relevant_urls_limits_to_ten(tmp_path):
    storage = Mock()
    stored = [Comic(id=n, url=f"url{n}", keywords="pie") for n in range(1, 13)]
    storage.get_all_comics.return_value = stored
    storage.get_comic_by_id.side_effect = lambda comic_id: stored[comic_id - 1]
    urls, comics = Search(storage).relevant_urls("pie", tmp_path / "index.json")
    assert len(urls) == 10
    assert len(comics) == 12


def test_relevant_urls_with_failing_storage(tmp_path):
    storage = Mock()
    storage.get_all_comics.side_effect = RuntimeError("down")
    assert Search(storage).relevant_urls("pie", tmp_path / "index.json") == ([], [])


def test_find_relevant_comics_with_spaced_keywords():
    storage = Mock()
    storage.get_all_comics.return_value = [
        Comic(id=1, keywords="apple, doctor"),
        Comic(id=2, keywords="apple, pie"),
        Comic(id=3, keywords="brush"),
    ]
    # "apple" stems to "appl" and " pie" keeps its space, so nothing matches.
    assert Search(storage).find_relevant_comics(["apple,pie"]) == []


def test_find_relevant_comics_orders_by_relevance():
    storage = Mock()
    storage.get_all_comics.return_value = [
        Comic(id=1, keywords="appl,doctor"),
        Comic(id=2, keywords="appl,pie"),
        Comic(id=3, keywords="brush"),
    ]
    result = Search(storage).find_relevant_comics(["apple pie"])
    assert [comic.id for comic in result] == [2, 1]


def test_count_matching_keywords():
    comic = Comic(keywords="superhero, action, adventure")
    assert count_matching_keywords(comic, ["Superhero", "Sci-Fi"]) == 1


def test_count_matching_keywords_is_case_insensitive():
    comic = Comic(keywords="PIE,Doctor")
    assert count_matching_keywords(comic, ["pie doctor"]) == 2