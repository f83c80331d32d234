# comicsearch

Find xkcd comics by keyword. `comicsearch` downloads comic metadata,
reduces titles, transcripts and alt texts to stemmed keywords, builds an
inverted index over them and answers searches from the command line or from
Python code.

Two storage back ends are provided:

* a **JSON file database** (`comicsearch.jsondb`), used by the
  `comicsearch` command;
* a **MySQL database** (`comicsearch.storage`), for use as a library
  together with `comicsearch.search.Search` and `comicsearch.xkcd.XkcdClient`.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Configuration

The command reads a YAML file, `config.yaml` by default
(`comicsearch.models.load_config`):

```yaml
source_url: https://xkcd.com
db_file: database.json
index_file: index.json
parallel: 10
```

| key          | meaning                                         |
|--------------|-------------------------------------------------|
| `source_url` | base URL of the comic API                       |
| `db_file`    | JSON database file                              |
| `index_file` | where the keyword index is written              |
| `parallel`   | number of download workers (must be positive)   |

`load_config` also reads `port`, `dsn`, `token_max_time`,
`concurrency_limit`, `rate_limit`, `webport` and `xkcd_url` into the
`Config` dataclass, for code that needs them; the command does not use them.

## Command line

Fill the JSON database with every comic not yet stored:

```
comicsearch -c config.yaml
```

Search it, scanning the database directly:

```
comicsearch -c config.yaml -s "apple doctor"
```

Search through the keyword index instead (the index file is rebuilt from the
database first):

```
comicsearch -c config.yaml -s "apple doctor" -i
```

Up to ten matching comics are printed, most relevant first, under the line
`Most relevant comics:`. The command exits with status 1 when the
configuration cannot be loaded or the worker count is not positive.

## Library use

Keyword extraction:

```python
from comicsearch.words import normalize_words

normalize_words("Running, jumping, and playing!")
# ['run', 'jump', 'play']
```

Keywords are split on anything that is not a letter or digit, stripped of
contractions, stemmed with the English Snowball (Porter2) algorithm
(`comicsearch.stemmer.stem`), mapped from mathematical script letters to
plain ones, deduplicated, and stop words and words of two letters or fewer
are dropped.

JSON file database and search (`comicsearch.jsondb`, `comicsearch.filesearch`):

```python
from comicsearch.jsondb import load_database
from comicsearch.filesearch import find_relevant_comics

db = load_database("database.json")
for comic in find_relevant_comics(db, ["apple", "doctor"])[:10]:
    print(comic.url)
```

MySQL database (`comicsearch.storage`): `connect(dsn)` takes a DSN of the
form `user:password@tcp(localhost:3306)/xkcd` and returns a `MySQLStorage`
with `get_comic_by_id`, `get_all_comics`, `save_comic`, `get_count`,
`create_user` and `get_user_by_username`. The `comics` and `users` tables
must already exist. `Search(storage).relevant_urls(query, index_file)`
rebuilds the index file and returns the top ten URLs and all matching
comics; `XkcdClient(base_url, storage).run_workers(n)` downloads and saves
every comic not yet stored.

Tokens (`comicsearch.auth`): `generate_jwt(username, role, minutes)` issues
an HS256 token, `validate_jwt(token)` returns its `Claims`, and
`is_admin(request)` checks a request's `token` cookie for the `admin` role,
raising werkzeug's `Unauthorized` when the cookie is missing or invalid. The
signing key is taken from the `COMICSEARCH_JWT_KEY` environment variable.

## What this package does not do

There is no HTTP service: no `/pics`, `/update`, `/login` or `/register`
endpoints, no rate or concurrency limiting of requests and no scheduled
hourly updates. Searching and updating are done through the `comicsearch`
command or by calling the modules above. Database tables for the MySQL back
end are not created by the package.