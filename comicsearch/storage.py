"""MySQL-backed storage of comics and users."""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Iterable
from itertools import islice
from typing import Any
from urllib.parse import parse_qsl

import pymysql

from comicsearch.models import Comic, User

logger = logging.getLogger(__name__)

PRETTY_PRINT_LIMIT = 10
_DEFAULT_TCP_ADDRESS = "127.0.0.1:3306"
_DEFAULT_PORT = 3306
_DEFAULT_SOCKET = "/tmp/mysql.sock"
_CREDENTIAL_SEPARATOR = ":"
_NETWORK = re.compile(r"(\w+)(?:\((.*)\))?")


class NotFoundError(LookupError):
    """Raised when a requested row does not exist."""


def parse_dsn(dsn: str) -> dict[str, Any]:
    """Turn a "user:password@tcp(host:port)/dbname?params" DSN into connect arguments."""
    slash = dsn.rfind("/")
    if slash < 0:
        raise ValueError("invalid DSN: missing the slash separating the database name")
    head, tail = dsn[:slash], dsn[slash + 1 :]
    database, _, query = tail.partition("?")

    at = head.rfind("@")
    credentials, address = (head[:at], head[at + 1 :]) if at >= 0 else ("", head)
    user, _, password = credentials.partition(_CREDENTIAL_SEPARATOR)

    params: dict[str, Any] = {}
    if user:
        params["user"] = user
    if password:
        params["password"] = password

    network, location = "tcp", None
    if address:
        match = _NETWORK.fullmatch(address)
        if match is None:
            raise ValueError(f"invalid DSN: malformed network address {address!r}")
        network, location = match.groups()

    if network == "unix":
        params["unix_socket"] = location or _DEFAULT_SOCKET
    elif network == "tcp":
        host, sep, port = (location or _DEFAULT_TCP_ADDRESS).rpartition(":")
        if not sep:
            host, port = port, ""
        params["host"] = host.strip("[]") or "127.0.0.1"
        try:
            params["port"] = int(port) if port else _DEFAULT_PORT
        except ValueError as exc:
            raise ValueError(f"invalid DSN: bad port {port!r}") from exc
    else:
        raise ValueError(f"invalid DSN: unknown network {network!r}")

    if database:
        params["database"] = database
    for key, value in parse_qsl(query):
        if key == "charset":
            params["charset"] = value.split(",")[0]
    return params


def pretty_print(comics: Iterable[Comic]) -> str:
    """Render the first ten comics as a numbered list of URLs."""
    return "".join(
        f"\n\nComic {number}: {comic.url}"
        for number, comic in enumerate(islice(comics, PRETTY_PRINT_LIMIT), start=1)
    )


class MySQLStorage:
    """Comics and users kept in a MySQL database."""

    pretty_print = staticmethod(pretty_print)

    def __init__(self, connection: Any) -> None:
        self._connection = connection
        self._lock = threading.Lock()

    def _fetchone(self, query: str, params: tuple) -> Any:
        with self._lock, self._connection.cursor() as cursor:
            cursor.execute(query, params)
            return cursor.fetchone()

    def _execute(self, query: str, params: tuple) -> None:
        with self._lock:
            with self._connection.cursor() as cursor:
                cursor.execute(query, params)
            self._connection.commit()

    def get_comic_by_id(self, comic_id: int) -> Comic:
        """Return the comic with an id; raise NotFoundError if there is none."""
        row = self._fetchone("SELECT id, url, keywords FROM comics WHERE id = %s", (comic_id,))
        if row is None:
            raise NotFoundError(f"comic {comic_id} not found")
        return Comic(id=row[0], url=row[1], keywords=row[2])

    def get_all_comics(self) -> list[Comic]:
        """Return every stored comic."""
        with self._lock, self._connection.cursor() as cursor:
            cursor.execute("SELECT id, url, keywords FROM comics")
            rows = cursor.fetchall()
        return [Comic(id=row[0], url=row[1], keywords=row[2]) for row in rows]

    def save_comic(self, comic: Comic) -> None:
        """Insert a comic; its id is assigned by the database."""
        self._execute(
            "INSERT INTO comics (url, keywords) VALUES (%s, %s)", (comic.url, comic.keywords)
        )

    def get_count(self) -> int:
        """Return the number of stored comics."""
        row = self._fetchone("SELECT COUNT(*) FROM comics", ())
        return int(row[0])

    def create_user(self, username: str, password: str, role: str) -> None:
        """Insert a user whose password is already hashed."""
        self._execute(
            "INSERT INTO users (username, password, role) VALUES (%s, %s, %s)",
            (username, password, role),
        )

    def get_user_by_username(self, username: str) -> User:
        """Return a user by name; raise NotFoundError if there is none."""
        row = self._fetchone(
            "SELECT id, username, password, role FROM users WHERE username = %s", (username,)
        )
        if row is None:
            raise NotFoundError(f"user {username!r} not found")
        return User(id=row[0], username=row[1], password=row[2], role=row[3])


def connect(dsn: str) -> MySQLStorage:
    """Open a MySQL connection described by a DSN and wrap it in storage."""
    try:
        connection = pymysql.connect(**parse_dsn(dsn), autocommit=True)
    except pymysql.Error:
        logger.error("error connecting to database")
        raise
    return MySQLStorage(connection)