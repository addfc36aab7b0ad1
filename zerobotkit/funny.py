"""Jokes drawn at random from a SQLite collection."""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path

NAME_PLACEHOLDER = "%name"


class JokeBook:
    """A SQLite table of jokes; ``%name`` in a joke is replaced by the listener."""

    _TABLE = "jokes"

    def __init__(self, path: str | Path) -> None:
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        with self._lock, self._conn:
            self._conn.execute(
                f'CREATE TABLE IF NOT EXISTS "{self._TABLE}" '
                "(id INTEGER PRIMARY KEY NOT NULL, text TEXT NOT NULL)"
            )

    def count(self) -> int:
        """Number of jokes stored."""
        with self._lock:
            (n,) = self._conn.execute(f'SELECT COUNT(*) FROM "{self._TABLE}"').fetchone()
        return n

    def pick(self) -> str:
        """A random joke; raises LookupError when there are none."""
        with self._lock:
            row = self._conn.execute(
                f'SELECT text FROM "{self._TABLE}" ORDER BY RANDOM() LIMIT 1'
            ).fetchone()
        if row is None:
            raise LookupError("no jokes")
        return row[0]

    def tell(self, name: str) -> str:
        """A random joke addressed to ``name``."""
        return self.pick().replace(NAME_PLACEHOLDER, name)

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self) -> "JokeBook":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()