"""Drift bottles: messages thrown into a shared SQLite sea and picked at random."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path

_ISO_POLY = 0xD800000000000000
_MASK64 = 0xFFFF_FFFF_FFFF_FFFF
MIN_MESSAGE_LENGTH = 10


def _make_table(poly: int) -> tuple[int, ...]:
    table = []
    for i in range(256):
        crc = i
        for _ in range(8):
            crc = (crc >> 1) ^ poly if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_ISO_TABLE = _make_table(_ISO_POLY)


def crc64_iso(data: bytes) -> int:
    """CRC-64 with the ISO polynomial, as an unsigned 64-bit integer."""
    crc = _MASK64
    for byte in data:
        crc = _ISO_TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ _MASK64


def _to_int64(value: int) -> int:
    return value - (1 << 64) if value >= 1 << 63 else value


@dataclass(frozen=True)
class Bottle:
    """One thrown message."""

    id: int
    qq: int
    name: str
    message: str
    group: int
    time: str

    def describe(self, botname: str) -> str:
        """The text sent back when the bottle is picked."""
        return (
            botname + "试着帮你捞出来了这个~\nID:" + str(self.id)
            + "\n投递人: " + self.name + "(" + str(self.qq) + ")"
            + "\n群号: " + str(self.group)
            + "\n时间: " + self.time
            + "\n内容: \n" + self.message
        )


def make_bottle(qq: int, group: int, time: str, name: str, message: str) -> Bottle:
    """Build a bottle whose id is the CRC-64 of its contents."""
    key = f"{group}_{qq}_{time}_{name}_{message}".encode("utf-8")
    return Bottle(
        id=_to_int64(crc64_iso(key)),
        qq=qq,
        name=name,
        message=message,
        group=group,
        time=time,
    )


def _unescape_cq_text(text: str) -> str:
    return text.replace("&#91;", "[").replace("&#93;", "]").replace("&amp;", "&")


def validate_message(text: str) -> str:
    """Unescape a message and reject it when it is too short to throw."""
    message = _unescape_cq_text(text)
    if len(message) < MIN_MESSAGE_LENGTH:
        raise ValueError("需要投递的内容过少( ")
    return message


class Sea:
    """The SQLite store of bottles."""

    _TABLE = "global"

    def __init__(self, path: str | Path) -> None:
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        with self._lock, self._conn:
            self._conn.execute(
                f'CREATE TABLE IF NOT EXISTS "{self._TABLE}" ('
                "id INTEGER PRIMARY KEY NOT NULL, qq INTEGER NOT NULL, "
                "Name TEXT NOT NULL, msg TEXT NOT NULL, grp INTEGER NOT NULL, "
                "time TEXT NOT NULL)"
            )

    def throw(self, bottle: Bottle) -> None:
        """Store a bottle; one with the same id is replaced."""
        with self._lock, self._conn:
            self._conn.execute(
                f'INSERT OR REPLACE INTO "{self._TABLE}" '
                "(id, qq, Name, msg, grp, time) VALUES (?, ?, ?, ?, ?, ?)",
                (bottle.id, bottle.qq, bottle.name, bottle.message, bottle.group, bottle.time),
            )

    def pick(self) -> Bottle:
        """Return a random bottle; raises LookupError when the sea is empty."""
        with self._lock:
            row = self._conn.execute(
                f'SELECT id, qq, Name, msg, grp, time FROM "{self._TABLE}" '
                "ORDER BY RANDOM() LIMIT 1"
            ).fetchone()
        if row is None:
            raise LookupError("the sea is empty")
        bid, qq, name, msg, grp, time = row
        return Bottle(id=bid, qq=qq, name=name, message=msg, group=grp, time=time)

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self) -> "Sea":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()