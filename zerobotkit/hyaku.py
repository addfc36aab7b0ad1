"""Ogura Hyakunin Isshu: the hundred poems, loaded from CSV."""

from __future__ import annotations

import csv
import random
import re
from dataclasses import astuple, dataclass
from typing import TextIO

POEM_COUNT = 100

_LABELS = (
    ("●", "番号"),
    ("◉", "歌人"),
    ("○", "上の句"),
    ("○", "下の句"),
    ("◎", "上の句ひらがな"),
    ("◎", "下の句ひらがな"),
)

_REQUEST_RE = re.compile(r"百人一首之[ \t\n\f\r]?([0-9]+)")


@dataclass(frozen=True)
class Poem:
    """One poem of the collection."""

    number: str
    poet: str
    upper: str
    lower: str
    upper_kana: str
    lower_kana: str

    def __str__(self) -> str:
        return "".join(
            f"{mark}{label}：{value}\n"
            for (mark, label), value in zip(_LABELS, astuple(self))
        )


def load_poems(stream: TextIO) -> list[Poem]:
    """Read the CSV (with a header row) and return the 100 poems in order."""
    records = list(csv.reader(stream))[1:]
    if len(records) != POEM_COUNT:
        raise ValueError("invalid csvfile")
    poems = []
    for expected, record in enumerate(records, start=1):
        if len(record) != len(_LABELS):
            raise ValueError("invalid csvfile")
        if int(record[0]) != expected:
            raise ValueError("invalid csvfile")
        poems.append(Poem(*record))
    return poems


def image_names(number: int) -> tuple[str, str]:
    """Names of the card picture and the text picture for poem ``number`` (1-based)."""
    if not 1 <= number <= POEM_COUNT:
        raise ValueError("超出范围")
    return f"img/{number:03d}.jpg", f"img/{number:03d}.png"


def parse_request(text: str) -> int | None:
    """Return the requested poem number, a random one for "百人一首", or None."""
    if text == "百人一首":
        return random.randint(1, POEM_COUNT)
    m = _REQUEST_RE.fullmatch(text)
    if m is None:
        return None
    number = int(m.group(1))
    if not 1 <= number <= POEM_COUNT:
        raise ValueError("超出范围")
    return number