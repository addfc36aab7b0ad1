"""Packed 10-byte picture records and the URLs they stand for."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

ITEM_SIZE = 10

CATEGORIES = {
    "来点黑丝": "heisi.bin",
    "来点白丝": "baisi.bin",
    "来点jk": "jk.bin",
    "来点巨乳": "jur.bin",
    "来点足控": "zuk.bin",
    "来点网红": "mcn.bin",
}

_BASE = "http://hs.heisiwu.com/wp-content/uploads/"
_EXTENSIONS = {0: ".jpg", 1: ".png", 2: ".webp"}


@dataclass(frozen=True)
class Item:
    """One packed picture record."""

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != ITEM_SIZE:
            raise ValueError(f"item must be {ITEM_SIZE} bytes, got {len(self.data)}")

    def to_url(self) -> str:
        """Unpack the record into the picture URL."""
        head = self.data[0]
        year = ((head >> 4) & 0x0F) + 2021
        month = head & 0x0F
        if year == 2021:
            num = int.from_bytes(self.data[1:5], "big")
            digest = self.data[5:9].hex()
            return (
                f"{_BASE}{year:4d}/{month:02d}/{year:4d}{month:02d}16{num:06d}"
                f"-611a3{digest:>8}.jpg"
            )
        d = int.from_bytes(self.data[1:9], "big")
        tail = self.data[9]
        url = f"{_BASE}{year:4d}/{month:02d}/{d & 0x0FFF_FFFF_FFFF_FFFF:015x}"
        num = tail & 0x7F
        if num > 0:
            url += f"-{num}"
        if tail & 0x80:
            url += "-scaled"
        ext = _EXTENSIONS.get(d >> 60)
        if ext is None:
            raise ValueError("invalid ext")
        return url + ext


def load_items(data: bytes) -> list[Item]:
    """Split a packed file into records."""
    if len(data) % ITEM_SIZE != 0:
        raise ValueError("invalid data")
    return [Item(bytes(data[i:i + ITEM_SIZE])) for i in range(0, len(data), ITEM_SIZE)]


def pick(items: Sequence[Item], rng: random.Random | None = None) -> Item:
    """Choose a random record."""
    if not items:
        raise ValueError("no items to pick from")
    return (rng or random).choice(items)