"""Genshin-style ten-pull gacha drawn from a zipped card archive."""

from __future__ import annotations

import io
import random
import re
import threading
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from PIL import Image

_PREFIX_LEN = 8
_NAME_RE = re.compile(r"_(.*)\.png")
_STAR_FILES = {"ThreeStar.png": 3, "FourStar.png": 4, "FiveStar.png": 5}
_BACKGROUNDS = {5: "five_bg.jpg", 4: "four_bg.jpg", 3: "three_bg.jpg"}

CANVAS_SIZE = (1920, 1080)
CANVAS_COLOR = (50, 50, 50, 255)
FIRST_X = 230
STEP_X = 146
REPLY_ICON_POS = (1270, 945)

# (folder, stars, is a character) in the order pulls are laid out.
_LAYOUT = (
    ("five", 5, True),
    ("four", 4, True),
    ("five2", 5, False),
    ("four2", 4, False),
    ("Three", 3, False),
)


def is_five_star_mode(value: int) -> bool:
    """Whether the stored setting selects the five-star-only pool."""
    return value & 1 == 1


def toggle_mode(value: int) -> int:
    """Return the stored setting with the pool switched; other bits are kept."""
    return value & ~1 if is_five_star_mode(value) else value | 1


def reply_names(names: Sequence[str], kind: int, previous: str) -> str:
    """The congratulation text for five-star characters (kind 1) or weapons (kind 2)."""
    if kind == 1:
        header = "★五星角色★\n"
    elif kind == 2 and previous:
        header = "\n★五星武器★\n"
    else:
        header = "★五星武器★\n"
    parts = [header]
    for name in names:
        m = _NAME_RE.search(name)
        if m is None:
            raise ValueError(f"cannot read a name from {name!r}")
        parts.append(m.group(1) + " * ")
    return "".join(parts)


@dataclass(frozen=True)
class Pull:
    """One card of a draw and the archive entries used to paint it."""

    name: str
    stars: int
    character: bool
    background: str
    star_icon: str
    element_icon: str


class CardArchive:
    """The card pictures of the gacha, read from a zip archive."""

    def __init__(
        self,
        tree: dict[str, list[str]],
        data: dict[str, bytes],
        star_icons: dict[int, str],
    ) -> None:
        self._tree = tree
        self._data = data
        self._star_icons = star_icons
        self._lock = threading.Lock()
        self.total = 0

    @classmethod
    def from_zip(cls, path: str | Path) -> "CardArchive":
        """Read an archive whose entries sit under an eight-character top folder."""
        tree: dict[str, list[str]] = {}
        data: dict[str, bytes] = {}
        stars: dict[int, str] = {}
        with zipfile.ZipFile(path) as archive:
            for info in archive.infolist():
                if info.is_dir():
                    continue
                name = info.filename[_PREFIX_LEN:]
                data[name] = archive.read(info)
                slash = name.rfind("/")
                if slash < 0:
                    tree[name] = [name]
                    continue
                folder = name[:slash]
                if not folder:
                    continue
                tree.setdefault(folder, []).append(name)
                if folder == "gacha" and name[slash + 1:] in _STAR_FILES:
                    stars[_STAR_FILES[name[slash + 1:]]] = name
        return cls(tree, data, stars)

    def _folder(self, key: str) -> list[str]:
        entries = self._tree.get(key)
        if not entries:
            raise LookupError(f"archive has no entries for {key!r}")
        return entries

    def _entry(self, key: str) -> str:
        return self._folder(key)[0]

    def _star(self, stars: int) -> str:
        try:
            return self._star_icons[stars]
        except KeyError:
            raise LookupError(f"archive has no {stars}-star icon") from None

    def _element(self, name: str) -> str:
        base = name[name.rfind("/") + 1:]
        cut = base.find("_")
        if cut < 0:
            raise LookupError(f"no element in {name!r}")
        return self._entry(base[:cut] + ".png")

    def _open(self, name: str) -> Image.Image:
        try:
            raw = self._data[name]
        except KeyError:
            raise LookupError(f"archive has no file {name!r}") from None
        with Image.open(io.BytesIO(raw)) as im:
            return im.convert("RGBA")

    def draw(
        self,
        count: int = 10,
        five_star_mode: bool = False,
        rng: random.Random | None = None,
    ) -> tuple[list[Pull], str]:
        """Draw ``count`` cards; return them in layout order and the five-star text."""
        rng = rng or random
        groups: dict[str, list[str]] = {key: [] for key, _, _ in _LAYOUT}

        def add(key: str) -> None:
            groups[key].append(rng.choice(self._folder(key)))

        def add_five() -> None:
            add("five" if rng.randrange(2) == 0 else "five2")

        with self._lock:
            if self.total % 9 == 0:
                add_five()
                count -= 1
            if five_star_mode:
                for _ in range(count):
                    add_five()
            else:
                for _ in range(count):
                    a = rng.randrange(1000)
                    if a <= 800:
                        add("Three")
                    elif a <= 885:
                        add("four")
                    elif a <= 970:
                        add("four2")
                    elif a <= 985:
                        add("five")
                    else:
                        add("five2")
                if not groups["four"] and not groups["four2"] and groups["Three"]:
                    groups["Three"].pop()
                    add("four" if rng.randrange(2) == 0 else "four2")
                self.total += 1

        text = ""
        if groups["five"]:
            text += reply_names(groups["five"], 1, text)
        if groups["five2"]:
            text += reply_names(groups["five2"], 2, text)

        pulls = [
            Pull(
                name=name,
                stars=stars,
                character=character,
                background=self._entry(_BACKGROUNDS[stars]),
                star_icon=self._star(stars),
                element_icon=self._element(name),
            )
            for key, stars, character in _LAYOUT
            for name in groups[key]
        ]
        return pulls, text

    def render(self, pulls: Sequence[Pull]) -> Image.Image:
        """Paint the result picture of a draw."""
        canvas = Image.new("RGBA", CANVAS_SIZE, CANVAS_COLOR)
        self._paste(canvas, self._open(self._entry("bg0.jpg")), (0, 0))
        for position, pull in enumerate(pulls):
            x = FIRST_X + STEP_X * position
            for part in (pull.background, pull.name, pull.star_icon, pull.element_icon):
                self._paste(canvas, self._open(part), (x, 0))
        self._paste(canvas, self._open(self._entry("Reply.png")), REPLY_ICON_POS)
        return canvas

    @staticmethod
    def _paste(canvas: Image.Image, image: Image.Image, at: tuple[int, int]) -> None:
        canvas.paste(image, at, image)