"""Daily fortune slips: layout of the vertical text and the picture drawing."""

from __future__ import annotations

import hashlib
import io
from typing import BinaryIO

from PIL import Image, ImageDraw, ImageFont

TABLE = (
    "车万", "DC4", "爱因斯坦", "星空列车", "樱云之恋", "富婆妹", "李清歌", "公主连结",
    "原神", "明日方舟", "碧蓝航线", "碧蓝幻想", "战双", "阴阳师", "赛马娘", "东方归言录",
    "奇异恩典", "夏日口袋", "ASoul",
)
DEFAULT_KIND = "车万"

_COLUMN = 9
_SPACING = 10
_TITLE_SIZE = 45
_TEXT_SIZE = 23


def offset(total: int, now: int, distance: float) -> float:
    """Offset of slot ``now`` among ``total`` slots spaced ``distance`` apart."""
    if total % 2 == 0:
        return (float(now - total // 2) - 1) * distance
    return (float(now - total // 2) - 1.5) * distance


def rows_num(total: int, div: int) -> int:
    """Number of groups of ``div`` needed to hold ``total`` items."""
    rows = total // div
    if total % div != 0:
        rows += 1
    return rows


def glyph_positions(text: str, width: float, height: float) -> list[tuple[str, float, float]]:
    """(character, x, baseline y) for each character of the slip text.

    ``width`` and ``height`` are the size of one glyph; spacing is added here.
    """
    tw, th = width + _SPACING, height + _SPACING
    chars = list(text)
    n = len(chars)
    xsum = rows_num(n, _COLUMN)
    out: list[tuple[str, float, float]] = []
    if xsum != 2:
        for i, ch in enumerate(chars):
            xnow = rows_num(i + 1, _COLUMN)
            ysum = min(n - (xnow - 1) * _COLUMN, _COLUMN)
            ynow = i % _COLUMN + 1
            out.append((ch, -offset(xsum, xnow, tw) + 115, offset(ysum, ynow, th) + 320.0))
        return out
    div = rows_num(n, 2)
    for i, ch in enumerate(chars):
        xnow = rows_num(i + 1, div)
        ysum = min(n - (xnow - 1) * div, div)
        ynow = i % div + 1
        slot = ynow if xnow == 1 else ynow + (_COLUMN - ysum)
        out.append((ch, -offset(xsum, xnow, tw) + 115, offset(_COLUMN, slot, th) + 320.0))
    return out


def background_index(name: str) -> int:
    """Index of a background kind; raises ValueError for an unknown one."""
    try:
        return TABLE.index(name)
    except ValueError:
        raise ValueError("没有这个底图哦～") from None


def background_kind(value: int) -> str:
    """The background kind a stored setting selects, the default when out of range."""
    v = value & 0xFF
    return TABLE[v] if v < len(TABLE) else DEFAULT_KIND


def cache_key(zipfile: str, index: int, title: str, text: str) -> str:
    """Name of the cached picture for this background and slip."""
    return hashlib.md5((zipfile + str(index) + title + text).encode("utf-8")).hexdigest()


def _load_font(font_path: str | None, size: int):
    if font_path is None:
        try:
            return ImageFont.load_default(size)
        except TypeError:
            return ImageFont.load_default()
    return ImageFont.truetype(font_path, size)


def _measure(font, text: str) -> tuple[float, float]:
    width = font.getlength(text)
    if hasattr(font, "getmetrics"):
        ascent, descent = font.getmetrics()
        return width, float(ascent + descent)
    left, top, right, bottom = font.getbbox(text)
    return width, float(bottom - top)


def _ascent(font, text: str) -> float:
    if hasattr(font, "getmetrics"):
        return float(font.getmetrics()[0])
    return float(font.getbbox(text)[3])


def _draw_at_baseline(pen: ImageDraw.ImageDraw, font, text: str, x: float, y: float, fill) -> None:
    pen.text((x, y - _ascent(font, text)), text, font=font, fill=fill)


def draw(
    background: Image.Image,
    title: str,
    text: str,
    font_path: str | None,
    out: BinaryIO,
) -> int:
    """Draw the slip on ``background``, write it to ``out`` as PNG, return bytes written.

    A ``font_path`` of None uses Pillow's built-in font.
    """
    back = background.convert("RGBA")
    canvas = Image.new("RGBA", (back.height, back.width), (0, 0, 0, 0))
    canvas.paste(back, (0, 0), back)
    pen = ImageDraw.Draw(canvas)

    title_font = _load_font(font_path, _TITLE_SIZE)
    sw, _ = _measure(title_font, title)
    _draw_at_baseline(pen, title_font, title, 140 - sw / 2, 112, (255, 255, 255, 255))

    text_font = _load_font(font_path, _TEXT_SIZE)
    tw, th = _measure(text_font, "测")
    for ch, x, y in glyph_positions(text, tw, th):
        _draw_at_baseline(pen, text_font, ch, x, y, (0, 0, 0, 255))

    buf = io.BytesIO()
    canvas.save(buf, "PNG")
    data = buf.getvalue()
    out.write(data)
    return len(data)