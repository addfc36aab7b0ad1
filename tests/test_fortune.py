import io
import math

import pytest
from PIL import Image

from zerobotkit.fortune import (
    TABLE,
    background_index,
    background_kind,
    cache_key,
    draw,
    glyph_positions,
    offset,
    rows_num,
)


@pytest.mark.parametrize("total", [1, 2, 3, 8, 9])
def test_offset_steps_by_distance(total):
    for now in range(1, total):
        assert offset(total, now + 1, 7.0) - offset(total, now, 7.0) == pytest.approx(7.0)


def test_rows_num_is_ceiling():
    for div in (1, 2, 9):
        for total in range(0, 30):
            assert rows_num(total, div) == math.ceil(total / div)


def test_single_column_positions():
    positions = glyph_positions("一二三四五六七八九", 20, 20)
    assert [p[0] for p in positions] == list("一二三四五六七八九")
    assert len({p[1] for p in positions}) == 1
    ys = [p[2] for p in positions]
    assert all(b - a == pytest.approx(30) for a, b in zip(ys, ys[1:]))


def test_two_columns_of_ten_bottom_align_second():
    positions = glyph_positions("一二三四五六七八九十", 20, 20)
    xs = [p[1] for p in positions]
    assert len(set(xs[:5])) == 1 and len(set(xs[5:])) == 1
    assert xs[5] < xs[0]
    ys = [p[2] for p in positions]
    assert ys[5] - ys[4] == pytest.approx(0)
    assert ys[9] - ys[4] == pytest.approx(4 * 30)


def test_two_full_columns_share_rows():
    positions = glyph_positions("字" * 18, 10, 10)
    ys = [p[2] for p in positions]
    assert ys[:9] == ys[9:]


def test_three_columns_default_layout():
    positions = glyph_positions("字" * 20, 10, 10)
    assert len(positions) == 20
    assert len({p[1] for p in positions}) == 3


def test_background_round_trip():
    for name in TABLE:
        assert background_kind(background_index(name)) == name
    assert background_index("车万") == 0


def test_background_kind_masks_and_defaults():
    assert background_kind(0x100 + 1) == TABLE[1]
    assert background_kind(len(TABLE)) == "车万"


def test_background_index_unknown():
    with pytest.raises(ValueError):
        background_index("不存在")


def test_cache_key_properties():
    key = cache_key("data/Fortune/车万.zip", 3, "大吉", "好运")
    assert len(key) == 32
    assert all(c in "0123456789abcdef" for c in key)
    assert key == cache_key("data/Fortune/车万.zip", 3, "大吉", "好运")
    assert key not in (cache_key("data/Fortune/车万.zip", 4, "大吉", "好运"),)


def test_draw_writes_png_of_swapped_size():
    back = Image.new("RGB", (200, 100), (255, 0, 0))
    out = io.BytesIO()
    written = draw(back, "title", "text", None, out)
    data = out.getvalue()
    assert written == len(data)
    with Image.open(io.BytesIO(data)) as im:
        assert im.format == "PNG"
        assert im.size == (100, 200)


def test_draw_keeps_background_outside_text():
    back = Image.new("RGB", (300, 300), (255, 0, 0))
    out = io.BytesIO()
    draw(back, "T", "abc", None, out)
    with Image.open(io.BytesIO(out.getvalue())) as im:
        assert im.convert("RGBA").getpixel((299, 0)) == (255, 0, 0, 255)
        assert im.convert("RGBA").getpixel((299, 299)) == (255, 0, 0, 255)