import random

import pytest

from zerobotkit.heisi import CATEGORIES, Item, load_items, pick


def _general(year_off, month, d, tail):
    return Item(bytes([(year_off << 4) | month]) + d.to_bytes(8, "big") + bytes([tail]))


def test_2021_url():
    raw = bytes([0x01]) + (123).to_bytes(4, "big") + bytes.fromhex("abcdef01") + b"\x00"
    assert Item(raw).to_url() == (
        "http://hs.heisiwu.com/wp-content/uploads/2021/01/20210116000123-611a3abcdef01.jpg"
    )


def test_general_url_scaled_png():
    item = _general(1, 2, (1 << 60) | 0xABC, 0x83)
    assert item.to_url() == (
        "http://hs.heisiwu.com/wp-content/uploads/2022/02/000000000000abc-3-scaled.png"
    )


def test_general_url_plain_jpg():
    url = _general(2, 11, 0x123, 0).to_url()
    assert url.startswith("http://hs.heisiwu.com/wp-content/uploads/2023/11/")
    assert url.endswith("000000000000123.jpg")
    assert "-scaled" not in url


def test_webp_extension():
    assert _general(3, 5, (2 << 60) | 1, 0x80).to_url().endswith("-scaled.webp")


def test_invalid_extension():
    with pytest.raises(ValueError):
        _general(1, 1, 3 << 60, 0).to_url()


def test_item_size_checked():
    with pytest.raises(ValueError):
        Item(b"\x00" * 9)


def test_load_items():
    data = bytes(range(30))
    items = load_items(data)
    assert len(items) == 3
    assert b"".join(i.data for i in items) == data


def test_load_items_invalid():
    with pytest.raises(ValueError):
        load_items(b"\x00" * 15)


def test_pick():
    items = load_items(bytes(range(50)))
    assert pick(items, random.Random(3)) in items


def test_pick_empty():
    with pytest.raises(ValueError):
        pick([], random.Random(0))


def test_categories_pick():
    assert CATEGORIES["来点黑丝"] == "heisi.bin"
    assert len(CATEGORIES) == 6
    commands = list(CATEGORIES)
    assert pick(commands, random.Random(1)) in CATEGORIES