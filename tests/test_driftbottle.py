import pytest

from zerobotkit.driftbottle import (
    Bottle,
    Sea,
    crc64_iso,
    make_bottle,
    validate_message,
)


def test_crc64_iso_check_value():
    assert crc64_iso(b"123456789") == 0xB90956C775A41001


def test_crc64_empty():
    assert crc64_iso(b"") == 0


def test_make_bottle_fields_and_signed_id():
    b = make_bottle(10001, 20002, "2022-01-01 00:00:00", "alice", "hello there world")
    assert (b.qq, b.group, b.name, b.message) == (10001, 20002, "alice", "hello there world")
    assert -(1 << 63) <= b.id < (1 << 63)


def test_make_bottle_deterministic_and_distinct():
    a = make_bottle(1, 2, "t", "n", "message one!")
    b = make_bottle(1, 2, "t", "n", "message one!")
    c = make_bottle(1, 2, "t", "n", "message two!")
    assert a == b
    assert a.id != c.id


def test_validate_message_unescapes():
    assert validate_message("&#91;abc&#93; &amp; defgh") == "[abc] & defgh"


def test_validate_message_too_short():
    with pytest.raises(ValueError):
        validate_message("short")


def test_validate_counts_characters_not_bytes():
    with pytest.raises(ValueError):
        validate_message("漂流瓶漂流瓶漂流瓶")
    assert validate_message("漂流瓶漂流瓶漂流瓶漂") == "漂流瓶漂流瓶漂流瓶漂"


def test_describe_contains_fields():
    b = Bottle(id=7, qq=123, name="bob", message="content here", group=456, time="T")
    text = b.describe("bot")
    assert text.startswith("bot试着帮你捞出来了这个~\nID:7")
    assert "\n投递人: bob(123)" in text
    assert "\n群号: 456" in text
    assert text.endswith("\n内容: \ncontent here")


def test_sea_round_trip(tmp_path):
    bottle = make_bottle(1, 2, "2022-01-01 00:00:00", "name", "a message long enough")
    with Sea(tmp_path / "sea.db") as sea:
        sea.throw(bottle)
        assert sea.pick() == bottle


def test_sea_empty_raises(tmp_path):
    with Sea(tmp_path / "sea.db") as sea:
        with pytest.raises(LookupError):
            sea.pick()


def test_sea_replaces_same_id(tmp_path):
    bottle = make_bottle(1, 2, "t", "n", "the same bottle twice")
    path = tmp_path / "sea.db"
    with Sea(path) as sea:
        sea.throw(bottle)
        sea.throw(bottle)
    with Sea(path) as sea:
        picked = {sea.pick() for _ in range(5)}
    assert picked == {bottle}


def test_sea_picks_among_thrown(tmp_path):
    bottles = {make_bottle(i, 9, "t", "n", f"message number {i}") for i in range(4)}
    with Sea(tmp_path / "sea.db") as sea:
        for b in bottles:
            sea.throw(b)
        for _ in range(10):
            assert sea.pick() in bottles