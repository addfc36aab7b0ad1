import io

import pytest

from zerobotkit.hyaku import Poem, image_names, load_poems, parse_request

HEADER = "番号,歌人,上の句,下の句,上の句ひらがな,下の句ひらがな\n"


def _csv(rows):
    return io.StringIO(HEADER + "".join(",".join(r) + "\n" for r in rows))


def _rows(n=100):
    return [[str(i), f"poet{i}", f"u{i}", f"l{i}", f"uk{i}", f"lk{i}"] for i in range(1, n + 1)]


def test_load_poems():
    poems = load_poems(_csv(_rows()))
    assert len(poems) == 100
    assert poems[0].number == "1"
    assert poems[99].poet == "poet100"


def test_poem_str():
    poem = Poem("1", "P", "U", "L", "UK", "LK")
    assert str(poem) == (
        "●番号：1\n◉歌人：P\n○上の句：U\n○下の句：L\n◎上の句ひらがな：UK\n◎下の句ひらがな：LK\n"
    )


def test_wrong_count():
    with pytest.raises(ValueError):
        load_poems(_csv(_rows(99)))


def test_wrong_order():
    rows = _rows()
    rows[0][0], rows[1][0] = rows[1][0], rows[0][0]
    with pytest.raises(ValueError):
        load_poems(_csv(rows))


def test_wrong_field_count():
    rows = _rows()
    rows[5] = rows[5][:5]
    with pytest.raises(ValueError):
        load_poems(_csv(rows))


def test_image_names():
    assert image_names(7) == ("img/007.jpg", "img/007.png")
    assert image_names(100) == ("img/100.jpg", "img/100.png")


@pytest.mark.parametrize("number", [0, 101])
def test_image_names_range(number):
    with pytest.raises(ValueError):
        image_names(number)


def test_parse_request_numbered():
    assert parse_request("百人一首之 42") == 42
    assert parse_request("百人一首之1") == 1


def test_parse_request_random():
    for _ in range(20):
        assert 1 <= parse_request("百人一首") <= 100


def test_parse_request_out_of_range():
    with pytest.raises(ValueError):
        parse_request("百人一首之101")


def test_parse_request_no_match():
    assert parse_request("百人一首之abc") is None
    assert parse_request("hello") is None