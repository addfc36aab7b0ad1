import json

import pytest

from zerobotkit.epidemic import (
    TXURL,
    Area,
    find_city,
    format_report,
    parse_response,
    query_epidemic,
)


def _area(name, children=(), confirm=0, wzz_add=None):
    return {
        "name": name,
        "today": {"confirm": confirm, "wzz_add": wzz_add},
        "total": {"nowConfirm": confirm * 2, "confirm": confirm * 3, "dead": 1,
                  "heal": 2, "grade": "", "wzz": 4},
        "children": list(children),
    }


def _payload(tree, updated="2022-11-01 10:00:00"):
    return json.dumps(
        {"data": {"diseaseh5Shelf": {"lastUpdateTime": updated, "areaTree": tree}}}
    ).encode("utf-8")


TREE = [_area("中国", [
    _area("北京", [_area("海淀", confirm=5, wzz_add=7)], confirm=9),
    _area("上海", [_area("浦东", confirm=3)]),
])]


def test_from_json_reads_fields():
    area = Area.from_json(_area("北京", confirm=9, wzz_add=2))
    assert area.name == "北京"
    assert area.today_confirm == 9
    assert area.now_confirm == 18
    assert area.confirm == 27
    assert area.wzz_add == 2
    assert area.children == []


def test_find_city_nested_and_missing():
    root, _ = parse_response(_payload(TREE))
    assert find_city(root, "海淀").today_confirm == 5
    assert find_city(root, "浦东").name == "浦东"
    assert find_city(root, "中国") is root
    assert find_city(root, "广州") is None
    assert find_city(None, "北京") is None


def test_parse_response_update_time():
    _, updated = parse_response(_payload(TREE, updated="sometime"))
    assert updated == "sometime"


def test_parse_response_empty_tree():
    with pytest.raises(LookupError):
        parse_response(_payload([]))


def test_query_uses_feed_url():
    seen = []

    def fetch(url):
        seen.append(url)
        return _payload(TREE)

    area, updated = query_epidemic("上海", fetch)
    assert seen == [TXURL]
    assert area.name == "上海"
    assert updated == "2022-11-01 10:00:00"


def test_query_unknown_city():
    area, _ = query_epidemic("nowhere", lambda url: _payload(TREE))
    assert area is None


def test_format_report_layout():
    area = Area.from_json(_area("海淀", confirm=5, wzz_add=7.0))
    text = format_report(area, "T")
    lines = text.split("\n")
    assert lines[0] == "【海淀】疫情数据"
    assert lines[1] == "新增人数：5"
    assert lines[2] == "现有确诊：10"
    assert lines[3] == "累计确诊：15"
    assert lines[7] == "新增无症状：7"
    assert text.endswith("更新时间：\n『T』")