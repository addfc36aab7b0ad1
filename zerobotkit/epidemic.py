"""City epidemic statistics: parse the news feed and find one city's figures."""

from __future__ import annotations

import json
import urllib.request
from dataclasses import dataclass, field
from typing import Any, Callable

TXURL = (
    "https://api.inews.qq.com/newsqa/v1/query/inner/publish/modules/list"
    "?modules=statisGradeCityDetail,diseaseh5Shelf"
)


def _int(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    return 0


def _show(value: Any) -> str:
    """Render a loosely typed JSON value the way the report shows it."""
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class Area:
    """Figures for one region and the regions below it."""

    name: str = ""
    today_confirm: int = 0
    wzz_add: Any = None
    now_confirm: int = 0
    confirm: int = 0
    dead: int = 0
    heal: int = 0
    grade: str = ""
    wzz: int = 0
    children: list["Area"] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> "Area":
        """Build an area tree from its decoded JSON object."""
        today = data.get("today") or {}
        total = data.get("total") or {}
        return cls(
            name=data.get("name") or "",
            today_confirm=_int(today.get("confirm")),
            wzz_add=today.get("wzz_add"),
            now_confirm=_int(total.get("nowConfirm")),
            confirm=_int(total.get("confirm")),
            dead=_int(total.get("dead")),
            heal=_int(total.get("heal")),
            grade=total.get("grade") or "",
            wzz=_int(total.get("wzz")),
            children=[cls.from_json(child) for child in data.get("children") or [] if child],
        )


def find_city(area: Area | None, name: str) -> Area | None:
    """Search the tree for the region called ``name``."""
    if area is None:
        return None
    if area.name == name:
        return area
    for child in area.children:
        if child.name == name:
            return child
        found = find_city(child, name)
        if found is not None:
            return found
    return None


def parse_response(data: bytes | str) -> tuple[Area, str]:
    """Return the root of the area tree and the last update time."""
    decoded = json.loads(data)
    shelf = ((decoded.get("data") or {}).get("diseaseh5Shelf")) or {}
    tree = shelf.get("areaTree") or []
    if not tree:
        raise LookupError("no area data in response")
    return Area.from_json(tree[0]), shelf.get("lastUpdateTime") or ""


def _fetch(url: str) -> bytes:
    with urllib.request.urlopen(url, timeout=30) as response:
        return response.read()


def query_epidemic(
    city: str, fetch: Callable[[str], bytes] | None = None
) -> tuple[Area | None, str]:
    """Fetch the feed and return the city's area (or None) and the update time."""
    root, updated = parse_response((fetch or _fetch)(TXURL))
    return find_city(root, city), updated


def format_report(area: Area, updated: str) -> str:
    """The text sent back for a city."""
    return (
        "【" + area.name + "】疫情数据\n"
        + "新增人数：" + str(area.today_confirm) + "\n"
        + "现有确诊：" + str(area.now_confirm) + "\n"
        + "累计确诊：" + str(area.confirm) + "\n"
        + "治愈人数：" + str(area.heal) + "\n"
        + "死亡人数：" + str(area.dead) + "\n"
        + "无症状人数：" + str(area.wzz) + "\n"
        + "新增无症状：" + _show(area.wzz_add) + "\n"
        + "更新时间：\n『" + updated + "』"
    )