"""Local song library for the guessing game: configuration and playlist folders."""

from __future__ import annotations

import json
import os
import random
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Protocol

DEFAULT_PLAYLIST_NAME = "FM"
DEFAULT_PLAYLIST_ID = 3136952023

_WRONG_NAME = "歌单名称错误，可以发送“歌单列表”获取歌单名称"


class _Entry(Protocol):
    name: str

    def is_dir(self) -> bool: ...


@dataclass
class PlaylistBinding:
    """A local playlist bound to an online playlist id."""

    name: str
    id: int = 0

    def to_json(self) -> dict:
        return {"name": self.name, "id": self.id}

    @classmethod
    def from_json(cls, data: dict) -> "PlaylistBinding":
        return cls(name=data.get("name") or "", id=int(data.get("id") or 0))


@dataclass
class DefaultList:
    """The default playlist chosen by a group."""

    group_id: int
    name: str

    def to_json(self) -> dict:
        return {"gid": self.group_id, "name": self.name}

    @classmethod
    def from_json(cls, data: dict) -> "DefaultList":
        return cls(group_id=int(data.get("gid") or 0), name=data.get("name") or "")


@dataclass(frozen=True)
class ListInfo:
    """A playlist folder found in the library."""

    name: str
    number: int
    id: int = 0


def _default_music_path() -> str:
    return os.getcwd().replace("\\", "/") + "/data/guessmusic/music/"


@dataclass
class Config:
    """User settings of the guessing game."""

    music_path: str = field(default_factory=_default_music_path)
    local: bool = True
    api: bool = True
    cookie: str = ""
    playlist: list[PlaylistBinding] = field(
        default_factory=lambda: [PlaylistBinding(DEFAULT_PLAYLIST_NAME, DEFAULT_PLAYLIST_ID)]
    )
    defaultlist: list[DefaultList] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "musicPath": self.music_path,
            "local": self.local,
            "api": self.api,
            "cookie": self.cookie,
            "playlist": [p.to_json() for p in self.playlist],
            "defaultlist": [d.to_json() for d in self.defaultlist],
        }

    @classmethod
    def from_json(cls, data: dict) -> "Config":
        return cls(
            music_path=data.get("musicPath") or "",
            local=bool(data.get("local", False)),
            api=bool(data.get("api", False)),
            cookie=data.get("cookie") or "",
            playlist=[PlaylistBinding.from_json(p) for p in data.get("playlist") or []],
            defaultlist=[DefaultList.from_json(d) for d in data.get("defaultlist") or []],
        )

    @classmethod
    def load(cls, path: str | Path) -> "Config":
        """Read the settings file; write and return the defaults when it is missing."""
        path = Path(path)
        if path.exists():
            with path.open(encoding="utf-8") as f:
                return cls.from_json(json.load(f))
        config = cls()
        config.save(path)
        return config

    def save(self, path: str | Path) -> None:
        """Write the settings file."""
        with Path(path).open("w", encoding="utf-8") as f:
            json.dump(self.to_json(), f, ensure_ascii=False)
            f.write("\n")

    def default_list(self, group_id: int) -> str | None:
        """The default playlist of a group, or None."""
        for entry in self.defaultlist:
            if entry.group_id == group_id:
                return entry.name
        return None

    def set_default_list(self, group_id: int, name: str, lists: Iterable[ListInfo]) -> None:
        """Record ``name`` as the group's default; it must be one of ``lists``."""
        if group_id == 0:
            raise PermissionError("无权设置！")
        if not any(info.name == name for info in lists):
            raise LookupError(_WRONG_NAME)
        self.defaultlist.append(DefaultList(group_id=group_id, name=name))

    def set_music_path(self, path: str) -> None:
        """Set the library root, creating it; backslashes become slashes."""
        music_path = path.replace("\\", "/")
        if not music_path.endswith("/"):
            music_path += "/"
        os.makedirs(music_path, exist_ok=True)
        self.music_path = music_path


def get_list(config: Config) -> list[ListInfo]:
    """The playlist folders of the library, with their song counts and bound ids."""
    bound = {p.name: p.id for p in config.playlist if p.id != 0}
    os.makedirs(config.music_path, exist_ok=True)
    entries = sorted(os.scandir(config.music_path), key=lambda e: e.name)
    if not entries:
        raise LookupError("所设置的歌库不存在任何歌单！")
    result = []
    for entry in entries:
        if not entry.is_dir():
            continue
        try:
            count = len(os.listdir(entry.path))
        except OSError:
            continue
        result.append(ListInfo(name=entry.name, number=count, id=bound.get(entry.name, 0)))
    return result


def local_music(entries: Iterable[_Entry], rng: random.Random | None = None) -> str:
    """Name of a random song among ``entries``; folders are skipped, "" when only folders."""
    entries = list(entries)
    if not entries:
        raise ValueError("no entries to choose from")
    songs = [e for e in entries if not e.is_dir()]
    if not songs:
        return ""
    return (rng or random).choice(songs).name


def music_lottery(
    config: Config, list_name: str, rng: random.Random | None = None
) -> tuple[str, str]:
    """Pick a random song of a playlist; return (playlist folder with slash, song name)."""
    try:
        lists = get_list(config)
    except (LookupError, OSError) as exc:
        raise LookupError(f"获取列表错误,{exc}") from exc
    ids = {info.name: info.id for info in lists}
    if list_name not in ids:
        raise LookupError("指定的歌单不存在与列表当中")
    folder = config.music_path + list_name + "/"
    os.makedirs(folder, exist_ok=True)
    entries = sorted(os.scandir(folder), key=lambda e: e.name)
    if not entries:
        if ids[list_name] == 0 or not config.api:
            raise LookupError("本地歌单数据为0")
        raise LookupError("本地歌单数据为0,API下载歌曲失败")
    return folder, local_music(entries, rng)


def delete_list(config: Config, target: str) -> list[ListInfo]:
    """Delete a playlist by name (removing its folder) or unbind it by id.

    Returns the playlists left in the library.
    """
    lists = get_list(config)
    found = None
    for info in lists:
        if target == info.name or target == str(info.id):
            if target == info.name:
                shutil.rmtree(config.music_path + target)
            found = info
            break
    if found is None:
        raise LookupError(_WRONG_NAME)
    config.playlist = [p for p in config.playlist if p.name != found.name]
    return get_list(config)