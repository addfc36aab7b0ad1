"""Picture-making commands: recognising a command and where its pictures come from."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import NamedTuple

MATERIALS = "https://gitcode.net/m0_60838134/imagematerials/-/raw/main/"

COMMANDS: dict[str, str] = {
    "搓": "cuo", "冲": "xqe", "摸": "mo", "拍": "pai", "丢": "diu", "吃": "chi",
    "敲": "qiao", "啃": "ken", "蹭": "ceng", "爬": "pa", "撕": "si", "灰度": "grayscale",
    "上翻": "flipV", "下翻": "flipV", "左翻": "flipH", "右翻": "flipH", "反色": "invert",
    "浮雕": "convolve3x3", "打码": "blur", "负片": "invertAndGrayscale", "旋转": "rotate",
    "变形": "deformation", "亲": "kiss", "结婚申请": "marriage", "结婚登记": "marriage",
    "阿尼亚喜欢": "anyasuki", "像只": "alike", "我永远喜欢": "alwaysLike",
    "永远喜欢": "alwaysLike", "像样的亲亲": "decentKiss", "国旗": "chinaFlag",
    "不要靠近": "dontTouch", "万能表情": "universal", "空白表情": "universal",
    "采访": "interview", "需要": "need", "你可能需要": "need", "这像画吗": "paint",
    "小画家": "painter", "完美": "perfect", "玩游戏": "playGame", "出警": "police",
    "警察": "police1", "舔": "prpr", "舔屏": "prpr", "prpr": "prpr", "安全感": "safeSense",
    "精神支柱": "support", "想什么": "thinkwhat", "墙纸": "wallpaper",
    "为什么at我": "whyatme", "交个朋友": "makeFriend", "打工人": "backToWork",
    "继续干活": "backToWork", "兑换券": "coupon", "注意力涣散": "distracted",
    "垃圾桶": "garbage", "垃圾": "garbage", "捶": "thump", "啾啾": "jiujiu",
    "2敲": "knock", "听音乐": "listenMusic", "永远爱你": "loveYou", "2拍": "pat",
    "顶": "jackUp", "捣": "pound", "打拳": "punch", "滚": "roll", "吸": "suck",
    "嗦": "suck", "扔": "throw", "锤": "hammer", "紧贴": "tightly", "紧紧贴着": "tightly",
    "转": "turn", "蒙蔽": "mengbi", "踩": "cai", "好玩": "haowan", "2转": "whirl",
    "2滚": "push", "踢球": "tiqiu", "2舔": "lick", "可莉吃": "klee", "胡桃啃": "hutaoken",
    "怀": "huai", "砰": "peng", "你犯法了": "fanfa", "炖": "dun", "2蹭": "ceng2",
    "诶嘿": "eihei", "膜拜": "worship", "吞": "ci", "揍": "zou", "给我变": "bian",
    "玩一下": "van", "不要看": "neko", "小天使": "xiaotianshi", "你的": "youer",
    "我老婆": "nowife", "远离": "yuanli", "抬棺": "taiguan", "一直": "alwaysDoGif",
}

_COMMAND_ALT = "|".join(
    re.escape(c) for c in sorted(COMMANDS, key=lambda c: (-len(c), c))
)
_COMMAND_RE = re.compile(
    "(" + _COMMAND_ALT + r")[\s\S]*?"
    r"(\[CQ:(image,file=([0-9a-zA-Z]{32}).*|at.+?([0-9]{5,11}))\].*|([0-9]+))\Z"
)
_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


@dataclass(frozen=True)
class GifRequest:
    """A recognised command: its word, whose picture it uses, and its text arguments."""

    command: str
    target: str
    args: list[str] = field(default_factory=list)

    @property
    def effect(self) -> str:
        return COMMANDS[self.command]


class UserPaths(NamedTuple):
    usrdir: str
    headimgs: tuple[str, str]


def parse_command(text: str) -> GifRequest | None:
    """Recognise "<command>[text]<@user|QQ number|image>"; None when it is not one."""
    m = _COMMAND_RE.match(text)
    if m is None:
        return None
    whole, command, target_part = m.group(0), m.group(1), m.group(2)
    target = (m.group(4) or "") + (m.group(5) or "") + (m.group(6) or "")
    rest = whole[len(command):]
    if rest.endswith(target_part):
        rest = rest[: len(rest) - len(target_part)]
    return GifRequest(command=command, target=target, args=rest.split(" "))


def _is_int64(text: str) -> bool:
    return bool(_INT_RE.fullmatch(text)) and _INT64_MIN <= int(text) <= _INT64_MAX


def logo_url(ident: str) -> str:
    """Avatar URL for a QQ number, or picture URL for an image hash."""
    if _is_int64(ident):
        return "http://q4.qlogo.cn/g?b=qq&nk=" + ident + "&s=640"
    return "https://gchat.qpic.cn/gchatpic_new//--" + ident.upper() + "/0"


def user_paths(datapath: str, user: int) -> UserPaths:
    """Create the user's working folder; return it and the two avatar file paths."""
    usrdir = datapath + "users/" + str(user) + "/"
    os.makedirs(usrdir, exist_ok=True)
    return UserPaths(usrdir, (usrdir + "0.gif", usrdir + "1.gif"))


def material_url(name: str) -> str:
    """Where a material picture is downloaded from."""
    return MATERIALS + name