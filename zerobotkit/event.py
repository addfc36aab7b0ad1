"""Friend requests and group invitations: auto-approve settings and flags."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import NamedTuple

from .base16384 import decode, encode

_APPLY = 0b001
_INVITE = 0b010
_MASTER_OFF = 0b100

_WS = "[ \t\n\f\r]"
_DECISION_RE = re.compile(
    rf"(同意|拒绝)(申请|邀请){_WS}*([\u4e00-\u8e00]{{4}}){_WS}*(.*)"
)
_TOGGLE_RE = re.compile(r"(开启|关闭)自动同意(申请|邀请|主人)")

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class RequestKind(str, Enum):
    """The two kinds of request the bot receives."""

    FRIEND = "申请"
    INVITE = "邀请"


@dataclass(frozen=True)
class AutoAgree:
    """Auto-approve settings, stored as a small bit field."""

    apply: bool = False
    invite: bool = False
    master_off: bool = False

    @classmethod
    def from_value(cls, value: int) -> "AutoAgree":
        return cls(
            apply=value & _APPLY > 0,
            invite=value & _INVITE > 0,
            master_off=value & _MASTER_OFF > 0,
        )

    @property
    def value(self) -> int:
        return (
            (_APPLY if self.apply else 0)
            | (_INVITE if self.invite else 0)
            | (_MASTER_OFF if self.master_off else 0)
        )

    def with_option(self, target: str, option: str) -> "AutoAgree":
        """Return settings with ``target`` (申请/邀请/主人) switched by ``option`` (开启/关闭)."""
        if option not in ("开启", "关闭"):
            raise ValueError(f"unknown option {option!r}")
        on = option == "开启"
        if target == "申请":
            return replace(self, apply=on)
        if target == "邀请":
            return replace(self, invite=on)
        if target == "主人":
            return replace(self, master_off=not on)
        raise ValueError(f"unknown target {target!r}")


@dataclass(frozen=True)
class Decision:
    """A superuser's answer to a pending request."""

    approve: bool
    kind: RequestKind
    flag: str
    reason: str


class Toggle(NamedTuple):
    option: str
    target: str


def encode_flag(flag: str) -> str:
    """Pack a numeric request flag into four base16384 characters."""
    number = int(flag, 10)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"flag out of range: {flag}")
    raw = (number & 0xFFFF_FFFF_FFFF_FFFF).to_bytes(8, "big")
    return encode(raw[1:])


def decode_flag(text: str) -> str:
    """Recover the numeric request flag from its encoded form."""
    raw = decode(text)[:7]
    buf = b"\0" + raw.ljust(7, b"\0")
    return str(int.from_bytes(buf, "big", signed=True))


def parse_decision(text: str) -> Decision | None:
    """Parse "同意/拒绝 申请/邀请 <flag> [reason]"; None when the text does not match."""
    m = _DECISION_RE.fullmatch(text)
    if m is None:
        return None
    cmd, kind, flag_text, reason = m.groups()
    return Decision(
        approve=cmd == "同意",
        kind=RequestKind(kind),
        flag=decode_flag(flag_text),
        reason=reason,
    )


def parse_toggle(text: str) -> Toggle | None:
    """Parse "开启/关闭自动同意申请/邀请/主人"; None when the text does not match."""
    m = _TOGGLE_RE.fullmatch(text)
    if m is None:
        return None
    return Toggle(option=m.group(1), target=m.group(2))


def should_auto_approve(settings: AutoAgree, kind, from_superuser: bool) -> bool:
    """Whether a request of ``kind`` is approved without asking."""
    kind = RequestKind(kind)
    enabled = settings.apply if kind is RequestKind.FRIEND else settings.invite
    return enabled or (not settings.master_off and from_superuser)


def _format_time(when) -> str:
    if not isinstance(when, datetime):
        when = datetime.fromtimestamp(when)
    return when.strftime("%Y-%m-%d %H:%M:%S")


def format_request_notice(
    kind,
    when,
    username: str,
    userid: int,
    flag_text: str,
    approved: bool,
    comment: str = "",
    groupname: str = "",
    groupid: int = 0,
) -> list[str]:
    """Build the forward-message texts sent to the superuser about a request."""
    kind = RequestKind(kind)
    now = _format_time(when)
    user = "\n用户:[" + username + "](" + str(userid) + ")"
    if kind is RequestKind.INVITE:
        body = user + "的群聊邀请" + "\n群聊:[" + groupname + "](" + str(groupid) + ")"
        hint = "\n同意/拒绝邀请，来决定同意还是拒绝"
    else:
        body = user + "\n的好友请求:" + comment
        hint = "\n同意/拒绝申请，来决定同意还是拒绝"
    if approved:
        return ["已自动同意在" + now + "收到来自" + body + "\nflag:" + flag_text]
    return [
        "在" + now + "收到来自" + body + "\n请在下方复制flag并在前面加上:" + hint,
        flag_text,
    ]