"""Combine two emoji into one Emoji Kitchen picture."""

from __future__ import annotations

import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Callable, Mapping, Sequence

_BED = "https://www.gstatic.com/android/keyboard/emojikitchen/{date}/u{a:x}/u{a:x}_u{b:x}.png"

_BASE_DATE = 20201001
_BASE_EMOJIS = (
    128516, 128512, 128578, 128579, 128521, 128522, 128518, 128515, 128513, 129315,
    128517, 128514, 128519, 129392, 128525, 128536, 129321, 128535, 128538, 128537,
    128539, 128541, 128523, 129394, 129297, 128540, 129303, 129323, 129300, 129325,
    129320, 129296, 128528, 128529, 128566, 129322, 128527, 128530, 128580, 128556,
    129317, 128524, 128532, 128554, 129316, 128564, 128567, 129298, 129301, 129314,
    129326, 129319, 129397, 129398, 128565, 129396, 129327, 129312, 129395, 129400,
    129488, 128526, 128533, 128543, 128577, 128559, 128562, 129299, 128563, 129402,
    128551, 128552, 128550, 128560, 128549, 128557, 128553, 128546, 128547, 128544,
    128531, 128534, 129324, 128542, 128555, 128548, 129393, 128169, 128545, 128561,
    128127, 128128, 128125, 128520, 129313, 128123, 129302, 128175, 128064, 127801,
    127804, 127799, 127797, 127821, 127874, 129473, 129440, 128144, 127789, 128139,
    127875, 129472, 9749, 127882, 127880, 9924, 128142, 127794, 128584, 128148,
    128140, 128152, 128159, 128158, 128147, 128149, 128151, 129505, 128155, 128156,
    128154, 128153, 129294, 129293, 128420, 128150, 128157, 128240, 128302, 128081,
    128055, 127771, 129420, 128171, 128049, 129409, 128293, 129415, 127752, 128053,
    128029, 128034, 128025, 129433, 128060, 128040, 129445, 128048, 129428, 128045,
    127757, 127774, 127775, 11088, 127772, 129361,
)
_LATER_EMOJIS = {
    20210218: (128558, 127800, 129410, 10084, 128012),
    20210521: (127911, 129668, 127819),
    20210831: (127751, 127838, 129412, 128038, 129417, 128016, 128059, 128031, 127827),
    20211115: (127873, 129717, 127942, 128054, 128041, 129437, 128039, 127820, 127818),
}

EMOJIS: dict[int, int] = {code: _BASE_DATE for code in _BASE_EMOJIS}
for _date, _codes in _LATER_EMOJIS.items():
    EMOJIS.update((code, _date) for code in _codes)

QQ_FACES: dict[int, int] = {
    0: 128558, 1: 128556, 2: 128525, 4: 128526, 5: 128557, 6: 129402, 7: 129296,
    8: 128554, 11: 128545, 12: 128539, 13: 128513, 14: 128578, 15: 128577,
    16: 128526, 19: 129326, 20: 129325, 21: 128522, 23: 128533, 24: 128523,
    27: 128531, 28: 128516, 31: 129324, 32: 129300, 33: 129323, 34: 128565,
    35: 128547, 37: 128128, 46: 128055, 53: 127874, 59: 128169, 60: 9749,
    63: 127801, 66: 10084, 67: 128148, 69: 127873, 74: 127774, 75: 127772,
    96: 128517, 104: 129393, 109: 128535, 110: 128562, 111: 129402, 172: 128539,
    182: 128514, 187: 128123, 247: 128567, 272: 128579, 320: 129395, 325: 128561,
}


@dataclass(frozen=True)
class Segment:
    """One message segment: a type such as "text" or "face" and its data."""

    type: str
    data: Mapping[str, str] = field(default_factory=dict)


def face_to_emoji(segment: Segment) -> int:
    """Code point a segment stands for, or 0 when it is not a single emoji or known face."""
    if segment.type == "text":
        text = segment.data.get("text", "")
        return ord(text) if len(text) == 1 else 0
    if segment.type != "face":
        return 0
    try:
        face_id = int(segment.data.get("id", ""), 10)
    except ValueError:
        return 0
    return QQ_FACES.get(face_id, 0)


def match(segments: Sequence[Segment], raw_message: str) -> tuple[int, int] | None:
    """The pair of mixable code points in a message, or None."""
    if len(segments) == 2:
        first = face_to_emoji(segments[0])
        second = face_to_emoji(segments[1])
        if first in EMOJIS and second in EMOJIS:
            return first, second
        return None
    if len(raw_message) == 2:
        first, second = (ord(ch) for ch in raw_message)
        if first in EMOJIS and second in EMOJIS:
            return first, second
    return None


def mix_urls(first: int, second: int) -> tuple[str, str]:
    """The two candidate picture URLs for a pair, in the order they are tried."""
    for code in (first, second):
        if code not in EMOJIS:
            raise ValueError(f"not a mixable emoji: U+{code:04X}")
    return (
        _BED.format(date=EMOJIS[first], a=first, b=second),
        _BED.format(date=EMOJIS[second], a=second, b=first),
    )


def _head_ok(url: str) -> bool:
    request = urllib.request.Request(url, method="HEAD")
    with urllib.request.urlopen(request, timeout=10) as response:
        return response.status == 200


def find_mix(
    first: int,
    second: int,
    exists: Callable[[str], bool] | None = None,
) -> str | None:
    """The first candidate URL that exists, or None."""
    check = exists or _head_ok
    for url in mix_urls(first, second):
        try:
            if check(url):
                return url
        except (OSError, urllib.error.URLError):
            continue
    return None