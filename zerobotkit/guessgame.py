"""One round of the song guessing game: song names, audio clips and answers."""

from __future__ import annotations

import os
import re
import subprocess
from dataclasses import dataclass

MUSIC_TYPES = "mp3;MP3;wav;WAV;amr;AMR;3gp;3GP;3gpp;3GPP;acc;ACC"
CUT_TIMES = ("00:00:05", "00:00:30", "00:01:00")
CLIP_SECONDS = "10"
LAST_CLIP = 2
MAX_WRONG_ANSWERS = 6

START_TEXT = (
    "正在准备歌曲,请稍等\n回答“-[歌曲信息(歌名歌手等)|提示|取消]”\n一共3段语音，6次机会"
)
TIMEOUT_TEXT = "时间超时，猜歌结束，公布答案：\n"

_ANSWER_RE = re.compile(r"-[^ \t\n\f\r]+")


@dataclass(frozen=True)
class MusicInfo:
    """What a song file name says about the song: "title - singer - other.ext"."""

    title: str
    singer: str
    alias: str = ""

    @property
    def answer_string(self) -> str:
        """The answer text revealed at the end of a round."""
        text = "歌名:" + self.title + "\n歌手:" + self.singer
        if self.alias:
            text += "\n其他信息:\n" + self.alias.replace("&", "\n")
        return text


def parse_music_name(name: str) -> MusicInfo:
    """Read the song information from a file name; raise ValueError when it cannot."""
    suffix = name.split(".")[-1]
    if suffix not in MUSIC_TYPES:
        raise ValueError(
            "抽取到了歌曲：\n" + name + "\n该歌曲不是音乐后缀，请联系bot主人修改"
        )
    parts = name.replace("." + suffix, "").split(" - ")
    if len(parts) == 1:
        raise ValueError(
            "抽取到了歌曲：\n" + name + "\n该歌曲命名不符合命名规则，请联系bot主人修改"
        )
    alias = parts[2] if len(parts) > 2 else ""
    return MusicInfo(title=parts[0], singer=parts[1], alias=alias)


def cut_music(music_name: str, music_dir: str, output_dir: str) -> list[str]:
    """Cut three ten-second clips of a song with ffmpeg; return their paths."""
    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as exc:
        raise RuntimeError(f"[生成歌曲目录错误]ERROR: {exc}") from exc
    outputs = [os.path.join(output_dir, f"{i}.wav") for i in range(len(CUT_TIMES))]
    args = ["ffmpeg", "-y", "-i", os.path.join(music_dir, music_name)]
    for start, out in zip(CUT_TIMES, outputs):
        args += ["-ss", start, "-t", CLIP_SECONDS, out]
    args.append("-hide_banner")
    try:
        result = subprocess.run(
            args, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE, check=False
        )
    except OSError as exc:
        raise RuntimeError(f"[生成歌曲错误]ERROR: {exc}") from exc
    if result.returncode != 0:
        stderr = (result.stderr or b"").decode("utf-8", errors="replace")
        raise RuntimeError("[生成歌曲错误]ERROR: " + stderr)
    return outputs


@dataclass(frozen=True)
class Outcome:
    """What the bot does after an event: text to reply, a clip to play, whether it ended."""

    text: str = ""
    clip: int | None = None
    finished: bool = False
    play_full: bool = False


class GuessGame:
    """The state of one guessing round; clip 0 is played when the round starts."""

    def __init__(self, info: MusicInfo, starter: int) -> None:
        self.info = info
        self.starter = starter
        self.clip_count = 0
        self.answer_count = 0
        self.finished = False

    def _end(self, text: str) -> Outcome:
        self.finished = True
        return Outcome(text=text, finished=True, play_full=True)

    def _win(self, what: str) -> Outcome:
        return self._end(
            "太棒了，你猜对" + what + "了！答案是\n" + self.info.answer_string
            + "\n\n下面欣赏猜歌的歌曲"
        )

    @staticmethod
    def _matches(field: str, answer: str) -> bool:
        return answer in field or field.casefold() == answer.casefold()

    def answer(self, user_id: int, text: str) -> Outcome:
        """Handle a reply of the form "-xxx" from ``user_id``."""
        if self.finished:
            raise RuntimeError("the round is over")
        if not _ANSWER_RE.match(text):
            raise ValueError("an answer must start with '-'")
        answer = text.replace("-", "", 1)

        if answer == "取消":
            if user_id == self.starter:
                return self._end(
                    "游戏已取消，猜歌答案是\n" + self.info.answer_string
                    + "\n\n\n下面欣赏猜歌的歌曲"
                )
            return Outcome(text="你无权限取消")
        if answer == "提示":
            self.clip_count += 1
            if self.clip_count > LAST_CLIP:
                return Outcome(text="已经没有提示了哦")
            return Outcome(text="再听这段音频，要仔细听哦", clip=self.clip_count)
        if self._matches(self.info.title, answer):
            return self._win("歌曲名")
        if self._matches(self.info.singer, answer):
            return self._win("歌手名")
        if self._matches(self.info.alias, answer):
            return self._win("出处")

        self.clip_count += 1
        if self.clip_count > LAST_CLIP:
            if self.answer_count < MAX_WRONG_ANSWERS:
                self.answer_count += 1
                return Outcome(text="答案不对哦，加油啊~")
            return self._end(
                "次数到了，没能猜出来。答案是\n" + self.info.answer_string
                + "\n\n下面欣赏猜歌的歌曲"
            )
        self.answer_count += 1
        return Outcome(text="答案不对，再听这段音频，要仔细听哦", clip=self.clip_count)

    def timeout(self) -> Outcome:
        """Handle a long silence: play the next clip while there is one."""
        if self.finished:
            raise RuntimeError("the round is over")
        self.clip_count += 1
        if self.clip_count > LAST_CLIP:
            return Outcome()
        return Outcome(text="好像有些难度呢，再听这段音频，要仔细听哦", clip=self.clip_count)