"""Verdicts on image classifier scores."""

from __future__ import annotations

from dataclasses import dataclass

THRESHOLD = 0.3
HSO_IMAGE = "https://gchat.qpic.cn/gchatpic_new//--4234EDEC5F147A4C319A41149D7E0EA9/0"


@dataclass(frozen=True)
class Picture:
    """Class probabilities reported by the image classifier."""

    drawings: float = 0.0
    hentai: float = 0.0
    neutral: float = 0.0
    porn: float = 0.0
    sexy: float = 0.0

    def _flags(self) -> list[str]:
        flags = []
        if self.hentai > THRESHOLD:
            flags.append("hentai")
        if self.porn > THRESHOLD:
            flags.append("porn")
        if self.sexy > THRESHOLD:
            flags.append("hso")
        return flags


def _compose(kind: str, flags: list[str]) -> str:
    return kind + "".join(" " + flag for flag in flags)


def judge(picture: Picture) -> str:
    """Return the verdict text given when someone asks for a rating."""
    if picture.neutral > THRESHOLD:
        return "普通哦"
    if picture.drawings > THRESHOLD or picture.neutral < THRESHOLD:
        kind = "二次元"
    else:
        kind = "三次元"
    return _compose(kind, picture._flags())


def auto_judge(picture: Picture) -> str | None:
    """Return the automatic remark for a picture, or None when it is harmless."""
    if picture.neutral > THRESHOLD:
        return None
    kind = "二次元" if picture.drawings > THRESHOLD else "三次元"
    flags = picture._flags()
    if not flags:
        return None
    return _compose(kind, flags)