"""Description of an anime scene search hit."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _format_f32(value: float) -> str:
    value = _f32(value)
    if value == int(value) and abs(value) < 1e21:
        return str(int(value))
    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        if _f32(float(text)) == value:
            return text
    return repr(value)


@dataclass(frozen=True)
class SearchHit:
    """The best match of a scene search."""

    similarity: float
    from_: float
    to: float
    episode: Any
    title: str
    image: str = ""

    def describe(self) -> str:
        """Return the text sent with the hit's preview image."""
        hint = "我有把握是这个！" if self.similarity >= 80 else "大概是这个？"
        start, end = _f32(self.from_), _f32(self.to)
        mf, mt = int(start / 60), int(end / 60)
        sf, st = _f32(start - mf * 60), _f32(end - mt * 60)
        return (
            f"{hint}\n"
            f"番剧名：{self.title}\n"
            f"话数：{self.episode}\n"
            f"时间：{mf}:{_format_f32(sf)}-{mt}:{_format_f32(st)}"
        )