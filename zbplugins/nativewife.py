"""Per-group galleries of wife pictures and the daily draw from them."""

from __future__ import annotations

import hashlib
import random
import struct
from datetime import date
from pathlib import Path

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


class NoWifeError(LookupError):
    """The group has no wives to draw from."""


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while value:
        value, rest = divmod(value, 36)
        digits.append(_DIGITS[rest])
    return sign + "".join(reversed(digits))


def extract_name(text: str, command: str) -> str:
    """Take the name after the last occurrence of command, with spaces and slashes dropped.

    Raises ValueError when the command does not occur in the text.
    """
    compact = text.replace(" ", "")
    at = compact.rfind(command)
    if at < 0:
        raise ValueError(f"command {command!r} not found")
    name = compact[at + len(command):]
    return name.replace("/", "").replace("\\", "")


class WifeGallery:
    """Wife pictures stored as files in one folder per group."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _folder(self, gid: int) -> Path:
        return self.root / _base36(gid)

    def pick(self, gid: int, nickname: str, today: date | None = None) -> tuple[str, Path]:
        """Return the (name, picture path) drawn for a member on a day.

        The draw depends only on the nickname and the date. Raises NoWifeError
        when the group has no pictures.
        """
        folder = self._folder(gid)
        try:
            names = sorted(entry.name for entry in folder.iterdir())
        except OSError:
            names = []
        if not names:
            raise NoWifeError("一个wife也没有哦~")
        if len(names) == 1:
            return names[0], folder / names[0]
        today = today if today is not None else date.today()
        digest = hashlib.md5(
            f"{nickname}{today.year}{today.month}{today.day}".encode("utf-8")
        ).digest()
        (seed,) = struct.unpack("<q", digest[:8])
        name = names[random.Random(seed).randrange(len(names))]
        return name, folder / name

    def add(self, gid: int, name: str, data: bytes) -> Path:
        """Store a picture under the given name; raises ValueError on an empty name."""
        if not name:
            raise ValueError("没有找到wife的名字！")
        folder = self._folder(gid)
        folder.mkdir(mode=0o755, parents=True, exist_ok=True)
        target = folder / name
        target.write_bytes(data)
        return target

    def remove(self, gid: int, name: str) -> None:
        """Delete a picture; raises ValueError on an empty name, FileNotFoundError if absent."""
        if not name:
            raise ValueError("没有找到wife的名字！")
        (self._folder(gid) / name).unlink()