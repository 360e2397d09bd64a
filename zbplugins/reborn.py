"""Reincarnation simulator with weighted birthplaces and genders."""

from __future__ import annotations

import bisect
import json
import random
from collections.abc import Iterable
from pathlib import Path

GENDERS = (("男孩子", 50707), ("女孩子", 48292), ("雌雄同体", 1001))


class _Chooser:
    """Weighted random choice over integer weights."""

    def __init__(self, choices: Iterable[tuple[str, int]]):
        self._items: list[str] = []
        self._totals: list[int] = []
        total = 0
        for item, weight in choices:
            if weight <= 0:
                continue
            total += weight
            self._items.append(item)
            self._totals.append(total)
        if total == 0:
            raise ValueError("no choices with positive weight")
        self._max = total

    def pick(self, rng: random.Random) -> str:
        r = rng.randint(1, self._max)
        return self._items[bisect.bisect_left(self._totals, r)]


def load_rates(path: str | Path) -> list[tuple[str, float]]:
    """Read a list of {"name", "weight"} entries from a JSON file."""
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    return [(entry["name"], float(entry["weight"])) for entry in data]


class Reborn:
    """Draws a birthplace and a gender for a new life."""

    def __init__(self, rates: Iterable[tuple[str, float]], rng: random.Random | None = None):
        self._rng = rng if rng is not None else random.Random()
        self._areas = _Chooser((name, int(weight * 1e9)) for name, weight in rates)
        self._genders = _Chooser(GENDERS)

    def country(self) -> str:
        return self._areas.pick(self._rng)

    def gender(self) -> str:
        return self._genders.pick(self._rng)

    def roll(self) -> str:
        """Return the result text of one attempt at being reborn."""
        if self._rng.getrandbits(31) > 1 << 27:
            return f"投胎成功！\n您出生在 {self.country()}, 是 {self.gender()}。"
        return "投胎失败！\n您没能活到出生，祝您下次好运！"