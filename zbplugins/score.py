"""Daily sign-in scores: storage and the level rules built on them."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

SIGN_IN_MAX = 1
SCORE_MAX = 1200
RANK_ARRAY = (0, 10, 20, 50, 100, 200, 350, 550, 750, 1000, 1200)
BACKGROUND_URL = "https://img.moehu.org/pic.php?id=pc"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS score (
    uid INTEGER PRIMARY KEY,
    score INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS sign_in (
    uid INTEGER PRIMARY KEY,
    count INTEGER NOT NULL DEFAULT 0,
    updated_at TEXT NOT NULL
);
"""


@dataclass(frozen=True)
class ScoreRecord:
    """The level points of one user."""

    uid: int
    score: int = 0


@dataclass(frozen=True)
class SignInRecord:
    """How often a user signed in, and when the record last changed."""

    uid: int
    count: int
    updated_at: datetime


class ScoreStore:
    """SQLite store of user scores and sign-in counts."""

    def __init__(self, path: str | Path):
        self._db = sqlite3.connect(str(path))
        self._db.executescript(_SCHEMA)
        self._db.commit()

    def __enter__(self) -> ScoreStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_score(self, uid: int) -> ScoreRecord:
        """Return the user's score, creating a zero record if there is none."""
        row = self._db.execute("SELECT uid, score FROM score WHERE uid = ?", (uid,)).fetchone()
        if row is None:
            with self._db:
                self._db.execute("INSERT INTO score (uid, score) VALUES (?, 0)", (uid,))
            return ScoreRecord(uid, 0)
        return ScoreRecord(row[0], row[1])

    def set_score(self, uid: int, score: int) -> None:
        """Insert or update the user's score."""
        with self._db:
            self._db.execute(
                "INSERT INTO score (uid, score) VALUES (?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET score = excluded.score",
                (uid, score),
            )

    def get_sign_in(self, uid: int) -> SignInRecord:
        """Return the user's sign-in record, creating an empty one if there is none."""
        row = self._db.execute(
            "SELECT uid, count, updated_at FROM sign_in WHERE uid = ?", (uid,)
        ).fetchone()
        if row is None:
            now = datetime.now()
            with self._db:
                self._db.execute(
                    "INSERT INTO sign_in (uid, count, updated_at) VALUES (?, 0, ?)",
                    (uid, now.isoformat()),
                )
            return SignInRecord(uid, 0, now)
        return SignInRecord(row[0], row[1], datetime.fromisoformat(row[2]))

    def set_sign_in_count(self, uid: int, count: int) -> None:
        """Insert or update the user's sign-in count, stamping it with the current time."""
        now = datetime.now().isoformat()
        with self._db:
            self._db.execute(
                "INSERT INTO sign_in (uid, count, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET count = excluded.count, "
                "updated_at = excluded.updated_at",
                (uid, count, now),
            )

    def top_scores(self, n: int) -> list[ScoreRecord]:
        """Return the n highest scores, highest first."""
        rows = self._db.execute(
            "SELECT uid, score FROM score ORDER BY score DESC LIMIT ?", (n,)
        ).fetchall()
        return [ScoreRecord(uid, score) for uid, score in rows]

    def close(self) -> None:
        self._db.close()


def get_rank(level: int) -> int:
    """Return the rank reached with the given level points, or -1 when out of range."""
    for rank, threshold in enumerate(RANK_ARRAY):
        if level == threshold:
            return rank
        if level < threshold:
            return rank - 1
    return -1


def hour_greeting(hour: int) -> str:
    """Return the greeting for an hour of the day."""
    if 6 <= hour < 12:
        return "早上好"
    if 12 <= hour < 14:
        return "中午好"
    if 14 <= hour < 19:
        return "下午好"
    if 19 <= hour < 24:
        return "晚上好"
    if 0 <= hour < 6:
        return "凌晨好"
    return ""


def next_rank_score(rank: int) -> int:
    """Return the level points needed for the rank after the given one."""
    if rank < 10:
        return RANK_ARRAY[rank + 1]
    return SCORE_MAX