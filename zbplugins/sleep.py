"""Good-night and good-morning bookkeeping for group members."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timedelta
from pathlib import Path

_SCHEMA = """
CREATE TABLE IF NOT EXISTS sleep_manage (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    group_id INTEGER NOT NULL,
    user_id INTEGER NOT NULL,
    sleep_time TEXT NOT NULL
);
"""

_NS_PER_SECOND = 1_000_000_000
_NS_PER_MINUTE = 60 * _NS_PER_SECOND
_NS_PER_HOUR = 60 * _NS_PER_MINUTE


def _stamp(moment: datetime) -> str:
    return moment.isoformat(sep=" ", timespec="microseconds")


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


class SleepStore:
    """SQLite store of the last time each group member said good night or good morning."""

    def __init__(self, path: str | Path):
        self._db = sqlite3.connect(str(path))
        self._db.executescript(_SCHEMA)
        self._db.commit()

    def __enter__(self) -> SleepStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _record(self, gid: int, uid: int, now: datetime, since: datetime) -> tuple[int, timedelta]:
        elapsed = timedelta(0)
        row = self._db.execute(
            "SELECT id, sleep_time FROM sleep_manage WHERE group_id = ? AND user_id = ? "
            "ORDER BY id LIMIT 1",
            (gid, uid),
        ).fetchone()
        with self._db:
            if row is None:
                self._db.execute(
                    "INSERT INTO sleep_manage (group_id, user_id, sleep_time) VALUES (?, ?, ?)",
                    (gid, uid, _stamp(now)),
                )
            else:
                elapsed = now - datetime.fromisoformat(row[1])
                self._db.execute(
                    "UPDATE sleep_manage SET sleep_time = ? WHERE group_id = ? AND user_id = ?",
                    (_stamp(now), gid, uid),
                )
        (position,) = self._db.execute(
            "SELECT COUNT(*) FROM sleep_manage "
            "WHERE group_id = ? AND sleep_time <= ? AND sleep_time >= ?",
            (gid, _stamp(now), _stamp(since)),
        ).fetchone()
        return position, elapsed

    def sleep(self, gid: int, uid: int, now: datetime | None = None) -> tuple[int, timedelta]:
        """Record a good night; return (place among tonight's sleepers, time awake)."""
        now = now if now is not None else datetime.now()
        clock = timedelta(minutes=now.minute, seconds=now.second)
        if now.hour >= 21:
            since = now - timedelta(hours=now.hour - 21) - clock
        elif now.hour <= 3:
            since = now - timedelta(hours=3 + now.hour) - clock
        else:
            since = datetime.min
        return self._record(gid, uid, now, since)

    def get_up(self, gid: int, uid: int, now: datetime | None = None) -> tuple[int, timedelta]:
        """Record a good morning; return (place among today's risers, time asleep)."""
        now = now if now is not None else datetime.now()
        since = now - timedelta(hours=now.hour - 6, minutes=now.minute, seconds=now.second)
        return self._record(gid, uid, now, since)

    def close(self) -> None:
        self._db.close()


def split_duration(seconds: float) -> tuple[int, int, int]:
    """Split a span of seconds into whole (hours, minutes, seconds), truncating toward zero."""
    ns = int(seconds * _NS_PER_SECOND)
    hour = _tdiv(ns, _NS_PER_HOUR)
    minute = _tdiv(ns - hour * _NS_PER_HOUR, _NS_PER_MINUTE)
    second = _tdiv(ns - hour * _NS_PER_HOUR - minute * _NS_PER_MINUTE, _NS_PER_SECOND)
    return hour, minute, second


def is_morning(hour: int) -> bool:
    """Good mornings count from 6 to 12 o'clock."""
    return 6 <= hour <= 12


def is_evening(hour: int) -> bool:
    """Good nights count from 21 o'clock to 3 o'clock."""
    return hour >= 21 or hour <= 3