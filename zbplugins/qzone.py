"""Storage of QQ zone logins and of confession-wall posts awaiting review."""

from __future__ import annotations

import re
import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime
from enum import IntEnum
from pathlib import Path

LOVE_TAG = "表白"
PAGE_SIZE = 5
FACE_URL = "http://q4.qlogo.cn/g?b=qq&nk={}&s=640"
ANONYMOUS_URL = "https://gitcode.net/anto_july/avatar/-/raw/master/{}.png"

_REVIEW_IDS = re.compile(r"(?:\d+,){0,8}\d+")

_SCHEMA = """
CREATE TABLE IF NOT EXISTS qzone_config (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    qq INTEGER NOT NULL UNIQUE,
    cookie VARCHAR(1024) NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS emotion (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    anonymous INTEGER NOT NULL DEFAULT 0,
    qq INTEGER NOT NULL DEFAULT 0,
    msg TEXT NOT NULL DEFAULT '',
    status INTEGER NOT NULL DEFAULT 0,
    tag TEXT NOT NULL DEFAULT ''
);
"""


class NotLoggedInError(LookupError):
    """No QQ zone login is stored for the account."""


class EmotionStatus(IntEnum):
    """Review state of a confession-wall post."""

    WAITING = 1
    AGREED = 2
    REJECTED = 3


_STATUS_TEXT = {
    EmotionStatus.WAITING: "审核中",
    EmotionStatus.AGREED: "同意",
    EmotionStatus.REJECTED: "拒绝",
}

_STATUS_WORDS = {
    "等待": int(EmotionStatus.WAITING),
    "同意": int(EmotionStatus.AGREED),
    "拒绝": int(EmotionStatus.REJECTED),
    "所有": 0,
}


@dataclass(frozen=True)
class QzoneConfig:
    """The login cookie stored for an account."""

    qq: int
    cookie: str


@dataclass(frozen=True)
class Emotion:
    """A post submitted to the confession wall."""

    qq: int
    msg: str
    status: int = EmotionStatus.WAITING
    tag: str = LOVE_TAG
    anonymous: bool = False
    id: int = 0
    created_at: datetime | None = None

    def text_brief(self) -> str:
        """Return the summary shown to reviewers."""
        created = self.created_at.strftime("%Y-%m-%d %H:%M:%S") if self.created_at else ""
        text = f"序号: {self.id}\nQQ: {self.qq}\n创建时间: {created}\n"
        try:
            text += f"状态: {_STATUS_TEXT[EmotionStatus(self.status)]}\n"
        except ValueError:
            pass
        return text + ("匿名: 是" if self.anonymous else "匿名: 否")


def _row_to_emotion(row: tuple) -> Emotion:
    ident, created_at, anonymous, qq, msg, status, tag = row
    return Emotion(
        qq=qq,
        msg=msg,
        status=status,
        tag=tag,
        anonymous=bool(anonymous),
        id=ident,
        created_at=datetime.fromisoformat(created_at),
    )


_EMOTION_COLUMNS = "id, created_at, anonymous, qq, msg, status, tag"


class QzoneStore:
    """SQLite store of QQ zone cookies and confession-wall posts."""

    def __init__(self, path: str | Path):
        self._db = sqlite3.connect(str(path))
        self._db.executescript(_SCHEMA)
        self._db.commit()

    def __enter__(self) -> QzoneStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def insert_or_update(self, qq: int, cookie: str) -> None:
        """Store the cookie of an account, replacing any earlier one."""
        with self._db:
            self._db.execute(
                "INSERT INTO qzone_config (qq, cookie) VALUES (?, ?) "
                "ON CONFLICT(qq) DO UPDATE SET cookie = excluded.cookie",
                (qq, cookie),
            )

    def get_by_uin(self, qq: int) -> QzoneConfig:
        """Return the stored login of an account; raises NotLoggedInError if absent."""
        row = self._db.execute(
            "SELECT qq, cookie FROM qzone_config WHERE qq = ? LIMIT 1", (qq,)
        ).fetchone()
        if row is None:
            raise NotLoggedInError(f"no qzone login for {qq}")
        return QzoneConfig(row[0], row[1])

    def save_emotion(self, emotion: Emotion) -> int:
        """Store a new post and return its id."""
        created = emotion.created_at if emotion.created_at is not None else datetime.now()
        stamp = created.isoformat()
        with self._db:
            cursor = self._db.execute(
                "INSERT INTO emotion (created_at, updated_at, anonymous, qq, msg, status, tag) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    stamp,
                    datetime.now().isoformat(),
                    int(emotion.anonymous),
                    emotion.qq,
                    emotion.msg,
                    int(emotion.status),
                    emotion.tag,
                ),
            )
        return int(cursor.lastrowid)

    def get_emotions_by_ids(self, ids: Iterable[int]) -> list[Emotion]:
        """Return the posts with the given ids, in id order."""
        wanted = list(ids)
        if not wanted:
            return []
        marks = ", ".join("?" for _ in wanted)
        rows = self._db.execute(
            f"SELECT {_EMOTION_COLUMNS} FROM emotion WHERE id IN ({marks}) ORDER BY id",
            wanted,
        ).fetchall()
        return [_row_to_emotion(row) for row in rows]

    def get_love_emotions(self, status: int, page: int) -> list[Emotion]:
        """Return one page of confession posts, newest first; status 0 means any status."""
        params: list[object] = []
        where = "tag LIKE ?"
        if status != 0:
            where = "status = ? AND " + where
            params.append(int(status))
        params.extend([f"%{LOVE_TAG}%", PAGE_SIZE, page * PAGE_SIZE])
        rows = self._db.execute(
            f"SELECT {_EMOTION_COLUMNS} FROM emotion WHERE {where} "
            "ORDER BY created_at DESC LIMIT ? OFFSET ?",
            params,
        ).fetchall()
        return [_row_to_emotion(row) for row in rows]

    def update_status(self, ids: Iterable[int], status: int) -> None:
        """Set the review status of the posts with the given ids."""
        wanted = list(ids)
        if not wanted:
            return
        marks = ", ".join("?" for _ in wanted)
        with self._db:
            self._db.execute(
                f"UPDATE emotion SET status = ?, updated_at = ? WHERE id IN ({marks})",
                [int(status), datetime.now().isoformat(), *wanted],
            )

    def close(self) -> None:
        self._db.close()


def parse_review_ids(text: str) -> list[int]:
    """Parse a comma-joined list of one to nine post ids; raises ValueError otherwise."""
    if _REVIEW_IDS.fullmatch(text) is None:
        raise ValueError(f"bad id list: {text!r}")
    return [int(part) for part in text.split(",")]


def status_from_word(word: str) -> int:
    """Map a review word to a status; "所有" gives 0 (any) and unknown words mean waiting."""
    return _STATUS_WORDS.get(word, int(EmotionStatus.WAITING))


def anonymized(emotion: Emotion) -> Emotion:
    """Return the post as published: anonymous posts lose their author."""
    return replace(emotion, qq=0) if emotion.anonymous else emotion