"""Storage and retrieval of VTuber voice quotations, grouped in three levels."""

from __future__ import annotations

import json
import random
import re
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

VTB_LIST_URL = "https://vtbkeyboard.moe/api/get_vtb_list"
VTB_PAGE_URL = "https://vtbkeyboard.moe/api/get_vtb_page"

FIRST_HEADER = "请选择一个vtb并发送序号:\n"
SECOND_HEADER = "请选择一个语录类别并发送序号:\n"
THIRD_HEADER = "请选择一个语录并发送序号:\n"

_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/96.0.4664.110 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64; rv:109.0) Gecko/20100101 Firefox/115.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/16.1 Safari/605.1.15",
)

_UNICODE_ESCAPE = re.compile(r"\\u([0-9a-fA-F]{4})")

_SCHEMA = """
CREATE TABLE IF NOT EXISTS first_category (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    first_category_index INTEGER NOT NULL DEFAULT 0,
    first_category_name TEXT NOT NULL DEFAULT '',
    first_category_uid TEXT NOT NULL DEFAULT '',
    first_category_description VARCHAR(1024) NOT NULL DEFAULT '',
    first_category_icon_path TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS second_category (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    second_category_index INTEGER NOT NULL DEFAULT 0,
    first_category_uid TEXT NOT NULL DEFAULT '',
    second_category_name TEXT NOT NULL DEFAULT '',
    second_category_author TEXT NOT NULL DEFAULT '',
    second_category_description TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS third_category (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    third_category_index INTEGER NOT NULL DEFAULT 0,
    second_category_index INTEGER NOT NULL DEFAULT 0,
    first_category_uid TEXT NOT NULL DEFAULT '',
    third_category_name TEXT NOT NULL DEFAULT '',
    third_category_path TEXT NOT NULL DEFAULT '',
    third_category_author TEXT NOT NULL DEFAULT '',
    third_category_description TEXT NOT NULL DEFAULT ''
);
"""


@dataclass(frozen=True)
class FirstCategory:
    """A VTuber."""

    index: int
    name: str
    uid: str
    description: str = ""
    icon_path: str = ""
    id: int = 0


@dataclass(frozen=True)
class SecondCategory:
    """A category of quotations of one VTuber."""

    index: int
    first_uid: str
    name: str
    author: str = ""
    description: str = ""
    id: int = 0


@dataclass(frozen=True)
class ThirdCategory:
    """One voice quotation."""

    index: int
    second_index: int
    first_uid: str
    name: str
    path: str = ""
    author: str = ""
    description: str = ""
    id: int = 0


def _now() -> str:
    return datetime.now().isoformat()


def _get(item: Any, path: str) -> Any:
    value = item
    for key in path.split("."):
        if isinstance(value, dict):
            value = value.get(key)
        elif isinstance(value, list) and key.isdigit() and int(key) < len(value):
            value = value[int(key)]
        else:
            return None
    return value


def _text(item: Any, path: str) -> str:
    value = _get(item, path)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, ensure_ascii=False)


def _decode_body(raw: bytes) -> Any:
    """Parse a response body, resolving \\uXXXX escapes even where they are doubly escaped."""
    text = raw.decode("utf-8", "replace")
    text = _UNICODE_ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), text)
    text = text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")
    return json.loads(text, strict=False)


def _get_json(url: str, params: dict[str, str] | None = None) -> Any:
    import requests

    response = requests.get(
        url,
        params=params,
        headers={"User-Agent": random.choice(_USER_AGENTS)},
        timeout=30,
    )
    return _decode_body(response.content)


def fetch_vtb_list() -> list[Any]:
    """Download the list of VTubers."""
    data = _get_json(VTB_LIST_URL)
    return data if isinstance(data, list) else []


def fetch_vtb_page(uid: str) -> dict[str, Any]:
    """Download the quotation page of one VTuber."""
    data = _get_json(VTB_PAGE_URL, {"uid": uid})
    return data if isinstance(data, dict) else {}


_FIRST_COLUMNS = (
    "first_category_index, first_category_name, first_category_uid, "
    "first_category_description, first_category_icon_path, id"
)
_THIRD_COLUMNS = (
    "third_category_index, second_category_index, first_category_uid, third_category_name, "
    "third_category_path, third_category_author, third_category_description, id"
)


class VtbStore:
    """SQLite store of VTubers, their quotation categories and quotations."""

    def __init__(self, path: str | Path):
        self._db = sqlite3.connect(str(path))
        self._db.executescript(_SCHEMA)
        self._db.commit()

    def __enter__(self) -> VtbStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _first_uid_by_index(self, first_index: int) -> str:
        row = self._db.execute(
            "SELECT first_category_uid FROM first_category WHERE first_category_index = ? "
            "ORDER BY id LIMIT 1",
            (first_index,),
        ).fetchone()
        return row[0] if row else ""

    def first_category_message(self) -> str:
        """Return the menu of all VTubers."""
        rows = self._db.execute(
            "SELECT first_category_index, first_category_name FROM first_category ORDER BY id"
        ).fetchall()
        return FIRST_HEADER + "".join(f"{index}. {name}\n" for index, name in rows)

    def second_category_message(self, first_index: int) -> str:
        """Return the menu of a VTuber's categories, or "" when there are none."""
        uid = self._first_uid_by_index(first_index)
        rows = self._db.execute(
            "SELECT second_category_index, second_category_name FROM second_category "
            "WHERE first_category_uid = ? ORDER BY id",
            (uid,),
        ).fetchall()
        if not rows:
            return ""
        return SECOND_HEADER + "".join(f"{index}. {name}\n" for index, name in rows)

    def third_category_message(self, first_index: int, second_index: int) -> str:
        """Return the menu of quotations in a category, or "" when there are none."""
        uid = self._first_uid_by_index(first_index)
        rows = self._db.execute(
            "SELECT third_category_index, third_category_name FROM third_category "
            "WHERE first_category_uid = ? AND second_category_index = ? ORDER BY id",
            (uid, second_index),
        ).fetchall()
        if not rows:
            return ""
        return THIRD_HEADER + "".join(f"{index}. {name}\n" for index, name in rows)

    def third_category(
        self, first_index: int, second_index: int, third_index: int
    ) -> ThirdCategory | None:
        """Return the quotation chosen through the three menus, or None."""
        uid = self._first_uid_by_index(first_index)
        row = self._db.execute(
            f"SELECT {_THIRD_COLUMNS} FROM third_category WHERE first_category_uid = ? "
            "AND second_category_index = ? AND third_category_index = ? LIMIT 1",
            (uid, second_index, third_index),
        ).fetchone()
        return ThirdCategory(*row) if row else None

    def random_vtb(self, rng: random.Random | None = None) -> ThirdCategory | None:
        """Return a random quotation, or None when there are none."""
        rng = rng if rng is not None else random.Random()
        (count,) = self._db.execute("SELECT COUNT(*) FROM third_category").fetchone()
        if count == 0:
            return None
        row = self._db.execute(
            f"SELECT {_THIRD_COLUMNS} FROM third_category ORDER BY id LIMIT 1 OFFSET ?",
            (rng.randrange(count),),
        ).fetchone()
        return ThirdCategory(*row) if row else None

    def first_category_by_uid(self, uid: str) -> FirstCategory | None:
        """Return the VTuber with the given uid, or None."""
        row = self._db.execute(
            f"SELECT {_FIRST_COLUMNS} FROM first_category WHERE first_category_uid = ? LIMIT 1",
            (uid,),
        ).fetchone()
        return FirstCategory(*row) if row else None

    def store_vtb_list(self, items: list[Any]) -> list[str]:
        """Insert or update the VTubers of a downloaded list; return their uids in order."""
        uids = []
        if not isinstance(items, list):
            return uids
        with self._db:
            for index, item in enumerate(items):
                uid = _text(item, "uid")
                values = (
                    index,
                    _text(item, "name"),
                    _text(item, "description"),
                    _text(item, "icon_path"),
                )
                exists = self._db.execute(
                    "SELECT 1 FROM first_category WHERE first_category_uid = ? LIMIT 1", (uid,)
                ).fetchone()
                if exists is None:
                    stamp = _now()
                    self._db.execute(
                        "INSERT INTO first_category (created_at, updated_at, "
                        "first_category_index, first_category_name, "
                        "first_category_description, first_category_icon_path, "
                        "first_category_uid) VALUES (?, ?, ?, ?, ?, ?, ?)",
                        (stamp, stamp, *values, uid),
                    )
                else:
                    self._db.execute(
                        "UPDATE first_category SET updated_at = ?, first_category_index = ?, "
                        "first_category_name = ?, first_category_description = ?, "
                        "first_category_icon_path = ? WHERE first_category_uid = ?",
                        (_now(), *values, uid),
                    )
                uids.append(uid)
        return uids

    def store_vtb_page(self, uid: str, page: dict[str, Any]) -> None:
        """Insert or update the categories and quotations of one VTuber's page."""
        voices = _get(page, "data.voices")
        if not isinstance(voices, list):
            return
        with self._db:
            for second_index, second in enumerate(voices):
                self._store_second(uid, second_index, second)
                voice_list = _get(second, "voiceList")
                if not isinstance(voice_list, list):
                    continue
                for third_index, third in enumerate(voice_list):
                    self._store_third(uid, second_index, third_index, third)

    def _store_second(self, uid: str, second_index: int, item: Any) -> None:
        values = (
            _text(item, "categoryName"),
            _text(item, "author"),
            _text(item, "categoryDescription.zh-CN"),
        )
        key = (uid, second_index)
        exists = self._db.execute(
            "SELECT 1 FROM second_category WHERE first_category_uid = ? "
            "AND second_category_index = ? LIMIT 1",
            key,
        ).fetchone()
        if exists is None:
            stamp = _now()
            self._db.execute(
                "INSERT INTO second_category (created_at, updated_at, second_category_name, "
                "second_category_author, second_category_description, first_category_uid, "
                "second_category_index) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (stamp, stamp, *values, *key),
            )
        else:
            self._db.execute(
                "UPDATE second_category SET updated_at = ?, second_category_name = ?, "
                "second_category_author = ?, second_category_description = ? "
                "WHERE first_category_uid = ? AND second_category_index = ?",
                (_now(), *values, *key),
            )

    def _store_third(self, uid: str, second_index: int, third_index: int, item: Any) -> None:
        values = (
            _text(item, "name"),
            _text(item, "description.zh-CN"),
            _text(item, "path"),
            _text(item, "author"),
        )
        key = (uid, second_index, third_index)
        exists = self._db.execute(
            "SELECT 1 FROM third_category WHERE first_category_uid = ? "
            "AND second_category_index = ? AND third_category_index = ? LIMIT 1",
            key,
        ).fetchone()
        if exists is None:
            stamp = _now()
            self._db.execute(
                "INSERT INTO third_category (created_at, updated_at, third_category_name, "
                "third_category_description, third_category_path, third_category_author, "
                "first_category_uid, second_category_index, third_category_index) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (stamp, stamp, *values, *key),
            )
        else:
            self._db.execute(
                "UPDATE third_category SET updated_at = ?, third_category_name = ?, "
                "third_category_description = ?, third_category_path = ?, "
                "third_category_author = ? WHERE first_category_uid = ? "
                "AND second_category_index = ? AND third_category_index = ?",
                (_now(), *values, *key),
            )

    def close(self) -> None:
        self._db.close()