"""Lookup of pinyin-initial abbreviations."""

from __future__ import annotations

import json
from typing import Any

import requests

GUESS_URL = "https://lab.magiconch.com/api/nbnhhsh/guess"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def parse_guess(body: bytes | str) -> list[str]:
    """Extract the meanings from a guess response, falling back to inputting hints."""
    try:
        data = json.loads(body)
    except (ValueError, TypeError):
        return []
    if not isinstance(data, list) or not data or not isinstance(data[0], dict):
        return []
    first = data[0]
    values = first["trans"] if "trans" in first else first.get("inputting")
    if not isinstance(values, list):
        return []
    return [_as_text(v) for v in values]


def guess(text: str) -> list[str]:
    """Ask the service what an abbreviation stands for."""
    response = requests.post(GUESS_URL, data={"text": text}, timeout=30)
    return parse_guess(response.content)