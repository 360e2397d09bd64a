"""Parsing of run-code commands and trimming of program output."""

from __future__ import annotations

import re

TRUNCATION_MARK = "\n............\n............"
MAX_LINES = 30
MAX_CHARS = 1000

_COMMAND = re.compile(r"^>runcode(raw)?\s(.+?)\s([\s\S]+)$")


def _unescape_cq_text(text: str) -> str:
    return text.replace("&#91;", "[").replace("&#93;", "]").replace("&amp;", "&")


def cut_too_long(text: str) -> str:
    """Cut output past 30 line breaks or 1000 characters and mark the cut."""
    count = 0
    for i, ch in enumerate(text):
        if ch == "\r" and i < len(text) - 1 and text[i + 1] == "\n":
            pass  # the following "\n" counts for the pair
        elif ch in "\n\r":
            count += 1
        if count > MAX_LINES or i > MAX_CHARS:
            return text[: i - 1] + TRUNCATION_MARK
    return text


def parse_command(text: str) -> tuple[bool, str, str]:
    """Split a ">runcode[raw] lang code" command into (raw, language, code).

    Raises ValueError when the text is not such a command.
    """
    found = _COMMAND.match(text)
    if found is None:
        raise ValueError(f"not a runcode command: {text!r}")
    raw = found.group(1) is not None
    return raw, found.group(2).lower(), _unescape_cq_text(found.group(3))