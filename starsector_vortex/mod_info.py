"""
Reading Starsector's mod_info.json.

The game's own JSON reader accepts a looser dialect than the standard:
unquoted keys, trailing commas, single-quoted strings, and '#' comments.
json5 covers everything except the comments, so those are stripped first
by a small scanner that knows not to touch anything inside a string.

Comment forms, all only outside quotes:
    # to end of line
    ## to end of line
    #inline# closed by the next '#' on the same line
    #* block, may span lines *#
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Any

import json5

from .config import MOD_INFO_FILE

logger = logging.getLogger(__name__)

_LINE_BREAKS = "\r\n"


class ManifestSyntaxError(ValueError):
    """mod_info.json could not be parsed even with the relaxed dialect."""


class _State(enum.Enum):
    UNQUOTED = enum.auto()
    SINGLE = enum.auto()
    DOUBLE = enum.auto()
    ESCAPED = enum.auto()


def strip_comments(text: str) -> str:
    """Remove '#' comments from text, leaving quoted strings intact."""
    out = []
    state = _State.UNQUOTED
    quoted_state = _State.DOUBLE             # state to return to after an escape
    i = 0
    while i < len(text):
        ch = text[i]

        if state is _State.ESCAPED:
            out.append(ch)
            state = quoted_state
        elif state is not _State.UNQUOTED:
            out.append(ch)
            if ch == "\\":
                state = _State.ESCAPED
            elif ch == ("'" if state is _State.SINGLE else '"'):
                state = _State.UNQUOTED
        elif ch == "#":
            i = _comment_end(text, i)
            continue
        else:
            out.append(ch)
            if ch in "'\"":
                state = _State.SINGLE if ch == "'" else _State.DOUBLE
                quoted_state = state

        i += 1

    return "".join(out)


def _comment_end(text: str, start: int) -> int:
    """Index just past the comment opened at text[start]; line breaks are kept."""
    line_end = start
    while line_end < len(text) and text[line_end] not in _LINE_BREAKS:
        line_end += 1

    opener = text[start + 1:start + 2]
    if opener == "*":
        close = text.find("*#", start + 2)
        return len(text) if close == -1 else close + 2
    if opener == "#":
        return line_end

    # Look for a closing '#' on the same line; backslash escapes one char
    i = start + 1
    while i < line_end:
        if text[i] == "\\":
            i += 2
        elif text[i] == "#":
            return i + 1
        else:
            i += 1
    return line_end


def parse_mod_info(text: str) -> Any:
    """
    Parse mod_info.json text.

    Raises:
        ManifestSyntaxError: if the text is not valid even as JSON5 once
            comments are gone.
    """
    try:
        return json5.loads(strip_comments(text))
    except (ValueError, RecursionError) as e:
        raise ManifestSyntaxError(str(e)) from e


def read_mod_info(path: Path) -> Any:
    """
    Read and parse a mod_info.json file from disk.

    Bytes that are not valid UTF-8 become U+FFFD rather than failing the read.
    """
    text = Path(path).read_text(encoding="utf-8-sig", errors="replace")
    return parse_mod_info(text)


def get_attr(manifest: dict, key: str) -> str:
    """
    Fetch an optional attribute as a string.

    Missing values come back as "" so a sparse mod_info.json never blocks
    an install.
    """
    value = manifest.get(key)
    if value is None:
        logger.info(f"Attribute missing in {MOD_INFO_FILE}: {key}")
        return ""

    # Newer mods write {"major": 1, "minor": 2, "patch": "3a"}
    if isinstance(value, dict):
        parts = [value.get(part) for part in ("major", "minor", "patch")]
        return ".".join(str(p) for p in parts if p is not None and p != "")

    if isinstance(value, bool):
        return "true" if value else "false"

    return value if isinstance(value, str) else str(value)
