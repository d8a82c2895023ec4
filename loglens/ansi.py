"""ANSI-aware measurement and clipping of display text.

Escape sequences take no columns, tabs advance to the next 8-column stop and
East Asian wide characters take two columns.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return the terminal column width of ``ch`` drawn at column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def split_ansi(text: str) -> list[tuple[bool, str]]:
    """Split ``text`` into ``(is_escape, segment)`` pieces in order."""
    parts: list[tuple[bool, str]] = []
    pos = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        if match.start() > pos:
            parts.append((False, text[pos:match.start()]))
        parts.append((True, match.group(0)))
        pos = match.end()
    if pos < len(text):
        parts.append((False, text[pos:]))
    return parts


def visible_width(text: str) -> int:
    """Return the number of terminal columns ``text`` occupies."""
    col = 0
    for is_escape, segment in split_ansi(text):
        if is_escape:
            continue
        for ch in segment:
            col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut ``text`` down to its first ``max_cols`` terminal columns.

    Escape sequences are kept verbatim. Tabs are expanded into spaces so the
    clipped text lines up with the columns it was measured against.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    for is_escape, segment in split_ansi(text):
        if is_escape:
            out.append(segment)
            continue
        for ch in segment:
            w = char_display_width(ch, col)
            if col + w > max_cols:
                return "".join(out)
            out.append(" " * w if ch == "\t" else ch)
            col += w
    return "".join(out)
