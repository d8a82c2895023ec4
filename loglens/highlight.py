"""Search-match highlighting for display lines."""

from __future__ import annotations

import re
from functools import lru_cache

from .ansi import split_ansi
from .constants import PagerConstants


@lru_cache(maxsize=32)
def compile_pattern(pattern: str) -> re.Pattern:
    """Compile ``pattern`` as a literal, case-insensitive matcher."""
    return re.compile(re.escape(pattern), re.IGNORECASE)


def highlight(line: str, pattern: str) -> str:
    """Wrap every occurrence of ``pattern`` in ``line`` with highlight codes.

    Matching is case-insensitive and non-overlapping; the matched text keeps
    its original casing. Existing escape sequences in ``line`` are copied
    through untouched and are never matched against.
    """
    if not pattern or not line:
        return line

    matcher = compile_pattern(pattern)
    out: list[str] = []
    for is_escape, segment in split_ansi(line):
        if is_escape:
            out.append(segment)
            continue
        out.append(matcher.sub(_mark, segment))
    return "".join(out)


def _mark(match: re.Match) -> str:
    return PagerConstants.HIGHLIGHT_START + match.group(0) + PagerConstants.HIGHLIGHT_END
