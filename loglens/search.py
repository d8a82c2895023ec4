"""Case-insensitive substring search over a document."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .highlight import compile_pattern
from .transform import apply_display_transforms

logger = logging.getLogger(__name__)


def search_document(document, pattern: str, options) -> list[int]:
    """Return the indices of every line containing ``pattern``.

    Lines are matched after the same trim/unescape transforms used for
    display, so a match is always visible where the pager jumps to it.
    """
    if not pattern:
        return []
    matcher = compile_pattern(pattern)
    matches = [
        i for i, text in document.iter_lines(0)
        if matcher.search(apply_display_transforms(text, options))
    ]
    logger.debug("Search %r: %d matching lines", pattern, len(matches))
    return matches


@dataclass
class SearchState:
    """The active search: its pattern, matching lines and current match.

    ``cursor`` is -1 when there is no current match.
    """

    pattern: str = ""
    matches: list[int] = field(default_factory=list)
    cursor: int = -1

    @classmethod
    def run(cls, document, pattern: str, options) -> 'SearchState':
        """Search ``document`` and return a fresh state positioned on the first match."""
        if not pattern:
            return cls()
        matches = search_document(document, pattern, options)
        return cls(pattern=pattern, matches=matches, cursor=0 if matches else -1)

    @property
    def active(self) -> bool:
        return bool(self.pattern)

    @property
    def current(self) -> Optional[int]:
        """Line index of the current match, if any."""
        if 0 <= self.cursor < len(self.matches):
            return self.matches[self.cursor]
        return None

    def next_match(self) -> Optional[int]:
        """Advance to the next match, wrapping from the last to the first."""
        if not self.matches:
            return None
        self.cursor = (self.cursor + 1) % len(self.matches)
        return self.matches[self.cursor]

    def prev_match(self) -> Optional[int]:
        """Step back to the previous match, wrapping from the first to the last."""
        if not self.matches:
            return None
        self.cursor = (self.cursor - 1) % len(self.matches)
        return self.matches[self.cursor]
