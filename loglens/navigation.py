"""Viewport navigation over a document.

Every move re-renders the page and records the result, because the last
line on screen depends on how the lines in between wrap. Paging backward has
no closed form for the same reason; it is found by probing candidate start
lines with the forward layout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .constants import PagerConstants
from .layout import RenderResult, render_page
from .search import SearchState

logger = logging.getLogger(__name__)


def viewport_height(rows: int) -> int:
    """Rows available for content in a viewport of ``rows`` rows."""
    return max(rows, PagerConstants.MIN_VIEW_HEIGHT)


@dataclass
class ViewportState:
    top_line: int = 0
    height: int = PagerConstants.DEFAULT_TERMINAL_HEIGHT - 1
    width: int = PagerConstants.DEFAULT_TERMINAL_WIDTH


class NavigationController:
    """Owns the viewport and search state and moves through the document."""

    def __init__(self, document, options, height: int, width: int, renderer=render_page):
        self.document = document
        self.options = options
        self.viewport = ViewportState(
            top_line=0,
            height=viewport_height(height),
            width=width,
        )
        self.search_state = SearchState()
        self._render = renderer
        self.last_render: RenderResult = self.render()

    @property
    def total_lines(self) -> int:
        return self.document.total_lines

    @property
    def top_line(self) -> int:
        return self.viewport.top_line

    @property
    def last_line(self) -> int:
        """Last line shown by the most recent render."""
        return self.last_render.last_line

    def _render_at(self, start_line: int) -> RenderResult:
        return self._render(
            self.document,
            start_line,
            self.viewport.height,
            self.viewport.width,
            self.options,
            self.search_state.pattern,
        )

    def render(self) -> RenderResult:
        """Render the page at the current top line and remember the result."""
        self.last_render = self._render_at(self.viewport.top_line)
        return self.last_render

    def _move_to(self, line: int) -> RenderResult:
        self.viewport.top_line = max(0, min(line, self.total_lines - 1))
        return self.render()

    # Paging

    def next_page(self) -> RenderResult:
        """Show the page that starts at the current page's last line.

        If a single line filled the whole page, advance by one line instead
        so that paging always makes progress.
        """
        last = self.last_render.last_line
        if last >= self.total_lines - 1:
            return self.last_render
        if last == self.viewport.top_line:
            return self._move_to(self.viewport.top_line + 1)
        return self._move_to(last)

    def prev_page(self) -> RenderResult:
        """Show the page whose last line is the current top line.

        Binary-searches start lines in ``[0, top)``: starting further back
        ends the page further back. The search stops after
        ``REVERSE_PAGE_MAX_PROBES`` renders and settles on the latest start
        found to end at or before the target, so the result is a close
        approximation when wrapping or truncation breaks that ordering.
        """
        target = self.viewport.top_line
        if target <= 0:
            return self.last_render

        left, right = 0, target
        best = 0
        probes = 0
        while probes < PagerConstants.REVERSE_PAGE_MAX_PROBES and left < right:
            mid = (left + right) // 2
            if mid == best:
                break
            probes += 1
            probe_last = self._render_at(mid).last_line
            if probe_last < target:
                left = mid + 1
                best = mid
            elif probe_last > target:
                right = mid
            else:
                best = mid
                break

        logger.debug("Reverse page from %d to %d after %d probes", target, best, probes)
        return self._move_to(best)

    # Line stepping

    def next_line(self) -> RenderResult:
        if self.last_render.last_line >= self.total_lines - 1:
            return self.last_render
        return self._move_to(self.viewport.top_line + 1)

    def prev_line(self) -> RenderResult:
        if self.viewport.top_line <= 0:
            return self.last_render
        return self._move_to(self.viewport.top_line - 1)

    # Jumps

    def goto_first(self) -> RenderResult:
        return self._move_to(0)

    def goto_last(self) -> RenderResult:
        return self._move_to(self.total_lines - 1)

    def goto_line(self, number: int) -> RenderResult:
        """Jump to 1-based line ``number``; out-of-range numbers are ignored."""
        if not 1 <= number <= self.total_lines:
            return self.last_render
        return self._move_to(number - 1)

    def search_jump(self, target: int) -> RenderResult:
        return self._move_to(target)

    def resize(self, height: int, width: int) -> RenderResult:
        """Adopt new terminal dimensions and re-render at the same top line."""
        self.viewport.height = viewport_height(height)
        self.viewport.width = width
        return self.render()

    # Search

    def search(self, pattern: str) -> Optional[int]:
        """Start a new search and jump to its first match.

        An empty pattern clears the search. Returns the matched line, or
        None if nothing matched.
        """
        self.search_state = SearchState.run(self.document, pattern, self.options)
        target = self.search_state.current
        if target is not None:
            self.search_jump(target)
        else:
            self.render()
        return target

    def next_match(self) -> Optional[int]:
        target = self.search_state.next_match()
        if target is not None:
            self.search_jump(target)
        return target

    def prev_match(self) -> Optional[int]:
        target = self.search_state.prev_match()
        if target is not None:
            self.search_jump(target)
        return target
