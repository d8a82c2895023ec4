"""Wrap-aware page layout.

A logical line may wrap across several terminal rows, so how many lines fit
on a page is only known after measuring each one. ``render_page`` does that
measurement from a given start line and reports which lines made it onto the
page; it is the only authority on where a page ends.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .ansi import clip_ansi_line, visible_width
from .constants import PagerConstants
from .highlight import highlight
from .transform import apply_display_transforms


@dataclass(frozen=True)
class RenderedLine:
    """One logical line as it appears on the page."""

    index: int
    text: str
    rows: int
    truncated: bool = False

    @property
    def number(self) -> int:
        """1-based line number shown in the gutter."""
        return self.index + 1


@dataclass(frozen=True)
class RenderResult:
    """The lines shown on a page and the last line among them."""

    start_line: int
    lines: tuple[RenderedLine, ...]
    last_line: int
    rows_used: int

    @property
    def first_line(self) -> Optional[int]:
        return self.lines[0].index if self.lines else None


def text_width(view_width: int, show_line_number: bool) -> int:
    """Columns left for line content once the gutter is accounted for."""
    gutter = PagerConstants.GUTTER_WIDTH if show_line_number else 0
    return max(view_width - gutter, PagerConstants.MIN_TEXT_WIDTH)


def rows_needed(length: int, available: int) -> int:
    """Rows a line of ``length`` columns wraps onto; empty lines take one row."""
    return max(1, -(-length // available))


def truncate_to(text: str, budget: int) -> str:
    """Clip ``text`` so that it plus the truncation marker fits ``budget`` columns."""
    marker = PagerConstants.TRUNCATION_MARKER
    clipped = clip_ansi_line(text, max(budget - len(marker), 0))
    if "\x1b" in clipped:
        # Don't let a clipped highlight bleed into the marker
        clipped += PagerConstants.HIGHLIGHT_END
    return clipped + marker


def render_page(document, start_line: int, view_height: int, view_width: int,
                options, search_pattern: str = "") -> RenderResult:
    """Lay out a page of ``document`` beginning at ``start_line``.

    Lines are admitted while their rows fit in ``view_height``. A line that
    would overflow is truncated to the rows that remain, unless fewer than
    ``SPILL_GUARD_ROWS`` rows remain, in which case it is left for the next
    page. The first line is always admitted so a page is never blank.

    Args:
        document: The document to read lines from.
        start_line: 0-based index of the first line on the page.
        view_height: Rows available for content.
        view_width: Terminal columns.
        options: Display options (trim, unescape, line numbers).
        search_pattern: Active search pattern to highlight, or "".

    Returns:
        RenderResult with the shown lines and the index of the last one.

    Raises:
        IndexError: if ``start_line`` is not a line of the document.
        OSError: if the document cannot be read.
    """
    total = document.total_lines
    if not 0 <= start_line < total:
        raise IndexError(f"Start line {start_line} out of range (0..{total - 1})")

    available = text_width(view_width, options.show_line_number)
    end_line = min(start_line + view_height * PagerConstants.HEADROOM_FACTOR, total)

    shown: list[RenderedLine] = []
    rows_used = 0
    for i, raw in document.iter_lines(start_line, end_line):
        text = apply_display_transforms(raw, options)
        if search_pattern:
            text = highlight(text, search_pattern)

        rows = rows_needed(visible_width(text), available)
        remaining = view_height - rows_used

        if i > start_line and remaining < PagerConstants.SPILL_GUARD_ROWS and rows > remaining:
            break

        truncated = False
        if rows_used + rows > view_height and remaining > 0:
            text = truncate_to(text, remaining * available)
            rows = remaining
            truncated = True

        shown.append(RenderedLine(index=i, text=text, rows=rows, truncated=truncated))
        rows_used += rows

    last_line = shown[-1].index if shown else start_line
    return RenderResult(
        start_line=start_line,
        lines=tuple(shown),
        last_line=last_line,
        rows_used=rows_used,
    )
