"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional, Sequence
import sys
import select
import termios

from .ansi import clip_ansi_line, visible_width
from .constants import PagerConstants
from .layout import rows_needed, truncate_to


class TerminalError(OSError):
    """Raised when the terminal cannot be put into raw input mode."""


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None

    def setup(self):
        """Enter fullscreen mode and raw keyboard input.

        Raises:
            TerminalError: if raw input mode cannot be entered.
        """
        print(self.term.enter_fullscreen, end='')
        print(self.term.hide_cursor, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input  # type: ignore
            try:
                inp = Input(keynames='curtsies')
                inp.__enter__()
            except (termios.error, OSError) as e:
                self.cleanup()
                raise TerminalError(f"Cannot enter raw terminal mode: {e}") from e
            self._curtsies_input = inp

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def _gutter(self, number: int) -> str:
        digits = f"{number:{PagerConstants.LINE_NUMBER_WIDTH}d}"
        padding = " " * (PagerConstants.GUTTER_WIDTH - PagerConstants.LINE_NUMBER_WIDTH)
        return self.term.cyan(digits) + padding

    def draw_page(self, render, show_line_number: bool = False,
                  status: str = "", prompt: Optional[str] = None):
        """Draw a rendered page and the status line.

        Each logical line is written once and left to wrap naturally, so the
        rows it takes are the rows the layout counted for it.

        Args:
            render: RenderResult to draw
            show_line_number: Prefix each line with its number
            status: Text for the status line when no prompt is active
            prompt: Command line being typed (e.g. ':12'), shown with the cursor
        """
        out = [self.term.home + self.term.clear]
        for line in render.lines:
            prefix = self._gutter(line.number) if show_line_number else ""
            suffix = self.term.normal if "\x1b" in line.text else ""
            out.append(prefix + line.text + suffix + "\r\n")

        status_y = self.term.height - 1
        cols = max(self.term.width - 1, 0)
        if prompt is not None:
            out.append(self.term.move(status_y, 0) + _fit_prompt(prompt, cols))
            out.append(self.term.normal_cursor)
        else:
            out.append(self.term.move(status_y, 0) + self.term.bright_black(status[:cols]))
            out.append(self.term.hide_cursor)
        print(''.join(out), end='', flush=True)

    def draw_message_screen(self, title: str, lines: Sequence[str], footer: str, is_error: bool = False):
        """Draw a full-screen message (JSON view, errors, help).

        Lines that don't fit are cut off with a count of what was omitted.
        """
        color = self.term.red if is_error else self.term.green
        title = clip_ansi_line(title, max(self.width - 1, 1))
        out = [self.term.home + self.term.clear, color(title), "\r\n\r\n"]

        room = max(self.term.height - 4, 1)
        for line in self._fit_to_rows(list(lines), room):
            out.append(line + "\r\n")

        out.append("\r\n" + self.term.bright_black(footer))
        out.append(self.term.hide_cursor)
        print(''.join(out), end='', flush=True)

    def _fit_to_rows(self, lines: list, room: int) -> list:
        """Cut ``lines`` to the lines that fit in ``room`` terminal rows.

        Wrapped lines count every row they take. When lines are left out,
        the last row reports how many.
        """
        width = self.width
        heights = [rows_needed(visible_width(line), width) for line in lines]
        if sum(heights) <= room:
            return lines

        body = []
        used = 0
        for line, rows in zip(lines, heights):
            if used + rows > room - 1:
                break
            body.append(line)
            used += rows
        if not body:
            # A single line taller than the screen is cut to fit
            budget = room - 1 if len(lines) > 1 else room
            body = [truncate_to(lines[0], max(budget, 1) * width)]

        hidden = len(lines) - len(body)
        if hidden:
            body.append(f"... ({hidden} more lines)")
        return body

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies token as a string, or None.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            evt = next(self._curtsies_input)  # blocks
            return str(evt)
        t = 0.0 if timeout == 0 else float(timeout)
        r, _, _ = select.select([sys.stdin], [], [], t)
        if not r:
            return None
        evt = next(self._curtsies_input)
        return str(evt)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width or PagerConstants.DEFAULT_TERMINAL_WIDTH

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        rows = self.term.height or PagerConstants.DEFAULT_TERMINAL_HEIGHT
        return rows - 1  # Reserve one line for status


def _fit_prompt(prompt: str, cols: int) -> str:
    """Keep the sentinel and the end of ``prompt`` within ``cols`` columns."""
    while len(prompt) > 1 and visible_width(prompt) > cols:
        prompt = prompt[0] + prompt[2:]
    return prompt
