"""Main pager controller."""

import os
import select
import signal
import logging
from typing import Optional, Sequence
from dataclasses import dataclass

from .terminal import TerminalInterface
from .navigation import NavigationController
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .constants import PagerConstants
from .commands import CommandRegistry, CommandLine, CommandLineState
from .transform import apply_display_transforms
from . import jsonfmt

logger = logging.getLogger(__name__)


HELP_LINES = [
    "PAGING                       SEARCH",
    "  Ctrl-F  Space  PgDn  Next page     /text   Search (ignores case)",
    "  Ctrl-B  PgUp         Prev page     n       Next match",
    "  j  Down  Enter       Next line     N       Previous match",
    "  k  Up                Prev line",
    "  g  Home              First line    JSON",
    "  G  End               Last line     f       Format top line",
    "  :<n>                 Go to line n  :f      Format top line",
    "                                     :f<n>   Format line n",
    "  h  F1                This help",
    "  q                    Quit",
]


@dataclass
class MessageScreen:
    """A full-screen message shown until the next key press."""
    title: str
    lines: Sequence[str]
    is_error: bool = False


class Pager:
    """Interactive pager application controller."""

    def __init__(self, document, options, terminal: Optional[TerminalInterface] = None):
        """Initialize the pager components.

        Args:
            document: Indexed document to page through
            options: DisplayOptions for interactive display
            terminal: Terminal to draw on (a new one by default)
        """
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.document = document
        self.options = options
        self.navigator = NavigationController(
            document, options, self.terminal.height, self.terminal.width)
        self.command_registry = CommandRegistry()
        self.running = False
        self.command_line: Optional[CommandLine] = None
        self.status_message: Optional[str] = None
        self.screen: Optional[MessageScreen] = None
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, PagerConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main pager loop.

        Raises:
            TerminalError: if the terminal cannot enter raw mode
            OSError: if the document can no longer be read
        """
        self.terminal.setup()
        self.running = True

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        try:
            need_draw = True
            while self.running:
                if need_draw:
                    self._draw()
                    need_draw = False

                # Wait for input on stdin or resize pipe
                ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                if self._resize_pipe_r in ready:
                    # Drain every pending notification, then re-query once
                    os.read(self._resize_pipe_r, 1024)
                    self._apply_resize()
                    need_draw = True
                elif 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self._handle_key_event(key_event)
                        need_draw = True
        except KeyboardInterrupt:
            # Ctrl-C ends the session
            pass
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()

    def _apply_resize(self):
        height, width = self.terminal.height, self.terminal.width
        logger.debug("Terminal resized to %dx%d", width, height + 1)
        self.navigator.resize(height, width)

    def _draw(self):
        """Draw the current pager state to terminal."""
        if self.screen is not None:
            self.terminal.draw_message_screen(
                self.screen.title,
                self.screen.lines,
                PagerConstants.PRESS_ANY_KEY_MESSAGE,
                is_error=self.screen.is_error,
            )
            return

        prompt = self.command_line.buffer if self.command_line is not None else None
        self.terminal.draw_page(
            self.navigator.last_render,
            show_line_number=self.options.show_line_number,
            status=self._status_text(),
            prompt=prompt,
        )

    def _status_text(self) -> str:
        if self.status_message:
            return f" {self.status_message}"
        render = self.navigator.last_render
        return " " + PagerConstants.POSITION_MESSAGE.format(
            render.start_line + 1, render.last_line + 1, self.navigator.total_lines)

    def show_help(self):
        """Show the help screen."""
        self.screen = MessageScreen(title="LOGLENS HELP", lines=HELP_LINES)

    def show_formatted_json(self, line: int):
        """Show line ``line`` (0-based) pretty-printed as JSON.

        Lines that are not JSON get an error screen with their raw content.
        """
        text = apply_display_transforms(self.document.read_line(line), self.options)
        if not jsonfmt.is_well_formed(text):
            logger.info("Line %d is not valid JSON", line + 1)
            self.screen = MessageScreen(
                title=f"Line {line + 1} is not valid JSON",
                lines=["Raw content:", text],
                is_error=True,
            )
            return
        try:
            formatted = jsonfmt.pretty_print(text)
        except ValueError as e:
            logger.info("Formatting line %d as JSON failed: %s", line + 1, e)
            self.screen = MessageScreen(
                title=f"JSON formatting failed: {e}",
                lines=["Raw content:", text],
                is_error=True,
            )
            return
        self.screen = MessageScreen(
            title=f"=== Line {line + 1} JSON ===",
            lines=formatted.split('\n'),
        )

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        # Any key dismisses a message screen
        if self.screen is not None:
            self.screen = None
            return

        if self.command_line is not None:
            self._handle_command_line(key_event)
            return

        # Status messages last until the next key
        self.status_message = None

        if key_event.key_type == KeyType.CTRL and key_event.value == 'c':
            self.running = False
            return

        self.command_registry.execute(self, key_event)

    def _handle_command_line(self, key_event: KeyEvent):
        command_line = self.command_line
        state = command_line.handle_key(key_event)
        if state == CommandLineState.EDITING:
            return
        self.command_line = None
        if state == CommandLineState.EXECUTE:
            command_line.execute(self)
