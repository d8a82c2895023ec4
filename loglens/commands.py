"""Command pattern implementation for pager key bindings.

Keys are handled on two planes. Single keys map straight to a command in
the ``CommandRegistry``. ``:`` and ``/`` open a ``CommandLine`` that buffers
characters until Enter runs it or Escape cancels it.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Tuple, Optional, TYPE_CHECKING
import logging

from .constants import PagerConstants
from .keyboard import KeyType

if TYPE_CHECKING:
    from .pager import Pager
    from .keyboard import KeyEvent
    from .navigation import NavigationController

logger = logging.getLogger(__name__)


class PagerCommand(ABC):
    """Base class for pager commands."""

    @abstractmethod
    def execute(self, pager: 'Pager', key_event: 'KeyEvent') -> None:
        """Execute the command.

        Args:
            pager: Pager instance
            key_event: The key event that triggered this command
        """


class NavigationCommand(PagerCommand):
    """Base class for commands that move the viewport."""

    def execute(self, pager: 'Pager', key_event: 'KeyEvent') -> None:
        self._navigate(pager.navigator)

    @abstractmethod
    def _navigate(self, navigator: 'NavigationController'):
        """Perform the movement."""


class NextPageCommand(NavigationCommand):
    def _navigate(self, navigator):
        navigator.next_page()


class PrevPageCommand(NavigationCommand):
    def _navigate(self, navigator):
        navigator.prev_page()


class NextLineCommand(NavigationCommand):
    def _navigate(self, navigator):
        navigator.next_line()


class PrevLineCommand(NavigationCommand):
    def _navigate(self, navigator):
        navigator.prev_line()


class FirstLineCommand(NavigationCommand):
    def _navigate(self, navigator):
        navigator.goto_first()


class LastLineCommand(NavigationCommand):
    def _navigate(self, navigator):
        navigator.goto_last()


class NextMatchCommand(PagerCommand):
    def execute(self, pager, key_event):
        if pager.navigator.next_match() is not None:
            pager.status_message = match_status(pager.navigator.search_state)


class PrevMatchCommand(PagerCommand):
    def execute(self, pager, key_event):
        if pager.navigator.prev_match() is not None:
            pager.status_message = match_status(pager.navigator.search_state)


class FormatJSONCommand(PagerCommand):
    """Show the line at the top of the page as formatted JSON."""

    def execute(self, pager, key_event):
        pager.show_formatted_json(pager.navigator.top_line)


class OpenCommandLineCommand(PagerCommand):
    def __init__(self, prefix: str):
        self.prefix = prefix

    def execute(self, pager, key_event):
        pager.command_line = CommandLine(self.prefix)


class HelpCommand(PagerCommand):
    def execute(self, pager, key_event):
        pager.show_help()


class QuitCommand(PagerCommand):
    def execute(self, pager, key_event):
        pager.running = False


def match_status(search_state) -> str:
    return PagerConstants.MATCH_POSITION_MESSAGE.format(
        search_state.cursor + 1, len(search_state.matches))


class CommandRegistry:
    """Registry mapping keys to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], PagerCommand] = {}
        self._register_default_commands()

    def _register_default_commands(self):
        """Register all default key bindings."""
        # Paging
        self.register((KeyType.CTRL, 'f'), NextPageCommand())
        self.register((KeyType.CTRL, 'b'), PrevPageCommand())
        self.register((KeyType.REGULAR, ' '), NextPageCommand())
        self.register((KeyType.SPECIAL, 'page_down'), NextPageCommand())
        self.register((KeyType.SPECIAL, 'page_up'), PrevPageCommand())

        # Line stepping
        for key in ('j', 'J'):
            self.register((KeyType.REGULAR, key), NextLineCommand())
        for key in ('k', 'K'):
            self.register((KeyType.REGULAR, key), PrevLineCommand())
        self.register((KeyType.SPECIAL, 'down'), NextLineCommand())
        self.register((KeyType.SPECIAL, 'enter'), NextLineCommand())
        self.register((KeyType.SPECIAL, 'up'), PrevLineCommand())

        # Jumps
        self.register((KeyType.REGULAR, 'g'), FirstLineCommand())
        self.register((KeyType.REGULAR, 'G'), LastLineCommand())
        self.register((KeyType.SPECIAL, 'home'), FirstLineCommand())
        self.register((KeyType.SPECIAL, 'end'), LastLineCommand())

        # Search
        self.register((KeyType.REGULAR, 'n'), NextMatchCommand())
        self.register((KeyType.REGULAR, 'N'), PrevMatchCommand())

        # JSON formatting
        for key in ('f', 'F'):
            self.register((KeyType.REGULAR, key), FormatJSONCommand())

        # Command line
        self.register((KeyType.REGULAR, PagerConstants.GOTO_PREFIX),
                      OpenCommandLineCommand(PagerConstants.GOTO_PREFIX))
        self.register((KeyType.REGULAR, PagerConstants.SEARCH_PREFIX),
                      OpenCommandLineCommand(PagerConstants.SEARCH_PREFIX))

        # System commands
        for key in ('q', 'Q'):
            self.register((KeyType.REGULAR, key), QuitCommand())
        self.register((KeyType.REGULAR, 'h'), HelpCommand())
        self.register((KeyType.SPECIAL, 'f1'), HelpCommand())

    def register(self, key: Tuple[KeyType, str], command: PagerCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[PagerCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, pager: 'Pager', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if a command was bound to the key
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None:
            return False
        command.execute(pager, key_event)
        return True


class CommandLineState(Enum):
    """Outcome of feeding a key to the command line."""
    EDITING = "editing"
    EXECUTE = "execute"
    CANCEL = "cancel"


class CommandLine:
    """A ``:`` or ``/`` command being typed on the status line.

    The buffer always starts with its sentinel character; backspace never
    removes it.
    """

    def __init__(self, prefix: str):
        self.buffer = prefix

    @property
    def prefix(self) -> str:
        return self.buffer[0]

    @property
    def text(self) -> str:
        return self.buffer[1:]

    def handle_key(self, key_event: 'KeyEvent') -> CommandLineState:
        """Feed one key to the buffer and report what should happen next."""
        if key_event.key_type == KeyType.SPECIAL:
            if key_event.value == 'enter':
                return CommandLineState.EXECUTE
            if key_event.value == 'escape':
                return CommandLineState.CANCEL
            if key_event.value == 'backspace':
                if len(self.buffer) > 1:
                    self.buffer = self.buffer[:-1]
                return CommandLineState.EDITING
            return CommandLineState.EDITING
        if key_event.key_type == KeyType.CTRL and key_event.value in ('c', 'g'):
            return CommandLineState.CANCEL
        if key_event.key_type == KeyType.REGULAR and key_event.value.isprintable():
            self.buffer += key_event.value
        return CommandLineState.EDITING

    def execute(self, pager: 'Pager') -> None:
        """Run the buffered command against ``pager``."""
        if self.prefix == PagerConstants.SEARCH_PREFIX:
            self._run_search(pager)
        elif self.prefix == PagerConstants.GOTO_PREFIX:
            self._run_colon_command(pager)

    def _run_search(self, pager: 'Pager') -> None:
        pattern = self.text
        target = pager.navigator.search(pattern)
        if not pattern:
            return
        if target is None:
            pager.status_message = PagerConstants.PATTERN_NOT_FOUND_MESSAGE.format(pattern)
        else:
            pager.status_message = match_status(pager.navigator.search_state)

    def _run_colon_command(self, pager: 'Pager') -> None:
        command = self.text.strip()
        navigator = pager.navigator
        if command.startswith(PagerConstants.FORMAT_COMMAND):
            argument = command[len(PagerConstants.FORMAT_COMMAND):].strip()
            if not argument:
                pager.show_formatted_json(navigator.top_line)
                return
            number = _parse_int(argument)
            if number is not None and 1 <= number <= navigator.total_lines:
                pager.show_formatted_json(number - 1)
            return
        number = _parse_int(command)
        if number is not None:
            navigator.goto_line(number)
        else:
            logger.debug("Ignoring unknown command %r", command)


def _parse_int(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None
