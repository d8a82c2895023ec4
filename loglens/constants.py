"""Constants and configuration for the loglens pager."""

class PagerConstants:
    """Central configuration constants for the pager."""

    # Viewport
    MIN_VIEW_HEIGHT = 3  # Always show at least this many rows, even in tiny terminals
    DEFAULT_TERMINAL_WIDTH = 80  # Used when the terminal size cannot be queried
    DEFAULT_TERMINAL_HEIGHT = 20

    # Line-number gutter ("%6d  ")
    LINE_NUMBER_WIDTH = 6
    GUTTER_WIDTH = 8
    MIN_TEXT_WIDTH = 10  # Narrowest text column used for wrap calculations

    # Layout
    HEADROOM_FACTOR = 2  # Read up to this many viewports of candidate lines
    SPILL_GUARD_ROWS = 3  # Below this many free rows, overlong lines are not started
    TRUNCATION_MARKER = "..."

    # Reverse paging
    REVERSE_PAGE_MAX_PROBES = 15

    # Search highlight (yellow background, black text)
    HIGHLIGHT_START = "\x1b[43;30m"
    HIGHLIGHT_END = "\x1b[0m"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Command line sentinels
    GOTO_PREFIX = ':'
    SEARCH_PREFIX = '/'
    FORMAT_COMMAND = 'f'

    # Status messages
    EMPTY_FILE_MESSAGE = "File is empty"
    PATTERN_NOT_FOUND_MESSAGE = "Pattern not found: {}"
    MATCH_POSITION_MESSAGE = "Match {}/{}"
    POSITION_MESSAGE = "lines {}-{} of {}"
    PRESS_ANY_KEY_MESSAGE = "Press any key to return..."
