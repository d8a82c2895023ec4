"""Pure string transforms applied to log lines before display or search."""

import re

# Escapes recognised in log payloads: \n \t \r \\ \" \'
_ESCAPE_RE = re.compile(r'\\([ntr\\"\'])')

_UNESCAPE = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '\\': '\\',
    '"': '"',
    "'": "'",
}

# Keeping a record on one physical row: \n becomes a space, \r disappears
_UNESCAPE_ONE_LINE = dict(_UNESCAPE, n=' ', r='')


def chomp(line: str) -> str:
    """Strip a trailing newline and a carriage return before it."""
    if line.endswith('\n'):
        line = line[:-1]
    if line.endswith('\r'):
        line = line[:-1]
    return line


def trim(line: str) -> str:
    """Remove leading and trailing whitespace."""
    return line.strip()


def unescape(line: str, keep_one_line: bool = False) -> str:
    """Replace backslash escapes with the characters they stand for.

    Replacement is a single left-to-right pass, so ``\\\\n`` yields a literal
    backslash followed by ``n`` rather than a newline.
    """
    table = _UNESCAPE_ONE_LINE if keep_one_line else _UNESCAPE
    return _ESCAPE_RE.sub(lambda m: table[m.group(1)], line)


def apply_display_transforms(line: str, options) -> str:
    """Apply trim then unescape according to ``options``."""
    if options.trim_space:
        line = trim(line)
    if options.unescape:
        line = unescape(line, options.keep_one_line)
    return line
