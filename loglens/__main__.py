"""loglens CLI entry point.

Allows running via `python -m loglens` and provides the console scripts
defined in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .config import load_defaults
from .constants import PagerConstants
from .line_index import Document
from .options import DisplayOptions
from .stream import process_stream
from .version import get_version_string

logger = logging.getLogger(__name__)

INTERACTIVE_HELP = """\
interactive commands:
  Ctrl-F, Space, PgDn   next page
  Ctrl-B, PgUp          previous page
  j, Down, Enter        next line
  k, Up                 previous line
  g, G                  first / last line
  :<n>                  go to line n (e.g. :100)
  :f, :f<n>             format the top line / line n as JSON
  f                     format the top line as JSON
  /<text>               search (plain text, ignores case)
  n, N                  next / previous match
  h, F1                 help
  q                     quit

examples:
  lg app.log                 page through app.log
  lg app.log -l              ... with line numbers
  lg app.log -u              ... with escapes like \\n and \\t replaced
  cat app.log | lg -u        unescape piped input
  lg app.log > out.txt       redirected output is processed straight through
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lg",
        description="LogLens: page through large log files.",
        epilog=INTERACTIVE_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", nargs="?", help="log file to view (stdin if omitted)")
    parser.add_argument("-f", "--file", dest="file", help="log file to view")
    parser.add_argument("-u", "--unescape", action="store_true",
                        help="replace escapes such as \\n, \\t, \\r")
    parser.add_argument("-k", "--keep-one-line", dest="keep_one_line", action="store_true",
                        help="with -u, keep each record on one line (\\n becomes a space)")
    parser.add_argument("-t", "--trim", dest="trim_space", action="store_true",
                        help="trim whitespace at both ends of each line")
    parser.add_argument("-l", "--line-number", dest="show_line_number", action="store_true",
                        help="show line numbers")
    parser.add_argument("-i", "--interactive", action="store_true",
                        help="interactive mode (the default for files; kept for compatibility)")
    parser.add_argument("--log-file", help="write debug logs to this file")
    parser.add_argument("-V", "--version", action="store_true", help="show version and exit")
    return parser


def _configure_logging(log_file: str | None) -> None:
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _silence_stdout() -> None:
    # stdout is flushed again at exit; the closed pipe must not be written to
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def _run_interactive(path: str, options: DisplayOptions) -> int:
    # Lazy import to keep the interactive stack out of stream mode
    from .pager import Pager

    document = Document.open(path)
    if document.total_lines == 0:
        print(PagerConstants.EMPTY_FILE_MESSAGE)
        return 0
    Pager(document, options.for_interactive()).run()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.version:
        print(get_version_string())
        return 0

    _configure_logging(args.log_file)
    options = DisplayOptions.merge(
        load_defaults(),
        unescape=args.unescape,
        keep_one_line=args.keep_one_line,
        trim_space=args.trim_space,
        show_line_number=args.show_line_number,
    )

    path = args.file or args.path
    try:
        if not path:
            process_stream(sys.stdin.buffer, options)
            return 0
        if not sys.stdout.isatty():
            with open(path, 'rb') as f:
                process_stream(f, options)
            return 0
        return _run_interactive(path, options)
    except BrokenPipeError:
        logger.debug("Output pipe closed by reader")
        _silence_stdout()
        return 0
    except OSError as e:
        logger.debug("Fatal I/O error", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
