"""Straight-through processing for piped input or redirected output.

No index, no layout and no interaction: every line is transformed once and
written out.
"""

from __future__ import annotations

import sys
from typing import BinaryIO, Optional, TextIO

import blessed

from .constants import PagerConstants
from .line_index import decode_line
from .transform import apply_display_transforms


def process_stream(reader: BinaryIO, options, out: Optional[TextIO] = None,
                   term: Optional[blessed.Terminal] = None) -> int:
    """Copy ``reader`` to ``out`` applying the display transforms.

    Line numbers are colored only when ``out`` is a terminal.

    Returns:
        Number of lines written.
    """
    out = out if out is not None else sys.stdout
    term = term or blessed.Terminal(stream=out)
    count = 0
    for raw in reader:
        count += 1
        line = apply_display_transforms(decode_line(raw), options)
        if options.show_line_number:
            number = term.cyan(f"{count:{PagerConstants.LINE_NUMBER_WIDTH}d}")
            out.write(f"{number}  {line}\n")
        else:
            out.write(line + "\n")
    out.flush()
    return count
