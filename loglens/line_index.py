"""Byte-offset line index and the read-only document built on it.

The index is built in one sequential pass over the file and stores only the
offset at which each line starts, so files larger than memory can be paged.
Every later read (page render, search scan, JSON view) reopens the file and
seeks to an offset from the index.
"""

from __future__ import annotations

import logging
import os
from array import array
from dataclasses import dataclass
from typing import Iterator

from .transform import chomp

logger = logging.getLogger(__name__)


def decode_line(raw: bytes) -> str:
    """Decode one physical line, replacing undecodable bytes."""
    return chomp(raw.decode('utf-8', errors='replace'))


class LineIndex:
    """Ordered start offsets of every line in a file.

    For a file whose last line ends with a newline the index holds one extra
    entry: the offset just past the final newline (equal to the file size).
    """

    def __init__(self, offsets=None):
        self._offsets = array('q', offsets if offsets is not None else [0])

    @classmethod
    def build(cls, path: str) -> 'LineIndex':
        """Index ``path`` in a single streaming pass (no seeks)."""
        index = cls()
        pos = 0
        with open(path, 'rb') as f:
            for raw in f:
                pos += len(raw)
                # A final line without a newline is already indexed by its start
                if raw.endswith(b'\n'):
                    index._offsets.append(pos)
        logger.debug("Indexed %s: %d offsets, %d bytes", path, len(index), pos)
        return index

    def __len__(self) -> int:
        return len(self._offsets)

    def __getitem__(self, i: int) -> int:
        return self._offsets[i]

    def __iter__(self) -> Iterator[int]:
        return iter(self._offsets)

    def __repr__(self) -> str:
        return f"LineIndex({list(self._offsets)!r})"


@dataclass(frozen=True)
class Document:
    """A file opened for paging: its path, line index and size."""

    path: str
    index: LineIndex
    size: int

    @classmethod
    def open(cls, path: str) -> 'Document':
        """Build the line index for ``path``.

        Raises:
            OSError: if the file cannot be opened or read.
        """
        index = LineIndex.build(path)
        return cls(path=path, index=index, size=os.path.getsize(path))

    @property
    def total_lines(self) -> int:
        """Number of displayable lines.

        The trailing offset recorded after a final newline does not start a
        line of its own, so it is not counted.
        """
        count = len(self.index)
        if count > 0 and self.index[count - 1] == self.size:
            count -= 1
        return count

    def iter_lines(self, start: int, stop: int | None = None) -> Iterator[tuple[int, str]]:
        """Yield ``(line_index, text)`` for lines ``start`` up to ``stop``.

        The file is reopened and positioned with the index, so each call is
        independent of any other read.
        """
        total = self.total_lines
        stop = total if stop is None else min(stop, total)
        if start < 0 or start >= stop:
            return
        with open(self.path, 'rb') as f:
            f.seek(self.index[start])
            for i in range(start, stop):
                raw = f.readline()
                if not raw:
                    break
                yield i, decode_line(raw)

    def read_line(self, line: int) -> str:
        """Return the text of a single line.

        Raises:
            IndexError: if ``line`` is outside the document.
        """
        if not 0 <= line < self.total_lines:
            raise IndexError(f"Line {line} out of range")
        for _, text in self.iter_lines(line, line + 1):
            return text
        raise IndexError(f"Line {line} out of range")
