"""Shared fixtures for loglens tests."""

import pytest

from loglens.line_index import Document
from loglens.options import DisplayOptions


@pytest.fixture
def make_document(tmp_path):
    """Return a factory that writes lines to a file and opens it as a Document."""
    counter = {'n': 0}

    def factory(lines, trailing_newline=True, name=None):
        counter['n'] += 1
        path = tmp_path / (name or f"log{counter['n']}.txt")
        content = "\n".join(lines)
        if trailing_newline and lines:
            content += "\n"
        path.write_bytes(content.encode('utf-8'))
        return Document.open(str(path))

    return factory


@pytest.fixture
def plain_options():
    return DisplayOptions()
