"""LogLens - A pager for large log files."""

from .line_index import Document, LineIndex
from .layout import RenderResult, RenderedLine, render_page
from .navigation import NavigationController, ViewportState
from .options import DisplayOptions
from .search import SearchState, search_document

__all__ = [
    'Document',
    'LineIndex',
    'RenderResult',
    'RenderedLine',
    'render_page',
    'NavigationController',
    'ViewportState',
    'DisplayOptions',
    'SearchState',
    'search_document',
]
