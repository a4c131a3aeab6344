"""Output renderers for search results.

Batch runs write tab-separated lines through a `ResultWriter`; interactive
runs page through hits with `PagingSession`.
"""

from __future__ import annotations

from ZaguanSearch.renderers.base import ResultWriter
from ZaguanSearch.renderers.console import PagingSession, parse_page_command, render_hit
from ZaguanSearch.renderers.tsv import MISSING_PATH, TsvResultWriter, render_tsv

__all__ = [
    "MISSING_PATH",
    "PagingSession",
    "ResultWriter",
    "TsvResultWriter",
    "parse_page_command",
    "render_hit",
    "render_tsv",
]
