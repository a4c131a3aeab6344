"""Whoosh-backed index, query compilation and search."""

from __future__ import annotations

from ZaguanSearch.backend.compiler import FieldClauseCompiler, QueryCompiler
from ZaguanSearch.backend.indexer import build_index
from ZaguanSearch.backend.schema import PATH_FIELD, build_schema
from ZaguanSearch.backend.searcher import SearchHit, SearchResult, WhooshBackend

__all__ = [
    "FieldClauseCompiler",
    "PATH_FIELD",
    "QueryCompiler",
    "SearchHit",
    "SearchResult",
    "WhooshBackend",
    "build_index",
    "build_schema",
]
