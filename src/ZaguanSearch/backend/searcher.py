"""Whoosh search backend.

Opens an on-disk index once and serves ranked searches, exact hit counts and
stored-field lookups for the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from whoosh import index
from whoosh.fields import Schema
from whoosh.query import Query

from ZaguanSearch.utils.log import log


@dataclass(frozen=True, slots=True)
class SearchHit:
    """One ranked hit: Whoosh document number and score."""

    doc_id: int
    score: float


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Hits of one search call plus the exact number of matching documents."""

    total_hits: int
    hits: tuple[SearchHit, ...]


class WhooshBackend:
    """Read-only searcher over a Whoosh index directory.

    Use as a context manager, or call `close()` when done.
    """

    def __init__(self, index_dir: Path | str) -> None:
        index_dir = Path(index_dir)
        if not index.exists_in(str(index_dir)):
            raise FileNotFoundError(f"No Whoosh index found in {index_dir}")
        self._index = index.open_dir(str(index_dir))
        self._searcher = self._index.searcher()
        log.debug("Opened index %s (%d documents)", index_dir, self._searcher.doc_count())

    @property
    def schema(self) -> Schema:
        return self._index.schema

    def close(self) -> None:
        self._searcher.close()
        self._index.close()

    def __enter__(self) -> WhooshBackend:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def search(self, query: Query, *, limit: int) -> SearchResult:
        """Run `query` and return the top `limit` hits in rank order."""
        results = self._searcher.search(query, limit=max(1, limit))
        hits = tuple(SearchHit(doc_id=hit.docnum, score=hit.score) for hit in results)
        return SearchResult(total_hits=len(results), hits=hits)

    def count(self, query: Query) -> int:
        """Return the exact number of documents matching `query`."""
        return sum(1 for _ in self._searcher.docs_for_query(query))

    def fetch_document(self, doc_id: int) -> Mapping[str, str]:
        """Return the stored fields of document `doc_id`."""
        return self._searcher.stored_fields(doc_id)
