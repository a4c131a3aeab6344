"""Service layer: text-to-query pipeline and search execution."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import PureWindowsPath
from typing import Mapping, Optional, Protocol, Sequence

from whoosh.query import Query

from ZaguanSearch.backend.compiler import QueryCompiler
from ZaguanSearch.backend.schema import PATH_FIELD
from ZaguanSearch.backend.searcher import SearchHit, SearchResult
from ZaguanSearch.core.query import QueryAST
from ZaguanSearch.nlp.annotator import TextAnnotator
from ZaguanSearch.synthesis.engine import QuerySynthesizer
from ZaguanSearch.utils.log import log

BENCHMARK_LIMIT = 100


class SearchBackend(Protocol):
    """Protocol for the index the service searches."""

    def search(self, query: Query, *, limit: int) -> SearchResult:
        """Return the top `limit` hits and the total hit count."""
        raise NotImplementedError

    def count(self, query: Query) -> int:
        """Return the exact number of matching documents."""
        raise NotImplementedError

    def fetch_document(self, doc_id: int) -> Mapping[str, str]:
        """Return the stored fields of a document."""
        raise NotImplementedError


@dataclass(slots=True)
class QueryPipeline:
    """Annotate, synthesize and compile one information-need text."""

    annotator: TextAnnotator
    synthesizer: QuerySynthesizer
    compiler: QueryCompiler

    def synthesize(self, text: str) -> QueryAST:
        tokens, spans = self.annotator.annotate(text)
        ast = self.synthesizer.synthesize(tokens, spans)
        log.debug("Synthesized %d clauses for %r", len(ast), text)
        return ast

    def build(self, text: str) -> Query:
        """Return the executable query for `text`.

        Raises:
            ClauseBuildError: If a synthesized literal cannot be compiled.
        """
        return self.compiler.compile(self.synthesize(text))

    def parse_raw(self, text: str) -> Query:
        """Parse `text` as backend query syntax, skipping synthesis."""
        return self.compiler.parse_query_string(text)


def document_name(fields: Mapping[str, str]) -> Optional[str]:
    """File name of a document's stored path, or None when it has none.

    Index paths may come from Windows or POSIX machines, so both separators
    are honoured.
    """
    path = fields.get(PATH_FIELD)
    if not path:
        return None
    return PureWindowsPath(path).name or None


@dataclass(slots=True)
class SearchService:
    """Runs compiled queries against a `SearchBackend`."""

    backend: SearchBackend

    def top(self, query: Query, limit: int) -> SearchResult:
        return self.backend.search(query, limit=limit)

    def full_search(self, query: Query) -> SearchResult:
        """Collect every matching document in rank order."""
        total = self.backend.count(query)
        return self.backend.search(query, limit=max(1, total))

    def document_names(self, hits: Sequence[SearchHit]) -> list[Optional[str]]:
        return [document_name(self.backend.fetch_document(hit.doc_id)) for hit in hits]

    def benchmark(self, query: Query, repeat: int) -> float:
        """Run `query` `repeat` times and return elapsed milliseconds."""
        start = time.perf_counter()
        for _ in range(repeat):
            self.backend.search(query, limit=BENCHMARK_LIMIT)
        return (time.perf_counter() - start) * 1000.0
