"""Command implementations for ZaguanSearch CLI.

Encapsulates the batch and query loops, separated from CLI parameter
handling, logging setup and resource management.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence, TextIO

import click
from whoosh.query import Query

from ZaguanSearch.config.search import SearchConfig
from ZaguanSearch.core.errors import ClauseBuildError
from ZaguanSearch.core.models import InformationNeed
from ZaguanSearch.renderers.base import ResultWriter
from ZaguanSearch.renderers.console import PagingSession
from ZaguanSearch.services.search import QueryPipeline, SearchService
from ZaguanSearch.utils.log import log

SYNTAX_NATURAL = "natural"
SYNTAX_WHOOSH = "whoosh"


@dataclass(slots=True)
class BatchSummary:
    """Outcome of a batch run."""

    processed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    total_hits: dict[str, int] = field(default_factory=dict)


@dataclass(slots=True)
class BatchCommand:
    """Run every information need of a batch file and write ranked hits.

    A need whose query cannot be compiled is skipped; the rest of the batch
    still runs.
    """

    pipeline: QueryPipeline
    search_service: SearchService
    writer: ResultWriter

    def execute(self, needs: Sequence[InformationNeed]) -> BatchSummary:
        summary = BatchSummary()
        for idx, need in enumerate(needs, start=1):
            log.info("=== Information need %d/%d: %s ===", idx, len(needs), need.identifier)
            log.debug("text=%s", need.text)
            try:
                query = self.pipeline.build(need.text)
            except ClauseBuildError as e:
                log.warning("Skipping information need %s: %s", need.identifier, e)
                summary.skipped.append(need.identifier)
                continue

            result = self.search_service.full_search(query)
            log.info("%d total matching documents", result.total_hits)
            self.writer.write_need_result(need.identifier, self.search_service.document_names(result.hits))
            summary.processed.append(need.identifier)
            summary.total_hits[need.identifier] = result.total_hits

        self.writer.finalize()
        if summary.skipped:
            log.warning("Skipped %d of %d information needs: %s", len(summary.skipped), len(needs), ", ".join(summary.skipped))
        return summary


@dataclass(slots=True)
class QueryCommand:
    """Read queries line by line and page through their hits.

    Lines come from `reader`; with `interactive` the user is prompted and can
    page, otherwise only the first page of each query is printed. An empty
    line or end of input stops the loop.
    """

    pipeline: QueryPipeline
    search_service: SearchService
    settings: SearchConfig
    reader: TextIO
    interactive: bool = True
    syntax: str = SYNTAX_NATURAL
    repeat: int = 0
    echo: Callable[[str], None] = click.echo

    def execute(self) -> int:
        """Run the loop; return the number of queries executed."""
        executed = 0
        while True:
            if self.interactive:
                self.echo("Enter query: ")
            line = self.reader.readline()
            if not line or not line.strip():
                break
            text = line.strip()

            try:
                query = self._build(text)
            except ClauseBuildError as e:
                log.warning("Cannot run query %r: %s", text, e)
                continue
            log.info("Searching for: %s", query)

            if self.repeat > 0:
                elapsed = self.search_service.benchmark(query, self.repeat)
                log.info("Time: %dms", elapsed)

            PagingSession(
                self.search_service,
                query,
                self.settings,
                reader=self.reader,
                interactive=self.interactive,
                echo=self.echo,
            ).run()
            executed += 1
        return executed

    def _build(self, text: str) -> Query:
        if self.syntax == SYNTAX_WHOOSH:
            return self.pipeline.parse_raw(text)
        return self.pipeline.build(text)
