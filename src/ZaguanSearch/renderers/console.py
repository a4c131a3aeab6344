"""Interactive, paginated console output.

The first search collects only enough hits for `prefetch_pages` pages. Paging
past that window asks whether to collect more and, if so, re-runs the query
for every matching document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, TextIO

import click
from whoosh.query import Query

from ZaguanSearch.backend.searcher import SearchHit
from ZaguanSearch.config.search import SearchConfig
from ZaguanSearch.core.errors import InvalidPageCommand
from ZaguanSearch.renderers.tsv import MISSING_PATH
from ZaguanSearch.services.search import SearchService

Echo = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class PageCommand:
    """Parsed paging command: `quit`, `previous`, `next` or `page`."""

    action: str
    page: int = 0


QUIT = PageCommand("quit")
PREVIOUS = PageCommand("previous")
NEXT = PageCommand("next")


def parse_page_command(line: Optional[str]) -> PageCommand:
    """Parse one line typed at the paging prompt.

    Empty input and EOF (None) quit.

    Raises:
        InvalidPageCommand: If the line is neither a command nor a number.
    """
    text = (line or "").strip()
    if not text or text[0] == "q":
        return QUIT
    if text[0] == "p":
        return PREVIOUS
    if text[0] == "n":
        return NEXT
    try:
        return PageCommand("page", int(text))
    except ValueError:
        raise InvalidPageCommand(text) from None


def render_hit(rank: int, hit: SearchHit, name: Optional[str], *, raw: bool) -> str:
    if raw:
        return f"doc={hit.doc_id} score={hit.score}"
    return f"{rank}. {name if name else MISSING_PATH}"


class PagingSession:
    """Show the hits of one query page by page.

    Args:
        service: Search service bound to the index.
        query: Compiled query to page through.
        settings: Page size, prefetch window and raw mode.
        reader: Stream the user's commands are read from.
        interactive: When False only the first page is printed.
        echo: Output function for result and prompt lines.
    """

    def __init__(
        self,
        service: SearchService,
        query: Query,
        settings: SearchConfig,
        *,
        reader: TextIO,
        interactive: bool = True,
        echo: Echo = click.echo,
    ) -> None:
        self._service = service
        self._query = query
        self._page_size = settings.hits_per_page
        self._prefetch = settings.prefetch_pages * settings.hits_per_page
        self._raw = settings.raw
        self._reader = reader
        self._interactive = interactive
        self._echo = echo

    def run(self) -> None:
        result = self._service.top(self._query, self._prefetch)
        hits = result.hits
        total = result.total_hits
        self._echo(f"{total} total matching documents")

        start = 0
        end = min(total, self._page_size)
        while True:
            if end > len(hits):
                self._echo(f"Only results 1 - {len(hits)} of {total} total matching documents collected.")
                self._echo("Collect more (y/n) ?")
                answer = self._read_line()
                if not answer or answer.strip()[:1] in ("", "n"):
                    break
                hits = self._service.top(self._query, total).hits

            end = min(len(hits), start + self._page_size)
            self._show(hits, start, end)

            if not self._interactive or end == 0:
                break

            next_start = self._prompt(start, total)
            if next_start is None:
                break
            start = next_start
            end = min(total, start + self._page_size)

    def _show(self, hits: tuple[SearchHit, ...], start: int, end: int) -> None:
        page = hits[start:end]
        names = [None] * len(page) if self._raw else self._service.document_names(page)
        for offset, (hit, name) in enumerate(zip(page, names)):
            self._echo(render_hit(start + offset + 1, hit, name, raw=self._raw))

    def _prompt(self, start: int, total: int) -> Optional[int]:
        """Ask for the next page; return its first hit index, None to quit."""
        while True:
            options = []
            if start - self._page_size >= 0:
                options.append("(p)revious page, ")
            if start + self._page_size < total:
                options.append("(n)ext page, ")
            self._echo("Press " + "".join(options) + "(q)uit or enter number to jump to a page.")

            try:
                command = parse_page_command(self._read_line())
            except InvalidPageCommand as e:
                self._echo(str(e))
                continue

            if command is QUIT:
                return None
            if command is PREVIOUS:
                return max(0, start - self._page_size)
            if command is NEXT:
                return start + self._page_size if start + self._page_size < total else start
            if command.page >= 1 and (command.page - 1) * self._page_size < total:
                return (command.page - 1) * self._page_size
            self._echo("No such page")

    def _read_line(self) -> Optional[str]:
        line = self._reader.readline()
        return line if line else None
