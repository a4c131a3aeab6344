"""Tests for interactive paging and page-command parsing."""

import io
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ZaguanSearch.backend import SearchHit, SearchResult
from ZaguanSearch.config import SearchConfig
from ZaguanSearch.core.errors import InvalidPageCommand
from ZaguanSearch.renderers import PagingSession, parse_page_command
from ZaguanSearch.renderers.console import NEXT, PREVIOUS, QUIT


class FakeSearchService:
    """Serves `total` hits named doc1.xml ... docN.xml."""

    def __init__(self, total: int) -> None:
        self.total = total
        self.limits: list[int] = []

    def top(self, query, limit):
        self.limits.append(limit)
        count = min(limit, self.total)
        hits = tuple(SearchHit(doc_id=i, score=1.0 / (i + 1)) for i in range(count))
        return SearchResult(total_hits=self.total, hits=hits)

    def document_names(self, hits):
        return [f"doc{hit.doc_id + 1}.xml" if hit.doc_id != 2 else None for hit in hits]


def _session(service, commands: str, *, page_size=2, prefetch=1, raw=False, interactive=True):
    out: list[str] = []
    session = PagingSession(
        service,
        query=None,
        settings=SearchConfig(hits_per_page=page_size, prefetch_pages=prefetch, raw=raw),
        reader=io.StringIO(commands),
        interactive=interactive,
        echo=out.append,
    )
    session.run()
    return out


class ParsePageCommandTest(unittest.TestCase):
    def test_commands(self) -> None:
        self.assertIs(parse_page_command("p"), PREVIOUS)
        self.assertIs(parse_page_command("next"), NEXT)
        self.assertIs(parse_page_command("q"), QUIT)
        self.assertEqual(parse_page_command(" 3 ").page, 3)

    def test_empty_input_quits(self) -> None:
        self.assertIs(parse_page_command(""), QUIT)
        self.assertIs(parse_page_command("\n"), QUIT)
        self.assertIs(parse_page_command(None), QUIT)

    def test_unrecognized(self) -> None:
        with self.assertRaisesRegex(InvalidPageCommand, "Unrecognized command"):
            parse_page_command("x")


class PagingSessionTest(unittest.TestCase):
    def test_first_page_and_quit(self) -> None:
        service = FakeSearchService(total=5)
        out = _session(service, "q\n")
        self.assertEqual(out[0], "5 total matching documents")
        self.assertEqual(out[1:3], ["1. doc1.xml", "2. doc2.xml"])
        self.assertEqual(service.limits, [2])

    def test_collect_more_after_prefetch_window(self) -> None:
        service = FakeSearchService(total=5)
        out = _session(service, "n\ny\nq\n")
        self.assertIn("Only results 1 - 2 of 5 total matching documents collected.", out)
        self.assertIn("Collect more (y/n) ?", out)
        self.assertIn("3. No path for this document", out)
        self.assertIn("4. doc4.xml", out)
        self.assertEqual(service.limits, [2, 5])

    def test_decline_collecting_more(self) -> None:
        service = FakeSearchService(total=5)
        out = _session(service, "n\nn\n")
        self.assertNotIn("4. doc4.xml", out)
        self.assertEqual(service.limits, [2])

    def test_invalid_commands_are_reprompted(self) -> None:
        service = FakeSearchService(total=5)
        out = _session(service, "x\n9\n2\nq\n", prefetch=5)
        self.assertIn("Unrecognized command: 'x'", out)
        self.assertIn("No such page", out)
        self.assertIn("3. No path for this document", out)

    def test_previous_page(self) -> None:
        service = FakeSearchService(total=5)
        out = _session(service, "2\n3\np\nq\n", prefetch=5)
        self.assertIn("5. doc5.xml", out)
        self.assertEqual(out.count("3. No path for this document"), 2)

    def test_prompt_lists_available_moves(self) -> None:
        service = FakeSearchService(total=5)
        out = _session(service, "q\n", prefetch=5)
        self.assertIn("Press (n)ext page, (q)uit or enter number to jump to a page.", out)

    def test_raw_mode(self) -> None:
        service = FakeSearchService(total=1)
        out = _session(service, "q\n", raw=True)
        self.assertEqual(out[1], "doc=0 score=1.0")

    def test_non_interactive_shows_first_page_only(self) -> None:
        service = FakeSearchService(total=5)
        reader_text = "n\n"
        out = _session(service, reader_text, interactive=False)
        self.assertEqual(out, ["5 total matching documents", "1. doc1.xml", "2. doc2.xml"])

    def test_no_hits(self) -> None:
        out = _session(FakeSearchService(total=0), "")
        self.assertEqual(out, ["0 total matching documents"])


if __name__ == "__main__":
    unittest.main()
