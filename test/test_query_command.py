"""Tests for the line-oriented query loop."""

import io
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ZaguanSearch.cli.commands import SYNTAX_WHOOSH, QueryCommand
from ZaguanSearch.config import SearchConfig
from ZaguanSearch.core.errors import ClauseBuildError

from test_paging import FakeSearchService


class RecordingPipeline:
    def __init__(self) -> None:
        self.built: list[str] = []
        self.parsed: list[str] = []

    def build(self, text: str):
        if "?" in text:
            raise ClauseBuildError("title", text, "literal contains query syntax characters")
        self.built.append(text)
        return f"natural:{text}"

    def parse_raw(self, text: str):
        self.parsed.append(text)
        return f"raw:{text}"


class BenchmarkingService(FakeSearchService):
    def __init__(self, total: int) -> None:
        super().__init__(total)
        self.benchmarks: list[tuple] = []

    def benchmark(self, query, repeat):
        self.benchmarks.append((query, repeat))
        return 12.0


def _command(lines: str, **kwargs):
    out: list[str] = []
    pipeline = RecordingPipeline()
    service = BenchmarkingService(total=3)
    command = QueryCommand(
        pipeline=pipeline,
        search_service=service,
        settings=SearchConfig(hits_per_page=2, prefetch_pages=1),
        reader=io.StringIO(lines),
        echo=out.append,
        **kwargs,
    )
    return command, pipeline, service, out


class QueryCommandTest(unittest.TestCase):
    def test_batch_file_runs_each_line(self) -> None:
        command, pipeline, _, out = _command("tesis\ntrabajos de grado\n", interactive=False)
        self.assertEqual(command.execute(), 2)
        self.assertEqual(pipeline.built, ["tesis", "trabajos de grado"])
        self.assertNotIn("Enter query: ", out)
        self.assertEqual(out.count("3 total matching documents"), 2)

    def test_empty_line_stops(self) -> None:
        command, pipeline, _, _ = _command("tesis\n\nmúsica\n", interactive=False)
        self.assertEqual(command.execute(), 1)
        self.assertEqual(pipeline.built, ["tesis"])

    def test_interactive_prompt_shares_reader(self) -> None:
        command, pipeline, _, out = _command("tesis\nq\n")
        self.assertEqual(command.execute(), 1)
        self.assertEqual(out[0], "Enter query: ")
        self.assertEqual(out.count("Enter query: "), 2)

    def test_bad_query_is_skipped(self) -> None:
        command, pipeline, _, _ = _command("robó?ica\ntesis\n", interactive=False)
        self.assertEqual(command.execute(), 1)
        self.assertEqual(pipeline.built, ["tesis"])

    def test_whoosh_syntax(self) -> None:
        command, pipeline, _, _ = _command("type:TESIS\n", interactive=False, syntax=SYNTAX_WHOOSH)
        command.execute()
        self.assertEqual(pipeline.parsed, ["type:TESIS"])
        self.assertEqual(pipeline.built, [])

    def test_repeat_runs_benchmark(self) -> None:
        command, _, service, _ = _command("tesis\n", interactive=False, repeat=20)
        command.execute()
        self.assertEqual(service.benchmarks, [("natural:tesis", 20)])


if __name__ == "__main__":
    unittest.main()
