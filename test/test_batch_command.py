"""End-to-end tests for the batch command over a real index."""

import io
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ZaguanSearch.backend import FieldClauseCompiler, QueryCompiler, WhooshBackend, build_schema
from ZaguanSearch.cli.commands import BatchCommand
from ZaguanSearch.core.models import EntitySpan, InformationNeed, Token
from ZaguanSearch.core.query import FieldName
from ZaguanSearch.renderers import TsvResultWriter
from ZaguanSearch.services import QueryPipeline, SearchService
from ZaguanSearch.synthesis import QuerySynthesizer

from records import build_test_index


def _tok(idx: int, text: str, pos: str, stem: str | None = None) -> Token:
    return Token(index=idx, text=text, norm=text.lower(), stem=stem or text.lower(), pos=pos)


class CannedAnnotator:
    """Returns pre-annotated tokens for known texts."""

    def __init__(self, annotations: dict) -> None:
        self._annotations = annotations

    def annotate(self, text: str):
        tokens, spans = self._annotations[text]
        return tuple(tokens), tuple(spans)


ANNOTATIONS = {
    "Realizados por O'Donnell": (
        [_tok(0, "Realizados", "VERB", "realiz"), _tok(1, "por", "ADP"), _tok(2, "O'Donnell", "PROPN")],
        [EntitySpan(2, 3)],
    ),
    "Tesis o trabajos": (
        [_tok(0, "Tesis", "NOUN", "tesis"), _tok(1, "o", "CCONJ"), _tok(2, "trabajos", "NOUN", "trabaj")],
        [],
    ),
    "Trabajos de grado": (
        [_tok(0, "Trabajos", "NOUN", "trabaj"), _tok(1, "de", "ADP"), _tok(2, "grado", "NOUN")],
        [],
    ),
    "Robó?ica": ([_tok(0, "Robó?ica", "NOUN")], []),
    "Realizados por García": (
        [_tok(0, "Realizados", "VERB", "realiz"), _tok(1, "por", "ADP"), _tok(2, "García", "PROPN")],
        [EntitySpan(2, 3)],
    ),
}


class BatchCommandTest(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.backend = WhooshBackend(build_test_index(Path(self._tmp.name)))
        self.pipeline = QueryPipeline(
            annotator=CannedAnnotator(ANNOTATIONS),
            synthesizer=QuerySynthesizer(reference_year=2022),
            compiler=QueryCompiler(FieldClauseCompiler(build_schema(), [f.value for f in FieldName])),
        )

    def tearDown(self) -> None:
        self.backend.close()
        self._tmp.cleanup()

    def _run(self, needs):
        out = io.StringIO()
        summary = BatchCommand(
            pipeline=self.pipeline,
            search_service=SearchService(self.backend),
            writer=TsvResultWriter(out),
        ).execute(needs)
        return summary, out.getvalue().splitlines()

    def test_lines_match_total_hits(self) -> None:
        needs = [InformationNeed("Q1", "Tesis o trabajos"), InformationNeed("Q2", "Trabajos de grado")]
        summary, lines = self._run(needs)

        self.assertTrue(all(line.startswith(("Q1\t", "Q2\t")) for line in lines))
        q1 = [line for line in lines if line.startswith("Q1\t")]
        q2 = [line for line in lines if line.startswith("Q2\t")]
        self.assertEqual(len(q1), summary.total_hits["Q1"])
        self.assertEqual(len(q1), 4)
        self.assertEqual(q2, ["Q2\ttfg-musica.xml"])
        self.assertEqual(summary.processed, ["Q1", "Q2"])

    def test_q1_lines_precede_q2_lines(self) -> None:
        needs = [InformationNeed("Q1", "Tesis o trabajos"), InformationNeed("Q2", "Trabajos de grado")]
        _, lines = self._run(needs)
        prefixes = [line.split("\t", 1)[0] for line in lines]
        self.assertEqual(prefixes, sorted(prefixes))

    def test_clause_error_skips_only_that_need(self) -> None:
        needs = [
            InformationNeed("Q1", "Robó?ica"),
            InformationNeed("Q2", "Trabajos de grado"),
        ]
        summary, lines = self._run(needs)
        self.assertEqual(summary.skipped, ["Q1"])
        self.assertEqual(summary.processed, ["Q2"])
        self.assertEqual(lines, ["Q2\ttfg-musica.xml"])

    def test_agent_query(self) -> None:
        summary, lines = self._run([InformationNeed("Q3", "Realizados por García")])
        self.assertEqual(lines, ["Q3\ttesis-robotica.xml"])
        self.assertEqual(summary.total_hits["Q3"], 1)

    def test_apostrophe_in_agent_name(self) -> None:
        summary, lines = self._run([InformationNeed("Q4", "Realizados por O'Donnell")])
        self.assertEqual(summary.skipped, [])
        self.assertEqual(lines, ["Q4\tlibro-odonnell.xml"])


if __name__ == "__main__":
    unittest.main()
