"""Tab-separated batch output: one `identifier<TAB>document` line per hit."""

from __future__ import annotations

from typing import Optional, Sequence, TextIO

from ZaguanSearch.renderers.base import ResultWriter

MISSING_PATH = "No path for this document"


def render_tsv(identifier: str, documents: Sequence[Optional[str]]) -> str:
    return "".join(f"{identifier}\t{doc if doc else MISSING_PATH}\n" for doc in documents)


class TsvResultWriter(ResultWriter):
    """Write result lines to an open text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def write_need_result(self, identifier: str, documents: Sequence[Optional[str]]) -> None:
        self._stream.write(render_tsv(identifier, documents))

    def finalize(self) -> None:
        self._stream.flush()
