"""Service layer for ZaguanSearch.

Provides the text-to-query pipeline, search execution, and factory
functions that wire them from configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ZaguanSearch.services.search import QueryPipeline, SearchBackend, SearchService, document_name

if TYPE_CHECKING:
    from ZaguanSearch.backend.searcher import WhooshBackend
    from ZaguanSearch.config import AppConfig
    from ZaguanSearch.nlp.annotator import TextAnnotator


def create_query_pipeline(config: AppConfig, annotator: TextAnnotator | None = None) -> QueryPipeline:
    """Create the annotate/synthesize/compile pipeline.

    Args:
        config: Application configuration.
        annotator: Optional annotator; the configured spaCy model is loaded
            when omitted.

    Returns:
        Configured QueryPipeline instance.

    Raises:
        ModelLoadError: If the spaCy model cannot be loaded.
    """
    from ZaguanSearch.backend.compiler import FieldClauseCompiler, QueryCompiler
    from ZaguanSearch.backend.schema import build_schema
    from ZaguanSearch.nlp.annotator import Annotator
    from ZaguanSearch.synthesis.engine import QuerySynthesizer

    if annotator is None:
        annotator = Annotator.load(config.nlp.model, entity_labels=config.nlp.entity_labels)
    compiler = QueryCompiler(FieldClauseCompiler(build_schema(), config.index.fields))
    return QueryPipeline(
        annotator=annotator,
        synthesizer=QuerySynthesizer(reference_year=config.synthesis.reference_year),
        compiler=compiler,
    )


def open_backend(config: AppConfig) -> WhooshBackend:
    """Open the configured Whoosh index for searching."""
    from ZaguanSearch.backend.searcher import WhooshBackend

    return WhooshBackend(config.index.dir)


__all__ = [
    "QueryPipeline",
    "SearchBackend",
    "SearchService",
    "create_query_pipeline",
    "document_name",
    "open_backend",
]
