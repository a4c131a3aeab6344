"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation, index and file
lifecycles, and error handling for command execution.
"""

from __future__ import annotations

from pathlib import Path

import click

from ZaguanSearch.backend.indexer import build_index
from ZaguanSearch.cli.commands import BatchCommand, QueryCommand
from ZaguanSearch.config import AppConfig
from ZaguanSearch.renderers.tsv import TsvResultWriter
from ZaguanSearch.services import SearchService, create_query_pipeline, open_backend
from ZaguanSearch.sources.infoneeds import load_information_needs
from ZaguanSearch.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management.

    Every command configures logging first; any exception that escapes the
    command is logged and turned into `click.Abort` (non-zero exit).
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def run_batch(self, action: str, *, info_needs: Path, output: str) -> None:
        """Run every information need in `info_needs` and write TSV results.

        Args:
            action: The CLI command name (e.g., 'batch').
            info_needs: Information-need XML file.
            output: Output file path, or '-' for stdout.

        Raises:
            click.Abort: On fatal errors (model, input file, index).
        """
        self._configure_logging(action)
        try:
            needs = load_information_needs(info_needs)
            log.info("Loaded %d information needs from %s", len(needs), info_needs)
            pipeline = create_query_pipeline(self.config)

            with open_backend(self.config) as backend, click.open_file(output, "w", encoding="utf-8") as out:
                command = BatchCommand(
                    pipeline=pipeline,
                    search_service=SearchService(backend),
                    writer=TsvResultWriter(out),
                )
                summary = command.execute(needs)
            log.info("Batch finished: %d processed, %d skipped", len(summary.processed), len(summary.skipped))
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Batch search failed: %s", e)
            raise click.Abort from e

    def run_query(
        self,
        action: str,
        *,
        queries_file: Path | None,
        hits_per_page: int | None,
        raw: bool | None,
        repeat: int,
        syntax: str,
    ) -> None:
        """Run queries typed at the prompt or listed in `queries_file`.

        Raises:
            click.Abort: On fatal errors.
        """
        self._configure_logging(action)
        try:
            pipeline = create_query_pipeline(self.config)
            settings = self.config.search.with_overrides(hits_per_page=hits_per_page, raw=raw)
            source = str(queries_file) if queries_file else "-"
            with open_backend(self.config) as backend, click.open_file(source, "r", encoding="utf-8") as reader:
                QueryCommand(
                    pipeline=pipeline,
                    search_service=SearchService(backend),
                    settings=settings,
                    reader=reader,
                    interactive=queries_file is None,
                    syntax=syntax,
                    repeat=repeat,
                ).execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Query failed: %s", e)
            raise click.Abort from e

    def run_index(self, action: str, *, docs_dir: Path) -> None:
        """Rebuild the configured index from the records in `docs_dir`.

        Raises:
            click.Abort: When indexing fails.
        """
        self._configure_logging(action)
        try:
            build_index(docs_dir, Path(self.config.index.dir))
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Indexing failed: %s", e)
            raise click.Abort from e
