"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from ZaguanSearch.cli.commands import SYNTAX_NATURAL, SYNTAX_WHOOSH
from ZaguanSearch.cli.runner import CommandRunner
from ZaguanSearch.config import DEFAULT_CONFIG_PATH, load_config


@click.group(help="ZaguanSearch: turn Spanish information needs into index queries.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config,
    so `nlp.model_env` can name a variable defined there.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    load_dotenv()

    cfg = load_config(config_path)
    ctx.obj = cfg


@cli.command("batch")
@click.option(
    "--info-needs",
    "info_needs",
    required=True,
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    help="XML file with the information needs to run.",
)
@click.option(
    "--output",
    default="-",
    show_default=True,
    type=click.Path(dir_okay=False, allow_dash=True),
    help="TSV file to write results to ('-' for stdout).",
)
@click.pass_context
def batch_cmd(ctx: click.Context, info_needs: Path, output: str) -> None:
    """Run every information need and write `identifier<TAB>document` lines.

    Raises:
        click.Abort: When the model, input file or index cannot be used.
    """
    runner = CommandRunner(ctx.obj)
    runner.run_batch(action=ctx.command.name, info_needs=info_needs, output=output)


@cli.command("query")
@click.option(
    "--queries",
    "queries_file",
    default=None,
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    help="Read one query per line from this file instead of prompting.",
)
@click.option(
    "--paging",
    "hits_per_page",
    default=None,
    type=click.IntRange(min=1),
    help="Hits per page (overrides search.hits_per_page).",
)
@click.option("--raw", is_flag=True, help="Print internal document numbers and scores.")
@click.option(
    "--repeat",
    default=0,
    show_default=True,
    type=click.IntRange(min=0),
    help="Run each query this many times and log the elapsed time.",
)
@click.option(
    "--syntax",
    default=SYNTAX_NATURAL,
    show_default=True,
    type=click.Choice([SYNTAX_NATURAL, SYNTAX_WHOOSH]),
    help="Treat input as a natural-language need or as Whoosh query syntax.",
)
@click.pass_context
def query_cmd(
    ctx: click.Context,
    queries_file: Path | None,
    hits_per_page: int | None,
    raw: bool,
    repeat: int,
    syntax: str,
) -> None:
    """Search interactively and page through the results."""
    runner = CommandRunner(ctx.obj)
    runner.run_query(
        action=ctx.command.name,
        queries_file=queries_file,
        hits_per_page=hits_per_page,
        raw=True if raw else None,
        repeat=repeat,
        syntax=syntax,
    )


@cli.command("index")
@click.option(
    "--docs",
    "docs_dir",
    required=True,
    type=click.Path(path_type=Path, exists=True, file_okay=False),
    help="Directory of XML records to index.",
)
@click.pass_context
def index_cmd(ctx: click.Context, docs_dir: Path) -> None:
    """Rebuild the index from a directory of XML records."""
    runner = CommandRunner(ctx.obj)
    runner.run_index(action=ctx.command.name, docs_dir=docs_dir)
