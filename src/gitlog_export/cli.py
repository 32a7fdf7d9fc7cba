"""Command line interface for gitlog-export."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from . import __version__
from .config import ConfigManager, IntegerWidth, ParseErrorPolicy
from .errors import GitLogExportError
from .pipeline import export_history
from .serializers import OutputFormat

logger = logging.getLogger(__name__)

# stdout carries the export itself, so diagnostics always go to stderr
console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
        stream=sys.stderr,
    )


def _fail(message: str) -> None:
    console.print(f"❌ {message}", style="red", markup=False, soft_wrap=True)
    sys.exit(1)


@click.command()
@click.argument("repository_path", type=click.Path(path_type=Path))
@click.argument(
    "output_format",
    metavar="{csv|json|postgres}",
    type=click.Choice(OutputFormat.choices()),
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Config file path (default: .gitlog-export.json if present)",
)
@click.option(
    "--width",
    type=click.Choice([w.value for w in IntegerWidth]),
    help="Integer width for files_changed/insertions/deletions (default: u32)",
)
@click.option("--table-name", help="Table name for postgres output (default: commits)")
@click.option("--separator", help="Field separator for csv output (default: ',')")
@click.option(
    "--on-error",
    type=click.Choice([p.value for p in ParseErrorPolicy]),
    help="abort on the first malformed record (default) or skip it with a warning",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(version=__version__, prog_name="gitlog-export")
def cli(
    repository_path: Path,
    output_format: str,
    config: Optional[Path],
    width: Optional[str],
    table_name: Optional[str],
    separator: Optional[str],
    on_error: Optional[str],
    verbose: bool,
):
    """Export the commit history of a git repository.

    \b
    Writes one record per commit with hash, author date, author email,
    committer date, files changed, insertions and deletions.

    \b
    FORMATS:
      csv       header line plus one comma separated line per commit
      json      one JSON object per line
      postgres  create table statement plus one insert per commit

    \b
    EXAMPLES:
      gitlog-export . csv > commits.csv
      gitlog-export ~/src/project json | jq .insertions
      gitlog-export --table-name history . postgres | psql mydb
    """
    _configure_logging(verbose)

    try:
        config_manager = ConfigManager(config)
        config_manager.load()
        export_config = config_manager.update_config(
            width=width,
            table_name=table_name,
            separator=separator,
            on_error=on_error,
        )
    except GitLogExportError as e:
        _fail(str(e))

    try:
        export_history(repository_path, OutputFormat(output_format), export_config)
    except GitLogExportError as e:
        logger.debug("Export failed", exc_info=True)
        _fail(str(e))


def main() -> None:
    cli(prog_name="gitlog-export")


if __name__ == "__main__":
    main()
