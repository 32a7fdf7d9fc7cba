"""
Export pipeline: git log source, record parser, serializer, output sink.

Commits flow through lazily so memory stays bounded by one record, except
for formats that must never be emitted partially (the postgres script),
which are fully parsed before the first line is written.
"""

import logging
from itertools import chain
from pathlib import Path
from typing import IO, Iterable, Iterator, Optional

from .config import ExportConfig
from .errors import RepositoryNotFoundError
from .models import Commit
from .output import write_lines
from .parser import iter_commits, split_records
from .schema import build_schema
from .serializers import OutputFormat, get_serializer
from .utils.git_runner import GitLogSource

logger = logging.getLogger(__name__)

# Formats whose output is only meaningful as a complete document
ATOMIC_FORMATS = frozenset({OutputFormat.POSTGRES})


def commits_from_chunks(
    chunks: Iterable[bytes], config: ExportConfig
) -> Iterator[Commit]:
    return iter_commits(split_records(chunks), config.width, config.on_error)


def _started(commits: Iterable[Commit]) -> Iterator[Commit]:
    """Pull the first commit so git is running before any output is produced."""
    commits = iter(commits)
    first = next(commits, None)
    if first is None:
        return iter(())
    return chain([first], commits)


def render(
    commits: Iterable[Commit], output_format: OutputFormat, config: ExportConfig
) -> Iterator[str]:
    """Serialize commits in output_format using the schema for config.width.

    A failure while reading the first record is raised here, before the
    serializer emits a header or DDL line.
    """
    serializer = get_serializer(output_format)
    schema = build_schema(config.width)
    if OutputFormat(output_format) in ATOMIC_FORMATS:
        # A parse error must surface before any statement is written
        commits = list(commits)
        logger.debug(f"Parsed {len(commits)} commits before writing")
    else:
        commits = _started(commits)
    return serializer(commits, schema, config)


def export_history(
    repository: Path,
    output_format: OutputFormat,
    config: Optional[ExportConfig] = None,
    stream: Optional[IO[str]] = None,
) -> int:
    """Export the history of repository to stream.

    Returns:
        Number of lines written

    Raises:
        RepositoryNotFoundError: If repository does not exist (checked before
            git is spawned)
        ProcessSpawnError, LogStreamError: If git cannot produce the log
        RecordParseError: On the first malformed record, unless config
            skips them
        OutputWriteError: If writing fails other than by a closed pipe
    """
    config = config or ExportConfig()
    if not repository.exists():
        raise RepositoryNotFoundError(repository)

    source = GitLogSource(repository, chunk_size=config.read_chunk_size)
    chunks = source.chunks()
    try:
        lines = render(commits_from_chunks(chunks, config), output_format, config)
        written = write_lines(lines, stream)
    finally:
        # Stops git if the reader went away before the end of history
        chunks.close()
    logger.debug(f"Wrote {written} line(s) of {OutputFormat(output_format).value}")
    return written
