"""Line writer for stdout that treats a closed downstream pipe as a normal stop."""

import logging
import os
import sys
from typing import IO, Iterable, Optional

from .errors import OutputWriteError

logger = logging.getLogger(__name__)


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush cannot fail."""
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, sys.stdout.fileno())
    finally:
        os.close(devnull)


def write_lines(lines: Iterable[str], stream: Optional[IO[str]] = None) -> int:
    """Write each line followed by a newline.

    Args:
        lines: Output lines without trailing newlines
        stream: Target stream (default: sys.stdout)

    Returns:
        Number of lines written. Stops early and silently if the reader
        closed the pipe.

    Raises:
        OutputWriteError: For any write failure other than a broken pipe
    """
    target = stream if stream is not None else sys.stdout
    written = 0
    # Errors raised while producing lines are not output errors
    for line in lines:
        try:
            target.write(line)
            target.write("\n")
        except OSError as e:
            return _stop_writing(target, written, e)
        written += 1

    try:
        target.flush()
    except OSError as e:
        return _stop_writing(target, written, e)
    return written


def _stop_writing(target: IO[str], written: int, error: OSError) -> int:
    """A closed pipe ends output quietly; any other write error is raised."""
    if not isinstance(error, BrokenPipeError):
        raise OutputWriteError(f"error while printing output: {error}") from error
    logger.debug(f"Output pipe closed after {written} line(s)")
    if target is sys.stdout:
        _silence_stdout()
    return written
