"""Exception hierarchy for gitlog-export."""

from pathlib import Path
from typing import Optional


class GitLogExportError(Exception):
    """Base exception for all gitlog-export failures."""

    pass


class ConfigError(GitLogExportError):
    """Raised when the configuration file cannot be read or is invalid."""

    pass


class RepositoryNotFoundError(GitLogExportError):
    """Raised when the repository path does not exist."""

    def __init__(self, path: Path):
        super().__init__(f"repository '{path}' does not exist")
        self.path = path


class ProcessSpawnError(GitLogExportError):
    """Raised when the git process cannot be started or its stdout attached."""

    pass


class LogStreamError(GitLogExportError):
    """Raised when git exits with a nonzero status after its output ended."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


class RecordParseError(GitLogExportError):
    """Base exception for a single malformed log record."""

    def __init__(self, message: str, value: str):
        super().__init__(message)
        self.value = value


class InvalidHashError(RecordParseError):
    """Raised when a commit hash is not 40 hexadecimal characters."""

    def __init__(self, value: str):
        super().__init__(
            f"commit hash '{value}' is not 40 hexadecimal characters "
            f"(length {len(value)})",
            value,
        )


class InvalidTimestampError(RecordParseError):
    """Raised when a timestamp is not extended ISO 8601 with an offset."""

    def __init__(self, value: str):
        super().__init__(f"date '{value}' is not ISO 8601", value)


class NumericOverflowError(RecordParseError):
    """Raised when a diffstat count does not fit the configured integer width."""

    def __init__(self, field: str, value: str, width: str):
        super().__init__(f"{field} value {value} does not fit in {width}", value)
        self.field = field
        self.width = width


class OutputWriteError(GitLogExportError):
    """Raised when writing output fails for a reason other than a closed pipe."""

    pass
