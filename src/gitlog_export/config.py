"""Configuration management for gitlog-export."""

import json
import logging
import re
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

_SQL_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


class IntegerWidth(str, Enum):
    """Supported widths for the files changed / insertions / deletions counts."""

    U16 = "u16"
    U32 = "u32"
    U64 = "u64"

    @property
    def bits(self) -> int:
        return int(self.value[1:])

    @property
    def max_value(self) -> int:
        return 2**self.bits - 1


class ParseErrorPolicy(str, Enum):
    """What to do when a single log record fails to parse."""

    ABORT = "abort"
    SKIP = "skip"


class ExportConfig(BaseModel):
    """Main configuration for gitlog-export."""

    width: IntegerWidth = Field(
        default=IntegerWidth.U32,
        description="Integer width for files_changed, insertions and deletions",
    )
    table_name: str = Field(
        default="commits", description="Table name used by the postgres script"
    )
    separator: str = Field(default=",", description="Field separator for csv output")
    on_error: ParseErrorPolicy = Field(
        default=ParseErrorPolicy.ABORT,
        description="abort the run on a malformed record, or skip it with a warning",
    )
    read_chunk_size: int = Field(
        default=65536, gt=0, description="Bytes read from git per chunk"
    )

    @field_validator("table_name")
    @classmethod
    def validate_table_name(cls, v: str) -> str:
        """Table names are interpolated verbatim, so keep them plain identifiers."""
        if not _SQL_IDENTIFIER.match(v):
            raise ValueError(f"'{v}' is not a valid SQL table name")
        return v

    @field_validator("separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        if not v:
            raise ValueError("separator must not be empty")
        return v


class ConfigManager:
    """Manages configuration loading, saving, and validation."""

    DEFAULT_CONFIG_PATH = Path(".gitlog-export.json")

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self.DEFAULT_CONFIG_PATH
        self._config: Optional[ExportConfig] = None

    def load(self) -> ExportConfig:
        """Load configuration from file, or defaults when the file is absent."""
        if self.config_path.exists():
            try:
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                self._config = ExportConfig(**data)
            except (OSError, ValueError, TypeError) as e:
                raise ConfigError(
                    f"Failed to load config from {self.config_path}: {e}"
                ) from e
            logger.debug(f"Loaded config from {self.config_path}")
        else:
            logger.debug(f"No config at {self.config_path}, using defaults")
            self._config = ExportConfig()

        return self._config

    def save(self, config: Optional[ExportConfig] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self._config

        if config is None:
            raise ConfigError("No configuration to save")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, "w") as f:
            json.dump(config.model_dump(mode="json"), f, indent=2)

    def get_config(self) -> ExportConfig:
        """Get current configuration, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def update_config(self, **kwargs: Any) -> ExportConfig:
        """Apply overrides (None values are ignored) and revalidate."""
        config = self.get_config()
        overrides = {k: v for k, v in kwargs.items() if v is not None}
        if not overrides:
            return config

        try:
            self._config = ExportConfig(**{**config.model_dump(), **overrides})
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
        return self._config
