# pyright: reportExplicitAny=false, reportAny=false
"""Configuration models.

Config is immutable and built through its factory methods, which merge the
defaults, an optional TOML file and ``LIVESNIPS_*`` environment variables.
"""

from __future__ import annotations

import re
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from livesnips.exceptions import ConfigValidationError
from livesnips.utils import get_snippet_dir, get_user_config_path

from ._defaults import (
    DEFAULT_CONFIG,
    DEFAULT_VISUAL_WINDOW_SECONDS,
)
from ._loader import deep_merge, parse_env_vars, read_toml_file

if TYPE_CHECKING:
    from pathlib import Path
    from typing import Self


class LogLevel(StrEnum):
    """Log level threshold values, most verbose first."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    file: str = ""


class Config(BaseModel):
    """Engine and command line settings.

    Attributes:
        snippet_dir: Directory holding ``*.hsnips`` libraries. Empty selects
            the platform default.
        long_context_lines: Lines before the cursor searched by multiline
            pattern triggers.
        visual_window_seconds: How long a text selection stays eligible for
            ``${VISUAL}`` substitution.
        word_pattern: Regular expression defining a word for trigger lookup.
        strict: Treat library compile errors as fatal in the command line.
        logging: Logging section.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    snippet_dir: str = ""
    long_context_lines: int = Field(default=20, ge=1)
    visual_window_seconds: float = Field(default=DEFAULT_VISUAL_WINDOW_SECONDS, ge=0)
    word_pattern: str = r"\w+"
    strict: bool = False
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("snippet_dir", "word_pattern", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> object:
        # Environment values arrive type-inferred; "2024" must stay a path.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("word_pattern")
    @classmethod
    def _check_word_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            msg = f"invalid regular expression: {e}"
            raise ValueError(msg) from e
        return value

    @property
    def snippet_path(self) -> Path:
        """Resolved snippet directory."""
        return get_snippet_dir(self.snippet_dir)

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, source: str | None = None) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Raises:
            ConfigValidationError: If a value has the wrong type or range.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            error = e.errors()[0]
            key = ".".join(str(part) for part in error["loc"])
            msg = f"Invalid value for {key}: {error['msg']}"
            raise ConfigValidationError(
                msg,
                key=key,
                value=error.get("input"),
                expected=error["type"],
                source=source,
            ) from e

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a single TOML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        return cls.from_dict(read_toml_file(path), source=str(path))

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        include_env: bool = True,
    ) -> Self:
        """Load merged configuration from all sources.

        Precedence, lowest first: defaults, the config file (``config_path``
        or the user config file when it exists), environment variables.

        Raises:
            FileNotFoundError: If ``config_path`` does not exist.
            ConfigLoadError: If the config file cannot be parsed.
            ConfigValidationError: If the merged values fail validation.
        """
        merged: dict[str, Any] = {}
        source: str | None = None

        path = config_path if config_path is not None else get_user_config_path()
        if config_path is not None or path.is_file():
            merged = deep_merge(merged, read_toml_file(path))
            source = str(path)

        if include_env:
            merged = deep_merge(merged, parse_env_vars())

        return cls.from_dict(merged, source=source)
