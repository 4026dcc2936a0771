"""livesnips exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class LivesnipsError(Exception):
    """Base exception for livesnips errors."""


class CompileError(LivesnipsError):
    """Raised when a snippet library cannot be compiled.

    Attributes:
        path: The library file being compiled, if known.
        line: 1-based line number of the offending line, if known.
        content: The offending line content, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        content: str | None = None,
    ) -> None:
        """Initialize with error message and source location."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.content: str | None = content

    def __str__(self) -> str:
        message = super().__str__()
        location = ""
        if self.path is not None:
            location = str(self.path)
        if self.line is not None:
            location = f"{location}:{self.line}" if location else f"line {self.line}"
        if location:
            message = f"{location}: {message}"
        if self.content is not None:
            message = f"{message}\n    {self.content}"
        return message


class ContextFilterError(LivesnipsError):
    """Raised when a context filter expression is invalid or cannot be evaluated."""

    def __init__(
        self,
        message: str,
        *,
        expression: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and expression context."""
        super().__init__(message)
        self.expression: str = expression
        self.cause: Exception | None = cause


class GeneratorError(LivesnipsError):
    """Raised when a snippet generator fails while running computed code.

    Attributes:
        description: Description of the snippet whose generator failed.
        cause: The exception raised by the computed code.
    """

    def __init__(
        self,
        message: str,
        *,
        description: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and snippet context."""
        super().__init__(message)
        self.description: str = description
        self.cause: Exception | None = cause


class ConfigError(LivesnipsError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: object,
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: object = value
        self.expected: str = expected
        self.source: str | None = source
