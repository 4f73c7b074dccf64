"""Error types shared across the package."""

from __future__ import annotations

from pathlib import Path


class PrefixerError(Exception):
    """Base class for every error raised by classprefix."""


class ConfigError(PrefixerError):
    """Raised when run configuration is invalid. Always fatal."""


class ScopeSyntaxError(ConfigError):
    """Raised when a scope descriptor cannot be parsed."""

    def __init__(self, descriptor: str, message: str, column: int | None = None):
        self.descriptor = descriptor
        self.column = column
        super().__init__(f"invalid scope {descriptor!r}: {message}")


class StylesheetError(PrefixerError):
    """Raised when the generated stylesheet cannot be read or parsed."""


class SourceParseError(PrefixerError):
    """Raised when a source file does not parse cleanly."""

    def __init__(
        self,
        path: Path | str,
        message: str,
        line: int | None = None,
        column: int | None = None,
    ):
        self.path = Path(path)
        self.line = line
        self.column = column
        location = f":{line}:{column}" if line is not None else ""
        super().__init__(f"{self.path}{location}: {message}")


class FileWriteError(PrefixerError):
    """Raised when a source file cannot be read or written back."""

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


class ReplacementOverlapError(PrefixerError):
    """Raised when two replacements in one edit plan overlap."""
