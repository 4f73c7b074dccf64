from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from classprefix.errors import ConfigError

DEFAULT_SCOPES = ("att:class,className", "fn:createElement")
DEFAULT_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")
DEFAULT_EXCLUDES = ("node_modules",)


@dataclass(frozen=True)
class PrefixConfig:
    prefix: str
    stylesheet: Path
    root: Path
    scopes: tuple[str, ...] = DEFAULT_SCOPES
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    excludes: tuple[str, ...] = DEFAULT_EXCLUDES
    workers: int | None = None  # None lets the executor pick
    dry_run: bool = False
    use_ignore_files: bool = True

    def validate(self) -> None:
        """Raise :class:`ConfigError` for settings that make a run impossible."""
        if not self.prefix:
            raise ConfigError("prefix must not be empty")
        if any(c.isspace() for c in self.prefix):
            raise ConfigError(f"prefix must not contain whitespace: {self.prefix!r}")
        if not self.stylesheet.is_file():
            raise ConfigError(f"stylesheet not found: {self.stylesheet}")
        if not self.root.is_dir():
            raise ConfigError(f"root should be a directory, got {self.root}")
        if self.workers is not None and self.workers < 1:
            raise ConfigError(f"workers must be at least 1, got {self.workers}")
        if not self.scopes:
            raise ConfigError("at least one scope descriptor is required")
