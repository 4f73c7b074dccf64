"""Event types emitted while a run progresses."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from classprefix.model.outcome import FileOutcome, RunSummary


@dataclass(frozen=True)
class RunStarted:
    root: Path
    prefix: str
    files: int
    known_classes: int
    dry_run: bool = False


@dataclass(frozen=True)
class FileProcessed:
    outcome: FileOutcome


@dataclass(frozen=True)
class RunCompleted:
    summary: RunSummary
