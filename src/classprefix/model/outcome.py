"""Outcome model: result of processing one file and of a whole run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class FileStatus(Enum):
    REWRITTEN = "rewritten"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"  # source did not parse
    FAILED = "failed"  # read or write error
    CANCELLED = "cancelled"


@dataclass
class FileOutcome:
    path: Path
    status: FileStatus
    replacements: int = 0
    error: str = ""

    @property
    def succeeded(self) -> bool:
        """True if the file was fully processed, changed or not."""
        return self.status in (FileStatus.REWRITTEN, FileStatus.UNCHANGED)


@dataclass
class RunSummary:
    """Aggregated outcomes for one run."""

    outcomes: list[FileOutcome] = field(default_factory=list)
    dry_run: bool = False
    interrupted: bool = False

    def count(self, status: FileStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def rewritten(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.status is FileStatus.REWRITTEN]

    @property
    def errors(self) -> list[FileOutcome]:
        return [
            o for o in self.outcomes
            if o.status in (FileStatus.SKIPPED, FileStatus.FAILED)
        ]

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.succeeded)

    @property
    def exit_code(self) -> int:
        """Non-zero only when there were errors and no file succeeded."""
        if self.interrupted:
            return 130
        if self.errors and self.succeeded == 0:
            return 1
        return 0
