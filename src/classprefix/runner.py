"""Run orchestration: build shared state once, then rewrite files in a pool."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path

from classprefix.config import PrefixConfig
from classprefix.discovery import find_sources
from classprefix.errors import FileWriteError, SourceParseError
from classprefix.events.bus import EventBus
from classprefix.events.types import FileProcessed, RunCompleted, RunStarted
from classprefix.model.outcome import FileOutcome, FileStatus, RunSummary
from classprefix.model.scope import ScopeConfig
from classprefix.rewrite.tokens import rewrite_source
from classprefix.rewrite.transaction import FileTransaction
from classprefix.scope.parser import parse_scopes
from classprefix.source.languages import parse_source
from classprefix.source.matcher import ScopeMatcher
from classprefix.stylesheet.collector import load_class_set
from classprefix.stylesheet.model import ClassSet

__all__ = ["Prefixer", "Runner", "write_atomic"]

logger = logging.getLogger(__name__)


def write_atomic(path: Path, content: bytes) -> None:
    """Replace *path* with *content* in one rename, keeping its permissions."""
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(content)
        shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


@dataclass(frozen=True)
class Prefixer:
    """Read-only per-run state shared by every file unit."""

    prefix: str
    class_set: ClassSet
    scopes: ScopeConfig

    def plan(self, content: bytes, path: Path | str) -> FileTransaction:
        """Parse *content* and collect the replacements for its known tokens."""
        tree = parse_source(content, path)
        transaction = FileTransaction(content)
        for source in ScopeMatcher(self.scopes).match(tree, content):
            transaction.add(rewrite_source(source, self.class_set, self.prefix))
        return transaction

    def transform(self, content: bytes, path: Path | str) -> bytes | None:
        """Return the rewritten content, or None if nothing changed."""
        return self.plan(content, path).commit()

    def process_file(self, path: Path, dry_run: bool = False) -> FileOutcome:
        """Rewrite one file in place. Per-file errors become the outcome."""
        try:
            content = path.read_bytes()
        except OSError as e:
            return FileOutcome(path, FileStatus.FAILED, error=f"cannot read: {e}")

        try:
            transaction = self.plan(content, path)
        except SourceParseError as e:
            logger.info("skipping %s", e)
            return FileOutcome(path, FileStatus.SKIPPED, error=str(e))

        new_content = transaction.commit()
        if new_content is None:
            logger.debug("unchanged %s", path)
            return FileOutcome(path, FileStatus.UNCHANGED)

        count = len(transaction.replacements)
        if not dry_run:
            try:
                write_atomic(path, new_content)
            except OSError as e:
                err = FileWriteError(path, f"cannot write: {e}")
                logger.info("%s", err)
                return FileOutcome(path, FileStatus.FAILED, replacements=count, error=str(err))
        logger.info("transformed %s (%d strings)", path, count)
        return FileOutcome(path, FileStatus.REWRITTEN, replacements=count)


class Runner:
    """Execute one prefixing run described by a PrefixConfig.

    Fatal errors (configuration, scopes, stylesheet) are raised from
    :meth:`prepare` before any file is opened.
    """

    def __init__(self, config: PrefixConfig, event_bus: EventBus | None = None) -> None:
        self.config = config
        self.event_bus = event_bus or EventBus()

    def prepare(self) -> Prefixer:
        self.config.validate()
        scopes = parse_scopes(self.config.scopes)
        logger.debug("scopes: %s", " ".join(str(rule) for rule in scopes))
        class_set = load_class_set(self.config.stylesheet)
        logger.info("extracted %d class names from %s", len(class_set), self.config.stylesheet)
        return Prefixer(prefix=self.config.prefix, class_set=class_set, scopes=scopes)

    def run(self) -> RunSummary:
        prefixer = self.prepare()
        files = find_sources(
            self.config.root,
            self.config.extensions,
            self.config.excludes,
            use_ignore_files=self.config.use_ignore_files,
        )
        self.event_bus.emit(
            RunStarted(
                root=self.config.root,
                prefix=self.config.prefix,
                files=len(files),
                known_classes=len(prefixer.class_set),
                dry_run=self.config.dry_run,
            )
        )

        summary = RunSummary(dry_run=self.config.dry_run)
        pool = ThreadPoolExecutor(max_workers=self.config.workers)
        futures: dict[Future, Path] = {}
        try:
            for path in files:
                futures[pool.submit(prefixer.process_file, path, self.config.dry_run)] = path
            for future in as_completed(futures):
                self._record(summary, futures[future], future)
        except KeyboardInterrupt:
            summary.interrupted = True
            logger.warning("interrupted, waiting for in-flight files")
            pool.shutdown(wait=True, cancel_futures=True)
            done = {o.path for o in summary.outcomes}
            for future, path in futures.items():
                if path in done:
                    continue
                if future.cancelled():
                    summary.outcomes.append(FileOutcome(path, FileStatus.CANCELLED))
                else:
                    self._record(summary, path, future)
        finally:
            pool.shutdown(wait=True)

        summary.outcomes.sort(key=lambda o: o.path)
        self.event_bus.emit(RunCompleted(summary=summary))
        return summary

    def _record(self, summary: RunSummary, path: Path, future: Future) -> None:
        try:
            outcome = future.result()
        except Exception as exc:
            logger.exception("failed to process %s", path)
            outcome = FileOutcome(path, FileStatus.FAILED, error=str(exc))
        summary.outcomes.append(outcome)
        self.event_bus.emit(FileProcessed(outcome=outcome))
