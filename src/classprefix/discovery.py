"""Source file discovery under a project root."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

import pathspec

from classprefix.config import DEFAULT_EXCLUDES, DEFAULT_EXTENSIONS

logger = logging.getLogger(__name__)

IGNORE_FILES = (".gitignore", ".ignore")

# (directory the patterns are relative to, compiled patterns)
_Rules = tuple[tuple[Path, pathspec.PathSpec], ...]


def _normalize(extensions: Iterable[str]) -> frozenset[str]:
    return frozenset(
        (e if e.startswith(".") else f".{e}").lower() for e in extensions
    )


def _load_ignore(directory: Path) -> pathspec.PathSpec | None:
    lines: list[str] = []
    for name in IGNORE_FILES:
        path = directory / name
        if not path.is_file():
            continue
        try:
            lines.extend(path.read_text(encoding="utf-8", errors="replace").splitlines())
        except OSError as e:
            logger.warning("cannot read %s: %s", path, e)
    if not lines:
        return None
    return pathspec.GitIgnoreSpec.from_lines(lines)


def _ignored(rules: _Rules, path: Path, is_dir: bool) -> bool:
    for base, spec in rules:
        rel = path.relative_to(base).as_posix()
        if spec.match_file(rel + "/" if is_dir else rel):
            return True
    return False


def find_sources(
    root: Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    excludes: Iterable[str] = DEFAULT_EXCLUDES,
    use_ignore_files: bool = True,
) -> list[Path]:
    """Return every file under *root* with a matching extension, sorted.

    Hidden entries and directories named in *excludes* are not entered.
    With *use_ignore_files*, paths matched by a ``.gitignore`` or ``.ignore``
    file in *root* or any directory below it are left out as well; each file's
    patterns apply to its own directory tree.
    """
    wanted = _normalize(extensions)
    skip = frozenset(excludes)
    inherited: dict[Path, _Rules] = {}
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        rules = inherited.pop(current, ())
        if use_ignore_files:
            spec = _load_ignore(current)
            if spec is not None:
                rules = rules + ((current, spec),)

        kept = []
        for name in dirnames:
            if name.startswith(".") or name in skip:
                continue
            path = current / name
            if _ignored(rules, path, is_dir=True):
                logger.debug("ignoring directory %s", path)
                continue
            kept.append(name)
            inherited[path] = rules
        dirnames[:] = kept

        for name in filenames:
            path = current / name
            if name.startswith(".") or path.suffix.lower() not in wanted:
                continue
            if _ignored(rules, path, is_dir=False):
                continue
            found.append(path)
    return sorted(found)
