"""Per-file transient values: class sources, tokens, and replacements."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassSource:
    """A string literal located through a scope match.

    ``start``/``end`` are byte offsets of the literal's contents in the
    original file, quotes excluded. ``text`` is the raw source text of that
    range, escape sequences left as written.
    """

    start: int
    end: int
    text: str


@dataclass(frozen=True)
class Token:
    """A maximal whitespace-free run inside a class source."""

    offset: int  # character offset within the class source text
    text: str


@dataclass(frozen=True)
class Replacement:
    """Replace bytes ``[start, end)`` of the original file with ``text``."""

    start: int
    end: int
    text: str
    old: str = ""
