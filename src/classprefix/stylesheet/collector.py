"""Build a ClassSet from generated stylesheet text using cssutils.

Grouping at-rules (``@media``, ``@supports``, ``@layer``, ``@container`` ...)
are unwrapped on the source text before cssutils sees it: cssutils only
models ``@media`` and re-serializes the others as unknown rules with a
mangled body. Style rules are handed to cssutils as-is, so selector
escapes reach :func:`class_names_in_selector` intact.
"""

from __future__ import annotations

import logging
import re
import xml.dom
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import cssutils

from classprefix.errors import StylesheetError
from classprefix.stylesheet.model import ClassSet
from classprefix.stylesheet.selectors import class_names_in_selector, skip_string

__all__ = ["collect_class_names", "load_class_set", "parse_class_set"]

logger = logging.getLogger(__name__)

# cssutils reports every unknown property and at-rule; generated output is full of them.
cssutils.log.setLevel(logging.FATAL)

# At-rules whose block is a list of rules rather than declarations.
GROUPING_AT_RULES = frozenset({
    "media",
    "supports",
    "layer",
    "container",
    "scope",
    "document",
    "-moz-document",
    "starting-style",
})

_AT_KEYWORD_RE = re.compile(r"@([-A-Za-z0-9_]+)")
_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


def _parser() -> cssutils.CSSParser:
    return cssutils.CSSParser(
        loglevel=logging.FATAL,
        raiseExceptions=False,
        validate=False,
        parseComments=False,
    )


@dataclass(frozen=True)
class _Statement:
    """One top-level rule or at-rule, sliced out of the source text."""

    prelude: str
    body: str | None
    text: str

    @property
    def at_keyword(self) -> str | None:
        m = _AT_KEYWORD_RE.match(_COMMENT_RE.sub("", self.prelude).lstrip())
        return m.group(1).lower() if m else None


def _skip_comment(text: str, pos: int) -> int:
    end = text.find("*/", pos + 2)
    return len(text) if end < 0 else end + 2


def _statements(css_text: str) -> Iterator[_Statement]:
    """Split *css_text* into top-level statements.

    Braces inside strings, comments and escapes do not count; an
    unterminated trailing block runs to the end of the text.
    """
    n = len(css_text)
    start = pos = 0
    depth = 0
    body_start = 0
    while pos < n:
        ch = css_text[pos]
        if ch == "\\":
            pos += 2
            continue
        if ch in "\"'":
            pos = skip_string(css_text, pos)
            continue
        if css_text.startswith("/*", pos):
            pos = _skip_comment(css_text, pos)
            continue
        if ch == "{":
            if depth == 0:
                body_start = pos
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                yield _Statement(
                    prelude=css_text[start:body_start].strip(),
                    body=css_text[body_start + 1 : pos],
                    text=css_text[start : pos + 1],
                )
                start = pos + 1
        elif ch == ";" and depth == 0:
            yield _Statement(css_text[start:pos].strip(), None, css_text[start : pos + 1])
            start = pos + 1
        pos += 1

    rest = css_text[start:]
    if not rest.strip():
        return
    if depth > 0:
        yield _Statement(css_text[start:body_start].strip(), css_text[body_start + 1 :], rest)
    else:
        yield _Statement(rest.strip(), None, rest)


def collect_class_names(css_text: str) -> Iterator[str]:
    """Yield every class token found in *css_text*, duplicates included."""
    flat: list[str] = []
    for statement in _statements(css_text):
        keyword = statement.at_keyword
        if keyword is None:
            flat.append(statement.text)
        elif keyword in GROUPING_AT_RULES and statement.body is not None:
            yield from collect_class_names(statement.body)
        else:
            # @font-face, @keyframes, @import ...: no class selectors inside
            logger.debug("ignoring @%s rule", keyword)
    if not flat:
        return
    try:
        sheet = _parser().parseString("".join(flat))
    except xml.dom.DOMException as e:
        raise StylesheetError(f"unparsable stylesheet: {e}") from e
    for rule in sheet.cssRules:
        if rule.type == rule.STYLE_RULE:
            yield from class_names_in_selector(rule.selectorText)


def parse_class_set(css_text: str) -> ClassSet:
    """Parse stylesheet text into a ClassSet.

    Raises :class:`StylesheetError` when non-empty input yields no class
    selectors at all, which means the input is not generator output.
    """
    class_set = ClassSet.of(collect_class_names(css_text))
    if not class_set and css_text.strip():
        raise StylesheetError("no class selectors found in stylesheet")
    logger.debug("extracted %d class names", len(class_set))
    return class_set


def load_class_set(path: Path | str) -> ClassSet:
    """Read and parse the stylesheet at *path*."""
    path = Path(path)
    try:
        css_text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StylesheetError(f"cannot read stylesheet {path}: {e}") from e
    try:
        return parse_class_set(css_text)
    except StylesheetError as e:
        raise StylesheetError(f"{path}: {e}") from e
