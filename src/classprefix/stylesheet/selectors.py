"""Class-name extraction from raw CSS selector text.

Generators escape every character of a utility class that is not a valid
identifier character, so ``hover:bg-blue-600`` is written as
``.hover\\:bg-blue-600``. A class segment runs from an unescaped ``.`` to the
next unescaped delimiter; the segment is then unescaped back to the literal
token that appears in markup.
"""

from __future__ import annotations

import re
from typing import Iterator

__all__ = ["class_names_in_selector", "skip_string", "unescape"]

# Characters that end a class segment when they appear unescaped.
_DELIMITERS = frozenset(" \t\n\r\f.:>+~[](),{}#*\"'")

_HEX_ESCAPE_RE = re.compile(r"\\([0-9a-fA-F]{1,6})(\r\n|[ \t\n\r\f])?")
_CHAR_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def _unescape_hex(match: re.Match[str]) -> str:
    code = int(match.group(1), 16)
    if code == 0 or code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        return "\ufffd"
    return chr(code)


def unescape(raw: str) -> str:
    """Resolve CSS backslash escapes (``\\:`` -> ``:``, ``\\32 `` -> ``2``)."""
    if "\\" not in raw:
        return raw
    out: list[str] = []
    pos = 0
    while pos < len(raw):
        idx = raw.find("\\", pos)
        if idx < 0:
            out.append(raw[pos:])
            break
        out.append(raw[pos:idx])
        m = _HEX_ESCAPE_RE.match(raw, idx)
        if m:
            out.append(_unescape_hex(m))
            pos = m.end()
            continue
        m = _CHAR_ESCAPE_RE.match(raw, idx)
        if m:
            out.append(m.group(1))
            pos = m.end()
            continue
        # trailing lone backslash
        pos = idx + 1
    return "".join(out)


def skip_string(text: str, pos: int) -> int:
    """Return the index just past the quoted string starting at *pos*."""
    quote = text[pos]
    pos += 1
    while pos < len(text):
        ch = text[pos]
        if ch == "\\":
            pos += 2
            continue
        if ch == quote:
            return pos + 1
        pos += 1
    return pos


def _skip_attribute(text: str, pos: int) -> int:
    """Return the index just past the ``[...]`` attribute selector at *pos*."""
    pos += 1
    while pos < len(text):
        ch = text[pos]
        if ch == "\\":
            pos += 2
            continue
        if ch in "\"'":
            pos = skip_string(text, pos)
            continue
        if ch == "]":
            return pos + 1
        pos += 1
    return pos


def class_names_in_selector(selector: str) -> Iterator[str]:
    """Yield the unescaped class name of every class segment in *selector*.

    Works on a full selector list (``a, b``) as well as a single selector.
    Attribute selectors and quoted strings are skipped, so dots inside
    ``[data-x="a.b"]`` are not mistaken for classes.
    """
    pos = 0
    n = len(selector)
    while pos < n:
        ch = selector[pos]
        if ch == "\\":
            pos += 2
            continue
        if ch in "\"'":
            pos = skip_string(selector, pos)
            continue
        if ch == "[":
            pos = _skip_attribute(selector, pos)
            continue
        if ch != ".":
            pos += 1
            continue

        start = pos + 1
        pos = start
        while pos < n:
            c = selector[pos]
            if c == "\\":
                pos += 2
                continue
            if c in _DELIMITERS:
                break
            pos += 1
        pos = min(pos, n)
        if pos > start:
            yield unescape(selector[start:pos])
