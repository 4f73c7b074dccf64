"""Token-level matching and prefix insertion for class-bearing strings."""

from __future__ import annotations

import re
from typing import Container

from classprefix.model.source import ClassSource, Replacement, Token

__all__ = ["prefix_token", "rewrite_class_string", "rewrite_source", "split_modifier", "tokenize"]

# ASCII whitespace only; a non-breaking space is part of a token.
_SEPARATOR_RE = re.compile(r"[ \t\n\r\f\v]+")


def tokenize(text: str) -> list[Token]:
    """Split *text* into tokens, each with its offset in *text*."""
    tokens: list[Token] = []
    pos = 0
    for m in _SEPARATOR_RE.finditer(text):
        if m.start() > pos:
            tokens.append(Token(offset=pos, text=text[pos:m.start()]))
        pos = m.end()
    if pos < len(text):
        tokens.append(Token(offset=pos, text=text[pos:]))
    return tokens


def split_modifier(token: str) -> tuple[str, str]:
    """Split *token* at its right-most ``:`` outside square brackets.

    Returns ``(modifier, base)`` with the colon kept on the modifier, e.g.
    ``("[&>.Foo]:", "absolute")``. Tokens without such a colon return
    ``("", token)``.
    """
    depth = 0
    split_at = -1
    for i, ch in enumerate(token):
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth = max(depth - 1, 0)
        elif ch == ":" and depth == 0:
            split_at = i
    if split_at < 0:
        return "", token
    return token[: split_at + 1], token[split_at + 1 :]


def prefix_token(token: str, class_set: Container[str], prefix: str) -> str:
    """Return the prefixed form of *token*, or *token* itself if it is unknown."""
    if token not in class_set:
        return token
    modifier, base = split_modifier(token)
    return f"{modifier}{prefix}{base}"


def rewrite_class_string(text: str, class_set: Container[str], prefix: str) -> str | None:
    """Prefix every known token in *text*, keeping separators verbatim.

    Returns None when no token changed.
    """
    parts: list[str] = []
    pos = 0
    changed = False
    for token in tokenize(text):
        parts.append(text[pos:token.offset])
        new = prefix_token(token.text, class_set, prefix)
        changed = changed or new != token.text
        parts.append(new)
        pos = token.offset + len(token.text)
    parts.append(text[pos:])
    if not changed:
        return None
    return "".join(parts)


def rewrite_source(source: ClassSource, class_set: Container[str], prefix: str) -> Replacement | None:
    """Compute the replacement for one class source, if any token matched."""
    new = rewrite_class_string(source.text, class_set, prefix)
    if new is None:
        return None
    return Replacement(start=source.start, end=source.end, text=new, old=source.text)
