"""tree-sitter grammars for the supported source file types."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree

from classprefix.errors import SourceParseError

__all__ = ["SUPPORTED_EXTENSIONS", "language_for", "parse_source"]

SUPPORTED_EXTENSIONS = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".mts", ".cts", ".tsx")


@lru_cache(maxsize=None)
def _javascript() -> Language:
    return Language(tsjavascript.language())


@lru_cache(maxsize=None)
def _typescript() -> Language:
    return Language(tstypescript.language_typescript())


@lru_cache(maxsize=None)
def _tsx() -> Language:
    return Language(tstypescript.language_tsx())


def language_for(path: Path | str) -> Language:
    """Pick a grammar by file extension. JavaScript files may contain JSX."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in (".js", ".jsx", ".mjs", ".cjs"):
        return _javascript()
    if suffix in (".ts", ".mts", ".cts"):
        return _typescript()
    if suffix == ".tsx":
        return _tsx()
    if not suffix:
        raise SourceParseError(path, "unknown filetype, missing extension")
    raise SourceParseError(path, f"unknown filetype: {suffix}")


def _first_error(root: Node) -> Node | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def parse_source(content: bytes, path: Path | str) -> Tree:
    """Parse *content* with the grammar for *path*.

    tree-sitter recovers from syntax errors; a tree with error nodes is
    rejected here so no edits are computed from a guessed structure.
    """
    try:
        content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SourceParseError(path, f"not valid UTF-8 at byte {e.start}") from e
    parser = Parser(language_for(path))
    tree = parser.parse(content)
    if tree.root_node.has_error:
        bad = _first_error(tree.root_node)
        if bad is None:
            raise SourceParseError(path, "syntax error")
        row, column = bad.start_point
        what = f"missing {bad.type}" if bad.is_missing else "syntax error"
        raise SourceParseError(path, what, line=row + 1, column=column + 1)
    return tree
