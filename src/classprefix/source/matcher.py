"""Scope matcher: find class-bearing string literals in a syntax tree.

Every key/value association in the tree is tested against the scope
configuration: JSX attributes and object properties by their key name, calls
by their callee name.

- An attribute match is narrow. Only the value itself is taken when it is a
  string, a template without substitutions, or an array of those.
- A property or function match is wide. Every string anywhere in the value
  (or in the call's arguments) is taken, and keys below it are no longer
  classified.

Unmatched values are still descended into, so scoped keys nested in
unrelated containers are found. Spread entries are skipped.
"""

from __future__ import annotations

from tree_sitter import Node, Tree

from classprefix.model.scope import Domain, ScopeConfig
from classprefix.model.source import ClassSource

__all__ = ["ScopeMatcher"]

_STRING = "string"
_TEMPLATE = "template_string"
_SUBSTITUTION = "template_substitution"

# Wrappers that do not change which literal a value is.
_TRANSPARENT = frozenset({
    "jsx_expression",
    "parenthesized_expression",
    "as_expression",
    "satisfies_expression",
    "non_null_expression",
})

_SKIPPED = frozenset({"spread_element", "jsx_spread_attribute", "comment"})


def _unwrap(node: Node) -> Node:
    while node.type in _TRANSPARENT:
        inner = [c for c in node.named_children if c.type != "comment"]
        if not inner:
            break
        node = inner[0]
    return node


def _is_plain_template(node: Node) -> bool:
    return node.type == _TEMPLATE and not any(
        c.type == _SUBSTITUTION for c in node.children
    )


def _is_literal(node: Node) -> bool:
    return node.type == _STRING or _is_plain_template(node)


class _Walk:
    """State for one traversal; not shared between files."""

    def __init__(self, scopes: ScopeConfig, content: bytes) -> None:
        self.scopes = scopes
        self.content = content
        self.sources: list[ClassSource] = []
        self._stack: list[tuple[Node, bool]] = []

    # --- helpers ----------------------------------------------------------

    def _text(self, node: Node) -> str:
        return self.content[node.start_byte : node.end_byte].decode("utf-8")

    def _emit(self, node: Node) -> None:
        start, end = node.start_byte + 1, node.end_byte - 1
        if end < start:
            return
        text = self.content[start:end].decode("utf-8")
        self.sources.append(ClassSource(start=start, end=end, text=text))

    def _push(self, node: Node | None, wide: bool) -> None:
        if node is not None:
            self._stack.append((node, wide))

    def _push_children(self, node: Node, wide: bool) -> None:
        for child in reversed(node.children):
            self._stack.append((child, wide))

    def _key_name(self, key: Node) -> str | None:
        if key.type in ("property_identifier", "identifier", "number", "jsx_namespace_name"):
            return self._text(key)
        if key.type == _STRING:
            return self._text(key)[1:-1]
        # computed_property_name, private names
        return None

    def _callee_name(self, callee: Node | None) -> str | None:
        if callee is None:
            return None
        callee = _unwrap(callee)
        if callee.type == "identifier":
            return self._text(callee)
        if callee.type == "member_expression":
            prop = callee.child_by_field_name("property")
            if prop is not None and prop.type == "property_identifier":
                return self._text(prop)
        return None

    def _narrow(self, value: Node) -> None:
        value = _unwrap(value)
        if _is_literal(value):
            self._emit(value)
        elif value.type == "array":
            for element in value.named_children:
                if _is_literal(element):
                    self._emit(element)

    # --- associations -----------------------------------------------------

    def _association(self, name: str | None, value: Node | None) -> None:
        if value is None:
            return
        if name is not None and self.scopes.matches(Domain.PROPERTY, name):
            self._push(value, True)
            return
        if name is not None and self.scopes.matches(Domain.ATTRIBUTE, name):
            self._narrow(value)
        self._push(value, False)

    def _jsx_attribute(self, node: Node) -> None:
        named = node.named_children
        if not named:
            return
        name = self._key_name(named[0])
        value = named[1] if len(named) > 1 else None
        self._association(name, value)

    def _pair(self, node: Node) -> None:
        key = node.child_by_field_name("key")
        value = node.child_by_field_name("value")
        if key is not None:
            self._push(key, False)
        self._association(self._key_name(key) if key is not None else None, value)

    def _call(self, node: Node) -> None:
        callee = node.child_by_field_name("function")
        arguments = node.child_by_field_name("arguments")
        name = self._callee_name(callee)
        if arguments is not None and name is not None and self.scopes.matches(Domain.FUNCTION, name):
            span = (arguments.start_byte, arguments.end_byte)
            for child in node.children:
                self._push(child, (child.start_byte, child.end_byte) == span)
            return
        self._push_children(node, False)

    # --- traversal --------------------------------------------------------

    def run(self, root: Node) -> list[ClassSource]:
        self._stack.append((root, False))
        while self._stack:
            node, wide = self._stack.pop()
            kind = node.type
            if kind in _SKIPPED:
                continue
            if kind == _STRING:
                if wide:
                    self._emit(node)
                continue
            if kind == _TEMPLATE and wide and _is_plain_template(node):
                self._emit(node)
                continue
            if wide:
                self._push_children(node, True)
            elif kind == "jsx_attribute":
                self._jsx_attribute(node)
            elif kind == "pair":
                self._pair(node)
            elif kind == "call_expression":
                self._call(node)
            else:
                self._push_children(node, False)
        self.sources.sort(key=lambda s: s.start)
        return self.sources


class ScopeMatcher:
    """Collect ClassSource nodes from parsed files for a fixed scope config."""

    def __init__(self, scopes: ScopeConfig) -> None:
        self.scopes = scopes

    def match(self, tree: Tree, content: bytes) -> list[ClassSource]:
        """Return class sources in *tree*, in source order."""
        return _Walk(self.scopes, content).run(tree.root_node)
