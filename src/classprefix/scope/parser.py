"""Lark-based parser for scope descriptors such as ``att:class,*ClassName``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Iterable

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, UnexpectedInput

from classprefix.errors import ScopeSyntaxError
from classprefix.model.scope import Domain, MatchKind, NamePattern, ScopeConfig, ScopeRule

__all__ = ["parse_scope", "parse_scopes", "split_descriptors"]

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_USAGE = "expected <domain>:<name>[,<name>...] with domain att, prop or fn"


class ScopeTransformer(Transformer):
    """Turn a descriptor parse tree into a list of ScopeRule."""

    def exact(self, items: list[Token]) -> NamePattern:
        return NamePattern(MatchKind.EXACT, str(items[0]))

    def ends_with(self, items: list[Token]) -> NamePattern:
        return NamePattern(MatchKind.ENDS_WITH, str(items[0]))

    def starts_with(self, items: list[Token]) -> NamePattern:
        return NamePattern(MatchKind.STARTS_WITH, str(items[0]))

    def patterns(self, items: list[NamePattern]) -> list[NamePattern]:
        return list(items)

    def start(self, items: list[object]) -> list[ScopeRule]:
        domain = Domain(str(items[0]))
        patterns: list[NamePattern] = items[1]  # type: ignore[assignment]
        return [ScopeRule(domain=domain, pattern=p) for p in patterns]


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(encoding="utf-8"), parser="lalr", start="start")


def parse_scope(descriptor: str) -> list[ScopeRule]:
    """Parse one descriptor into its rules, in the order they were written."""
    try:
        tree = _parser().parse(descriptor)
    except UnexpectedInput as e:
        raise ScopeSyntaxError(descriptor, _USAGE, column=getattr(e, "column", None)) from e
    except LarkError as e:
        raise ScopeSyntaxError(descriptor, str(e)) from e
    return ScopeTransformer().transform(tree)


def split_descriptors(values: Iterable[str]) -> list[str]:
    """Flatten option values that may each hold several space-separated descriptors."""
    out: list[str] = []
    for value in values:
        out.extend(value.split())
    return out


def parse_scopes(descriptors: Iterable[str]) -> ScopeConfig:
    """Parse descriptors into a ScopeConfig.

    Each item may itself contain several whitespace-separated descriptors.
    """
    rules: list[ScopeRule] = []
    for descriptor in split_descriptors(descriptors):
        rules.extend(parse_scope(descriptor))
    return ScopeConfig.from_rules(rules)
