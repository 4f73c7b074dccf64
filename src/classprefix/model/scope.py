"""Scope model: which syntactic locations hold class-bearing strings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Domain(Enum):
    """Kind of key a scope rule is tested against.

    ATTRIBUTE rules are narrow: only the directly associated value is taken.
    PROPERTY and FUNCTION rules are wide: every string in the value (or in the
    call's arguments) is taken, at any depth.
    """

    ATTRIBUTE = "att"
    PROPERTY = "prop"
    FUNCTION = "fn"


class MatchKind(Enum):
    EXACT = "exact"
    ENDS_WITH = "ends_with"  # *Suffix
    STARTS_WITH = "starts_with"  # Prefix*


@dataclass(frozen=True)
class NamePattern:
    """An anchored, case-sensitive name pattern.

    A wildcard must consume at least one character, so ``*ClassName`` matches
    ``iconClassName`` but not ``ClassName``.
    """

    kind: MatchKind
    stem: str

    def matches(self, name: str) -> bool:
        if self.kind is MatchKind.EXACT:
            return name == self.stem
        if len(name) <= len(self.stem):
            return False
        if self.kind is MatchKind.ENDS_WITH:
            return name.endswith(self.stem)
        return name.startswith(self.stem)

    def __str__(self) -> str:
        if self.kind is MatchKind.ENDS_WITH:
            return f"*{self.stem}"
        if self.kind is MatchKind.STARTS_WITH:
            return f"{self.stem}*"
        return self.stem


@dataclass(frozen=True)
class ScopeRule:
    domain: Domain
    pattern: NamePattern

    def matches(self, name: str) -> bool:
        return self.pattern.matches(name)

    def __str__(self) -> str:
        return f"{self.domain.value}:{self.pattern}"


@dataclass(frozen=True)
class ScopeConfig:
    """Ordered scope rules, one tuple per domain. Built once per run."""

    attributes: tuple[ScopeRule, ...] = ()
    properties: tuple[ScopeRule, ...] = ()
    functions: tuple[ScopeRule, ...] = ()

    @classmethod
    def from_rules(cls, rules: list[ScopeRule]) -> ScopeConfig:
        return cls(
            attributes=tuple(r for r in rules if r.domain is Domain.ATTRIBUTE),
            properties=tuple(r for r in rules if r.domain is Domain.PROPERTY),
            functions=tuple(r for r in rules if r.domain is Domain.FUNCTION),
        )

    def rules_for(self, domain: Domain) -> tuple[ScopeRule, ...]:
        if domain is Domain.ATTRIBUTE:
            return self.attributes
        if domain is Domain.PROPERTY:
            return self.properties
        return self.functions

    def matches(self, domain: Domain, name: str) -> bool:
        return any(rule.matches(name) for rule in self.rules_for(domain))

    def __iter__(self):
        yield from self.attributes
        yield from self.properties
        yield from self.functions
