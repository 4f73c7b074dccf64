"""Known class set: every literal utility class a stylesheet defines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator


@dataclass(frozen=True)
class ClassSet:
    """Immutable set of unescaped class tokens, modifiers included.

    ``hover\\:bg-blue-600:hover`` in the stylesheet becomes the member
    ``hover:bg-blue-600``.
    """

    names: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, names: Iterable[str]) -> ClassSet:
        return cls(frozenset(names))

    def __contains__(self, token: object) -> bool:
        return token in self.names

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.names))
