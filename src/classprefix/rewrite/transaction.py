"""Splice replacements into a file's original bytes."""

from __future__ import annotations

from dataclasses import dataclass, field

from classprefix.errors import ReplacementOverlapError
from classprefix.model.source import Replacement

__all__ = ["FileTransaction", "apply_replacements"]


def _ordered(replacements: list[Replacement], size: int) -> list[Replacement]:
    ordered = sorted(replacements, key=lambda r: (r.start, r.end))
    last_end = 0
    for rp in ordered:
        if rp.start < 0 or rp.end < rp.start or rp.end > size:
            raise ReplacementOverlapError(
                f"replacement [{rp.start}, {rp.end}) outside file of {size} bytes"
            )
        if rp.start < last_end:
            raise ReplacementOverlapError(
                f"replacement [{rp.start}, {rp.end}) overlaps previous ending at {last_end}"
            )
        last_end = rp.end
    return ordered


def apply_replacements(content: bytes, replacements: list[Replacement]) -> bytes:
    """Return *content* with every replacement applied.

    Bytes outside the replaced ranges are copied unchanged. When a
    replacement carries its expected old text, the bytes it covers must match.
    """
    out: list[bytes] = []
    pos = 0
    for rp in _ordered(replacements, len(content)):
        if rp.old and content[rp.start : rp.end] != rp.old.encode("utf-8"):
            raise ReplacementOverlapError(
                f"bytes [{rp.start}, {rp.end}) do not hold the expected text {rp.old!r}"
            )
        out.append(content[pos : rp.start])
        out.append(rp.text.encode("utf-8"))
        pos = rp.end
    out.append(content[pos:])
    return b"".join(out)


@dataclass
class FileTransaction:
    """Edit plan for one file: original content plus its replacements."""

    content: bytes
    replacements: list[Replacement] = field(default_factory=list)

    def add(self, replacement: Replacement | None) -> None:
        if replacement is not None:
            self.replacements.append(replacement)

    @property
    def changed(self) -> bool:
        return bool(self.replacements)

    def commit(self) -> bytes | None:
        """Return the new content, or None if the file is unchanged."""
        if not self.replacements:
            return None
        return apply_replacements(self.content, self.replacements)
