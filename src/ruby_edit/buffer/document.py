"""Versioned text storage with offset/line indexing."""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass, field
from typing import List

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _line_starts(text: str) -> List[int]:
    return [0] + [match.end() for match in _LINE_BREAK.finditer(text)]


@dataclass(slots=True)
class BufferDocument:
    """Flat text plus a table of line start offsets.

    Any of ``\\r\\n``, ``\\r`` and ``\\n`` ends a line, so a document keeps
    whatever line endings it was loaded with. Edits return a new document
    with a bumped version.
    """

    text: str = ""
    version: int = 0
    _starts: List[int] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if not self._starts:
            self._starts = _line_starts(self.text)

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(text=text)

    def replace(self, start: int, end: int, text: str) -> "BufferDocument":
        """Return a document with ``[start:end)`` replaced by ``text``."""

        updated = self.text[:start] + text + self.text[end:]
        return BufferDocument(text=updated, version=self.version + 1)

    def with_text(self, text: str) -> "BufferDocument":
        return BufferDocument(text=text, version=self.version + 1)

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def line_from_position(self, pos: int) -> int:
        return bisect.bisect_right(self._starts, pos) - 1

    def position_from_line(self, line: int) -> int:
        return self._starts[line]

    def line_end_position(self, line: int) -> int:
        """Offset of the end of ``line``, before its line break."""

        if line + 1 < len(self._starts):
            end = self._starts[line + 1]
            if self.text[end - 2 : end] == "\r\n":
                return end - 2
            return end - 1
        return len(self.text)

    def get_line(self, line: int) -> str:
        return self.text[self._starts[line] : self.line_end_position(line)]
