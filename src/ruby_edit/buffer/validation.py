"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import BufferDocument
from .sync import BufferValidationError


def ensure_position(document: BufferDocument, pos: int) -> int:
    if pos < 0 or pos > document.length:
        raise BufferValidationError("Position out of range", position=pos)
    return pos


def ensure_line(document: BufferDocument, line: int) -> int:
    if line < 0 or line >= document.line_count:
        raise BufferValidationError(f"Line {line} out of range")
    return line
