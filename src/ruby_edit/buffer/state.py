"""Cursor and change tracking state for buffers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class BufferState:
    """Mutable cursor info tied to a BufferDocument version."""

    current_pos: int = 0
    last_change_tick: int = 0

    def set_cursor(self, pos: int) -> None:
        self.current_pos = pos

    def shift_for_edit(self, start: int, end: int, inserted: int) -> None:
        """Move the cursor the way an edit of ``[start, end)`` moves text."""

        pos = self.current_pos
        if pos >= end:
            self.current_pos = pos + inserted - (end - start)
        elif pos > start:
            self.current_pos = start
