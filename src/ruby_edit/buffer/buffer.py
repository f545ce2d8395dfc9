"""High-level buffer façade combining document, state, settings, and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional, Tuple

from ruby_edit.config import NEWLINES, EditorSettings
from ruby_edit.runtime import telemetry

from .document import BufferDocument
from .state import BufferState
from .sync import BufferMirror, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_line, ensure_position

_OPENERS = {"{": "}", "(": ")", "[": "]"}
_CLOSERS = {closer: opener for opener, closer in _OPENERS.items()}


@dataclass(slots=True)
class BufferDelta:
    version: int
    start: int
    end: int
    text: str
    cursor: int
    label: str


class Buffer:
    """In-memory editor buffer addressed by absolute character offsets."""

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        undo: Optional[UndoTimeline] = None,
        settings: Optional[EditorSettings] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.undo_history = undo if undo is not None else UndoTimeline()
        self.settings = settings or EditorSettings()
        self._transaction: Optional[Transaction] = None

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        cursor: int = 0,
        name: str = "default",
        settings: Optional[EditorSettings] = None,
    ) -> "Buffer":
        buffer = cls(
            name=name, document=BufferDocument.from_text(text), settings=settings
        )
        buffer.current_pos = cursor
        return buffer

    # -- settings -----------------------------------------------------------

    @property
    def tab_width(self) -> int:
        return self.settings.tab_width

    @property
    def use_tabs(self) -> bool:
        return self.settings.use_tabs

    @property
    def eol_mode(self) -> int:
        return self.settings.eol_mode

    @property
    def newline(self) -> str:
        return NEWLINES[self.settings.eol_mode]

    # -- text access --------------------------------------------------------

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def length(self) -> int:
        return self.document.length

    @property
    def line_count(self) -> int:
        return self.document.line_count

    @property
    def current_pos(self) -> int:
        return self.state.current_pos

    @current_pos.setter
    def current_pos(self, pos: int) -> None:
        self.state.set_cursor(ensure_position(self.document, pos))

    def goto_pos(self, pos: int) -> None:
        self.current_pos = pos

    def char_at(self, pos: int) -> str:
        if 0 <= pos < self.document.length:
            return self.document.text[pos]
        return ""

    def text_range(self, start: int, end: int) -> str:
        ensure_position(self.document, start)
        ensure_position(self.document, end)
        if start > end:
            start, end = end, start
        return self.document.text[start:end]

    def line_from_position(self, pos: int) -> int:
        return self.document.line_from_position(ensure_position(self.document, pos))

    def position_from_line(self, line: int) -> int:
        return self.document.position_from_line(ensure_line(self.document, line))

    def line_end_position(self, line: int) -> int:
        return self.document.line_end_position(ensure_line(self.document, line))

    def get_line(self, line: int) -> str:
        """Text of ``line`` without its line break."""

        return self.document.get_line(ensure_line(self.document, line))

    def get_cur_line(self) -> Tuple[str, int]:
        """Return the cursor line and the cursor's column within it."""

        line = self.line_from_position(self.current_pos)
        return self.get_line(line), self.current_pos - self.position_from_line(line)

    # -- indentation --------------------------------------------------------

    def line_indentation(self, line: int) -> int:
        """Indentation of ``line`` in columns, tabs rounded up to tab stops."""

        width = 0
        tab = self.tab_width
        for char in self.get_line(line):
            if char == " ":
                width += 1
            elif char == "\t":
                width = (width // tab + 1) * tab
            else:
                break
        return width

    def set_line_indentation(self, line: int, indent: int) -> None:
        if indent < 0:
            raise BufferValidationError(f"Negative indentation {indent}")
        content = self.get_line(line)
        leading = len(content) - len(content.lstrip(" \t"))
        if self.use_tabs:
            whitespace = "\t" * (indent // self.tab_width) + " " * (
                indent % self.tab_width
            )
        else:
            whitespace = " " * indent
        if content[:leading] == whitespace:
            return
        start = self.position_from_line(line)
        self.replace_range(
            start, start + leading, whitespace, label="set_line_indentation"
        )

    # -- brace matching -----------------------------------------------------

    def brace_match(self, pos: int) -> int:
        """Offset of the delimiter pairing the one at ``pos``, or ``-1``."""

        text = self.document.text
        char = self.char_at(pos)
        if char in _OPENERS:
            partner, step = _OPENERS[char], 1
        elif char in _CLOSERS:
            partner, step = _CLOSERS[char], -1
        else:
            return -1

        depth = 0
        index = pos
        while 0 <= index < len(text):
            current = text[index]
            if current == char:
                depth += 1
            elif current == partner:
                depth -= 1
                if depth == 0:
                    return index
            index += step
        return -1

    # -- editing ------------------------------------------------------------

    def undo_action(self, label: str) -> "Transaction":
        """Group every edit made inside the ``with`` block into one undo step."""

        return Transaction(self, label)

    def replace_range(
        self, start: int, end: int, text: str, *, label: str = "replace_range"
    ) -> BufferDelta:
        ensure_position(self.document, start)
        ensure_position(self.document, end)
        if start > end:
            start, end = end, start
        with self.undo_action(label):
            self.document = self.document.replace(start, end, text)
            self.state.shift_for_edit(start, end, len(text))
            self.state.last_change_tick = self.document.version

        return BufferDelta(
            version=self.document.version,
            start=start,
            end=start + len(text),
            text=text,
            cursor=self.state.current_pos,
            label=label,
        )

    def insert_text(self, pos: int, text: str) -> BufferDelta:
        return self.replace_range(pos, pos, text, label="insert_text")

    def delete_range(self, start: int, end: int) -> BufferDelta:
        return self.replace_range(start, end, "", label="delete_range")

    def undo(self) -> bool:
        entry = self.undo_history.undo()
        if entry is None:
            return False
        self._restore(entry.before_text, entry.cursor_before)
        return True

    def redo(self) -> bool:
        entry = self.undo_history.redo()
        if entry is None:
            return False
        self._restore(entry.after_text, entry.cursor_after)
        return True

    def _restore(self, text: str, cursor: int) -> None:
        self.document = self.document.with_text(text)
        self.state.set_cursor(min(cursor, self.document.length))
        self.state.last_change_tick = self.document.version

    # -- host sync ----------------------------------------------------------

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            cursor=self.state.current_pos,
            attributes=dict(attributes or {}),
        )

    def pull_buffer(self) -> BufferMirror:
        return self.mirror(attributes={"buffer": self.name})

    def load_mirror(self, mirror: BufferMirror, *, label: str = "load_mirror") -> None:
        """Adopt a snapshot's text and cursor as one undoable edit.

        Identical text records no undo entry; only the cursor moves.
        """

        if mirror.text != self.document.text:
            self.replace_range(0, self.document.length, mirror.text, label=label)
        self.current_pos = mirror.cursor

    def push_host_edit(self, mirror: BufferMirror) -> None:
        self.load_mirror(mirror, label="host_edit")


class Transaction(AbstractContextManager["Transaction"]):
    """Undo scope; only the outermost scope on a buffer records an entry."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._outermost = False
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_text = ""
        self._before_cursor = 0

    def __enter__(self) -> "Transaction":
        if self.buffer._transaction is not None:
            return self
        self._outermost = True
        self.buffer._transaction = self
        self._before_text = self.buffer.document.text
        self._before_cursor = self.buffer.state.current_pos
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if not self._outermost:
            return False
        self.buffer._transaction = None
        if exc_type is not None:
            self.buffer._restore(self._before_text, self._before_cursor)
        else:
            self._commit()
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False

    def _commit(self) -> None:
        after_text = self.buffer.document.text
        if after_text == self._before_text:
            return
        self.buffer.undo_history.push(
            UndoEntry(
                label=self.label,
                before_text=self._before_text,
                after_text=after_text,
                cursor_before=self._before_cursor,
                cursor_after=self.buffer.state.current_pos,
            )
        )


__all__ = ["Buffer", "BufferDelta", "Transaction"]
