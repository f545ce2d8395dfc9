"""Buffer abstractions and undo/redo data structures."""

from .buffer import Buffer, BufferDelta, Transaction
from .document import BufferDocument
from .state import BufferState
from .sync import BufferMirror, BufferSync, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_line, ensure_position

__all__ = [
    "BufferDocument",
    "BufferState",
    "UndoTimeline",
    "UndoEntry",
    "Buffer",
    "BufferDelta",
    "Transaction",
    "BufferMirror",
    "BufferSync",
    "BufferValidationError",
    "ensure_line",
    "ensure_position",
]
