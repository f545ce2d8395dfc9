"""Autocompletion of ``end`` after Ruby control structures."""

from __future__ import annotations

from ruby_edit.buffer import Buffer
from ruby_edit.runtime import telemetry

from .patterns import opens_control_structure


def try_to_autocomplete_end(buffer: Buffer) -> bool:
    """Close the control structure on the cursor line with ``end``.

    Opens an indented blank line for the body and leaves the cursor on it.
    Returns ``False`` without editing when the line opens nothing.
    """

    line = buffer.line_from_position(buffer.current_pos)
    if not opens_control_structure(buffer.get_line(line)):
        return False

    indent = buffer.line_indentation(line)
    newline = buffer.newline
    with telemetry.span(
        "ruby::autocomplete_end",
        component="ruby",
        metadata={"buffer": buffer.name, "line": line},
    ), buffer.undo_action("autocomplete_end"):
        buffer.insert_text(buffer.line_end_position(line), f"{newline}{newline}end")
        buffer.set_line_indentation(line + 1, indent + buffer.tab_width)
        buffer.set_line_indentation(line + 2, indent)
        buffer.goto_pos(buffer.line_end_position(line + 1))
    return True


__all__ = ["try_to_autocomplete_end"]
