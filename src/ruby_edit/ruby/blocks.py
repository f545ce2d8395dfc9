"""Toggle Ruby blocks between ``{ ... }`` and ``do ... end``.

With the cursor inside a single-line ``{ ... }`` block, the block becomes a
multi-line ``do ... end`` block. With the cursor on a line holding a
single-line ``do ... end`` block, that block becomes ``{ ... }``. With the
cursor inside a multi-line ``do ... end`` block, the block is folded into a
single-line ``{ ... }`` block with every newline replaced by a space.

Indentation matters: ``do`` and its ``end`` must sit at the same indentation
level, otherwise the multi-line block is not recognised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ruby_edit.buffer import Buffer
from ruby_edit.runtime import telemetry

from .patterns import (
    DO_END_INTERIOR,
    DO_LINE,
    END_LINE,
    SINGLE_LINE_DO_END,
    collapse_whitespace,
    looks_like_hash,
    open_block_params,
)


@dataclass(frozen=True, slots=True)
class BlockSpan:
    """A pending block rewrite: replace ``[start, end)`` with ``text``."""

    start: int
    end: int
    text: str
    cursor: Optional[int] = None
    indentation: tuple[tuple[int, int], ...] = ()


@dataclass(frozen=True, slots=True)
class BlockRule:
    name: str
    detect: Callable[[Buffer], Optional[BlockSpan]]


def _brace_to_do_end(buffer: Buffer) -> Optional[BlockSpan]:
    pos = buffer.current_pos
    line = buffer.line_from_position(pos)
    line_end = buffer.line_end_position(line)
    for p in range(pos, line_end):
        if buffer.char_at(p) != "}":
            continue
        s = buffer.brace_match(p)
        if s < 0:
            continue
        block = buffer.text_range(s + 1, p)
        if looks_like_hash(block):
            continue
        newline = buffer.newline
        block = open_block_params(block, newline)
        indent = buffer.line_indentation(line)
        return BlockSpan(
            start=s,
            end=p + 1,
            text=f"do{block}{newline}end",
            indentation=(
                (line + 1, indent + buffer.tab_width),
                (line + 2, indent),
            ),
        )
    return None


def _single_line_do_end(buffer: Buffer) -> Optional[BlockSpan]:
    pos = buffer.current_pos
    line = buffer.line_from_position(pos)
    text = buffer.get_line(line)
    folded, count = SINGLE_LINE_DO_END.subn(r"{\1}", text, count=1)
    if not count:
        return None
    return BlockSpan(
        start=buffer.position_from_line(line),
        end=buffer.line_end_position(line),
        text=folded,
        cursor=max(pos - 1, 0),
    )


def _multi_line_do_end(buffer: Buffer) -> Optional[BlockSpan]:
    pos = buffer.current_pos
    s = buffer.line_from_position(pos)
    while s >= 0 and not DO_LINE.search(buffer.get_line(s)):
        s -= 1
    if s < 0:
        return None

    indent = buffer.line_indentation(s)
    e = s + 1
    while e < buffer.line_count and (
        not END_LINE.search(buffer.get_line(e)) or buffer.line_indentation(e) != indent
    ):
        e += 1
    if e >= buffer.line_count:
        return None

    do_match = DO_LINE.search(buffer.get_line(s))
    end_match = END_LINE.search(buffer.get_line(e))
    if do_match is None or end_match is None:
        return None
    s2 = buffer.position_from_line(s) + do_match.start()
    e2 = buffer.position_from_line(e) + end_match.end()
    if e2 < pos:
        return None

    interior = DO_END_INTERIOR.match(buffer.text_range(s2, e2))
    if interior is None:
        return None
    folded = collapse_whitespace(interior.group(1))
    return BlockSpan(start=s2, end=e2, text=f"{{{folded}}}")


BLOCK_RULES: tuple[BlockRule, ...] = (
    BlockRule("brace_to_do_end", _brace_to_do_end),
    BlockRule("single_line_do_end", _single_line_do_end),
    BlockRule("multi_line_do_end", _multi_line_do_end),
)


def find_block_toggle(buffer: Buffer) -> Optional[tuple[BlockRule, BlockSpan]]:
    """Return the first rule that matches around the cursor and its span."""

    for rule in BLOCK_RULES:
        span = rule.detect(buffer)
        if span is not None:
            return rule, span
    return None


def apply_block_span(buffer: Buffer, span: BlockSpan, *, label: str) -> None:
    with buffer.undo_action(label):
        buffer.replace_range(span.start, span.end, span.text, label=label)
        for line, indent in span.indentation:
            if line < buffer.line_count:
                buffer.set_line_indentation(line, indent)
        if span.cursor is not None:
            buffer.goto_pos(min(span.cursor, buffer.length))


def toggle_block(buffer: Buffer) -> bool:
    """Toggle the block around the cursor; return whether anything changed."""

    found = find_block_toggle(buffer)
    if found is None:
        telemetry.record_event(
            "ruby.toggle_block",
            level="debug",
            data={"buffer": buffer.name, "rule": "none"},
        )
        return False

    rule, span = found
    with telemetry.span(
        "ruby::toggle_block",
        component="ruby",
        metadata={"buffer": buffer.name, "rule": rule.name},
    ):
        apply_block_span(buffer, span, label="toggle_block")
    return True


__all__ = [
    "BlockSpan",
    "BlockRule",
    "BLOCK_RULES",
    "find_block_toggle",
    "apply_block_span",
    "toggle_block",
]
