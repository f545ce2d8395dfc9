"""Pure text predicates used by the Ruby editing commands."""

from __future__ import annotations

import re
from typing import Optional, Tuple

# Keyword-led control structures, then a trailing `do |args|`; order matters.
CONTROL_STRUCTURE_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern)
    for pattern in (
        r"^\s*begin",
        r"^\s*case",
        r"^\s*class",
        r"^\s*def",
        r"^\s*for",
        r"^\s*if",
        r"^\s*module",
        r"^\s*unless",
        r"^\s*until",
        r"^\s*while",
        r"do\s*\|?.*?\|?\s*$",
    )
)

DO_LINE = re.compile(r"do\s*\|?[^|]*\|?\s*$")
END_LINE = re.compile(r"^\s*end")
SINGLE_LINE_DO_END = re.compile(r"do([^0-9A-Za-z_]+.*?)end$")
BLOCK_PARAMS = re.compile(r"^\s*\|[^|]*\|")
DO_END_INTERIOR = re.compile(r"^do(.+)end$", re.DOTALL)

_HASH_ARROW = "=>"
_HASH_KEY = re.compile(r"[0-9A-Za-z_]:")
_NEWLINE_RUN = re.compile(r"[\r\n]+")
_SPACE_RUN = re.compile(r" +")


def find_balanced(text: str, open_char: str = "{", close_char: str = "}") -> Optional[
    Tuple[int, int]
]:
    """Return ``(start, end)`` of the first balanced group in ``text``.

    ``end`` is exclusive. An opener that never closes is skipped and the scan
    retries from the next opener.
    """

    start = text.find(open_char)
    while start != -1:
        depth = 0
        for index in range(start, len(text)):
            char = text[index]
            if char == open_char:
                depth += 1
            elif char == close_char:
                depth -= 1
                if depth == 0:
                    return start, index + 1
        start = text.find(open_char, start + 1)
    return None


def has_hash_marker(text: str) -> bool:
    return _HASH_ARROW in text or _HASH_KEY.search(text) is not None


def looks_like_hash(block: str) -> bool:
    """Guess whether the interior of ``{ ... }`` is a hash literal.

    The first nested ``{...}`` group is cut out so its contents do not count;
    ``=>`` or ``word:`` in what remains marks a hash. ``Foo::Bar`` also
    trips the ``word:`` check.
    """

    group = find_balanced(block)
    if group is None:
        before, after = block, ""
    else:
        before, after = block[: group[0] + 1], block[group[1] :]
    return has_hash_marker(before) or has_hash_marker(after)


def open_block_params(block: str, newline: str) -> str:
    """Break ``block`` after its ``|params|`` list, or before it if it has none."""

    match = BLOCK_PARAMS.match(block)
    if match is None:
        return newline + block
    return block[: match.end()] + newline + block[match.end() :]


def collapse_whitespace(text: str) -> str:
    """Turn line breaks into single spaces, then squeeze repeated spaces."""

    return _SPACE_RUN.sub(" ", _NEWLINE_RUN.sub(" ", text))


def opens_control_structure(line: str) -> bool:
    return any(pattern.search(line) for pattern in CONTROL_STRUCTURE_PATTERNS)


__all__ = [
    "CONTROL_STRUCTURE_PATTERNS",
    "DO_LINE",
    "END_LINE",
    "SINGLE_LINE_DO_END",
    "BLOCK_PARAMS",
    "DO_END_INTERIOR",
    "find_balanced",
    "has_hash_marker",
    "looks_like_hash",
    "open_block_params",
    "collapse_whitespace",
    "opens_control_structure",
]
