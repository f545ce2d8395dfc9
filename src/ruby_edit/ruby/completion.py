"""Symbol completion for Ruby from ctags-style tag files.

The word behind the cursor is split into ``symbol``, operator and the partial
name being typed (``foo.ba`` gives ``foo``, ``.`` and ``ba``). When an earlier
line assigns ``symbol`` a literal or a ``Foo.new`` call, completion looks up
members of that type instead. Tag entries whose name starts with the partial
name and whose ``class:`` field names the symbol become candidates.

Beyond the usual ctags kinds for Ruby, kind ``C`` marks a constant and ``a``
an attribute.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from ruby_edit.buffer import Buffer
from ruby_edit.config import default_tag_files
from ruby_edit.runtime import telemetry

# Matched against the right-hand side of an assignment.
EXPR_TYPES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern), type_name)
    for pattern, type_name in (
        (r"^['\"]", "String"),
        (r"^\[", "Array"),
        (r"^\{", "Hash"),
        (r"^/", "Regexp"),
        (r"^:", "Symbol"),
        (r"^\d+(?![\d.])", "Integer"),
        (r"^\d+\.\d+", "Float"),
        (r"^\d+\.\.\.?\d+", "Range"),
    )
)

KIND_IMAGES = {
    "c": "class",
    "f": "method",
    "m": "struct",
    "F": "slot",
    "C": "variable",
    "a": "variable",
}

# Hosts may append or replace entries.
TAG_FILES: List[str] = list(default_tag_files())

SYMBOL_BEHIND_CARET = re.compile(r"([\w.]*?)([.:]*)(\w*)$")
_CONSTRUCTOR = re.compile(r"^([\w:]+)\.new")
_TAG_FIELDS = re.compile(r';"\t(.*)$')
_TAG_CLASS = re.compile(r"class:(\S+)")


@dataclass(frozen=True, slots=True)
class SymbolCompletion:
    name: str
    kind: str
    image: Optional[str] = None


def symbol_behind_caret(prefix: str) -> Optional[Tuple[str, str, str]]:
    """Split the text before the caret into ``(symbol, operator, part)``.

    Returns ``None`` when there is nothing to complete or the operator is
    not ``.`` or ``::``.
    """

    match = SYMBOL_BEHIND_CARET.search(prefix)
    if match is None:
        return None
    symbol, op, part = match.groups()
    if not symbol and not part:
        return None
    if op not in ("", ".", "::"):
        return None
    return symbol, op, part


def _assignment_pattern(symbol: str) -> re.Pattern[str]:
    return re.compile(r"(?<!\w)(?=\w)" + re.escape(symbol) + r"\s*=\s*(.*)$")


def infer_symbol_type(buffer: Buffer, symbol: str) -> str:
    """Type of ``symbol`` from the nearest recognisable assignment above the cursor.

    Falls back to ``symbol`` itself when no earlier line assigns it a literal
    or a ``Foo.new`` call.
    """

    assignment = _assignment_pattern(symbol)
    line = buffer.line_from_position(buffer.current_pos)
    for index in range(line - 1, -1, -1):
        match = assignment.search(buffer.get_line(index))
        if match is None:
            continue
        expr = match.group(1)
        constructed = _CONSTRUCTOR.match(expr)
        if constructed is not None:
            return constructed.group(1)
        for pattern, type_name in EXPR_TYPES:
            if pattern.search(expr):
                return type_name
    return symbol


def iter_tags(path: str) -> Iterator[Tuple[str, str, str]]:
    """Yield ``(name, kind, class)`` for each entry of a tag file.

    Lines without a ``;"<tab>`` field section are skipped.
    """

    with open(path, encoding="utf-8", errors="replace") as handle:
        for raw in handle:
            line = raw.rstrip("\r\n")
            fields = _TAG_FIELDS.search(line)
            if not line.strip() or fields is None:
                continue
            name = line.split(None, 1)[0]
            extra = fields.group(1)
            owner = _TAG_CLASS.search(extra)
            yield name, extra[:1], owner.group(1) if owner else ""


def _class_pattern(symbol: str) -> re.Pattern[str]:
    return re.compile(
        r"(?<![A-Za-z0-9])(?=[A-Za-z0-9])" + re.escape(symbol) + r"(?!\w)"
    )


def lookup_tags(
    symbol: str, part: str, tag_files: Iterable[str]
) -> List[SymbolCompletion]:
    """Entries named ``part...`` whose ``class:`` field names ``symbol``.

    Missing files are skipped; a name is reported once, from the first file
    that lists it under a matching class.
    """

    owner_pattern = _class_pattern(symbol)
    seen: set[str] = set()
    found: List[SymbolCompletion] = []
    for path in tag_files:
        if not os.path.isfile(path):
            continue
        for name, kind, owner in iter_tags(path):
            if not name.startswith(part) or name in seen:
                continue
            if owner_pattern.search(owner):
                seen.add(name)
                found.append(SymbolCompletion(name, kind, KIND_IMAGES.get(kind)))
    return found


def complete_symbol(
    buffer: Buffer, tag_files: Optional[Sequence[str]] = None
) -> Optional[Tuple[int, List[SymbolCompletion]]]:
    """Completion candidates for the word behind the cursor.

    Returns ``(len(part), candidates)``, where the host replaces the last
    ``len(part)`` characters with the chosen name, or ``None`` when there is
    nothing to complete.
    """

    line, column = buffer.get_cur_line()
    split = symbol_behind_caret(line[:column])
    if split is None:
        return None
    symbol, _, part = split
    owner = infer_symbol_type(buffer, symbol)
    files = TAG_FILES if tag_files is None else tag_files
    candidates = lookup_tags(owner, part, files)
    telemetry.record_event(
        "ruby.complete_symbol",
        level="debug",
        data={
            "buffer": buffer.name,
            "symbol": owner,
            "part": part,
            "count": len(candidates),
        },
    )
    return len(part), candidates


__all__ = [
    "EXPR_TYPES",
    "KIND_IMAGES",
    "SymbolCompletion",
    "TAG_FILES",
    "complete_symbol",
    "infer_symbol_type",
    "iter_tags",
    "lookup_tags",
    "symbol_behind_caret",
]
