"""Ruby editing commands: block toggling, ``end`` and symbol completion, snippets."""

from .blocks import (
    BLOCK_RULES,
    BlockRule,
    BlockSpan,
    apply_block_span,
    find_block_toggle,
    toggle_block,
)
from .completion import EXPR_TYPES, SymbolCompletion, complete_symbol
from .control import try_to_autocomplete_end
from .patterns import CONTROL_STRUCTURE_PATTERNS, looks_like_hash
from .snippets import SNIPPETS, install_snippets, snippet

__all__ = [
    "BLOCK_RULES",
    "BlockRule",
    "BlockSpan",
    "CONTROL_STRUCTURE_PATTERNS",
    "EXPR_TYPES",
    "SNIPPETS",
    "SymbolCompletion",
    "apply_block_span",
    "complete_symbol",
    "find_block_toggle",
    "install_snippets",
    "looks_like_hash",
    "snippet",
    "toggle_block",
    "try_to_autocomplete_end",
]
