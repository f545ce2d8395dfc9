"""Built-in Ruby actions and their key bindings."""

from __future__ import annotations

from typing import Iterable

from ruby_edit.ruby import toggle_block, try_to_autocomplete_end

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

RUBY_MODE = "ruby"

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="ruby.toggle_block",
        handler=toggle_block,
        description="Toggle between { ... } and do ... end blocks",
    ),
    ActionRef(
        id="ruby.autocomplete_end",
        handler=try_to_autocomplete_end,
        description="Close an if, while, for, etc. control structure with end",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(
        id="ruby.toggle_block",
        mode=RUBY_MODE,
        sequence=KeySequence.from_tokens("ctrl+{"),
        action_id="ruby.toggle_block",
        description="Toggle block style",
    ),
    Binding(
        id="ruby.autocomplete_end",
        mode=RUBY_MODE,
        sequence=KeySequence.from_tokens("shift+enter"),
        action_id="ruby.autocomplete_end",
        description="Autocomplete end",
    ),
)


def load_ruby_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
) -> None:
    """Register the Ruby actions and their default bindings."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding, replace=replace)
    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


__all__ = ["RUBY_MODE", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_ruby_keymaps"]
