"""Textual host adapter for the Ruby editing commands."""

from .controller import TextualRubyAdapter, TextualUIHooks

__all__ = ["TextualRubyAdapter", "TextualUIHooks"]
