"""Ruby editing aids for text editors: block toggling, ``end`` completion, snippets."""

__all__ = [
    "adapters",
    "buffer",
    "config",
    "keymaps",
    "ruby",
    "runtime",
]

__version__ = "0.1.0"
