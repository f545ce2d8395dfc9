"""Executable Textual app that edits a Ruby file with the block commands."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding as TextualBinding
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use ruby_edit.adapters.textual.app"
    ) from exc

from ruby_edit.buffer import Buffer, BufferDocument, BufferMirror
from ruby_edit.config import EditorSettings
from ruby_edit.keymaps import KeymapRegistry, KeyStroke, load_ruby_keymaps

from .controller import TextualRubyAdapter, TextualUIHooks


def offset_to_location(text: str, offset: int) -> Tuple[int, int]:
    document = BufferDocument.from_text(text)
    row = document.line_from_position(offset)
    return row, offset - document.position_from_line(row)


def location_to_offset(text: str, location: Tuple[int, int]) -> int:
    document = BufferDocument.from_text(text)
    row, column = location
    row = min(row, document.line_count - 1)
    start = document.position_from_line(row)
    return min(start + column, document.line_end_position(row))


class RubyEditApp(App[None]):
    """TextArea editor with the Ruby toggle/autocomplete bindings."""

    CSS = """
	#editor {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        TextualBinding("ctrl+q", "quit", "Quit"),
        TextualBinding(
            "ctrl+left_curly_bracket",
            "ruby_key('ctrl+{')",
            "Toggle block",
            priority=True,
        ),
        TextualBinding(
            "shift+enter", "ruby_key('shift+enter')", "End", priority=True
        ),
    ]

    def __init__(self, *, text: str = "", path: Optional[Path] = None) -> None:
        super().__init__()
        self._initial_text = text
        self._path = path
        self.adapter: TextualRubyAdapter | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield TextArea(self._initial_text, id="editor")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        if self._path is not None:
            self.title = str(self._path)
        registry = KeymapRegistry(logger_name="ruby_edit.keymaps")
        load_ruby_keymaps(registry)
        buffer = Buffer.from_text(
            self._initial_text,
            name=self._path.name if self._path else "untitled.rb",
            settings=EditorSettings.from_env(),
        )
        hooks = TextualUIHooks(
            update_buffer=self._update_editor,
            update_status=self._update_status,
        )
        self.adapter = TextualRubyAdapter(buffer, registry, hooks)
        self.query_one("#editor", TextArea).focus()

    def action_ruby_key(self, token: str) -> None:
        if not self.adapter:
            return
        editor = self.query_one("#editor", TextArea)
        text = editor.text
        self.adapter.push_host_edit(
            BufferMirror(
                text=text, cursor=location_to_offset(text, editor.cursor_location)
            )
        )
        stroke = KeyStroke.parse(token)
        handled = self.adapter.handle_textual_key(stroke.key, modifiers=stroke.modifiers)
        if not handled and stroke.key == "enter":
            editor.insert("\n")

    def _update_editor(self, mirror: BufferMirror) -> None:
        editor = self.query_one("#editor", TextArea)
        if editor.text != mirror.text:
            editor.load_text(mirror.text)
        editor.cursor_location = offset_to_location(mirror.text, mirror.cursor)

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a Ruby file in the terminal.")
    parser.add_argument("path", nargs="?", type=Path, help="Ruby file to open")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    text = ""
    if args.path is not None and args.path.exists():
        text = args.path.read_text(encoding="utf-8")
    RubyEditApp(text=text, path=args.path).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
