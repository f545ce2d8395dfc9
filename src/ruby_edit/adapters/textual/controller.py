"""Minimal Textual adapter that runs bound Ruby actions against a buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable

from ruby_edit.buffer import Buffer, BufferMirror
from ruby_edit.keymaps import RUBY_MODE, KeymapRegistry, KeySequence, KeyStroke
from ruby_edit.runtime import telemetry


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualRubyAdapter:
    """Bridges host key events to registered Ruby actions."""

    def __init__(
        self,
        buffer: Buffer,
        registry: KeymapRegistry,
        hooks: TextualUIHooks,
        *,
        mode: str = RUBY_MODE,
    ) -> None:
        self.buffer = buffer
        self.registry = registry
        self.hooks = hooks
        self.mode = mode
        self._refresh_buffer()

    def handle_textual_key(self, key: str, *, modifiers: Iterable[str] = ()) -> bool:
        """Run the action bound to ``key``; ``False`` leaves the key to the host."""

        stroke = KeyStroke(key, tuple(modifiers))
        self._log_state("key ->", key=stroke.token)
        binding = self.registry.lookup(self.mode, KeySequence((stroke,)))
        if binding is None:
            return False

        action = self.registry.get_action(binding.action_id)
        with telemetry.span(
            "adapter::execute",
            component="adapter",
            metadata={"binding_id": binding.id, "action": action.id},
        ):
            handled = bool(action(self.buffer))

        status = f"{action.id}:{'applied' if handled else 'no_match'}"
        self.hooks.update_status(status)
        if handled:
            self._refresh_buffer()
        self._log_state("result <-", status=status)
        return handled

    def push_host_edit(self, mirror: BufferMirror) -> None:
        """Load the host widget's text and cursor into the buffer."""

        self.buffer.push_host_edit(mirror)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.buffer.pull_buffer())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "mode": self.mode,
            "cursor": self.buffer.current_pos,
            "buffer": self.buffer.name,
            "buffer_version": self.buffer.document.version,
        }


__all__ = ["TextualRubyAdapter", "TextualUIHooks"]
