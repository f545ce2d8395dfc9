import pytest

from ruby_edit.buffer import Buffer
from ruby_edit.keymaps import (
    RUBY_MODE,
    ActionRef,
    Binding,
    KeySequence,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
    load_ruby_keymaps,
)


def make_action(action_id: str = "ruby.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = RUBY_MODE,
    sequence: KeySequence | None = None,
    action_id: str = "ruby.test",
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=sequence or KeySequence.from_tokens("ctrl+t"),
        action_id=action_id,
        priority=priority,
    )


def test_key_stroke_tokens_are_normalized() -> None:
    assert KeyStroke("ENTER", ("SHIFT",)).token == "shift+enter"
    assert KeyStroke("{", ("ctrl",)).token == "ctrl+{"
    assert KeyStroke("a", ("shift", "ctrl", "ctrl")).token == "ctrl+shift+a"
    assert KeyStroke.parse("ctrl+{") == KeyStroke("{", ("ctrl",))
    assert KeyStroke.parse("ctrl++") == KeyStroke("+", ("ctrl",))
    assert KeyStroke.parse("x").modifiers == ()
    with pytest.raises(ValueError):
        KeyStroke("")


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="ruby.ctrl_t")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode=RUBY_MODE)) == [binding]


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="orphan"))


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="first"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="second"))

    assert [b.id for b in excinfo.value.conflicts] == ["first"]


def test_same_keys_in_other_mode_do_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="ruby"))
    registry.register_binding(make_binding(binding_id="erb", mode="erb"))

    assert registry.stats().modes == ("erb", RUBY_MODE)


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding", sequence=KeySequence.from_tokens("f5"))

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert registry.lookup(RUBY_MODE, KeySequence.from_tokens("ctrl+t")) is None


def test_duplicate_action_requires_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())
    registry.register_action(make_action(), replace=True)


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.unregister_binding("binding") is None


def test_load_ruby_keymaps_binds_both_commands() -> None:
    registry = KeymapRegistry()
    load_ruby_keymaps(registry)

    toggle = registry.lookup(RUBY_MODE, KeySequence.from_tokens("ctrl+{"))
    end = registry.lookup(RUBY_MODE, KeySequence.from_tokens("shift+enter"))

    assert toggle is not None and toggle.action_id == "ruby.toggle_block"
    assert end is not None and end.action_id == "ruby.autocomplete_end"
    assert registry.stats().action_count == 2


def test_bound_action_runs_against_buffer() -> None:
    registry = KeymapRegistry()
    load_ruby_keymaps(registry)
    buffer = Buffer.from_text("if ready", cursor=8)

    action = registry.get_action("ruby.autocomplete_end")

    assert action(buffer) is True
    assert buffer.text == "if ready\n  \nend"


def test_load_ruby_keymaps_twice_needs_replace() -> None:
    registry = KeymapRegistry()
    load_ruby_keymaps(registry)

    with pytest.raises(ValueError):
        load_ruby_keymaps(registry)
    load_ruby_keymaps(registry, replace=True)

    assert registry.stats().binding_count == 2
