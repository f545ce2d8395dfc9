from __future__ import annotations

from ruby_edit.buffer import Buffer
from ruby_edit.config import EOL_CRLF, EditorSettings
from ruby_edit.ruby import find_block_toggle, toggle_block


def make_buffer(
    text: str, anchor: str | None = None, *, settings: EditorSettings | None = None
) -> Buffer:
    cursor = text.index(anchor) if anchor else 0
    return Buffer.from_text(text, cursor=cursor, settings=settings)


def test_brace_block_with_params_becomes_do_end() -> None:
    buffer = make_buffer("foo.each { |x| puts x }", "puts")

    assert toggle_block(buffer) is True

    assert buffer.text == "foo.each do |x|\n  puts x \nend"


def test_brace_block_without_params_opens_new_line() -> None:
    buffer = make_buffer("3.times { tick }", "tick")

    toggle_block(buffer)

    assert buffer.text == "3.times do\n  tick \nend"


def test_brace_block_keeps_current_indentation() -> None:
    buffer = make_buffer("  list.map { |v| v * 2 }", "v *")

    toggle_block(buffer)

    assert buffer.text == "  list.map do |v|\n    v * 2 \n  end"


def test_brace_block_uses_buffer_newline_and_tabs() -> None:
    settings = EditorSettings(tab_width=4, use_tabs=True, eol_mode=EOL_CRLF)
    buffer = make_buffer("\tfoo { bar }", "bar", settings=settings)

    toggle_block(buffer)

    assert buffer.text == "\tfoo do\r\n\t\tbar \r\n\tend"


def test_hash_literals_are_not_toggled() -> None:
    for text in ("opts = { :a => 1 }", "h = { a: 1 }"):
        buffer = make_buffer(text, "{")

        assert toggle_block(buffer) is False
        assert buffer.text == text
        assert len(buffer.undo_history) == 0


def test_nested_hash_inside_block_skips_to_outer_brace() -> None:
    buffer = make_buffer("items.each { |i| puts({ a: i }) }", "puts")

    toggle_block(buffer)

    assert buffer.text == "items.each do |i|\n  puts({ a: i }) \nend"


def test_single_line_do_end_becomes_braces() -> None:
    text = "foo.each do |x| puts x end"
    buffer = make_buffer(text, "puts")
    cursor = buffer.current_pos

    toggle_block(buffer)

    assert buffer.text == "foo.each { |x| puts x }"
    assert buffer.current_pos == cursor - 1
    assert buffer.text[buffer.current_pos] == "p"


def test_single_line_do_end_ignores_do_inside_words() -> None:
    buffer = make_buffer("todos.each do |t| t end", "t end")

    toggle_block(buffer)

    assert buffer.text == "todos.each { |t| t }"


def test_multi_line_do_end_collapses_to_braces() -> None:
    buffer = make_buffer("items.each do |x|\n  puts x\nend\n", "puts")

    found = find_block_toggle(buffer)
    assert found is not None
    assert found[0].name == "multi_line_do_end"

    toggle_block(buffer)

    assert buffer.text == "items.each { |x| puts x }\n"


def test_multi_line_do_end_requires_matching_indentation() -> None:
    text = "items.each do\n  x\n end"
    buffer = make_buffer(text, "x\n")

    assert toggle_block(buffer) is False
    assert buffer.text == text


def test_multi_line_do_end_skips_nested_end_at_other_indent() -> None:
    text = "a.each do |x|\n  if x\n    y\n  end\nend"
    buffer = make_buffer(text, "y")

    toggle_block(buffer)

    assert buffer.text == "a.each { |x| if x y end }"


def test_cursor_after_block_end_is_no_match() -> None:
    text = "items.each do |x|\n  puts x\nend\nputs 1"
    buffer = make_buffer(text, "puts 1")

    assert find_block_toggle(buffer) is None
    assert toggle_block(buffer) is False
    assert buffer.text == text


def test_unbalanced_brace_and_unterminated_do_do_not_raise() -> None:
    unbalanced = make_buffer("foo }")
    unterminated = make_buffer("list.each do |x|\n  x", "  x")

    assert toggle_block(unbalanced) is False
    assert toggle_block(unterminated) is False


def test_round_trip_restores_original_block() -> None:
    original = "foo { |x| x + 1 }"
    buffer = make_buffer(original, "x +")

    toggle_block(buffer)
    assert buffer.text == "foo do |x|\n  x + 1 \nend"

    toggle_block(buffer)
    assert buffer.text == original


def test_toggle_is_a_single_undo_step() -> None:
    original = "  list.map { |v| v * 2 }"
    buffer = make_buffer(original, "v *")

    toggle_block(buffer)

    assert len(buffer.undo_history) == 1
    assert buffer.undo() is True
    assert buffer.text == original
    assert buffer.redo() is True
    assert buffer.text == "  list.map do |v|\n    v * 2 \n  end"


def test_brace_block_inside_do_end_takes_precedence() -> None:
    text = "items.each do |i|\n  i.map { |v| v + 1 }\nend"
    buffer = make_buffer(text, "v + 1")

    found = find_block_toggle(buffer)

    assert found is not None
    rule, span = found
    assert rule.name == "brace_to_do_end"
    assert span.text == "do |v|\n v + 1 \nend"


def test_single_line_do_end_inside_do_block_takes_precedence() -> None:
    text = "run do\n  list.each do |x| x end\nend"
    buffer = make_buffer(text, "x end")

    found = find_block_toggle(buffer)

    assert found is not None
    assert found[0].name == "single_line_do_end"
    assert toggle_block(buffer) is True
    assert buffer.text == "run do\n  list.each { |x| x }\nend"


def test_hash_inside_do_block_falls_through_to_outer_block() -> None:
    text = "configure do\n  set({ a: 1 })\nend"
    buffer = make_buffer(text, "a: 1")

    found = find_block_toggle(buffer)

    assert found is not None
    assert found[0].name == "multi_line_do_end"
    assert toggle_block(buffer) is True
    assert buffer.text == "configure { set({ a: 1 }) }"
