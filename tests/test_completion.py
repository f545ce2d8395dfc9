from __future__ import annotations

from pathlib import Path

import pytest

from ruby_edit.buffer import Buffer
from ruby_edit.ruby import completion
from ruby_edit.ruby.completion import (
    SymbolCompletion,
    complete_symbol,
    infer_symbol_type,
    iter_tags,
    symbol_behind_caret,
)

TAGS = "\n".join(
    [
        "!_TAG_FILE_FORMAT\t2\t/extended format/",
        'upcase\tstring.rb\t/^def upcase$/;"\tf\tclass:String',
        'upto\tstring.rb\t/^def upto$/;"\tf\tclass:String',
        'unshift\tarray.rb\t/^def unshift$/;"\tf\tclass:Array',
        'update\thash.rb\t/^def update$/;"\tf\tclass:Hash',
        'Utils\tutils.rb\t/^module Utils$/;"\tm',
        'run\tjobs.rb\t/^def run$/;"\tf\tclass:Jobs::Runner',
        'reset\tjobs.rb\t/^def reset$/;"\tf\tclass:Jobs::Runner',
        'VERSION\tjobs.rb\t/^VERSION$/;"\tC\tclass:Jobs',
        'VERBOSE\textra.rb\t/^VERBOSE$/;"\tC\tclass:JobsExtra',
    ]
)


@pytest.fixture
def tag_file(tmp_path: Path) -> str:
    path = tmp_path / "tags"
    path.write_text(TAGS + "\n", encoding="utf-8")
    return str(path)


def make_buffer(text: str) -> Buffer:
    return Buffer.from_text(text, cursor=len(text))


def names(result: tuple[int, list[SymbolCompletion]] | None) -> list[str]:
    assert result is not None
    return [item.name for item in result[1]]


def test_symbol_behind_caret_splits_operator() -> None:
    assert symbol_behind_caret("x = foo.ba") == ("foo", ".", "ba")
    assert symbol_behind_caret("a.b.c") == ("a.b", ".", "c")
    assert symbol_behind_caret("Jobs::VER") == ("Jobs", "::", "VER")
    assert symbol_behind_caret("puts") == ("", "", "puts")


def test_symbol_behind_caret_rejects_nothing_to_complete() -> None:
    assert symbol_behind_caret("") is None
    assert symbol_behind_caret("x = ") is None
    assert symbol_behind_caret("foo:") is None


def test_literal_assignment_selects_type(tag_file: str) -> None:
    buffer = make_buffer("name = 'ruby'\nname.up")

    result = complete_symbol(buffer, [tag_file])

    assert result is not None
    assert result[0] == 2
    assert result[1] == [
        SymbolCompletion("upcase", "f", "method"),
        SymbolCompletion("upto", "f", "method"),
    ]


def test_constructor_assignment_selects_class(tag_file: str) -> None:
    buffer = make_buffer("job = Jobs::Runner.new(queue)\njob.re")

    assert names(complete_symbol(buffer, [tag_file])) == ["reset"]


def test_class_field_must_name_the_whole_symbol(tag_file: str) -> None:
    buffer = make_buffer("Jobs::VER")

    result = complete_symbol(buffer, [tag_file])

    assert result is not None
    assert result[0] == 3
    assert result[1] == [SymbolCompletion("VERSION", "C", "variable")]


def test_nearest_recognised_assignment_wins(tag_file: str) -> None:
    hashed = make_buffer("a = [1]\na = {}\na.up")
    skipped = make_buffer("a = 'x'\na = compute\na.up")

    assert names(complete_symbol(hashed, [tag_file])) == ["update"]
    assert names(complete_symbol(skipped, [tag_file])) == ["upcase", "upto"]


def test_infer_symbol_type_literals() -> None:
    for expr, expected in (
        ('"text"', "String"),
        ("[1, 2]", "Array"),
        ("{ a: 1 }", "Hash"),
        ("/ab+/", "Regexp"),
        (":name", "Symbol"),
        ("42", "Integer"),
        ("1.5", "Float"),
        ("1..10", "Range"),
        ("1...10", "Range"),
        ("other", "x"),
    ):
        buffer = make_buffer(f"x = {expr}\nx.")
        assert infer_symbol_type(buffer, "x") == expected, expr


def test_assignment_must_start_at_word_boundary() -> None:
    buffer = make_buffer("max = 'ruby'\nx.")

    assert infer_symbol_type(buffer, "x") == "x"


def test_bare_word_has_no_owner(tag_file: str) -> None:
    assert complete_symbol(make_buffer("up"), [tag_file]) == (2, [])


def test_missing_files_are_skipped_and_names_reported_once(
    tag_file: str, tmp_path: Path
) -> None:
    buffer = make_buffer("s = ''\ns.upc")

    result = complete_symbol(buffer, [str(tmp_path / "absent"), tag_file, tag_file])

    assert names(result) == ["upcase"]


def test_default_tag_files_are_used(
    tag_file: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(completion, "TAG_FILES", [tag_file])

    assert names(complete_symbol(make_buffer("l = []\nl.un"))) == ["unshift"]


def test_nothing_to_complete_returns_none(tag_file: str) -> None:
    assert complete_symbol(make_buffer("x = "), [tag_file]) is None


def test_iter_tags_skips_header_lines(tag_file: str) -> None:
    entries = list(iter_tags(tag_file))

    assert entries[0] == ("upcase", "f", "String")
    assert ("Utils", "m", "") in entries
    assert all(not name.startswith("!_TAG") for name, _, _ in entries)
