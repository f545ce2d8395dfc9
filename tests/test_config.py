import os

import pytest

from ruby_edit.config import (
    EOL_CR,
    EOL_CRLF,
    EOL_LF,
    EditorSettings,
    default_tag_files,
    parse_eol_mode,
)
from ruby_edit.runtime import telemetry


def test_settings_defaults() -> None:
    settings = EditorSettings()

    assert settings.tab_width == 2
    assert settings.use_tabs is False
    assert settings.newline == "\n"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RUBY_EDIT_TAB_WIDTH", "4")
    monkeypatch.setenv("RUBY_EDIT_USE_TABS", "yes")
    monkeypatch.setenv("RUBY_EDIT_EOL_MODE", "crlf")

    settings = EditorSettings.from_env()

    assert settings == EditorSettings(tab_width=4, use_tabs=True, eol_mode=EOL_CRLF)


def test_settings_from_env_ignores_malformed_values(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("RUBY_EDIT_TAB_WIDTH", "wide")
    monkeypatch.setenv("RUBY_EDIT_EOL_MODE", "mac")

    settings = EditorSettings.from_env()

    assert settings.tab_width == 2
    assert settings.eol_mode == EOL_LF


def test_settings_validation() -> None:
    with pytest.raises(ValueError):
        EditorSettings(tab_width=0)
    with pytest.raises(ValueError):
        EditorSettings(eol_mode=7)


def test_parse_eol_mode() -> None:
    assert parse_eol_mode("CR") == EOL_CR
    assert parse_eol_mode("0") == EOL_CRLF
    assert parse_eol_mode(2) == EOL_LF
    assert parse_eol_mode(None, default=EOL_CR) == EOL_CR


def test_telemetry_configure_rejects_bad_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_tag_files_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RUBY_EDIT_TAGS", os.pathsep.join(["a/tags", "", "b/tags"]))

    assert default_tag_files() == ("a/tags", "b/tags")


def test_tag_files_default_to_home(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RUBY_EDIT_TAGS", raising=False)

    (path,) = default_tag_files()

    assert path.endswith(os.path.join(".ruby_edit", "tags"))
