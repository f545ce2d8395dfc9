"""Environment-driven editor settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "RUBY_EDIT_"

EOL_CRLF = 0
EOL_CR = 1
EOL_LF = 2

NEWLINES = {EOL_CRLF: "\r\n", EOL_CR: "\r", EOL_LF: "\n"}

_EOL_NAMES = {"crlf": EOL_CRLF, "cr": EOL_CR, "lf": EOL_LF}


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_paths(name: str, default: tuple[str, ...] = ()) -> tuple[str, ...]:
    """Split an ``os.pathsep``-separated variable, dropping empty entries."""

    raw = env(name)
    if raw is None:
        return default
    return tuple(part for part in raw.split(os.pathsep) if part)


def default_tag_files() -> tuple[str, ...]:
    """Ctags files for Ruby completion, from ``RUBY_EDIT_TAGS``.

    Defaults to ``~/.ruby_edit/tags``; files that do not exist are skipped
    by the completer.
    """

    return env_paths(
        "TAGS", (os.path.join(os.path.expanduser("~"), ".ruby_edit", "tags"),)
    )


def parse_eol_mode(value: str | int | None, default: int = EOL_LF) -> int:
    """Map ``crlf``/``cr``/``lf`` (or ``0``/``1``/``2``) to an EOL mode."""

    if value is None:
        return default
    if isinstance(value, int):
        return value if value in NEWLINES else default
    key = value.strip().lower()
    if key in _EOL_NAMES:
        return _EOL_NAMES[key]
    if key.isdigit() and int(key) in NEWLINES:
        return int(key)
    return default


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Per-buffer editing preferences."""

    tab_width: int = 2
    use_tabs: bool = False
    eol_mode: int = EOL_LF

    def __post_init__(self) -> None:
        if self.tab_width <= 0:
            raise ValueError("tab_width must be positive")
        if self.eol_mode not in NEWLINES:
            raise ValueError(f"Unknown eol_mode {self.eol_mode!r}")

    @property
    def newline(self) -> str:
        return NEWLINES[self.eol_mode]

    @classmethod
    def from_env(cls) -> "EditorSettings":
        tab_width = env_int("TAB_WIDTH", 2)
        if tab_width <= 0:
            tab_width = 2
        return cls(
            tab_width=tab_width,
            use_tabs=env_flag("USE_TABS", False),
            eol_mode=parse_eol_mode(env("EOL_MODE")),
        )


__all__ = [
    "ENV_PREFIX",
    "EOL_CRLF",
    "EOL_CR",
    "EOL_LF",
    "NEWLINES",
    "EditorSettings",
    "default_tag_files",
    "env",
    "env_flag",
    "env_int",
    "env_paths",
    "parse_eol_mode",
]
