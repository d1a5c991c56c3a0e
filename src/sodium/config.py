"""Editor configuration passed explicitly to rendering and the controller."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from sodium import __version__

ENV_PREFIX = "SODIUM_"


@dataclass(frozen=True)
class EditorConfig:
    """Display and behaviour settings for one editing session."""

    name: str = "Sodium"
    version: str = __version__
    author: str = "By Divith et al."
    tagline: str = "Sodium is FOSS :)"
    tab_width: int = 4
    message_timeout: float = 5.0
    quit_times: int = 2
    status_style: str = "black on #98C379"
    message_style: str = "#E8B86D"
    cursor_style: str = "reverse"
    empty_row_marker: str = "~"
    status_rows: int = 2
    help_message: str = "HELP: Ctrl-F = find | Ctrl-S = save | Ctrl-Q = quit"

    @property
    def welcome(self) -> Tuple[str, ...]:
        return (
            f"{self.name} - A next generation Vi-like editor",
            "",
            f"version {self.version}",
            self.author,
            self.tagline,
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            tab_width=_int(env, "TAB_WIDTH", defaults.tab_width, minimum=1),
            message_timeout=_float(env, "MESSAGE_TIMEOUT", defaults.message_timeout),
            quit_times=_int(env, "QUIT_TIMES", defaults.quit_times, minimum=0),
            status_style=env.get(f"{ENV_PREFIX}STATUS_STYLE", defaults.status_style),
        )


def _int(env: Mapping[str, str], key: str, fallback: int, *, minimum: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return max(int(value), minimum)
    except ValueError:
        return fallback


def _float(env: Mapping[str, str], key: str, fallback: float) -> float:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return max(float(value), 0.0)
    except ValueError:
        return fallback


__all__ = ["EditorConfig"]
