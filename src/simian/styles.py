"""Terminal colors and text styles.

simian.styles
~~~~~~~~~~~~~

Styling is controlled by an explicit :class:`StyleConfig` passed down the
rendering path, so two renders with different preferences never interfere.

Examples
--------
>>> colorize("ok", Color.green)
'\\x1b[32mok\\x1b[0m'
>>> colorize("ok", Color.green, StyleConfig(enabled=False))
'ok'
>>> strip_ansi(stylize("Name", TextStyle.bold))
'Name'
"""

from __future__ import annotations

import dataclasses
import enum
import os
import re

_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


class Color(enum.IntEnum):
    """Foreground colors (SGR codes)."""

    black = 30
    red = 31
    green = 32
    yellow = 33
    blue = 34
    magenta = 35
    cyan = 36
    white = 37

    gray = 90
    light_red = 91
    light_green = 92
    light_yellow = 93
    light_blue = 94
    light_magenta = 95
    light_cyan = 96
    light_white = 97


class BackgroundColor(enum.IntEnum):
    """Background colors (SGR codes)."""

    black = 40
    red = 41
    green = 42
    yellow = 43
    blue = 44
    magenta = 45
    cyan = 46
    white = 47


class TextStyle(enum.IntEnum):
    """Text decorations (SGR codes)."""

    bold = 1
    italic = 3
    underline = 4
    blink = 5


def _env_flag(name: str) -> bool:
    value = os.getenv(name)
    if value is None:
        return False
    return value not in {"", "0", "false", "False", "no", "NO"}


@dataclasses.dataclass(frozen=True)
class StyleConfig:
    """Whether escape sequences are emitted.

    Attributes
    ----------
    enabled : bool
        When ``False``, :func:`colorize` and :func:`stylize` return text
        unchanged and table rendering strips existing sequences.
    """

    enabled: bool = True

    @classmethod
    def from_env(cls) -> StyleConfig:
        """Disable styling when ``NO_COLOR`` or ``SIMIAN_NO_COLOR`` is set."""
        disabled = "NO_COLOR" in os.environ or _env_flag("SIMIAN_NO_COLOR")
        return cls(enabled=not disabled)


DEFAULT_STYLE = StyleConfig()


def _apply(text: str, code: int, style: StyleConfig) -> str:
    if not style.enabled:
        return text
    return f"\x1b[{code}m{text}\x1b[0m"


def colorize(
    text: str,
    color: Color | BackgroundColor,
    style: StyleConfig = DEFAULT_STYLE,
) -> str:
    """Wrap text in a foreground or background color sequence."""
    return _apply(text, int(color), style)


def stylize(
    text: str,
    text_style: TextStyle,
    style: StyleConfig = DEFAULT_STYLE,
) -> str:
    """Wrap text in a decoration sequence such as bold."""
    return _apply(text, int(text_style), style)


def strip_ansi(text: str) -> str:
    """Remove terminal escape sequences, leaving the visible characters."""
    return _ESCAPE_RE.sub("", text)
