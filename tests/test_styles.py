"""Tests for simian.styles."""

from __future__ import annotations

import typing as t

import pytest

from simian.styles import (
    BackgroundColor,
    Color,
    StyleConfig,
    TextStyle,
    colorize,
    strip_ansi,
    stylize,
)

DISABLED = StyleConfig(enabled=False)


def test_colorize() -> None:
    """Foreground and background colors wrap text in SGR sequences."""
    assert colorize("x", Color.red) == "\x1b[31mx\x1b[0m"
    assert colorize("x", Color.gray) == "\x1b[90mx\x1b[0m"
    assert colorize("x", BackgroundColor.blue) == "\x1b[44mx\x1b[0m"


def test_stylize() -> None:
    """Text styles use their own codes."""
    assert stylize("x", TextStyle.bold) == "\x1b[1mx\x1b[0m"
    assert stylize("x", TextStyle.underline) == "\x1b[4mx\x1b[0m"


def test_disabled_style_returns_text_unchanged() -> None:
    """No sequences are emitted when styling is off."""
    assert colorize("x", Color.red, DISABLED) == "x"
    assert stylize("x", TextStyle.bold, DISABLED) == "x"


def test_styles_are_independent() -> None:
    """One disabled config does not affect renders using another."""
    assert colorize("a", Color.green, DISABLED) == "a"
    assert colorize("a", Color.green) != "a"


class StripFixture(t.NamedTuple):
    """Test fixture for test_strip_ansi()."""

    test_id: str
    text: str
    expected: str


STRIP_FIXTURES: list[StripFixture] = [
    StripFixture(test_id="plain", text="hello", expected="hello"),
    StripFixture(
        test_id="nested",
        text=stylize(colorize("hi", Color.cyan), TextStyle.bold),
        expected="hi",
    ),
    StripFixture(
        test_id="compound_parameters",
        text="\x1b[1;31mwarn\x1b[0m done",
        expected="warn done",
    ),
    StripFixture(test_id="cursor_control", text="\x1b[?25lbusy\x1b[2K", expected="busy"),
]


@pytest.mark.parametrize(
    list(StripFixture._fields),
    STRIP_FIXTURES,
    ids=[test.test_id for test in STRIP_FIXTURES],
)
def test_strip_ansi(test_id: str, text: str, expected: str) -> None:
    """Escape sequences are removed, visible text is kept."""
    assert strip_ansi(text) == expected


@pytest.mark.parametrize(
    ("env", "enabled"),
    [
        ({}, True),
        ({"NO_COLOR": ""}, False),
        ({"NO_COLOR": "1"}, False),
        ({"SIMIAN_NO_COLOR": "1"}, False),
        ({"SIMIAN_NO_COLOR": "0"}, True),
        ({"SIMIAN_NO_COLOR": "false"}, True),
    ],
    ids=[
        "unset",
        "no_color_empty",
        "no_color",
        "simian_no_color",
        "simian_no_color_zero",
        "simian_no_color_false",
    ],
)
def test_style_from_env(
    monkeypatch: pytest.MonkeyPatch,
    env: dict[str, str],
    enabled: bool,
) -> None:
    """NO_COLOR and SIMIAN_NO_COLOR disable styling."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("SIMIAN_NO_COLOR", raising=False)
    for name, value in env.items():
        monkeypatch.setenv(name, value)

    assert StyleConfig.from_env().enabled is enabled
