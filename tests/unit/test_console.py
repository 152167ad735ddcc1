"""Unit tests for the scripted console and arrow-key menus."""

from __future__ import annotations

import io
import sys

import pytest
import readchar

from vcs_gh.assistant.console import (
    Key,
    ScriptedConsole,
    ScriptExhausted,
    TerminalConsole,
    confirm,
    prompt_text,
    select,
)


def test_select_moves_and_wraps() -> None:
    console = ScriptedConsole(keys=[Key.UP, Key.OTHER, Key.UP, Key.DOWN, Key.ENTER])
    assert select(console, "Pick", ["a", "b", "c"]) == 2


def test_select_renders_header_title_and_marker() -> None:
    console = ScriptedConsole(keys=[Key.DOWN, Key.ENTER])

    select(console, "Select Scope", ["auth", "api"], header="Current branch: main")

    last_render = console.output[-5:]
    assert last_render == [
        "Current branch: main",
        "=== Select Scope ===",
        "",
        "     auth",
        "  -> api",
    ]


def test_select_requires_options() -> None:
    with pytest.raises(ValueError):
        select(ScriptedConsole(), "Empty", [])


def test_confirm_accepts_only_yes() -> None:
    console = ScriptedConsole(["Y", "yes", "", "n", "sure"])
    assert [confirm(console, "?") for _ in range(5)] == [True, True, False, False, False]


def test_exhausted_script_raises() -> None:
    console = ScriptedConsole()
    with pytest.raises(ScriptExhausted):
        console.prompt("name?")
    with pytest.raises(ScriptExhausted):
        console.read_key()


@pytest.mark.parametrize(
    ("message", "rendered"),
    [
        ("", "> "),
        ("> ", "> "),
        ("Would you like to add entries? (y/N): ", "Would you like to add entries? (y/N): "),
        ("Are you sure? (y/n)", "Are you sure? (y/n) > "),
        ("Branch name", "Branch name > "),
    ],
)
def test_prompt_text_adds_marker_once(message: str, rendered: str) -> None:
    assert prompt_text(message) == rendered


def test_terminal_prompt_uses_rendered_text(monkeypatch: pytest.MonkeyPatch) -> None:
    shown: list[str] = []

    def fake_input(text: str) -> str:
        shown.append(text)
        return "answer"

    monkeypatch.setattr("builtins.input", fake_input)

    assert TerminalConsole(progress_delay=0).prompt("Continue? (y/n):") == "answer"
    assert shown == ["Continue? (y/n): "]


def test_terminal_console_without_tty_reads_lines(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def no_raw_mode() -> str:
        raise AssertionError("readchar used without a terminal")

    monkeypatch.setattr(sys, "stdin", io.StringIO("down\n\n"))
    monkeypatch.setattr(readchar, "readkey", no_raw_mode)
    console = TerminalConsole(progress_delay=0)

    assert not console.interactive
    assert console.read_key() is Key.ENTER
    console.pause()
    with pytest.raises(EOFError):
        console.read_key()
    console.pause()
    assert "Press any key to continue..." in capsys.readouterr().out
