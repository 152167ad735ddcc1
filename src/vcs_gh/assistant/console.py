"""Console capability used by every interactive step.

`TerminalConsole` talks to a real terminal: free text through `input()` and
single keystrokes through `readchar` (raw mode on POSIX, direct console reads
on Windows). `ScriptedConsole` replays canned answers so the loader and the
workflow can run without a terminal.
"""

from __future__ import annotations

import os
import sys
import time
from collections import deque
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Protocol

import readchar

_ANSI_CLEAR = "\033[H\033[J"
_ANSI_REVERSE = "\033[7m"
_ANSI_RESET = "\033[0m"


class Key(str, Enum):
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    OTHER = "other"


class ScriptExhausted(RuntimeError):
    """A scripted console was asked for more input than it was given."""


def prompt_text(message: str = "") -> str:
    """Render a prompt, adding a `> ` marker unless the message already ends one."""

    text = message.rstrip()
    if not text:
        return "> "
    if text.endswith((">", ":", "?")):
        return f"{text} "
    return f"{text} > "


class Console(Protocol):
    interactive: bool
    ansi: bool

    def write(self, text: str = "") -> None: ...

    def error(self, text: str) -> None: ...

    def prompt(self, message: str = "") -> str: ...

    def read_key(self) -> Key: ...

    def clear(self) -> None: ...

    def pause(self) -> None: ...

    def progress(self, message: str) -> None: ...


class TerminalConsole:
    """Console bound to the process's stdin/stdout."""

    def __init__(self, *, progress_delay: float = 0.45) -> None:
        self.progress_delay = progress_delay
        self.interactive = sys.stdin.isatty()
        self.ansi = os.name != "nt"

    def write(self, text: str = "") -> None:
        print(text, flush=True)

    def error(self, text: str) -> None:
        print(text, file=sys.stderr, flush=True)

    def prompt(self, message: str = "") -> str:
        try:
            return input(prompt_text(message))
        except EOFError:
            return ""

    def read_key(self) -> Key:
        if not self.interactive:
            # Without a terminal every line of input counts as Enter.
            if not sys.stdin.readline():
                raise EOFError("standard input closed")
            return Key.ENTER

        key = readchar.readkey()
        if key == readchar.key.UP:
            return Key.UP
        if key == readchar.key.DOWN:
            return Key.DOWN
        if key in (readchar.key.ENTER, "\r", "\n"):
            return Key.ENTER
        return Key.OTHER

    def clear(self) -> None:
        if self.ansi:
            sys.stdout.write(_ANSI_CLEAR)
            sys.stdout.flush()
        else:
            os.system("cls")

    def pause(self) -> None:
        sys.stdout.write("Press any key to continue...")
        sys.stdout.flush()
        if self.interactive:
            readchar.readkey()
        else:
            sys.stdin.readline()
        sys.stdout.write("\n")

    def progress(self, message: str) -> None:
        if self.progress_delay <= 0:
            print(f"{message}...", flush=True)
            return
        for dots in range(1, 4):
            sys.stdout.write(f"\r{message}{'.' * dots}")
            sys.stdout.flush()
            time.sleep(self.progress_delay)
        sys.stdout.write("\n")
        sys.stdout.flush()


class ScriptedConsole:
    """Console that answers from canned input and records everything shown.

    Prompts consume `lines` in order, keystrokes consume `keys`.
    """

    def __init__(
        self,
        lines: Iterable[str] = (),
        keys: Iterable[Key] = (),
        *,
        interactive: bool = True,
    ) -> None:
        self._lines: deque[str] = deque(lines)
        self._keys: deque[Key] = deque(keys)
        self.interactive = interactive
        self.ansi = False
        self.output: list[str] = []
        self.errors: list[str] = []
        self.prompts: list[str] = []
        self.pauses = 0

    def write(self, text: str = "") -> None:
        self.output.append(text)

    def error(self, text: str) -> None:
        self.errors.append(text)

    def prompt(self, message: str = "") -> str:
        self.prompts.append(message)
        if not self._lines:
            raise ScriptExhausted(f"No scripted answer for prompt: {message!r}")
        return self._lines.popleft()

    def read_key(self) -> Key:
        if not self._keys:
            raise ScriptExhausted("No scripted keystroke left")
        return self._keys.popleft()

    def clear(self) -> None:
        pass

    def pause(self) -> None:
        self.pauses += 1

    def progress(self, message: str) -> None:
        self.output.append(f"{message}...")

    @property
    def text(self) -> str:
        return "\n".join(self.output)

    @property
    def remaining_lines(self) -> int:
        return len(self._lines)

    @property
    def remaining_keys(self) -> int:
        return len(self._keys)


def select(
    console: Console,
    title: str,
    options: Sequence[str],
    *,
    header: str | None = None,
) -> int:
    """Arrow-key menu; returns the index of the chosen option.

    Up/down wrap around, enter selects, other keys are ignored.
    """

    if not options:
        raise ValueError("select() needs at least one option")

    selected = 0
    while True:
        console.clear()
        if header:
            console.write(header)
        console.write(f"=== {title} ===")
        console.write()
        for i, option in enumerate(options):
            if i != selected:
                console.write(f"     {option}")
            elif console.ansi:
                console.write(f"{_ANSI_REVERSE}  -> {option} {_ANSI_RESET}")
            else:
                console.write(f"  -> {option}")

        key = console.read_key()
        if key is Key.UP:
            selected = (selected - 1) % len(options)
        elif key is Key.DOWN:
            selected = (selected + 1) % len(options)
        elif key is Key.ENTER:
            return selected


def confirm(console: Console, message: str) -> bool:
    """Ask a yes/no question; only an answer starting with y/Y counts as yes."""

    return console.prompt(message).strip().lower().startswith("y")
