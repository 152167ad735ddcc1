"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

import pytest

from vcs_gh.assistant.config import AssistantSettings
from vcs_gh.assistant.console import Key, ScriptedConsole
from vcs_gh.assistant.env.store import MemoryEnvStore
from vcs_gh.assistant.git.runner import CommandResult
from vcs_gh.assistant.workflow.context import AssistantContext


class FakeRunner:
    """Records commands and answers them from canned results.

    Responses match on the longest registered argv prefix; anything unmatched
    succeeds with empty output.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self._responses: dict[tuple[str, ...], CommandResult] = {}

    def respond(self, args: Sequence[str], *, returncode: int = 0, stdout: str = "") -> None:
        key = tuple(args)
        self._responses[key] = CommandResult(args=key, returncode=returncode, stdout=stdout)

    def run(self, args: Sequence[str], *, capture: bool = False) -> CommandResult:
        argv = tuple(args)
        self.calls.append(argv)
        for length in range(len(argv), 0, -1):
            canned = self._responses.get(argv[:length])
            if canned is not None:
                return CommandResult(
                    args=argv,
                    returncode=canned.returncode,
                    stdout=canned.stdout,
                    stderr=canned.stderr,
                )
        return CommandResult(args=argv, returncode=0)

    def called(self, *args: str) -> bool:
        return tuple(args) in self.calls


@pytest.fixture
def settings() -> AssistantSettings:
    """Settings isolated from any `.env` in the working directory."""
    return AssistantSettings(_env_file=None, progress_delay=0)


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def store() -> MemoryEnvStore:
    return MemoryEnvStore()


@pytest.fixture
def make_context(
    tmp_path: Path,
    settings: AssistantSettings,
    runner: FakeRunner,
    store: MemoryEnvStore,
) -> Callable[..., tuple[AssistantContext, ScriptedConsole]]:
    """Build a context around a scripted console in `tmp_path`."""

    def _make(
        lines: Iterable[str] = (),
        keys: Iterable[Key] = (),
        *,
        interactive: bool = False,
    ) -> tuple[AssistantContext, ScriptedConsole]:
        console = ScriptedConsole(lines, keys, interactive=interactive)
        context = AssistantContext.create(
            settings,
            console=console,
            store=store,
            runner=runner,
            workdir=tmp_path,
            home=tmp_path,
        )
        return context, console

    return _make


@pytest.fixture
def write_env(tmp_path: Path) -> Callable[..., Path]:
    def _write(*lines: str) -> Path:
        path = tmp_path / ".env"
        path.write_text("\n".join([*lines, ""]), encoding="utf-8")
        return path

    return _write
