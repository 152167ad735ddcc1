from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from vcs_gh.assistant.config import AssistantSettings
from vcs_gh.assistant.console import Console, TerminalConsole, select
from vcs_gh.assistant.env.accessor import get_delimited
from vcs_gh.assistant.env.loader import DotenvLoader
from vcs_gh.assistant.env.store import EnvStore, OsEnvStore
from vcs_gh.assistant.git.client import GitClient, GitHubCli
from vcs_gh.assistant.git.runner import CommandRunner, SubprocessRunner


@dataclass(slots=True)
class AssistantContext:
    """Everything a workflow state may touch.

    States receive this instead of reaching for globals, so tests can swap in a
    scripted console, an in-memory store and a fake command runner.
    """

    settings: AssistantSettings
    console: Console
    store: EnvStore
    git: GitClient
    gh: GitHubCli
    workdir: Path
    home: Path | None = None

    @classmethod
    def create(
        cls,
        settings: AssistantSettings,
        *,
        console: Console | None = None,
        store: EnvStore | None = None,
        runner: CommandRunner | None = None,
        workdir: Path | None = None,
        home: Path | None = None,
    ) -> AssistantContext:
        workdir = workdir or Path.cwd()
        runner = runner or SubprocessRunner(cwd=workdir)
        return cls(
            settings=settings,
            console=console or TerminalConsole(progress_delay=settings.progress_delay),
            store=store if store is not None else OsEnvStore(),
            git=GitClient(runner),
            gh=GitHubCli(runner),
            workdir=workdir,
            home=home,
        )

    @property
    def env_file(self) -> Path:
        path = self.settings.env_file
        return path if path.is_absolute() else self.workdir / path

    def loader(self) -> DotenvLoader:
        return DotenvLoader(store=self.store, console=self.console)

    def get_list(self, key: str) -> list[str] | None:
        return get_delimited(key, self.settings.list_delimiter, self.store)

    def menu(self, title: str, options: Sequence[str]) -> int:
        header = f"Current branch: {self.git.current_branch() or '(none)'}\n"
        return select(self.console, title, options, header=header)
