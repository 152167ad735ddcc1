"""Thin wrappers around the `git` and `gh` command-line tools.

These keep command construction out of the workflow states and make the
states testable with a fake `CommandRunner`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .runner import CommandResult, CommandRunner

logger = logging.getLogger(__name__)


class GitClient:
    def __init__(self, runner: CommandRunner) -> None:
        self._runner = runner

    def _git(self, *args: str, capture: bool = False) -> CommandResult:
        return self._runner.run(["git", *args], capture=capture)

    def is_available(self) -> bool:
        return self._git("--version", capture=True).ok

    # --- global config -------------------------------------------------

    def config_get(self, key: str) -> str | None:
        """Return a global config value, or None when it is unset."""

        result = self._git("config", "--global", "--get", key, capture=True)
        if not result.ok:
            return None
        value = result.stdout.splitlines()[0].strip() if result.stdout else ""
        return value or None

    def config_set(self, key: str, value: str) -> CommandResult:
        return self._git("config", "--global", key, value)

    def config_unset(self, key: str) -> CommandResult:
        return self._git("config", "--global", "--unset", key)

    def config_list(self) -> str:
        return self._git("config", "--global", "--list", capture=True).stdout

    def credential_cache_exit(self) -> CommandResult:
        return self._git("credential-cache", "exit", capture=True)

    def reset_credentials(self, username: str, email: str, *, home: Path | None = None) -> bool:
        """Replace the global identity and drop stored credentials.

        Unsetting a missing key and stopping a credential cache that is not
        running both fail harmlessly and are ignored.
        """

        self.config_unset("user.name")
        self.config_unset("user.email")

        credentials = (home or Path.home()) / ".git-credentials"
        credentials.unlink(missing_ok=True)
        self.credential_cache_exit()

        ok = self.config_set("user.name", username).ok
        ok = self.config_set("user.email", email).ok and ok
        logger.info("Git credentials set", extra={"username": username, "ok": ok})
        return ok

    # --- branches --------------------------------------------------------

    def current_branch(self) -> str:
        return self._git("branch", "--show-current", capture=True).stdout.strip()

    def local_branches(self) -> list[str]:
        result = self._git("branch", "--format=%(refname:short)", capture=True)
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def remote_branches(self) -> list[str]:
        result = self._git("branch", "-r", capture=True)
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def create_branch(self, branch: str) -> CommandResult:
        return self._git("checkout", "-b", branch)

    def force_branch(self, branch: str) -> CommandResult:
        return self._git("checkout", "-B", branch)

    def checkout(self, branch: str) -> CommandResult:
        return self._git("checkout", branch)

    def delete_local_branch(self, branch: str) -> CommandResult:
        return self._git("branch", "-D", branch)

    def prune_local_branches(self, keep: str) -> list[str]:
        """Delete every local branch except `keep`; returns the deleted names."""

        deleted = []
        for branch in self.local_branches():
            if branch == keep:
                continue
            if self.delete_local_branch(branch).ok:
                deleted.append(branch)
        return deleted

    def default_remote_branch(self, remote: str) -> str | None:
        result = self._git("symbolic-ref", f"refs/remotes/{remote}/HEAD", capture=True)
        prefix = f"refs/remotes/{remote}/"
        ref = result.stdout.strip()
        if not result.ok or not ref.startswith(prefix):
            return None
        return ref.removeprefix(prefix) or None

    # --- working tree and remotes ---------------------------------------

    def add_all(self) -> CommandResult:
        return self._git("add", ".")

    def commit(self, message: str) -> CommandResult:
        return self._git("commit", "-m", message)

    def push_upstream(self, remote: str, branch: str) -> CommandResult:
        return self._git("push", "--set-upstream", remote, branch)

    def push_head(self, remote: str) -> CommandResult:
        return self._git("push", remote, "HEAD")

    def delete_remote_branch(self, remote: str, branch: str) -> CommandResult:
        return self._git("push", remote, "--delete", branch)

    def fetch_prune(self) -> CommandResult:
        return self._git("fetch", "--all", "--prune")

    def clone(self, url: str, destination: str) -> CommandResult:
        return self._git("clone", url, destination)


class GitHubCli:
    def __init__(self, runner: CommandRunner) -> None:
        self._runner = runner

    def is_available(self) -> bool:
        return self._runner.run(["gh", "--version"], capture=True).ok

    def create_pull_request(self, *, title: str, body: str) -> CommandResult:
        return self._runner.run(["gh", "pr", "create", "--title", title, "--body", body])
