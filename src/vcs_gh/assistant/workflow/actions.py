"""Menu actions: push, fetch, commit and delete flows.

Each flow runs to completion and returns control to the menu. A git/gh step
that fails stops its flow, names the failing command and yields a failed
`ActionResult`; steps that routinely fail harmlessly are tolerated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from vcs_gh.assistant.console import confirm
from vcs_gh.assistant.git.runner import CommandResult

from .semantic import COMMIT_TYPES, SCOPES, format_title

if TYPE_CHECKING:
    from .context import AssistantContext

logger = logging.getLogger(__name__)

_BACK_TO_MENU = "Next: Returning to main menu"


@dataclass(frozen=True, slots=True)
class ActionResult:
    ok: bool
    message: str
    details: dict[str, object] | None = None


class Action(Protocol):
    """A fire-and-return procedure started from the main menu."""

    @property
    def name(self) -> str: ...

    def execute(self, context: AssistantContext) -> ActionResult: ...


def _finish(context: AssistantContext) -> None:
    context.console.progress(_BACK_TO_MENU)
    context.console.pause()


def _step_failed(context: AssistantContext, step: str, result: CommandResult) -> ActionResult:
    context.console.write(f"Error: '{result.command_line}' failed (exit {result.returncode}).")
    logger.warning(
        "Action step failed",
        extra={"step": step, "command": result.command_line, "returncode": result.returncode},
    )
    _finish(context)
    return ActionResult(
        ok=False,
        message=f"{step} failed",
        details={"command": result.command_line, "returncode": result.returncode},
    )


def _cancelled(context: AssistantContext, reason: str) -> ActionResult:
    context.console.write(reason)
    _finish(context)
    return ActionResult(ok=True, message="Cancelled")


@dataclass(frozen=True, slots=True)
class PushFlow:
    """Branch -> stage -> semantic commit -> push -> pull request."""

    remote: str
    pr_body: str
    name: str = "push"

    def execute(self, context: AssistantContext) -> ActionResult:
        console = context.console
        git = context.git

        console.clear()
        console.write("--- PUSH FLOW ---")
        console.write(
            "Enter new branch name (e.g., feature/login) or press Enter to go back to menu:"
        )
        branch = console.prompt().strip()
        if not branch:
            return _cancelled(context, "Branch name is empty. Going back to menu.")

        result = git.create_branch(branch)
        if not result.ok:
            return _step_failed(context, "create branch", result)
        result = git.add_all()
        if not result.ok:
            return _step_failed(context, "stage changes", result)

        commit_type = COMMIT_TYPES[context.menu("Select Type", [t.label for t in COMMIT_TYPES])]
        scope = SCOPES[context.menu("Select Scope", SCOPES)]

        console.clear()
        console.write(f"Type: {commit_type.name}")
        console.write(f"Scope: {scope}")
        console.write("Enter Title (e.g., add login button):")
        title = console.prompt().strip()
        if not title:
            return _cancelled(context, "Title is empty. Nothing was committed.")

        full_title = format_title(commit_type.name, scope, title)

        result = git.commit(full_title)
        if not result.ok:
            return _step_failed(context, "commit", result)

        console.write("")
        console.write("Pushing to remote...")
        result = git.push_upstream(self.remote, branch)
        if not result.ok:
            return _step_failed(context, "push", result)

        console.write("")
        console.write("Creating Pull Request...")
        result = context.gh.create_pull_request(title=full_title, body=self.pr_body)
        if not result.ok:
            return _step_failed(context, "create pull request", result)

        console.write("")
        console.write("Done! Push and PR creation completed.")
        _finish(context)
        return ActionResult(
            ok=True,
            message="Pull request created",
            details={"branch": branch, "title": full_title},
        )


@dataclass(frozen=True, slots=True)
class FetchFlow:
    """Snapshot onto the cache branch, drop other local branches, re-checkout."""

    remote: str
    cache_branch: str
    name: str = "fetch"

    def execute(self, context: AssistantContext) -> ActionResult:
        console = context.console
        git = context.git
        cache = self.cache_branch

        console.clear()
        console.write("--- FETCH FLOW ---")
        console.write("Warning: This will hard reset local branches to match remote.")
        console.progress(f"Force-create '{cache}' at current state and save everything")

        result = git.force_branch(cache)
        if not result.ok:
            return _step_failed(context, "create cache branch", result)
        result = git.add_all()
        if not result.ok:
            return _step_failed(context, "stage changes", result)
        # A clean tree leaves nothing to commit.
        git.commit(cache)

        console.write(f"Warning: This will delete all local branches except {cache}.")
        console.pause()

        result = git.fetch_prune()
        if not result.ok:
            return _step_failed(context, "fetch", result)
        deleted = git.prune_local_branches(keep=cache)
        console.progress("Fetch complete")

        console.write("")
        console.write("Remote branches:")
        for branch in git.remote_branches():
            console.write(f"  {branch}")
        console.write("")
        console.write("Local branches:")
        for branch in git.local_branches():
            console.write(f"  {branch}")

        console.write("")
        console.write(
            f"Enter branch name without '{self.remote}/' to checkout "
            f"(or press Enter to set on {self.remote}/HEAD locally):"
        )
        target = console.prompt().strip()
        if target:
            result = git.checkout(target)
            if not result.ok:
                return _step_failed(context, "checkout", result)
            console.write(f"Switched to branch: {target}")
        else:
            default = git.default_remote_branch(self.remote)
            if default is None:
                console.write(f"Error: {self.remote}/HEAD is not set; staying on '{cache}'.")
                _finish(context)
                return ActionResult(ok=False, message="Remote default branch unknown")
            result = git.checkout(default)
            if not result.ok:
                return _step_failed(context, "checkout", result)
            target = default
            console.write("Setting on HEAD.")

        _finish(context)
        return ActionResult(
            ok=True,
            message="Fetched",
            details={"branch": target, "deleted_branches": deleted},
        )


@dataclass(frozen=True, slots=True)
class CommitFlow:
    """Stage everything, commit with a free-text message and push HEAD."""

    remote: str
    name: str = "commit"

    def execute(self, context: AssistantContext) -> ActionResult:
        console = context.console
        git = context.git

        console.clear()
        console.write("--- QUICK COMMIT ---")
        console.write("Staging all changes...")
        result = git.add_all()
        if not result.ok:
            return _step_failed(context, "stage changes", result)

        console.write("Enter commit message:")
        message = console.prompt().strip()
        if not message:
            return _cancelled(context, "Aborted (empty message).")

        result = git.commit(message)
        if not result.ok:
            return _step_failed(context, "commit", result)
        console.write("Committed..!")

        console.progress("Also, pushing to remote")
        result = git.push_head(self.remote)
        if not result.ok:
            return _step_failed(context, "push", result)
        console.write("Pushed to remote successfully.")

        _finish(context)
        return ActionResult(ok=True, message="Committed and pushed", details={"message": message})


@dataclass(frozen=True, slots=True)
class DeleteFlow:
    """Delete a branch on the remote after confirmation."""

    remote: str
    cache_branch: str
    name: str = "delete"

    def execute(self, context: AssistantContext) -> ActionResult:
        console = context.console
        git = context.git

        console.clear()
        console.write("--- DELETE BRANCH ---")
        result = git.fetch_prune()
        if not result.ok:
            return _step_failed(context, "fetch", result)
        git.prune_local_branches(keep=self.cache_branch)
        for branch in git.remote_branches():
            console.write(f"  {branch}")

        console.write("")
        console.write(f"Enter a remote branch (without '{self.remote}/') name to delete:")
        branch = console.prompt().strip()
        if not branch:
            return _cancelled(context, "No branch given.")

        if not confirm(console, f"Are you sure you want to delete '{branch}'? (y/n)"):
            return _cancelled(context, "Cancelled.")

        result = git.delete_remote_branch(self.remote, branch)
        if not result.ok:
            return _step_failed(context, "delete remote branch", result)
        console.write("Deleted.")

        _finish(context)
        return ActionResult(ok=True, message="Deleted", details={"branch": branch})


def menu_actions(context: AssistantContext) -> list[tuple[str, Action | None]]:
    """Main-menu entries in display order; `None` marks the exit entry."""

    settings = context.settings
    remote = settings.remote
    cache = settings.cache_branch
    entries: list[tuple[str, Action | None]] = [
        ("Push   (Branch -> Commit -> PR)", PushFlow(remote=remote, pr_body=settings.pr_body)),
        ("Fetch  (Reset Main -> Checkout)", FetchFlow(remote=remote, cache_branch=cache)),
        ("Exit", None),
    ]
    if settings.admin_actions:
        entries.append(("Commit (Current Branch) - admin only", CommitFlow(remote=remote)))
        entries.append(
            ("Delete (Remove Branch) - admin only", DeleteFlow(remote=remote, cache_branch=cache))
        )
    return entries
