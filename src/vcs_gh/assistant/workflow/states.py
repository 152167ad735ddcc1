"""The five workflow states.

start -> check_repo -> init -> exit is the onboarding pipeline; check_repo may
skip straight to the menu when the working directory is already a repository.
Any failed onboarding step goes to exit; the user fixes the problem and
restarts.
"""

from __future__ import annotations

import logging

from vcs_gh import __version__
from vcs_gh.assistant.console import confirm
from vcs_gh.assistant.env.loader import LoadError

from .actions import menu_actions
from .context import AssistantContext
from .state_machine import AssistantMachine, AssistantState, StateHandler

logger = logging.getLogger(__name__)

_BANNER_WIDTH = 59


def _boxed(lines: list[str]) -> list[str]:
    border = "+" + "=" * _BANNER_WIDTH + "+"
    body = [f"|{line.center(_BANNER_WIDTH)}|" for line in ["", *lines, ""]]
    return [border, *body, border]


def _select_credentials(context: AssistantContext, pairs: list[tuple[str, str]]) -> bool:
    choice = context.menu("Select Git Credentials", [f"{u} <{e}>" for u, e in pairs])
    username, email = pairs[choice]

    context.console.write("")
    context.console.write("Setting git credentials...")
    ok = context.git.reset_credentials(username, email, home=context.home)
    context.console.write(context.git.config_list().rstrip())
    return ok


def _request_credentials(context: AssistantContext) -> AssistantState:
    console = context.console
    delimiter = context.settings.list_delimiter
    env_file = context.env_file

    console.clear()
    console.write(f"No USERNAMES and EMAILS found in {env_file.name} file.")
    console.write(f"Please provide git user information to create {env_file.name} config.")
    console.write("")

    console.write(f"Enter usernames ('{delimiter}'-separated, e.g., User1{delimiter}User2):")
    usernames = console.prompt().strip()
    if not usernames:
        console.write("No usernames provided. Exiting.")
        console.pause()
        return AssistantState.EXIT

    console.write(
        f"Enter emails ('{delimiter}'-separated, e.g., user1@email.com{delimiter}user2@email.com):"
    )
    emails = console.prompt().strip()
    if not emails:
        console.write("No emails provided. Exiting.")
        console.pause()
        return AssistantState.EXIT

    try:
        with env_file.open("a", encoding="utf-8") as fh:
            fh.write(f'USERNAMES="{usernames}"\n')
            fh.write(f'EMAILS="{emails}"\n')
    except OSError as e:
        logger.error("Could not write env file", extra={"path": str(env_file), "error": str(e)})
        console.error(f"Error: Could not write to {env_file}.")
        console.pause()
        return AssistantState.EXIT

    console.write("")
    console.write(f"{env_file.name} file updated with USERNAMES and EMAILS.")
    console.write("The program will now exit. Restart to continue with git credential setup.")
    console.pause()
    return AssistantState.EXIT


def state_start(context: AssistantContext) -> AssistantState:
    """Check tools, load configuration and settle the global git identity."""

    console = context.console
    console.clear()
    console.write("Checking dependencies...")

    if not context.git.is_available():
        console.write("Error: 'git' is not installed or not in PATH.")
        console.pause()
        return AssistantState.EXIT
    if not context.gh.is_available():
        console.write("Error: 'gh' (GitHub CLI) is not installed.")
        console.pause()
        return AssistantState.EXIT

    try:
        context.loader().load(context.env_file)
    except LoadError as e:
        logger.error("Env file could not be written", extra={"error": str(e)})
        console.error(f"Error: {e}")
        console.pause()
        return AssistantState.EXIT

    usernames = context.get_list("USERNAMES")
    emails = context.get_list("EMAILS")
    if not usernames or not emails:
        return _request_credentials(context)

    if len(usernames) != len(emails):
        console.clear()
        console.write(
            f"Error: Mismatch between USERNAMES ({len(usernames)}) "
            f"and EMAILS ({len(emails)}) count."
        )
        console.write(f"Please fix {context.env_file.name} file.")
        console.pause()
        return AssistantState.EXIT

    pairs = list(zip(usernames, emails))
    has_identity = (
        context.git.config_get("user.name") is not None
        and context.git.config_get("user.email") is not None
    )

    if not has_identity:
        console.clear()
        console.write("Git global user.name or user.email is not set.")
        console.write("Select credentials from .env:")
        console.write("")
        if not _select_credentials(context, pairs):
            console.write("Error: failed to set git credentials.")
            console.pause()
            return AssistantState.EXIT
        console.write("")
        console.write("Credentials set successfully!")
    else:
        console.clear()
        console.write("Current Git Global Configuration:")
        console.write("-----------------------------------")
        console.write(context.git.config_list().rstrip())
        console.write("-----------------------------------")
        console.write("")
        if confirm(console, "Do you want to change credentials? (y/n):"):
            console.clear()
            console.write("Select new credentials from .env:")
            console.write("")
            if not _select_credentials(context, pairs):
                console.write("Error: failed to set git credentials.")
                console.pause()
                return AssistantState.EXIT
            console.write("")
            console.write("Credentials updated successfully!")
        else:
            console.write("Keeping current credentials.")

    console.progress("Next: Checking if repository exists")
    console.pause()
    return AssistantState.CHECK_REPO


def state_check_repo(context: AssistantContext) -> AssistantState:
    if not (context.workdir / ".git").exists():
        return AssistantState.INIT

    console = context.console
    console.clear()
    console.write("Repository already initialized (.git exists).")
    if confirm(
        console,
        "Do you want to create a nested git repository (inside .git)? (y/n, Enter=no):",
    ):
        console.write("Proceeding to initialization...")
        console.progress("Next: Initializing nested repository")
        console.pause()
        return AssistantState.INIT

    console.write("Skipping initialization.")
    console.progress("Next: Going to main menu")
    console.pause()
    return AssistantState.MENU


def state_init(context: AssistantContext) -> AssistantState:
    """Clone every configured repository that is not present yet, then exit."""

    console = context.console
    urls = context.get_list("URLS")
    names = context.get_list("REPO_NAMES")

    if not urls or not names:
        console.clear()
        console.write(f"Error: URLS and REPO_NAMES not found in {context.env_file.name} file.")
        console.write(f"Please add to {context.env_file.name}:")
        console.write('URLS=""')
        console.write('REPO_NAMES=""')
        console.pause()
        return AssistantState.EXIT

    if len(urls) != len(names):
        console.clear()
        console.write(
            f"Error: Mismatch between URLS ({len(urls)}) and REPO_NAMES ({len(names)}) count."
        )
        console.write(
            f"Please fix {context.env_file.name} file so they have the same number of elements."
        )
        console.pause()
        return AssistantState.EXIT

    def exists(name: str) -> bool:
        return (context.workdir / name).exists()

    total = len(urls)
    console.clear()
    console.write(f"Current directory: {context.workdir.resolve()}")
    console.write("")

    if all(exists(name) for name in names):
        console.write("All repositories are already initialized.")
        console.write(f"Found {total} repositories:")
        for i, name in enumerate(names, start=1):
            console.write(f"  [{i}] {name}")
        console.progress("Next: Exiting")
        console.pause()
        return AssistantState.EXIT

    console.write(f"Found {total} repositories to clone:")
    for i, (url, name) in enumerate(zip(urls, names), start=1):
        suffix = " (already exists)" if exists(name) else ""
        console.write(f"  [{i}] {url} -> {name}{suffix}")
    console.write("")

    if not confirm(
        console, "Do you want to clone all repositories to the current directory? (y/n):"
    ):
        console.write("Cloning cancelled.")
        return AssistantState.EXIT

    console.clear()
    console.write("Cloning repositories...")
    console.write("")
    failed: list[str] = []
    for i, (url, name) in enumerate(zip(urls, names), start=1):
        if exists(name):
            console.write(f"[{i}/{total}] {name} already exists, skipping...")
            continue
        console.write(f"[{i}/{total}] Cloning {url} into {name}...")
        result = context.git.clone(url, name)
        if not result.ok:
            failed.append(name)
            console.write(f"Error: cloning {name} failed (exit {result.returncode}).")
            logger.warning(
                "Clone failed",
                extra={"url": url, "repo_name": name, "returncode": result.returncode},
            )
        console.write("")

    if failed:
        console.write(f"{len(failed)} of {total} repositories failed to clone: {', '.join(failed)}")
    else:
        console.write("All repositories cloned successfully!")
    console.progress("Next: Exiting")
    console.pause()
    return AssistantState.EXIT


def state_menu(context: AssistantContext) -> AssistantState:
    entries = menu_actions(context)
    choice = context.menu("vcs-gh Git Helper", [label for label, _ in entries])
    action = entries[choice][1]
    if action is None:
        return AssistantState.EXIT

    result = action.execute(context)
    logger.info(
        "Action finished",
        extra={"action": action.name, "ok": result.ok, "result": result.message},
    )
    return AssistantState.MENU


def state_exit(context: AssistantContext) -> AssistantState:
    console = context.console
    console.clear()
    console.write("")
    for line in _boxed(
        [
            "GITHUB VERSION CONTROL FSM",
            f"Version {__version__}",
            "",
            "Tool Name: vcs-gh",
            "",
            "A Finite State Machine CLI tool for",
            "automating and linting Git/GitHub workflows",
        ]
    ):
        console.write(line)
    console.write("")
    console.progress("Good bye")
    console.write("")
    for line in _boxed(["THANKS FOR USING vcs-gh"]):
        console.write(line)
    console.pause()
    return AssistantState.TERMINATED


STATE_HANDLERS: dict[AssistantState, StateHandler] = {
    AssistantState.START: state_start,
    AssistantState.CHECK_REPO: state_check_repo,
    AssistantState.INIT: state_init,
    AssistantState.MENU: state_menu,
    AssistantState.EXIT: state_exit,
}


def run_assistant(
    context: AssistantContext, *, initial: AssistantState = AssistantState.START
) -> list[AssistantState]:
    """Run the workflow until it terminates; returns the visited states."""

    return AssistantMachine(STATE_HANDLERS, initial=initial).run(context)
