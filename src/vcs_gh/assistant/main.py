"""CLI entrypoint for the vcs-gh assistant.

`run` (the default) starts the interactive workflow, `report` prints the
environment report, and `env` loads the dotenv file and prints one delimited
variable for scripting.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from vcs_gh import __version__
from vcs_gh.assistant.config import AssistantSettings
from vcs_gh.assistant.console import TerminalConsole
from vcs_gh.assistant.env.accessor import get_delimited
from vcs_gh.assistant.env.loader import DotenvLoader
from vcs_gh.assistant.env.store import OsEnvStore
from vcs_gh.assistant.logging import configure_logging
from vcs_gh.assistant.report import print_environment_report
from vcs_gh.assistant.workflow.context import AssistantContext
from vcs_gh.assistant.workflow.states import run_assistant

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vcs-gh",
        description="Finite-state assistant for git/GitHub workflows",
    )
    parser.add_argument("--version", action="version", version=f"vcs-gh {__version__}")
    parser.add_argument(
        "--env-file",
        default=None,
        help="Dotenv file with USERNAMES/EMAILS/URLS/REPO_NAMES (default: .env)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level, e.g. DEBUG or INFO (default: LOG_LEVEL or WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command")

    run = subparsers.add_parser("run", help="Start the interactive workflow (default)")
    run.add_argument(
        "--no-report",
        action="store_true",
        help="Skip the environment report shown before the workflow starts",
    )

    subparsers.add_parser("report", help="Print the environment report and exit")

    env = subparsers.add_parser(
        "env",
        help="Load the env file and print a variable as a delimited list, one item per line",
    )
    env.add_argument("key", help="Variable name, e.g. USERNAMES")
    env.add_argument(
        "--delimiter",
        default=None,
        help="Separator characters (default: VCS_GH_LIST_DELIMITER or ';')",
    )

    return parser


def _settings_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.env_file:
        overrides["env_file"] = Path(args.env_file)
    if args.log_level:
        overrides["log_level"] = args.log_level
    return overrides


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = AssistantSettings(**_settings_overrides(args))
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment and .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level, settings.log_file)
    command = args.command or "run"

    try:
        if command == "report":
            print_environment_report(TerminalConsole(progress_delay=settings.progress_delay))
            return 0

        if command == "env":
            store = OsEnvStore()
            DotenvLoader(store=store).load(settings.env_file)
            delimiter = args.delimiter if args.delimiter is not None else settings.list_delimiter
            values = get_delimited(args.key, delimiter, store)
            if values is None:
                print(f"{args.key} is not set", file=sys.stderr)
                return 1
            for value in values:
                print(value)
            return 0

        context = AssistantContext.create(settings)
        if not getattr(args, "no_report", False):
            print_environment_report(context.console)
            context.console.progress("Next: Starting Git Helper FSM")
            context.console.pause()

        history = run_assistant(context)
        logger.info("Assistant finished", extra={"states": [s.value for s in history]})
        return 0

    except KeyboardInterrupt:
        print(file=sys.stderr)
        logger.info("Interrupted by user")
        return 130

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
