"""Child-process execution for git/gh.

Commands are argv lists run without a shell. A missing binary is reported as
return code 127 rather than raised, so callers handle "not installed" and
"failed" the same way.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127


@dataclass(frozen=True, slots=True)
class CommandResult:
    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.args)


class CommandRunner(Protocol):
    def run(self, args: Sequence[str], *, capture: bool = False) -> CommandResult: ...


class SubprocessRunner:
    """Run commands in `cwd`.

    With `capture=False` the child inherits the terminal so the user sees git's
    own progress output; with `capture=True` stdout/stderr are returned.
    """

    def __init__(self, cwd: Path | None = None) -> None:
        self.cwd = cwd

    def run(self, args: Sequence[str], *, capture: bool = False) -> CommandResult:
        argv = tuple(args)
        logger.debug("Running command", extra={"argv": list(argv), "cwd": str(self.cwd or ".")})
        try:
            proc = subprocess.run(
                list(argv),
                cwd=self.cwd,
                capture_output=capture,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            logger.warning("Command not found", extra={"argv": list(argv)})
            return CommandResult(args=argv, returncode=COMMAND_NOT_FOUND, stderr=str(e))

        result = CommandResult(
            args=argv,
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )
        if not result.ok:
            logger.info(
                "Command exited non-zero",
                extra={"argv": list(argv), "returncode": result.returncode},
            )
        return result
