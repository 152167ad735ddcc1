"""Startup environment report: where the program lives and where it runs."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

from vcs_gh.assistant.console import Console


def program_location(argv0: str | None = None) -> str:
    """Absolute path of the entry script, falling back to the raw argv[0]."""

    argv0 = argv0 if argv0 is not None else (sys.argv[0] if sys.argv else "")
    if not argv0:
        return "(unknown)"
    try:
        return str(Path(argv0).resolve(strict=True))
    except OSError:
        return argv0


def build_report(
    argv: Sequence[str] | None = None, *, cwd: Path | None = None
) -> list[str]:
    args = list(sys.argv if argv is None else argv)
    lines = ["=== ENVIRONMENT REPORT ===", ""]
    lines.append(f"1. Program Location: {program_location(args[0] if args else '')}")
    if len(args) > 1:
        lines.append("2. Command Line Arguments:")
        lines.extend(f"   argv[{i}] = {arg}" for i, arg in enumerate(args[1:], start=1))
    try:
        where = str(cwd or Path.cwd())
    except OSError:
        where = "(error getting directory)"
    lines.append(f"3. Execution Path (CWD): {where}")
    lines.extend(["", "=== END OF REPORT ==="])
    return lines


def print_environment_report(
    console: Console, argv: Sequence[str] | None = None, *, cwd: Path | None = None
) -> None:
    console.write("")
    for line in build_report(argv, cwd=cwd):
        console.write(line)
