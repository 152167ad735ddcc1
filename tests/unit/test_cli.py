"""Unit tests for the command-line entrypoint."""

from __future__ import annotations

import io
import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from vcs_gh import __version__
from vcs_gh.assistant.main import main


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.chdir(tmp_path)
    for name in ("LOG_LEVEL", "VCS_GH_ENV_FILE", "VCS_GH_LOG_FILE", "VCS_GH_LIST_DELIMITER"):
        monkeypatch.delenv(name, raising=False)

    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


def test_env_prints_one_item_per_line(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    # Registered with monkeypatch so the loader's write to os.environ is undone.
    monkeypatch.setenv("VCS_GH_TEST_NAMES", "placeholder")
    monkeypatch.delenv("VCS_GH_TEST_NAMES")
    (tmp_path / "team.env").write_text('VCS_GH_TEST_NAMES="Alice; Bob,Carol"\n', encoding="utf-8")

    code = main(["--env-file", "team.env", "env", "VCS_GH_TEST_NAMES", "--delimiter", ";,"])

    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["Alice", "Bob", "Carol"]


def test_env_reports_unset_variable(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["env", "VCS_GH_TEST_SURELY_UNSET"])

    assert code == 1
    assert "VCS_GH_TEST_SURELY_UNSET is not set" in capsys.readouterr().err


def test_report_command(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["report"]) == 0

    out = capsys.readouterr().out
    assert "=== ENVIRONMENT REPORT ===" in out
    assert f"3. Execution Path (CWD): {tmp_path}" in out


def test_invalid_settings_exit_with_code_2(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--log-level", "LOUD", "report"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])

    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_run_without_git_ends_through_exit_banner(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("PATH", str(tmp_path / "empty-bin"))
    monkeypatch.setenv("VCS_GH_PROGRESS_DELAY", "0")
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))

    assert main(["run", "--no-report"]) == 0

    out = capsys.readouterr().out
    assert "Error: 'git' is not installed or not in PATH." in out
    assert "THANKS FOR USING vcs-gh" in out
