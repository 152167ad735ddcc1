"""Unit tests for the workflow state machine.

These tests assert that illegal transitions fail loudly and that the machine
runs handlers until it terminates.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from vcs_gh.assistant.console import ScriptedConsole
from vcs_gh.assistant.workflow.state_machine import (
    AssistantMachine,
    AssistantState,
    IllegalTransitionError,
    transition,
)


def test_transition_rejects_illegal_transitions() -> None:
    with pytest.raises(IllegalTransitionError):
        transition(current=AssistantState.INIT, to=AssistantState.MENU)
    with pytest.raises(IllegalTransitionError):
        transition(current=AssistantState.TERMINATED, to=AssistantState.START)


def test_transition_allows_menu_loop() -> None:
    assert transition(current=AssistantState.MENU, to=AssistantState.MENU) is AssistantState.MENU


def test_machine_requires_every_handler() -> None:
    with pytest.raises(ValueError, match="Missing state handlers"):
        AssistantMachine({AssistantState.START: lambda ctx: AssistantState.EXIT})


def test_machine_runs_until_terminated() -> None:
    menu_visits = iter([AssistantState.MENU, AssistantState.MENU, AssistantState.EXIT])
    handlers = {
        AssistantState.START: lambda ctx: AssistantState.CHECK_REPO,
        AssistantState.CHECK_REPO: lambda ctx: AssistantState.MENU,
        AssistantState.INIT: lambda ctx: AssistantState.EXIT,
        AssistantState.MENU: lambda ctx: next(menu_visits),
        AssistantState.EXIT: lambda ctx: AssistantState.TERMINATED,
    }

    history = AssistantMachine(handlers).run(object())  # type: ignore[arg-type]

    assert history == [
        AssistantState.START,
        AssistantState.CHECK_REPO,
        AssistantState.MENU,
        AssistantState.MENU,
        AssistantState.MENU,
        AssistantState.EXIT,
        AssistantState.TERMINATED,
    ]


def test_machine_raises_on_handler_returning_illegal_state() -> None:
    handlers = {
        AssistantState.START: lambda ctx: AssistantState.INIT,
        AssistantState.CHECK_REPO: lambda ctx: AssistantState.MENU,
        AssistantState.INIT: lambda ctx: AssistantState.EXIT,
        AssistantState.MENU: lambda ctx: AssistantState.EXIT,
        AssistantState.EXIT: lambda ctx: AssistantState.TERMINATED,
    }

    with pytest.raises(IllegalTransitionError):
        AssistantMachine(handlers).run(object())  # type: ignore[arg-type]


def _raise(error: BaseException):
    def handler(ctx):
        raise error

    return handler


def _handlers(**overrides):
    handlers = {
        AssistantState.START: lambda ctx: AssistantState.CHECK_REPO,
        AssistantState.CHECK_REPO: lambda ctx: AssistantState.MENU,
        AssistantState.INIT: lambda ctx: AssistantState.EXIT,
        AssistantState.MENU: lambda ctx: AssistantState.EXIT,
        AssistantState.EXIT: lambda ctx: AssistantState.TERMINATED,
    }
    handlers.update({AssistantState(name): h for name, h in overrides.items()})
    return handlers


def test_closed_input_ends_run_through_exit() -> None:
    console = ScriptedConsole()
    handlers = _handlers(check_repo=_raise(EOFError("standard input closed")))
    context = SimpleNamespace(console=console)

    history = AssistantMachine(handlers).run(context)  # type: ignore[arg-type]

    assert history == [
        AssistantState.START,
        AssistantState.CHECK_REPO,
        AssistantState.EXIT,
        AssistantState.TERMINATED,
    ]
    assert console.errors == []


def test_io_error_is_reported_and_ends_run_through_exit() -> None:
    console = ScriptedConsole()
    handlers = _handlers(start=_raise(PermissionError("cannot read .env")))
    context = SimpleNamespace(console=console)

    history = AssistantMachine(handlers).run(context)  # type: ignore[arg-type]

    assert history == [AssistantState.START, AssistantState.EXIT, AssistantState.TERMINATED]
    assert console.errors == ["Error: cannot read .env"]


def test_failure_in_exit_state_propagates() -> None:
    handlers = _handlers(exit=_raise(OSError("stdout closed")))

    context = SimpleNamespace(console=ScriptedConsole())

    with pytest.raises(OSError, match="stdout closed"):
        AssistantMachine(handlers).run(context)  # type: ignore[arg-type]
