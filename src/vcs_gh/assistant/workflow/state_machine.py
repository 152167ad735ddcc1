from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import AssistantContext

logger = logging.getLogger(__name__)


class AssistantState(str, Enum):
    START = "start"
    CHECK_REPO = "check_repo"
    INIT = "init"
    MENU = "menu"
    EXIT = "exit"
    TERMINATED = "terminated"


ALLOWED_TRANSITIONS: dict[AssistantState, set[AssistantState]] = {
    AssistantState.START: {AssistantState.CHECK_REPO, AssistantState.EXIT},
    AssistantState.CHECK_REPO: {AssistantState.INIT, AssistantState.MENU},
    AssistantState.INIT: {AssistantState.EXIT},
    AssistantState.MENU: {AssistantState.MENU, AssistantState.EXIT},
    AssistantState.EXIT: {AssistantState.TERMINATED},
    AssistantState.TERMINATED: set(),
}

StateHandler = Callable[["AssistantContext"], AssistantState]


class IllegalTransitionError(ValueError):
    pass


def transition(*, current: AssistantState, to: AssistantState) -> AssistantState:
    allowed = ALLOWED_TRANSITIONS.get(current, set())
    if to not in allowed:
        raise IllegalTransitionError(f"Illegal transition: {current.value} -> {to.value}")
    return to


class AssistantMachine:
    """Drive the state handlers from `initial` until `TERMINATED`.

    Each handler is a plain function of the context returning the next state.
    Data only flows between states through the environment store and the
    filesystem.
    """

    def __init__(
        self,
        handlers: Mapping[AssistantState, StateHandler],
        *,
        initial: AssistantState = AssistantState.START,
    ) -> None:
        missing = {s for s in AssistantState if s is not AssistantState.TERMINATED} - set(handlers)
        if missing:
            names = ", ".join(sorted(s.value for s in missing))
            raise ValueError(f"Missing state handlers: {names}")
        self._handlers = dict(handlers)
        self._initial = initial

    def run(self, context: AssistantContext) -> list[AssistantState]:
        """Run to termination; returns the visited states, terminal one included.

        A handler that fails with `EOFError` (input closed) or `OSError` ends the
        run through the exit state.
        """

        state = self._initial
        history = [state]
        while state is not AssistantState.TERMINATED:
            try:
                next_state = transition(current=state, to=self._handlers[state](context))
            except (EOFError, OSError) as e:
                if state is AssistantState.EXIT:
                    raise
                self._abort(context, state, e)
                next_state = AssistantState.EXIT
            state = next_state
            history.append(state)
            logger.info(
                "State transition",
                extra={"from_state": history[-2].value, "to_state": state.value},
            )
        return history

    @staticmethod
    def _abort(context: AssistantContext, state: AssistantState, error: Exception) -> None:
        if isinstance(error, EOFError):
            logger.info("Input closed", extra={"state": state.value})
            return
        logger.exception("State failed", extra={"state": state.value})
        context.console.error(f"Error: {error}")
