"""Agent run — task instructions, step history, and lifecycle observers."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from agentstep.llm.message import ChatMessage
from agentstep.step.step import Failed, Step, Succeeded


@runtime_checkable
class AgentRunObserver(Protocol):
    """Lifecycle hooks around each step generation.

    Hooks are called synchronously on the generating task and must not
    block.
    """

    def on_step_generation_started(
        self, *, run: AgentRun, messages: Sequence[ChatMessage]
    ) -> None: ...

    def on_step_generation_finished(
        self, *, run: AgentRun, generated_text: str, step: Step
    ) -> None: ...


@dataclass
class AgentRun:
    """The mutable context of one task execution.

    The step history is append-only: steps are recorded in creation order
    and never removed or reordered.
    """

    instructions: str
    observer: AgentRunObserver | None = None
    _steps: list[Step] = field(default_factory=list, init=False, repr=False)

    @property
    def completed_steps(self) -> tuple[Step, ...]:
        """Snapshot of the step history in creation order."""
        return tuple(self._steps)

    def record_step(self, step: Step) -> None:
        """Append a step produced by the loop."""
        self._steps.append(step)

    def __len__(self) -> int:
        return len(self._steps)


class CompositeObserver:
    """Fans each hook out to several observers in registration order."""

    def __init__(self, *observers: AgentRunObserver) -> None:
        self._observers: list[AgentRunObserver] = list(observers)

    def add(self, observer: AgentRunObserver) -> None:
        self._observers.append(observer)

    def on_step_generation_started(
        self, *, run: AgentRun, messages: Sequence[ChatMessage]
    ) -> None:
        for observer in self._observers:
            observer.on_step_generation_started(run=run, messages=messages)

    def on_step_generation_finished(
        self, *, run: AgentRun, generated_text: str, step: Step
    ) -> None:
        for observer in self._observers:
            observer.on_step_generation_finished(
                run=run, generated_text=generated_text, step=step
            )

    def __len__(self) -> int:
        return len(self._observers)


class LoggingObserver:
    """Reports step generation through the standard logging module."""

    def __init__(self, logger_name: str = __name__) -> None:
        self._logger = logging.getLogger(logger_name)

    def on_step_generation_started(
        self, *, run: AgentRun, messages: Sequence[ChatMessage]
    ) -> None:
        self._logger.info(
            "Generating step %d (%d messages in transcript)",
            len(run) + 1,
            len(messages),
        )

    def on_step_generation_finished(
        self, *, run: AgentRun, generated_text: str, step: Step
    ) -> None:
        state = step.state
        if isinstance(state, Succeeded):
            self._logger.info("Step %s succeeded: %s", step.type, state.summary)
        elif isinstance(state, Failed):
            self._logger.warning("Step %s failed: %s", step.type, state.summary)
        else:
            raise TypeError(f"Unknown step state: {state!r}")
