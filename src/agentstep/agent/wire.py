"""Wire protocol — decouples step generation from its consumers.

Events flow from the run loop to subscribers (UIs, recorders, metrics).
``WireObserver`` plugs the wire into a run as an observer, so any number
of consumers can follow a run without touching the generator.
"""

from __future__ import annotations

import asyncio
import enum
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from agentstep.step.step import Failed, Succeeded

if TYPE_CHECKING:
    from agentstep.agent.run import AgentRun
    from agentstep.llm.message import ChatMessage
    from agentstep.step.step import Step


class EventType(enum.Enum):
    RUN_BEGIN = "run_begin"
    RUN_END = "run_end"
    STEP_GENERATION_STARTED = "step_generation_started"
    STEP_GENERATION_FINISHED = "step_generation_finished"
    ERROR = "error"


@dataclass
class WireEvent:
    """An event on the wire."""

    type: EventType
    data: dict[str, Any] = field(default_factory=dict)


class Wire:
    """Async message bus: run loop -> subscribers.

    Single-producer, multi-consumer broadcast.
    """

    def __init__(self) -> None:
        self._subscribers: list[asyncio.Queue[WireEvent | None]] = []
        self._closed: bool = False

    def send(self, event: WireEvent) -> None:
        """Send an event to all subscribers.

        Silently drops events after ``close()`` has been called.
        """
        if self._closed:
            return
        for q in self._subscribers:
            q.put_nowait(event)

    def send_error(self, error: str) -> None:
        self.send(WireEvent(type=EventType.ERROR, data={"error": error}))

    def subscribe(self) -> asyncio.Queue[WireEvent | None]:
        """Subscribe to events. Returns a queue to read from."""
        q: asyncio.Queue[WireEvent | None] = asyncio.Queue()
        self._subscribers.append(q)
        return q

    def unsubscribe(self, q: asyncio.Queue) -> None:
        """Unsubscribe from events."""
        if q in self._subscribers:
            self._subscribers.remove(q)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Signal all subscribers that the wire is closing."""
        self._closed = True
        for q in self._subscribers:
            q.put_nowait(None)


class WireObserver:
    """Run observer that publishes lifecycle hooks as wire events."""

    def __init__(self, wire: Wire) -> None:
        self.wire = wire

    def on_step_generation_started(
        self, *, run: AgentRun, messages: Sequence[ChatMessage]
    ) -> None:
        self.wire.send(
            WireEvent(
                type=EventType.STEP_GENERATION_STARTED,
                data={"step": len(run) + 1, "messages": len(messages)},
            )
        )

    def on_step_generation_finished(
        self, *, run: AgentRun, generated_text: str, step: Step
    ) -> None:
        self.wire.send(
            WireEvent(
                type=EventType.STEP_GENERATION_FINISHED,
                data={
                    "step": len(run) + 1,
                    "type": step.type,
                    "status": _status(step),
                    "summary": step.summary,
                    "generated_text": generated_text,
                },
            )
        )


def _status(step: Step) -> str:
    state = step.state
    if isinstance(state, Succeeded):
        return "succeeded"
    if isinstance(state, Failed):
        return "failed"
    raise TypeError(f"Unknown step state: {state!r}")
