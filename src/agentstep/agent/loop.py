"""The run loop — generate, record, repeat."""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

from agentstep.agent.wire import EventType, WireEvent
from agentstep.errors import ResultValidationError

if TYPE_CHECKING:
    from agentstep.agent.run import AgentRun
    from agentstep.agent.wire import Wire
    from agentstep.step.generator import NextStepGenerator

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 50


class RunOutcome(enum.Enum):
    """Why did the run end?"""

    DONE = "done"  # The agent chose the done action
    MAX_STEPS = "max_steps"  # Hit the step limit
    ERROR = "error"  # Unrecoverable error (backend failure, unparseable output)


async def run_agent(
    run: AgentRun,
    generator: NextStepGenerator,
    max_steps: int = DEFAULT_MAX_STEPS,
    wire: Wire | None = None,
) -> RunOutcome:
    """Drive a run until the agent is done or the step limit is reached.

    Iterations are strictly sequential: each transcript depends on every
    step recorded before it. Action failures are ordinary error steps and
    do not end the run.

    Args:
        run: The run whose step history is extended.
        generator: Produces each next step.
        max_steps: Upper bound on generated steps for this call.
        wire: Optional event bus for RUN_BEGIN / RUN_END / ERROR events.

    Raises:
        ResultValidationError: a step's output broke its formatter's
            contract. This is a programming error and is never absorbed.
    """
    if wire is not None:
        wire.send(
            WireEvent(
                type=EventType.RUN_BEGIN,
                data={"instructions": run.instructions, "max_steps": max_steps},
            )
        )

    outcome = await _run_steps(run, generator, max_steps, wire)

    if wire is not None:
        wire.send(
            WireEvent(
                type=EventType.RUN_END,
                data={"outcome": outcome.value, "steps": len(run)},
            )
        )
    return outcome


async def _run_steps(
    run: AgentRun,
    generator: NextStepGenerator,
    max_steps: int,
    wire: Wire | None,
) -> RunOutcome:
    step_no = 0
    while step_no < max_steps:
        step_no += 1
        logger.info("Run step %d/%d", step_no, max_steps)

        try:
            step = await generator.generate_next_step(run.completed_steps, run)
        except ResultValidationError:
            raise
        except Exception as e:
            logger.error(
                "Unrecoverable error at step %d: %s", step_no, e, exc_info=True
            )
            if wire is not None:
                wire.send_error(str(e))
            return RunOutcome.ERROR

        run.record_step(step)

        if step.is_done:
            logger.info("Run completed after %d steps", step_no)
            return RunOutcome.DONE

    logger.warning("Run hit max steps (%d)", max_steps)
    return RunOutcome.MAX_STEPS
