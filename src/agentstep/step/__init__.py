"""Steps — immutable records of agent loop iterations."""

from agentstep.step.step import (
    DONE_STEP_TYPE,
    ERROR_STEP_TYPE,
    THOUGHT_STEP_TYPE,
    Failed,
    Step,
    StepState,
    Succeeded,
)

__all__ = [
    "DONE_STEP_TYPE",
    "ERROR_STEP_TYPE",
    "THOUGHT_STEP_TYPE",
    "Failed",
    "Step",
    "StepState",
    "Succeeded",
]
