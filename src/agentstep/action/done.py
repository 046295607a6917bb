"""Done action — signal that the task is complete."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, Field

from agentstep.action.base import ActionOk, ActionResult, BaseAction
from agentstep.step.step import DONE_STEP_TYPE


class DoneInput(BaseModel):
    result: str = Field(
        description="The final result or answer for the task, including any facts you found."
    )


class DoneAction(BaseAction[DoneInput]):
    """Ends the run.

    The result text becomes the step summary. No output is recorded, so
    the step adds nothing to later transcripts beyond the model's own text.
    """

    id: ClassVar[str] = DONE_STEP_TYPE
    description: ClassVar[str] = (
        "Indicate that you are done with the task and report the final result."
    )
    input_model: ClassVar[type[BaseModel]] = DoneInput

    async def execute(self, params: DoneInput) -> ActionResult:
        return ActionOk(summary=params.result)
