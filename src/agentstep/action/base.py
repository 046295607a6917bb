"""Base action classes with Pydantic input validation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from agentstep.action.format import ActionFormat, ParsedAction
from agentstep.step.step import Failed, Step, Succeeded

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


@dataclass
class ActionOk:
    """The action ran and produced a result."""

    summary: str
    output: Any = None


@dataclass
class ActionFailed:
    """The action ran but reports a failure the model should see."""

    summary: str


ActionResult = ActionOk | ActionFailed


class BaseAction(ABC, Generic[T]):
    """Base class for all actions.

    Each action declares its input as a Pydantic model (the type parameter T).
    The model names the action by ``id`` and passes the remaining fields of
    its structured output as input.

    Usage:
        class SearchInput(BaseModel):
            query: str

        class SearchAction(BaseAction[SearchInput]):
            id = "search"
            description = "Search the web. Returns a list of pages."
            input_model = SearchInput

            async def execute(self, params: SearchInput) -> ActionResult:
                return ActionOk(summary="Found 3 pages", output=[...])
    """

    id: ClassVar[str]
    description: ClassVar[str]
    input_model: ClassVar[type[BaseModel]]
    input_example: ClassVar[dict[str, Any] | None] = None

    async def create_step(self, generated_text: str, input: ParsedAction) -> Step:
        """Validate the parsed input, execute, and record the outcome as a step.

        Validation and execution errors propagate; the next-step generator
        turns them into error steps.
        """
        params = self.input_model.model_validate(input.parameters)
        result = await self.execute(params)  # type: ignore[arg-type]

        if isinstance(result, ActionOk):
            state: Succeeded | Failed = Succeeded(
                summary=result.summary, output=result.output
            )
        elif isinstance(result, ActionFailed):
            state = Failed(summary=result.summary)
        else:
            raise TypeError(f"Action {self.id} returned {result!r}")

        return Step(type=self.id, state=state, generated_text=generated_text)

    @abstractmethod
    async def execute(self, params: T) -> ActionResult:
        """Execute the action with validated input."""
        ...

    def example(self) -> dict[str, Any]:
        """Example structured output invoking this action.

        Falls back to placeholders derived from the input model's JSON schema
        when no ``input_example`` is declared.
        """
        if self.input_example is not None:
            return {"action": self.id, **self.input_example}

        schema = self.input_model.model_json_schema()
        example: dict[str, Any] = {"action": self.id}
        for name, prop in schema.get("properties", {}).items():
            example[name] = "{" + prop.get("description", name) + "}"
        return example

    def instructions(self, format: ActionFormat) -> str:
        """Model-readable description of this action and its syntax."""
        return (
            f"### {self.id}\n"
            f"{self.description}\n"
            f"Syntax:\n"
            f"{format.format(self.example())}"
        )
