"""Next-step generator — the heart of agentstep.

Each call rebuilds the transcript from the run instructions and the step
history, asks the text generator for a response, parses it into an action
request, and turns that into the next Step.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

import pydantic_core

from agentstep.action.result_formatter import (
    ResultFormatter,
    ResultFormatterRegistry,
    validate_result,
)
from agentstep.errors import ActionFormatError, ConfigurationError
from agentstep.llm.message import ChatMessage
from agentstep.step.step import Failed, Step, Succeeded

if TYPE_CHECKING:
    from agentstep.action.registry import ActionRegistry
    from agentstep.agent.run import AgentRun
    from agentstep.llm.generator import ChatTextGenerator

logger = logging.getLogger(__name__)


class NextStepGenerator(Protocol):
    """Decides what the agent does next."""

    async def generate_next_step(
        self, completed_steps: Sequence[Step], run: AgentRun
    ) -> Step: ...


class BasicNextStepGenerator:
    """Next-step generator driven by a chat model and an action registry.

    Args:
        role: Who the agent is (first section of the system message).
        constraints: Rules the agent must follow.
        action_registry: Available actions and the response format.
        text_generator: Chat model backend.
        result_formatter_registry: Custom renderers for step outputs.
        recover_parse_errors: Turn unparseable model output into an error
            step instead of raising ``ActionFormatError``.
        temperature: Sampling temperature sent with every model call.
        max_tokens: Output token limit sent with every model call.
    """

    def __init__(
        self,
        *,
        role: str,
        constraints: str,
        action_registry: ActionRegistry,
        text_generator: ChatTextGenerator,
        result_formatter_registry: ResultFormatterRegistry | None = None,
        recover_parse_errors: bool = False,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> None:
        if role is None:
            raise ConfigurationError("role is required")
        if constraints is None:
            raise ConfigurationError("constraints is required")
        if action_registry is None:
            raise ConfigurationError("action_registry is required")
        if text_generator is None:
            raise ConfigurationError("text_generator is required")

        self.role = role
        self.constraints = constraints
        self.action_registry = action_registry
        self.text_generator = text_generator
        self.result_formatter_registry = (
            result_formatter_registry
            if result_formatter_registry is not None
            else ResultFormatterRegistry()
        )
        self.recover_parse_errors = recover_parse_errors
        self.temperature = temperature
        self.max_tokens = max_tokens

    def generate_messages(
        self, completed_steps: Sequence[Step], run: AgentRun
    ) -> list[ChatMessage]:
        """Build the transcript for the next model call."""
        messages = [
            ChatMessage.system(
                f"## ROLE\n{self.role}\n\n"
                f"## CONSTRAINTS\n{self.constraints}\n\n"
                f"## AVAILABLE ACTIONS\n"
                f"{self.action_registry.get_available_action_instructions()}"
            ),
            ChatMessage.user(f"## TASK\n{run.instructions}"),
        ]

        for step in completed_steps:
            # Repeat the model's own response to reinforce the action format
            if step.generated_text is not None:
                messages.append(ChatMessage.assistant(step.generated_text))

            content = self._render_state(step)
            if content is not None:
                messages.append(ChatMessage.system(content))

        return messages

    def _render_state(self, step: Step) -> str | None:
        state = step.state
        if isinstance(state, Failed):
            return f"ERROR:\n{state.summary}"

        if isinstance(state, Succeeded):
            if state.output is None:
                return None

            formatter = self.result_formatter_registry.get_result_formatter(step.type)
            if formatter is None:
                return pydantic_core.to_json(
                    {"summary": state.summary, "output": state.output},
                    fallback=str,
                ).decode()

            return _format_output(formatter, state)

        raise TypeError(f"Unknown step state: {state!r}")

    async def generate_next_step(
        self, completed_steps: Sequence[Step], run: AgentRun
    ) -> Step:
        """Ask the model for the next action and turn it into a step.

        Unknown actions and failures while creating the action's step become
        error steps. Backend errors, unparseable output (unless
        ``recover_parse_errors``) and invalid formatted results propagate.
        """
        messages = self.generate_messages(completed_steps, run)
        logger.debug("Transcript has %d messages", len(messages))

        if run.observer is not None:
            run.observer.on_step_generation_started(run=run, messages=messages)

        generated_text = await self.text_generator.generate_text(
            messages, max_tokens=self.max_tokens, temperature=self.temperature
        )

        step = await self._create_step(generated_text)

        if run.observer is not None:
            run.observer.on_step_generation_finished(
                run=run, generated_text=generated_text, step=step
            )

        return step

    async def _create_step(self, generated_text: str) -> Step:
        try:
            parsed = self.action_registry.format.parse(generated_text)
        except ActionFormatError as e:
            if not self.recover_parse_errors:
                raise
            logger.warning("Unparseable model output: %s", e.reason)
            return Step.error(e, generated_text=generated_text)

        if parsed.action is None:
            logger.debug("No action in model output, recording thought")
            return Step.thought(generated_text, parsed.free_text)

        logger.debug("Model requested action %s", parsed.action)
        try:
            action = self.action_registry.get_action(parsed.action)
            return await action.create_step(generated_text, parsed)
        except Exception as e:
            logger.warning("Action %s failed: %s", parsed.action, e)
            return Step.error(e, generated_text=generated_text)


def _format_output(formatter: ResultFormatter, state: Succeeded) -> str:
    summary, output = validate_result(formatter, state.summary, state.output)
    return formatter.format_result(summary, output)
