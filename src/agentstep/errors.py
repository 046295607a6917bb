"""Exceptions raised by the step generation core."""

from __future__ import annotations


class AgentStepError(Exception):
    """Base class for all agentstep errors."""


class ConfigurationError(AgentStepError, ValueError):
    """A required component is missing or misconfigured. Always fatal."""


class ActionFormatError(AgentStepError):
    """Model output could not be interpreted by the action format."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Could not parse model output as an action: {reason}")


class UnknownActionError(AgentStepError, KeyError):
    """The model named an action that is not registered."""

    def __init__(self, action_id: str, available: list[str]) -> None:
        self.action_id = action_id
        self.available = available
        super().__init__(action_id)

    def __str__(self) -> str:
        return (
            f"Unknown action: {self.action_id}. "
            f"Available actions: {', '.join(self.available)}"
        )


class ResultValidationError(AgentStepError):
    """A succeeded step's output does not match its formatter's schema.

    This is a programming error in an action or formatter, not something
    the model can fix, so it is never folded into the transcript.
    """

    def __init__(self, step_type: str, detail: str) -> None:
        self.step_type = step_type
        self.detail = detail
        super().__init__(f"Invalid result for step type {step_type!r}: {detail}")
