"""Step — the immutable record of one agent loop iteration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

THOUGHT_STEP_TYPE = "thought"
ERROR_STEP_TYPE = "error"
DONE_STEP_TYPE = "done"


@dataclass(frozen=True)
class Succeeded:
    """The step's action completed.

    ``output`` is opaque, action-specific data. A step that only carries
    reasoning (a thought) has ``output=None``.
    """

    summary: str
    output: Any = None


@dataclass(frozen=True)
class Failed:
    """The step's action could not be created or executed."""

    summary: str
    error: BaseException | None = None


StepState = Succeeded | Failed


@dataclass(frozen=True)
class Step:
    """One recorded outcome of a single agent loop iteration.

    ``generated_text`` is the raw model response that produced the step,
    or None when the step was synthesized without a model call.
    """

    type: str
    state: StepState
    generated_text: str | None = None

    @property
    def summary(self) -> str:
        state = self.state
        if isinstance(state, (Succeeded, Failed)):
            return state.summary
        raise TypeError(f"Unknown step state: {state!r}")

    @property
    def succeeded(self) -> bool:
        return isinstance(self.state, Succeeded)

    @property
    def is_done(self) -> bool:
        return self.type == DONE_STEP_TYPE and self.succeeded

    # --- Convenience constructors ---

    @classmethod
    def thought(cls, generated_text: str | None, summary: str) -> Step:
        return cls(
            type=THOUGHT_STEP_TYPE,
            state=Succeeded(summary=summary),
            generated_text=generated_text,
        )

    @classmethod
    def error(cls, error: BaseException, generated_text: str | None = None) -> Step:
        return cls(
            type=ERROR_STEP_TYPE,
            state=Failed(summary=describe_error(error), error=error),
            generated_text=generated_text,
        )

    @classmethod
    def succeeded_with(
        cls,
        type: str,
        summary: str,
        output: Any = None,
        generated_text: str | None = None,
    ) -> Step:
        return cls(
            type=type,
            state=Succeeded(summary=summary, output=output),
            generated_text=generated_text,
        )

    @classmethod
    def failed_with(
        cls,
        type: str,
        summary: str,
        generated_text: str | None = None,
    ) -> Step:
        return cls(type=type, state=Failed(summary=summary), generated_text=generated_text)


def describe_error(error: BaseException) -> str:
    """Render an exception as a one-paragraph summary the model can read."""
    message = str(error).strip()
    if not message:
        return type(error).__name__
    return message
