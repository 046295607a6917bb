"""Tests for agentstep.step.step (Step, Succeeded, Failed)."""

from __future__ import annotations

import dataclasses

import pytest

from agentstep.step.step import (
    DONE_STEP_TYPE,
    ERROR_STEP_TYPE,
    THOUGHT_STEP_TYPE,
    Failed,
    Step,
    Succeeded,
    describe_error,
)


# ---------------------------------------------------------------------------
# State variants
# ---------------------------------------------------------------------------


class TestStates:
    def test_succeeded_defaults(self) -> None:
        s = Succeeded(summary="ok")
        assert s.output is None

    def test_failed_defaults(self) -> None:
        f = Failed(summary="nope")
        assert f.error is None

    def test_step_is_frozen(self) -> None:
        step = Step.thought("text", "summary")
        with pytest.raises(dataclasses.FrozenInstanceError):
            step.type = "other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


class TestConstructors:
    def test_thought(self) -> None:
        step = Step.thought("raw", "thinking about X")
        assert step.type == THOUGHT_STEP_TYPE
        assert step.generated_text == "raw"
        assert step.state == Succeeded(summary="thinking about X")
        assert step.succeeded is True

    def test_error(self) -> None:
        err = RuntimeError("boom")
        step = Step.error(err, generated_text="raw")
        assert step.type == ERROR_STEP_TYPE
        assert isinstance(step.state, Failed)
        assert step.state.error is err
        assert step.summary == "boom"
        assert step.succeeded is False

    def test_error_without_text(self) -> None:
        step = Step.error(ValueError("bad"))
        assert step.generated_text is None

    def test_succeeded_with(self) -> None:
        step = Step.succeeded_with("search", "found", output=[1], generated_text="g")
        assert step.state == Succeeded(summary="found", output=[1])
        assert step.generated_text == "g"

    def test_failed_with(self) -> None:
        step = Step.failed_with("search", "not found")
        assert step.state == Failed(summary="not found")
        assert step.generated_text is None


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestProperties:
    def test_is_done(self) -> None:
        assert Step.succeeded_with(DONE_STEP_TYPE, "42").is_done is True

    def test_failed_done_is_not_done(self) -> None:
        assert Step.failed_with(DONE_STEP_TYPE, "bad").is_done is False

    def test_other_types_not_done(self) -> None:
        assert Step.thought(None, "x").is_done is False

    def test_summary_rejects_unknown_state(self) -> None:
        step = Step(type="x", state="not a state")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            _ = step.summary


# ---------------------------------------------------------------------------
# describe_error
# ---------------------------------------------------------------------------


class TestDescribeError:
    def test_message(self) -> None:
        assert describe_error(RuntimeError("  boom \n")) == "boom"

    def test_empty_message_uses_class_name(self) -> None:
        assert describe_error(TimeoutError()) == "TimeoutError"
