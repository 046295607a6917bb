"""Tests for agentstep.llm.message."""

from __future__ import annotations

import dataclasses

import pytest

from agentstep.llm.message import ChatMessage


class TestChatMessage:
    def test_constructors(self) -> None:
        assert ChatMessage.system("s") == ChatMessage(role="system", content="s")
        assert ChatMessage.user("u") == ChatMessage(role="user", content="u")
        assert ChatMessage.assistant("a") == ChatMessage(role="assistant", content="a")

    def test_to_openai_dict(self) -> None:
        assert ChatMessage.user("hello").to_openai_dict() == {
            "role": "user",
            "content": "hello",
        }

    def test_frozen(self) -> None:
        msg = ChatMessage.system("s")
        with pytest.raises(dataclasses.FrozenInstanceError):
            msg.content = "changed"  # type: ignore[misc]
