"""Chat message type for the text generator boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """A single transcript entry."""

    role: Role
    content: str

    # --- Convenience constructors ---

    @classmethod
    def system(cls, content: str) -> ChatMessage:
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> ChatMessage:
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> ChatMessage:
        return cls(role="assistant", content=content)

    def to_openai_dict(self) -> dict[str, Any]:
        """Convert to OpenAI API format."""
        return {"role": self.role, "content": self.content}
