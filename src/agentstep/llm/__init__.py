"""LLM abstraction layer — chat messages and text generators via litellm."""

from agentstep.llm.message import ChatMessage, Role
from agentstep.llm.generator import (
    DEFAULT_MODEL,
    ChatTextGenerator,
    LiteLLMChatTextGenerator,
    TextGeneratorConfig,
    create_text_generator,
)

__all__ = [
    "ChatMessage",
    "Role",
    "DEFAULT_MODEL",
    "ChatTextGenerator",
    "LiteLLMChatTextGenerator",
    "TextGeneratorConfig",
    "create_text_generator",
]
