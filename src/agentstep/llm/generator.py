"""Chat text generator abstraction — unified via litellm.

The next-step generator only needs "messages in, text out". litellm
handles provider-specific details (OpenAI, Anthropic, Gemini, ...) and
reads API keys from environment variables.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from agentstep.llm.message import ChatMessage

if TYPE_CHECKING:
    from litellm import ModelResponse

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "openai/gpt-4o-mini"


@dataclass
class TextGeneratorConfig:
    """Configuration for a chat text generator."""

    model: str
    temperature: float | None = None
    max_tokens: int | None = None
    timeout: float | None = None


@runtime_checkable
class ChatTextGenerator(Protocol):
    """Stateless request/response interface to a chat model.

    Implementations must not mutate ``messages``.
    """

    async def generate_text(
        self,
        messages: Sequence[ChatMessage],
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str: ...


# ---------------------------------------------------------------------------
# litellm generator
# ---------------------------------------------------------------------------


@dataclass
class LiteLLMChatTextGenerator:
    """Chat text generator backed by ``litellm.acompletion``.

    The model string carries the provider prefix
    (e.g. "openai/gpt-4o-mini", "anthropic/claude-sonnet-4-5-20250929").
    Per-call ``max_tokens``/``temperature`` override the configured values.
    """

    _config: TextGeneratorConfig

    @property
    def config(self) -> TextGeneratorConfig:
        return self._config

    async def generate_text(
        self,
        messages: Sequence[ChatMessage],
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        kwargs: dict[str, Any] = {
            "model": self._config.model,
            "messages": [m.to_openai_dict() for m in messages],
        }

        temperature = temperature if temperature is not None else self._config.temperature
        if temperature is not None:
            kwargs["temperature"] = temperature

        max_tokens = max_tokens if max_tokens is not None else self._config.max_tokens
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens

        if self._config.timeout is not None:
            kwargs["timeout"] = self._config.timeout

        logger.debug(
            "Requesting completion from %s (%d messages)",
            self._config.model,
            len(messages),
        )
        response = await _acompletion_with_retry(**kwargs)
        return _response_text(response)


@retry(
    retry=retry_if_exception_type((ConnectionError, TimeoutError, OSError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=30),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def _acompletion_with_retry(**kwargs: Any) -> ModelResponse:
    """Call litellm.acompletion with retry on transient errors."""
    import litellm

    return await litellm.acompletion(**kwargs)


def _response_text(response: Any) -> str:
    """Extract the assistant text from an OpenAI-shaped completion response."""
    choices = getattr(response, "choices", None)
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None) if message is not None else None
    return content or ""


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def create_text_generator(
    model: str,
    temperature: float | None = None,
    max_tokens: int | None = None,
    timeout: float | None = None,
) -> ChatTextGenerator:
    """Create a litellm-backed chat text generator.

    Args:
        model: Model name with provider prefix (e.g. "openai/gpt-4o-mini").
        temperature: Default sampling temperature.
        max_tokens: Default max output tokens.
        timeout: Per-request timeout in seconds, passed through to litellm.
    """
    config = TextGeneratorConfig(
        model=model,
        temperature=temperature,
        max_tokens=max_tokens,
        timeout=timeout,
    )
    return LiteLLMChatTextGenerator(_config=config)
