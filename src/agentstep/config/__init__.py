"""Configuration — Pydantic models for agentstep settings."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from agentstep.agent.definition import AgentDefinition, discover_agents
from agentstep.llm.generator import DEFAULT_MODEL, ChatTextGenerator, create_text_generator


class LLMConfig(BaseModel):
    """Text generator configuration.

    Model names use litellm's provider-prefix format:
        "openai/gpt-4o-mini"
        "anthropic/claude-sonnet-4-5-20250929"
        "gemini/gemini-2.5-flash"

    API keys are read from env vars automatically by litellm
    (OPENAI_API_KEY, ANTHROPIC_API_KEY, GEMINI_API_KEY).
    """

    model: str = Field(default=DEFAULT_MODEL)
    temperature: float | None = Field(default=None)
    max_tokens: int | None = Field(default=None)
    timeout: float | None = Field(
        default=None, description="Per-request timeout for the model call, in seconds"
    )


class LoopConfig(BaseModel):
    """Run loop configuration."""

    max_steps: int = Field(default=50, ge=1, description="Max generated steps per run")


class AgentStepConfig(BaseModel):
    """Top-level agentstep configuration."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    loop: LoopConfig = Field(default_factory=LoopConfig)
    agents_dir: str = Field(
        default="agents", description="Directory for agent definitions"
    )

    def create_text_generator(self) -> ChatTextGenerator:
        """Build the configured text generator."""
        return create_text_generator(
            model=self.llm.model,
            temperature=self.llm.temperature,
            max_tokens=self.llm.max_tokens,
            timeout=self.llm.timeout,
        )

    def load_agents(self) -> list[AgentDefinition]:
        """Discover the agent definitions in ``agents_dir``."""
        return discover_agents([self.agents_dir])

    @classmethod
    def load(cls, config_path: str | None = None) -> AgentStepConfig:
        """Load config from file, env vars, or defaults.

        Priority: env vars > config file > defaults.

        Env vars:
            OPENAI_API_KEY / ANTHROPIC_API_KEY / ...  - read by litellm automatically
            AGENTSTEP_MODEL        - Override model (litellm format with provider prefix)
            AGENTSTEP_TEMPERATURE  - Override sampling temperature
            AGENTSTEP_MAX_TOKENS   - Override max output tokens
            AGENTSTEP_MAX_STEPS    - Override the run step limit
        """
        # .env values take precedence over stale shell env vars
        load_dotenv(override=True)

        config_data: dict[str, Any] = {}

        if config_path and os.path.exists(config_path):
            with open(config_path) as f:
                config_data = json.load(f)

        llm = config_data.get("llm", {})

        env_model = os.environ.get("AGENTSTEP_MODEL")
        if env_model:
            llm["model"] = env_model

        env_temperature = os.environ.get("AGENTSTEP_TEMPERATURE")
        if env_temperature:
            llm["temperature"] = float(env_temperature)

        env_max_tokens = os.environ.get("AGENTSTEP_MAX_TOKENS")
        if env_max_tokens:
            llm["max_tokens"] = int(env_max_tokens)

        if llm:
            config_data["llm"] = llm

        env_max_steps = os.environ.get("AGENTSTEP_MAX_STEPS")
        if env_max_steps:
            loop = config_data.get("loop", {})
            loop["max_steps"] = int(env_max_steps)
            config_data["loop"] = loop

        return cls.model_validate(config_data)


def setup_logging(verbose: bool = False) -> None:
    """Install a default stderr handler for hosts that have none."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
