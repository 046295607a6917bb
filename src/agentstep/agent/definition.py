"""Agent definition — loaded from YAML frontmatter in markdown files."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from agentstep.agent.loop import DEFAULT_MAX_STEPS
from agentstep.errors import ConfigurationError
from agentstep.llm.generator import DEFAULT_MODEL, create_text_generator
from agentstep.step.generator import BasicNextStepGenerator

if TYPE_CHECKING:
    from agentstep.action.registry import ActionRegistry
    from agentstep.action.result_formatter import ResultFormatterRegistry
    from agentstep.llm.generator import ChatTextGenerator

logger = logging.getLogger(__name__)


@dataclass
class AgentConfig:
    """Configuration for an agent, typically from YAML frontmatter."""

    name: str
    description: str = ""
    constraints: str = ""
    max_steps: int = DEFAULT_MAX_STEPS
    model: str | None = None  # Override model for this agent
    temperature: float | None = None


@dataclass
class AgentDefinition:
    """A configured agent ready to build a next-step generator.

    Agents are defined as markdown files with YAML frontmatter; the body
    is the role:

        ---
        name: wikipedia-qa
        description: Answers questions from Wikipedia
        constraints: Make sure all facts are from articles you have read.
        max_steps: 20
        ---

        You are a knowledge worker that answers questions using Wikipedia.
    """

    config: AgentConfig
    role: str = ""

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def max_steps(self) -> int:
        return self.config.max_steps

    @classmethod
    def from_markdown(cls, path: str) -> AgentDefinition:
        """Load an agent definition from a markdown file with YAML frontmatter."""
        with open(path, "r") as f:
            content = f.read()

        config_dict, role = _parse_frontmatter(content, path)
        return cls.from_dict(config_dict, role=role.strip())

    @classmethod
    def from_dict(cls, data: dict[str, Any], role: str = "") -> AgentDefinition:
        """Create an agent from a dictionary config."""
        try:
            config = AgentConfig(**data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid agent config: {e}") from e
        return cls(config=config, role=role)

    def create_generator(
        self,
        action_registry: ActionRegistry,
        text_generator: ChatTextGenerator | None = None,
        result_formatter_registry: ResultFormatterRegistry | None = None,
    ) -> BasicNextStepGenerator:
        """Build a next-step generator from this definition.

        The definition's temperature is sent with every model call. Without
        an explicit ``text_generator`` a litellm generator is created for the
        definition's model (or the default model).
        """
        if text_generator is None:
            text_generator = create_text_generator(
                model=self.config.model or DEFAULT_MODEL,
                temperature=self.config.temperature,
            )
        return BasicNextStepGenerator(
            role=self.role,
            constraints=self.config.constraints,
            action_registry=action_registry,
            text_generator=text_generator,
            result_formatter_registry=result_formatter_registry,
            temperature=self.config.temperature,
        )


def _parse_frontmatter(content: str, source: str = "<string>") -> tuple[dict[str, Any], str]:
    """Parse YAML frontmatter from markdown content.

    Returns (config_dict, body_text).
    """
    import yaml  # lazy import — only needed when loading agents

    pattern = re.compile(r"^---\s*\n(.*?)\n---\s*\n(.*)", re.DOTALL)
    match = pattern.match(content)

    if not match:
        return {}, content

    frontmatter = match.group(1)
    body = match.group(2)

    try:
        config = yaml.safe_load(frontmatter) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid frontmatter in {source}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"Frontmatter in {source} must be a mapping")

    return config, body


def discover_agents(search_dirs: list[str]) -> list[AgentDefinition]:
    """Discover agent definitions from markdown files in directories.

    Searches for *.md files with YAML frontmatter containing a 'name' field.
    Files without a name are skipped, as are files whose frontmatter or
    config is invalid (logged as a warning).
    """
    agents = []
    for dir_path in search_dirs:
        if not os.path.isdir(dir_path):
            continue
        for fname in sorted(os.listdir(dir_path)):
            if not fname.endswith(".md"):
                continue
            full_path = os.path.join(dir_path, fname)
            with open(full_path, "r") as f:
                content = f.read()
            try:
                config_dict, role = _parse_frontmatter(content, full_path)
                if not config_dict.get("name"):
                    continue
                agent = AgentDefinition.from_dict(config_dict, role=role.strip())
            except ConfigurationError as e:
                logger.warning("Skipping agent definition %s: %s", full_path, e)
                continue
            agents.append(agent)
    return agents
