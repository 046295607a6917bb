"""Tests for agentstep.config (AgentStepConfig.load, env overrides)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from agentstep.config import AgentStepConfig, LLMConfig, LoopConfig, setup_logging
from agentstep.llm.generator import LiteLLMChatTextGenerator

_ENV_VARS = (
    "AGENTSTEP_MODEL",
    "AGENTSTEP_TEMPERATURE",
    "AGENTSTEP_MAX_TOKENS",
    "AGENTSTEP_MAX_STEPS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep any developer .env out of the picture
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("agentstep.config.load_dotenv", lambda override=True: False)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_llm_defaults(self) -> None:
        config = LLMConfig()
        assert config.model == "openai/gpt-4o-mini"
        assert config.temperature is None
        assert config.max_tokens is None
        assert config.timeout is None

    def test_loop_defaults(self) -> None:
        assert LoopConfig().max_steps == 50

    def test_max_steps_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            LoopConfig(max_steps=0)

    def test_load_without_file(self) -> None:
        config = AgentStepConfig.load()
        assert config.llm.model == "openai/gpt-4o-mini"
        assert config.loop.max_steps == 50
        assert config.agents_dir == "agents"


# ---------------------------------------------------------------------------
# File + env precedence
# ---------------------------------------------------------------------------


class TestLoad:
    def test_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "llm": {"model": "anthropic/claude-sonnet-4-5-20250929", "temperature": 0.3},
                    "loop": {"max_steps": 7},
                    "agents_dir": "my-agents",
                }
            )
        )
        config = AgentStepConfig.load(str(path))
        assert config.llm.model == "anthropic/claude-sonnet-4-5-20250929"
        assert config.llm.temperature == 0.3
        assert config.loop.max_steps == 7
        assert config.agents_dir == "my-agents"

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        config = AgentStepConfig.load(str(tmp_path / "nope.json"))
        assert config.llm.model == "openai/gpt-4o-mini"

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"llm": {"model": "from/file"}, "loop": {"max_steps": 7}}))
        monkeypatch.setenv("AGENTSTEP_MODEL", "from/env")
        monkeypatch.setenv("AGENTSTEP_TEMPERATURE", "0.9")
        monkeypatch.setenv("AGENTSTEP_MAX_TOKENS", "512")
        monkeypatch.setenv("AGENTSTEP_MAX_STEPS", "3")

        config = AgentStepConfig.load(str(path))

        assert config.llm.model == "from/env"
        assert config.llm.temperature == 0.9
        assert config.llm.max_tokens == 512
        assert config.loop.max_steps == 3

    def test_create_text_generator(self) -> None:
        config = AgentStepConfig(llm=LLMConfig(model="test/model", timeout=12.0))
        generator = config.create_text_generator()
        assert isinstance(generator, LiteLLMChatTextGenerator)
        assert generator.config.model == "test/model"
        assert generator.config.timeout == 12.0


# ---------------------------------------------------------------------------
# Agent definitions
# ---------------------------------------------------------------------------


class TestLoadAgents:
    def test_reads_default_agents_dir(self, tmp_path: Path) -> None:
        agents_dir = tmp_path / "agents"
        agents_dir.mkdir()
        (agents_dir / "researcher.md").write_text(
            "---\nname: researcher\nconstraints: Cite sources\n---\nYou research topics.\n"
        )

        agents = AgentStepConfig.load().load_agents()

        assert [a.name for a in agents] == ["researcher"]
        assert agents[0].config.constraints == "Cite sources"

    def test_configured_agents_dir(self, tmp_path: Path) -> None:
        (tmp_path / "custom").mkdir()
        (tmp_path / "custom" / "qa.md").write_text("---\nname: qa\n---\nAnswer.\n")

        config = AgentStepConfig(agents_dir=str(tmp_path / "custom"))

        assert [a.name for a in config.load_agents()] == ["qa"]

    def test_missing_agents_dir(self) -> None:
        assert AgentStepConfig(agents_dir="does-not-exist").load_agents() == []


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class TestSetupLogging:
    def test_default_level(self) -> None:
        with patch("agentstep.config.logging.basicConfig") as basic_config:
            setup_logging()
        kwargs = basic_config.call_args.kwargs
        assert kwargs["level"] == logging.INFO
        assert kwargs["format"] == "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        assert kwargs["datefmt"] == "%H:%M:%S"

    def test_verbose(self) -> None:
        with patch("agentstep.config.logging.basicConfig") as basic_config:
            setup_logging(verbose=True)
        assert basic_config.call_args.kwargs["level"] == logging.DEBUG
