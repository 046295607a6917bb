"""Agent runs — run state, observers, the run loop, and agent definitions."""

from agentstep.agent.run import (
    AgentRun,
    AgentRunObserver,
    CompositeObserver,
    LoggingObserver,
)
from agentstep.agent.wire import EventType, Wire, WireEvent, WireObserver
from agentstep.agent.console import ConsoleObserver
from agentstep.agent.loop import DEFAULT_MAX_STEPS, RunOutcome, run_agent
from agentstep.agent.definition import AgentConfig, AgentDefinition, discover_agents

__all__ = [
    "AgentRun",
    "AgentRunObserver",
    "CompositeObserver",
    "LoggingObserver",
    "EventType",
    "Wire",
    "WireEvent",
    "WireObserver",
    "ConsoleObserver",
    "DEFAULT_MAX_STEPS",
    "RunOutcome",
    "run_agent",
    "AgentConfig",
    "AgentDefinition",
    "discover_agents",
]
