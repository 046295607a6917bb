"""Console observer — print each generated step with rich markup."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from agentstep.step.step import Failed, Succeeded

if TYPE_CHECKING:
    from agentstep.agent.run import AgentRun
    from agentstep.llm.message import ChatMessage
    from agentstep.step.step import Step


class ConsoleObserver:
    """Run observer that renders steps to a terminal.

    The model's raw text is shown in a panel; the step outcome follows on
    one line, green for success and red for failure.
    """

    def __init__(self, console: Console | None = None, show_text: bool = True) -> None:
        self.console = console if console is not None else Console()
        self.show_text = show_text

    def on_step_generation_started(
        self, *, run: AgentRun, messages: Sequence[ChatMessage]
    ) -> None:
        self.console.print(f"[dim]Thinking... (step {len(run) + 1})[/dim]")

    def on_step_generation_finished(
        self, *, run: AgentRun, generated_text: str, step: Step
    ) -> None:
        if self.show_text and generated_text:
            self.console.print(
                Panel(escape(generated_text), title=escape(step.type), expand=False)
            )

        state = step.state
        if isinstance(state, Succeeded):
            self.console.print(
                f"[green]{escape(step.type)}[/green]: {escape(state.summary)}"
            )
        elif isinstance(state, Failed):
            self.console.print(
                f"[bold red]ERROR ({escape(step.type)}): {escape(state.summary)}[/bold red]"
            )
        else:
            raise TypeError(f"Unknown step state: {state!r}")
