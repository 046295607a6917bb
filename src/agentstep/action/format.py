"""Action formats — how actions are written by the model and parsed back."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Protocol

from agentstep.errors import ActionFormatError

# Opening code fence left dangling in the free text when the model wraps
# its JSON in ```json ... ```
_TRAILING_FENCE = re.compile(r"```[a-zA-Z]*\s*$")


@dataclass(frozen=True)
class ParsedAction:
    """Structured record extracted from raw model output.

    ``action`` is None when the model wrote reasoning only.
    ``parameters`` holds every named field other than ``action``.
    """

    action: str | None
    free_text: str = ""
    parameters: dict[str, Any] = field(default_factory=dict)


class ActionFormat(Protocol):
    """Renders action examples and parses model output."""

    @property
    def description(self) -> str: ...

    def format(self, data: dict[str, Any]) -> str: ...

    def parse(self, text: str) -> ParsedAction: ...


class JsonActionFormat:
    """Actions as a single JSON object following free-form reasoning.

    Example model output::

        I need more information about X first.

        {
          "action": "search",
          "query": "X"
        }

    Everything before the first ``{`` is the free text. Text after the
    JSON object is ignored.
    """

    @property
    def description(self) -> str:
        return "JSON"

    def format(self, data: dict[str, Any]) -> str:
        return json.dumps(data, indent=2)

    def parse(self, text: str) -> ParsedAction:
        start = text.find("{")
        if start == -1:
            return ParsedAction(action=None, free_text=text.strip())

        try:
            obj, _end = json.JSONDecoder().raw_decode(text, start)
        except json.JSONDecodeError as e:
            raise ActionFormatError(text, f"invalid JSON: {e}") from e

        if not isinstance(obj, dict):
            raise ActionFormatError(text, "expected a JSON object")

        parameters = dict(obj)
        action = parameters.pop("action", None)
        if action is not None and not isinstance(action, str):
            raise ActionFormatError(
                text, f"'action' must be a string, got {type(action).__name__}"
            )

        free_text = _TRAILING_FENCE.sub("", text[:start]).strip()
        return ParsedAction(action=action, free_text=free_text, parameters=parameters)
