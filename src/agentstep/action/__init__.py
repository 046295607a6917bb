"""Action system — base classes, formats, registries."""

from agentstep.action.format import ActionFormat, JsonActionFormat, ParsedAction
from agentstep.action.base import (
    ActionFailed,
    ActionOk,
    ActionResult,
    BaseAction,
)
from agentstep.action.registry import ActionRegistry
from agentstep.action.done import DoneAction
from agentstep.action.result_formatter import (
    ResultFormatter,
    ResultFormatterRegistry,
    validate_result,
)

__all__ = [
    "ActionFormat",
    "JsonActionFormat",
    "ParsedAction",
    "ActionFailed",
    "ActionOk",
    "ActionResult",
    "BaseAction",
    "ActionRegistry",
    "DoneAction",
    "ResultFormatter",
    "ResultFormatterRegistry",
    "validate_result",
]
