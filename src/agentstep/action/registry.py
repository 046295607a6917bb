"""Action registry — look up actions and describe them to the model."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from agentstep.action.base import BaseAction
from agentstep.action.format import ActionFormat, JsonActionFormat
from agentstep.errors import ConfigurationError, UnknownActionError

logger = logging.getLogger(__name__)


class ActionRegistry:
    """Registry of available actions.

    Actions are registered once at construction and the registry is
    read-only afterwards. The registry owns the format used both to
    describe actions to the model and to parse its responses.
    """

    def __init__(
        self,
        actions: Iterable[BaseAction],
        format: ActionFormat | None = None,
    ) -> None:
        self._actions: dict[str, BaseAction] = {}
        for action in actions:
            if action.id in self._actions:
                raise ConfigurationError(f"Duplicate action id: {action.id}")
            self._actions[action.id] = action
            logger.debug("Registered action %s", action.id)
        self._format: ActionFormat = format if format is not None else JsonActionFormat()

    @property
    def format(self) -> ActionFormat:
        return self._format

    def get_action(self, action_id: str) -> BaseAction:
        """Get an action by id.

        Raises:
            UnknownActionError: if no action with this id is registered.
        """
        action = self._actions.get(action_id)
        if action is None:
            raise UnknownActionError(action_id, self.names())
        return action

    def names(self) -> list[str]:
        """Get all registered action ids."""
        return list(self._actions.keys())

    def get_available_action_instructions(self) -> str:
        """Describe every action and the required response format."""
        sections = "\n\n".join(
            action.instructions(self._format) for action in self._actions.values()
        )
        response_example = self._format.format(
            {"action": "an action id", "param1": "a parameter value"}
        )
        return (
            f"You can perform the following actions using {self._format.description}:\n\n"
            f"{sections}\n\n"
            f"## RESPONSE FORMAT (ALWAYS USE THIS FORMAT)\n\n"
            f"Explain and describe your reasoning step by step. "
            f"Then use the following format to specify the action you want to perform next:\n\n"
            f"{response_example}\n\n"
            f"You must always use exactly one action with the correct syntax per response. "
            f"Each response must precisely follow the action syntax."
        )

    def __len__(self) -> int:
        return len(self._actions)

    def __contains__(self, action_id: str) -> bool:
        return action_id in self._actions
