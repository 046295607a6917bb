"""Result formatters — render a succeeded step's output for the model."""

from __future__ import annotations

import functools
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ValidationError, create_model

from agentstep.errors import ConfigurationError, ResultValidationError

logger = logging.getLogger(__name__)

O = TypeVar("O")


class ResultFormatter(ABC, Generic[O]):
    """Renders the output of one step type as transcript text.

    ``output_schema`` is any type Pydantic can validate against
    (a model class, ``list[str]``, ...). Output is validated against it
    before ``format_result`` is called.

    Usage:
        class SearchOutput(BaseModel):
            results: list[SearchHit]

        class SearchResultFormatter(ResultFormatter[SearchOutput]):
            step_type = "search"
            output_schema = SearchOutput

            def format_result(self, summary: str, output: SearchOutput) -> str:
                return "\\n".join(f"- {hit.title}: {hit.url}" for hit in output.results)
    """

    step_type: ClassVar[str]
    output_schema: ClassVar[Any]

    @abstractmethod
    def format_result(self, summary: str, output: O) -> str:
        """Render a validated result."""
        ...


@functools.lru_cache(maxsize=None)
def _result_model(output_schema: Any) -> type[BaseModel]:
    return create_model(
        "FormattedResult",
        summary=(str, ...),
        output=(output_schema, ...),
    )


def validate_result(
    formatter: ResultFormatter[O], summary: Any, output: Any
) -> tuple[str, O]:
    """Check ``{summary, output}`` against the formatter's declared schema.

    Raises:
        ResultValidationError: if the result does not conform.
    """
    model = _result_model(formatter.output_schema)
    try:
        parsed = model.model_validate({"summary": summary, "output": output})
    except ValidationError as e:
        raise ResultValidationError(formatter.step_type, str(e)) from e
    return parsed.summary, parsed.output  # type: ignore[attr-defined]


class ResultFormatterRegistry:
    """Read-only mapping from step type to result formatter."""

    def __init__(self, formatters: Iterable[ResultFormatter[Any]] = ()) -> None:
        self._formatters: dict[str, ResultFormatter[Any]] = {}
        for formatter in formatters:
            if formatter.step_type in self._formatters:
                raise ConfigurationError(
                    f"Duplicate result formatter for step type: {formatter.step_type}"
                )
            self._formatters[formatter.step_type] = formatter
            logger.debug("Registered result formatter for %s", formatter.step_type)

    def get_result_formatter(self, step_type: str) -> ResultFormatter[Any] | None:
        """Get the formatter for a step type, or None."""
        return self._formatters.get(step_type)

    def __len__(self) -> int:
        return len(self._formatters)

    def __contains__(self, step_type: str) -> bool:
        return step_type in self._formatters
