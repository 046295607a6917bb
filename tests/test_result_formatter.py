"""Tests for agentstep.action.result_formatter."""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from agentstep.action.result_formatter import (
    ResultFormatter,
    ResultFormatterRegistry,
    validate_result,
)
from agentstep.errors import ConfigurationError, ResultValidationError


class Page(BaseModel):
    title: str
    url: str


class PagesFormatter(ResultFormatter[list[Page]]):
    step_type = "search"
    output_schema = list[Page]

    def format_result(self, summary: str, output: list[Page]) -> str:
        return "\n".join(f"{p.title} ({p.url})" for p in output)


class TextFormatter(ResultFormatter[str]):
    step_type = "read"
    output_schema = str

    def format_result(self, summary: str, output: str) -> str:
        return f"## {summary}\n{output}"


# ---------------------------------------------------------------------------
# validate_result
# ---------------------------------------------------------------------------


class TestValidateResult:
    def test_valid_result_is_coerced_to_schema(self) -> None:
        summary, output = validate_result(
            PagesFormatter(), "2 pages", [{"title": "A", "url": "u1"}, {"title": "B", "url": "u2"}]
        )
        assert summary == "2 pages"
        assert output == [Page(title="A", url="u1"), Page(title="B", url="u2")]

    def test_model_instances_accepted(self) -> None:
        _, output = validate_result(PagesFormatter(), "s", [Page(title="A", url="u")])
        assert output[0].title == "A"

    def test_invalid_output(self) -> None:
        with pytest.raises(ResultValidationError, match="search") as exc_info:
            validate_result(PagesFormatter(), "s", [{"title": "A"}])
        assert exc_info.value.step_type == "search"
        assert "url" in exc_info.value.detail

    def test_invalid_summary(self) -> None:
        with pytest.raises(ResultValidationError):
            validate_result(TextFormatter(), None, "body")

    def test_scalar_schema(self) -> None:
        summary, output = validate_result(TextFormatter(), "Article", "body")
        assert TextFormatter().format_result(summary, output) == "## Article\nbody"


# ---------------------------------------------------------------------------
# ResultFormatterRegistry
# ---------------------------------------------------------------------------


class TestResultFormatterRegistry:
    def test_empty_by_default(self) -> None:
        registry = ResultFormatterRegistry()
        assert len(registry) == 0
        assert registry.get_result_formatter("search") is None

    def test_lookup_by_step_type(self) -> None:
        pages = PagesFormatter()
        registry = ResultFormatterRegistry([pages, TextFormatter()])
        assert registry.get_result_formatter("search") is pages
        assert "read" in registry
        assert registry.get_result_formatter("thought") is None

    def test_duplicate_step_type_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="search"):
            ResultFormatterRegistry([PagesFormatter(), PagesFormatter()])
