"""Tests for the Tool base class and parameter validation."""

from typing import Any

import pytest

from clanker.agent.tools.base import Tool


class DummyTool(Tool):
    """A dummy tool for testing."""

    @property
    def name(self) -> str:
        return "dummy_tool"

    @property
    def description(self) -> str:
        return "A tool for testing validation."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "path": {"type": "string", "minLength": 1, "maxLength": 10},
                "content": {"type": "string"},
                "count": {"type": "integer"},
            },
            "required": ["path", "content"],
        }

    async def execute(self, **kwargs: Any) -> str:
        return "success"


def test_tool_schema_generation():
    """The declaration carries name, description and parameters."""
    schema = DummyTool().to_schema()

    assert schema["type"] == "function"
    assert schema["function"]["name"] == "dummy_tool"
    assert schema["function"]["description"] == "A tool for testing validation."
    assert schema["function"]["parameters"]["required"] == ["path", "content"]


def test_tool_validation_success():
    errors = DummyTool().validate_params({"path": "a.txt", "content": "", "count": 2})
    assert errors == []


def test_tool_validation_undeclared_keys_pass():
    errors = DummyTool().validate_params({"path": "a.txt", "content": "x", "extra": [1]})
    assert errors == []


def test_tool_validation_missing_required():
    errors = DummyTool().validate_params({"path": "a.txt"})
    assert errors == ["missing required content"]


def test_tool_validation_type_mismatch():
    errors = DummyTool().validate_params({"path": 123, "content": None})

    assert "path should be string" in errors
    assert "content should be string" in errors


def test_tool_validation_rejects_bool_as_integer():
    errors = DummyTool().validate_params({"path": "a.txt", "content": "x", "count": True})
    assert errors == ["count should be integer"]


@pytest.mark.parametrize(
    "path, message",
    [
        ("", "path must be at least 1 chars"),
        ("a" * 11, "path must be at most 10 chars"),
    ],
)
def test_tool_validation_string_length(path, message):
    errors = DummyTool().validate_params({"path": path, "content": "x"})
    assert errors == [message]


def test_tool_validation_non_mapping_arguments():
    errors = DummyTool().validate_params(["a.txt"])  # type: ignore[arg-type]
    assert errors == ["arguments should be object"]


def test_tool_bad_schema():
    class BadTool(DummyTool):
        @property
        def parameters(self) -> dict[str, Any]:
            return {"type": "array"}

    with pytest.raises(ValueError, match="Schema must be object type"):
        BadTool().validate_params({})
