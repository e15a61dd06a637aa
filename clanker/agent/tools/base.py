"""Base contract for tools the model can call."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

_JSON_TYPES = {
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
    "object": dict,
}


class Tool(ABC):
    """
    A named capability exposed to the model.

    Subclasses declare a flat JSON-schema object for their arguments. The
    registry checks incoming arguments against it before calling
    ``execute``: required keys, declared scalar types and string length
    bounds. Keys the schema does not declare are passed through.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @property
    @abstractmethod
    def parameters(self) -> dict[str, Any]:
        pass

    @abstractmethod
    async def execute(self, **kwargs: Any) -> str:
        """Run the tool. Failures are returned as text starting with ``Error``."""

    def validate_params(self, params: dict[str, Any]) -> list[str]:
        """Return a list of problems with ``params``; empty when valid."""
        schema = self.parameters or {}
        if schema.get("type", "object") != "object":
            raise ValueError(f"Schema must be object type, got {schema.get('type')!r}")
        if not isinstance(params, dict):
            return ["arguments should be object"]

        errors = [f"missing required {key}" for key in schema.get("required", []) if key not in params]
        properties = schema.get("properties", {})
        for key, value in params.items():
            if key in properties:
                errors.extend(_check_property(key, value, properties[key]))
        return errors

    def to_schema(self) -> dict[str, Any]:
        """Function declaration sent to the model."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def _check_property(key: str, value: Any, schema: dict[str, Any]) -> list[str]:
    expected = schema.get("type")
    if expected in _JSON_TYPES:
        # bool is an int subclass; keep true/false out of numeric fields
        wrong_bool = expected in ("integer", "number") and isinstance(value, bool)
        if wrong_bool or not isinstance(value, _JSON_TYPES[expected]):
            return [f"{key} should be {expected}"]

    errors = []
    if expected == "string":
        if "minLength" in schema and len(value) < schema["minLength"]:
            errors.append(f"{key} must be at least {schema['minLength']} chars")
        if "maxLength" in schema and len(value) > schema["maxLength"]:
            errors.append(f"{key} must be at most {schema['maxLength']} chars")
    return errors
