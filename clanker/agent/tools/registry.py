"""Tool registry: ordered lookup and dispatch by name."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from loguru import logger

from clanker.agent.tools.base import Tool
from clanker.agent.tools.filesystem import ReadFileTool, WriteFileTool
from clanker.errors import ConfigError, DuplicateToolError


class ToolRegistry:
    """
    Fixed, ordered collection of tools handed to the agent at startup.

    Names must be unique; a duplicate is rejected when it is added.
    Dispatch never raises: unknown names, bad arguments and tool
    exceptions all come back as error text for the model to read.
    """

    def __init__(self, tools: Iterable[Tool] = ()) -> None:
        self._tools: list[Tool] = []
        for tool in tools:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        if self.get(tool.name) is not None:
            raise DuplicateToolError(tool.name)
        self._tools.append(tool)

    def get(self, name: str) -> Tool | None:
        for tool in self._tools:
            if tool.name == name:
                return tool
        return None

    @property
    def names(self) -> list[str]:
        return [tool.name for tool in self._tools]

    def get_definitions(self) -> list[dict[str, Any]]:
        return [tool.to_schema() for tool in self._tools]

    async def execute(self, name: str, params: dict[str, Any]) -> str:
        tool = self.get(name)
        if tool is None:
            logger.warning(f"Model requested unknown tool: {name}")
            return f"Error: unknown function '{name}'"

        errors = tool.validate_params(params)
        if errors:
            logger.warning(f"Invalid arguments for {name}: {errors}")
            return f"Error: invalid parameters for '{name}': " + "; ".join(errors)

        logger.debug(f"Executing tool {name} with {params}")
        try:
            return await tool.execute(**params)
        except Exception as exc:
            logger.warning(f"Tool {name} failed: {exc}")
            return f"Error executing {name}: {exc}"

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None


def build_tools(workspace: Path, names: Iterable[str] | None = None) -> ToolRegistry:
    """
    Build the default registry.

    Args:
        workspace: Directory that relative tool paths resolve against.
        names: Optional subset of tool names to enable, in the order given.
            An empty subset yields a registry with no tools (plain chat).

    Returns:
        The assembled registry.
    """
    available: dict[str, Tool] = {
        "read_file": ReadFileTool(workspace),
        "write_file": WriteFileTool(workspace),
    }
    if names is None:
        return ToolRegistry(available.values())

    selected: list[Tool] = []
    for name in names:
        if name not in available:
            raise ConfigError(
                f"Unknown tool {name!r}; available: {', '.join(available)}"
            )
        selected.append(available[name])
    return ToolRegistry(selected)
