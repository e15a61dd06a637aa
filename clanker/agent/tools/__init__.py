"""Agent tools module."""

from clanker.agent.tools.base import Tool
from clanker.agent.tools.filesystem import ReadFileTool, WriteFileTool
from clanker.agent.tools.registry import ToolRegistry, build_tools

__all__ = ["Tool", "ToolRegistry", "ReadFileTool", "WriteFileTool", "build_tools"]
