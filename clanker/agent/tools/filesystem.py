"""Filesystem tools for reading and writing files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from loguru import logger

from clanker.agent.tools.base import Tool

FILE_MODE = 0o644


def next_free_path(path: Path) -> Path:
    """
    Return ``path`` if nothing exists there, otherwise the first free sibling.

    Candidates insert ``_1``, ``_2``, ... before the extension, so
    ``report.txt`` is followed by ``report_1.txt`` then ``report_2.txt``.
    The extension starts at the last dot of the name, so ``.env`` is all
    extension and is followed by ``_1.env``.
    """
    base, ext = split_ext(path.name)
    candidate = path
    index = 0
    while candidate.exists():
        index += 1
        candidate = path.with_name(f"{base}_{index}{ext}")
    return candidate


def split_ext(name: str) -> tuple[str, str]:
    """Split ``name`` at its last dot; ``ext`` keeps the dot and is empty without one."""
    dot = name.rfind(".")
    if dot == -1:
        return name, ""
    return name[:dot], name[dot:]


class ReadFileTool(Tool):
    """Read a text file."""

    def __init__(self, workspace: Path) -> None:
        self._workspace = workspace

    @property
    def name(self) -> str:
        return "read_file"

    @property
    def description(self) -> str:
        return "Read the contents of a file at the given relative path."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "description": "Relative file path",
                    "minLength": 1,
                },
            },
            "required": ["path"],
        }

    async def execute(self, *, path: str, **kwargs: Any) -> str:
        target = _resolve(path, self._workspace)
        if not target.exists():
            return f"Error: file not found: {path}"
        if not target.is_file():
            return f"Error: not a file: {path}"

        try:
            return target.read_bytes().decode("utf-8")
        except UnicodeDecodeError:
            return f"Error: cannot read binary file: {path}"
        except OSError as e:
            return f"Error reading file: {e}"


class WriteFileTool(Tool):
    """Write a new file, never replacing an existing one."""

    def __init__(self, workspace: Path) -> None:
        self._workspace = workspace

    @property
    def name(self) -> str:
        return "write_file"

    @property
    def description(self) -> str:
        return (
            "Write content to a new file at the given path. If a file already "
            "exists there, a numbered name such as notes_1.txt is used instead; "
            "the result names the file actually written."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "description": "Relative file path",
                    "minLength": 1,
                },
                "content": {
                    "type": "string",
                    "description": "Content to write to the file",
                },
            },
            "required": ["path", "content"],
        }

    async def execute(self, *, path: str, content: str, **kwargs: Any) -> str:
        if not path.strip():
            return "Error: path must not be empty"

        requested = Path(path).expanduser()
        if requested.name in ("", ".", "..") or path.endswith(("/", os.sep)):
            return f"Error: path does not name a file: {path}"

        try:
            target = next_free_path(_resolve(path, self._workspace))
            written = requested.with_name(target.name)
            target.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_EXCL, FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except (OSError, ValueError) as e:
            return f"Error: {e}"

        logger.debug(f"WriteFileTool: wrote {len(content)} chars to {target}")
        return f"Successfully wrote to {written}"


def _resolve(path: str, workspace: Path) -> Path:
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = workspace / p
    return p
