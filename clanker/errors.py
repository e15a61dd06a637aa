"""Exceptions raised by clanker."""


class ClankerError(Exception):
    """Base class for all clanker errors."""


class ConfigError(ClankerError):
    """Raised when startup configuration is invalid."""


class DuplicateToolError(ConfigError):
    """Raised when two tools share a name in one registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate tool name: {name!r}")
        self.name = name


class InferenceError(ClankerError):
    """Raised when the inference client fails. Aborts the chat session."""


class ConversationError(ClankerError):
    """Raised when a turn would break conversation ordering."""
