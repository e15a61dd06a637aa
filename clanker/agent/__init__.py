"""Agent core: conversation, loop and tools."""

from clanker.agent.conversation import Conversation, FunctionCall, FunctionResult, Role, Turn
from clanker.agent.loop import Agent, iter_reader, stdin_reader

__all__ = [
    "Agent",
    "Conversation",
    "FunctionCall",
    "FunctionResult",
    "Role",
    "Turn",
    "iter_reader",
    "stdin_reader",
]
