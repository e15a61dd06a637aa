"""Conversation history: turns exchanged between the user, the model and tools."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

from clanker.errors import ConversationError


class Role(str, Enum):
    USER = "user"
    MODEL = "model"
    FUNCTION = "function"


@dataclass(frozen=True)
class FunctionCall:
    """A model request to run a tool."""

    id: str
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FunctionResult:
    """The value a tool returned for one call."""

    call_id: str
    name: str
    result: str


@dataclass(frozen=True)
class Turn:
    """One entry in the conversation history."""

    role: Role
    text: str | None = None
    function_calls: tuple[FunctionCall, ...] = ()
    function_result: FunctionResult | None = None

    @classmethod
    def user(cls, text: str) -> Turn:
        return cls(role=Role.USER, text=text)

    @classmethod
    def model(cls, text: str | None, calls: list[FunctionCall] | None = None) -> Turn:
        return cls(role=Role.MODEL, text=text, function_calls=tuple(calls or ()))

    @classmethod
    def result(cls, call: FunctionCall, value: str) -> Turn:
        return cls(
            role=Role.FUNCTION,
            function_result=FunctionResult(call_id=call.id, name=call.name, result=value),
        )

    def to_message(self) -> dict[str, Any]:
        """Render as a chat-completions message."""
        if self.role is Role.USER:
            return {"role": "user", "content": self.text or ""}

        if self.role is Role.MODEL:
            message: dict[str, Any] = {"role": "assistant", "content": self.text or ""}
            if self.function_calls:
                message["tool_calls"] = [
                    {
                        "id": call.id,
                        "type": "function",
                        "function": {
                            "name": call.name,
                            "arguments": json.dumps(call.arguments, ensure_ascii=False),
                        },
                    }
                    for call in self.function_calls
                ]
            return message

        assert self.function_result is not None
        return {
            "role": "tool",
            "tool_call_id": self.function_result.call_id,
            "name": self.function_result.name,
            "content": self.function_result.result,
        }


class Conversation:
    """
    Append-only list of turns owned by a single agent.

    A function-result turn is accepted only while it answers a call from
    the most recent model turn, so results always sit directly after the
    model turn (and earlier results) they belong to.
    """

    def __init__(self) -> None:
        self._turns: list[Turn] = []

    def append(self, turn: Turn) -> None:
        if turn.role is Role.FUNCTION:
            self._check_result(turn)
        self._turns.append(turn)

    def _check_result(self, turn: Turn) -> None:
        answered: set[str] = set()
        for previous in reversed(self._turns):
            if previous.role is Role.FUNCTION:
                assert previous.function_result is not None
                answered.add(previous.function_result.call_id)
                continue
            if previous.role is Role.MODEL:
                pending = {call.id for call in previous.function_calls} - answered
                assert turn.function_result is not None
                if turn.function_result.call_id in pending:
                    return
            break
        raise ConversationError(
            "Function result must follow the model turn that requested it"
        )

    def to_messages(self) -> list[dict[str, Any]]:
        return [turn.to_message() for turn in self._turns]

    @property
    def last(self) -> Turn | None:
        return self._turns[-1] if self._turns else None

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(self._turns)

    def __getitem__(self, index: int) -> Turn:
        return self._turns[index]
