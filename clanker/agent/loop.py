"""Agent loop: reads user input, calls the model, dispatches tool calls."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable, Iterable

from loguru import logger
from rich.console import Console
from rich.text import Text

from clanker.agent.conversation import Conversation, FunctionCall, Turn
from clanker.agent.tools.registry import ToolRegistry
from clanker.providers.base import LLMProvider, LLMResponse

InputSource = Callable[[], str | None]

NOT_EXECUTED = "Error: not executed; only one round of tool calls is run per message"


def stdin_reader() -> InputSource:
    """Read one line per call from stdin; ``None`` at end of input or on Ctrl-C."""

    def read() -> str | None:
        try:
            line = sys.stdin.readline()
        except KeyboardInterrupt:
            return None
        if not line:
            return None
        return line.rstrip("\r\n")

    return read


def iter_reader(lines: Iterable[str]) -> InputSource:
    """Serve lines from an iterable, then signal end of input."""
    iterator = iter(lines)

    def read() -> str | None:
        return next(iterator, None)

    return read


class Agent:
    """
    Terminal chat agent.

    Each user line produces one model call. If the model asks for tools,
    every call is executed in order, its result is appended, and the model
    gets exactly one more call to react. Tool calls in that second
    response are answered with an error result instead of being run.
    """

    def __init__(
        self,
        provider: LLMProvider,
        tools: ToolRegistry,
        get_user_message: InputSource,
        console: Console | None = None,
        model: str | None = None,
        max_tokens: int = 8192,
        temperature: float = 0.7,
    ) -> None:
        self.provider = provider
        self.tools = tools
        self.get_user_message = get_user_message
        self.console = console or Console(highlight=False)
        self.model = model or provider.get_default_model()
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._conversation = Conversation()

    @property
    def conversation(self) -> Conversation:
        return self._conversation

    @property
    def display_name(self) -> str:
        return self.model.rsplit("/", 1)[-1]

    async def run(self) -> None:
        """
        Chat until the input source is exhausted.

        Blank or whitespace-only lines are skipped: they add no user turn
        and make no model call.

        Raises:
            InferenceError: A model call failed; the session is over.
        """
        self.console.print(Text(f"Chat with {self.display_name} (use 'ctrl-c' to quit)"))
        logger.info(f"Session started: model={self.model}, tools={self.tools.names}")

        while True:
            self.console.print(Text.assemble(("You", "bold bright_blue"), ": "), end="")
            user_input = self.get_user_message()
            if user_input is None:
                self.console.print()
                break
            if not user_input.strip():
                continue

            await self._process_turn(user_input)

        logger.info(f"Session ended after {len(self._conversation)} turns")

    async def _process_turn(self, user_input: str) -> None:
        self._conversation.append(Turn.user(user_input))

        response = await self.infer()
        turn = self._append_model_turn(response)

        for call in turn.function_calls:
            args = json.dumps(call.arguments, ensure_ascii=False)
            self.console.print(Text.assemble(("Tool", "bold magenta"), f": {call.name}({args})"))
            result = await self.tools.execute(call.name, call.arguments)
            self._conversation.append(Turn.result(call, result))

        if turn.function_calls:
            response = await self.infer()
            turn = self._append_model_turn(response)
            # Follow-up calls are answered without running them so every
            # call in the history still has exactly one result.
            for call in turn.function_calls:
                logger.debug(f"Not executing follow-up tool call: {call.name}")
                self._conversation.append(Turn.result(call, NOT_EXECUTED))

        if turn.text:
            self.console.print(Text.assemble((self.display_name, "bold yellow"), f": {turn.text}"))

    async def infer(self) -> LLMResponse:
        """Send the whole conversation with the current tool declarations."""
        definitions = self.tools.get_definitions()
        return await self.provider.chat(
            messages=self._conversation.to_messages(),
            tools=definitions or None,
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )

    def _append_model_turn(self, response: LLMResponse) -> Turn:
        calls = [
            FunctionCall(id=tc.id, name=tc.name, arguments=tc.arguments)
            for tc in response.tool_calls
        ]
        turn = Turn.model(response.content, calls)
        self._conversation.append(turn)
        return turn
