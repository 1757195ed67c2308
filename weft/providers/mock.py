"""
Scripted provider for tests and demos

Replays preset responses in order, no API key needed.

    provider = ScriptedProvider(['{"action":"call_tool","tool":"add","args":{}}', "4"])
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Sequence

from ..types import (
    ChatChoice,
    ChatMessage,
    ChatResponse,
    ChatStreamChunk,
    ChatStreamDelta,
    Message,
)
from .base import BaseChatProvider

Script = str | Exception


def split_every(size: int) -> Callable[[str], list[str]]:
    def _split(text: str) -> list[str]:
        return [text[i:i + size] for i in range(0, len(text), size)] or [""]
    return _split


class ScriptedProvider(BaseChatProvider):
    """Returns the next scripted response per call.

    An ``Exception`` entry is raised instead of answered; a ``None`` entry
    produces a response with no choices.
    """

    name = "scripted"

    def __init__(
        self,
        responses: Sequence[Script | None],
        streaming: bool = True,
        splitter: Callable[[str], list[str]] | None = None,
        reasoning: str = "",
    ) -> None:
        self._responses = list(responses)
        self.supports_streaming = streaming
        self._split = splitter or split_every(4)
        self._reasoning = reasoning
        self.calls: list[list[Message]] = []

    def _next(self, messages: list[Message]) -> Script | None:
        self.calls.append(list(messages))
        if not self._responses:
            raise RuntimeError("scripted provider exhausted")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def _do_chat(self, messages: list[Message]) -> ChatResponse:
        text = self._next(messages)
        if text is None:
            return ChatResponse(model=self.name)
        return ChatResponse(
            model=self.name,
            choices=[ChatChoice(message=ChatMessage(content=text, reasoning=self._reasoning))],
        )

    async def _do_stream(self, messages: list[Message]) -> AsyncIterator[ChatStreamChunk]:
        text = self._next(messages) or ""
        if self._reasoning:
            yield ChatStreamChunk(delta=ChatStreamDelta(reasoning=self._reasoning))
        for piece in self._split(text):
            yield ChatStreamChunk(delta=ChatStreamDelta(content=piece))
        yield ChatStreamChunk(finish_reason="stop")
