"""Model provider types.

Response shapes follow the OpenAI chat-completion layout so any
OpenAI-compatible backend maps onto them without translation.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from .messages import Message


@dataclass
class ChatUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass
class ChatMessage:
    role: str = "assistant"
    content: str = ""
    reasoning: str = ""


@dataclass
class ChatChoice:
    message: ChatMessage
    index: int = 0
    finish_reason: str = "stop"


@dataclass
class ChatResponse:
    choices: list[ChatChoice] = field(default_factory=list)
    usage: ChatUsage | None = None
    id: str = ""
    model: str = ""

    @property
    def content(self) -> str | None:
        if not self.choices:
            return None
        return self.choices[0].message.content


@dataclass
class ChatStreamDelta:
    content: str = ""
    reasoning: str = ""


@dataclass
class ChatStreamChunk:
    delta: ChatStreamDelta = field(default_factory=ChatStreamDelta)
    usage: ChatUsage | None = None
    finish_reason: str | None = None


@runtime_checkable
class ChatProvider(Protocol):
    name: str

    async def chat(self, messages: Sequence[Message]) -> ChatResponse: ...


@runtime_checkable
class ChatStreamer(Protocol):
    """Optional capability. Providers opt in with ``supports_streaming = True``."""

    supports_streaming: bool

    def chat_stream(self, messages: Sequence[Message]) -> AsyncIterator[ChatStreamChunk]: ...


@runtime_checkable
class Embedder(Protocol):
    async def embeddings(self, texts: Sequence[str]) -> list[list[float]]: ...


def supports_streaming(provider: object) -> bool:
    return bool(getattr(provider, "supports_streaming", False)) and callable(
        getattr(provider, "chat_stream", None)
    )
