"""OpenAI-compatible chat provider."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence

from openai import AsyncOpenAI

from ..config import ModelConfig
from ..errors import ProviderError
from ..types import (
    ChatChoice,
    ChatMessage,
    ChatResponse,
    ChatStreamChunk,
    ChatStreamDelta,
    ChatUsage,
    Message,
    message_to_dict,
)
from .base import BaseChatProvider


def _usage(raw) -> ChatUsage | None:
    if not raw:
        return None
    return ChatUsage(
        prompt_tokens=raw.prompt_tokens or 0,
        completion_tokens=raw.completion_tokens or 0,
        total_tokens=raw.total_tokens or 0,
    )


class OpenAIProvider(BaseChatProvider):
    """Works with any endpoint speaking the OpenAI chat-completions API.

    ``reasoning_content`` deltas (DeepSeek reasoner and similar) are surfaced
    as ``reasoning``.
    """

    name = "openai"
    supports_streaming = True

    def __init__(self, config: ModelConfig, client: AsyncOpenAI | None = None) -> None:
        self._client = client or AsyncOpenAI(api_key=config.api_key, base_url=config.base_url)
        self._model = config.model
        self._temperature = config.temperature
        self._max_tokens = config.max_tokens
        self._embedding_model = config.embedding_model or config.model

    def _request(self, messages: list[Message]) -> dict:
        kwargs: dict = {
            "model": self._model,
            "messages": [message_to_dict(m) for m in messages],
            "temperature": self._temperature,
        }
        if self._max_tokens:
            kwargs["max_tokens"] = self._max_tokens
        return kwargs

    async def _do_chat(self, messages: list[Message]) -> ChatResponse:
        resp = await self._client.chat.completions.create(**self._request(messages))
        choices = [
            ChatChoice(
                index=ch.index,
                message=ChatMessage(
                    role=ch.message.role or "assistant",
                    content=ch.message.content or "",
                    reasoning=getattr(ch.message, "reasoning_content", None) or "",
                ),
                finish_reason=ch.finish_reason or "stop",
            )
            for ch in resp.choices
        ]
        return ChatResponse(
            id=resp.id or "", model=resp.model or self._model,
            choices=choices, usage=_usage(resp.usage),
        )

    async def _do_stream(self, messages: list[Message]) -> AsyncIterator[ChatStreamChunk]:
        kwargs = self._request(messages)
        kwargs["stream"] = True
        kwargs["stream_options"] = {"include_usage": True}
        stream = await self._client.chat.completions.create(**kwargs)
        try:
            async for chunk in stream:
                usage = _usage(getattr(chunk, "usage", None))
                if not chunk.choices:
                    if usage:
                        yield ChatStreamChunk(usage=usage)
                    continue
                choice = chunk.choices[0]
                delta = choice.delta
                yield ChatStreamChunk(
                    delta=ChatStreamDelta(
                        content=(delta.content if delta else None) or "",
                        reasoning=getattr(delta, "reasoning_content", None) or "",
                    ),
                    usage=usage,
                    finish_reason=choice.finish_reason,
                )
        finally:
            close = getattr(stream, "close", None)
            if close is not None:
                await close()

    async def embeddings(self, texts: Sequence[str]) -> list[list[float]]:
        try:
            resp = await self._client.embeddings.create(
                model=self._embedding_model, input=list(texts)
            )
        except Exception as e:
            raise ProviderError("PROVIDER_ERROR", self.name, f"embeddings failed: {e}", e) from e
        if not resp.data:
            raise ProviderError("PROVIDER_EMPTY", self.name, "no embedding data returned")
        return [list(d.embedding) for d in resp.data]
