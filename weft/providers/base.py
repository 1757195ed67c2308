"""Base chat provider. Subclass and implement _do_chat/_do_stream."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence

from ..errors import ProviderError
from ..types import ChatResponse, ChatStreamChunk, Message

logger = logging.getLogger(__name__)


class BaseChatProvider:
    """Wraps backend failures into ``ProviderError``.

    There is no retry: a failed model call ends the run.
    """

    name = "base"
    supports_streaming = False

    async def chat(self, messages: Sequence[Message]) -> ChatResponse:
        try:
            return await self._do_chat(list(messages))
        except (ProviderError, asyncio.CancelledError):
            raise
        except Exception as e:
            logger.error("chat request to %s failed: %s", self.name, e)
            raise ProviderError(
                "PROVIDER_ERROR", self.name, f"failed to get LLM response: {e}", e
            ) from e

    async def chat_stream(self, messages: Sequence[Message]) -> AsyncIterator[ChatStreamChunk]:
        try:
            async for chunk in self._do_stream(list(messages)):
                yield chunk
        except (ProviderError, asyncio.CancelledError):
            raise
        except Exception as e:
            logger.error("stream from %s failed: %s", self.name, e)
            raise ProviderError("PROVIDER_STREAM", self.name, f"stream error: {e}", e) from e

    # -- Override these --

    async def _do_chat(self, messages: list[Message]) -> ChatResponse:
        raise NotImplementedError

    async def _do_stream(self, messages: list[Message]) -> AsyncIterator[ChatStreamChunk]:
        raise NotImplementedError
        yield  # pragma: no cover
