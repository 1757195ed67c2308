"""In-process conversation memory."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from ..types import Message, make_message

DEFAULT_CONVERSATION = "default"


def conversation_key(conversation_id: str | None) -> str:
    return conversation_id or DEFAULT_CONVERSATION


class BufferMemory:
    """Keeps history in a dict keyed by conversation id.

    Suitable for single-process, short-lived conversations. This is the
    memory a Session uses when none is supplied.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._conversations: dict[str, list[Message]] = {}

    async def load_messages(self, conversation_id: str) -> list[Message]:
        async with self._lock:
            stored = self._conversations.get(conversation_key(conversation_id), [])
            return [make_message(m.role, m.content) for m in stored]

    async def save_messages(self, conversation_id: str, messages: Sequence[Message]) -> None:
        async with self._lock:
            bucket = self._conversations.setdefault(conversation_key(conversation_id), [])
            bucket.extend(make_message(m.role, m.content) for m in messages)

    async def clear_messages(self, conversation_id: str) -> None:
        async with self._lock:
            self._conversations.pop(conversation_key(conversation_id), None)

    def conversations(self) -> list[str]:
        return list(self._conversations)
