"""Memory store types."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .messages import Message


@runtime_checkable
class ConversationMemory(Protocol):
    """Persistent conversation history keyed by conversation id.

    Backends raise on failure; callers treat every operation as best-effort.
    """

    async def load_messages(self, conversation_id: str) -> list[Message]: ...

    async def save_messages(
        self, conversation_id: str, messages: Sequence[Message]
    ) -> None: ...

    async def clear_messages(self, conversation_id: str) -> None: ...
