"""The message log: the ordered, role-tagged conversation a session owns.

System messages form a contiguous prefix established at session creation
(or on conversation switch). Everything after it is mirrored to the
memory store, best-effort: a failing store is logged and never aborts a
turn.
"""

from __future__ import annotations

import logging

from ..types import (
    AssistantMessage,
    ConversationMemory,
    Message,
    SystemMessage,
    UserMessage,
)

logger = logging.getLogger(__name__)


def tool_result_text(tool_name: str, result: str) -> str:
    return f"Tool {tool_name} returned: {result}"


class MessageLog:
    """Append-only within a run; not safe for concurrent runs."""

    def __init__(
        self,
        memory: ConversationMemory | None = None,
        conversation_id: str | None = None,
        system_prompts: list[str] | None = None,
    ) -> None:
        self.memory = memory
        self.conversation_id = conversation_id
        self._messages: list[Message] = [SystemMessage(content=p) for p in system_prompts or []]

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def system_prefix_length(self) -> int:
        n = 0
        for m in self._messages:
            if m.role != "system":
                break
            n += 1
        return n

    @property
    def persistent(self) -> bool:
        return self.memory is not None and bool(self.conversation_id)

    def snapshot(self) -> list[Message]:
        return list(self._messages)

    def add_system(self, text: str) -> None:
        """Extend the system prefix. Never mirrored to memory."""
        self._messages.insert(self.system_prefix_length, SystemMessage(content=text))

    async def append_user(self, text: str) -> Message:
        return await self._append(UserMessage(content=text))

    async def append_assistant(self, text: str) -> Message:
        return await self._append(AssistantMessage(content=text))

    async def append_tool_result(self, tool_name: str, result: str) -> Message:
        return await self._append(UserMessage(content=tool_result_text(tool_name, result)))

    async def _append(self, message: Message) -> Message:
        self._messages.append(message)
        if self.persistent:
            try:
                await self.memory.save_messages(self.conversation_id, [message])
            except Exception as e:
                logger.warning(
                    "saving %s message for conversation %s failed: %s",
                    message.role, self.conversation_id, e,
                )
        return message

    async def load_history(self) -> int:
        """Append stored history after the system prefix. Returns the count loaded."""
        if not self.persistent:
            return 0
        try:
            history = await self.memory.load_messages(self.conversation_id)
        except Exception as e:
            logger.warning("loading history for %s failed: %s", self.conversation_id, e)
            return 0
        # stored system turns would break the contiguous prefix
        history = [m for m in history or [] if m.role != "system"]
        self._messages.extend(history)
        return len(history)

    def reset_to_system_prefix(self) -> None:
        del self._messages[self.system_prefix_length:]

    async def switch_conversation(self, conversation_id: str | None) -> int:
        """Keep the system prefix, drop the rest, reload for the new id.

        A failed load leaves only the system prefix.
        """
        self.reset_to_system_prefix()
        self.conversation_id = conversation_id
        return await self.load_history()

    async def clear(self) -> None:
        """Clear stored history for the current id and drop non-system turns."""
        if self.persistent:
            try:
                await self.memory.clear_messages(self.conversation_id)
            except Exception as e:
                logger.warning("clearing history for %s failed: %s", self.conversation_id, e)
        self.reset_to_system_prefix()
