"""Question/answer pair memory with keyword recall.

Stores each user turn together with the assistant turn that follows it,
the layout used by retrieval-oriented backends.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..types import AssistantMessage, Message, UserMessage
from .buffer import conversation_key


@dataclass
class TurnPair:
    user_input: str
    llm_output: str
    created_at: float = field(default_factory=time.time)


def pair_turns(
    messages: Sequence[Message], pending_input: str = ""
) -> tuple[list[TurnPair], str]:
    """Pair user turns with the next assistant turn.

    ``pending_input`` is an unpaired user turn carried over from an earlier
    batch; the returned string is the one to carry into the next batch.
    """
    pairs: list[TurnPair] = []
    current = pending_input
    for m in messages:
        if m.role == "user":
            current = m.content
        elif m.role == "assistant" and current and m.content:
            pairs.append(TurnPair(user_input=current, llm_output=m.content))
            current = ""
    return pairs, current


class PairedMemory:
    """Conversation memory storing turn pairs.

    Unpaired user input is tracked per conversation on the instance, so
    concurrent sessions never see each other's turns.
    """

    def __init__(self, max_pairs: int | None = None) -> None:
        self.max_pairs = max_pairs
        self._lock = asyncio.Lock()
        self._pairs: dict[str, list[TurnPair]] = {}
        self._pending: dict[str, str] = {}

    async def load_messages(self, conversation_id: str) -> list[Message]:
        async with self._lock:
            pairs = list(self._pairs.get(conversation_key(conversation_id), []))
        return _flatten(pairs)

    async def save_messages(self, conversation_id: str, messages: Sequence[Message]) -> None:
        key = conversation_key(conversation_id)
        async with self._lock:
            pairs, pending = pair_turns(messages, self._pending.get(key, ""))
            self._pending[key] = pending
            if pairs:
                bucket = self._pairs.setdefault(key, [])
                bucket.extend(pairs)
                if self.max_pairs is not None and len(bucket) > self.max_pairs:
                    del bucket[: len(bucket) - self.max_pairs]

    async def clear_messages(self, conversation_id: str) -> None:
        key = conversation_key(conversation_id)
        async with self._lock:
            self._pairs.pop(key, None)
            self._pending.pop(key, None)

    async def get_relevant_messages(
        self, conversation_id: str, query: str, limit: int = 5
    ) -> list[Message]:
        """Keyword-scored recall of past pairs, best match first."""
        async with self._lock:
            pairs = list(self._pairs.get(conversation_key(conversation_id), []))
        q_words = [w for w in query.lower().split() if w]
        if not q_words:
            return _flatten(pairs[-limit:])
        scored = []
        for p in pairs:
            text = f"{p.user_input} {p.llm_output}".lower()
            hits = sum(1 for w in q_words if w in text)
            if hits:
                scored.append((hits, p.created_at, p))
        scored.sort(key=lambda s: (s[0], s[1]), reverse=True)
        return _flatten([p for _, _, p in scored[:limit]])


def _flatten(pairs: Sequence[TurnPair]) -> list[Message]:
    out: list[Message] = []
    for p in pairs:
        out.append(UserMessage(content=p.user_input))
        out.append(AssistantMessage(content=p.llm_output))
    return out
