"""Token usage and timing for a single run."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from datetime import datetime

import tiktoken

from ..types import ChatUsage, Message

logger = logging.getLogger(__name__)


class TokenCounter:
    """tiktoken-backed counter; estimates ``len // 4`` if the encoding can't load."""

    def __init__(self, encoding: str = "cl100k_base") -> None:
        self.encoding_name = encoding
        self._encoder = None
        self._loaded = False

    def _encoder_or_none(self):
        if not self._loaded:
            self._loaded = True
            try:
                self._encoder = tiktoken.get_encoding(self.encoding_name)
            except Exception as e:
                logger.warning("tiktoken encoding %s unavailable, estimating: %s", self.encoding_name, e)
        return self._encoder

    def count(self, text: str) -> int:
        if not text:
            return 0
        encoder = self._encoder_or_none()
        if encoder is None:
            return len(text) // 4
        return len(encoder.encode(text, disallowed_special=()))

    def count_messages(self, messages: Iterable[Message]) -> int:
        return sum(self.count(m.content) for m in messages)


@dataclass
class RunMetadata:
    conversation_id: str | None = None
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    duration: float = 0.0
    start_time: datetime | None = None
    end_time: datetime | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class UsageTracker:
    """Accumulates per-run counts.

    Provider-reported usage wins. Without it, the prompt is estimated once
    from the user and system messages at run start and each model output
    is estimated as completion.
    """

    counter: TokenCounter = field(default_factory=TokenCounter)
    metadata: RunMetadata = field(default_factory=RunMetadata)
    _estimated_prompt: int = 0
    _reported: bool = False
    _started: float = 0.0

    def start(
        self,
        messages: Iterable[Message],
        conversation_id: str | None = None,
        pending_input: str = "",
    ) -> None:
        self.metadata = RunMetadata(conversation_id=conversation_id, start_time=datetime.now())
        self._reported = False
        self._started = time.perf_counter()
        self._estimated_prompt = self.counter.count_messages(
            m for m in messages if m.role in ("user", "system")
        ) + self.counter.count(pending_input)
        self.metadata.prompt_tokens = self._estimated_prompt
        self._sync_total()

    def record(self, output: str, usage: ChatUsage | None = None) -> None:
        md = self.metadata
        if usage is not None and (usage.prompt_tokens or usage.completion_tokens):
            if not self._reported:
                # drop estimates once the provider starts reporting
                self._reported = True
                md.prompt_tokens = 0
                md.completion_tokens = 0
            md.prompt_tokens += usage.prompt_tokens
            md.completion_tokens += usage.completion_tokens
        elif not self._reported:
            md.completion_tokens += self.counter.count(output)
        self._sync_total()

    def finish(self) -> RunMetadata:
        md = self.metadata
        md.end_time = datetime.now()
        md.duration = time.perf_counter() - self._started
        return md

    def _sync_total(self) -> None:
        self.metadata.total_tokens = self.metadata.prompt_tokens + self.metadata.completion_tokens

    def token_usage(self) -> dict[str, int]:
        md = self.metadata
        return {
            "total_tokens": md.total_tokens,
            "prompt_tokens": md.prompt_tokens,
            "completion_tokens": md.completion_tokens,
        }
