"""
Session

The public surface: one provider, an optional tool set, skills and
memory, and a message log that persists across calls.

    session = Session(provider, tools=[add], conversation_id="u-1")
    answer = await session.run("what is 2 + 2?")

    async for chunk in session.stream("and 3 + 3?"):
        if chunk.is_narration:
            print(chunk.content, end="")

Calls must be serialized per session; runs share the log unguarded.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence

from ..config import AgentConfig
from ..memory import BufferMemory
from ..skills import Skill, SkillOrchestrator
from ..types import ChatProvider, ConversationMemory, Message, StreamChunk, Tool, error_chunk
from .controller import IterationController
from .delivery import DeliveryController
from .dispatcher import ToolDispatcher
from .log import MessageLog
from .prompt import build_system_prompt
from .usage import RunMetadata, UsageTracker

logger = logging.getLogger(__name__)

_END = object()


class Session:
    """A conversational agent bound to one message log.

    Keyword arguments override the matching ``AgentConfig`` fields. History
    for ``conversation_id`` is loaded before the first run, or eagerly via
    ``await Session.create(...)`` / ``await session.load_history()``.
    """

    def __init__(
        self,
        provider: ChatProvider,
        config: AgentConfig | None = None,
        *,
        tools: Sequence[Tool] | None = None,
        skills: Sequence[Skill] | None = None,
        memory: ConversationMemory | None = None,
        conversation_id: str | None = None,
        max_iterations: int | None = None,
        debug: bool | None = None,
        system_prompt: str | None = None,
    ) -> None:
        overrides = {
            "conversation_id": conversation_id,
            "max_iterations": max_iterations,
            "debug": debug,
            "system_prompt": system_prompt,
        }
        base = (config or AgentConfig()).model_dump()
        base.update({k: v for k, v in overrides.items() if v is not None})
        self.config = AgentConfig.model_validate(base)

        self.provider = provider
        self.tools: list[Tool] = list(tools or [])
        self.skills: list[Skill] = list(skills or [])
        self.memory: ConversationMemory = memory if memory is not None else BufferMemory()
        self._dispatcher = ToolDispatcher(self.tools)
        self._orchestrator = SkillOrchestrator(self.skills) if self.skills else None
        self._usage = UsageTracker()

        prompts = []
        if self.tools or self.skills:
            prompts.append(build_system_prompt(self.tools, self.skills))
        if self.config.system_prompt:
            prompts.append(self.config.system_prompt)
        self._log = MessageLog(self.memory, self.config.conversation_id, prompts)
        self._history_loaded = False

    @classmethod
    async def create(cls, provider: ChatProvider, config: AgentConfig | None = None, **kwargs) -> Session:
        session = cls(provider, config, **kwargs)
        await session.load_history()
        return session

    # -- Properties --

    @property
    def conversation_id(self) -> str | None:
        return self._log.conversation_id

    @property
    def max_iterations(self) -> int:
        return self.config.max_iterations

    @property
    def messages(self) -> list[Message]:
        return self._log.snapshot()

    def orchestrator(self) -> SkillOrchestrator | None:
        return self._orchestrator

    def metadata(self) -> RunMetadata:
        return self._usage.metadata

    def token_usage(self) -> dict[str, int]:
        return self._usage.token_usage()

    # -- History --

    async def load_history(self) -> int:
        if self._history_loaded:
            return 0
        self._history_loaded = True
        return await self._log.load_history()

    async def set_conversation_id(self, conversation_id: str | None) -> None:
        """Switch threads: keep system messages, reload history for the new id."""
        self.config.conversation_id = conversation_id
        self._history_loaded = True
        loaded = await self._log.switch_conversation(conversation_id)
        logger.info("switched to conversation %s (%d messages loaded)", conversation_id, loaded)

    async def clear_history(self) -> None:
        await self._log.clear()

    def add_system_prompt(self, text: str) -> None:
        self._log.add_system(text)

    # -- Runs --

    def _controller(self) -> IterationController:
        return IterationController(
            self.provider,
            self._log,
            self._dispatcher,
            self.config.max_iterations,
            orchestrator=self._orchestrator,
            usage=self._usage,
        )

    def _start_usage(self, text: str) -> None:
        self._usage.start(self._log.snapshot(), self.conversation_id, pending_input=text)

    async def run(self, text: str) -> str:
        """Run the loop to a final answer. Errors propagate as ``WeftError``."""
        await self.load_history()
        self._start_usage(text)
        try:
            return await self._controller().run(text)
        finally:
            self._usage.finish()

    async def stream(self, text: str) -> AsyncIterator[StreamChunk]:
        """Yield chunks until exactly one ``done`` or ``error`` chunk.

        Closing the iterator early cancels the in-flight model call.
        """
        await self.load_history()
        self._start_usage(text)
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.config.stream_buffer_size)
        delivery = DeliveryController(self._controller(), debug=self.config.debug)

        async def produce() -> None:
            try:
                await delivery.run(text, queue.put)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error("stream run failed: %s", e)
                await queue.put(error_chunk(e))
            finally:
                self._usage.finish()
            await queue.put(_END)

        producer = asyncio.create_task(produce())
        try:
            while True:
                item = await queue.get()
                if item is _END:
                    break
                yield item
        finally:
            if not producer.done():
                producer.cancel()
            await asyncio.gather(producer, return_exceptions=True)
