"""
Iteration controller

The ReAct loop as an explicit state machine:

    AWAITING_MODEL -> PARSING -> DISPATCHING -> AWAITING_MODEL
                              -> DONE (answer)
    any state      -> FAILED (error)

The iteration counter is checked before every model call, so it never
exceeds ``max_iterations``. A controller serves one run; a new caller
message gets a fresh controller over the same log.
"""

from __future__ import annotations

import logging
from enum import Enum

from ..errors import (
    IterationExceededError,
    ProviderEmptyResponseError,
    ProviderError,
    WeftError,
)
from ..skills import SkillOrchestrator
from ..types import ChatProvider
from .codec import Action, ActionKind, decode_action
from .dispatcher import ToolDispatcher
from .log import MessageLog
from .usage import UsageTracker

logger = logging.getLogger(__name__)


class LoopState(str, Enum):
    AWAITING_MODEL = "awaiting_model"
    PARSING = "parsing"
    DISPATCHING = "dispatching"
    DONE = "done"
    FAILED = "failed"


class IterationController:
    def __init__(
        self,
        provider: ChatProvider,
        log: MessageLog,
        dispatcher: ToolDispatcher,
        max_iterations: int,
        orchestrator: SkillOrchestrator | None = None,
        usage: UsageTracker | None = None,
    ) -> None:
        self.provider = provider
        self.log = log
        self.dispatcher = dispatcher
        self.max_iterations = max_iterations
        self.orchestrator = orchestrator
        self.usage = usage
        self.iterations = 0
        self.state = LoopState.AWAITING_MODEL

    @property
    def provider_name(self) -> str:
        return getattr(self.provider, "name", type(self.provider).__name__)

    async def begin(self, text: str) -> None:
        await self.log.append_user(text)
        self.state = LoopState.AWAITING_MODEL

    def next_iteration(self) -> int:
        """Count one model call, failing if the budget is spent."""
        if self.iterations >= self.max_iterations:
            self.state = LoopState.FAILED
            logger.warning("stopping after %d model calls without a final answer", self.iterations)
            raise IterationExceededError(self.max_iterations)
        self.iterations += 1
        logger.debug("iteration %d/%d", self.iterations, self.max_iterations)
        return self.iterations

    async def call_model(self) -> str:
        self.next_iteration()
        try:
            response = await self.provider.chat(self.log.snapshot())
        except WeftError:
            self.state = LoopState.FAILED
            raise
        except Exception as e:
            self.state = LoopState.FAILED
            logger.error("chat request to %s failed: %s", self.provider_name, e)
            raise ProviderError(
                "PROVIDER_ERROR", self.provider_name, f"failed to get LLM response: {e}", e
            ) from e
        content = response.content
        if content is None:
            self.state = LoopState.FAILED
            raise ProviderEmptyResponseError(self.provider_name)
        self.record(content, response.usage)
        return content

    def record(self, output: str, usage=None) -> None:
        if self.usage is not None:
            self.usage.record(output, usage)

    async def parse(self, output: str) -> Action:
        """Log the model output and decode it."""
        await self.log.append_assistant(output)
        self.state = LoopState.PARSING
        try:
            action = decode_action(output, allow_skills=self.orchestrator is not None)
        except Exception:
            self.state = LoopState.FAILED
            raise
        if action.is_terminal:
            self.state = LoopState.DONE
        else:
            self.state = LoopState.DISPATCHING
        return action

    async def dispatch(self, action: Action) -> str:
        """Run a tool or skill action; the result lands in the log.

        Returns the raw tool result, or the rendered skill instructions.
        """
        try:
            if action.kind is ActionKind.USE_SKILL:
                instructions = self.orchestrator.instructions(action.skill or "", action.args)
                await self.log.append_user(instructions)
                result = instructions
            else:
                result = await self.dispatcher.invoke(action.tool, action.args)
                await self.log.append_tool_result(action.tool, result)
        except Exception:
            self.state = LoopState.FAILED
            raise
        self.state = LoopState.AWAITING_MODEL
        return result

    async def run(self, text: str) -> str:
        await self.begin(text)
        while True:
            output = await self.call_model()
            action = await self.parse(output)
            if action.is_terminal:
                return action.answer
            await self.dispatch(action)
