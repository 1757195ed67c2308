"""
Incremental delivery

Streams narration to the caller while the model is still talking, and
withholds anything from the action marker onward so partial JSON never
reaches the caller as text.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ..errors import ProviderError, WeftError
from ..types import (
    StreamChunk,
    content_chunk,
    done_chunk,
    reasoning_chunk,
    supports_streaming,
)
from .codec import STREAM_MARKER, Action, ActionKind
from .controller import IterationController, LoopState

logger = logging.getLogger(__name__)

Emit = Callable[[StreamChunk], Awaitable[None]]


class MarkerScanner:
    """Splits a live content stream into forwardable narration and withheld payload.

    ``forwarded + withheld == full_content`` holds at every point after
    ``flush``. With ``passthrough`` set every delta is forwarded verbatim.
    """

    def __init__(self, marker: str = STREAM_MARKER, passthrough: bool = False) -> None:
        self.marker = marker
        self.passthrough = passthrough
        self.pending = ""
        self.marker_found = False
        self._parts: list[str] = []

    @property
    def full_content(self) -> str:
        return "".join(self._parts)

    @property
    def withheld(self) -> str:
        return self.pending if self.marker_found else ""

    @property
    def forwarded(self) -> str:
        """Everything released to the caller so far."""
        if self.passthrough:
            return self.full_content
        return self.full_content[: len(self.full_content) - len(self.pending)]

    def feed(self, delta: str) -> str:
        """Accept a delta; return the text now safe to forward (maybe empty)."""
        if not delta:
            return ""
        self._parts.append(delta)
        if self.passthrough:
            return delta
        self.pending += delta
        if self.marker_found:
            return ""

        idx = self.pending.find(self.marker)
        if idx != -1:
            out, self.pending = self.pending[:idx], self.pending[idx:]
            self.marker_found = True
            return out

        # the marker can only start inside the last len(marker) - 1 chars
        if len(self.pending) > len(self.marker):
            keep = len(self.marker) - 1
            out, self.pending = self.pending[:-keep], self.pending[-keep:]
            return out
        return ""

    def flush(self) -> str:
        """End of stream: release leftover narration, keep a found payload."""
        if self.passthrough or self.marker_found:
            return ""
        out, self.pending = self.pending, ""
        return out


def _dumps(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def tool_call_chunk(action: Action) -> StreamChunk:
    payload = action.to_payload()
    return StreamChunk(content=_dumps(payload), kind="tool_call", payload=payload)


def tool_result_chunk(
    action: Action, result: str = "", error: Exception | None = None
) -> StreamChunk:
    message = ""
    if error is not None:
        message = error.message if isinstance(error, WeftError) else str(error)
    payload = {
        "action": "tool_result",
        "tool": action.tool if action.kind is ActionKind.CALL_TOOL else action.skill,
        "args": action.args,
        "result": result,
        "error": error is not None,
        "message": message,
    }
    return StreamChunk(content=_dumps(payload), kind="tool_result", payload=payload)


def delimiter_chunk() -> StreamChunk:
    return StreamChunk(content="\n", kind="delimiter")


class DeliveryController:
    """Drives an ``IterationController`` with streamed model calls.

    Chunks go to ``emit``. Errors propagate to the caller, which turns them
    into the single terminal error chunk.
    """

    def __init__(self, controller: IterationController, debug: bool = False) -> None:
        self.controller = controller
        self.debug = debug

    async def run(self, text: str, emit: Emit) -> None:
        ctl = self.controller
        await ctl.begin(text)
        streaming = supports_streaming(ctl.provider)
        if not streaming:
            logger.debug("%s does not stream, falling back to chat", ctl.provider_name)

        while True:
            if streaming:
                scanner = await self._stream_once(emit)
                output = scanner.full_content
            else:
                scanner = None
                output = await ctl.call_model()

            action = await ctl.parse(output)
            if action.is_terminal:
                await self._deliver_answer(action, scanner, emit)
                await emit(done_chunk())
                return

            await emit(tool_call_chunk(action))
            try:
                result = await ctl.dispatch(action)
            except WeftError as e:
                await emit(tool_result_chunk(action, error=e))
                raise
            await emit(tool_result_chunk(action, result=result))
            await emit(delimiter_chunk())

    async def _stream_once(self, emit: Emit) -> MarkerScanner:
        ctl = self.controller
        ctl.next_iteration()
        ctl.state = LoopState.AWAITING_MODEL
        scanner = MarkerScanner(passthrough=self.debug)
        usage = None
        stream = None
        try:
            stream = ctl.provider.chat_stream(ctl.log.snapshot())
            async for chunk in stream:
                if chunk.delta.reasoning:
                    await emit(reasoning_chunk(chunk.delta.reasoning))
                out = scanner.feed(chunk.delta.content)
                if out:
                    await emit(content_chunk(out))
                if chunk.usage is not None:
                    usage = chunk.usage
        except WeftError:
            ctl.state = LoopState.FAILED
            raise
        except Exception as e:
            ctl.state = LoopState.FAILED
            logger.error("stream from %s failed: %s", ctl.provider_name, e)
            raise ProviderError(
                "PROVIDER_STREAM", ctl.provider_name, f"stream error: {e}", e
            ) from e
        except BaseException:
            ctl.state = LoopState.FAILED
            raise
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

        tail = scanner.flush()
        if tail:
            await emit(content_chunk(tail))
        ctl.record(scanner.full_content, usage)
        return scanner

    async def _deliver_answer(
        self, action: Action, scanner: MarkerScanner | None, emit: Emit
    ) -> None:
        if scanner is None:
            if action.answer:
                await emit(content_chunk(action.answer))
            return
        if scanner.passthrough or not scanner.marker_found:
            return
        # the caller already has the narration before the marker
        sent = scanner.forwarded
        if not action.answer.startswith(sent):
            logger.warning("streamed narration diverged from the final answer")
            return
        rest = action.answer[len(sent):]
        if rest:
            await emit(content_chunk(rest))
