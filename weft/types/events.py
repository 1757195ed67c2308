"""Stream chunk types emitted by ``Session.stream``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

ChunkKind = Literal[
    "content", "reasoning", "tool_call", "tool_result", "delimiter", "done", "error"
]


@dataclass
class StreamChunk:
    """One unit of forward progress.

    ``content`` chunks are narration safe to show as-is. ``tool_call``,
    ``tool_result`` and ``delimiter`` chunks are structured notifications;
    their ``content`` holds a JSON rendering and ``payload`` the decoded data.
    A sequence ends with exactly one ``done`` or ``error`` chunk.
    """

    content: str = ""
    reasoning: str = ""
    done: bool = False
    error: Exception | None = None
    kind: ChunkKind = "content"
    payload: dict[str, Any] | None = None

    @property
    def is_narration(self) -> bool:
        return self.kind == "content"


def content_chunk(text: str) -> StreamChunk:
    return StreamChunk(content=text)


def reasoning_chunk(text: str) -> StreamChunk:
    return StreamChunk(reasoning=text, kind="reasoning")


def done_chunk() -> StreamChunk:
    return StreamChunk(done=True, kind="done")


def error_chunk(err: Exception) -> StreamChunk:
    return StreamChunk(error=err, kind="error")
