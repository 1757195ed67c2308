"""The agent loop: message log, action codec, dispatch, delivery and the session."""

from .codec import (
    CALL_TOOL_MARKER,
    STREAM_MARKER,
    USE_SKILL_MARKER,
    Action,
    ActionKind,
    clean_json,
    decode_action,
)
from .controller import IterationController, LoopState
from .delivery import DeliveryController, MarkerScanner
from .dispatcher import ToolDispatcher
from .log import MessageLog, tool_result_text
from .prompt import build_system_prompt
from .session import Session
from .usage import RunMetadata, TokenCounter, UsageTracker

__all__ = [
    "CALL_TOOL_MARKER", "STREAM_MARKER", "USE_SKILL_MARKER",
    "Action", "ActionKind", "clean_json", "decode_action",
    "IterationController", "LoopState",
    "DeliveryController", "MarkerScanner",
    "ToolDispatcher",
    "MessageLog", "tool_result_text",
    "build_system_prompt",
    "Session",
    "RunMetadata", "TokenCounter", "UsageTracker",
]
