"""Core type definitions, re-exported from sub-modules."""

from .messages import (
    Message, Role, SystemMessage, UserMessage, AssistantMessage,
    make_message, message_to_dict, message_from_dict,
)
from .llm import (
    ChatUsage, ChatMessage, ChatChoice, ChatResponse, ChatStreamDelta, ChatStreamChunk,
    ChatProvider, ChatStreamer, Embedder, supports_streaming,
)
from .tools import Tool, ToolSchema
from .memory import ConversationMemory
from .events import (
    ChunkKind, StreamChunk, content_chunk, reasoning_chunk, done_chunk, error_chunk,
)

__all__ = [
    "Message", "Role", "SystemMessage", "UserMessage", "AssistantMessage",
    "make_message", "message_to_dict", "message_from_dict",
    "ChatUsage", "ChatMessage", "ChatChoice", "ChatResponse", "ChatStreamDelta",
    "ChatStreamChunk", "ChatProvider", "ChatStreamer", "Embedder", "supports_streaming",
    "Tool", "ToolSchema",
    "ConversationMemory",
    "ChunkKind", "StreamChunk", "content_chunk", "reasoning_chunk", "done_chunk", "error_chunk",
]
