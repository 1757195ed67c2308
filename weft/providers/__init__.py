"""Chat provider implementations."""

from ..types import ChatProvider, ChatStreamer, supports_streaming
from .base import BaseChatProvider
from .mock import ScriptedProvider, split_every
from .openai import OpenAIProvider
from .presets import (
    create_openai, create_deepseek, create_qwen, create_moonshot,
    create_ollama, create_vllm, create_custom,
)

__all__ = [
    "ChatProvider", "ChatStreamer", "supports_streaming",
    "BaseChatProvider", "OpenAIProvider", "ScriptedProvider", "split_every",
    "create_openai", "create_deepseek", "create_qwen", "create_moonshot",
    "create_ollama", "create_vllm", "create_custom",
]
