"""
Weft - a ReAct agent runtime
============================

A ``Session`` alternates between asking a model for the next step and
running the tool it picked, until the model answers.

## Map

- ``weft.agent``: ``Session``, the iteration loop, the action codec and
  streamed delivery.
- ``weft.providers``: OpenAI-compatible providers and presets
  (``create_deepseek``, ``create_ollama``, ...).
- ``weft.tools``: ``@tool``, ``define_tool`` and MCP-backed tools.
- ``weft.memory``: ``BufferMemory`` and ``PairedMemory``.
- ``weft.skills``: markdown skills the model can select.

## Quick start

```python
from weft import Session, tool
from weft.providers import create_openai

@tool
async def add(a: int, b: int) -> int:
    "Add two integers."
    return a + b

session = Session(create_openai(api_key="..."), tools=[add])
print(await session.run("what is 2 + 3?"))
```
"""

from weft.agent import Session, RunMetadata
from weft.config import AgentConfig, ModelConfig
from weft.errors import (
    WeftError,
    ConfigError,
    ProviderError,
    ToolError,
    SkillNotFoundError,
    IterationExceededError,
    MemoryStoreError,
)
from weft.infra import configure_logging, get_logger
from weft.memory import BufferMemory, PairedMemory
from weft.tools import FunctionTool, define_tool, tool
from weft.types import (
    Message,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    StreamChunk,
)

__version__ = "0.1.0"

__all__ = [
    "Session",
    "RunMetadata",
    "AgentConfig",
    "ModelConfig",
    "WeftError",
    "ConfigError",
    "ProviderError",
    "ToolError",
    "SkillNotFoundError",
    "IterationExceededError",
    "MemoryStoreError",
    "configure_logging",
    "get_logger",
    "BufferMemory",
    "PairedMemory",
    "FunctionTool",
    "define_tool",
    "tool",
    "Message",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "StreamChunk",
]
