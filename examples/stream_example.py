#!/usr/bin/env python3
"""
Weft - Streaming Example

Prints narration as it arrives and renders tool activity separately.
"""

import asyncio
import sys

from weft import Session, tool
from weft.config import ModelConfig
from weft.providers import OpenAIProvider


@tool
def word_count(text: str) -> int:
    """Count the words in a text."""
    return len(text.split())


async def main():
    provider = OpenAIProvider(ModelConfig.from_env())
    session = Session(
        provider,
        tools=[word_count],
        system_prompt="You are a helpful assistant. Answer concisely.",
    )

    print("Streaming response:")
    print("===================")
    async for chunk in session.stream("Write a short poem about programming, then count its words"):
        if chunk.kind == "reasoning":
            continue
        if chunk.kind == "tool_call":
            print(f"\n🔧 calling {chunk.payload['tool']}({chunk.payload['args']})")
        elif chunk.kind == "tool_result":
            print(f"   → {chunk.payload['message'] or chunk.payload['result']}")
        elif chunk.kind == "error":
            print(f"\n❌ Error: {chunk.error}")
            sys.exit(1)
        elif chunk.done:
            print("\n[Stream completed]")
        elif chunk.is_narration:
            print(chunk.content, end="", flush=True)


if __name__ == "__main__":
    asyncio.run(main())
