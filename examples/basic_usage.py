#!/usr/bin/env python3
"""
Weft - Basic Usage Example

A session with one tool and conversation memory. Reads WEFT_MODEL,
WEFT_API_KEY and WEFT_BASE_URL from the environment.
"""

import asyncio
from datetime import datetime

from weft import Session, configure_logging, tool
from weft.config import ModelConfig
from weft.providers import OpenAIProvider


@tool
def current_time(timezone: str = "UTC") -> str:
    """Return the current local time."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


@tool
async def add(a: int, b: int) -> int:
    """Add two integers."""
    return a + b


async def main():
    configure_logging(log_level="INFO")
    provider = OpenAIProvider(ModelConfig.from_env())
    session = Session(provider, tools=[current_time, add], conversation_id="demo")

    for question in ["What time is it?", "What is 1234 + 4321?"]:
        print(f"👤 {question}")
        print(f"🤖 {await session.run(question)}")
        print()

    usage = session.token_usage()
    print(f"📊 tokens: {usage['total_tokens']} "
          f"(prompt {usage['prompt_tokens']}, completion {usage['completion_tokens']})")


if __name__ == "__main__":
    asyncio.run(main())
