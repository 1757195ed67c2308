#!/usr/bin/env python3
"""
Weft - Offline Demo

Runs the full loop against a scripted provider, no API key needed.
"""

import asyncio

from weft import Session, tool
from weft.providers import ScriptedProvider


@tool
def multiply(a: float, b: float) -> float:
    """Multiply two numbers."""
    return a * b


async def main():
    provider = ScriptedProvider([
        'Let me compute that. {"action":"call_tool","tool":"multiply","args":{"a":6,"b":7}}',
        "6 × 7 = 42.",
    ])
    session = Session(provider, tools=[multiply])

    async for chunk in session.stream("What is 6 times 7?"):
        if chunk.is_narration:
            print(chunk.content, end="", flush=True)
        elif chunk.kind in ("tool_call", "tool_result"):
            print(f"\n[{chunk.kind}] {chunk.content}")
    print()

    for message in session.messages:
        print(f"{message.role:>9}: {message.content[:70]}")


if __name__ == "__main__":
    asyncio.run(main())
