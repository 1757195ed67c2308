#!/usr/bin/env python3
"""
Weft - Skills Example

Loads markdown skills from ./skills; the model selects one with
``use_skill`` and then receives its detailed steps.
"""

import asyncio
from pathlib import Path

from weft import Session, tool
from weft.config import ModelConfig
from weft.providers import OpenAIProvider
from weft.skills import load_skills


@tool
def forecast(city: str, days: int = 1) -> dict:
    """Weather forecast for a city."""
    return {"city": city, "days": days, "summary": "mild, light rain in the evening"}


async def main():
    skills = load_skills(Path(__file__).parent / "skills")
    print(f"📚 loaded skills: {[s.name for s in skills]}")

    session = Session(OpenAIProvider(ModelConfig.from_env()), tools=[forecast], skills=skills)
    print(await session.run("Plan my weekend trip to Bergen"))


if __name__ == "__main__":
    asyncio.run(main())
