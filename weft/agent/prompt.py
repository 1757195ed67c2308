"""System prompt construction."""

from __future__ import annotations

from collections.abc import Sequence

from ..skills import Skill
from ..types import Tool

_PREAMBLE = """
You are an AI assistant. When you need external tools to complete user requests,
you must output according to the following requirements:
"""

_SKILL_RULE = """
{n}) To select and apply a skill, return ONLY the following JSON object (without markdown code blocks):
   {{"action":"use_skill","skill":"<skill_name>","args":{{...}}}}
   - Do NOT wrap the JSON in markdown code blocks (no backticks or code fences).
   - Do NOT include the detailed steps of the skill yourself.
   - After you return this JSON, you will receive the detailed steps for the selected skill
     in a new message, and then you should follow those steps to continue the task.
"""

_TOOL_RULE = """
{n}) To call a tool directly, return ONLY the following JSON object (without markdown code blocks):
   {{"action":"call_tool","tool":"<tool_name>","args":{{...}}}}
   - Do NOT wrap the JSON in markdown code blocks (no backticks or code fences).
   - After you return this JSON, you will receive the tool result in a new message.
"""

_ANSWER_RULE = """
Otherwise reply in plain text, or return {"action":"final_answer","answer":"..."}.
"""

_SKILL_FOOTER = """
When appropriate, choose the most suitable skill using the "use_skill" action.
You do NOT need to remember the detailed steps; they will be provided to you after selection.
"""


def build_system_prompt(tools: Sequence[Tool] = (), skills: Sequence[Skill] = ()) -> str:
    """Describe the action wire format plus the skill and tool catalogs.

    Tool descriptions are injected verbatim. Skills contribute their name,
    description and usage tips only; detailed steps arrive after selection.
    """
    parts = [_PREAMBLE]
    n = 1
    if skills:
        parts.append(_SKILL_RULE.format(n=n))
        n += 1
    parts.append(_TOOL_RULE.format(n=n))
    parts.append(_ANSWER_RULE)

    if skills:
        lines = ["\nAvailable skills for task orchestration (high-level overview only):"]
        for skill in skills:
            line = f"- {skill.name}"
            if skill.description:
                line += f": {skill.description}"
            lines.append(line)
            lines.extend(f"  Usage: {tip}" for tip in skill.usage_tips)
        parts.append("\n".join(lines) + "\n")
        parts.append(_SKILL_FOOTER)

    if tools:
        parts.append("\nAvailable tools:\n")
        parts.extend(tool.description + "\n" for tool in tools)

    return "".join(parts)
