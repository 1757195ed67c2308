"""Skill lookup and instruction rendering."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..errors import SkillNotFoundError
from .models import Skill


def format_step(text: str, params: dict[str, Any] | None) -> str:
    """Substitute ``{{key}}`` and ``${key}`` placeholders."""
    if not params:
        return text
    for key, value in params.items():
        text = text.replace(f"{{{{{key}}}}}", str(value)).replace(f"${{{key}}}", str(value))
    return text


class SkillOrchestrator:
    def __init__(self, skills: Sequence[Skill]) -> None:
        self._skills = list(skills)

    def find(self, name: str) -> Skill | None:
        lowered = name.lower()
        for skill in self._skills:
            if skill.name.lower() == lowered:
                return skill
        return None

    def get(self, name: str) -> Skill:
        skill = self.find(name)
        if skill is None:
            raise SkillNotFoundError(name)
        return skill

    def names(self) -> list[str]:
        return [s.name for s in self._skills]

    def suggest(self, query: str) -> list[Skill]:
        q = query.lower()
        return [s for s in self._skills if q in s.name.lower() or q in s.description.lower()]

    def instructions(self, name: str, params: dict[str, Any] | None = None) -> str:
        """Render the detailed steps sent after the model selects a skill."""
        skill = self.get(name)
        out = [f"Executing skill: {skill.name}"]
        if skill.description:
            out.append(f"Description: {skill.description}")
        if skill.steps:
            out.append("Steps to follow:")
            out.extend(
                f"  {i}. {format_step(step, params)}" for i, step in enumerate(skill.steps, 1)
            )
        else:
            out.append(f"Instructions:\n{format_step(skill.content, params)}")
        if skill.usage_tips:
            out.append("\nUsage Tips:")
            out.extend(f"  - {format_step(tip, params)}" for tip in skill.usage_tips)
        return "\n".join(out) + "\n"
