"""Skill data model."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Skill:
    """A markdown playbook the model can select with ``use_skill``.

    Only name, description and usage tips go into the system prompt; the
    steps are sent after the model selects the skill.
    """

    name: str
    content: str = ""
    description: str = ""
    steps: list[str] = field(default_factory=list)
    usage_tips: list[str] = field(default_factory=list)
