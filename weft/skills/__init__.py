"""Markdown skills selectable by the model."""

from .loader import load_skill_files, load_skills, parse_skill
from .models import Skill
from .orchestrator import SkillOrchestrator, format_step

__all__ = [
    "Skill",
    "SkillOrchestrator",
    "format_step",
    "load_skills",
    "load_skill_files",
    "parse_skill",
]
