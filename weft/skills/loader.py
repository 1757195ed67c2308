"""Load markdown skill documents into Skill objects."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from .models import Skill

logger = logging.getLogger(__name__)

_STEP_HEADINGS = ("step", "instruction", "process", "步骤")
_USAGE_HEADINGS = ("usage", "使用")
_LIST_ITEM_RE = re.compile(r"^(?:[-*]|[1-9](?:\.|、))\s*")


def _outside_fences(content: str) -> Iterable[str]:
    in_code = False
    for line in content.split("\n"):
        if line.strip().startswith("```"):
            in_code = not in_code
            continue
        if not in_code:
            yield line


def _description(content: str) -> str:
    lines: list[str] = []
    for line in _outside_fences(content):
        trimmed = line.strip()
        if not lines and (not trimmed or trimmed.startswith("#")):
            continue
        if line.startswith("#"):
            break
        if not trimmed:
            break
        lines.append(trimmed)
    return " ".join(lines)


def _section_items(content: str, headings: tuple[str, ...], bare_lines: bool) -> list[str]:
    items: list[str] = []
    inside = False
    for line in _outside_fences(content):
        trimmed = line.strip()
        if trimmed.startswith("##"):
            if any(h in trimmed.lower() for h in headings):
                inside = True
                continue
            if inside:
                break
        if not inside or not trimmed:
            continue
        if _LIST_ITEM_RE.match(trimmed):
            item = _LIST_ITEM_RE.sub("", trimmed, count=1).strip()
            if item:
                items.append(item)
        elif bare_lines and not trimmed.startswith("#"):
            items.append(trimmed)
    return items


def parse_skill(path: str | Path, content: str) -> Skill:
    p = Path(path)
    return Skill(
        name=p.stem,
        content=content,
        description=_description(content),
        steps=_section_items(content, _STEP_HEADINGS, bare_lines=False),
        usage_tips=_section_items(content, _USAGE_HEADINGS, bare_lines=True),
    )


def load_skills(directory: str | Path) -> list[Skill]:
    """Recursively load every ``*.md`` file under ``directory``."""
    root = Path(directory)
    if not root.exists():
        raise FileNotFoundError(f"failed to access directory {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"{root} is not a directory")
    skills = []
    for md in sorted(root.rglob("*")):
        if md.is_file() and md.suffix.lower() == ".md":
            skills.append(parse_skill(md, md.read_text(encoding="utf-8")))
    logger.debug("loaded %d skills from %s", len(skills), root)
    return skills


def load_skill_files(files: Iterable[str | Path]) -> list[Skill]:
    """Load explicitly listed markdown files. Blank entries are skipped."""
    skills = []
    for entry in files:
        if not str(entry).strip():
            continue
        p = Path(entry)
        if not p.exists():
            raise FileNotFoundError(f"failed to access file {p}")
        if p.is_dir():
            raise IsADirectoryError(f"{p} is a directory, expected a single file")
        if p.suffix.lower() != ".md":
            raise ValueError(f"{p} is not a markdown (.md) file")
        skills.append(parse_skill(p, p.read_text(encoding="utf-8")))
    return skills
