"""
Action codec

Turns one complete model response into an ``Action``. The model embeds
actions as a JSON object inside free text, e.g.

    Let me check. {"action":"call_tool","tool":"add","args":{"a":1}} one moment

Anything that does not decode is an answer: truncating a valid reply is
worse than occasionally missing a tool call.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import DecodeError, ToolNameMissingError

logger = logging.getLogger(__name__)

CALL_TOOL_MARKER = '{"action":"call_tool"'
USE_SKILL_MARKER = '{"action":"use_skill"'
FINAL_ANSWER_MARKER = '{"action":"final_answer"'
# Common prefix of every action object; the streaming path withholds from here.
STREAM_MARKER = '{"action"'

_BOM = "\ufeff"


class ActionKind(str, Enum):
    FINAL_ANSWER = "final_answer"
    CALL_TOOL = "call_tool"
    USE_SKILL = "use_skill"
    UNRECOGNIZED = "unrecognized"


@dataclass
class Action:
    kind: ActionKind
    answer: str = ""
    tool: str | None = None
    skill: str | None = None
    args: dict[str, Any] = field(default_factory=dict)
    # True when the action came out of a decoded JSON object
    structured: bool = False

    @property
    def is_terminal(self) -> bool:
        return self.kind in (ActionKind.FINAL_ANSWER, ActionKind.UNRECOGNIZED)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"action": self.kind.value}
        if self.kind is ActionKind.CALL_TOOL:
            payload.update(tool=self.tool, args=self.args)
        elif self.kind is ActionKind.USE_SKILL:
            payload.update(skill=self.skill, args=self.args)
        else:
            payload["answer"] = self.answer
        return payload


def clean_json(text: str) -> str:
    """Strip a BOM and whitespace, then drop anything after the last ``}`` or ``]``."""
    text = text.replace(_BOM, "").strip()
    end = max(text.rfind("}"), text.rfind("]"))
    if end != -1:
        text = text[: end + 1]
    return text.strip()


def _load_object(candidate: str) -> dict[str, Any]:
    try:
        payload = json.loads(clean_json(candidate))
    except json.JSONDecodeError as e:
        raise DecodeError(f"invalid action JSON: {e.msg}", e) from e
    if not isinstance(payload, dict):
        raise DecodeError(f"action payload is {type(payload).__name__}, not an object")
    args = payload.get("args")
    if args is not None and not isinstance(args, dict):
        raise DecodeError("action args must be an object")
    return payload


def _locate(text: str, markers: list[str]) -> int:
    found = [i for i in (text.find(m) for m in markers) if i != -1]
    return min(found) if found else -1


def _leading_final_answer(text: str) -> int:
    """Offset of a ``final_answer`` object that makes up the whole response, or -1.

    Narration before the object means the response is a plain answer.
    """
    start = text.find(FINAL_ANSWER_MARKER)
    if start == -1 or text[:start].replace(_BOM, "").strip():
        return -1
    return start


def decode_action(text: str, allow_skills: bool = False) -> Action:
    """Decode one complete model response.

    Raises ``ToolNameMissingError`` for a ``call_tool`` object with no tool
    name; every other problem falls back to a final answer with ``text``.
    """
    markers = [CALL_TOOL_MARKER]
    if allow_skills:
        markers.append(USE_SKILL_MARKER)
    start = _locate(text, markers)
    if start == -1:
        start = _leading_final_answer(text)
    if start == -1:
        return Action(ActionKind.FINAL_ANSWER, answer=text)

    try:
        payload = _load_object(text[start:])
    except DecodeError as e:
        logger.debug("treating response as plain answer: %s", e.message)
        return Action(ActionKind.FINAL_ANSWER, answer=text)

    action = payload.get("action")
    args = payload.get("args") or {}
    if action == ActionKind.CALL_TOOL.value:
        tool = payload.get("tool")
        if not tool:
            raise ToolNameMissingError()
        return Action(ActionKind.CALL_TOOL, tool=str(tool), args=args, structured=True)
    if action == ActionKind.USE_SKILL.value and allow_skills:
        return Action(
            ActionKind.USE_SKILL, skill=str(payload.get("skill") or ""), args=args, structured=True
        )
    if action == ActionKind.FINAL_ANSWER.value and isinstance(payload.get("answer"), str):
        # whitespace before the object stays, as it does when streamed
        return Action(
            ActionKind.FINAL_ANSWER, answer=text[:start] + payload["answer"], structured=True
        )
    return Action(ActionKind.UNRECOGNIZED, answer=text)
