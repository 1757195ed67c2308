"""Message types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

Role = Literal["system", "user", "assistant"]


@dataclass
class SystemMessage:
    content: str
    role: str = "system"


@dataclass
class UserMessage:
    content: str = ""
    role: str = "user"


@dataclass
class AssistantMessage:
    content: str = ""
    role: str = "assistant"


Message = SystemMessage | UserMessage | AssistantMessage

_BY_ROLE: dict[str, type] = {
    "system": SystemMessage,
    "user": UserMessage,
    "assistant": AssistantMessage,
}


def make_message(role: str, content: str) -> Message:
    cls = _BY_ROLE.get(role)
    if cls is None:
        raise ValueError(f"unsupported message role: {role!r}")
    return cls(content=content)


def message_to_dict(m: Message) -> dict[str, str]:
    return {"role": m.role, "content": m.content}


def message_from_dict(d: dict[str, Any]) -> Message:
    return make_message(d.get("role", "user"), d.get("content") or "")
