"""Tool types."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ToolSchema(Protocol):
    def parse(self, raw: Any) -> Any: ...
    def to_json_schema(self) -> dict: ...


@runtime_checkable
class Tool(Protocol):
    """External capability the model can invoke by name.

    ``description`` is injected verbatim into the system prompt.
    """

    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...

    async def call(self, args: dict[str, Any]) -> str: ...
