"""Tool lookup and invocation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from ..errors import ToolInvocationError, ToolNameMissingError, ToolNotFoundError
from ..types import Tool

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """Resolves tools by exact name; the first registered tool wins on duplicates."""

    def __init__(self, tools: Iterable[Tool] | None = None) -> None:
        self._tools: list[Tool] = list(tools or [])

    @property
    def tools(self) -> list[Tool]:
        return list(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def find(self, name: str) -> Tool | None:
        for tool in self._tools:
            if tool.name == name:
                return tool
        return None

    async def invoke(self, name: str | None, args: dict[str, Any] | None = None) -> str:
        if not name:
            raise ToolNameMissingError()
        tool = self.find(name)
        if tool is None:
            raise ToolNotFoundError(name)

        logger.debug("calling tool %s with %s", name, args)
        try:
            result = await tool.call(args or {})
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("tool %s failed: %s", name, e)
            raise ToolInvocationError(name, e) from e
        return result if isinstance(result, str) else str(result)
