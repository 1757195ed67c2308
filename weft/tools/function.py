"""Function-backed tools."""

from __future__ import annotations

import inspect
import json
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

from ..types import ToolSchema
from .schema import DictSchema, PydanticSchema, schema_from_signature


def describe_tool(name: str, description: str, json_schema: dict) -> str:
    return f"\nname: {name}, desc: {description}, args_schema: {json.dumps(json_schema)}"


class FunctionTool:
    """A ``Tool`` whose ``call`` validates args and runs a python callable.

    ``execute`` receives the parsed arguments (a pydantic model instance or a
    dict for raw JSON-schema tools). Sync and async callables are accepted.
    Non-string results are JSON-encoded.
    """

    def __init__(
        self,
        name: str,
        description: str,
        parameters: ToolSchema,
        execute: Callable[[Any], Any],
    ) -> None:
        self._name = name
        self._description = description
        self.parameters = parameters
        self._execute = execute

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return describe_tool(self._name, self._description, self.parameters.to_json_schema())

    async def call(self, args: dict[str, Any]) -> str:
        parsed = self.parameters.parse(args)
        result = self._execute(parsed)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, str):
            return result
        if isinstance(result, BaseModel):
            return result.model_dump_json()
        return json.dumps(result, ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"FunctionTool(name={self._name!r})"


def define_tool(
    name: str,
    description: str,
    parameters: type[BaseModel] | dict[str, Any] | ToolSchema,
    execute: Callable[[Any], Any],
) -> FunctionTool:
    if isinstance(parameters, dict):
        schema: ToolSchema = DictSchema(parameters)
    elif isinstance(parameters, type) and issubclass(parameters, BaseModel):
        schema = PydanticSchema(parameters)
    else:
        schema = parameters
    return FunctionTool(name=name, description=description, parameters=schema, execute=execute)


def tool(fn: Callable[..., Any] | None = None, *, name: str | None = None,
         description: str | None = None):
    """Decorator turning a typed function into a ``FunctionTool``.

        @tool
        async def add(a: int, b: int) -> int:
            "Add two integers."
            return a + b
    """

    def wrap(f: Callable[..., Any]) -> FunctionTool:
        schema = schema_from_signature(f)

        def _execute(parsed: BaseModel) -> Any:
            return f(**parsed.model_dump())

        return FunctionTool(
            name=name or f.__name__,
            description=description or inspect.getdoc(f) or "",
            parameters=schema,
            execute=_execute,
        )

    if fn is not None:
        return wrap(fn)
    return wrap
