"""Tool schemas with Pydantic-based parameter validation."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, create_model


class PydanticSchema:
    """ToolSchema implementation backed by a Pydantic model."""

    def __init__(self, model: type[BaseModel]) -> None:
        self._model = model

    @property
    def model(self) -> type[BaseModel]:
        return self._model

    def parse(self, raw: Any) -> BaseModel:
        if isinstance(raw, str):
            return self._model.model_validate_json(raw)
        return self._model.model_validate(raw or {})

    def to_json_schema(self) -> dict:
        return self._model.model_json_schema()


class DictSchema:
    """ToolSchema backed by a raw JSON Schema dict, used by MCP tools."""

    def __init__(self, schema: dict[str, Any]) -> None:
        self._schema = schema

    def parse(self, raw: Any) -> Any:
        return raw if isinstance(raw, dict) else {}

    def to_json_schema(self) -> dict:
        return self._schema


def schema_from_signature(fn: Callable[..., Any]) -> PydanticSchema:
    """Build an argument model from a function's annotated parameters."""
    fields: dict[str, Any] = {}
    for pname, param in inspect.signature(fn).parameters.items():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        annotation = param.annotation if param.annotation is not inspect.Parameter.empty else Any
        default = param.default if param.default is not inspect.Parameter.empty else ...
        fields[pname] = (annotation, default)
    model = create_model(f"{fn.__name__.title().replace('_', '')}Args", **fields)
    return PydanticSchema(model)
