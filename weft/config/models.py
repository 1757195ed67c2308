"""
Configuration models

Pydantic models for the model connection and the agent loop.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field


class ModelConfig(BaseModel):
    """OpenAI-compatible endpoint configuration."""

    model: str = Field(..., description="Model name, e.g. gpt-4o-mini or deepseek-chat")
    api_key: str = Field("", description="API key; local servers accept any placeholder")
    base_url: str | None = Field(None, description="Endpoint base URL, None for api.openai.com")
    temperature: float = Field(0.7, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int | None = Field(None, ge=1, description="Completion token cap")
    embedding_model: str | None = Field(None, description="Model used for embeddings")

    @classmethod
    def from_env(cls, prefix: str = "WEFT_", **overrides) -> ModelConfig:
        values: dict = {
            "model": os.environ.get(f"{prefix}MODEL", "gpt-4o-mini"),
            "api_key": os.environ.get(f"{prefix}API_KEY", ""),
            "base_url": os.environ.get(f"{prefix}BASE_URL") or None,
        }
        values.update(overrides)
        return cls(**values)


class AgentConfig(BaseModel):
    """Agent loop configuration."""

    max_iterations: int = Field(10, ge=1, description="Model calls allowed per run")
    conversation_id: str | None = Field(None, description="Memory thread identifier")
    debug: bool = Field(False, description="Forward raw deltas without withholding actions")
    stream_buffer_size: int = Field(10, ge=1, description="Bounded queue size for streaming")
    system_prompt: str | None = Field(None, description="Extra system instructions")
